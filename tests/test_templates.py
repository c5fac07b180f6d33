"""Tests for the template registry and section fragment rendering."""

from __future__ import annotations

import pytest

from resume_builder.models.customization import CustomizationOptions, TemplateConfig
from resume_builder.pipeline.style_resolver import resolve_section_style
from resume_builder.templates.registry import (
    COMPLETE,
    SectionTemplate,
    TemplateId,
    TemplateRegistry,
    default_registry,
    load_catalog,
)
from resume_builder.templates.renderer import (
    HTML_TEMPLATES_DIR,
    RenderContext,
    group_skills,
    public_links,
    render_builtin_section,
    render_section_frame,
)

SECTION_KEYS = (
    "summary", "experience", "education", "skills", "projects", "certificates",
    "hobbies", "links", "additional_info", "declaration", "signature", COMPLETE,
)


@pytest.fixture
def ctx(sample_doc, options, theme) -> RenderContext:
    return RenderContext(document=sample_doc, colors=options.colors, theme=theme)


class TestCatalogue:
    def test_every_template_id_is_registered(self):
        assert {t.id for t in default_registry} == set(TemplateId)

    def test_catalog_files_exist(self):
        for template in load_catalog():
            assert (HTML_TEMPLATES_DIR / template.file).exists(), template.file

    def test_by_category(self):
        ids = {t.id.value for t in default_registry.by_category("experience")}
        assert ids == {"experience-card", "experience-timeline"}
        assert [t.id.value for t in default_registry.by_category(COMPLETE)] == ["professional-classic"]


class TestRegistry:
    def test_register_is_append_only(self):
        registry = TemplateRegistry(load_catalog())
        with pytest.raises(ValueError, match="already registered"):
            registry.register(registry.get("skills-grid"))

    def test_register_rejects_unknown_category(self):
        template = SectionTemplate(id="skills-grid", name="x", category="languages", file="x")
        with pytest.raises(ValueError, match="category"):
            TemplateRegistry().register(template)

    @pytest.mark.parametrize("key", SECTION_KEYS)
    def test_default_resolves_to_none(self, key):
        assert default_registry.resolve(key, TemplateConfig(templates={key: "default"})) is None

    @pytest.mark.parametrize("key", SECTION_KEYS)
    def test_unconfigured_resolves_to_none(self, key):
        assert default_registry.resolve(key, TemplateConfig()) is None

    def test_unknown_id_resolves_to_none(self):
        config = TemplateConfig(templates={"experience": "removed-template"})
        assert default_registry.resolve("experience", config) is None

    def test_matching_template(self):
        config = TemplateConfig(templates={"experience": "experience-timeline"})
        assert default_registry.resolve("experience", config).id is TemplateId.EXPERIENCE_TIMELINE

    def test_category_mismatch_resolves_to_none(self):
        config = TemplateConfig(templates={"education": "experience-card"})
        assert default_registry.resolve("education", config) is None

    def test_complete_accepts_only_complete_templates(self):
        partial = TemplateConfig(templates={COMPLETE: "skills-grid"})
        assert default_registry.resolve(COMPLETE, partial) is None
        full = TemplateConfig(templates={COMPLETE: "professional-classic"})
        assert default_registry.resolve(COMPLETE, full).is_complete


class TestHelpers:
    def test_group_skills_keeps_first_seen_order(self, sample_doc):
        groups = group_skills(sample_doc.skills)
        assert [category for category, _ in groups] == ["Technical", "Soft"]

    def test_public_links_only_filled(self, sample_doc):
        links = public_links(sample_doc.public_links)
        assert [label for label, _, _ in links] == ["GitHub", "Website"]
        assert links[0][2] == "https://github.com/ada"


class TestSectionRendering:
    def test_experience_shows_present_for_current(self, sample_doc, options, theme, ctx):
        style = resolve_section_style("experience", options, theme)
        html = render_builtin_section("experience", sample_doc.experience, style, ctx)
        assert "Jan 2019 - Present" in html
        assert "Jun 2015 - Dec 2018" in html
        assert "Analytical Engine Co." in html

    def test_user_text_is_escaped(self, options, theme, ctx):
        style = resolve_section_style("summary", options, theme)
        html = render_builtin_section("summary", "<script>alert(1)</script>", style, ctx)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_bullet_glyph_applied(self, sample_doc, theme, ctx):
        options = CustomizationOptions(bullet_styles={"experience": "★"})
        style = resolve_section_style("experience", options, theme)
        html = render_builtin_section("experience", sample_doc.experience, style, ctx)
        assert "★" in html

    def test_frame_includes_title_and_divider(self, options, theme):
        style = resolve_section_style("skills", options, theme)
        html = render_section_frame("skills", "body", style)
        assert "Skills &amp; Technologies" in html
        assert "divider-simple" in html

    @pytest.mark.parametrize("template_id", [t.value for t in TemplateId if t is not TemplateId.PROFESSIONAL_CLASSIC])
    def test_section_templates_render(self, sample_doc, options, theme, ctx, template_id):
        template = default_registry.get(template_id)
        key = template.category
        data = getattr(sample_doc, key)
        html = template.render(data, resolve_section_style(key, options, theme), ctx)
        assert isinstance(html, str)

    def test_skills_grid_meter(self, sample_doc, options, theme, ctx):
        template = default_registry.get("skills-grid")
        html = template.render(sample_doc.skills, resolve_section_style("skills", options, theme), ctx)
        assert html.count("meter-step") == 6
        assert "Mathematics" in html
