"""Tests for rendering a whole document into HTML sections."""

from __future__ import annotations

from resume_builder.models.customization import CustomizationOptions, TemplateConfig
from resume_builder.pipeline.layout import MAIN, SIDEBAR
from resume_builder.pipeline.renderer import render_document
from resume_builder.themes import SECTION_ICONS


class TestRenderDocument:
    def test_sections_follow_layout(self, sample_doc, options):
        rendered = render_document(sample_doc, options)
        assert rendered.keys == ["summary", "experience", "education", "skills", "projects", "hobbies"]
        assert rendered.layout == "traditional"
        assert rendered.complete_template is None

    def test_empty_document_renders_no_sections(self, empty_doc, options):
        rendered = render_document(empty_doc, options)
        assert rendered.sections == []
        assert "resume-header" in rendered.to_html()

    def test_sidebar_buckets(self, sample_doc):
        rendered = render_document(sample_doc, CustomizationOptions(layout="sidebar"))
        assert [s.key for s in rendered.bucket(SIDEBAR)] == ["skills", "education", "links"]
        assert [s.key for s in rendered.bucket(MAIN)] == ["summary", "experience", "projects"]

    def test_links_in_header_outside_sidebar(self, sample_doc, options):
        html = render_document(sample_doc, options).header
        assert "resume-links" in html
        sidebar = render_document(sample_doc, CustomizationOptions(layout="sidebar")).header
        assert "resume-links" not in sidebar

    def test_section_template_used(self, sample_doc, options):
        config = TemplateConfig(templates={"experience": "experience-timeline"})
        rendered = render_document(sample_doc, options, template_config=config)
        experience = rendered.sections[rendered.keys.index("experience")]
        assert experience.template_id == "experience-timeline"
        assert experience.title == "Professional Experience"

    def test_stale_template_id_falls_back(self, sample_doc, options):
        config = TemplateConfig(templates={"experience": "retired-template"})
        rendered = render_document(sample_doc, options, template_config=config)
        experience = rendered.sections[rendered.keys.index("experience")]
        assert experience.template_id is None
        assert "Analytical Engine Co." in experience.html

    def test_complete_template_replaces_sections(self, sample_doc):
        options = CustomizationOptions(layout="creative")
        config = TemplateConfig(templates={"complete": "professional-classic"})
        rendered = render_document(sample_doc, options, template_config=config)
        assert rendered.complete_template == "professional-classic"
        html = rendered.to_html()
        assert "template-professional-classic" in html
        assert html.index("PROFESSIONAL EXPERIENCE") < html.index("PROJECTS")
        assert rendered.keys[:2] == ["summary", "experience"]

    def test_spacing_gap(self, sample_doc):
        rendered = render_document(sample_doc, CustomizationOptions(spacing="compact"))
        assert "--section-gap: 0.75rem" in rendered.to_html()

    def test_section_icon_rendered(self, sample_doc):
        options = CustomizationOptions.model_validate(
            {"sections": {"skills": {"icon": SECTION_ICONS["skills"][0]}}}
        )
        rendered = render_document(sample_doc, options)
        skills = rendered.sections[rendered.keys.index("skills")]
        assert "icon-curated" in skills.html
