"""Turn a document plus its customization into rendered HTML sections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from markupsafe import Markup

from resume_builder.models.customization import (
    CustomizationOptions,
    ResumeTheme,
    TemplateConfig,
)
from resume_builder.models.resume import ResumeData
from resume_builder.pipeline.layout import (
    CANONICAL_ORDER,
    MAIN,
    SPACING_GAPS,
    Layout,
    canonical_sections,
    section_data,
    to_layout,
    visible_slots,
)
from resume_builder.pipeline.style_resolver import resolve_styles
from resume_builder.templates.registry import COMPLETE, TemplateRegistry, default_registry
from resume_builder.templates.renderer import (
    SECTION_TITLES,
    RenderContext,
    render_builtin_section,
    render_fragment,
    render_section_frame,
)
from resume_builder.themes import get_theme

logger = logging.getLogger(__name__)

STYLED_SECTIONS = CANONICAL_ORDER + ("links",)


@dataclass
class RenderedSection:
    key: str
    title: str
    html: Markup
    bucket: str = MAIN
    template_id: str | None = None


@dataclass
class RenderedDocument:
    layout: str
    spacing: str
    colors: object
    header: Markup
    sections: list[RenderedSection] = field(default_factory=list)
    complete_template: str | None = None
    body: Markup | None = None  # whole-page output of a complete template

    @property
    def gap(self) -> str:
        return SPACING_GAPS.get(self.spacing, SPACING_GAPS["normal"])

    @property
    def keys(self) -> list[str]:
        return [s.key for s in self.sections]

    def bucket(self, name: str) -> list[RenderedSection]:
        return [s for s in self.sections if s.bucket == name]

    def to_html(self) -> Markup:
        if self.body is not None:
            return self.body
        return render_fragment("document.html.j2", doc=self)


def render_document(
    doc: ResumeData,
    options: CustomizationOptions,
    theme: ResumeTheme | None = None,
    template_config: TemplateConfig | None = None,
    registry: TemplateRegistry = default_registry,
) -> RenderedDocument:
    """Render every visible section for the active layout.

    A configured complete template replaces per-section rendering and is
    given the visible sections in canonical order.
    """
    theme = theme or get_theme(options.theme_id)
    template_config = template_config or TemplateConfig()
    layout = to_layout(options.layout)
    styles = resolve_styles(STYLED_SECTIONS, options, theme)
    ctx = RenderContext(document=doc, colors=options.colors, theme=theme, styles=styles)

    header = render_fragment(
        "header.html.j2", data=doc, ctx=ctx, show_links=layout is not Layout.SIDEBAR
    )
    rendered = RenderedDocument(
        layout=layout.value,
        spacing=options.spacing,
        colors=options.colors,
        header=header,
    )

    complete = registry.resolve(COMPLETE, template_config)
    if complete is not None:
        ctx.sections = canonical_sections(doc)
        rendered.complete_template = complete.id.value
        rendered.body = complete.render(doc, None, ctx)
        rendered.sections = [
            RenderedSection(key, SECTION_TITLES[key], Markup(""), MAIN, complete.id.value)
            for key in ctx.sections
        ]
        return rendered

    for slot in visible_slots(doc, layout):
        style = styles[slot.key]
        data = section_data(doc, slot.key)
        template = registry.resolve(slot.key, template_config)
        if template is not None:
            body = template.render(data, style, ctx)
        else:
            body = render_builtin_section(slot.key, data, style, ctx)
        rendered.sections.append(
            RenderedSection(
                key=slot.key,
                title=SECTION_TITLES[slot.key],
                html=render_section_frame(slot.key, body, style),
                bucket=slot.bucket,
                template_id=template.id.value if template else None,
            )
        )
    logger.debug("Rendered %d sections for %s layout", len(rendered.sections), layout.value)
    return rendered
