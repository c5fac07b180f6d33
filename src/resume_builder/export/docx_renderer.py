"""DOCX output renderer built from the shared export outline."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Mm, Pt, RGBColor

from resume_builder.config import ExportConfig
from resume_builder.export.outline import (
    BULLET,
    PAGE_SIZES_MM,
    Block,
    Outline,
    build_outline,
    hex_to_rgb,
)
from resume_builder.models.customization import CustomizationOptions, ResumeTheme
from resume_builder.models.resume import ResumeData


def generate_docx(
    doc: ResumeData,
    options: CustomizationOptions,
    output_path: str | Path,
    theme: ResumeTheme | None = None,
    config: ExportConfig | None = None,
) -> Path:
    """Write the document to a .docx file and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(render_docx(doc, options, theme, config))
    return output_path


def render_docx(
    doc: ResumeData,
    options: CustomizationOptions,
    theme: ResumeTheme | None = None,
    config: ExportConfig | None = None,
) -> bytes:
    outline = build_outline(doc, options, theme)
    buf = BytesIO()
    outline_to_docx(outline, config).save(buf)
    return buf.getvalue()


def outline_to_docx(outline: Outline, config: ExportConfig | None = None):
    config = config or ExportConfig()
    document = Document()

    page = document.sections[0]
    width, height = PAGE_SIZES_MM[config.page_size]
    page.page_width, page.page_height = Mm(width), Mm(height)
    page.top_margin = page.bottom_margin = Mm(config.margin_top_mm)
    page.left_margin = page.right_margin = Mm(config.margin_side_mm)

    # Set default font
    font = document.styles["Normal"].font
    font.name = outline.theme.font_family
    font.size = Pt(10)
    font.color.rgb = RGBColor(*hex_to_rgb(outline.colors.text))

    title = document.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = title.add_run(outline.name)
    run.bold = True
    run.font.size = Pt(20)
    run.font.color.rgb = RGBColor(*hex_to_rgb(outline.heading_color))

    for line in (" | ".join(outline.contact), " | ".join(f"{l}: {t}" for l, t in outline.links)):
        if line:
            p = document.add_paragraph(line)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    for section in outline.sections:
        heading = document.add_heading(section.title, level=2)
        for heading_run in heading.runs:
            heading_run.font.color.rgb = RGBColor(*hex_to_rgb(section.heading_color))
            heading_run.font.name = section.style.font_family
        for block in section.blocks:
            _render_block(document, block, section.style.bullet, section.style.is_bold)

    return document


def _render_block(document, block: Block, bullet: str, section_bold: bool) -> None:
    if block.kind == BULLET and bullet == "•":
        p = document.add_paragraph(style="List Bullet")
    elif block.kind == BULLET:
        p = document.add_paragraph()
        p.paragraph_format.left_indent = Mm(5)
        p.add_run(f"{bullet} ")
    else:
        p = document.add_paragraph()
    for run in block.runs:
        r = p.add_run(run.text)
        r.bold = run.bold or section_bold
        r.italic = run.italic
