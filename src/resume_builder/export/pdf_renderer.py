from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_builder.config import ExportConfig
from resume_builder.export.outline import Outline, build_outline
from resume_builder.models.customization import CustomizationOptions, ResumeTheme
from resume_builder.models.resume import ResumeData
from resume_builder.themes import font_stack

logger = logging.getLogger(__name__)

BASE_TEMPLATE_DIR = Path(__file__).parent
PRINT_CSS_PATH = BASE_TEMPLATE_DIR / "print.css"


def render_print_html(
    doc: ResumeData,
    options: CustomizationOptions,
    theme: ResumeTheme | None = None,
    config: ExportConfig | None = None,
) -> str:
    """Render the document as a standalone, paginated HTML page."""
    outline = build_outline(doc, options, theme)
    return _outline_to_html(outline, config or ExportConfig())


def render_pdf(
    doc: ResumeData,
    options: CustomizationOptions,
    theme: ResumeTheme | None = None,
    config: ExportConfig | None = None,
) -> bytes:
    """Render the document to PDF bytes."""
    config = config or ExportConfig()
    outline = build_outline(doc, options, theme)
    html = _outline_to_html(outline, config)
    return _html_to_pdf(html, outline, config)


def _outline_to_html(outline: Outline, config: ExportConfig) -> str:
    css = PRINT_CSS_PATH.read_text(encoding="utf-8") if PRINT_CSS_PATH.exists() else ""
    env = Environment(
        loader=FileSystemLoader(str(BASE_TEMPLATE_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["font_stack"] = font_stack
    template = env.get_template("base.html")
    return template.render(
        title=f"{outline.name} - Resume",
        css=Markup(css),
        outline=outline,
        page_size=config.page_size,
        margin_top=config.margin_top_mm,
        margin_side=config.margin_side_mm,
    )


def _html_to_pdf(html: str, outline: Outline, config: ExportConfig) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html).write_pdf()
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_builder.export.pdf_fallback import outline_to_pdf_fpdf2
        return outline_to_pdf_fpdf2(outline, config)
