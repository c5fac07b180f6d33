"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from resume_builder.config import ExportConfig
from resume_builder.export.outline import BULLET, PAGE_SIZES_MM, Outline, hex_to_rgb

logger = logging.getLogger(__name__)

# Unicode-capable font search paths (Linux, macOS, Windows)
_UNICODE_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

_UNICODE_FONT = "ResumeSans"


def _find_unicode_font() -> str | None:
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def _setup_font(pdf: FPDF) -> str:
    font_path = _find_unicode_font()
    if font_path is None:
        return "Helvetica"
    try:
        # One face serves every style; bold/italic are approximated.
        for style in ("", "B", "I", "BI"):
            pdf.add_font(_UNICODE_FONT, style, font_path)
    except (FPDFException, OSError):
        logger.debug("Failed to load font %s", font_path)
        return "Helvetica"
    return _UNICODE_FONT


def outline_to_pdf_fpdf2(outline: Outline, config: ExportConfig | None = None) -> bytes:
    """Fallback PDF generation using fpdf2 when WeasyPrint is unavailable."""
    config = config or ExportConfig()
    pdf = FPDF(format=PAGE_SIZES_MM[config.page_size], unit="mm")
    pdf.set_margins(config.margin_side_mm, config.margin_top_mm, config.margin_side_mm)
    pdf.set_auto_page_break(auto=True, margin=config.margin_top_mm)
    pdf.add_page()
    font = _setup_font(pdf)

    pdf.set_font(font, "B", 18)
    pdf.set_text_color(*hex_to_rgb(outline.heading_color))
    pdf.multi_cell(0, 9, _safe_text(outline.name, pdf), align="C")
    pdf.set_font(font, "", 9.5)
    pdf.set_text_color(*hex_to_rgb(outline.colors.text))
    if outline.contact:
        pdf.multi_cell(0, 5, _safe_text(" | ".join(outline.contact), pdf), align="C")
    if outline.links:
        links = " | ".join(f"{label}: {text}" for label, text in outline.links)
        pdf.multi_cell(0, 5, _safe_text(links, pdf), align="C")

    for section in outline.sections:
        pdf.ln(4)
        pdf.set_font(font, "B", 12.5)
        pdf.set_text_color(*hex_to_rgb(section.heading_color))
        pdf.multi_cell(0, 7, _safe_text(section.title.upper(), pdf))
        pdf.set_draw_color(*hex_to_rgb(section.heading_color))
        pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
        pdf.ln(2)
        pdf.set_text_color(*hex_to_rgb(section.style.color))

        for block in section.blocks:
            if block.kind == BULLET:
                pdf.set_font(font, "", 10)
                pdf.set_x(pdf.l_margin + 3)
                pdf.write(5, _safe_text(f"{section.style.bullet} ", pdf))
            for run in block.runs:
                style = ("B" if run.bold else "") + ("I" if run.italic else "")
                pdf.set_font(font, style, 10)
                pdf.write(5, _safe_text(run.text, pdf))
            pdf.ln(6)

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    # For built-in fonts (Helvetica etc.), strip non-latin chars
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")
