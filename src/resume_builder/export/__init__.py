"""Export module for resume-builder: print/PDF, RTF and DOCX."""
from resume_builder.export.docx_renderer import generate_docx, render_docx
from resume_builder.export.outline import build_outline
from resume_builder.export.pdf_renderer import render_pdf, render_print_html
from resume_builder.export.rtf_encoder import escape_rtf, render_rtf

__all__ = [
    "build_outline",
    "escape_rtf",
    "generate_docx",
    "render_docx",
    "render_pdf",
    "render_print_html",
    "render_rtf",
]
