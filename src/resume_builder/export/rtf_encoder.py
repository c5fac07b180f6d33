"""Rich Text Format export.

User text is always passed through :func:`escape_rtf` before it reaches
the output: backslashes and braces are escaped, newlines become paragraph
breaks and non-ASCII characters are written as ``\\uN?`` escapes.
"""

from __future__ import annotations

import logging

from resume_builder.config import ExportConfig
from resume_builder.export.outline import (
    BULLET,
    PAGE_SIZES_MM,
    Block,
    Outline,
    OutlineSection,
    build_outline,
    hex_to_rgb,
)
from resume_builder.models.customization import CustomizationOptions, ResumeTheme
from resume_builder.models.resume import ResumeData

logger = logging.getLogger(__name__)

TWIPS_PER_MM = 56.6929

# Color table slots (index 0 is the RTF "auto" color).
_TEXT, _HEADING, _SECONDARY = 1, 2, 3


def escape_rtf(text: str) -> str:
    out: list[str] = []
    for ch in text.replace("\r\n", "\n").replace("\r", "\n"):
        code = ord(ch)
        if ch in "\\{}":
            out.append("\\" + ch)
        elif ch == "\n":
            out.append("\\par ")
        elif ch == "\t":
            out.append("\\tab ")
        elif code < 0x20:
            continue
        elif code < 0x80:
            out.append(ch)
        elif code <= 0xFFFF:
            out.append(_unicode_escape(code))
        else:
            # Astral characters are written as a UTF-16 surrogate pair.
            code -= 0x10000
            out.append(_unicode_escape(0xD800 + (code >> 10)))
            out.append(_unicode_escape(0xDC00 + (code & 0x3FF)))
    return "".join(out)


def _unicode_escape(code: int) -> str:
    # \uN takes a signed 16-bit value.
    if code > 0x7FFF:
        code -= 0x10000
    return f"\\u{code}?"


def _twips(mm: float) -> int:
    return round(mm * TWIPS_PER_MM)


def _half_points(css_size: str, default: int = 20) -> int:
    """Convert a CSS ``14px`` / ``11pt`` size to RTF half-points."""
    size = css_size.strip().lower()
    try:
        if size.endswith("px"):
            return round(float(size[:-2]) * 0.75 * 2)
        if size.endswith("pt"):
            return round(float(size[:-2]) * 2)
    except ValueError:
        pass
    logger.debug("Unsupported font size %r, using %d half-points", css_size, default)
    return default


def _color_entry(value: str) -> str:
    r, g, b = hex_to_rgb(value)
    return f"\\red{r}\\green{g}\\blue{b};"


def _runs(block: Block, section_bold: bool) -> str:
    parts = []
    for run in block.runs:
        bold = run.bold or section_bold
        text = escape_rtf(run.text)
        if bold:
            text = f"\\b {text}\\b0 "
        if run.italic:
            text = f"\\i {text}\\i0 "
        parts.append(text)
    return "".join(parts)


def _font_name(name: str) -> str:
    # A semicolon ends a font table entry.
    return escape_rtf(" ".join(name.replace(";", " ").split()))


def _bullet_glyph(glyph: str) -> str:
    return "\\bullet" if glyph == "•" else escape_rtf(glyph)


def _section(section: OutlineSection, fonts: list[str]) -> list[str]:
    style = section.style
    font_index = fonts.index(style.font_family)
    size = _half_points(style.font_size)
    lines = [
        "{\\pard\\sb240\\sa60\\keepn\\brdrb"
        f"{style.divider.rtf_border}\\brsp40\\f{font_index}\\fs26\\b\\cf{_HEADING} "
        f"{escape_rtf(section.title)}\\b0\\par}}"
    ]
    for block in section.blocks:
        body = _runs(block, style.is_bold)
        if block.kind == BULLET:
            lines.append(
                f"{{\\pard\\fi-240\\li480\\sa40\\f{font_index}\\fs{size}\\cf{_TEXT} "
                f"{_bullet_glyph(style.bullet)}\\tab {body}\\par}}"
            )
        else:
            lines.append(f"{{\\pard\\sa60\\f{font_index}\\fs{size}\\cf{_TEXT} {body}\\par}}")
    return lines


def outline_to_rtf(outline: Outline, config: ExportConfig | None = None) -> str:
    config = config or ExportConfig()
    width, height = PAGE_SIZES_MM[config.page_size]

    fonts = [outline.theme.font_family]
    for section in outline.sections:
        if section.style.font_family not in fonts:
            fonts.append(section.style.font_family)
    font_table = "".join(f"{{\\f{i}\\fnil {_font_name(name)};}}" for i, name in enumerate(fonts))
    colors = {
        _TEXT: outline.colors.text,
        _HEADING: outline.heading_color,
        _SECONDARY: outline.colors.secondary,
    }
    color_table = ";" + "".join(_color_entry(colors[i]) for i in sorted(colors))

    lines = [
        "{\\rtf1\\ansi\\ansicpg1252\\uc1\\deff0",
        f"{{\\fonttbl{font_table}}}",
        f"{{\\colortbl{color_table}}}",
        f"\\paperw{_twips(width)}\\paperh{_twips(height)}"
        f"\\margl{_twips(config.margin_side_mm)}\\margr{_twips(config.margin_side_mm)}"
        f"\\margt{_twips(config.margin_top_mm)}\\margb{_twips(config.margin_top_mm)}",
        f"{{\\pard\\qc\\sa80\\f0\\fs40\\b\\cf{_HEADING} {escape_rtf(outline.name)}\\b0\\par}}",
    ]
    if outline.contact:
        lines.append(
            f"{{\\pard\\qc\\sa40\\f0\\fs19\\cf{_SECONDARY} "
            f"{escape_rtf(' | '.join(outline.contact))}\\par}}"
        )
    if outline.links:
        links = " | ".join(f"{label}: {text}" for label, text in outline.links)
        lines.append(f"{{\\pard\\qc\\sa120\\f0\\fs19\\cf{_SECONDARY} {escape_rtf(links)}\\par}}")
    for section in outline.sections:
        lines.extend(_section(section, fonts))
    lines.append("}")
    return "\n".join(lines)


def render_rtf(
    doc: ResumeData,
    options: CustomizationOptions,
    theme: ResumeTheme | None = None,
    config: ExportConfig | None = None,
) -> str:
    """Render the document as an RTF string.

    Raises:
        ResumeValidationError: full name or email is missing.
    """
    return outline_to_rtf(build_outline(doc, options, theme), config)
