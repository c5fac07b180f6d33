"""Canonical content walk shared by every export format.

The print, RTF and DOCX serializers all consume the same ``Outline``, so
they agree on content and section order by construction and differ only
in markup. Sections follow the traditional order whatever layout is
active on screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resume_builder.models.customization import CustomColors, CustomizationOptions, ResumeTheme
from resume_builder.models.resume import ResumeData, ensure_complete
from resume_builder.pipeline.layout import canonical_sections, section_data
from resume_builder.pipeline.style_resolver import ResolvedSectionStyle, resolve_section_style
from resume_builder.templates.renderer import SECTION_TITLES, group_skills, public_links
from resume_builder.themes import get_theme
from resume_builder.utils.text import date_range, format_date, paragraphs, split_csv

logger = logging.getLogger(__name__)

PARAGRAPH = "paragraph"
BULLET = "bullet"

PAGE_SIZES_MM: dict[str, tuple[float, float]] = {
    "A4": (210.0, 297.0),
    "Letter": (215.9, 279.4),
}

# Headings lighter than this are unreadable on white paper.
PRINT_LUMINANCE_LIMIT = 0.8


@dataclass(frozen=True)
class Run:
    text: str
    bold: bool = False
    italic: bool = False


@dataclass
class Block:
    kind: str
    runs: list[Run]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class OutlineSection:
    key: str
    title: str
    style: ResolvedSectionStyle
    heading_color: str
    blocks: list[Block] = field(default_factory=list)


@dataclass
class Outline:
    name: str
    contact: list[str]
    links: list[tuple[str, str]]
    colors: CustomColors
    theme: ResumeTheme
    heading_color: str
    profile_image: str | None = None
    sections: list[OutlineSection] = field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        return [s.key for s in self.sections]

    def plain_text(self) -> str:
        lines = [self.name, *self.contact]
        lines += [f"{label}: {text}" for label, text in self.links]
        for section in self.sections:
            lines.append(section.title)
            lines += [block.text for block in section.blocks]
        return "\n".join(lines)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = value.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    except (ValueError, IndexError):
        logger.debug("Unparseable color %r, using black", value)
        return 0, 0, 0


def relative_luminance(value: str) -> float:
    def channel(c: int) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in hex_to_rgb(value))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def print_safe_color(value: str) -> str:
    """Darken a color that would not show on paper; others pass through."""
    if relative_luminance(value) <= PRINT_LUMINANCE_LIMIT:
        return value
    r, g, b = (int(c * 0.45) for c in hex_to_rgb(value))
    return f"#{r:02x}{g:02x}{b:02x}"


def _bullets(text: str) -> list[Block]:
    return [Block(BULLET, [Run(line)]) for line in paragraphs(text)]


def _paragraphs(text: str, italic: bool = False) -> list[Block]:
    return [Block(PARAGRAPH, [Run(line, italic=italic)]) for line in paragraphs(text)]


def _entry_line(title: str, subtitle: str, dates: str) -> Block:
    runs = [Run(title, bold=True)]
    if subtitle:
        runs.append(Run(f", {subtitle}" if title else subtitle))
    if dates:
        runs.append(Run(f" ({dates})", italic=True))
    return Block(PARAGRAPH, runs)


def _experience(items) -> list[Block]:
    blocks = []
    for exp in items:
        blocks.append(
            _entry_line(exp.job_title, exp.company, date_range(exp.start_date, exp.end_date, exp.current))
        )
        blocks += _bullets(exp.description)
        blocks += _bullets(exp.key_responsibilities)
    return blocks


def _education(items) -> list[Block]:
    blocks = []
    for edu in items:
        blocks.append(
            _entry_line(edu.degree, edu.school, date_range(edu.start_year, edu.end_year, edu.current))
        )
        grades = [
            f"{label}: {value}"
            for label, value in (
                ("CGPA", edu.cgpa),
                ("Percentage", edu.percentage),
                ("Grade", edu.letter_grade),
            )
            if value
        ]
        if grades:
            blocks.append(Block(PARAGRAPH, [Run(" | ".join(grades), italic=True)]))
        blocks += _bullets(edu.description)
    return blocks


def _skills(items) -> list[Block]:
    return [
        Block(
            PARAGRAPH,
            [
                Run(f"{category}: ", bold=True),
                Run(", ".join(f"{s.name} ({s.level})" for s in skills)),
            ],
        )
        for category, skills in group_skills(items)
    ]


def _projects(items) -> list[Block]:
    blocks = []
    for project in items:
        blocks.append(
            _entry_line(
                project.name, "", date_range(project.start_date, project.end_date, project.current)
            )
        )
        technologies = split_csv(project.technologies)
        if technologies:
            blocks.append(
                Block(PARAGRAPH, [Run("Technologies: ", bold=True), Run(", ".join(technologies), italic=True)])
            )
        blocks += _bullets(project.description)
        if project.url:
            blocks.append(Block(PARAGRAPH, [Run(project.url, italic=True)]))
    return blocks


def _certificates(items) -> list[Block]:
    blocks = []
    for cert in items:
        issued = " - ".join(d for d in (format_date(cert.issue_date), format_date(cert.expiry_date)) if d)
        blocks.append(_entry_line(cert.name, cert.issuer, issued))
        if cert.url:
            blocks.append(Block(PARAGRAPH, [Run(cert.url, italic=True)]))
    return blocks


def _hobbies(items) -> list[Block]:
    names = [hobby.name for hobby in items if hobby.name]
    return [Block(PARAGRAPH, [Run(", ".join(names))])] if names else []


def _signature(sig) -> list[Block]:
    blocks = []
    if sig.name:
        blocks.append(Block(PARAGRAPH, [Run(sig.name, bold=True)]))
    if sig.date:
        blocks.append(Block(PARAGRAPH, [Run("Date: ", bold=True), Run(format_date(sig.date))]))
    if sig.location:
        blocks.append(Block(PARAGRAPH, [Run("Place: ", bold=True), Run(sig.location)]))
    return blocks


_SECTION_BLOCKS = {
    "summary": _paragraphs,
    "experience": _experience,
    "education": _education,
    "skills": _skills,
    "projects": _projects,
    "certificates": _certificates,
    "hobbies": _hobbies,
    "additional_info": _paragraphs,
    "declaration": lambda decl: _paragraphs(decl.text),
    "signature": _signature,
}


def build_outline(
    doc: ResumeData,
    options: CustomizationOptions,
    theme: ResumeTheme | None = None,
) -> Outline:
    """Validate the document and walk it into export-ready blocks.

    Raises:
        ResumeValidationError: full name or email is missing.
    """
    ensure_complete(doc)
    theme = theme or get_theme(options.theme_id)
    info = doc.personal_info
    heading_color = print_safe_color(options.colors.primary or theme.primary_color)

    outline = Outline(
        name=info.full_name.strip(),
        contact=[value for value in (info.email, info.phone, info.location) if value.strip()],
        links=[(label, text) for label, text, _ in public_links(doc.public_links)],
        colors=options.colors,
        theme=theme,
        heading_color=heading_color,
        profile_image=info.profile_image,
    )
    for key in canonical_sections(doc):
        style = resolve_section_style(key, options, theme)
        outline.sections.append(
            OutlineSection(
                key=key,
                title=SECTION_TITLES[key],
                style=style,
                heading_color=print_safe_color(style.heading_color),
                blocks=_SECTION_BLOCKS[key](section_data(doc, key)),
            )
        )
    logger.debug("Outline for %s: %s", outline.name, outline.keys)
    return outline
