"""Jinja2 environment and fragment rendering for resume sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup

from resume_builder.models.customization import CustomColors, ResumeTheme
from resume_builder.models.resume import ResumeData
from resume_builder.pipeline.layout import section_data
from resume_builder.pipeline.style_resolver import ResolvedSectionStyle
from resume_builder.themes import font_stack
from resume_builder.utils.links import LINK_LABELS, safe_href
from resume_builder.utils.text import date_range, format_date, paragraphs, split_csv

HTML_TEMPLATES_DIR = Path(__file__).parent / "html"

SECTION_TITLES: dict[str, str] = {
    "summary": "Professional Summary",
    "experience": "Professional Experience",
    "education": "Education",
    "skills": "Skills & Technologies",
    "projects": "Projects",
    "certificates": "Certifications",
    "hobbies": "Hobbies & Interests",
    "links": "Links",
    "additional_info": "Additional Information",
    "declaration": "Declaration",
    "signature": "Signature",
}

LEVEL_RANK = {"Beginner": 1, "Intermediate": 2, "Expert": 3}


@dataclass
class RenderContext:
    """Everything a section renderer may read besides its own data."""

    document: ResumeData
    colors: CustomColors
    theme: ResumeTheme
    styles: dict[str, ResolvedSectionStyle] = field(default_factory=dict)
    sections: list[str] = field(default_factory=list)  # visible keys, for complete templates


def group_skills(skills) -> list[tuple[str, list]]:
    """Group skills by category, keeping first-seen category order."""
    groups: dict[str, list] = {}
    for skill in skills:
        groups.setdefault(skill.category or "Other", []).append(skill)
    return list(groups.items())


def public_links(links) -> list[tuple[str, str, str | None]]:
    """(label, text, href) for each filled-in public link."""
    result = []
    for key, label in LINK_LABELS.items():
        value = getattr(links, key, "")
        if value:
            result.append((label, value, safe_href(value)))
    return result


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(
        format_date=format_date,
        paragraphs=paragraphs,
        split_csv=split_csv,
        font_stack=font_stack,
    )
    env.globals.update(
        date_range=date_range,
        group_skills=group_skills,
        public_links=public_links,
        section_data=section_data,
        section_titles=SECTION_TITLES,
        level_rank=LEVEL_RANK,
    )
    return env


def render_fragment(template_name: str, **context: Any) -> Markup:
    """Render one template file to an HTML fragment."""
    template = get_environment().get_template(template_name)
    return Markup(template.render(**context))


def render_builtin_section(
    section_key: str,
    data: Any,
    style: ResolvedSectionStyle,
    ctx: RenderContext,
) -> Markup:
    """Built-in rendering used when no section template is configured."""
    return render_fragment(
        f"sections/{section_key}.html.j2", data=data, style=style, ctx=ctx
    )


def render_section_frame(section_key: str, body: Markup, style: ResolvedSectionStyle) -> Markup:
    """Wrap a section body with its icon, heading and divider."""
    return render_fragment(
        "section_frame.html.j2",
        key=section_key,
        title=SECTION_TITLES.get(section_key, section_key.replace("_", " ").title()),
        body=body,
        style=style,
    )
