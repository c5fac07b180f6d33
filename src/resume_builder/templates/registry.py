"""Named rendering strategies for a section or the whole document.

The registry is built once at import from ``catalog.yaml``. Lookups never
raise: a ``"default"``, unknown or mismatched template id resolves to None
and the caller falls back to built-in rendering.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

import yaml
from markupsafe import Markup
from pydantic import BaseModel

from resume_builder.models.customization import DEFAULT_TEMPLATE, TemplateConfig
from resume_builder.pipeline.style_resolver import ResolvedSectionStyle
from resume_builder.templates.renderer import RenderContext, render_fragment

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(__file__).parent / "catalog.yaml"

COMPLETE = "complete"

TEMPLATE_CATEGORIES = (
    "experience",
    "education",
    "projects",
    "skills",
    "roles",
    "hobbies",
    "declaration",
    "signature",
    COMPLETE,
)


class TemplateId(str, Enum):
    EXPERIENCE_CARD = "experience-card"
    EXPERIENCE_TIMELINE = "experience-timeline"
    EDUCATION_COMPACT = "education-compact"
    EDUCATION_TABLE = "education-table"
    PROJECTS_TAGS = "projects-tags"
    SKILLS_GRID = "skills-grid"
    HOBBIES_SIMPLE = "hobbies-simple"
    DECLARATION_SIMPLE = "declaration-simple"
    SIGNATURE_SIMPLE = "signature-simple"
    PROFESSIONAL_CLASSIC = "professional-classic"


class SectionTemplate(BaseModel):
    """One catalogue entry; ``render`` is the single strategy interface."""

    model_config = {"frozen": True}

    id: TemplateId
    name: str
    description: str = ""
    category: str
    file: str

    @property
    def is_complete(self) -> bool:
        return self.category == COMPLETE

    def render(
        self,
        data: Any,
        style: ResolvedSectionStyle | None,
        ctx: RenderContext,
    ) -> Markup:
        return render_fragment(self.file, data=data, style=style, ctx=ctx)


class TemplateRegistry:
    """Append-only catalogue of templates keyed by id."""

    def __init__(self, templates: list[SectionTemplate] | None = None):
        self._templates: dict[str, SectionTemplate] = {}
        for template in templates or []:
            self.register(template)

    def register(self, template: SectionTemplate) -> None:
        if template.category not in TEMPLATE_CATEGORIES:
            raise ValueError(f"Unknown template category: {template.category!r}")
        if template.id.value in self._templates:
            raise ValueError(f"Template already registered: {template.id.value}")
        self._templates[template.id.value] = template

    def get(self, template_id: str) -> SectionTemplate | None:
        return self._templates.get(template_id)

    def by_category(self, category: str) -> list[SectionTemplate]:
        return [t for t in self._templates.values() if t.category == category]

    def __iter__(self) -> Iterator[SectionTemplate]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def resolve(self, section_key: str, config: TemplateConfig) -> SectionTemplate | None:
        """The template configured for ``section_key``, or None for built-in rendering.

        Under the ``complete`` key only a complete template is accepted, and
        under a section key only a template of that section's category.
        """
        template_id = config.template_for(section_key)
        if template_id == DEFAULT_TEMPLATE:
            return None
        template = self.get(template_id)
        if template is None:
            logger.debug("Unknown template %r for %s; using built-in rendering", template_id, section_key)
            return None
        if template.category != section_key:
            logger.debug(
                "Template %r is a %s template, not %s; using built-in rendering",
                template_id, template.category, section_key,
            )
            return None
        return template


def load_catalog(path: str | Path = CATALOG_PATH) -> list[SectionTemplate]:
    """Load template entries from a YAML catalogue."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return [SectionTemplate(**entry) for entry in data.get("templates", [])]


default_registry = TemplateRegistry(load_catalog())
