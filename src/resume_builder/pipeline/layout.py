"""Section visibility, ordering and bucketing for each layout."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from resume_builder.config import LayoutConfig
from resume_builder.models.customization import CustomizationOptions
from resume_builder.models.resume import ResumeData

logger = logging.getLogger(__name__)


class Layout(str, Enum):
    TRADITIONAL = "traditional"
    MODERN = "modern"
    CREATIVE = "creative"
    MINIMAL = "minimal"
    SIDEBAR = "sidebar"
    TWO_COLUMN = "two-column"
    EXECUTIVE = "executive"
    ACADEMIC = "academic"


MAIN = "main"
SIDEBAR = "sidebar"

# Links are rendered in the header outside the sidebar layout.
CANONICAL_ORDER: tuple[str, ...] = (
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "certificates",
    "hobbies",
    "additional_info",
    "declaration",
    "signature",
)

# Only academic and creative reorder sections; every other layout keeps the
# canonical flow.
LAYOUT_ORDERS: dict[Layout, tuple[str, ...]] = {
    Layout.ACADEMIC: (
        "summary", "education", "projects", "experience", "skills",
        "certificates", "hobbies", "additional_info", "declaration", "signature",
    ),
    Layout.CREATIVE: (
        "summary", "projects", "experience", "education", "skills",
        "certificates", "hobbies", "additional_info", "declaration", "signature",
    ),
}

SIDEBAR_BUCKETS: dict[str, tuple[str, ...]] = {
    SIDEBAR: ("skills", "education", "links"),
    MAIN: ("summary", "experience", "projects"),
}

SPACING_GAPS: dict[str, str] = {
    "compact": "0.75rem",
    "normal": "1.25rem",
    "spacious": "2rem",
}


@dataclass(frozen=True)
class LayoutSlot:
    key: str
    visible: bool
    bucket: str = MAIN


def to_layout(value: str) -> Layout:
    try:
        return Layout(value)
    except ValueError:
        logger.warning("Unknown layout %r, using traditional", value)
        return Layout.TRADITIONAL


def section_data(doc: ResumeData, key: str) -> Any:
    """The slice of the document a section renders."""
    if key == "summary":
        return doc.personal_info.summary
    if key == "links":
        return doc.public_links
    return getattr(doc, key)


def is_section_visible(doc: ResumeData, key: str) -> bool:
    """A section shows once it has text, list entries, or its enabled flag set."""
    data = section_data(doc, key)
    if key in ("declaration", "signature"):
        return data.enabled
    if key == "links":
        return any(value.strip() for value in data.model_dump().values())
    if isinstance(data, str):
        return bool(data.strip())
    return bool(data)


def section_order(layout: Layout | str) -> tuple[str, ...]:
    layout = to_layout(layout) if isinstance(layout, str) else layout
    if layout is Layout.SIDEBAR:
        return SIDEBAR_BUCKETS[SIDEBAR] + SIDEBAR_BUCKETS[MAIN]
    return LAYOUT_ORDERS.get(layout, CANONICAL_ORDER)


def plan_layout(doc: ResumeData, layout: Layout | str) -> list[LayoutSlot]:
    """Ordered (key, visible, bucket) slots for every section the layout places.

    Bucket assignment in the sidebar layout is fixed and does not depend on
    which sections have content.
    """
    layout = to_layout(layout) if isinstance(layout, str) else layout
    slots = []
    for key in section_order(layout):
        bucket = MAIN
        if layout is Layout.SIDEBAR and key in SIDEBAR_BUCKETS[SIDEBAR]:
            bucket = SIDEBAR
        slots.append(LayoutSlot(key, is_section_visible(doc, key), bucket))
    return slots


def visible_slots(doc: ResumeData, layout: Layout | str) -> list[LayoutSlot]:
    return [slot for slot in plan_layout(doc, layout) if slot.visible]


def canonical_sections(doc: ResumeData) -> list[str]:
    """Visible section keys in the order every export uses."""
    return [key for key in CANONICAL_ORDER if is_section_visible(doc, key)]


def needs_compact_layout(doc: ResumeData, thresholds: LayoutConfig) -> bool:
    if any(len(exp.description) > thresholds.description_threshold for exp in doc.experience):
        return True
    if len(doc.education) > thresholds.education_threshold:
        return True
    return len(doc.skills) > thresholds.skills_threshold


def auto_escalate(
    options: CustomizationOptions,
    doc: ResumeData,
    thresholds: LayoutConfig | None = None,
) -> CustomizationOptions:
    """Switch a crowded traditional layout to two-column with compact spacing.

    Only fires from "traditional"; any other layout, including one the user
    picked, is returned untouched. Applying it twice is the same as once.
    """
    thresholds = thresholds or LayoutConfig()
    if options.layout != Layout.TRADITIONAL.value:
        return options
    if not needs_compact_layout(doc, thresholds):
        return options
    logger.info("Content exceeds traditional layout thresholds; switching to two-column")
    return options.model_copy(update={"layout": Layout.TWO_COLUMN.value, "spacing": "compact"})
