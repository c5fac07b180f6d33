"""Cascading style resolution for resume sections.

Each style attribute is taken from the first non-blank tier:

1. the explicit per-section override (``options.sections[key]``, then the
   legacy ``bullet_styles`` / ``divider_styles`` maps),
2. the active theme and the global palette/typography seeded from it,
3. the hard-coded global fallback.

The result is always fully populated and depends only on its inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from resume_builder.models.customization import (
    CustomizationOptions,
    ResumeTheme,
    SectionCustomization,
)
from resume_builder.themes import (
    SECTION_ICON_GROUPS,
    SECTION_ICONS,
    TYPOGRAPHY,
    font_stack,
)

logger = logging.getLogger(__name__)

GLOBAL_FALLBACK: dict[str, str] = {
    "font_family": "Inter",
    "font_size": "14px",
    "font_weight": "normal",
    "color": "#1f2937",
    "bullet": "•",
    "divider": "simple",
}


class IconKind(str, Enum):
    NONE = "none"
    CUSTOM = "custom"
    CURATED = "curated"


@dataclass(frozen=True)
class SectionIcon:
    kind: IconKind
    glyph: str = ""


NO_ICON = SectionIcon(IconKind.NONE)


@dataclass(frozen=True)
class DividerPolicy:
    """Edge decoration for one divider style, per output format."""

    style: str
    css_template: str
    css_class: str
    rtf_border: str

    def css(self, color: str) -> str:
        return self.css_template.format(color=color)


DIVIDER_POLICIES: dict[str, DividerPolicy] = {
    "simple": DividerPolicy(
        "simple", "border-top: 1px solid {color};", "divider-simple", r"\brdrs\brdrw10"
    ),
    "double": DividerPolicy(
        "double", "border-top: 3px double {color};", "divider-double", r"\brdrdb\brdrw15"
    ),
    "dotted": DividerPolicy(
        "dotted", "border-top: 1px dotted {color};", "divider-dotted", r"\brdrdot\brdrw10"
    ),
    "dashed": DividerPolicy(
        "dashed", "border-top: 1px dashed {color};", "divider-dashed", r"\brdrdash\brdrw10"
    ),
    "wave": DividerPolicy(
        "wave",
        "border-bottom: 2px solid {color}; border-radius: 0 0 50% 50% / 0 0 4px 4px;",
        "divider-wave",
        r"\brdrwavy\brdrw10",
    ),
    "gradient": DividerPolicy(
        "gradient",
        "height: 2px; border: none; background: linear-gradient(to right, {color}, transparent);",
        "divider-gradient",
        r"\brdrth\brdrw10",
    ),
    "shadow": DividerPolicy(
        "shadow",
        "border-top: 1px solid {color}; box-shadow: 0 2px 3px rgba(0, 0, 0, 0.15);",
        "divider-shadow",
        r"\brdrsh\brdrs\brdrw10",
    ),
}


@dataclass(frozen=True)
class ResolvedSectionStyle:
    section_key: str
    font_family: str
    font_size: str
    font_weight: str
    color: str
    heading_color: str
    bullet: str
    divider: DividerPolicy
    icon: SectionIcon

    @property
    def body_css(self) -> str:
        return (
            f"font-family: {font_stack(self.font_family)}; font-size: {self.font_size}; "
            f"font-weight: {self.font_weight}; color: {self.color};"
        )

    @property
    def heading_css(self) -> str:
        return f"font-family: {font_stack(self.font_family)}; color: {self.heading_color};"

    @property
    def divider_css(self) -> str:
        return self.divider.css(self.heading_color)

    @property
    def is_bold(self) -> bool:
        return self.font_weight in ("bold", "bolder") or (
            self.font_weight.isdigit() and int(self.font_weight) >= 600
        )


def merge_tiers(override: dict[str, str], theme_defaults: dict[str, str]) -> dict[str, str]:
    """Three-tier merge: override, then theme default, then global fallback."""
    merged = {}
    for key, fallback in GLOBAL_FALLBACK.items():
        value = fallback
        for tier in (override, theme_defaults):
            candidate = (tier.get(key) or "").strip()
            if candidate:
                value = candidate
                break
        merged[key] = value
    return merged


def resolve_divider(style: str) -> DividerPolicy:
    policy = DIVIDER_POLICIES.get(style)
    if policy is None:
        logger.debug("Unknown divider style %r, using simple", style)
        return DIVIDER_POLICIES["simple"]
    return policy


def resolve_icon(section_key: str, section: SectionCustomization | None) -> SectionIcon:
    """Classify the section icon as none, a custom glyph, or a curated one."""
    if section is None:
        return NO_ICON
    custom = section.custom_icon.strip()
    if custom:
        return SectionIcon(IconKind.CUSTOM, custom)
    icon = section.icon.strip()
    if not icon:
        return NO_ICON
    group = SECTION_ICON_GROUPS.get(section_key)
    if group is not None and icon in SECTION_ICONS[group]:
        return SectionIcon(IconKind.CURATED, icon)
    return SectionIcon(IconKind.CUSTOM, icon)


def resolve_section_style(
    section_key: str,
    options: CustomizationOptions,
    theme: ResumeTheme,
) -> ResolvedSectionStyle:
    section = options.sections.get(section_key)

    override: dict[str, str] = {
        "bullet": options.bullet_styles.get(section_key, ""),
        "divider": options.divider_styles.get(section_key, ""),
    }
    if section is not None:
        override.update(
            {
                "font_family": section.font_family,
                "font_size": section.font_size,
                "font_weight": section.font_weight,
                "color": section.color,
            }
        )
        if section.bullet_style.strip():
            override["bullet"] = section.bullet_style
        if section.divider_style.strip():
            override["divider"] = section.divider_style

    typography = options.typography or theme.typography
    size, weight = TYPOGRAPHY.get(typography, TYPOGRAPHY[theme.typography])
    theme_defaults = {
        "font_family": theme.font_family,
        "font_size": size,
        "font_weight": weight,
        "color": options.colors.text,
    }

    merged = merge_tiers(override, theme_defaults)
    return ResolvedSectionStyle(
        section_key=section_key,
        font_family=merged["font_family"],
        font_size=merged["font_size"],
        font_weight=merged["font_weight"],
        color=merged["color"],
        heading_color=options.colors.primary or theme.primary_color,
        bullet=merged["bullet"],
        divider=resolve_divider(merged["divider"]),
        icon=resolve_icon(section_key, section),
    )


def resolve_styles(
    section_keys: list[str] | tuple[str, ...],
    options: CustomizationOptions,
    theme: ResumeTheme,
) -> dict[str, ResolvedSectionStyle]:
    return {key: resolve_section_style(key, options, theme) for key in section_keys}
