"""Pydantic models for visual customization, themes and section templates."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field

from resume_builder.models.resume import load_model

logger = logging.getLogger(__name__)

LayoutId = Literal[
    "traditional", "modern", "creative", "minimal",
    "sidebar", "two-column", "executive", "academic",
]
Spacing = Literal["compact", "normal", "spacious"]
Typography = Literal["professional", "modern", "elegant", "bold", "minimal"]
HeaderStyle = Literal["centered", "left", "right", "banner", "sidebar"]
SectionStyle = Literal["standard", "bordered", "filled", "minimal", "cards"]

DEFAULT_TEMPLATE = "default"


class SectionCustomization(BaseModel):
    """Per-section overrides; blank values defer to the theme."""

    font_family: str = ""
    font_size: str = ""
    font_weight: str = ""
    color: str = ""
    icon: str = ""
    custom_icon: str = ""
    bullet_style: str = ""
    divider_style: str = ""


class CustomColors(BaseModel):
    primary: str = "#2563eb"
    secondary: str = "#64748b"
    accent: str = "#3b82f6"
    text: str = "#1f2937"
    background: str = "#ffffff"


class ResumeTheme(BaseModel):
    id: str
    name: str
    description: str = ""
    primary_color: str
    secondary_color: str
    accent_color: str
    font_family: str
    layout: LayoutId = "traditional"
    header_style: HeaderStyle = "centered"
    section_style: SectionStyle = "standard"
    spacing: Spacing = "normal"
    typography: Typography = "professional"


class CustomizationOptions(BaseModel):
    sections: dict[str, SectionCustomization] = {}
    layout: LayoutId = "traditional"
    colors: CustomColors = Field(default_factory=CustomColors)
    spacing: Spacing = "normal"
    typography: Typography = "professional"
    theme_id: str = "professional-standard"
    bullet_styles: dict[str, str] = {}
    divider_styles: dict[str, str] = {}


class TemplateConfig(BaseModel):
    """Section key -> template id, or ``"default"`` for built-in rendering."""

    templates: dict[str, str] = {}

    def template_for(self, section_key: str) -> str:
        return self.templates.get(section_key, DEFAULT_TEMPLATE)


class CustomizationBundle(BaseModel):
    """The persisted customization blob: options plus template choices."""

    options: CustomizationOptions = Field(default_factory=CustomizationOptions)
    template_config: TemplateConfig = Field(default_factory=TemplateConfig)


def apply_theme(options: CustomizationOptions, theme: ResumeTheme) -> CustomizationOptions:
    """Return options with the theme's defaults written over the matching fields.

    Text/background colors and per-section overrides are kept.
    """
    colors = options.colors.model_copy(
        update={
            "primary": theme.primary_color,
            "secondary": theme.secondary_color,
            "accent": theme.accent_color,
        }
    )
    return options.model_copy(
        update={
            "colors": colors,
            "layout": theme.layout,
            "spacing": theme.spacing,
            "typography": theme.typography,
            "theme_id": theme.id,
        },
        deep=True,
    )


def bundle_from_raw(raw: Any) -> CustomizationBundle:
    """Rebuild the customization bundle, defaulting field by field."""
    if not isinstance(raw, dict):
        logger.warning("Stored customization is %s, not an object; using defaults", type(raw).__name__)
        return CustomizationBundle()
    return CustomizationBundle(
        options=load_model(CustomizationOptions, raw.get("options", {}), "options"),
        template_config=load_model(TemplateConfig, raw.get("template_config", {}), "template_config"),
    )
