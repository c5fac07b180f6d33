"""Static catalogue of themes, layouts, glyphs and fonts."""

from __future__ import annotations

from resume_builder.models.customization import ResumeTheme

FONT_FAMILIES: dict[str, list[str]] = {
    "professional": ["Lato", "Source Sans Pro", "Open Sans", "Roboto"],
    "modern": ["Montserrat", "Raleway", "Poppins", "Inter"],
    "creative": ["Pacifico", "Indie Flower", "Dancing Script", "Comfortaa"],
    "elegant": ["Playfair Display", "Merriweather", "Crimson Text", "Libre Baskerville"],
}

# Fallback stacks appended to a chosen family in CSS output.
FONT_GENERIC: dict[str, str] = {
    "professional": "sans-serif",
    "modern": "sans-serif",
    "creative": "cursive",
    "elegant": "serif",
}

SECTION_ICONS: dict[str, tuple[str, ...]] = {
    "work": ("👨‍💼", "💼", "🏢", "⚡", "🚀", "💡"),
    "education": ("🎓", "📚", "🏫", "📖", "🎒", "✏️"),
    "skills": ("🛠️", "⚙️", "💪", "🎯", "⭐", "🔧"),
    "summary": ("📝", "👤", "📄", "✨", "🎪", "📋"),
    "contact": ("📞", "📧", "📍", "🌐", "📲", "💬"),
    "links": ("🔗", "🌍", "📱", "💻", "🔥", "📊"),
}

# Section key -> curated icon group.
SECTION_ICON_GROUPS: dict[str, str] = {
    "experience": "work",
    "projects": "work",
    "education": "education",
    "certificates": "education",
    "skills": "skills",
    "summary": "summary",
    "additional_info": "summary",
    "contact": "contact",
    "links": "links",
}

BULLET_STYLES: dict[str, str] = {
    "Checkmarks": "✅",
    "Arrows": "▶",
    "Dashes": "–",
    "Stars": "★",
    "Dots": "•",
    "Boxes": "■",
    "Circles": "●",
    "Diamonds": "◆",
    "Roman I": "I.",
    "Numbers": "1.",
}

DIVIDER_STYLES = ("simple", "double", "dotted", "dashed", "wave", "gradient", "shadow")

# Typography class -> (font size, font weight) for section bodies.
TYPOGRAPHY: dict[str, tuple[str, str]] = {
    "professional": ("14px", "normal"),
    "modern": ("14px", "500"),
    "elegant": ("15px", "normal"),
    "bold": ("14px", "bold"),
    "minimal": ("13px", "normal"),
}

LAYOUT_OPTIONS: dict[str, str] = {
    "traditional": "Classic single-column layout with header",
    "modern": "Contemporary design with dynamic sections",
    "creative": "Artistic layout with unique positioning",
    "minimal": "Clean and simple design",
    "sidebar": "Two-column with sidebar for personal info",
    "two-column": "Balanced two-column layout",
    "executive": "Professional layout for senior positions",
    "academic": "Structured layout for academic professionals",
}


def _theme(id, name, description, primary, secondary, accent, font, layout,
           header, section, spacing, typography) -> ResumeTheme:
    return ResumeTheme(
        id=id,
        name=name,
        description=description,
        primary_color=primary,
        secondary_color=secondary,
        accent_color=accent,
        font_family=font,
        layout=layout,
        header_style=header,
        section_style=section,
        spacing=spacing,
        typography=typography,
    )


RESUME_THEMES: tuple[ResumeTheme, ...] = (
    _theme("professional-standard", "Professional Standard",
           "Classic business layout with traditional formatting",
           "#2563eb", "#64748b", "#3b82f6", "Inter",
           "traditional", "centered", "standard", "normal", "professional"),
    _theme("executive-premium", "Executive Premium",
           "Sophisticated design for senior leadership positions",
           "#1a365d", "#2d3748", "#e53e3e", "Playfair Display",
           "executive", "banner", "bordered", "spacious", "elegant"),
    _theme("modern-tech", "Modern Tech",
           "Contemporary design optimized for technology roles",
           "#0891b2", "#0e7490", "#f59e0b", "Roboto",
           "sidebar", "sidebar", "cards", "normal", "modern"),
    _theme("creative-bold", "Creative Bold",
           "Vibrant layout perfect for creative professionals",
           "#dc2626", "#f87171", "#fbbf24", "Poppins",
           "creative", "sidebar", "filled", "normal", "bold"),
    _theme("minimal-elegant", "Minimal Elegant",
           "Clean design focusing on content clarity",
           "#374151", "#9ca3af", "#10b981", "Source Sans Pro",
           "minimal", "left", "minimal", "compact", "minimal"),
    _theme("academic-formal", "Academic Formal",
           "Scholarly design for academic and research positions",
           "#1e3a8a", "#3730a3", "#059669", "Crimson Text",
           "academic", "centered", "standard", "spacious", "elegant"),
)

TEMPLATE_THEMES: tuple[ResumeTheme, ...] = (
    _theme("executive-suite", "Executive Suite",
           "Premium design for C-level executives and senior management",
           "#1a365d", "#2d3748", "#e53e3e", "Playfair Display",
           "executive", "banner", "bordered", "spacious", "elegant"),
    _theme("corporate-classic", "Corporate Classic",
           "Traditional corporate design with modern touches",
           "#2563eb", "#64748b", "#3b82f6", "Inter",
           "traditional", "centered", "standard", "normal", "professional"),
    _theme("business-elite", "Business Elite",
           "Sophisticated layout for business professionals",
           "#374151", "#6b7280", "#059669", "Source Sans Pro",
           "two-column", "banner", "filled", "normal", "professional"),
    _theme("modern-minimalist", "Modern Minimalist",
           "Clean and contemporary design with focus on content",
           "#0f172a", "#64748b", "#0ea5e9", "Inter",
           "minimal", "left", "minimal", "compact", "minimal"),
    _theme("tech-professional", "Tech Professional",
           "Modern tech-focused design with clean typography",
           "#0891b2", "#0e7490", "#f59e0b", "Roboto",
           "sidebar", "sidebar", "cards", "normal", "modern"),
    _theme("digital-native", "Digital Native",
           "Contemporary design for digital professionals",
           "#7c3aed", "#a78bfa", "#06d6a0", "Montserrat",
           "modern", "left", "cards", "normal", "bold"),
    _theme("creative-portfolio", "Creative Portfolio",
           "Artistic layout perfect for designers and creatives",
           "#dc2626", "#f87171", "#fbbf24", "Poppins",
           "creative", "sidebar", "cards", "spacious", "modern"),
    _theme("artistic-flair", "Artistic Flair",
           "Bold creative design with unique visual elements",
           "#7c2d12", "#ea580c", "#8b5cf6", "Comfortaa",
           "creative", "centered", "filled", "normal", "bold"),
    _theme("designer-showcase", "Designer Showcase",
           "Innovative layout to showcase creative work",
           "#be185d", "#ec4899", "#06b6d4", "Raleway",
           "sidebar", "banner", "bordered", "spacious", "modern"),
    _theme("academic-research", "Academic Research",
           "Scholarly design perfect for academics and researchers",
           "#1e3a8a", "#3730a3", "#059669", "Crimson Text",
           "academic", "centered", "standard", "spacious", "elegant"),
    _theme("scientific-journal", "Scientific Journal",
           "Professional academic layout with clear hierarchy",
           "#134e4a", "#0f766e", "#0891b2", "Libre Baskerville",
           "traditional", "centered", "minimal", "normal", "elegant"),
    _theme("healthcare-professional", "Healthcare Professional",
           "Clean, trustworthy design for medical professionals",
           "#065f46", "#047857", "#0ea5e9", "Source Sans Pro",
           "two-column", "left", "standard", "normal", "professional"),
    _theme("finance-expert", "Finance Expert",
           "Conservative design perfect for financial professionals",
           "#1f2937", "#4b5563", "#dc2626", "Lato",
           "executive", "banner", "bordered", "compact", "professional"),
    _theme("consulting-pro", "Consulting Pro",
           "Professional consulting industry standard design",
           "#1e40af", "#3b82f6", "#f59e0b", "Inter",
           "traditional", "banner", "filled", "normal", "professional"),
    _theme("startup-founder", "Startup Founder",
           "Dynamic design for entrepreneurs and startup leaders",
           "#7c2d12", "#ea580c", "#10b981", "Montserrat",
           "modern", "left", "cards", "normal", "bold"),
    _theme("innovation-leader", "Innovation Leader",
           "Forward-thinking design for innovation professionals",
           "#581c87", "#8b5cf6", "#06d6a0", "Poppins",
           "creative", "sidebar", "filled", "spacious", "modern"),
)

ALL_THEMES: dict[str, ResumeTheme] = {t.id: t for t in RESUME_THEMES + TEMPLATE_THEMES}

DEFAULT_THEME = RESUME_THEMES[0]


def get_theme(theme_id: str | None) -> ResumeTheme:
    """Look up a theme by id, falling back to the default theme."""
    return ALL_THEMES.get(theme_id or "", DEFAULT_THEME)


def font_stack(family: str) -> str:
    """CSS font stack for a family name, with a generic fallback."""
    generic = "sans-serif"
    for group, names in FONT_FAMILIES.items():
        if family in names:
            generic = FONT_GENERIC[group]
            break
    return f"'{family}', {generic}"
