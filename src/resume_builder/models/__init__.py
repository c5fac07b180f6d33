"""Data models for the resume document and its customization."""

from resume_builder.models.customization import (
    CustomColors,
    CustomizationBundle,
    CustomizationOptions,
    ResumeTheme,
    SectionCustomization,
    TemplateConfig,
)
from resume_builder.models.resume import (
    CertificateItem,
    Declaration,
    EducationItem,
    ExperienceItem,
    HobbyItem,
    PersonalInfo,
    ProjectItem,
    PublicLinks,
    ResumeData,
    Signature,
    SkillItem,
)

__all__ = [
    "CertificateItem",
    "CustomColors",
    "CustomizationBundle",
    "CustomizationOptions",
    "Declaration",
    "EducationItem",
    "ExperienceItem",
    "HobbyItem",
    "PersonalInfo",
    "ProjectItem",
    "PublicLinks",
    "ResumeData",
    "ResumeTheme",
    "SectionCustomization",
    "Signature",
    "SkillItem",
    "TemplateConfig",
]
