"""Pydantic models for the resume document tree."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any, ClassVar, Literal, get_origin

from pydantic import BaseModel, Field, ValidationError, model_validator

from resume_builder.errors import ResumeValidationError

logger = logging.getLogger(__name__)

SkillLevel = Literal["Beginner", "Intermediate", "Expert"]

DEFAULT_DECLARATION = (
    "I hereby declare that the information furnished above is true to the best "
    "of my knowledge and belief."
)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


def new_id() -> str:
    return uuid.uuid4().hex


class PersonalInfo(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    profile_image: str | None = None  # opaque image reference (data URL)
    summary: str = ""


class PublicLinks(BaseModel):
    github: str = ""
    linkedin: str = ""
    portfolio: str = ""
    website: str = ""


class _CurrentRecord(BaseModel):
    """A dated record whose end field is blank while ``current`` is set."""

    end_field: ClassVar[str] = "end_date"

    @model_validator(mode="after")
    def _clear_end_when_current(self):
        if getattr(self, "current", False):
            setattr(self, self.end_field, "")
        return self


class ExperienceItem(_CurrentRecord):
    id: str = Field(default_factory=new_id)
    job_title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    key_responsibilities: str = ""


class EducationItem(_CurrentRecord):
    end_field: ClassVar[str] = "end_year"

    id: str = Field(default_factory=new_id)
    degree: str = ""
    school: str = ""
    start_year: str = ""
    end_year: str = ""
    current: bool = False
    cgpa: str = ""
    percentage: str = ""
    letter_grade: str = ""
    description: str = ""


class ProjectItem(_CurrentRecord):
    id: str = Field(default_factory=new_id)
    name: str = ""
    description: str = ""
    technologies: str = ""  # comma separated
    url: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False


class SkillItem(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    category: str = "Technical"
    level: SkillLevel = "Intermediate"


class CertificateItem(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    issuer: str = ""
    issue_date: str = ""
    expiry_date: str = ""
    url: str = ""


class HobbyItem(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""


class Declaration(BaseModel):
    enabled: bool = False
    text: str = DEFAULT_DECLARATION


class Signature(BaseModel):
    enabled: bool = False
    name: str = ""
    date: str = ""
    location: str = ""
    digital_signature: str | None = None


class ResumeData(BaseModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    public_links: PublicLinks = Field(default_factory=PublicLinks)
    experience: list[ExperienceItem] = []
    education: list[EducationItem] = []
    skills: list[SkillItem] = []
    certificates: list[CertificateItem] = []
    projects: list[ProjectItem] = []
    additional_info: str = ""
    hobbies: list[HobbyItem] = []
    declaration: Declaration = Field(default_factory=Declaration)
    signature: Signature = Field(default_factory=Signature)


LIST_ITEM_MODELS: dict[str, type[BaseModel]] = {
    "experience": ExperienceItem,
    "education": EducationItem,
    "skills": SkillItem,
    "certificates": CertificateItem,
    "projects": ProjectItem,
    "hobbies": HobbyItem,
}

IDENTITY_FIELDS = ("full_name", "email", "phone", "location", "summary")


def new_list_item(section: str, **fields: Any) -> dict:
    """Build a fresh record for a list section with a newly assigned id."""
    try:
        model = LIST_ITEM_MODELS[section]
    except KeyError:
        raise ValueError(f"Unknown list section: {section!r}") from None
    fields.pop("id", None)
    return model(**fields).model_dump()


def has_content(doc: ResumeData) -> bool:
    """True once any identity field or any list section holds data."""
    info = doc.personal_info
    if any(getattr(info, name).strip() for name in IDENTITY_FIELDS):
        return True
    return any(getattr(doc, section) for section in LIST_ITEM_MODELS)


def missing_required(doc: ResumeData) -> list[str]:
    missing = []
    if not doc.personal_info.full_name.strip():
        missing.append("full_name")
    if not EMAIL_PATTERN.match(doc.personal_info.email.strip()):
        missing.append("email")
    return missing


def is_complete(doc: ResumeData) -> bool:
    """Export gate: non-blank full name and a plausible email address."""
    return not missing_required(doc)


def ensure_complete(doc: ResumeData) -> None:
    """Raise ResumeValidationError when the document cannot be exported."""
    missing = missing_required(doc)
    if missing:
        raise ResumeValidationError(missing)


def document_from_raw(raw: Any) -> ResumeData:
    """Rebuild a document from persisted data, defaulting field by field.

    Absent or invalid fields fall back to their defaults without affecting
    the others. List items that fail validation are rebuilt the same way
    and duplicate ids are reassigned.
    """
    if not isinstance(raw, dict):
        logger.warning("Stored resume data is %s, not an object; using defaults", type(raw).__name__)
        return ResumeData()

    values: dict[str, Any] = {}
    for name in ResumeData.model_fields:
        if name not in raw:
            logger.debug("Stored resume data has no %r; using default", name)
            continue
        if name in LIST_ITEM_MODELS:
            values[name] = _load_items(name, raw[name])
        else:
            loaded = _load_field(ResumeData, name, raw[name], name)
            if loaded is not _INVALID:
                values[name] = loaded
    return ResumeData(**values)


_INVALID = object()


def _load_field(model_cls: type[BaseModel], name: str, value: Any, where: str) -> Any:
    field_type = model_cls.model_fields[name].annotation
    if get_origin(field_type) is None and isinstance(field_type, type) and issubclass(field_type, BaseModel):
        return load_model(field_type, value, where)
    try:
        return getattr(model_cls.model_validate({name: value}), name)
    except ValidationError:
        logger.warning("Invalid stored value for %s; using default", where)
        return _INVALID


def load_model(model_cls: type[BaseModel], raw: Any, where: str = "") -> BaseModel:
    """Validate ``raw`` into ``model_cls`` keeping every field that validates."""
    where = where or model_cls.__name__
    if not isinstance(raw, dict):
        logger.warning("Invalid stored value for %s; using defaults", where)
        return model_cls()
    values: dict[str, Any] = {}
    for name in model_cls.model_fields:
        if name in raw:
            loaded = _load_field(model_cls, name, raw[name], f"{where}.{name}")
            if loaded is not _INVALID:
                values[name] = loaded
    return model_cls(**values)


def _load_items(section: str, raw: Any) -> list[BaseModel]:
    if not isinstance(raw, list):
        logger.warning("Stored %s is not a list; using empty list", section)
        return []
    model = LIST_ITEM_MODELS[section]
    items = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.warning("Dropping non-object entry %s[%d]", section, index)
            continue
        items.append(load_model(model, entry, f"{section}[{index}]"))
    return _unique_ids(items)


def _unique_ids(items: list) -> list:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            logger.debug("Reassigning duplicate id %s", item.id)
            item.id = new_id()
        seen.add(item.id)
    return items


def ensure_unique_ids(doc: ResumeData) -> ResumeData:
    """Give every list record a distinct id, keeping the first holder of each."""
    for section in LIST_ITEM_MODELS:
        _unique_ids(getattr(doc, section))
    return doc
