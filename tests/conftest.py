"""Shared test fixtures."""

from __future__ import annotations

import pytest

from resume_builder.models.customization import CustomizationOptions
from resume_builder.models.resume import (
    EducationItem,
    ExperienceItem,
    HobbyItem,
    PersonalInfo,
    ProjectItem,
    PublicLinks,
    ResumeData,
    SkillItem,
)
from resume_builder.storage.local_store import LocalStore
from resume_builder.themes import get_theme


@pytest.fixture
def empty_doc() -> ResumeData:
    return ResumeData()


@pytest.fixture
def sample_doc() -> ResumeData:
    return ResumeData(
        personal_info=PersonalInfo(
            full_name="Ada Lovelace",
            email="ada@example.com",
            phone="+44 20 7946 0000",
            location="London",
            summary="Mathematician and first programmer.\nWrites notes longer than the paper.",
        ),
        public_links=PublicLinks(github="github.com/ada", website="https://ada.dev"),
        experience=[
            ExperienceItem(
                id="exp-1",
                job_title="Analyst",
                company="Analytical Engine Co.",
                start_date="2019-01",
                current=True,
                description="Translated Menabrea's article\nAdded Note G with the first algorithm",
            ),
            ExperienceItem(
                id="exp-2",
                job_title="Correspondent",
                company="Royal Society",
                start_date="2015-06",
                end_date="2018-12",
            ),
        ],
        education=[
            EducationItem(id="edu-1", degree="Private tutoring", school="Home", start_year="2011", end_year="2015"),
        ],
        skills=[
            SkillItem(id="sk-1", name="Mathematics", category="Technical", level="Expert"),
            SkillItem(id="sk-2", name="Writing", category="Soft", level="Intermediate"),
        ],
        projects=[
            ProjectItem(id="pr-1", name="Bernoulli numbers", technologies="Engine, Punch cards"),
        ],
        hobbies=[HobbyItem(id="h-1", name="Horse riding")],
    )


@pytest.fixture
def options() -> CustomizationOptions:
    return CustomizationOptions()


@pytest.fixture
def theme():
    return get_theme("professional-standard")


@pytest.fixture
def store(tmp_path) -> LocalStore:
    return LocalStore(db_path=tmp_path / "session.db")

