"""AI text suggestions: prompt construction and result parsing."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from resume_builder.clients.ai_client import AIClient
from resume_builder.path_store import PathLike, get_in, parse_path
from resume_builder.utils.text import split_csv

logger = logging.getLogger(__name__)


class SuggestionKind(str, Enum):
    EXPERIENCE_DESCRIPTION = "experience_description"
    EDUCATION_DESCRIPTION = "education_description"
    SKILLS = "skills"
    SUMMARY = "summary"


SYSTEM_PROMPT = (
    "You write concise, professional resume content. "
    "Return only the requested text with no preamble, headings or bullet symbols."
)

PROMPTS: dict[SuggestionKind, str] = {
    SuggestionKind.EXPERIENCE_DESCRIPTION: """\
Write a resume description for a {job_title} role at {company}.
{current}
Requirements:
- 3-5 achievements, one per line
- Start each line with an action verb and quantify results where possible
- Keep it professional and concise
- Do not include bullet symbols""",
    SuggestionKind.EDUCATION_DESCRIPTION: """\
Write a brief academic description for {degree} at {school}.
{current}
Requirements:
- 1-3 lines covering relevant coursework, projects or achievements
- Keep it concise and professional
- Do not include bullet symbols""",
    SuggestionKind.SKILLS: """\
Suggest 8-12 technical and soft skills for a resume of a {job_title}
with experience as: {experience}.
Existing skills (do not repeat): {existing}.
Return only the skills as a comma-separated list.""",
    SuggestionKind.SUMMARY: """\
Write a 2-3 sentence professional summary for {name}, whose roles include {experience}
and whose key skills are {skills}.
{current}
Return only the summary text.""",
}

MAX_TOKENS: dict[SuggestionKind, int] = {
    SuggestionKind.EXPERIENCE_DESCRIPTION: 300,
    SuggestionKind.EDUCATION_DESCRIPTION: 200,
    SuggestionKind.SKILLS: 150,
    SuggestionKind.SUMMARY: 200,
}


def _improve(current: str) -> str:
    current = (current or "").strip()
    return f"Current text to improve:\n{current}\n" if current else ""


def build_context(tree: dict, kind: SuggestionKind, target_path: PathLike) -> dict[str, str]:
    """Collect the prompt fields for ``kind`` from the document tree.

    For descriptions, ``target_path`` points at the description field and
    its parent record supplies the title and organisation.
    """
    segments = parse_path(target_path)
    titles = [exp.get("job_title", "") for exp in tree.get("experience", []) if exp.get("job_title")]
    experience = ", ".join(titles) or "general professional work"

    if kind is SuggestionKind.EXPERIENCE_DESCRIPTION:
        record = get_in(tree, segments[:-1], {}) or {}
        return {
            "job_title": record.get("job_title") or "professional",
            "company": record.get("company") or "a company",
            "current": _improve(get_in(tree, segments, "")),
        }
    if kind is SuggestionKind.EDUCATION_DESCRIPTION:
        record = get_in(tree, segments[:-1], {}) or {}
        return {
            "degree": record.get("degree") or "a degree",
            "school": record.get("school") or "a university",
            "current": _improve(get_in(tree, segments, "")),
        }
    if kind is SuggestionKind.SKILLS:
        existing = [s.get("name", "") for s in get_in(tree, segments, []) or [] if s.get("name")]
        return {
            "job_title": titles[0] if titles else "professional",
            "experience": experience,
            "existing": ", ".join(existing) or "none",
        }
    skills = [s.get("name", "") for s in tree.get("skills", []) if s.get("name")]
    return {
        "name": get_in(tree, "personal_info.full_name", "") or "the candidate",
        "experience": experience,
        "skills": ", ".join(skills[:10]) or "not listed",
        "current": _improve(get_in(tree, segments, "")),
    }


def build_prompt(kind: SuggestionKind, context: dict[str, Any]) -> str:
    return PROMPTS[kind].format(**context)


def parse_result(kind: SuggestionKind, text: str) -> str | list[str]:
    """Skills come back as a list of names; everything else as text."""
    if kind is SuggestionKind.SKILLS:
        return split_csv(text.replace("\n", ","))
    lines = [line.strip().lstrip("-•*").strip() for line in text.strip().splitlines()]
    return "\n".join(line for line in lines if line)


async def generate_suggestion(
    client: AIClient,
    kind: SuggestionKind | str,
    context: dict[str, Any],
) -> str | list[str]:
    """One call to the suggestion service; raises ExternalServiceError on failure."""
    kind = SuggestionKind(kind)
    response = await client.generate(
        build_prompt(kind, context), system=SYSTEM_PROMPT, max_tokens=MAX_TOKENS[kind]
    )
    result = parse_result(kind, response.text)
    logger.info("Suggestion %s: %d output tokens", kind.value, response.output_tokens)
    return result
