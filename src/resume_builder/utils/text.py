"""Display helpers shared by the renderers and exporters."""

from __future__ import annotations

import re
from datetime import date

PRESENT = "Present"

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?$")


def format_date(value: str) -> str:
    """Render ``YYYY-MM[-DD]`` as ``Mon YYYY``; other text is returned as-is."""
    value = (value or "").strip()
    match = _ISO_DATE.match(value)
    if not match:
        return value
    year, month = int(match.group(1)), int(match.group(2))
    if year < 1 or not 1 <= month <= 12:
        return value
    return date(year, month, 1).strftime("%b %Y")


def date_range(start: str, end: str, current: bool) -> str:
    """``Jan 2020 - Present`` style range; empty when both ends are blank."""
    start_text = format_date(start)
    end_text = PRESENT if current else format_date(end)
    if not start_text and not end_text:
        return ""
    if not start_text:
        return end_text
    if not end_text:
        return start_text
    return f"{start_text} - {end_text}"


def paragraphs(text: str) -> list[str]:
    """Split newline-delimited free text into non-blank paragraphs."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def split_csv(text: str) -> list[str]:
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def safe_filename(full_name: str, extension: str) -> str:
    """``Ada_Lovelace_Resume.pdf`` from a person's name."""
    stem = re.sub(r"[^\w\-]+", "_", (full_name or "").strip(), flags=re.UNICODE).strip("_")
    stem = f"{stem}_Resume" if stem else "Resume"
    return f"{stem}.{extension.lstrip('.')}"
