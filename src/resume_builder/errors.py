"""Error types raised by the document engine.

Nothing here is fatal to the editing session: a failure is scoped to one
field, one load, or one export attempt.
"""

from __future__ import annotations


class ResumeBuilderError(Exception):
    """Base class for resume-builder errors."""


class ResumeValidationError(ResumeBuilderError):
    """Required identity fields are missing; blocks export only."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Resume is incomplete, missing: {', '.join(self.missing)}")


class StorageParseError(ResumeBuilderError):
    """A persisted blob could not be decoded."""


class ExternalServiceError(ResumeBuilderError):
    """The text-suggestion service failed."""


class ImageDecodeFailure(ResumeBuilderError):
    """An uploaded image could not be read or decoded."""


class PathError(ResumeBuilderError, KeyError):
    """A path cannot be written (e.g. descends into a scalar)."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
