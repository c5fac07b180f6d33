"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.resume-builder/session.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class ExportConfig:
    page_size: str = "A4"
    margin_top_mm: int = 18
    margin_side_mm: int = 16
    output_dir: str = "./output"

    def __post_init__(self) -> None:
        if self.page_size not in ("A4", "Letter"):
            raise ValueError(f"page_size must be A4 or Letter, got {self.page_size!r}")
        for name in ("margin_top_mm", "margin_side_mm"):
            value = getattr(self, name)
            if not 0 <= value <= 50:
                raise ValueError(f"{name} must be between 0 and 50, got {value}")


@dataclass(frozen=True)
class LayoutConfig:
    description_threshold: int = 500
    education_threshold: int = 2
    skills_threshold: int = 10

    def __post_init__(self) -> None:
        if self.description_threshold < 1:
            raise ValueError(
                f"description_threshold must be positive, got {self.description_threshold}"
            )
        if self.education_threshold < 0:
            raise ValueError(f"education_threshold must be >= 0, got {self.education_threshold}")
        if self.skills_threshold < 0:
            raise ValueError(f"skills_threshold must be >= 0, got {self.skills_threshold}")


@dataclass(frozen=True)
class AIConfig:
    model: str = "claude-haiku-4-5-20251001"
    timeout: int = 60
    max_tokens: int = 400
    temperature: float = 0.7

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"timeout must be between 1 and 600, got {self.timeout}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")


@dataclass(frozen=True)
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    ai: AIConfig = field(default_factory=AIConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        storage=StorageConfig(**raw.get("storage", {})),
        export=ExportConfig(**raw.get("export", {})),
        layout=LayoutConfig(**raw.get("layout", {})),
        ai=AIConfig(**raw.get("ai", {})),
    )
