"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

BYPASS_ENV_VAR = "BYPASS_LIMITS"


@dataclass(frozen=True)
class PipelineConfig:
    short_char_budget: int = 50
    bypass_plan_limits: bool = False

    def __post_init__(self) -> None:
        if not 10 <= self.short_char_budget <= 200:
            raise ValueError(
                f"short_char_budget must be between 10 and 200, got {self.short_char_budget}"
            )

    @property
    def limits_bypassed(self) -> bool:
        """Config flag or BYPASS_LIMITS=true in the environment."""
        if self.bypass_plan_limits:
            return True
        return os.environ.get(BYPASS_ENV_VAR, "").strip().lower() == "true"


@dataclass(frozen=True)
class CatalogConfig:
    presets_path: str | None = None  # None -> bundled presets.yaml


@dataclass(frozen=True)
class UsageConfig:
    enabled: bool = True
    db_path: str = "~/.makeyourtext/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class BatchConfig:
    max_templates: int = 30

    def __post_init__(self) -> None:
        if not 1 <= self.max_templates <= 100:
            raise ValueError(
                f"max_templates must be between 1 and 100, got {self.max_templates}"
            )


@dataclass(frozen=True)
class AppConfig:
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
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
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        pipeline=PipelineConfig(**raw.get("pipeline", {})),
        catalog=CatalogConfig(**raw.get("catalog", {})),
        usage=UsageConfig(**raw.get("usage", {})),
        batch=BatchConfig(**raw.get("batch", {})),
    )
