from __future__ import annotations

import os
from functools import cache
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from recency.errors import ConfigError


Key = int | str


def _demo_entries() -> list[tuple[Key, Any]]:
    return [(1, "a"), (2, "b"), (3, "c")]


class CacheSettings(BaseModel):
    capacity: int = Field(default=3, ge=1)
    # applied in order as set() calls, last one ends up newest
    initial: list[tuple[Key, Any]] = Field(default_factory=_demo_entries)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, alias="json")

    model_config = ConfigDict(populate_by_name=True)


def _default_paths() -> list[Path]:
    return [Path("data/recency.yaml"), Path.home() / ".config" / "recency" / "config.yaml"]


def _read_mapping(path: Path) -> dict[str, Any]:
    loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"YAML at {path} must define a mapping at the root")
    return loaded


def _env(name: str) -> str | None:
    """Value of env var *name*, or None when unset or empty."""
    value = os.getenv(name)
    return value or None


class AppConfig(BaseSettings):
    """
    Application settings.

    Source of truth:
      1) YAML file (structured config)
      2) Flat RECENCY_* env overrides, merged explicitly in from_yaml().
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
    )

    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """
        Load config from YAML, then overlay env.
        Search order if path is not provided:
          ./data/recency.yaml
          ~/.config/recency/config.yaml
        """
        if path is not None:
            source = path if path.exists() else None
        else:
            source = next((p for p in _default_paths() if p.exists()), None)

        cfg = cls.model_validate(_read_mapping(source) if source else {})

        capacity_raw = _env("RECENCY_CAPACITY")
        if capacity_raw is not None:
            try:
                capacity = int(capacity_raw.strip())
            except ValueError as e:
                raise ConfigError(f"RECENCY_CAPACITY must be an integer, got {capacity_raw!r}") from e
            # re-validate so ge=1 applies to the override too
            cfg.cache = CacheSettings(capacity=capacity, initial=cfg.cache.initial)

        level = _env("RECENCY_LOG_LEVEL")
        if level is not None:
            cfg.logging.level = level.strip().upper()

        json_raw = _env("RECENCY_LOG_JSON")
        if json_raw is not None:
            truthy = {"1", "true", "yes", "on"}
            cfg.logging.json_output = json_raw.strip().lower() in truthy

        return cfg


@cache
def get_settings() -> AppConfig:
    return AppConfig.from_yaml()


__all__ = [
    "AppConfig",
    "CacheSettings",
    "LoggingSettings",
    "get_settings",
]
