from __future__ import annotations

import os

from pydantic import BaseModel, field_validator

from datapkg.resource import ResourceFactory, get_factory

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Runtime settings, read from ``DATAPKG_*`` environment variables."""

    resource_factory: str = "validated"
    log_level: str = "WARNING"
    json_indent: int = 2

    @field_validator("resource_factory")
    @classmethod
    def _known_factory(cls, v: str) -> str:
        get_factory(v)
        return v.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            resource_factory=os.environ.get("DATAPKG_RESOURCE_FACTORY", "validated"),
            log_level=os.environ.get("DATAPKG_LOG_LEVEL", "WARNING"),
            json_indent=os.environ.get("DATAPKG_JSON_INDENT", "2"),
        )

    def factory(self) -> ResourceFactory:
        return get_factory(self.resource_factory)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
