from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    storage_backend: Literal["sqlite", "json"] = "sqlite"
    database_url: str = "sqlite:///petmed.db"
    data_dir: str = "./data"
    export_dir: str = "./exports"
    export_extension: str = "xlsx"
    export_sheet_name: str = "Records"
    log_level: str = "INFO"
    vets_default: str = "Isadora,Thalles"
    # Newline separated medicine names; the built-in catalog is used when unset
    medicine_catalog_file: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="PETMED_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("database_url")
    @classmethod
    def ensure_local_database(cls, value: str) -> str:
        if not value.startswith("sqlite"):
            raise ValueError("Only sqlite database URLs are supported")
        return value

    @field_validator("log_level")
    @classmethod
    def ensure_known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("export_extension")
    @classmethod
    def strip_extension_dot(cls, value: str) -> str:
        return value.strip().lstrip(".") or "xlsx"

    @property
    def vets_default_list(self) -> list[str]:
        """Convert vets_default string to list"""
        return [v.strip() for v in self.vets_default.split(",") if v.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
