"""Runtime settings loaded from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "template_files"

MAX_TEX_SIZE = 50 * 1024 * 1024
MAX_ZIP_SIZE = 100 * 1024 * 1024
CONVERSION_TIMEOUT = 5 * 60


class HubSettings(BaseModel):
    template_dir: Path = Field(DEFAULT_TEMPLATE_DIR, description="Directory holding pandoc metadata templates")
    pandoc_path: str = Field("pandoc", description="Pandoc executable name or path")
    conversion_timeout: float = Field(CONVERSION_TIMEOUT, gt=0, description="Seconds before pandoc is killed")
    max_tex_size: int = Field(MAX_TEX_SIZE, gt=0)
    max_zip_size: int = Field(MAX_ZIP_SIZE, gt=0)
    log_level: Optional[str] = None

    @field_validator("pandoc_path")
    @classmethod
    def non_empty_executable(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("pandoc_path must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def uppercase_level(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().upper() if value else None


def load_settings(env_file: str | os.PathLike | None = None) -> HubSettings:
    """Build settings from ``LATEX_HUB_*`` variables, reading ``.env`` first."""

    load_dotenv(env_file)
    values = {
        "template_dir": os.getenv("LATEX_HUB_TEMPLATE_DIR"),
        "pandoc_path": os.getenv("LATEX_HUB_PANDOC_PATH"),
        "conversion_timeout": os.getenv("LATEX_HUB_CONVERSION_TIMEOUT"),
        "max_tex_size": os.getenv("LATEX_HUB_MAX_TEX_SIZE"),
        "max_zip_size": os.getenv("LATEX_HUB_MAX_ZIP_SIZE"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    return HubSettings(**{key: value for key, value in values.items() if value is not None})
