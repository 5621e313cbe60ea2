"""
PullPreview License Configuration
Environment-driven settings for the license codec and its runtime check
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .licensing.boundary import DEFAULT_BOUNDARY_LABEL, normalize_label
from .licensing.exceptions import FramingError
from .licensing.key_source import DEFAULT_PRIVATE_KEY_FILE, DEFAULT_PUBLIC_KEY_FILE
from .licensing.models import DEFAULT_ALLOWED_ATTRIBUTES, DEFAULT_DATE_ATTRIBUTES
from .licensing.service import DEFAULT_ENFORCED_COMMANDS


class Settings(BaseSettings):
    """Application settings, read from ``PULLPREVIEW_*`` environment variables"""

    # License source (PULLPREVIEW_LICENSE)
    license: Optional[str] = Field(default=None, description="Encrypted license text")

    # Key source
    key_dir: Path = Field(default=Path("."), description="Directory holding the license key files")
    private_key_file: str = DEFAULT_PRIVATE_KEY_FILE
    public_key_file: str = DEFAULT_PUBLIC_KEY_FILE

    # Codec
    boundary_label: str = DEFAULT_BOUNDARY_LABEL
    allowed_attributes: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_ATTRIBUTES))
    date_attributes: List[str] = Field(default_factory=lambda: list(DEFAULT_DATE_ATTRIBUTES))

    # Commands whose execution requires an unexpired license
    enforced_commands: List[str] = Field(default_factory=lambda: list(DEFAULT_ENFORCED_COMMANDS))

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PULLPREVIEW_",
        extra="ignore",
    )

    @field_validator("boundary_label")
    @classmethod
    def boundary_label_must_be_valid(cls, v: str) -> str:
        try:
            return normalize_label(v)
        except FramingError as e:
            raise ValueError(e.message) from e

    @field_validator("log_level")
    @classmethod
    def log_level_must_exist(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("allowed_attributes")
    @classmethod
    def allowed_attributes_must_include_type(cls, v: List[str]) -> List[str]:
        if "type" not in v:
            raise ValueError("allowed_attributes must include 'type'")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()
