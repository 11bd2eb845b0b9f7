"""Configuration management using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TwkbSettings(BaseSettings):
    """Codec defaults loaded from ``TWKB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TWKB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Write precision (decimal places per axis)
    digits_xy: int = Field(default=5, ge=-8, le=7)
    digits_z: int = Field(default=0, ge=0, le=7)
    digits_m: int = Field(default=0, ge=0, le=7)

    # Optional header extensions
    include_size: bool = False
    include_bounding_box: bool = False

    # Logging
    log_level: str = "WARNING"


settings = TwkbSettings()
