from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HTMLKitSettings(BaseSettings):
    """Settings for the view provider.

    Every field can be set through an ``HTMLKIT_``-prefixed environment
    variable or a ``.env`` file in the working directory.
    """

    localization_path: Path | None = Field(
        default=None, description="Directory holding <locale>.json localization tables"
    )
    default_locale: str = Field(default="en", min_length=1, description="Locale used when none is requested")
    template_directory: Path | None = Field(
        default=None, description="Directory searched for views declaring a template_name"
    )
    autoescape: bool = Field(default=True, description="HTML-escape interpolated values")
    log_level: str = Field(default="INFO", description="Logging level for setup_logging")

    model_config = SettingsConfigDict(
        env_prefix="HTMLKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("default_locale", mode="after")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        """Ensure default_locale is not blank."""
        v = v.strip()
        if not v:
            raise ValueError("default_locale cannot be empty")
        return v

    @field_validator("localization_path", "template_directory", mode="after")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ~ in configured directories."""
        if v is None:
            return v
        return v.expanduser()

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v


# Singleton settings instance (cached for performance)
_settings_instance: HTMLKitSettings | None = None


def get_settings() -> HTMLKitSettings:
    """Get the cached HTMLKitSettings instance.

    The environment and .env file are read once per process.

    Returns:
        Cached HTMLKitSettings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = HTMLKitSettings()
    return _settings_instance
