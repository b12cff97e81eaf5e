"""Publisher configuration via Pydantic Settings.

All configuration is loaded from environment variables (or a ``.env`` file).
CLI options take precedence over these values.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GALLERY_SOURCE = "https://www.nuget.org"


class Settings(BaseSettings):
    """Publisher settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gallery
    gallery_source: str = Field(
        default=DEFAULT_GALLERY_SOURCE,
        description="Gallery source URL (bare host or fully-qualified package endpoint)",
    )
    gallery_api_key: str | None = Field(
        default=None,
        description="API key sent in the X-NuGet-ApiKey header",
    )
    gallery_user_agent: str | None = Field(
        default=None,
        description="User-Agent header value (omitted when unset or empty)",
    )
    gallery_timeout: float = Field(
        default=300.0,
        description="Read/write timeout in seconds; uploads use it for the connect timeout too",
        gt=0,
    )

    @field_validator("gallery_source", mode="before")
    @classmethod
    def validate_gallery_source(cls, v: str | None) -> str:
        v = (v or "").strip()
        if not v:
            return DEFAULT_GALLERY_SOURCE
        if not v.startswith(("http://", "https://")):
            msg = "gallery_source must be an http(s) URL"
            raise ValueError(msg)
        return v

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit publish/retract outcome records as JSON lines on stderr",
    )


def get_settings() -> Settings:
    """Create and return publisher settings."""
    return Settings()
