"""Configuration for ga4lens.

settings come from the environment (or a .env file next to where the server
is started). names match what the node version of this gateway used, so an
existing deployment's env carries over unchanged.
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ga4lens.errors import ConfigurationError


class Settings(BaseSettings):
    """Gateway settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # upstream
    property_id: str | None = Field(
        default=None, validation_alias=AliasChoices("PROPERTY_ID", "GA4_PROPERTY_ID")
    )
    credentials_path: str | None = Field(
        default=None, validation_alias="GOOGLE_APPLICATION_CREDENTIALS"
    )
    upstream_timeout: float | None = Field(default=30.0, validation_alias="UPSTREAM_TIMEOUT")

    # server
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=4000, validation_alias="PORT")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # query behaviour
    default_days: int = Field(default=28, ge=1, validation_alias="DEFAULT_DAYS")
    strict_limits: bool = Field(default=True, validation_alias="STRICT_LIMITS")

    @field_validator("property_id")
    @classmethod
    def validate_property_id(cls, v: str | None) -> str | None:
        """GA4 property ids are plain numbers, e.g. "123456789"."""
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not v.isdigit():
            raise ValueError(f"PROPERTY_ID must be numeric, got {v!r}")
        return v

    def require_property_id(self) -> str:
        """Return the property id or fail - we can't serve without one."""
        if not self.property_id:
            raise ConfigurationError("Missing PROPERTY_ID env var")
        return self.property_id

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

