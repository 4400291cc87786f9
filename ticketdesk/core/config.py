from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings; every field can be overridden with a ``TICKETDESK_`` variable."""

    model_config = SettingsConfigDict(env_prefix="TICKETDESK_", env_file=".env", extra="ignore")

    app_name: str = "Ticketdesk API"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=0, le=65535)

    # Spans are exported over OTLP/HTTP only when enabled; headers come from
    # the standard OTEL_EXPORTER_OTLP_HEADERS variable.
    otel_enabled: bool = False
    otel_endpoint: str | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
