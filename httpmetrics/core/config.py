"""Application settings, read from ``HTTPMETRICS_*`` environment variables."""

import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_NAMESPACE_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*\Z")


class Settings(BaseSettings):
    """Runtime configuration for the metrics layer."""

    model_config = SettingsConfigDict(
        env_prefix="HTTPMETRICS_",
        env_file=".env",
        extra="ignore",
    )

    METRICS_NAMESPACE: str = "app"
    METRICS_PATH: str = "/metrics"
    METRICS_EXCLUDED_PATHS: list[str] = []

    # Sidecar server, serves the same registry on its own port.
    METRICS_SIDECAR_ENABLED: bool = False
    METRICS_HOST: str = "0.0.0.0"
    METRICS_PORT: int = 9090

    @field_validator("METRICS_PATH")
    @classmethod
    def _path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("METRICS_PATH must start with '/'")
        return value

    @field_validator("METRICS_NAMESPACE")
    @classmethod
    def _namespace_is_identifier(cls, value: str) -> str:
        if value and not _NAMESPACE_RE.match(value):
            raise ValueError(
                "METRICS_NAMESPACE must start with a letter or '_' and contain only ASCII letters, digits and '_'"
            )
        return value


settings = Settings()
