"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Media type Harbor uses for the native vulnerability report (module-level so tests can use it).
DEFAULT_VULNERABILITY_REPORT_MIME_TYPE = (
    "application/vnd.security.vulnerability.report; version=1.1"
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CSO_",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Registry backend serving the CSO endpoints (see cso_proxy.adapters)
    ADAPTER: str = "harbor"

    # Upstream registry: when unset, https://<request host> is used
    HARBOR_URL: str | None = None
    REQUEST_TIMEOUT_SEC: float = 30.0
    # Empty string sends no X-Accept-Vulnerabilities header (Harbor's default report)
    VULNERABILITY_REPORT_MIME_TYPE: str = DEFAULT_VULNERABILITY_REPORT_MIME_TYPE
    # Serve /image/{imageid}/security and advertise it; off unless opted in
    IMAGE_SECURITY_ENABLED: bool = False

    METRICS_ENABLED: bool = True

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(
                "LOG_LEVEL must be a logging level name (e.g. DEBUG, INFO, WARNING)"
            )
        return level

    @field_validator("ADAPTER")
    @classmethod
    def validate_adapter(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("ADAPTER must be set and non-empty")
        return v.strip().lower()

    @field_validator("HARBOR_URL")
    @classmethod
    def validate_harbor_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        s = v.strip().rstrip("/").lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "HARBOR_URL must use http or https (e.g. https://harbor.example.com)"
            )
        return v.strip().rstrip("/")

    @field_validator("REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        if v <= 0 or v > 300:
            raise ValueError(
                "REQUEST_TIMEOUT_SEC must be greater than 0 and at most 300"
            )
        return v

    @field_validator("VULNERABILITY_REPORT_MIME_TYPE")
    @classmethod
    def validate_mime_type(cls, v: str) -> str:
        return (v or "").strip()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
