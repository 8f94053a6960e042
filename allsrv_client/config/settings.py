"""Pydantic Settings for the allsrv client.

All environment variables use the ALLSRV_ prefix.
Example: ALLSRV_ADDR=http://localhost:8091, ALLSRV_ORIGIN=my-service
"""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DISTRIBUTION_NAME = "allsrv-client"
SDK_NAME = "allsrvc"
REPO_REFERENCE = "github.com/jsteenb2/allsrv"

# 1 MiB cap on response bodies
DEFAULT_MAX_RESPONSE_BYTES = 1 << 20


@lru_cache
def resolve_version() -> str:
    """Return the installed SDK version, or "" when no metadata is available."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return ""


class ClientSettings(BaseSettings):
    """Immutable client configuration validated from arguments or environment."""

    # Service
    addr: str  # e.g. "http://localhost:8091"
    origin: str  # Origin header value

    # SDK identity
    sdk_version: str = Field(default_factory=resolve_version)

    # HTTP
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_response_bytes: int = Field(default=DEFAULT_MAX_RESPONSE_BYTES, ge=1)

    # Logging; applied by configure_logging(settings.log_level), not by the client
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="ALLSRV_", frozen=True)

    @property
    def user_agent(self) -> str:
        return f"{SDK_NAME} ({REPO_REFERENCE}) / {self.sdk_version}".rstrip()
