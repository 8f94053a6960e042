"""Configuration module: client settings and version resolution."""

from allsrv_client.config.settings import ClientSettings, resolve_version

__all__ = [
    "ClientSettings",
    "resolve_version",
]
