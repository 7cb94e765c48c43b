"""Core app configuration and logging."""

from cso_proxy.core.config import get_settings, settings
from cso_proxy.core.logging import configure_logging

__all__ = ["configure_logging", "get_settings", "settings"]
