"""HTTP surface for the freeform layout engine."""

from freeform.api.config import Settings, configure_logging, get_settings
from freeform.api.main import app, create_app

__all__ = [
    "app",
    "configure_logging",
    "create_app",
    "get_settings",
    "Settings",
]
