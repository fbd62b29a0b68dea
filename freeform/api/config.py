"""
config.py — Environment configuration for the layout API.

Snapping and collision tunables default to the values in ``freeform.units``
and can be overridden per deployment through environment variables.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from freeform.units import (
    ALIGNMENT_TOLERANCE_PX,
    COLLISION_STEP_PX,
    GRID_SIZE_PX,
    SNAP_THRESHOLD_PX,
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# Load .env file if it exists
def _load_dotenv():
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value


_load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.app_name: str = os.environ.get("APP_NAME", "Freeform Canvas")
        self.app_version: str = os.environ.get("APP_VERSION", "0.1.0")

        # Server settings
        self.host: str = os.environ.get("HOST", "0.0.0.0")
        self.port: int = int(os.environ.get("PORT", "8000"))
        self.debug: bool = os.environ.get("DEBUG", "false").lower() == "true"
        self.api_prefix: str = os.environ.get("API_PREFIX", "/api/v1")
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()

        # CORS settings
        self.cors_origins: list = os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
        ).split(",")

        # Geometry tunables (logical pixels)
        self.grid_size: float = float(os.environ.get("FREEFORM_GRID_SIZE", GRID_SIZE_PX))
        self.snap_threshold: float = float(os.environ.get("FREEFORM_SNAP_THRESHOLD", SNAP_THRESHOLD_PX))
        self.alignment_tolerance: float = float(
            os.environ.get("FREEFORM_ALIGNMENT_TOLERANCE", ALIGNMENT_TOLERANCE_PX)
        )
        self.collision_step: int = int(os.environ.get("FREEFORM_COLLISION_STEP", COLLISION_STEP_PX))


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
