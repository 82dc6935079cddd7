"""Factory helpers for choosing an upstream data source at startup."""

from __future__ import annotations

from app import config
from app.data_sources.base import EnvironmentDataSource
from app.data_sources.openweather_client import OpenWeatherClient
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "openweathermap"


def build_data_source(settings: config.Settings | None = None) -> EnvironmentDataSource:
    """Instantiate the configured data source; raises ConfigurationError without a key."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source in ("openweathermap", "owm"):
        logger.info(
            "Using OpenWeatherMap data source",
            extra={"geo_base_url": mask_url_secrets(settings.geo_base_url),
                   "data_base_url": mask_url_secrets(settings.data_base_url)},
        )
        return OpenWeatherClient(settings)

    raise ValueError(f"Unknown data source '{source}'")
