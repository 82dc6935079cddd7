"""Upstream data sources for geocoding, weather and air quality."""

from .base import CallableEnvironmentDataSource, EnvironmentDataSource
from .factory import build_data_source
from .openweather_client import OpenWeatherClient, build_session
from .payloads import (
    AirPollutionEntry,
    AirPollutionPayload,
    CurrentConditionsPayload,
    DailyEntry,
    DailyForecastPayload,
    GeoCandidate,
    PostalGeoResult,
)

__all__ = [
    "build_data_source",
    "build_session",
    "EnvironmentDataSource",
    "CallableEnvironmentDataSource",
    "OpenWeatherClient",
    "AirPollutionEntry",
    "AirPollutionPayload",
    "CurrentConditionsPayload",
    "DailyEntry",
    "DailyForecastPayload",
    "GeoCandidate",
    "PostalGeoResult",
]
