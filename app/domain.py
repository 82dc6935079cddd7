"""Domain vocabulary and response schemas for environmental snapshots.

These models are the stable contract between the conditions pipeline and its
adapters (FastAPI routes, serverless handler). Attribute names are
snake_case; JSON uses the camelCase names the EcoWatch UI reads
(`temperatureF`, `windSpeedMph`, `expectedAqiStatus`, ...). No lookup or
mapping logic lives here.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


# Placeholder shown for pollutant fields when no air-quality reading exists.
UNAVAILABLE_VALUE = "--"


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling and by-name population."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class LocationKind(str, Enum):
    """Which query parameter the location came from."""
    CITY = "city"
    POSTAL_CODE = "postalCode"


class AqiStatus(str, Enum):
    """Air-quality label derived from the provider's 1-5 index."""
    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY = "Unhealthy"
    UNSAFE = "Unsafe"
    HAZARDOUS = "Hazardous"
    UNKNOWN = "Unknown"
    UNAVAILABLE = "Unavailable"


AQI_STATUS_BY_INDEX: dict[int, AqiStatus] = {
    1: AqiStatus.GOOD,
    2: AqiStatus.MODERATE,
    3: AqiStatus.UNHEALTHY,
    4: AqiStatus.UNSAFE,
    5: AqiStatus.HAZARDOUS,
}


class LocationQuery(_StrictBaseModel):
    """Raw user input plus the path it should be resolved through."""
    raw: str
    kind: LocationKind


class ResolvedLocation(_StrictBaseModel):
    """Coordinates and display name produced once per request."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    latitude: float
    longitude: float
    display_name: str
    source_kind: LocationKind


class WeatherSnapshot(_StrictBaseModel):
    temperature_f: float | None = Field(default=None, alias="temperatureF")
    condition: str = ""
    humidity: float | None = None
    wind_speed_mph: float | None = Field(default=None, alias="windSpeedMph")


class PollutantDetails(_StrictBaseModel):
    pm25: Union[float, str] = UNAVAILABLE_VALUE
    ozone: Union[float, str] = UNAVAILABLE_VALUE


class AirQualityReading(_StrictBaseModel):
    """Current AQI reading; `aqi` is None whenever status is Unavailable."""
    aqi: int | None = None
    status: AqiStatus = AqiStatus.UNAVAILABLE
    main_pollutant: str = Field(default=UNAVAILABLE_VALUE, alias="mainPollutant")
    details: PollutantDetails = Field(default_factory=PollutantDetails)


class AlertStatus(_StrictBaseModel):
    is_active: bool = Field(default=False, alias="isActive")
    level: str = "None"
    description: str = ""


class EnvironmentalSnapshot(_StrictBaseModel):
    """Current-conditions response for one location."""
    location: str
    last_updated: datetime = Field(alias="lastUpdated")
    weather: WeatherSnapshot
    air_quality: AirQualityReading = Field(alias="airQuality")
    alert: AlertStatus


class DailyWeather(_StrictBaseModel):
    high_f: int = Field(alias="highF")
    low_f: int = Field(alias="lowF")
    condition: str = ""


class ForecastDay(_StrictBaseModel):
    """One day of the short-range forecast."""
    date: str
    day_of_week: str = Field(alias="dayOfWeek")
    weather: DailyWeather
    expected_aqi_status: AqiStatus = Field(alias="expectedAqiStatus")
