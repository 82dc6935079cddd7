"""Typed shapes for the OpenWeatherMap responses the pipeline reads.

Only consumed fields are declared; anything else the provider sends is
ignored. Fields the provider may omit are Optional so a partial body still
validates, while a body missing a required block fails validation up front.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GeoCandidate(_RawModel):
    """One result from the geocode-by-name endpoint."""
    name: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    state: Optional[str] = None
    country: Optional[str] = None


class PostalGeoResult(_RawModel):
    """Single object returned by the geocode-by-postal-code endpoint."""
    zip: Optional[str] = None
    name: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    country: Optional[str] = None


class WeatherDescription(_RawModel):
    main: Optional[str] = None
    description: Optional[str] = None


class CurrentWeather(_RawModel):
    temp: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    weather: List[WeatherDescription] = Field(default_factory=list)


class ProviderAlert(_RawModel):
    sender_name: Optional[str] = None
    event: Optional[str] = None
    description: Optional[str] = None


class DailyTemperature(_RawModel):
    min: float
    max: float


class AqiMain(_RawModel):
    aqi: Optional[int] = None


class PollutantComponents(_RawModel):
    pm2_5: Optional[float] = None
    o3: Optional[float] = None


class AirPollutionEntry(_RawModel):
    """One reading from the air-pollution endpoint's `list` array."""
    dt: Optional[int] = None
    main: AqiMain = Field(default_factory=AqiMain)
    components: Optional[PollutantComponents] = None


class AirPollutionPayload(_RawModel):
    list: List[AirPollutionEntry] = Field(default_factory=list)


class DailyEntry(_RawModel):
    """One day of the One Call `daily` array."""
    dt: int
    temp: DailyTemperature
    weather: List[WeatherDescription] = Field(default_factory=list)
    air_pollution: Optional[AirPollutionPayload] = None


class CurrentConditionsPayload(_RawModel):
    """One Call bundle as requested for the current-conditions path."""
    current: CurrentWeather
    alerts: List[ProviderAlert] = Field(default_factory=list)


class DailyForecastPayload(_RawModel):
    """One Call bundle as requested for the forecast path."""
    daily: List[DailyEntry]
