"""Interfaces and helpers for upstream environment data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from app.data_sources.payloads import (
    AirPollutionPayload,
    CurrentConditionsPayload,
    DailyForecastPayload,
    GeoCandidate,
    PostalGeoResult,
)


class EnvironmentDataSource(Protocol):
    """Anything that can geocode a location and provide weather and air-quality data."""

    def geocode_direct(self, query: str, *, limit: int = 1) -> List[GeoCandidate]:
        """Return geocode candidates for a city-style query."""
        ...

    def geocode_postal(self, zip_query: str) -> Optional[PostalGeoResult]:
        """Return the location for a "postal,country" query, or None."""
        ...

    def fetch_current_bundle(self, latitude: float, longitude: float) -> CurrentConditionsPayload:
        """Return current conditions plus active alerts."""
        ...

    def fetch_daily_bundle(self, latitude: float, longitude: float) -> DailyForecastPayload:
        """Return the multi-day forecast array."""
        ...

    def fetch_air_pollution(self, latitude: float, longitude: float) -> AirPollutionPayload:
        """Return current air-pollution readings."""
        ...


@dataclass
class CallableEnvironmentDataSource(EnvironmentDataSource):
    """Adapter that satisfies the protocol from plain callables.

    Not used on the production path (the factory returns OpenWeatherClient);
    it is the seam tests use to inject fake provider responses.
    """

    geocode_direct_fn: Callable[..., List[GeoCandidate]]
    geocode_postal_fn: Callable[..., Optional[PostalGeoResult]]
    current_bundle_fn: Callable[..., CurrentConditionsPayload]
    daily_bundle_fn: Callable[..., DailyForecastPayload]
    air_pollution_fn: Callable[..., AirPollutionPayload]

    def geocode_direct(self, query: str, *, limit: int = 1) -> List[GeoCandidate]:
        return self.geocode_direct_fn(query, limit=limit)

    def geocode_postal(self, zip_query: str) -> Optional[PostalGeoResult]:
        return self.geocode_postal_fn(zip_query)

    def fetch_current_bundle(self, latitude: float, longitude: float) -> CurrentConditionsPayload:
        return self.current_bundle_fn(latitude, longitude)

    def fetch_daily_bundle(self, latitude: float, longitude: float) -> DailyForecastPayload:
        return self.daily_bundle_fn(latitude, longitude)

    def fetch_air_pollution(self, latitude: float, longitude: float) -> AirPollutionPayload:
        return self.air_pollution_fn(latitude, longitude)
