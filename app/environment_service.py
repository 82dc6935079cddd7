"""The canonical Resolve -> Fetch -> Assemble pipeline shared by every adapter."""
from __future__ import annotations

from typing import List, Optional

from app import config
from app.conditions_assembler import assemble_snapshot
from app.conditions_fetcher import ConditionsFetcher
from app.data_sources import EnvironmentDataSource, build_data_source
from app.domain import EnvironmentalSnapshot, ForecastDay, LocationKind, LocationQuery
from app.errors import EcoWatchError, ValidationError
from app.forecast_assembler import assemble_forecast
from app.location_resolver import LocationResolver
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="environment_service")


def build_location_query(city: Optional[str] = None, zip_code: Optional[str] = None) -> LocationQuery:
    """Pick the location input: a non-blank city wins over a postal code."""
    if city and city.strip():
        return LocationQuery(raw=city.strip(), kind=LocationKind.CITY)
    if zip_code and zip_code.strip():
        return LocationQuery(raw=zip_code.strip(), kind=LocationKind.POSTAL_CODE)
    raise ValidationError("Location (city or zipCode) is required.")


class EnvironmentService:
    """Current conditions and forecast for one location per call; holds no per-request state."""

    def __init__(self, data_source: EnvironmentDataSource, settings: config.Settings | None = None) -> None:
        self.settings = settings or config.settings
        self.resolver = LocationResolver(data_source, default_country=self.settings.default_country)
        self.fetcher = ConditionsFetcher(data_source)

    @classmethod
    def from_settings(cls, settings: config.Settings | None = None) -> "EnvironmentService":
        settings = settings or config.settings
        return cls(build_data_source(settings), settings)

    def current_conditions(self, query: LocationQuery) -> EnvironmentalSnapshot:
        logger.info("Fetching current conditions", extra={"location": query.raw, "kind": query.kind.value})
        try:
            loc = self.resolver.resolve(query)
            weather, air = self.fetcher.fetch(loc)
        except EcoWatchError as exc:
            logger.error(
                f"Failed to fetch current conditions for {query.raw}: {exc.message}",
                extra={"location": query.raw, "status_code": exc.status_code},
            )
            raise

        return assemble_snapshot(
            loc.display_name,
            weather,
            air,
            high_wind_threshold_mph=self.settings.high_wind_threshold_mph,
        )

    def forecast(self, query: LocationQuery) -> List[ForecastDay]:
        logger.info("Fetching forecast", extra={"location": query.raw, "kind": query.kind.value})
        try:
            loc = self.resolver.resolve(query)
            payload = self.fetcher.fetch_forecast(loc)
        except EcoWatchError as exc:
            logger.error(
                f"Failed to fetch forecast for {query.raw}: {exc.message}",
                extra={"location": query.raw, "status_code": exc.status_code},
            )
            raise

        days = assemble_forecast(payload.daily, limit=self.settings.forecast_days)
        logger.info("Assembled forecast", extra={"location": query.raw, "days": len(days)})
        return days


_default_service: EnvironmentService | None = None


def get_default_service() -> EnvironmentService:
    """Build the process-wide service on first use; a missing API key raises ConfigurationError."""
    global _default_service
    if _default_service is None:
        _default_service = EnvironmentService.from_settings()
        logger.info("Environment service initialized")
    return _default_service
