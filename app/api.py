"""HTTP API for current environmental conditions and the daily forecast."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from .domain import EnvironmentalSnapshot, ForecastDay, LocationQuery
from .environment_service import EnvironmentService, build_location_query, get_default_service
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

router = APIRouter()


def get_environment_service() -> EnvironmentService:
    """Dependency hook for the shared service (overridden in tests)."""
    return get_default_service()


def location_query(
    city: Optional[str] = Query(default=None, description="City, optionally with state/country."),
    zip_code: Optional[str] = Query(default=None, alias="zipCode", description="Postal code, optionally ',CC'."),
) -> LocationQuery:
    """Translate query parameters into a LocationQuery (400 when both are blank)."""
    return build_location_query(city=city, zip_code=zip_code)


@router.get("/environment/current", response_model=EnvironmentalSnapshot)
def current_conditions(
    query: LocationQuery = Depends(location_query),
    service: EnvironmentService = Depends(get_environment_service),
):
    """Return the environmental snapshot for a city or postal code."""
    logger.info(f"Fetching LIVE data for: {query.raw}")
    return service.current_conditions(query)


@router.get("/environment/forecast", response_model=List[ForecastDay])
def forecast(
    query: LocationQuery = Depends(location_query),
    service: EnvironmentService = Depends(get_environment_service),
):
    """Return up to seven daily summaries for a city or postal code."""
    logger.info(f"Fetching FORECAST data for: {query.raw}")
    return service.forecast(query)
