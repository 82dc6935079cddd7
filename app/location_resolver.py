"""Resolve a free-form city or postal-code string to coordinates and a display name."""
from __future__ import annotations

from app.data_sources.base import EnvironmentDataSource
from app.data_sources.payloads import GeoCandidate, PostalGeoResult
from app.domain import LocationKind, LocationQuery, ResolvedLocation
from app.errors import NotFoundError
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="location_resolver")

# City, state/region, country; anything after the third part is dropped.
MAX_CITY_PARTS = 3


def clean_city_query(raw: str) -> str:
    """Normalize "Paris, FR, Extra, Ignored" to "Paris,FR,Extra"."""
    parts = [part.strip() for part in raw.split(",")]
    parts = [part for part in parts if part]
    return ",".join(parts[:MAX_CITY_PARTS])


def postal_query(raw: str, default_country: str = "US") -> str:
    """Append the default country to a bare postal code ("27401" -> "27401,US")."""
    raw = raw.strip()
    if "," in raw:
        return raw
    return f"{raw},{default_country}"


def _not_found(raw: str) -> NotFoundError:
    return NotFoundError(
        f"Location not found for the search term: {raw}. "
        "Try adding State/Country (e.g., 'Paris, FR')."
    )


def _city_display_name(candidate: GeoCandidate, raw: str) -> str:
    name = candidate.name or raw.strip()
    if candidate.state and candidate.country:
        return f"{name}, {candidate.state}, {candidate.country}"
    return name


def _postal_display_name(result: PostalGeoResult, raw: str) -> str:
    postal = result.zip or raw.strip()
    if not result.name:
        return postal
    return f"{result.name} ({postal})"


class LocationResolver:
    """Turns a LocationQuery into a ResolvedLocation via the provider's geocoders."""

    def __init__(self, data_source: EnvironmentDataSource, *, default_country: str = "US") -> None:
        self.data_source = data_source
        self.default_country = default_country

    def resolve(self, query: LocationQuery) -> ResolvedLocation:
        """Resolve `query`; raises NotFoundError, or ConfigurationError on auth failure."""
        if query.kind is LocationKind.POSTAL_CODE:
            return self._resolve_postal(query.raw)
        return self._resolve_city(query.raw)

    def _resolve_city(self, raw: str) -> ResolvedLocation:
        geo_query = clean_city_query(raw)
        if not geo_query:
            raise _not_found(raw)

        logger.info("Geocoding city", extra={"location": raw, "geo_query": geo_query})
        candidates = self.data_source.geocode_direct(geo_query, limit=1)
        if not candidates:
            logger.info("No geocode candidates", extra={"location": raw})
            raise _not_found(raw)

        first = candidates[0]
        if first.lat is None or first.lon is None:
            logger.warning("Geocode candidate missing coordinates", extra={"location": raw})
            raise _not_found(raw)

        return ResolvedLocation(
            latitude=first.lat,
            longitude=first.lon,
            display_name=_city_display_name(first, raw),
            source_kind=LocationKind.CITY,
        )

    def _resolve_postal(self, raw: str) -> ResolvedLocation:
        if not raw.strip():
            raise _not_found(raw)
        zip_query = postal_query(raw, self.default_country)

        logger.info("Geocoding postal code", extra={"location": raw, "geo_query": zip_query})
        result = self.data_source.geocode_postal(zip_query)
        if result is None or result.lat is None or result.lon is None:
            logger.info("Postal code not resolved", extra={"location": raw})
            raise _not_found(raw)

        return ResolvedLocation(
            latitude=result.lat,
            longitude=result.lon,
            display_name=_postal_display_name(result, raw),
            source_kind=LocationKind.POSTAL_CODE,
        )
