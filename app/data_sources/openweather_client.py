"""Helpers for calling the OpenWeatherMap geocoding, One Call and Air Pollution APIs."""
from __future__ import annotations

from typing import Any, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError
from retry_requests import retry

from app.config import Settings
from app.data_sources.payloads import (
    AirPollutionPayload,
    CurrentConditionsPayload,
    DailyForecastPayload,
    GeoCandidate,
    PostalGeoResult,
)
from app.errors import ConfigurationError, UpstreamError
from utils.logging_utils import get_tagged_logger, mask_url_secrets
logger = get_tagged_logger(__name__, tag='openweather_client')

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# Transient statuses retried by the session before a response is handed back.
RETRY_STATUSES = (500, 502, 503, 504)

CURRENT_EXCLUDE = "minutely,hourly,daily"
FORECAST_EXCLUDE = "current,minutely,hourly,alerts"

WEATHER_FAILURE_MESSAGE = "Failed to fetch weather data from One Call API."
FORECAST_FAILURE_MESSAGE = "Failed to fetch forecast data from One Call API."
AUTH_FAILURE_MESSAGE = "OpenWeatherMap API Key Error: your key may be invalid or inactive."


def build_session(settings: Settings) -> requests.Session:
    """Return a requests session that retries transient failures with backoff."""
    return retry(
        requests.Session(),
        retries=settings.retry_attempts,
        backoff_factor=settings.retry_backoff_factor,
        status_to_retry=RETRY_STATUSES,
        raise_on_status=False,
    )


def _provider_message(resp: requests.Response) -> Optional[str]:
    """Pull the provider's own `message` out of an error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def _parse(model: Type[PayloadT], data: Any, *, context: str) -> PayloadT:
    """Validate a raw body against its expected shape."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "Unexpected OpenWeatherMap payload shape",
            extra={"context": context, "errors": exc.error_count()},
        )
        raise UpstreamError(f"Unexpected response from OpenWeatherMap ({context}).") from exc


class OpenWeatherClient:
    """Thin typed wrapper over the four OpenWeatherMap endpoints the pipeline uses.

    Status translation lives here (401 -> ConfigurationError, other failures ->
    UpstreamError, empty geocode -> empty result); what counts as fatal is
    decided by the callers.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.api_key = settings.require_api_key()
        self.session = session or build_session(settings)

    @property
    def geo_direct_url(self) -> str:
        return f"{self.settings.geo_base_url}/direct"

    @property
    def geo_zip_url(self) -> str:
        return f"{self.settings.geo_base_url}/zip"

    @property
    def one_call_url(self) -> str:
        return f"{self.settings.data_base_url}/3.0/onecall"

    @property
    def air_pollution_url(self) -> str:
        return f"{self.settings.data_base_url}/2.5/air_pollution"

    def _get(self, url: str, params: dict, *, context: str) -> requests.Response:
        """Issue a GET with the API key attached; network failures become UpstreamError."""
        params = {**params, "appid": self.api_key}
        try:
            resp = self.session.get(url, params=params, timeout=self.settings.request_timeout_seconds)
        except requests.RequestException as exc:
            logger.warning(
                "OpenWeatherMap request failed",
                extra={"context": context, "url": mask_url_secrets(url), "error": str(exc)},
            )
            raise UpstreamError(f"Could not reach OpenWeatherMap ({context}).") from exc

        logger.debug(
            "OpenWeatherMap response",
            extra={"context": context, "url": mask_url_secrets(str(resp.url)), "status": resp.status_code},
        )
        if resp.status_code == 401:
            logger.error("OpenWeatherMap rejected the API key", extra={"context": context})
            raise ConfigurationError(AUTH_FAILURE_MESSAGE)
        return resp

    @staticmethod
    def _json(resp: requests.Response, *, context: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"OpenWeatherMap returned a non-JSON body ({context}).") from exc

    def geocode_direct(self, query: str, *, limit: int = 1) -> List[GeoCandidate]:
        """Look up candidates for a "City,State,Country" style query."""
        resp = self._get(self.geo_direct_url, {"q": query, "limit": limit}, context="geo_direct")
        if not resp.ok:
            logger.info("Geocode by name returned non-success", extra={"query": query, "status": resp.status_code})
            return []
        data = self._json(resp, context="geo_direct")
        if not isinstance(data, list):
            raise UpstreamError("Unexpected response from OpenWeatherMap (geo_direct).")
        return [_parse(GeoCandidate, item, context="geo_direct") for item in data[:limit]]

    def geocode_postal(self, zip_query: str) -> Optional[PostalGeoResult]:
        """Look up a "postal,country" query; None when the provider has no match."""
        resp = self._get(self.geo_zip_url, {"zip": zip_query}, context="geo_zip")
        if not resp.ok:
            logger.info("Geocode by postal code returned non-success", extra={"query": zip_query, "status": resp.status_code})
            return None
        data = self._json(resp, context="geo_zip")
        if not data:
            return None
        return _parse(PostalGeoResult, data, context="geo_zip")

    def _one_call(self, latitude: float, longitude: float, *, exclude: str, failure_message: str, context: str) -> Any:
        params = {
            "lat": latitude,
            "lon": longitude,
            "units": self.settings.units,
            "exclude": exclude,
        }
        resp = self._get(self.one_call_url, params, context=context)
        if not resp.ok:
            message = _provider_message(resp) or failure_message
            logger.error(
                "One Call API error",
                extra={"context": context, "status": resp.status_code, "provider_message": message},
            )
            raise UpstreamError(message)
        return self._json(resp, context=context)

    def fetch_current_bundle(self, latitude: float, longitude: float) -> CurrentConditionsPayload:
        """Fetch current conditions and active alerts."""
        data = self._one_call(
            latitude,
            longitude,
            exclude=CURRENT_EXCLUDE,
            failure_message=WEATHER_FAILURE_MESSAGE,
            context="onecall_current",
        )
        return _parse(CurrentConditionsPayload, data, context="onecall_current")

    def fetch_daily_bundle(self, latitude: float, longitude: float) -> DailyForecastPayload:
        """Fetch the multi-day `daily` array."""
        data = self._one_call(
            latitude,
            longitude,
            exclude=FORECAST_EXCLUDE,
            failure_message=FORECAST_FAILURE_MESSAGE,
            context="onecall_daily",
        )
        return _parse(DailyForecastPayload, data, context="onecall_daily")

    def fetch_air_pollution(self, latitude: float, longitude: float) -> AirPollutionPayload:
        """Fetch the current air-pollution readings; raises on any failure."""
        resp = self._get(self.air_pollution_url, {"lat": latitude, "lon": longitude}, context="air_pollution")
        if not resp.ok:
            raise UpstreamError(_provider_message(resp) or "Failed to fetch air quality data.")
        data = self._json(resp, context="air_pollution")
        return _parse(AirPollutionPayload, data, context="air_pollution")
