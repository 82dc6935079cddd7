"""Fetch raw weather and air-quality payloads for resolved coordinates."""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Tuple

from app.data_sources.base import EnvironmentDataSource
from app.data_sources.payloads import (
    AirPollutionEntry,
    CurrentConditionsPayload,
    DailyForecastPayload,
)
from app.domain import ResolvedLocation
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="conditions_fetcher")


class ConditionsFetcher:
    """Retrieves the raw payloads the assemblers consume.

    Weather is fatal: its errors propagate unchanged. Air quality is best
    effort: any failure is logged and reported as None so the snapshot can
    still be built.
    """

    def __init__(self, data_source: EnvironmentDataSource) -> None:
        self.data_source = data_source

    def fetch(self, loc: ResolvedLocation) -> Tuple[CurrentConditionsPayload, Optional[AirPollutionEntry]]:
        """Fetch weather and air quality concurrently for one location."""
        # One pool per call; a weather failure abandons this request's AQI call only.
        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="conditions")
        try:
            weather_future = pool.submit(
                self.data_source.fetch_current_bundle, loc.latitude, loc.longitude
            )
            air_future = pool.submit(
                self.data_source.fetch_air_pollution, loc.latitude, loc.longitude
            )
            weather = weather_future.result()
            air = self._air_result(air_future, loc)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        logger.debug(
            "Fetched raw conditions",
            extra={"location": loc.display_name, "air_quality_available": air is not None},
        )
        return weather, air

    @staticmethod
    def _air_result(future: Future, loc: ResolvedLocation) -> Optional[AirPollutionEntry]:
        """Return the first air-pollution reading, or None on any failure."""
        try:
            payload = future.result()
        except Exception as exc:
            logger.warning(
                "Air quality unavailable; continuing without it",
                extra={"location": loc.display_name, "error": str(exc)},
            )
            return None
        if not payload.list:
            logger.info("Air quality response had no readings", extra={"location": loc.display_name})
            return None
        return payload.list[0]

    def fetch_forecast(self, loc: ResolvedLocation) -> DailyForecastPayload:
        """Fetch the daily forecast bundle; failures are fatal."""
        return self.data_source.fetch_daily_bundle(loc.latitude, loc.longitude)
