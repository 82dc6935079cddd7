"""Map the provider's daily array into a bounded list of ForecastDay summaries."""
from __future__ import annotations

import datetime as dt
import math
from typing import List, Optional, Sequence

from app.conditions_assembler import describe
from app.data_sources.payloads import AirPollutionPayload, DailyEntry
from app.domain import AQI_STATUS_BY_INDEX, AqiStatus, DailyWeather, ForecastDay

MAX_FORECAST_DAYS = 7

# Forecast AQI is a guess at best; missing or odd values read as Moderate.
FORECAST_AQI_FALLBACK = AqiStatus.MODERATE

_WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (72.5 -> 73, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def expected_aqi_status(air: Optional[AirPollutionPayload]) -> AqiStatus:
    if air is None or not air.list:
        return FORECAST_AQI_FALLBACK
    index = air.list[0].main.aqi
    return AQI_STATUS_BY_INDEX.get(index, FORECAST_AQI_FALLBACK)


def assemble_day(entry: DailyEntry) -> ForecastDay:
    day = dt.datetime.fromtimestamp(entry.dt, tz=dt.timezone.utc).date()
    return ForecastDay(
        date=day.isoformat(),
        day_of_week=_WEEKDAY_ABBR[day.weekday()],
        weather=DailyWeather(
            high_f=round_half_up(entry.temp.max),
            low_f=round_half_up(entry.temp.min),
            condition=describe(entry.weather),
        ),
        expected_aqi_status=expected_aqi_status(entry.air_pollution),
    )


def assemble_forecast(daily: Sequence[DailyEntry], limit: int = MAX_FORECAST_DAYS) -> List[ForecastDay]:
    """Summarize the first `limit` days (never more than seven) in source order."""
    limit = max(0, min(limit, MAX_FORECAST_DAYS))
    return [assemble_day(entry) for entry in daily[:limit]]
