"""Merge raw weather and air-quality payloads into an EnvironmentalSnapshot.

Everything here is a pure transformation: no I/O, and given payloads that
passed validation it always succeeds.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from app.data_sources.payloads import AirPollutionEntry, CurrentConditionsPayload, WeatherDescription
from app.domain import (
    AQI_STATUS_BY_INDEX,
    AirQualityReading,
    AlertStatus,
    AqiStatus,
    EnvironmentalSnapshot,
    PollutantDetails,
    UNAVAILABLE_VALUE,
    WeatherSnapshot,
)

DEFAULT_HIGH_WIND_THRESHOLD_MPH = 20.0
MAIN_POLLUTANT = "PM2.5"

HIGH_WIND_LEVEL = "High Wind Alert"
HIGH_WIND_DESCRIPTION = "High winds expected. Secure loose outdoor items."
NO_ALERT_LEVEL = "None"
NO_ALERT_DESCRIPTION = "No severe weather alerts."


def title_case(text: str) -> str:
    """Upper-case the first character of each whitespace-delimited word.

    Unlike str.title(), the rest of each word is left as-is
    ("light rain" -> "Light Rain", "mIxed" -> "MIxed").
    """
    out = []
    at_word_start = True
    for ch in text:
        if ch.isspace():
            at_word_start = True
            out.append(ch)
        elif at_word_start:
            out.append(ch.upper())
            at_word_start = False
        else:
            out.append(ch)
    return "".join(out)


def describe(weather: list[WeatherDescription]) -> str:
    """Title-cased description of the first weather entry, or ""."""
    if not weather or not weather[0].description:
        return ""
    return title_case(weather[0].description)


def aqi_status(index: Optional[int]) -> AqiStatus:
    """Map a 1-5 index to its label; None is Unavailable, anything else Unknown."""
    if index is None:
        return AqiStatus.UNAVAILABLE
    return AQI_STATUS_BY_INDEX.get(index, AqiStatus.UNKNOWN)


def assemble_air_quality(entry: Optional[AirPollutionEntry]) -> AirQualityReading:
    if entry is None or entry.components is None:
        return AirQualityReading()

    index = entry.main.aqi
    status = aqi_status(index)
    if status is AqiStatus.UNAVAILABLE:
        # Components without an index still count as a returned reading.
        status = AqiStatus.UNKNOWN
    return AirQualityReading(
        aqi=index,
        status=status,
        main_pollutant=MAIN_POLLUTANT,
        details=PollutantDetails(
            pm25=entry.components.pm2_5 if entry.components.pm2_5 is not None else UNAVAILABLE_VALUE,
            ozone=entry.components.o3 if entry.components.o3 is not None else UNAVAILABLE_VALUE,
        ),
    )


def derive_alert(
    payload: CurrentConditionsPayload,
    *,
    high_wind_threshold_mph: float = DEFAULT_HIGH_WIND_THRESHOLD_MPH,
) -> AlertStatus:
    """Provider alert first, then high wind, then the all-clear."""
    if payload.alerts:
        alert = payload.alerts[0]
        return AlertStatus(
            is_active=True,
            level=alert.event or "",
            description=alert.description or "",
        )

    wind = payload.current.wind_speed
    if wind is not None and wind > high_wind_threshold_mph:
        return AlertStatus(is_active=True, level=HIGH_WIND_LEVEL, description=HIGH_WIND_DESCRIPTION)

    return AlertStatus(is_active=False, level=NO_ALERT_LEVEL, description=NO_ALERT_DESCRIPTION)


def assemble_snapshot(
    location_name: str,
    weather: CurrentConditionsPayload,
    air_quality: Optional[AirPollutionEntry],
    *,
    now: dt.datetime | None = None,
    high_wind_threshold_mph: float = DEFAULT_HIGH_WIND_THRESHOLD_MPH,
) -> EnvironmentalSnapshot:
    """Build the current-conditions response; `now` defaults to the current UTC instant."""
    current = weather.current
    return EnvironmentalSnapshot(
        location=location_name,
        last_updated=now or dt.datetime.now(dt.timezone.utc),
        weather=WeatherSnapshot(
            temperature_f=current.temp,
            condition=describe(current.weather),
            humidity=current.humidity,
            wind_speed_mph=current.wind_speed,
        ),
        air_quality=assemble_air_quality(air_quality),
        alert=derive_alert(weather, high_wind_threshold_mph=high_wind_threshold_mph),
    )
