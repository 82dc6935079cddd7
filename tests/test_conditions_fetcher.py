import unittest

import requests

from app.conditions_fetcher import ConditionsFetcher
from app.config import Settings
from app.data_sources import CallableEnvironmentDataSource, OpenWeatherClient
from app.data_sources.payloads import (
    AirPollutionPayload,
    CurrentConditionsPayload,
    DailyForecastPayload,
)
from app.domain import LocationKind, ResolvedLocation
from app.errors import UpstreamError

LOC = ResolvedLocation(latitude=36.07, longitude=-79.79, display_name="Greensboro, North Carolina, US",
                       source_kind=LocationKind.CITY)


def _weather(*_args):
    return CurrentConditionsPayload.model_validate(
        {"current": {"temp": 70.0, "humidity": 40, "wind_speed": 5.0, "weather": [{"description": "clear sky"}]}}
    )


def _air(*_args):
    return AirPollutionPayload.model_validate(
        {"list": [{"main": {"aqi": 1}, "components": {"pm2_5": 3.2, "o3": 40.1}}]}
    )


class SimpleResp:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.url = "https://api.example.test/?appid=test-key"

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


def _unused(*_args, **_kwargs):
    raise AssertionError("unexpected upstream call")


def _make_source(weather=_weather, air=_air, daily=_unused):
    return CallableEnvironmentDataSource(
        geocode_direct_fn=_unused,
        geocode_postal_fn=_unused,
        current_bundle_fn=weather,
        daily_bundle_fn=daily,
        air_pollution_fn=air,
    )


class TestConditionsFetcher(unittest.TestCase):
    def test_fetch_returns_weather_and_first_air_reading(self):
        weather, air = ConditionsFetcher(_make_source()).fetch(LOC)
        self.assertEqual(weather.current.temp, 70.0)
        self.assertEqual(air.main.aqi, 1)

    def test_air_network_error_is_swallowed(self):
        def broken_air(*_args):
            raise requests.ConnectionError("connection reset")

        weather, air = ConditionsFetcher(_make_source(air=broken_air)).fetch(LOC)
        self.assertIsNotNone(weather)
        self.assertIsNone(air)

    def test_air_upstream_error_is_swallowed(self):
        def failing_air(*_args):
            raise UpstreamError("Failed to fetch air quality data.")

        _weather_payload, air = ConditionsFetcher(_make_source(air=failing_air)).fetch(LOC)
        self.assertIsNone(air)

    def test_air_server_error_from_client_is_swallowed(self):
        class RoutingSession:
            def get(self, url, params=None, timeout=None):
                if url.endswith("/air_pollution"):
                    return SimpleResp({}, status_code=500)
                return SimpleResp({"current": {"temp": 70.0, "humidity": 40, "wind_speed": 5.0, "weather": []}})

        client = OpenWeatherClient(Settings(owm_api_key="test-key"), session=RoutingSession())
        weather, air = ConditionsFetcher(client).fetch(LOC)
        self.assertEqual(weather.current.temp, 70.0)
        self.assertIsNone(air)

    def test_air_empty_list_is_none(self):
        _weather_payload, air = ConditionsFetcher(
            _make_source(air=lambda *_a: AirPollutionPayload(list=[]))
        ).fetch(LOC)
        self.assertIsNone(air)

    def test_weather_failure_is_fatal(self):
        def failing_weather(*_args):
            raise UpstreamError("Invalid API call")

        with self.assertRaises(UpstreamError) as ctx:
            ConditionsFetcher(_make_source(weather=failing_weather)).fetch(LOC)
        self.assertEqual(ctx.exception.message, "Invalid API call")

    def test_calls_use_resolved_coordinates(self):
        seen = []

        def weather(lat, lon):
            seen.append(("weather", lat, lon))
            return _weather()

        def air(lat, lon):
            seen.append(("air", lat, lon))
            return _air()

        ConditionsFetcher(_make_source(weather=weather, air=air)).fetch(LOC)
        self.assertCountEqual(seen, [("weather", 36.07, -79.79), ("air", 36.07, -79.79)])

    def test_fetch_forecast(self):
        daily = DailyForecastPayload.model_validate(
            {"daily": [{"dt": 1700000000, "temp": {"min": 40.2, "max": 61.7}, "weather": []}]}
        )
        payload = ConditionsFetcher(_make_source(daily=lambda *_a: daily)).fetch_forecast(LOC)
        self.assertEqual(len(payload.daily), 1)


if __name__ == "__main__":
    unittest.main()
