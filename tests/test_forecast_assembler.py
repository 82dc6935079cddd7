import unittest

from app.data_sources.payloads import DailyEntry
from app.domain import AqiStatus
from app.forecast_assembler import assemble_forecast, round_half_up

# 2023-11-14T22:13:20Z, a Tuesday.
BASE_TS = 1700000000
DAY = 86400


def _entry(i, *, aqi=None, high=60.6, low=41.4, description="overcast clouds"):
    data = {
        "dt": BASE_TS + i * DAY,
        "temp": {"day": 55.0, "min": low, "max": high},
        "weather": [{"description": description}],
    }
    if aqi is not None:
        data["air_pollution"] = {"list": [{"main": {"aqi": aqi}}]}
    return DailyEntry.model_validate(data)


class TestForecastAssembler(unittest.TestCase):
    def test_truncates_to_seven_in_order(self):
        days = assemble_forecast([_entry(i) for i in range(10)])
        self.assertEqual(len(days), 7)
        dates = [d.date for d in days]
        self.assertEqual(dates, sorted(dates))
        self.assertEqual(len(set(dates)), 7)
        self.assertEqual(dates[0], "2023-11-14")
        self.assertEqual(dates[-1], "2023-11-20")

    def test_never_pads(self):
        self.assertEqual(len(assemble_forecast([_entry(0), _entry(1)])), 2)
        self.assertEqual(assemble_forecast([]), [])

    def test_limit_cannot_exceed_seven(self):
        self.assertEqual(len(assemble_forecast([_entry(i) for i in range(10)], limit=14)), 7)
        self.assertEqual(len(assemble_forecast([_entry(i) for i in range(10)], limit=3)), 3)

    def test_day_fields(self):
        day = assemble_forecast([_entry(0, high=72.5, low=49.4, description="light rain")])[0]
        self.assertEqual(day.day_of_week, "Tue")
        self.assertEqual(day.weather.high_f, 73)
        self.assertEqual(day.weather.low_f, 49)
        self.assertEqual(day.weather.condition, "Light Rain")

    def test_embedded_aqi_mapped(self):
        day = assemble_forecast([_entry(0, aqi=4)])[0]
        self.assertEqual(day.expected_aqi_status, AqiStatus.UNSAFE)

    def test_missing_aqi_defaults_to_moderate(self):
        day = assemble_forecast([_entry(0)])[0]
        self.assertEqual(day.expected_aqi_status.value, "Moderate")

    def test_serializes_with_wire_names(self):
        data = assemble_forecast([_entry(0)])[0].model_dump(mode="json", by_alias=True)
        self.assertEqual(set(data), {"date", "dayOfWeek", "weather", "expectedAqiStatus"})
        self.assertEqual(set(data["weather"]), {"highF", "lowF", "condition"})


class TestRoundHalfUp(unittest.TestCase):
    def test_rounding(self):
        self.assertEqual(round_half_up(72.5), 73)
        self.assertEqual(round_half_up(72.49), 72)
        self.assertEqual(round_half_up(-3.5), -3)
        self.assertEqual(round_half_up(0.5), 1)


if __name__ == "__main__":
    unittest.main()
