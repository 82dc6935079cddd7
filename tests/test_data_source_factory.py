import unittest

from app.data_sources.factory import DEFAULT_SOURCE_NAME, build_data_source
from app.data_sources.openweather_client import OpenWeatherClient
from app.errors import ConfigurationError


class DummySettings:
    def __init__(self, **kwargs):
        self.data_source = DEFAULT_SOURCE_NAME
        self.owm_api_key = "test-key"
        self.geo_base_url = "https://geo.example.test"
        self.data_base_url = "https://data.example.test"
        self.retry_attempts = 1
        self.retry_backoff_factor = 0.1
        for k, v in kwargs.items():
            setattr(self, k, v)

    def require_api_key(self):
        if not self.owm_api_key:
            raise ConfigurationError("OWM_API_KEY is missing.")
        return self.owm_api_key


class TestDataSourceFactory(unittest.TestCase):
    def test_build_openweathermap_default(self):
        ds = build_data_source(DummySettings())
        self.assertIsInstance(ds, OpenWeatherClient)
        self.assertEqual(ds.one_call_url, "https://data.example.test/3.0/onecall")
        self.assertEqual(ds.geo_zip_url, "https://geo.example.test/zip")

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="unknown-source"))

    def test_missing_key_raises_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            build_data_source(DummySettings(owm_api_key=None))


if __name__ == "__main__":
    unittest.main()
