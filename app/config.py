"""Application configuration pulled from environment variables via pydantic."""
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.errors import ConfigurationError
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the EcoWatch service."""
    model_config = SettingsConfigDict(env_prefix="ECOWATCH_", extra="ignore", populate_by_name=True)

    # ECOWATCH_OWM_API_KEY, or the bare OWM_API_KEY used by existing deployments.
    owm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ECOWATCH_OWM_API_KEY", "OWM_API_KEY"),
    )
    data_source: str = "openweathermap"
    geo_base_url: str = "https://api.openweathermap.org/geo/1.0"
    data_base_url: str = "https://api.openweathermap.org/data"
    units: str = "imperial"
    default_country: str = "US"
    forecast_days: int = 7
    high_wind_threshold_mph: float = 20.0
    request_timeout_seconds: float = 10.0
    retry_attempts: int = 2
    retry_backoff_factor: float = 0.2
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @field_validator("geo_base_url", "data_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("owm_api_key", mode="after")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty/whitespace key the same as an unset one."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    def require_api_key(self) -> str:
        """Return the OpenWeatherMap key or raise ConfigurationError."""
        if not self.owm_api_key:
            logger.error("OpenWeatherMap API key is not configured")
            raise ConfigurationError(
                "OWM_API_KEY is missing. Please configure it in the server environment variables."
            )
        return self.owm_api_key


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'owm_api_key'})}")
