"""Error taxonomy for the conditions pipeline, each kind tied to an HTTP status."""


class EcoWatchError(Exception):
    """Base class for errors reported to API callers as `{"error": message}`."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(EcoWatchError):
    """Neither a city nor a postal code was supplied."""

    status_code = 400


class NotFoundError(EcoWatchError):
    """Geocoding returned nothing usable for the requested location."""

    status_code = 404


class ConfigurationError(EcoWatchError):
    """API key missing or rejected by the provider."""

    status_code = 500


class UpstreamError(EcoWatchError):
    """Weather/forecast call failed or returned a body we cannot read."""

    status_code = 500
