WEATHER_LOOKUP_FAILED = "Enter a valid city name"
GEOLOCATION_UNSUPPORTED = "Geolocation is not supported by your browser."


class SkyCastError(Exception):
    """Base error; ``str(exc)`` is the user-facing message."""

    message = "Something went wrong"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class WeatherLookupError(SkyCastError):
    """Either provider call failed: transport, HTTP status or payload shape."""

    message = WEATHER_LOOKUP_FAILED


class GeolocationError(SkyCastError):
    """The host geolocation capability is missing, unsupported or denied."""

    message = GEOLOCATION_UNSUPPORTED
