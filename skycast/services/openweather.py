from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from skycast.errors import WeatherLookupError
from skycast.logging import get_logger
from skycast.models import CurrentConditions, ForecastSeries, Location, Units, WeatherReport

log = get_logger(component="openweather")


class OpenWeatherClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout_seconds
        self.transport = transport

    async def _get(self, path: str, location: Location, units: Units) -> Dict[str, Any]:
        url = f"{self.base_url}/{path}"
        params = {**location.query_params(), "units": units, "appid": self.api_key}
        log.debug("weather_request", endpoint=path, location=location.query_params())
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.get(url, params=params)
            r.raise_for_status()
            return r.json()

    async def get_current(self, location: Location, units: Units = "metric") -> CurrentConditions:
        return CurrentConditions.from_payload(await self._get("weather", location, units))

    async def get_forecast(self, location: Location, units: Units = "metric") -> ForecastSeries:
        # 5 day / 3 hour forecast
        return ForecastSeries.from_payload(await self._get("forecast", location, units))

    async def fetch(self, location: Location) -> WeatherReport:
        """Current conditions, then the forecast. Any failure of either is one WeatherLookupError."""
        try:
            current = await self.get_current(location)
            forecast = await self.get_forecast(location)
        except httpx.HTTPStatusError as exc:
            log.warning(
                "weather_lookup_failed",
                status=exc.response.status_code,
                url=str(exc.request.url.copy_remove_param("appid")),
            )
            raise WeatherLookupError() from exc
        except httpx.HTTPError as exc:
            log.warning("weather_lookup_failed", error=repr(exc))
            raise WeatherLookupError() from exc
        except (AttributeError, KeyError, IndexError, TypeError, ValueError, ValidationError) as exc:
            log.warning("weather_lookup_failed", error="malformed payload", detail=str(exc))
            raise WeatherLookupError() from exc
        return WeatherReport(current=current, forecast=forecast)
