from datetime import tzinfo
from typing import List, Optional, Union

from skycast.errors import GEOLOCATION_UNSUPPORTED, WEATHER_LOOKUP_FAILED, SkyCastError
from skycast.logging import get_logger
from skycast.models import (
    CurrentConditions,
    ForecastEntry,
    ForecastSeries,
    Location,
    QueryState,
    TemperatureUnit,
)
from skycast.services import location as resolver
from skycast.services.forecast import FORECAST_DAYS, daily_forecast
from skycast.services.location import Geolocator
from skycast.services.openweather import OpenWeatherClient
from skycast.services.units import toggle_unit
from skycast.views import DEFAULT_ICON_URL, SessionView, session_view

log = get_logger(component="session")


class WeatherSession:
    """
    Lifecycle of one weather lookup at a time: idle -> loading -> success | error.

    Current conditions and forecast are stored together or not at all. Every
    submission takes a sequence number; a fetch that completes after a newer
    submission started is dropped, so the latest submission always wins.
    """

    def __init__(
        self,
        client: OpenWeatherClient,
        *,
        forecast_days: int = FORECAST_DAYS,
        icon_base_url: str = DEFAULT_ICON_URL,
        tz: Optional[tzinfo] = None,
    ):
        self.client = client
        self.forecast_days = forecast_days
        self.icon_base_url = icon_base_url
        self.tz = tz

        self.state = QueryState.IDLE
        self.error: Optional[str] = None
        self.current: Optional[CurrentConditions] = None
        self.forecast: Optional[ForecastSeries] = None
        self.unit = TemperatureUnit.CELSIUS
        self._seq = 0

    def _begin(self) -> int:
        self._seq += 1
        self.state = QueryState.LOADING
        self.error = None
        self.current = None
        self.forecast = None
        return self._seq

    def _fail(self, seq: int, message: str) -> None:
        if seq != self._seq:
            log.info("submission_discarded", seq=seq, latest=self._seq, outcome="error")
            return
        self.state = QueryState.ERROR
        self.error = message
        self.current = None
        self.forecast = None

    async def submit(self, query: Union[str, Location]) -> None:
        location = resolver.resolve(query)
        if location is None:
            return
        seq = self._begin()
        await self._fetch(seq, location)

    async def submit_geolocation(self, geolocator: Optional[Geolocator]) -> None:
        seq = self._begin()
        try:
            location = await resolver.locate(geolocator)
        except SkyCastError as exc:
            self._fail(seq, str(exc))
            return
        except Exception:
            log.exception("geolocation_failed", seq=seq)
            self._fail(seq, GEOLOCATION_UNSUPPORTED)
            return
        await self._fetch(seq, location)

    async def _fetch(self, seq: int, location: Location) -> None:
        try:
            report = await self.client.fetch(location)
        except SkyCastError as exc:
            self._fail(seq, str(exc))
            return
        except Exception:
            log.exception("weather_lookup_failed", seq=seq)
            self._fail(seq, WEATHER_LOOKUP_FAILED)
            return

        if seq != self._seq:
            log.info("submission_discarded", seq=seq, latest=self._seq, outcome="success")
            return
        self.current = report.current
        self.forecast = report.forecast
        self.unit = TemperatureUnit.CELSIUS
        self.state = QueryState.SUCCESS

    def toggle_unit(self) -> bool:
        if self.state is not QueryState.SUCCESS or self.current is None:
            return False
        self.unit = toggle_unit(self.current, self.unit)
        log.debug("unit_toggled", unit=self.unit.value)
        return True

    def daily_forecast(self) -> List[ForecastEntry]:
        if self.forecast is None:
            return []
        return daily_forecast(self.forecast, days=self.forecast_days, tz=self.tz)

    def view(self) -> SessionView:
        return session_view(
            self.state,
            self.error,
            self.unit,
            self.current,
            self.daily_forecast(),
            base_url=self.icon_base_url,
            tz=self.tz,
        )

    def dispose(self) -> None:
        """Forget the current result; anything still in flight is discarded when it lands."""
        self._seq += 1
        self.state = QueryState.IDLE
        self.error = None
        self.current = None
        self.forecast = None
        self.unit = TemperatureUnit.CELSIUS
