from typing import Optional, Protocol, Tuple, Union

import httpx
from pydantic import ValidationError

from skycast.errors import GeolocationError
from skycast.logging import get_logger
from skycast.models import Location

log = get_logger(component="location")

Coordinates = Tuple[float, float]


class Geolocator(Protocol):
    async def locate(self) -> Coordinates:
        """Return (latitude, longitude) or raise GeolocationError."""
        ...


class StaticGeolocator:
    """Coordinates already obtained by the client device."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude

    async def locate(self) -> Coordinates:
        return self.latitude, self.longitude


class UnavailableGeolocator:
    async def locate(self) -> Coordinates:
        raise GeolocationError()


class IPGeolocator:
    """Approximate position from the caller's public IP (ipapi.co style JSON)."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout_seconds
        self.transport = transport

    async def locate(self) -> Coordinates:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.url)
                r.raise_for_status()
                data = r.json()
            return float(data["latitude"]), float(data["longitude"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            log.warning("geolocation_failed", url=self.url, error=repr(exc))
            raise GeolocationError() from exc


def resolve(query: Union[str, Location]) -> Optional[Location]:
    """Turn user input into a Location. Blank text gives None: nothing to look up."""
    if isinstance(query, Location):
        return query
    name = query.strip()
    if not name:
        return None
    return Location(name=name)


def from_coordinates(latitude: float, longitude: float) -> Location:
    return Location(latitude=latitude, longitude=longitude)


async def locate(geolocator: Optional[Geolocator]) -> Location:
    if geolocator is None:
        raise GeolocationError()
    latitude, longitude = await geolocator.locate()
    try:
        return from_coordinates(latitude, longitude)
    except ValidationError as exc:
        log.warning("geolocation_failed", latitude=latitude, longitude=longitude)
        raise GeolocationError() from exc
