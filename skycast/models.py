from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


Units = Literal["metric", "imperial"]


class QueryState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "°C" if self is TemperatureUnit.CELSIUS else "°F"

    @property
    def other(self) -> "TemperatureUnit":
        if self is TemperatureUnit.CELSIUS:
            return TemperatureUnit.FAHRENHEIT
        return TemperatureUnit.CELSIUS


class Location(BaseModel):
    """A place to look up: a city name, or a latitude/longitude pair. Never both."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def _one_variant(self) -> "Location":
        has_coords = self.latitude is not None and self.longitude is not None
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        if bool(self.name) == has_coords:
            raise ValueError("a location is either a name or a coordinate pair")
        return self

    @property
    def is_coordinates(self) -> bool:
        return not self.name

    def query_params(self) -> Dict[str, Any]:
        if self.is_coordinates:
            return {"lat": self.latitude, "lon": self.longitude}
        return {"q": self.name}


def _first_weather(payload: Dict[str, Any]) -> Dict[str, Any]:
    weather = payload["weather"]
    if not weather:
        return {}
    if not isinstance(weather[0], dict):
        raise ValueError(f"unexpected weather item: {weather[0]!r}")
    return weather[0]


class CurrentConditions(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    temperature: float
    humidity: int
    cloudiness: int
    wind_speed: float
    description: str = ""
    icon: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CurrentConditions":
        weather = _first_weather(payload)
        return cls(
            name=payload["name"],
            temperature=payload["main"]["temp"],
            humidity=payload["main"]["humidity"],
            cloudiness=payload["clouds"]["all"],
            wind_speed=payload["wind"]["speed"],
            description=weather.get("description", ""),
            icon=weather.get("icon", ""),
        )


class ForecastEntry(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    dt: int
    temperature: float
    description: str = ""
    icon: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ForecastEntry":
        weather = _first_weather(payload)
        return cls(
            dt=payload["dt"],
            temperature=payload["main"]["temp"],
            description=weather.get("description", ""),
            icon=weather.get("icon", ""),
        )


class ForecastSeries(BaseModel):
    """3-hour forecast entries, chronological, exactly as the provider sent them."""

    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    entries: List[ForecastEntry] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ForecastSeries":
        city = payload.get("city") or {}
        if not isinstance(city, dict):
            raise ValueError(f"unexpected city: {city!r}")
        return cls(
            city=city.get("name"),
            entries=[ForecastEntry.from_payload(item) for item in payload["list"]],
        )


class WeatherReport(BaseModel):
    current: CurrentConditions
    forecast: ForecastSeries
