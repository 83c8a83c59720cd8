import math
from datetime import tzinfo
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from skycast.models import CurrentConditions, ForecastEntry, QueryState, TemperatureUnit
from skycast.services.forecast import date_label

DEFAULT_ICON_URL = "https://openweathermap.org/img/wn"


class CurrentView(BaseModel):
    name: str
    temperature: int
    unit: str
    description: str
    humidity: int
    cloudiness: int
    wind_speed: int
    wind_unit: str = "m/s"
    icon_url: Optional[str] = None
    switch_label: str


class DailyView(BaseModel):
    date: str
    description: str
    icon_url: Optional[str] = None
    temperature: int
    # the forecast strip is never converted
    unit: str = TemperatureUnit.CELSIUS.symbol


class SessionView(BaseModel):
    status: QueryState
    error: Optional[str] = None
    unit: str = TemperatureUnit.CELSIUS.symbol
    current: Optional[CurrentView] = None
    daily: List[DailyView] = Field(default_factory=list)


def icon_url(icon: str, base_url: str = DEFAULT_ICON_URL) -> Optional[str]:
    if not icon:
        return None
    return f"{base_url.rstrip('/')}/{icon}@2x.png"


def current_view(current: CurrentConditions, unit: TemperatureUnit, base_url: str = DEFAULT_ICON_URL) -> CurrentView:
    return CurrentView(
        name=current.name,
        temperature=math.ceil(current.temperature),
        unit=unit.symbol,
        description=current.description,
        humidity=current.humidity,
        cloudiness=current.cloudiness,
        wind_speed=math.ceil(current.wind_speed),
        icon_url=icon_url(current.icon, base_url),
        switch_label=f"Switch to {unit.other.value.capitalize()}",
    )


def daily_view(entry: ForecastEntry, base_url: str = DEFAULT_ICON_URL, tz: Optional[tzinfo] = None) -> DailyView:
    return DailyView(
        date=date_label(entry, tz),
        description=entry.description,
        icon_url=icon_url(entry.icon, base_url),
        temperature=math.ceil(entry.temperature),
    )


def session_view(
    status: QueryState,
    error: Optional[str],
    unit: TemperatureUnit,
    current: Optional[CurrentConditions],
    daily: Sequence[ForecastEntry],
    base_url: str = DEFAULT_ICON_URL,
    tz: Optional[tzinfo] = None,
) -> SessionView:
    return SessionView(
        status=status,
        error=error,
        unit=unit.symbol,
        current=current_view(current, unit, base_url) if current is not None else None,
        daily=[daily_view(entry, base_url, tz) for entry in daily],
    )
