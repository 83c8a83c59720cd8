from datetime import date, datetime, tzinfo
from typing import List, Optional

from skycast.models import ForecastEntry, ForecastSeries

FORECAST_DAYS = 5


def forecast_date(entry: ForecastEntry, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of an entry; host local time unless ``tz`` is given."""
    return datetime.fromtimestamp(entry.dt, tz=tz).date()


def date_label(entry: ForecastEntry, tz: Optional[tzinfo] = None) -> str:
    # %x: the host locale's date representation
    return forecast_date(entry, tz).strftime("%x")


def daily_forecast(
    series: ForecastSeries,
    days: int = FORECAST_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[ForecastEntry]:
    """
    One entry per calendar date, the first one seen for that date, in series
    order. At most ``days`` entries.
    """
    daily: List[ForecastEntry] = []
    seen = set()
    for entry in series.entries:
        if len(daily) >= days:
            break
        day = forecast_date(entry, tz)
        if day in seen:
            continue
        seen.add(day)
        daily.append(entry)
    return daily
