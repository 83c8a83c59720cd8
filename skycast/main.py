from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from skycast.config import settings
from skycast.logging import configure_logging
from skycast.services.location import Geolocator, IPGeolocator, StaticGeolocator
from skycast.services.openweather import OpenWeatherClient
from skycast.services.session import WeatherSession
from skycast.views import SessionView

configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name)

ow = OpenWeatherClient(
    settings.openweather_base_url,
    settings.openweather_api_key,
    timeout_seconds=settings.http_timeout_seconds,
)
session = WeatherSession(
    ow,
    forecast_days=settings.forecast_days,
    icon_base_url=settings.openweather_icon_url,
)


@app.get("/health")
def health():
    return {"status": "ok", "service": settings.app_name}


@app.get("/")
def root():
    return JSONResponse({"service": settings.app_name, "docs": "/docs"})


# ── Session endpoints ────────────────────────────────────────────────────────

@app.get("/v1/session", response_model=SessionView)
def get_session():
    return session.view()


@app.post("/v1/session/search", response_model=SessionView)
async def search(city: str = Query("", description="City name, e.g. 'London'")):
    await session.submit(city)
    return session.view()


@app.post("/v1/session/locate", response_model=SessionView)
async def locate(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
):
    await session.submit_geolocation(_geolocator(lat, lon))
    return session.view()


@app.post("/v1/session/toggle-unit", response_model=SessionView)
def toggle_unit():
    session.toggle_unit()
    return session.view()


# ── Shared helpers ───────────────────────────────────────────────────────────

def _geolocator(lat: Optional[float], lon: Optional[float]) -> Optional[Geolocator]:
    """Device coordinates when sent, else the IP fallback if configured, else none."""
    if lat is not None and lon is not None:
        return StaticGeolocator(lat, lon)
    if settings.ip_geolocation_url:
        return IPGeolocator(settings.ip_geolocation_url, timeout_seconds=settings.http_timeout_seconds)
    return None
