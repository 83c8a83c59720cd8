"""
Tests for the SkyCast HTTP surface.
The OpenWeather client is fully mocked so no live provider connection is
needed; each test gets its own WeatherSession patched into the app.
"""
from datetime import timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from payloads import report
from skycast.errors import GEOLOCATION_UNSUPPORTED, WEATHER_LOOKUP_FAILED, WeatherLookupError
from skycast.models import Location
from skycast.services.session import WeatherSession


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def _make_ow(result=None, side_effect=None):
    ow = MagicMock()
    ow.fetch = AsyncMock(return_value=result or report(), side_effect=side_effect)
    return ow


@pytest.fixture()
def ow_mock():
    return _make_ow()


@pytest.fixture()
def client(ow_mock):
    """TestClient around a fresh session whose provider always succeeds."""
    session = WeatherSession(ow_mock, tz=timezone.utc)

    with patch("skycast.main.session", session):
        from skycast.main import app
        with TestClient(app) as c:
            yield c


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "docs" in resp.json()


# ---------------------------------------------------------------------------
# /v1/session
# ---------------------------------------------------------------------------

def test_session_starts_idle(client):
    resp = client.get("/v1/session")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "idle"
    assert data["current"] is None
    assert data["daily"] == []


# ---------------------------------------------------------------------------
# /v1/session/search — happy path
# ---------------------------------------------------------------------------

def test_search_happy_path(client, ow_mock):
    resp = client.post("/v1/session/search?city=London")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "success"
    assert data["unit"] == "°C"
    assert data["current"]["name"] == "London"
    assert data["current"]["icon_url"].endswith("/01d@2x.png")
    assert len(data["daily"]) == 2
    ow_mock.fetch.assert_awaited_once_with(Location(name="London"))

    # state survives across requests
    assert client.get("/v1/session").json()["current"]["name"] == "London"


def test_search_empty_city_is_noop(client, ow_mock):
    resp = client.post("/v1/session/search?city=%20%20")
    assert resp.status_code == 200
    assert resp.json()["status"] == "idle"
    ow_mock.fetch.assert_not_awaited()


def test_search_missing_city_is_noop(client, ow_mock):
    resp = client.post("/v1/session/search")
    assert resp.status_code == 200
    assert resp.json()["status"] == "idle"
    ow_mock.fetch.assert_not_awaited()


# ---------------------------------------------------------------------------
# Lookup failures come back as session state, not HTTP errors
# ---------------------------------------------------------------------------

def test_city_not_found_is_error_state():
    session = WeatherSession(_make_ow(side_effect=WeatherLookupError()))

    with patch("skycast.main.session", session):
        from skycast.main import app
        with TestClient(app) as c:
            resp = c.post("/v1/session/search?city=XxXNotACity")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "error"
    assert data["error"] == WEATHER_LOOKUP_FAILED
    assert data["current"] is None


# ---------------------------------------------------------------------------
# /v1/session/locate
# ---------------------------------------------------------------------------

def test_locate_with_device_coordinates(client, ow_mock):
    resp = client.post("/v1/session/locate?lat=51.5&lon=-0.13")
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"
    ow_mock.fetch.assert_awaited_once_with(Location(latitude=51.5, longitude=-0.13))


def test_locate_without_coordinates_or_fallback(client, ow_mock):
    with patch("skycast.main.settings.ip_geolocation_url", None):
        resp = client.post("/v1/session/locate")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "error"
    assert data["error"] == GEOLOCATION_UNSUPPORTED
    ow_mock.fetch.assert_not_awaited()


def test_locate_falls_back_to_ip_geolocation(client, ow_mock):
    geolocator = MagicMock()
    geolocator.locate = AsyncMock(return_value=(59.91, 10.75))

    with patch("skycast.main.settings.ip_geolocation_url", "https://ipapi.test/json/"), patch(
        "skycast.main.IPGeolocator", return_value=geolocator
    ) as ip_geolocator:
        resp = client.post("/v1/session/locate")

    assert resp.json()["status"] == "success"
    ip_geolocator.assert_called_once()
    ow_mock.fetch.assert_awaited_once_with(Location(latitude=59.91, longitude=10.75))


def test_locate_out_of_range(client):
    resp = client.post("/v1/session/locate?lat=999&lon=0")
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# /v1/session/toggle-unit
# ---------------------------------------------------------------------------

def test_toggle_unit(client):
    client.post("/v1/session/search?city=London")

    data = client.post("/v1/session/toggle-unit").json()
    assert data["unit"] == "°F"
    assert data["current"]["temperature"] == 59
    assert data["current"]["switch_label"] == "Switch to Celsius"
    assert all(day["unit"] == "°C" for day in data["daily"])

    data = client.post("/v1/session/toggle-unit").json()
    assert data["unit"] == "°C"
    assert data["current"]["temperature"] == 15


def test_toggle_unit_before_search_is_ignored(client):
    resp = client.post("/v1/session/toggle-unit")
    assert resp.status_code == 200
    assert resp.json()["status"] == "idle"
    assert resp.json()["unit"] == "°C"
