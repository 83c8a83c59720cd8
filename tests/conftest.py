import os

import httpx
import pytest

# Minimal env so pydantic-settings doesn't require a real .env file
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

from payloads import current_payload, forecast_payload  # noqa: E402


@pytest.fixture()
def requests_seen():
    return []


@pytest.fixture()
def provider_transport(requests_seen):
    """
    Fake OpenWeather: /weather and /forecast answer with the sample payloads.
    Tests overwrite ``transport.responses[<path>]`` with a (status, body)
    pair or an exception to inject failures.
    """
    responses = {
        "weather": (200, current_payload()),
        "forecast": (200, forecast_payload()),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        answer = responses[request.url.path.rsplit("/", 1)[-1]]
        if isinstance(answer, Exception):
            raise answer
        status, body = answer
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    transport = httpx.MockTransport(handler)
    transport.responses = responses
    return transport
