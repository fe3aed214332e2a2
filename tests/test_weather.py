"""Tests for the weather forecast proxy"""

import json

import httpx
import pytest

from dsolar import config
from dsolar.routes import weather

FORECAST = {"ts": [1700000000000], "temp-surface": [302.1], "units": {"temp-surface": "K"}}


@pytest.fixture
def windy(monkeypatch):
    """Route outgoing Windy calls to an in-process handler"""
    monkeypatch.setattr(config, "WINDY_API_KEY", "windy-key")
    requests = []
    state = {"status": 200, "body": FORECAST, "error": None}
    real_async_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if state["error"]:
            raise state["error"]
        return httpx.Response(state["status"], json=state["body"])

    def client_factory(*args, **kwargs):
        return real_async_client(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(weather.httpx, "AsyncClient", client_factory)
    return {"requests": requests, "state": state}


def test_forecast_is_proxied(client, windy):
    response = client.post("/api/weather", json={"lat": "14.5995", "lon": 120.9842})

    assert response.status_code == 200
    assert response.json() == FORECAST

    sent = windy["requests"][0]
    assert str(sent.url) == config.WINDY_API_URL
    payload = json.loads(sent.content)
    assert payload["lat"] == 14.5995
    assert payload["model"] == "gfs"
    assert payload["levels"] == ["surface"]
    assert payload["key"] == "windy-key"
    assert "temp" in payload["parameters"]


@pytest.mark.parametrize(
    "body",
    [{}, {"lat": 14.6}, {"lat": "north", "lon": 121}, {"lat": 91, "lon": 121}, {"lat": 14.6, "lon": -181}, {"lat": True, "lon": 121}],
)
def test_invalid_coordinates(client, windy, body):
    assert client.post("/api/weather", json=body).status_code == 400
    assert windy["requests"] == []


def test_missing_api_key(client, monkeypatch):
    monkeypatch.setattr(config, "WINDY_API_KEY", None)
    assert client.post("/api/weather", json={"lat": 14.6, "lon": 121}).status_code == 503


def test_upstream_error_status(client, windy):
    windy["state"]["status"] = 401
    windy["state"]["body"] = {"message": "Invalid key"}

    assert client.post("/api/weather", json={"lat": 14.6, "lon": 121}).status_code == 502


def test_upstream_unreachable(client, windy):
    windy["state"]["error"] = httpx.ConnectError("connection refused")

    assert client.post("/api/weather", json={"lat": 14.6, "lon": 121}).status_code == 502
