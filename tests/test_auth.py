from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from agriwise.auth.jwt import AuthError, create_access_token, decode_token
from agriwise.config import get_settings
from agriwise.main import app
from agriwise.schemas.weather import WeatherRequest, WeatherResponse
from agriwise.services.weather_service import WeatherService


def _signed(claims: dict[str, object]) -> str:
    settings = get_settings()
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


async def _fake_weather(self: WeatherService, request: WeatherRequest) -> WeatherResponse:
    return WeatherResponse(
        temperature=24,
        humidity=55,
        precipitation=0.0,
        wind_speed=8,
        weather_code=1,
        condition="Partly cloudy",
        location=request.location_name or "test",
        recommendations=[],
    )


@pytest.mark.asyncio
async def test_missing_bearer_rejected_on_proxy(client: AsyncClient) -> None:
    response = await client.post("/api/v1/weather", json={"latitude": 10.0, "longitude": 20.0})
    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "auth_required"


@pytest.mark.asyncio
async def test_invalid_bearer_rejected_on_proxy(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/chat",
        json={"messages": [{"role": "user", "content": "hello"}]},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "token_invalid"


def test_jwt_create_decode_roundtrip() -> None:
    token = create_access_token("farmer-42", expires_minutes=5)
    payload = decode_token(token)
    assert payload["sub"] == "farmer-42"
    assert payload["typ"] == "access"


def test_decode_invalid_token_raises_auth_error() -> None:
    with pytest.raises(AuthError) as excinfo:
        decode_token("invalid.token.payload")
    assert excinfo.value.code == "token_invalid"


def test_decode_expired_token() -> None:
    past = datetime.now(UTC) - timedelta(minutes=5)
    token = _signed({"sub": "farmer-42", "typ": "access", "exp": int(past.timestamp())})
    with pytest.raises(AuthError) as excinfo:
        decode_token(token)
    assert excinfo.value.code == "token_expired"


def test_decode_rejects_non_access_token() -> None:
    future = datetime.now(UTC) + timedelta(minutes=5)
    token = _signed({"sub": "farmer-42", "typ": "refresh", "exp": int(future.timestamp())})
    with pytest.raises(AuthError) as excinfo:
        decode_token(token)
    assert excinfo.value.code == "token_type_invalid"


@pytest.mark.asyncio
async def test_rate_limit_per_client(
    fake_redis: object,
    client: AsyncClient,
    auth_headers: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    app.state.redis = fake_redis

    @dataclass
    class _SettingsStub:
        rate_limit_proxy_per_minute: int = 1

    monkeypatch.setattr("agriwise.middleware.rate_limit.get_settings", lambda: _SettingsStub())
    monkeypatch.setattr(WeatherService, "get_current", _fake_weather)

    payload = {"latitude": 10.0, "longitude": 20.0}
    first = await client.post("/api/v1/weather", json=payload, headers=auth_headers)
    second = await client.post("/api/v1/weather", json=payload, headers=auth_headers)

    assert first.status_code == 200
    assert second.status_code == 429
    assert second.json()["detail"]["error"] == "rate_limited"


@pytest.mark.asyncio
async def test_rate_limit_skips_simulator(
    fake_redis: object,
    client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    app.state.redis = fake_redis

    @dataclass
    class _SettingsStub:
        rate_limit_proxy_per_minute: int = 0

    monkeypatch.setattr("agriwise.middleware.rate_limit.get_settings", lambda: _SettingsStub())

    payload = {"crop_id": "wheat", "soil_type": "Loamy", "water_level": "Medium"}
    for _ in range(3):
        response = await client.post("/api/v1/simulations", json=payload)
        assert response.status_code == 200
