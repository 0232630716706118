from __future__ import annotations

import httpx
import pytest
from httpx import AsyncClient

from agriwise.schemas.weather import WeatherRequest, WeatherResponse
from agriwise.services.errors import UpstreamError
from agriwise.services.weather_service import WeatherService, farming_recommendations, weather_condition


def _open_meteo(current: dict[str, object], status_code: int = 200) -> httpx.MockTransport:
	def handler(request: httpx.Request) -> httpx.Response:
		assert request.url.params["current"].startswith("temperature_2m")
		assert request.url.params["timezone"] == "auto"
		return httpx.Response(status_code, json={"current": current})

	return httpx.MockTransport(handler)


@pytest.mark.parametrize(
	("code", "label"),
	[
		(0, "Clear sky"),
		(2, "Partly cloudy"),
		(45, "Foggy"),
		(53, "Drizzle"),
		(63, "Rain"),
		(75, "Snow"),
		(81, "Rain showers"),
		(86, "Snow showers"),
		(90, "Unknown"),
		(96, "Thunderstorm"),
	],
)
def test_weather_condition_labels(code: int, label: str) -> None:
	assert weather_condition(code) == label


def test_recommendations_for_mild_dry_day() -> None:
	tips = farming_recommendations(24.0, 50.0, 0.0, 1)
	assert len(tips) == 2
	assert "Optimal temperature range" in tips[0]
	assert "No rain expected" in tips[1]


def test_recommendations_truncate_to_five() -> None:
	tips = farming_recommendations(37.0, 90.0, 15.0, 95)
	assert len(tips) == 5
	assert not any("Thunderstorm alert" in tip for tip in tips)


@pytest.mark.asyncio
async def test_weather_service_maps_open_meteo_payload() -> None:
	service = WeatherService(
		transport=_open_meteo(
			{
				"temperature_2m": 31.5,
				"relative_humidity_2m": 24.4,
				"precipitation": 0.4,
				"wind_speed_10m": 11.6,
				"weather_code": 61,
			}
		)
	)
	result = await service.get_current(WeatherRequest(latitude=12.9716, longitude=77.5946))

	assert result.temperature == 32
	assert result.humidity == 24
	assert result.precipitation == pytest.approx(0.4)
	assert result.wind_speed == 12
	assert result.condition == "Rain"
	assert result.location == "12.97°, 77.59°"
	assert len(result.recommendations) == 3
	assert "Warm conditions" in result.recommendations[0]
	assert "Low humidity" in result.recommendations[1]
	assert "Light rain expected" in result.recommendations[2]


@pytest.mark.asyncio
async def test_weather_service_prefers_location_name() -> None:
	service = WeatherService(
		transport=_open_meteo(
			{
				"temperature_2m": 20,
				"relative_humidity_2m": 50,
				"precipitation": 0,
				"wind_speed_10m": 3,
				"weather_code": 0,
			}
		)
	)
	result = await service.get_current(WeatherRequest(latitude=0.0, longitude=0.0, location_name="Nakuru"))
	assert result.location == "Nakuru"


@pytest.mark.asyncio
async def test_weather_service_upstream_failure() -> None:
	service = WeatherService(transport=_open_meteo({}, status_code=503))
	with pytest.raises(UpstreamError) as excinfo:
		await service.get_current(WeatherRequest(latitude=1.0, longitude=1.0))
	assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_weather_service_incomplete_payload() -> None:
	service = WeatherService(transport=_open_meteo({"temperature_2m": 20}))
	with pytest.raises(UpstreamError):
		await service.get_current(WeatherRequest(latitude=1.0, longitude=1.0))


@pytest.mark.asyncio
async def test_weather_endpoint_success(
	client: AsyncClient,
	auth_headers: dict[str, str],
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	async def fake_current(self: WeatherService, request: WeatherRequest) -> WeatherResponse:
		return WeatherResponse(
			temperature=22,
			humidity=60,
			precipitation=0.0,
			wind_speed=5,
			weather_code=0,
			condition="Clear sky",
			location=request.location_name or "unknown",
			recommendations=["☀️ No rain expected: Check soil moisture and irrigate as needed."],
		)

	monkeypatch.setattr(WeatherService, "get_current", fake_current)

	response = await client.post(
		"/api/v1/weather",
		json={"latitude": -1.29, "longitude": 36.82, "location_name": "Nairobi"},
		headers=auth_headers,
	)
	assert response.status_code == 200
	body = response.json()
	assert body["location"] == "Nairobi"
	assert body["condition"] == "Clear sky"


@pytest.mark.asyncio
async def test_weather_endpoint_rejects_out_of_range_latitude(
	client: AsyncClient,
	auth_headers: dict[str, str],
) -> None:
	response = await client.post(
		"/api/v1/weather",
		json={"latitude": 91.0, "longitude": 0.0},
		headers=auth_headers,
	)
	assert response.status_code == 400
	assert response.json()["detail"]["error"] == "validation_error"


@pytest.mark.asyncio
async def test_weather_endpoint_maps_upstream_failure(
	client: AsyncClient,
	auth_headers: dict[str, str],
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	async def failing(self: WeatherService, request: WeatherRequest) -> WeatherResponse:
		raise UpstreamError("Failed to fetch weather data")

	monkeypatch.setattr(WeatherService, "get_current", failing)

	response = await client.post("/api/v1/weather", json={"latitude": 5.0, "longitude": 5.0}, headers=auth_headers)
	assert response.status_code == 500
	assert response.json()["detail"] == {"error": "upstream_failure", "message": "Failed to fetch weather data"}
