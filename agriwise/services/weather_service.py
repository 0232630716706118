"""Weather proxy — Open-Meteo current conditions plus farming recommendations.

Weather is advisory only; nothing here feeds the crop simulator.
"""

from __future__ import annotations

import math
from typing import Any

import httpx
import structlog

from agriwise.config import get_settings
from agriwise.schemas.weather import WeatherRequest, WeatherResponse
from agriwise.services.errors import UpstreamError

logger = structlog.get_logger("agriwise.weather")

MAX_RECOMMENDATIONS = 5

_CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,precipitation,wind_speed_10m,weather_code"


def _round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def weather_condition(code: int) -> str:
	"""Human label for a WMO weather interpretation code."""
	if code == 0:
		return "Clear sky"
	if code <= 3:
		return "Partly cloudy"
	if code <= 49:
		return "Foggy"
	if code <= 59:
		return "Drizzle"
	if code <= 69:
		return "Rain"
	if code <= 79:
		return "Snow"
	if code <= 84:
		return "Rain showers"
	if code <= 86:
		return "Snow showers"
	if code >= 95:
		return "Thunderstorm"
	return "Unknown"


def farming_recommendations(
	temperature: float,
	humidity: float,
	precipitation: float,
	weather_code: int,
) -> list[str]:
	recommendations: list[str] = []

	if temperature > 35:
		recommendations.append(
			"🔥 High heat alert: Increase irrigation frequency and consider shade covers for sensitive crops."
		)
		recommendations.append("💧 Water crops early morning or late evening to reduce evaporation.")
	elif temperature > 30:
		recommendations.append("☀️ Warm conditions: Monitor soil moisture closely and mulch to retain water.")
	elif temperature < 10:
		recommendations.append(
			"❄️ Cool conditions: Protect frost-sensitive crops with covers or move to greenhouses."
		)
		recommendations.append("🌱 Delay planting of warm-season crops until temperatures rise.")
	elif 20 <= temperature <= 28:
		recommendations.append(
			"✅ Optimal temperature range for most crops. Good conditions for planting and growth."
		)

	if humidity > 80:
		recommendations.append(
			"💨 High humidity: Watch for fungal diseases. Ensure good air circulation around plants."
		)
	elif humidity < 30:
		recommendations.append(
			"🏜️ Low humidity: Increase watering frequency. Consider misting for moisture-loving crops."
		)

	if precipitation > 10:
		recommendations.append("🌧️ Heavy rain expected: Ensure proper drainage to prevent waterlogging.")
		recommendations.append("⏸️ Delay fertilizer application until rain passes to prevent runoff.")
	elif precipitation > 0:
		recommendations.append("🌦️ Light rain expected: Good natural irrigation. Reduce manual watering.")
	else:
		recommendations.append("☀️ No rain expected: Check soil moisture and irrigate as needed.")

	if weather_code >= 95:
		recommendations.append(
			"⛈️ Thunderstorm alert: Secure loose equipment and delay outdoor farming activities."
		)
	if 71 <= weather_code <= 79:
		recommendations.append("🌨️ Snow conditions: Protect perennial crops and greenhouse structures.")

	return recommendations[:MAX_RECOMMENDATIONS]


class WeatherService:
	def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
		self.settings = get_settings()
		self.transport = transport

	async def get_current(self, request: WeatherRequest) -> WeatherResponse:
		current = await self.fetch_current(request.latitude, request.longitude)
		try:
			temperature = float(current["temperature_2m"])
			humidity = float(current["relative_humidity_2m"])
			precipitation = float(current["precipitation"])
			wind_speed = float(current["wind_speed_10m"])
			weather_code = int(current["weather_code"])
		except (KeyError, TypeError, ValueError) as exc:
			logger.error("weather_payload_invalid", error=str(exc))
			raise UpstreamError("Failed to fetch weather data") from exc

		location = request.location_name or f"{request.latitude:.2f}°, {request.longitude:.2f}°"
		return WeatherResponse(
			temperature=_round_half_up(temperature),
			humidity=_round_half_up(humidity),
			precipitation=precipitation,
			wind_speed=_round_half_up(wind_speed),
			weather_code=weather_code,
			condition=weather_condition(weather_code),
			location=location,
			recommendations=farming_recommendations(temperature, humidity, precipitation, weather_code),
		)

	async def fetch_current(self, latitude: float, longitude: float) -> dict[str, Any]:
		params = {
			"latitude": latitude,
			"longitude": longitude,
			"current": _CURRENT_FIELDS,
			"timezone": "auto",
		}
		try:
			async with httpx.AsyncClient(
				timeout=self.settings.weather_timeout_seconds,
				transport=self.transport,
			) as client:
				response = await client.get(self.settings.weather_base_url, params=params)
		except httpx.HTTPError as exc:
			logger.error("weather_upstream_unreachable", error=str(exc))
			raise UpstreamError("Failed to fetch weather data") from exc

		if response.status_code != 200:
			logger.error("weather_upstream_error", status_code=response.status_code)
			raise UpstreamError("Failed to fetch weather data")

		try:
			payload = response.json()
		except ValueError as exc:
			logger.error("weather_payload_invalid", error=str(exc))
			raise UpstreamError("Failed to fetch weather data") from exc

		current = payload.get("current") if isinstance(payload, dict) else None
		if not isinstance(current, dict):
			logger.error("weather_payload_invalid", error="missing current block")
			raise UpstreamError("Failed to fetch weather data")
		return current
