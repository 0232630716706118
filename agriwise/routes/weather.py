"""Weather proxy route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from agriwise.auth.dependencies import AuthPrincipal, require_bearer
from agriwise.schemas.weather import WeatherRequest, WeatherResponse
from agriwise.services.errors import UpstreamError
from agriwise.services.weather_service import WeatherService

router = APIRouter(prefix="/weather", tags=["weather"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, UpstreamError):
		return HTTPException(status_code=exc.status_code, detail={"error": exc.code, "message": exc.detail})
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail={"error": "internal", "message": "An unexpected error occurred"},
	)


@router.post("", response_model=WeatherResponse)
async def current_weather(
	payload: WeatherRequest,
	_principal: AuthPrincipal = Depends(require_bearer),
) -> WeatherResponse:
	try:
		return await WeatherService().get_current(payload)
	except Exception as exc:
		raise _map_error(exc) from exc
