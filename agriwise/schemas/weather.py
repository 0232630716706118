"""Pydantic schemas for the weather proxy."""

from __future__ import annotations

from pydantic import BaseModel, Field


class WeatherRequest(BaseModel):
	latitude: float = Field(ge=-90.0, le=90.0)
	longitude: float = Field(ge=-180.0, le=180.0)
	location_name: str | None = Field(default=None, max_length=200)


class WeatherResponse(BaseModel):
	temperature: int
	humidity: int
	precipitation: float
	wind_speed: int
	weather_code: int
	condition: str
	location: str
	recommendations: list[str] = Field(default_factory=list, max_length=5)
