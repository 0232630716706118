"""Pydantic schemas for the crop encyclopedia and planting calendar."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from agriwise.models.enums import MonthActivity, Season, SoilType, WaterLevel


class CropRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	name: str
	icon: str
	soil_type: str
	water_requirement: WaterLevel
	growing_season: str
	sustainability_notes: str
	description: str


class CropListResponse(BaseModel):
	total: int
	items: list[CropRead] = Field(default_factory=list)


class SelectionOptions(BaseModel):
	soil_types: list[SoilType]
	water_levels: list[WaterLevel]


class CalendarRow(BaseModel):
	crop_id: str
	crop_name: str
	# index 0 is January
	months: list[MonthActivity] = Field(min_length=12, max_length=12)


class CalendarResponse(BaseModel):
	month: int = Field(ge=1, le=12)
	season: Season
	rows: list[CalendarRow] = Field(default_factory=list)
	plant_now: list[str] = Field(default_factory=list)
	harvest_now: list[str] = Field(default_factory=list)
