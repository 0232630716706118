"""Crop encyclopedia search and seasonal planting calendar."""

from __future__ import annotations

from datetime import UTC, datetime

from agriwise.models.crops import CROPS, PLANTING_CALENDAR, display_name, get_crop, get_planting_window
from agriwise.models.enums import MonthActivity, Season, SoilType, WaterLevel
from agriwise.schemas.crops import (
	CalendarResponse,
	CalendarRow,
	CropListResponse,
	CropRead,
	SelectionOptions,
)

SEASON_MONTHS: dict[Season, frozenset[int]] = {
	Season.winter: frozenset({12, 1, 2}),
	Season.spring: frozenset({3, 4, 5}),
	Season.summer: frozenset({6, 7, 8}),
	Season.autumn: frozenset({9, 10, 11}),
}

_MONTH_SEASON: dict[int, Season] = {
	month: season for season, months in SEASON_MONTHS.items() for month in months
}


def _validate_month(month: int) -> None:
	if month not in _MONTH_SEASON:
		raise ValueError(f"month must be between 1 and 12, got {month}")


def season_for_month(month: int) -> Season:
	_validate_month(month)
	return _MONTH_SEASON[month]


def month_activity(crop_id: str, month: int) -> MonthActivity:
	"""Calendar cell for ``crop_id`` in ``month`` (1-12); unknown crops are ``none``."""
	_validate_month(month)
	window = get_planting_window(crop_id)
	if window is None:
		return MonthActivity.none

	is_plant = month in window.plant_months
	is_harvest = month in window.harvest_months
	if is_plant and is_harvest:
		return MonthActivity.both
	if is_plant:
		return MonthActivity.plant
	if is_harvest:
		return MonthActivity.harvest
	return MonthActivity.none


def _matches(query: str | None, *fields: str) -> bool:
	if not query:
		return True
	needle = query.strip().lower()
	return any(needle in field.lower() for field in fields)


class CatalogService:
	def list_crops(self, query: str | None = None) -> CropListResponse:
		items = [
			CropRead.model_validate(crop)
			for crop in CROPS
			if _matches(query, crop.name, crop.description, crop.soil_type)
		]
		return CropListResponse(total=len(items), items=items)

	def get_crop(self, crop_id: str) -> CropRead:
		crop = get_crop(crop_id.strip().lower())
		if crop is None:
			raise LookupError(f"crop '{crop_id}' not found")
		return CropRead.model_validate(crop)

	def selection_options(self) -> SelectionOptions:
		return SelectionOptions(soil_types=list(SoilType), water_levels=list(WaterLevel))

	def calendar(self, month: int | None = None, query: str | None = None) -> CalendarResponse:
		if month is None:
			month = datetime.now(UTC).month
		season = season_for_month(month)

		rows: list[CalendarRow] = []
		plant_now: list[str] = []
		harvest_now: list[str] = []
		for crop_id in PLANTING_CALENDAR:
			crop_name = display_name(crop_id)
			if not _matches(query, crop_id, crop_name):
				continue
			rows.append(
				CalendarRow(
					crop_id=crop_id,
					crop_name=crop_name,
					months=[month_activity(crop_id, m) for m in range(1, 13)],
				)
			)
			activity = month_activity(crop_id, month)
			if activity in (MonthActivity.plant, MonthActivity.both):
				plant_now.append(crop_id)
			if activity in (MonthActivity.harvest, MonthActivity.both):
				harvest_now.append(crop_id)

		return CalendarResponse(
			month=month,
			season=season,
			rows=rows,
			plant_now=plant_now,
			harvest_now=harvest_now,
		)
