from __future__ import annotations

import pytest
from httpx import AsyncClient

from agriwise.models.enums import MonthActivity, Season
from agriwise.services.catalog_service import CatalogService, month_activity, season_for_month


def test_month_activity_cells() -> None:
	assert month_activity("rice", 6) == MonthActivity.plant
	assert month_activity("rice", 10) == MonthActivity.harvest
	assert month_activity("rice", 1) == MonthActivity.none
	# maize is planted and harvested in May and June
	assert month_activity("maize", 5) == MonthActivity.both
	assert month_activity("dragonfruit", 5) == MonthActivity.none


def test_month_activity_rejects_out_of_range_month() -> None:
	with pytest.raises(ValueError):
		month_activity("rice", 13)


@pytest.mark.parametrize(
	("month", "season"),
	[(12, Season.winter), (1, Season.winter), (4, Season.spring), (7, Season.summer), (11, Season.autumn)],
)
def test_season_for_month(month: int, season: Season) -> None:
	assert season_for_month(month) == season


@pytest.mark.parametrize("month", [0, 13])
def test_season_for_month_rejects_out_of_range_month(month: int) -> None:
	with pytest.raises(ValueError):
		season_for_month(month)


def test_calendar_lists_plant_and_harvest_crops() -> None:
	calendar = CatalogService().calendar(month=10)
	assert calendar.season == Season.autumn
	assert len(calendar.rows) == 24
	assert "wheat" in calendar.plant_now
	assert "rice" in calendar.harvest_now
	assert "sugarcane" in calendar.plant_now
	assert "sugarcane" not in calendar.harvest_now
	row = next(row for row in calendar.rows if row.crop_id == "banana")
	assert row.crop_name == "Banana"
	assert row.months[1] == MonthActivity.both


def test_list_crops_search() -> None:
	service = CatalogService()
	assert service.list_crops().total == 8
	legumes = service.list_crops("legume")
	assert [crop.id for crop in legumes.items] == ["soybean"]


@pytest.mark.asyncio
async def test_crop_detail_endpoint(client: AsyncClient) -> None:
	response = await client.get("/api/v1/crops/potato")
	assert response.status_code == 200
	body = response.json()
	assert body["name"] == "Potato"
	assert body["water_requirement"] == "Medium"

	missing = await client.get("/api/v1/crops/dragonfruit")
	assert missing.status_code == 404
	assert missing.json()["detail"]["error"] == "not_found"


@pytest.mark.asyncio
async def test_crop_list_and_options_endpoints(client: AsyncClient) -> None:
	listing = await client.get("/api/v1/crops", params={"q": "sandy"})
	assert listing.status_code == 200
	ids = {item["id"] for item in listing.json()["items"]}
	assert {"maize", "tomato", "potato"} <= ids

	options = await client.get("/api/v1/crops/options")
	assert options.status_code == 200
	assert options.json() == {
		"soil_types": ["Clay", "Sandy", "Loamy"],
		"water_levels": ["Low", "Medium", "High"],
	}


@pytest.mark.asyncio
async def test_calendar_endpoint(client: AsyncClient) -> None:
	response = await client.get("/api/v1/calendar", params={"month": 3, "q": "garl"})
	assert response.status_code == 200
	body = response.json()
	assert body["season"] == "Spring"
	assert [row["crop_id"] for row in body["rows"]] == ["garlic"]
	assert body["harvest_now"] == ["garlic"]

	invalid = await client.get("/api/v1/calendar", params={"month": 0})
	assert invalid.status_code == 400
