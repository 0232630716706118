"""Crop encyclopedia and planting calendar routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from agriwise.schemas.crops import CalendarResponse, CropListResponse, CropRead, SelectionOptions
from agriwise.services.catalog_service import CatalogService

router = APIRouter(tags=["crops"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "not_found", "message": str(exc)})
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": "invalid_request", "message": str(exc)})
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail={"error": "internal", "message": "catalog failure"})


@router.get("/crops", response_model=CropListResponse)
async def list_crops(q: str | None = Query(default=None, max_length=100)) -> CropListResponse:
	return CatalogService().list_crops(q)


@router.get("/crops/options", response_model=SelectionOptions)
async def selection_options() -> SelectionOptions:
	return CatalogService().selection_options()


@router.get("/crops/{crop_id}", response_model=CropRead)
async def get_crop(crop_id: str) -> CropRead:
	try:
		return CatalogService().get_crop(crop_id)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/calendar", response_model=CalendarResponse)
async def planting_calendar(
	month: int | None = Query(default=None),
	q: str | None = Query(default=None, max_length=100),
) -> CalendarResponse:
	try:
		return CatalogService().calendar(month=month, query=q)
	except Exception as exc:
		raise _map_error(exc) from exc
