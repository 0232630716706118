"""Crop-outcome simulation routes."""

from __future__ import annotations

from fastapi import APIRouter

from agriwise.schemas.simulation import (
	ComparisonRequest,
	ComparisonResult,
	SimulationRequest,
	SimulationResult,
)
from agriwise.services.simulation_service import SimulationService

router = APIRouter(prefix="/simulations", tags=["simulations"])


@router.post("", response_model=SimulationResult)
async def run_simulation(payload: SimulationRequest) -> SimulationResult:
	return SimulationService().run(payload)


@router.post("/compare", response_model=ComparisonResult)
async def compare_conditions(payload: ComparisonRequest) -> ComparisonResult:
	return SimulationService().compare(payload)
