"""Request-level orchestration around the pure simulator."""

from __future__ import annotations

import structlog

from agriwise.models.crops import display_name
from agriwise.schemas.simulation import (
	ComparisonRequest,
	ComparisonResult,
	SimulationRequest,
	SimulationResult,
)
from agriwise.services.simulation import simulate_crop_outcome

logger = structlog.get_logger("agriwise.simulation")


def resolve_crop_name(crop_id: str, crop_name: str | None = None) -> str:
	"""Caller-supplied name, else the catalog name, else the title-cased id."""
	if crop_name:
		return crop_name
	return display_name(crop_id)


class SimulationService:
	def run(self, request: SimulationRequest) -> SimulationResult:
		crop_name = resolve_crop_name(request.crop_id, request.crop_name)
		result = simulate_crop_outcome(
			request.crop_id,
			crop_name,
			request.soil_type,
			request.water_level,
		)
		logger.info(
			"simulation_completed",
			crop_id=result.crop_id,
			soil_type=result.soil_type.value,
			water_level=result.water_level.value,
			base_score=result.base_score,
		)
		return result

	def compare(self, request: ComparisonRequest) -> ComparisonResult:
		crop_name = resolve_crop_name(request.crop_id, request.crop_name)
		baseline = simulate_crop_outcome(
			request.crop_id,
			crop_name,
			request.baseline.soil_type,
			request.baseline.water_level,
		)
		alternative = simulate_crop_outcome(
			request.crop_id,
			crop_name,
			request.alternative.soil_type,
			request.alternative.water_level,
		)
		return ComparisonResult(
			baseline=baseline,
			alternative=alternative,
			score_delta=round(alternative.base_score - baseline.base_score, 4),
		)
