"""Pydantic schemas for the crop-outcome simulator."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from agriwise.models.enums import (
	GrowthCondition,
	GrowthStage,
	RiskLevel,
	SoilType,
	SustainabilityImpact,
	WaterLevel,
)


def _normalize_crop_id(value: str) -> str:
	normalized = value.strip().lower()
	if not normalized:
		raise ValueError("crop_id must not be blank")
	return normalized


# Catalog ids are lower-case; "RICE" and " rice " resolve to the rice profile.
CropId = Annotated[str, Field(min_length=1, max_length=64), AfterValidator(_normalize_crop_id)]


class GrowingConditions(BaseModel):
	soil_type: SoilType
	water_level: WaterLevel


class SimulationRequest(GrowingConditions):
	crop_id: CropId
	crop_name: str | None = Field(default=None, min_length=1, max_length=100)


class ComparisonRequest(BaseModel):
	crop_id: CropId
	crop_name: str | None = Field(default=None, min_length=1, max_length=100)
	baseline: GrowingConditions
	alternative: GrowingConditions


class StageResult(BaseModel):
	model_config = ConfigDict(frozen=True)

	stage: GrowthStage
	growth_condition: GrowthCondition
	risk_level: RiskLevel
	sustainability_impact: SustainabilityImpact
	description: str
	tips: tuple[str, ...] = Field(default=(), max_length=3)


class SimulationResult(BaseModel):
	model_config = ConfigDict(frozen=True)

	crop_id: str
	crop_name: str
	soil_type: SoilType
	water_level: WaterLevel
	base_score: float
	stages: tuple[StageResult, ...] = Field(min_length=3, max_length=3)
	overall_outlook: str


class ComparisonResult(BaseModel):
	baseline: SimulationResult
	alternative: SimulationResult
	score_delta: float
