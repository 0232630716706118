"""Crop-outcome simulator — deterministic soil/water suitability scoring.

A run computes one base score for (crop, soil, water), scales it per growth
stage, and classifies each stage score into qualitative bands.  Every label,
description template and score-dependent tip keys off the same band table
(``SCORE_BANDS``), so condition and risk can never drift apart.

The module is pure: no I/O, no caching, no shared mutable state.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from agriwise.models.crops import get_compatibility, is_known_crop
from agriwise.models.enums import (
	GrowthCondition,
	GrowthStage,
	RiskLevel,
	SoilType,
	SustainabilityImpact,
	WaterLevel,
)
from agriwise.schemas.simulation import SimulationResult, StageResult

MATCHED_SCORE = 1.0
SOIL_MISMATCH_SCORE = 0.4
WATER_MISMATCH_SCORE = 0.5
WATER_DISTANCE_PENALTY = 0.2

STAGE_MULTIPLIERS: dict[GrowthStage, float] = {
	GrowthStage.early: 0.9,
	GrowthStage.mid: 1.0,
	GrowthStage.harvest: 1.05,
}


class ScoreBand(IntEnum):
	low = 0
	middle = 1
	high = 2


# Evaluated top-down; anything below the last bound is ScoreBand.low.
SCORE_BANDS: tuple[tuple[float, ScoreBand], ...] = (
	(0.75, ScoreBand.high),
	(0.5, ScoreBand.middle),
)

_CONDITION_BY_BAND = {
	ScoreBand.high: GrowthCondition.healthy,
	ScoreBand.middle: GrowthCondition.moderate,
	ScoreBand.low: GrowthCondition.poor,
}

_RISK_BY_BAND = {
	ScoreBand.high: RiskLevel.low,
	ScoreBand.middle: RiskLevel.medium,
	ScoreBand.low: RiskLevel.high,
}


def score_band(score: float) -> ScoreBand:
	for lower_bound, band in SCORE_BANDS:
		if score >= lower_bound:
			return band
	return ScoreBand.low


def calculate_score(crop_id: str, soil: SoilType, water: WaterLevel) -> float:
	"""Soil/water suitability of ``crop_id``; roughly 0.1-1.0, deliberately unclamped."""
	profile = get_compatibility(crop_id)

	soil_score = MATCHED_SCORE if soil in profile.ideal_soil else SOIL_MISMATCH_SCORE
	water_score = MATCHED_SCORE if water in profile.ideal_water else WATER_MISMATCH_SCORE

	ideal_water_index = max(level.ordinal for level in profile.ideal_water)
	water_diff = abs(water.ordinal - ideal_water_index)
	water_score -= water_diff * WATER_DISTANCE_PENALTY * profile.sensitivity

	return soil_score * 0.5 + water_score * 0.5


def condition(score: float) -> GrowthCondition:
	return _CONDITION_BY_BAND[score_band(score)]


def risk(score: float) -> RiskLevel:
	return _RISK_BY_BAND[score_band(score)]


def sustainability(crop_id: str, soil: SoilType, water: WaterLevel) -> SustainabilityImpact:
	"""Resource sustainability of the pairing, independent of the numeric score."""
	if not is_known_crop(crop_id):
		return SustainabilityImpact.medium

	profile = get_compatibility(crop_id)
	# A water-hungry crop on a dry plot is the worst case regardless of soil.
	if WaterLevel.high in profile.ideal_water and water == WaterLevel.low:
		return SustainabilityImpact.low
	if soil in profile.ideal_soil and water in profile.ideal_water:
		return SustainabilityImpact.high
	return SustainabilityImpact.medium


# ── Stage descriptions ──────────────────────────────────────────────────────

_EARLY_TEMPLATES = {
	ScoreBand.high: (
		"{crop} seedlings are expected to establish well in {soil} soil with {water} water availability. "
		"Root development should progress steadily."
	),
	ScoreBand.middle: (
		"{crop} may face some challenges during germination. "
		"The {soil} soil and {water} water conditions require monitoring."
	),
	ScoreBand.low: (
		"{crop} seedlings may struggle in current conditions. "
		"Consider soil amendments or adjusting irrigation practices."
	),
}

_MID_TEMPLATES = {
	ScoreBand.high: (
		"{crop} is expected to show vigorous vegetative growth. "
		"Nutrient uptake should be optimal with current soil and water conditions."
	),
	ScoreBand.middle: (
		"{crop} growth may be slower than optimal. Regular monitoring for stress signs is recommended."
	),
	ScoreBand.low: (
		"{crop} may exhibit stunted growth. "
		"Consider interventions such as organic fertilizers or irrigation adjustments."
	),
}

_HARVEST_TEMPLATES = {
	ScoreBand.high: (
		"{crop} is expected to reach maturity with favorable outcomes. Proper timing of harvest will be important."
	),
	ScoreBand.middle: (
		"{crop} may reach harvest with moderate results. Some quality variations are possible."
	),
	ScoreBand.low: (
		"{crop} harvest outcomes may be below expectations. Learning from this cycle can improve future seasons."
	),
}

_OUTLOOK_TEMPLATES = {
	ScoreBand.high: (
		"Based on the simulation, {crop} is well-suited to the selected conditions. "
		"With proper care and favorable weather, outcomes are expected to be positive."
	),
	ScoreBand.middle: (
		"{crop} can be grown under these conditions with some adjustments. "
		"Pay attention to the tips provided and monitor crop health regularly."
	),
	ScoreBand.low: (
		"The simulation suggests challenging conditions for {crop}. "
		"Consider alternative crops better suited to your land, "
		"or implement significant improvements to soil and irrigation."
	),
}


def _describe(templates: dict[ScoreBand, str], crop_name: str, score: float, soil: SoilType, water: WaterLevel) -> str:
	return templates[score_band(score)].format(
		crop=crop_name,
		soil=soil.value.lower(),
		water=water.value.lower(),
	)


def early_description(crop_name: str, score: float, soil: SoilType, water: WaterLevel) -> str:
	return _describe(_EARLY_TEMPLATES, crop_name, score, soil, water)


def mid_description(crop_name: str, score: float, soil: SoilType, water: WaterLevel) -> str:
	return _describe(_MID_TEMPLATES, crop_name, score, soil, water)


def harvest_description(crop_name: str, score: float, soil: SoilType, water: WaterLevel) -> str:
	return _describe(_HARVEST_TEMPLATES, crop_name, score, soil, water)


def overall_outlook(base_score: float, crop_name: str) -> str:
	return _OUTLOOK_TEMPLATES[score_band(base_score)].format(crop=crop_name)


# ── Stage tips ──────────────────────────────────────────────────────────────

MAX_TIPS = 3


def early_tips(score: float, soil: SoilType, water: WaterLevel) -> list[str]:
	tips: list[str] = []
	if water == WaterLevel.low:
		tips.append("Consider mulching to retain soil moisture during early growth.")
	if soil == SoilType.sandy:
		tips.append("Sandy soil drains quickly - more frequent, lighter watering may help.")
	if soil == SoilType.clay:
		tips.append("Ensure good drainage to prevent waterlogging in clay soil.")
	if score_band(score) == ScoreBand.low:
		tips.append("Consider raised beds or soil amendments to improve growing conditions.")
	tips.append("Monitor seedling emergence and thin if overcrowded.")
	return tips[:MAX_TIPS]


def mid_tips(score: float, soil: SoilType, water: WaterLevel) -> list[str]:
	tips: list[str] = []
	band = score_band(score)
	if band == ScoreBand.high:
		tips.append("Continue current practices - conditions appear favorable.")
	tips.append("Watch for common pest signs and use integrated pest management.")
	if water == WaterLevel.high:
		tips.append("Consider drip irrigation to optimize water use efficiency.")
	if band == ScoreBand.low:
		tips.append("Apply organic compost to boost soil health.")
		tips.append("Consider companion planting to improve growing conditions.")
	return tips[:MAX_TIPS]


def harvest_tips(score: float, soil: SoilType, water: WaterLevel) -> list[str]:
	tips = ["Plan harvest timing based on crop maturity indicators."]
	if score_band(score) == ScoreBand.high:
		tips.append("Consider saving seeds from best-performing plants.")
	tips.append("After harvest, incorporate crop residue to improve soil organic matter.")
	tips.append("Document outcomes to inform next season's planning.")
	return tips[:MAX_TIPS]


_StageText = tuple[
	Callable[[str, float, SoilType, WaterLevel], str],
	Callable[[float, SoilType, WaterLevel], list[str]],
]

_STAGE_TEXT: dict[GrowthStage, _StageText] = {
	GrowthStage.early: (early_description, early_tips),
	GrowthStage.mid: (mid_description, mid_tips),
	GrowthStage.harvest: (harvest_description, harvest_tips),
}


def simulate_crop_outcome(
	crop_id: str,
	crop_name: str,
	soil: SoilType,
	water: WaterLevel,
) -> SimulationResult:
	"""Simulate early, mid and harvest outcomes for one crop under one set of conditions."""
	base_score = calculate_score(crop_id, soil, water)
	impact = sustainability(crop_id, soil, water)

	stages: list[StageResult] = []
	for stage in GrowthStage:
		stage_score = base_score * STAGE_MULTIPLIERS[stage]
		describe, advise = _STAGE_TEXT[stage]
		stages.append(
			StageResult(
				stage=stage,
				growth_condition=condition(stage_score),
				risk_level=risk(stage_score),
				sustainability_impact=impact,
				description=describe(crop_name, stage_score, soil, water),
				tips=tuple(advise(stage_score, soil, water)),
			)
		)

	return SimulationResult(
		crop_id=crop_id,
		crop_name=crop_name,
		soil_type=soil,
		water_level=water,
		base_score=round(base_score, 4),
		stages=tuple(stages),
		overall_outlook=overall_outlook(base_score, crop_name),
	)
