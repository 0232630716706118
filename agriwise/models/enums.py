"""Categorical vocabularies shared by the simulator, catalog and schemas.

Values are the display labels the UI renders, so the StrEnum value doubles
as the wire format.
"""

from enum import StrEnum

# ── Simulation inputs ───────────────────────────────────────────────────────


class SoilType(StrEnum):
    """Soil texture classes offered in the simulator."""

    clay = "Clay"
    sandy = "Sandy"
    loamy = "Loamy"


class WaterLevel(StrEnum):
    """Water availability, ordered Low < Medium < High."""

    low = "Low"
    medium = "Medium"
    high = "High"

    @property
    def ordinal(self) -> int:
        return _WATER_ORDINAL[self]


_WATER_ORDINAL = {
    WaterLevel.low: 0,
    WaterLevel.medium: 1,
    WaterLevel.high: 2,
}


# ── Simulation outputs ──────────────────────────────────────────────────────


class GrowthStage(StrEnum):
    """Fixed growth phases, in simulation order."""

    early = "Early Growth Stage"
    mid = "Mid-Growth Stage"
    harvest = "Harvest Stage"


class GrowthCondition(StrEnum):
    poor = "Poor"
    moderate = "Moderate"
    healthy = "Healthy"


class RiskLevel(StrEnum):
    low = "Low"
    medium = "Medium"
    high = "High"


class SustainabilityImpact(StrEnum):
    low = "Low"
    medium = "Medium"
    high = "High"


# ── Calendar ────────────────────────────────────────────────────────────────


class MonthActivity(StrEnum):
    """What a crop's calendar says about a given month."""

    plant = "plant"
    harvest = "harvest"
    both = "both"
    none = "none"


class Season(StrEnum):
    winter = "Winter"
    spring = "Spring"
    summer = "Summer"
    autumn = "Autumn"


# ── Chat ────────────────────────────────────────────────────────────────────


class ChatRole(StrEnum):
    """Roles a client may send; the system prompt is injected server-side."""

    user = "user"
    assistant = "assistant"
