"""Crop reference tables — encyclopedia entries, compatibility profiles, planting calendar.

All three tables are keyed by the lowercase crop id used across the API
(``"rice"``, ``"wheat"`` ...).  They are immutable module-level data; lookups
go through the accessor functions so that the unknown-crop behaviour lives in
one place:

* ``get_crop``           → ``None`` for unknown ids (the route turns it into 404)
* ``get_compatibility``  → the default profile for unknown ids
* ``get_planting_window`` → ``None`` for unknown ids (calendar renders "none")
"""

from __future__ import annotations

from dataclasses import dataclass

from agriwise.models.enums import SoilType, WaterLevel


@dataclass(frozen=True, slots=True)
class Crop:
    """Encyclopedia entry shown on the crop explorer page."""

    id: str
    name: str
    icon: str
    soil_type: str
    water_requirement: WaterLevel
    growing_season: str
    sustainability_notes: str
    description: str


@dataclass(frozen=True, slots=True)
class CropCompatibility:
    """Ideal growing conditions driving the outcome simulator."""

    ideal_soil: frozenset[SoilType]
    ideal_water: frozenset[WaterLevel]
    # 0-1, how strongly a water mismatch is penalised
    sensitivity: float


@dataclass(frozen=True, slots=True)
class PlantingWindow:
    """Months (1-12) in which a crop is typically planted and harvested."""

    plant_months: frozenset[int]
    harvest_months: frozenset[int]


# ── Encyclopedia ────────────────────────────────────────────────────────────

CROPS: tuple[Crop, ...] = (
    Crop(
        id="rice",
        name="Rice",
        icon="🌾",
        soil_type="Clay or Loamy soil with good water retention",
        water_requirement=WaterLevel.high,
        growing_season="Monsoon (June - November)",
        sustainability_notes="Consider alternate wetting and drying techniques to reduce water usage by up to 30%.",
        description="A staple food crop requiring warm, humid conditions and abundant water supply.",
    ),
    Crop(
        id="wheat",
        name="Wheat",
        icon="🌿",
        soil_type="Well-drained loamy soil",
        water_requirement=WaterLevel.medium,
        growing_season="Winter (November - April)",
        sustainability_notes="Rotation with legumes improves soil nitrogen. Minimal tillage reduces erosion.",
        description="A cool-season crop that thrives in temperate climates with moderate rainfall.",
    ),
    Crop(
        id="maize",
        name="Maize (Corn)",
        icon="🌽",
        soil_type="Sandy loam to loamy soil",
        water_requirement=WaterLevel.medium,
        growing_season="Kharif (June - October) or Rabi",
        sustainability_notes="Excellent for crop rotation. Residue can be used as mulch or fodder.",
        description="A versatile crop used for food, feed, and industrial purposes.",
    ),
    Crop(
        id="tomato",
        name="Tomato",
        icon="🍅",
        soil_type="Sandy loam with good drainage",
        water_requirement=WaterLevel.medium,
        growing_season="Year-round in suitable climates",
        sustainability_notes="Drip irrigation significantly reduces water waste. Good for greenhouse farming.",
        description="A warm-season vegetable requiring full sun and consistent moisture.",
    ),
    Crop(
        id="potato",
        name="Potato",
        icon="🥔",
        soil_type="Loose, well-drained sandy soil",
        water_requirement=WaterLevel.medium,
        growing_season="Cool months (October - March)",
        sustainability_notes="Mulching helps retain moisture and suppress weeds naturally.",
        description="A cool-weather crop that stores well and provides high yields.",
    ),
    Crop(
        id="cotton",
        name="Cotton",
        icon="☁️",
        soil_type="Black cotton soil or deep loamy",
        water_requirement=WaterLevel.medium,
        growing_season="Kharif (April - December)",
        sustainability_notes="Organic cotton farming reduces pesticide use. Companion planting helps pest control.",
        description="A major fiber crop requiring a long frost-free growing period.",
    ),
    Crop(
        id="sugarcane",
        name="Sugarcane",
        icon="🎋",
        soil_type="Deep, fertile loamy soil",
        water_requirement=WaterLevel.high,
        growing_season="Year-round (12-18 month cycle)",
        sustainability_notes="Drip irrigation can save 40% water. Bagasse can be used as biofuel.",
        description="A tropical grass cultivated for sugar production and bioenergy.",
    ),
    Crop(
        id="soybean",
        name="Soybean",
        icon="🫘",
        soil_type="Well-drained loamy soil",
        water_requirement=WaterLevel.low,
        growing_season="Kharif (June - October)",
        sustainability_notes="Fixes nitrogen in soil, reducing fertilizer needs. Excellent rotation crop.",
        description="A protein-rich legume that enriches soil fertility naturally.",
    ),
)

_CROPS_BY_ID = {crop.id: crop for crop in CROPS}


# ── Compatibility ───────────────────────────────────────────────────────────


def _profile(soils: set[SoilType], waters: set[WaterLevel], sensitivity: float) -> CropCompatibility:
    return CropCompatibility(frozenset(soils), frozenset(waters), sensitivity)


COMPATIBILITY: dict[str, CropCompatibility] = {
    "rice": _profile({SoilType.clay, SoilType.loamy}, {WaterLevel.high}, 0.8),
    "wheat": _profile({SoilType.loamy}, {WaterLevel.medium}, 0.5),
    "maize": _profile({SoilType.sandy, SoilType.loamy}, {WaterLevel.medium}, 0.4),
    "tomato": _profile({SoilType.sandy, SoilType.loamy}, {WaterLevel.medium}, 0.6),
    "potato": _profile({SoilType.sandy}, {WaterLevel.medium}, 0.5),
    "cotton": _profile({SoilType.loamy, SoilType.clay}, {WaterLevel.medium}, 0.5),
    "sugarcane": _profile({SoilType.loamy}, {WaterLevel.high}, 0.7),
    "soybean": _profile({SoilType.loamy}, {WaterLevel.low, WaterLevel.medium}, 0.3),
}

DEFAULT_COMPATIBILITY = _profile({SoilType.loamy}, {WaterLevel.medium}, 0.5)


# ── Planting calendar ───────────────────────────────────────────────────────


def _window(plant: list[int], harvest: list[int]) -> PlantingWindow:
    return PlantingWindow(frozenset(plant), frozenset(harvest))


PLANTING_CALENDAR: dict[str, PlantingWindow] = {
    "rice": _window([5, 6, 7], [10, 11]),
    "wheat": _window([10, 11], [3, 4]),
    "maize": _window([5, 6, 1, 2], [9, 10, 5, 6]),
    "tomato": _window([1, 2, 6, 7, 8], [4, 5, 10, 11, 12]),
    "potato": _window([9, 10, 11], [1, 2, 3]),
    "cotton": _window([3, 4, 5], [10, 11, 12]),
    "sugarcane": _window([1, 2, 9, 10], [11, 12, 1, 2, 3]),
    "soybean": _window([5, 6, 7], [9, 10]),
    "onion": _window([10, 11, 12], [3, 4, 5]),
    "carrot": _window([9, 10, 11], [1, 2, 3]),
    "cabbage": _window([8, 9, 10], [12, 1, 2]),
    "chili": _window([1, 2, 3, 6, 7], [5, 6, 10, 11]),
    "groundnut": _window([5, 6, 7], [9, 10]),
    "sunflower": _window([1, 2, 6, 7], [4, 5, 10, 11]),
    "mango": _window([6, 7, 8], [3, 4, 5, 6]),
    "banana": _window([2, 3, 6, 7], [11, 12, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10]),
    "watermelon": _window([1, 2, 3], [4, 5, 6]),
    "turmeric": _window([4, 5, 6], [1, 2, 3]),
    "ginger": _window([3, 4, 5], [12, 1, 2]),
    "lentils": _window([10, 11], [2, 3]),
    "mustard": _window([9, 10, 11], [2, 3]),
    "cucumber": _window([1, 2, 3, 6, 7], [3, 4, 5, 9, 10]),
    "eggplant": _window([2, 3, 6, 7, 8], [5, 6, 10, 11, 12]),
    "garlic": _window([9, 10, 11], [2, 3, 4]),
}


def get_crop(crop_id: str) -> Crop | None:
    return _CROPS_BY_ID.get(crop_id)


def get_compatibility(crop_id: str) -> CropCompatibility:
    """Compatibility profile for ``crop_id``, or the loamy/medium default."""
    profile = COMPATIBILITY.get(crop_id)
    if profile is None:
        return DEFAULT_COMPATIBILITY
    return profile


def is_known_crop(crop_id: str) -> bool:
    return crop_id in COMPATIBILITY


def get_planting_window(crop_id: str) -> PlantingWindow | None:
    return PLANTING_CALENDAR.get(crop_id)


def display_name(crop_id: str) -> str:
    """Catalog name for ``crop_id``, else the id title-cased (``"sweet_potato"`` → ``"Sweet Potato"``)."""
    crop = get_crop(crop_id)
    if crop is not None:
        return crop.name
    return crop_id.replace("_", " ").replace("-", " ").title()
