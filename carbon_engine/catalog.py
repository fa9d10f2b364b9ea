# MIT License
"""Built-in type tables and lookup helpers.

Each table maps a type id to the attributes the sequestration models
need.  Lookups take the explicit :class:`~carbon_engine.params.CustomTypes`
table: a custom entry with a matching id wins over a built-in one, and
an id that resolves nowhere falls back to the per-domain default rate.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .params import CustomMaterial, CustomTypes

logger = logging.getLogger(__name__)

# tCO2e per hectare per year
DEFAULT_RATES: Dict[str, float] = {
    "forestry": 7.5,
    "redd": 15.2,
    "soil": 4.2,
    "bluecarbon": 8.0,
}

TREE_TYPES: Dict[str, Dict[str, float]] = {
    "pine": {"sequestration_rate": 7.5, "maturity_years": 25},
    "oak": {"sequestration_rate": 6.8, "maturity_years": 40},
    "eucalyptus": {"sequestration_rate": 11.2, "maturity_years": 15},
    "maple": {"sequestration_rate": 5.9, "maturity_years": 30},
    "bamboo": {"sequestration_rate": 12.5, "maturity_years": 7},
    "mangrove": {"sequestration_rate": 9.8, "maturity_years": 20},
}
# species used for the growth curve when the tree id does not resolve
DEFAULT_TREE = "pine"

SOIL_TYPES: Dict[str, float] = {
    "cropland": 4.2,
    "grassland": 3.5,
    "degraded": 5.8,
    "peatland": 7.6,
}

BLUE_CARBON_TYPES: Dict[str, float] = {
    "mangrove": 8.0,
    "saltmarsh": 6.5,
    "seagrass": 5.0,
}

REDD_FOREST_TYPES: Dict[str, float] = {
    "tropical": 15.2,
    "temperate": 9.8,
    "boreal": 7.4,
    "mangrove": 12.5,
    "peatland": 16.8,
}

RENEWABLE_CAPACITY_FACTORS: Dict[str, float] = {
    "solar": 0.25,
    "wind": 0.35,
    "hydro": 0.50,
    "geothermal": 0.80,
    "biomass": 0.65,
}
DEFAULT_CAPACITY_FACTOR = 0.25
HOURS_PER_YEAR = 8760.0

# kg CO2e per head per year
CATTLE_BASELINE_EMISSIONS: Dict[str, float] = {
    "dairy": 3000.0,
    "beef": 2500.0,
    "mixed": 2750.0,
}
DEFAULT_CATTLE_EMISSIONS = 2500.0

FEED_TYPE_FACTORS = {"grain": 0.9, "grass": 1.1, "mixed": 1.0, "optimized": 0.8}
MANURE_FACTORS = {"covered": 0.85, "standard": 1.0, "anaerobic": 0.5, "composting": 0.75, "daily_spread": 0.9}
GRAZING_FACTORS = {"rotational": 0.9, "continuous": 1.0, "adaptive": 0.75, "silvopasture": 0.65}
CLIMATE_FACTORS = {"tropical": 1.1, "temperate": 1.0, "arid": 0.95, "continental": 1.05}
SUPPLEMENTATION_EFFECTS = {"none": 0.0, "mineral": 0.05, "protein": 0.10, "energy": 0.08, "complete": 0.15}
DIETARY_ENERGY_FACTORS = {"high": 1.1, "medium": 1.0, "low": 0.9, "variable": 1.05}
SEASONAL_FEED_FACTORS = {"constant": 1.0, "two_season": 0.95, "four_season": 0.9, "custom": 0.85}
CUSTOM_FEED_MIXTURE_FACTOR = 0.95

# --- construction -----------------------------------------------------------

# design lifespan in years
BUILDING_TYPES: Dict[str, int] = {
    "Commercial Office": 50,
    "Retail Space": 40,
    "Residential Multi-Unit": 60,
    "Industrial Warehouse": 40,
}
DEFAULT_BUILDING_LIFESPAN = 50

# typical operational emissions (kg CO2e/sqm/yr) of existing stock, by construction era
BUILDING_BENCHMARKS: Dict[str, float] = {
    "pre1980": 65.0,
    "years1980to2000": 45.0,
    "years2000to2010": 35.0,
    "years2010to2020": 25.0,
    "post2020": 15.0,
}

MATERIAL_UNIT_TYPES: Dict[str, str] = {
    "concrete": "volume",
    "cement": "mass",
    "steel": "mass",
    "timber": "volume",
    "glass": "mass",
    "insulation": "volume",
    "aluminum": "mass",
    "brick": "volume",
    "flooring": "area",
    "roofing": "area",
    "gypsum": "mass",
    "aggregates": "volume",
    "cladding": "area",
}
STANDARD_UNITS = {"volume": "m3", "mass": "tonnes", "area": "m2", "length": "m", "energy": "kWh"}


def _m(id_: str, name: str, factor: float, emission_factor: float) -> Dict[str, object]:
    return {"id": id_, "name": name, "factor": factor, "emission_factor": emission_factor}


# emission_factor: kg CO2e per standard unit of the category
MATERIAL_LIBRARY: Dict[str, List[Dict[str, object]]] = {
    "concrete": [
        _m("concrete_standard", "Standard Concrete", 1.0, 300),
        _m("concrete_lowcarbon", "Low Carbon Concrete", 0.7, 210),
        _m("concrete_ultralowcarbon", "Ultra-Low Carbon Concrete", 0.5, 150),
    ],
    "cement": [
        _m("cement_standard", "Standard Portland Cement", 1.0, 900),
        _m("cement_blended", "Blended Cement (SCM)", 0.7, 630),
        _m("cement_geopolymer", "Geopolymer Cement", 0.4, 360),
    ],
    "steel": [
        _m("steel_standard", "Standard Steel", 1.0, 2000),
        _m("steel_recycled", "High Recycled Content Steel", 0.6, 1200),
        _m("steel_green", "Green Steel (Hydrogen Reduced)", 0.3, 600),
    ],
    "timber": [
        _m("timber_standard", "Standard Timber", 1.0, 250),
        _m("timber_fsc", "FSC Certified Timber", 0.8, 200),
        _m("timber_reclaimed", "Reclaimed Timber", 0.2, 50),
    ],
    "glass": [
        _m("glass_standard", "Standard Glass", 1.0, 800),
        _m("glass_lowemissivity", "Low-E Glass", 0.85, 680),
        _m("glass_recycled", "High Recycled Content Glass", 0.7, 560),
    ],
    "insulation": [
        _m("insulation_standard", "Standard Insulation", 1.0, 100),
        _m("insulation_natural", "Natural Fiber Insulation", 0.6, 60),
        _m("insulation_bio", "Bio-Based Insulation", 0.4, 40),
    ],
    "aluminum": [
        _m("aluminum_standard", "Standard Aluminum", 1.0, 8500),
        _m("aluminum_recycled", "Recycled Aluminum", 0.3, 2550),
    ],
    "brick": [
        _m("brick_standard", "Standard Brick", 1.0, 220),
        _m("brick_reclaimed", "Reclaimed Brick", 0.1, 22),
    ],
    "flooring": [
        _m("flooring_vinyl", "Vinyl Flooring", 1.0, 7.0),
        _m("flooring_bamboo", "Bamboo Flooring", 0.5, 3.5),
        _m("flooring_reclaimed", "Reclaimed Wood Flooring", 0.2, 1.4),
    ],
    "roofing": [
        _m("roofing_asphalt", "Asphalt Shingles", 1.0, 4.5),
        _m("roofing_metal", "Metal Roofing", 0.7, 3.15),
        _m("roofing_terracotta", "Terracotta Tiles", 0.8, 3.6),
    ],
    "gypsum": [
        _m("gypsum_standard", "Standard Gypsum Board", 1.0, 120),
        _m("gypsum_recycled", "Recycled Gypsum Board", 0.7, 84),
    ],
    "aggregates": [
        _m("aggregates_standard", "Virgin Aggregates", 1.0, 50),
        _m("aggregates_recycled", "Recycled Aggregates", 0.4, 20),
    ],
    "cladding": [
        _m("cladding_aluminum", "Aluminum Cladding", 1.0, 55),
        _m("cladding_timber", "Timber Cladding", 0.4, 22),
        _m("cladding_recycled", "Recycled Composite Cladding", 0.6, 33),
    ],
}

# energy_saving: % of operational energy
ENERGY_MEASURES: Dict[str, Dict[str, float]] = {
    "highEfficiencyHVAC": {"energy_saving": 15.0, "cost": 250_000.0},
    "improvedInsulation": {"energy_saving": 12.0, "cost": 180_000.0},
    "solarHotWater": {"energy_saving": 8.0, "cost": 120_000.0},
}

# reduction: % reduction within the measure's own system
OPERATIONAL_MEASURES: Dict[str, Dict[str, object]] = {
    "heat_recovery": {"category": "hvacSystems", "reduction": 25.0, "cost": 15_000.0},
    "smart_zoning": {"category": "hvacSystems", "reduction": 15.0, "cost": 8_000.0},
    "tunable_led": {"category": "lighting", "reduction": 75.0, "cost": 12_000.0},
    "daylight_harvesting": {"category": "lighting", "reduction": 45.0, "cost": 7_500.0},
    "low_flow_toilets": {"category": "waterSystems", "reduction": 50.0, "cost": 5_000.0},
    "graywater_recovery": {"category": "waterSystems", "reduction": 40.0, "cost": 18_000.0},
    "dynamic_glass": {"category": "buildingEnvelope", "reduction": 22.0, "cost": 35_000.0},
    "triple_glazing": {"category": "buildingEnvelope", "reduction": 45.0, "cost": 28_000.0},
}
# share of building energy each category's reduction applies to; water does not count
OPERATIONAL_CATEGORY_WEIGHTS = {"hvacSystems": 0.3, "buildingEnvelope": 0.3, "lighting": 0.2}


def _resolve_rate(domain: str, type_id: str, table: Dict[str, float], custom_types: Optional[CustomTypes]) -> float:
    custom = custom_types.find(domain, type_id) if custom_types is not None else None
    if custom is not None:
        return custom.sequestration_rate
    if type_id in table:
        return table[type_id]
    logger.info("Unknown %s type %r, using default rate %s", domain, type_id, DEFAULT_RATES[domain])
    return DEFAULT_RATES[domain]


def tree_rate(tree_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    rates = {k: v["sequestration_rate"] for k, v in TREE_TYPES.items()}
    return _resolve_rate("forestry", tree_type, rates, custom_types)


def tree_maturity_years(tree_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    """Years to maturity of the tree; unknown ids use the default species."""
    custom = custom_types.find("forestry", tree_type) if custom_types is not None else None
    if custom is not None:
        return custom.maturity_years
    if tree_type in TREE_TYPES:
        return TREE_TYPES[tree_type]["maturity_years"]
    return TREE_TYPES[DEFAULT_TREE]["maturity_years"]


def soil_rate(soil_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    return _resolve_rate("soil", soil_type, SOIL_TYPES, custom_types)


def blue_carbon_rate(blue_carbon_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    return _resolve_rate("bluecarbon", blue_carbon_type, BLUE_CARBON_TYPES, custom_types)


def redd_rate(forest_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    return _resolve_rate("redd", forest_type, REDD_FOREST_TYPES, custom_types)


def capacity_factor(renewable_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    custom = custom_types.find("renewable", renewable_type) if custom_types is not None else None
    if custom is not None:
        return custom.capacity_factor if custom.capacity_factor is not None else DEFAULT_CAPACITY_FACTOR
    return RENEWABLE_CAPACITY_FACTORS.get(renewable_type, DEFAULT_CAPACITY_FACTOR)


def cattle_baseline_emissions(cattle_type: str, custom_types: Optional[CustomTypes] = None) -> float:
    """Baseline emissions of one head in kg CO2e per year."""
    custom = custom_types.find("livestock", cattle_type) if custom_types is not None else None
    if custom is not None:
        # custom entries may give only a generic rate; zero means unset
        return custom.base_emissions or custom.sequestration_rate or DEFAULT_CATTLE_EMISSIONS
    return CATTLE_BASELINE_EMISSIONS.get(cattle_type, DEFAULT_CATTLE_EMISSIONS)


def building_lifespan(building_type: str) -> int:
    return BUILDING_TYPES.get(building_type, DEFAULT_BUILDING_LIFESPAN)


def material_library(custom_types: Optional[CustomTypes] = None) -> Dict[str, List[Dict[str, object]]]:
    """Built-in materials extended with the custom ones, keyed by category."""
    library = {cat: list(items) for cat, items in MATERIAL_LIBRARY.items()}
    customs: List[CustomMaterial] = custom_types.materials if custom_types is not None else []
    for mat in customs:
        library.setdefault(mat.category, []).append(
            _m(mat.id, mat.name, mat.factor, mat.emission_factor)
        )
    return library


def find_material(library: Dict[str, List[Dict[str, object]]], category: str, material_id: Optional[str]) -> Optional[Dict[str, object]]:
    for mat in library.get(category, []):
        if mat["id"] == material_id:
            return mat
    return None


def standard_material(library: Dict[str, List[Dict[str, object]]], category: str) -> Optional[Dict[str, object]]:
    """The baseline material of a category, the first one whose id names it standard.

    Categories without one (flooring, roofing, cladding) have no baseline
    and return ``None``.
    """
    for mat in library.get(category, []):
        if "standard" in str(mat["id"]):
            return mat
    return None
