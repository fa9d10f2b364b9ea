# MIT License
"""Green construction model.

Construction projects do not sell carbon credits.  The model compares a
building built with standard materials and baseline operational
performance against the chosen low-carbon materials and efficiency
measures.  The cost side is the green building premium, recovered
through annual energy cost savings, giving a simple payback period
instead of NPV/IRR.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from . import catalog
from .params import ConstructionParams, CustomTypes, MaterialSelection
from .results import Bucket, ConstructionResults, ConstructionYearRecord
from .utils import convert_value, safe_div

logger = logging.getLogger(__name__)

RENOVATION_MATERIAL_SHARE = 0.35
RENOVATION_COST_SHARE = 0.6
GREEN_PREMIUM_PCT = {"new": 10.0, "renovation": 8.0}
MAX_EFFICIENCY_IMPROVEMENT = 80.0
# tCO2e offset per kW of on-site solar per year
SOLAR_OFFSET_PER_KW = 1.5
# currency value of one kg CO2e of avoided operational emissions
SAVINGS_PER_KG = 0.1
# years of savings counted in the headline net profit
NET_PROFIT_HORIZON_YEARS = 20
# payback reported when the measures save nothing
NO_PAYBACK = 999.0


def material_emissions(
    selection: MaterialSelection,
    use_blending: bool,
    library,
) -> Tuple[float, float]:
    """Baseline and reduced embodied emissions (tCO2e) of one material category.

    The baseline uses the category's standard material; a category
    without one contributes nothing.  The reduced figure uses the blend
    when blending is enabled and a blend is given, otherwise the selected
    material (the standard one if none is set).
    Reduced emissions weight the material's emission factor by its
    reduction factor.
    """
    category = selection.category
    standard = catalog.standard_material(library, category)
    if selection.quantity <= 0 or standard is None:
        return 0.0, 0.0
    unit_type = catalog.MATERIAL_UNIT_TYPES.get(category, "volume")
    qty = convert_value(selection.quantity, selection.unit, catalog.STANDARD_UNITS[unit_type], unit_type)
    baseline = qty * standard["emission_factor"] / 1000.0
    if use_blending and selection.blends:
        reduced = 0.0
        for blend in selection.blends:
            mat = catalog.find_material(library, category, blend.material_id)
            if mat is None:
                continue
            reduced += qty * blend.percentage / 100.0 * mat["emission_factor"] * mat["factor"] / 1000.0
        return baseline, reduced
    mat = catalog.find_material(library, category, selection.material_id) if selection.material_id else standard
    if mat is None:
        logger.info("Unknown material %r in %s, using the standard material", selection.material_id, category)
        mat = standard
    return baseline, qty * mat["emission_factor"] * mat["factor"] / 1000.0


def efficiency_improvement(params: ConstructionParams) -> float:
    """Operational energy reduction in percent, capped at 80."""
    total = 0.0
    for measure_id in params.energy_measures:
        total += catalog.ENERGY_MEASURES.get(measure_id, {}).get("energy_saving", 0.0)
    for measure_id in params.operational_measures:
        measure = catalog.OPERATIONAL_MEASURES.get(measure_id)
        if measure is None:
            continue
        weight = catalog.OPERATIONAL_CATEGORY_WEIGHTS.get(measure["category"], 0.0)
        total += measure["reduction"] * weight
    return min(total, MAX_EFFICIENCY_IMPROVEMENT)


def _pct(saved: float, baseline: float) -> float:
    return safe_div(saved, baseline) * 100.0


def calculate_construction_results(
    params: ConstructionParams,
    custom_types: Optional[CustomTypes] = None,
) -> ConstructionResults:
    library = catalog.material_library(custom_types)
    baseline_embodied = 0.0
    reduced_embodied = 0.0
    for selection in params.materials:
        base, red = material_emissions(selection, params.use_blending, library)
        baseline_embodied += base
        reduced_embodied += red
    new_build_reduced = reduced_embodied

    is_renovation = params.construction_type == "renovation"
    if is_renovation:
        baseline_embodied *= RENOVATION_MATERIAL_SHARE
        reduced_embodied *= RENOVATION_MATERIAL_SHARE

    efficiency = efficiency_improvement(params)
    base_operational = params.building_size * params.operational_emissions / 1000.0
    reduced_operational = base_operational * (1.0 - efficiency / 100.0)
    solar_offset = params.solar_capacity_kw * SOLAR_OFFSET_PER_KW
    final_operational = max(0.0, reduced_operational - solar_offset)

    lifespan = catalog.building_lifespan(params.building_type)
    baseline_lifetime = baseline_embodied + base_operational * lifespan
    reduced_lifetime = reduced_embodied + final_operational * lifespan

    cost_share = RENOVATION_COST_SHARE if is_renovation else 1.0
    standard_cost = params.building_size * params.construction_cost * cost_share
    premium = standard_cost * GREEN_PREMIUM_PCT[params.construction_type] / 100.0

    energy_savings_cost = base_operational * 1000.0 * SAVINGS_PER_KG * (efficiency / 100.0)
    solar_savings_cost = solar_offset * 1000.0 * SAVINGS_PER_KG
    annual_savings = energy_savings_cost + solar_savings_cost
    simple_payback = premium / annual_savings if annual_savings > 0 else NO_PAYBACK

    yearly = [ConstructionYearRecord(
        year=0,
        cash_flow=-premium,
        cumulative_cash_flow=-premium,
        embodied_emissions=reduced_embodied,
        baseline_embodied=baseline_embodied,
        operational_emissions=0.0,
        baseline_operational=0.0,
    )]
    cumulative = -premium
    for year in range(1, lifespan + 1):
        cumulative += annual_savings
        yearly.append(ConstructionYearRecord(
            year=year,
            cash_flow=annual_savings,
            cumulative_cash_flow=cumulative,
            embodied_emissions=0.0,
            baseline_embodied=0.0,
            operational_emissions=final_operational,
            baseline_operational=base_operational,
        ))

    logger.debug(
        "construction: embodied %.1f -> %.1f t, operational %.1f -> %.1f t/yr, payback %.1f",
        baseline_embodied, reduced_embodied, base_operational, final_operational, simple_payback,
    )
    return ConstructionResults(
        total_cost=premium,
        net_profit=annual_savings * NET_PROFIT_HORIZON_YEARS - premium,
        roi=safe_div(100.0, simple_payback),
        break_even_year=simple_payback if annual_savings > 0 else None,
        baseline_embodied=baseline_embodied,
        reduced_embodied=reduced_embodied,
        embodied_savings=baseline_embodied - reduced_embodied,
        embodied_savings_percentage=_pct(baseline_embodied - reduced_embodied, baseline_embodied),
        base_operational=base_operational,
        final_operational=final_operational,
        operational_savings=base_operational - final_operational,
        operational_savings_percentage=_pct(base_operational - final_operational, base_operational),
        baseline_lifetime_emissions=baseline_lifetime,
        reduced_lifetime_emissions=reduced_lifetime,
        lifetime_savings=baseline_lifetime - reduced_lifetime,
        lifetime_savings_percentage=_pct(baseline_lifetime - reduced_lifetime, baseline_lifetime),
        is_renovation=is_renovation,
        renovation_savings=new_build_reduced - reduced_embodied if is_renovation else 0.0,
        standard_construction_cost=standard_cost,
        green_building_premium=premium,
        annual_savings=annual_savings,
        simple_payback=simple_payback,
        building_lifespan=lifespan,
        energy_efficiency_improvement=efficiency,
        solar_offset=solar_offset,
        energy_savings_cost=energy_savings_cost,
        solar_savings_cost=solar_savings_cost,
        yearly_data=yearly,
        emissions_breakdown=[
            Bucket(name="Embodied Carbon", value=baseline_embodied - reduced_embodied),
            Bucket(name="Operational Carbon", value=(base_operational - final_operational) * lifespan),
            Bucket(name="Remaining Carbon", value=reduced_lifetime),
        ],
    )
