# MIT License
"""Sequestration models, one per credit-producing project type.

Every model answers the same question: how many tCO2e does the project
credit in a given project year.  For removal projects (forestry, soil,
blue carbon) this is carbon stored; for avoided-emission projects
(renewable, REDD+, livestock) it is the reduction against a baseline.

Rates are resolved once per calculation by :func:`resolve_rate` and then
passed to the per-year functions, which are kept free of lookups so
they can be tested with plain numbers.
"""
from __future__ import annotations

import logging
from typing import Optional

from . import catalog
from .livestock import livestock_emissions
from .params import (
    BlueCarbonParams,
    CreditParameters,
    CustomTypes,
    ForestryParams,
    LivestockParams,
    REDDParams,
    RenewableParams,
    SoilParams,
)
from .utils import safe_div

logger = logging.getLogger(__name__)

# share of the mature rate reached by a new planting
FORESTRY_INITIAL_SHARE = 0.6
BLUE_CARBON_RAMP = {1: 0.5, 2: 0.7, 3: 0.85}
RENEWABLE_DEGRADATION = 0.995


def forestry_growth_factor(year: float, maturity_years: float) -> float:
    """Share of the mature sequestration rate reached in ``year``.

    Starts at 60% and grows linearly to 100% at the maturity year.  A
    non-positive maturity means the stand is already mature.
    """
    if maturity_years <= 0:
        return 1.0
    return min(1.0, FORESTRY_INITIAL_SHARE + (1.0 - FORESTRY_INITIAL_SHARE) * year / maturity_years)


def forestry_sequestration(year: int, base_rate: float, size: float, maturity_years: float) -> float:
    return base_rate * size * forestry_growth_factor(year, maturity_years)


def blue_carbon_development_factor(year: int) -> float:
    """Three-year ramp-up while the coastal ecosystem establishes."""
    return BLUE_CARBON_RAMP.get(year, 1.0)


def blue_carbon_sequestration(year: int, base_rate: float, size: float) -> float:
    return base_rate * size * blue_carbon_development_factor(year)


def soil_sequestration(year: int, base_rate: float, size: float) -> float:
    return base_rate * size


def renewable_base_rate(capacity_mw: float, capacity_factor: float, grid_emissions_factor: float = 0.5) -> float:
    """Displaced emissions per MW of capacity (tCO2e/MW/yr)."""
    annual_mwh = capacity_mw * capacity_factor * catalog.HOURS_PER_YEAR
    return safe_div(annual_mwh * grid_emissions_factor, capacity_mw)


def renewable_avoided_emissions(year: int, base_rate: float, capacity_mw: float) -> float:
    """Avoided emissions with 0.5% output degradation per year."""
    return base_rate * capacity_mw * RENEWABLE_DEGRADATION ** (year - 1)


def redd_gross_carbon_saved(base_rate: float, size: float, deforestation_rate: float) -> float:
    return base_rate * size * deforestation_rate


def redd_net_carbon_saved(gross: float, leakage_risk: float, non_permanence_buffer: float) -> float:
    """Net credited carbon of a REDD+ project.

    Leakage and buffer deductions are both taken from the gross value
    and subtracted together, not applied one after the other.
    """
    return gross - gross * leakage_risk - gross * non_permanence_buffer


def redd_avoided_emissions(year: int, params: REDDParams, base_rate: float) -> float:
    gross = redd_gross_carbon_saved(base_rate, params.project_size, params.deforestation_rate)
    return redd_net_carbon_saved(gross, params.leakage_risk, params.non_permanence_buffer)


def resolve_rate(params: CreditParameters, custom_types: Optional[CustomTypes] = None) -> float:
    """Per-unit annual rate used by the model of ``params``' project type.

    A non-zero ``custom_rate`` overrides the lookup.  Livestock has no
    per-unit rate; its reduction in tonnes per year is returned instead.
    """
    if isinstance(params, LivestockParams):
        return livestock_emissions(params, custom_types).reduction_tonnes
    custom_rate = getattr(params, "custom_rate", None)
    if custom_rate:
        return custom_rate
    if isinstance(params, ForestryParams):
        return catalog.tree_rate(params.tree_type, custom_types)
    if isinstance(params, SoilParams):
        return catalog.soil_rate(params.soil_type, custom_types)
    if isinstance(params, BlueCarbonParams):
        return catalog.blue_carbon_rate(params.blue_carbon_type, custom_types)
    if isinstance(params, REDDParams):
        return catalog.redd_rate(params.forest_type, custom_types)
    if isinstance(params, RenewableParams):
        cf = catalog.capacity_factor(params.renewable_type, custom_types)
        return renewable_base_rate(params.capacity_mw, cf, params.grid_emissions_factor)
    raise TypeError(f"no sequestration model for {type(params).__name__}")


def impact_for_year(
    year: int,
    params: CreditParameters,
    custom_types: Optional[CustomTypes] = None,
    base_rate: Optional[float] = None,
) -> float:
    """Credited impact (tCO2e) of the project in ``year``.

    Parameters
    ----------
    year:
        Project year (starting from 1).
    params:
        Active project parameters.
    custom_types:
        User defined types consulted before the built-in tables.
    base_rate:
        Pre-resolved rate from :func:`resolve_rate`.  Resolved here when
        omitted.

    Returns
    -------
    float
        Tonnes CO2e sequestered or avoided in the year.
    """
    rate = resolve_rate(params, custom_types) if base_rate is None else base_rate
    if isinstance(params, ForestryParams):
        maturity = catalog.tree_maturity_years(params.tree_type, custom_types)
        return forestry_sequestration(year, rate, params.project_size, maturity)
    if isinstance(params, BlueCarbonParams):
        return blue_carbon_sequestration(year, rate, params.project_size)
    if isinstance(params, SoilParams):
        return soil_sequestration(year, rate, params.project_size)
    if isinstance(params, RenewableParams):
        return renewable_avoided_emissions(year, rate, params.capacity_mw)
    if isinstance(params, REDDParams):
        return redd_avoided_emissions(year, params, rate)
    if isinstance(params, LivestockParams):
        # constant reduction, already a herd total
        return rate
    raise TypeError(f"no sequestration model for {type(params).__name__}")
