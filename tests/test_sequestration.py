"""Unit tests for the sequestration and avoided-emission models.

These cover the forestry growth curve, the blue carbon ramp, renewable
degradation, REDD+ deductions and the rate resolution order (custom
rate, custom type, built-in type, default).
"""

import math

import pytest

from carbon_engine import catalog
from carbon_engine.params import (
    BlueCarbonParams,
    ConstructionParams,
    CustomTypeEntry,
    CustomTypes,
    ForestryParams,
    REDDParams,
    RenewableParams,
    SoilParams,
)
from carbon_engine.sequestration import (
    forestry_growth_factor,
    impact_for_year,
    redd_net_carbon_saved,
    renewable_base_rate,
    resolve_rate,
)


def test_forestry_growth_factor():
    assert math.isclose(forestry_growth_factor(0, 25), 0.6)
    assert math.isclose(forestry_growth_factor(1, 25), 0.616)
    assert math.isclose(forestry_growth_factor(25, 25), 1.0)
    assert forestry_growth_factor(40, 25) == 1.0
    # no maturity means already mature
    assert forestry_growth_factor(1, 0) == 1.0


def test_forestry_sequestration_is_monotonic_and_capped():
    p = ForestryParams(project_size=100, tree_type="pine")
    values = [impact_for_year(y, p) for y in range(1, 41)]
    assert all(b >= a for a, b in zip(values, values[1:]))
    assert math.isclose(max(values), 7.5 * 100)


def test_forestry_unknown_tree_uses_default_rate_and_maturity():
    p = ForestryParams(project_size=10, tree_type="baobab")
    assert resolve_rate(p) == catalog.DEFAULT_RATES["forestry"]
    # pine maturity (25 years) drives the curve
    assert math.isclose(impact_for_year(1, p), 7.5 * 10 * 0.616)


def test_blue_carbon_ramp():
    p = BlueCarbonParams(project_size=100, blue_carbon_type="mangrove")
    assert [impact_for_year(y, p) for y in range(1, 6)] == pytest.approx([400, 560, 680, 800, 800])


def test_soil_is_constant():
    p = SoilParams(project_size=50, soil_type="grassland")
    assert impact_for_year(1, p) == impact_for_year(20, p) == pytest.approx(3.5 * 50)


def test_renewable_rate_and_degradation():
    assert math.isclose(renewable_base_rate(10, 0.25, 0.5), 1095.0)
    assert renewable_base_rate(0, 0.25, 0.5) == 0.0
    p = RenewableParams(capacity_mw=10, renewable_type="solar", grid_emissions_factor=0.5)
    assert math.isclose(impact_for_year(1, p), 10950.0)
    assert math.isclose(impact_for_year(3, p), 10950.0 * 0.995 ** 2)


def test_renewable_zero_capacity_is_zero():
    p = RenewableParams(capacity_mw=0)
    assert impact_for_year(1, p) == 0.0


def test_redd_additive_deductions():
    assert math.isclose(redd_net_carbon_saved(100, 0.2, 0.2), 60.0)
    p = REDDParams(project_size=1000, forest_type="tropical", deforestation_rate=0.025)
    # gross 15.2 * 1000 * 0.025 = 380, less 20% leakage and 20% buffer
    assert math.isclose(impact_for_year(1, p), 228.0)


def test_custom_rate_overrides_lookup():
    p = ForestryParams(project_size=1, tree_type="oak", custom_rate=10.0)
    assert resolve_rate(p) == 10.0
    # zero means unset
    assert resolve_rate(SoilParams(custom_rate=0.0)) == catalog.SOIL_TYPES["cropland"]


def test_custom_types_take_precedence():
    custom = CustomTypes(
        soil=[CustomTypeEntry(id="biochar", name="Biochar", sequestration_rate=9.0)],
        forestry=[CustomTypeEntry(id="pine", name="Local pine", sequestration_rate=5.0, maturity_years=0)],
        renewable=[CustomTypeEntry(id="tidal", name="Tidal", capacity_factor=0.4)],
    )
    assert resolve_rate(SoilParams(soil_type="biochar"), custom) == 9.0
    assert resolve_rate(ForestryParams(tree_type="pine"), custom) == 5.0
    # maturity 0: full rate from year one
    assert math.isclose(impact_for_year(1, ForestryParams(project_size=2, tree_type="pine"), custom), 10.0)
    assert math.isclose(catalog.capacity_factor("tidal", custom), 0.4)


def test_unknown_type_falls_back_to_default():
    assert catalog.soil_rate("moon_dust") == catalog.DEFAULT_RATES["soil"]
    assert catalog.capacity_factor("fusion") == catalog.DEFAULT_CAPACITY_FACTOR


def test_construction_has_no_sequestration_model():
    with pytest.raises(TypeError):
        impact_for_year(1, ConstructionParams())
    with pytest.raises(TypeError):
        resolve_rate(ConstructionParams())
