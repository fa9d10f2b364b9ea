"""Tests for catalogue product adjustments."""

import math

import pytest
from pydantic import ValidationError

from carbon_engine.aggregate import calculate_config
from carbon_engine.params import ConstructionParams, ForestryParams, LivestockParams, ProjectConfig
from carbon_engine.products import ProductAdjustment, apply_products


def test_rate_product_raises_resolved_rate():
    params = ForestryParams(tree_type="pine")
    product = ProductAdjustment(name="Biochar boost", project_types=["forestry"], emissions_reduction_factor=0.2)
    adjusted = apply_products(params, [product])
    assert math.isclose(adjusted.custom_rate, 9.0)
    # input left untouched
    assert params.custom_rate is None


def test_products_for_other_types_are_ignored():
    params = ForestryParams()
    product = ProductAdjustment(name="Feed additive", project_types=["livestock"], emissions_reduction_factor=0.3)
    assert apply_products(params, [product]) == params


def test_construction_product():
    product = ProductAdjustment(
        name="Smart controls", project_types=["construction"], emissions_reduction_factor=0.1, cost_premium=0.05
    )
    adjusted = apply_products(ConstructionParams(), [product])
    assert math.isclose(adjusted.operational_emissions, 27)
    assert math.isclose(adjusted.construction_cost, 2625)


def test_livestock_product_stacks_with_additives():
    product = ProductAdjustment(name="Seaweed feed", project_types=["livestock"], emissions_reduction_factor=0.25)
    adjusted = apply_products(LivestockParams(), [product])
    assert adjusted.use_additives
    assert math.isclose(adjusted.additive_efficiency, 25)
    already = LivestockParams(use_additives=True, additive_efficiency=20)
    assert math.isclose(apply_products(already, [product]).additive_efficiency, 40)


def test_missing_target_field_leaves_params():
    product = ProductAdjustment(
        name="Misfiled", project_types=["forestry"], emissions_reduction_factor=0.5, target_field="operational_emissions"
    )
    params = ForestryParams()
    assert apply_products(params, [product]) == params


def test_unknown_target_field_is_rejected():
    with pytest.raises(ValidationError):
        ProductAdjustment(name="Bad", project_types=["forestry"], target_field="herd_size")


def test_products_flow_into_results():
    cfg = ProjectConfig(params=ForestryParams(project_size=10), project_years=10)
    product = ProductAdjustment(name="Boost", project_types=["forestry"], emissions_reduction_factor=0.2)
    base = calculate_config(cfg)
    boosted = calculate_config(cfg, [product])
    assert math.isclose(boosted.total_sequestration, base.total_sequestration * 1.2)
