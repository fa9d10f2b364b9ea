"""Unit tests for the cost and carbon price schedules."""

import math

import pytest
from pydantic import ValidationError

from carbon_engine.params import CarbonPriceConfig, CarbonPricePoint, CostEntry, ProjectConfig
from carbon_engine.schedules import (
    config_price_for_year,
    cost_applies,
    price_for_year,
    yearly_cost,
    yearly_cost_by_kind,
)


def test_fixed_cost_only_in_effective_year():
    c = CostEntry(name="Audit", kind="fixed", amount=1000, effective_year=3)
    assert [cost_applies(c, y) for y in range(1, 6)] == [False, False, True, False, False]
    # a one-off cost with effective year 0 is never charged
    c0 = CostEntry(kind="fixed", amount=1000, effective_year=0)
    assert not any(cost_applies(c0, y) for y in range(1, 6))


def test_recurring_cost_gating():
    every_year = CostEntry(kind="annual", amount=100, effective_year=0)
    from_three = CostEntry(kind="annual", amount=100, effective_year=3)
    assert all(cost_applies(every_year, y) for y in range(1, 11))
    assert [cost_applies(from_three, y) for y in range(1, 6)] == [False, False, True, True, True]


def test_per_unit_costs_scale_with_size():
    costs = [
        CostEntry(kind="per_unit", amount=10, effective_year=1),
        CostEntry(kind="annual_per_unit", amount=5, effective_year=0),
        CostEntry(kind="annual", amount=200, effective_year=0),
    ]
    assert math.isclose(yearly_cost(costs, 1, 100), 10 * 100 + 5 * 100 + 200)
    assert math.isclose(yearly_cost(costs, 2, 100), 5 * 100 + 200)
    by_kind = yearly_cost_by_kind(costs, 1, 100)
    assert by_kind == {"fixed": 0.0, "per_unit": 1000.0, "annual": 200.0, "annual_per_unit": 500.0}


def test_empty_schedule_costs_nothing():
    assert yearly_cost([], 1, 100) == 0


def test_price_fallback_to_flat():
    table = [CarbonPricePoint(year=2, price=50.0)]
    assert price_for_year(1, False, table, 10.0) == 10.0
    assert price_for_year(2, False, table, 10.0) == 10.0
    assert price_for_year(2, True, [], 10.0) == 10.0
    assert price_for_year(1, True, table, 10.0) == 10.0
    assert price_for_year(2, True, table, 10.0) == 50.0


def test_growing_price_schedule():
    cfg = CarbonPriceConfig.growing(20.0, 0.1, 3)
    assert cfg.use_yearly
    assert [p.year for p in cfg.yearly_prices] == [1, 2, 3]
    assert math.isclose(config_price_for_year(3, cfg), 24.2)
    # past the table the flat (start) price applies
    assert config_price_for_year(4, cfg) == 20.0


def test_price_table_rejects_duplicate_years():
    with pytest.raises(ValidationError):
        CarbonPriceConfig(use_yearly=True, yearly_prices=[
            CarbonPricePoint(year=1, price=10), CarbonPricePoint(year=1, price=12)
        ])


def test_price_table_is_sorted():
    cfg = CarbonPriceConfig(yearly_prices=[CarbonPricePoint(year=3, price=1), CarbonPricePoint(year=1, price=2)])
    assert [p.year for p in cfg.yearly_prices] == [1, 3]


def test_price_years_within_horizon():
    cfg = CarbonPriceConfig(use_yearly=True, yearly_prices=[CarbonPricePoint(year=12, price=10)])
    with pytest.raises(ValidationError):
        ProjectConfig(project_years=10, carbon_price=cfg)
