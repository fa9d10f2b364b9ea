"""Tests for the full calculation pipeline.

These run :func:`calculate_results` end to end and check totals, the
financial metrics, the chart series and determinism.
"""

import math

import pytest

from carbon_engine.aggregate import calculate_config, calculate_results
from carbon_engine.cashflow import project_cash_flows
from carbon_engine.params import (
    CarbonPriceConfig,
    CarbonPricePoint,
    ConstructionParams,
    CostEntry,
    ForestryParams,
    LivestockParams,
    ProjectConfig,
    ReproductiveImprovementCost,
    SoilParams,
)
from carbon_engine.results import ConstructionResults, Results

SOIL_COSTS = [
    CostEntry(name="Registration", kind="fixed", amount=1000, effective_year=1),
    CostEntry(name="Monitoring", kind="annual", amount=100, effective_year=0),
]


def _soil_results(**kw) -> Results:
    return calculate_results(
        SoilParams(project_size=100, soil_type="cropland"),
        SOIL_COSTS,
        5,
        kw.get("discount_rate", 0.0),
        CarbonPriceConfig(flat_price=10.0),
    )


def test_soil_totals():
    res = _soil_results()
    assert isinstance(res, Results)
    assert math.isclose(res.total_sequestration, 4.2 * 100 * 5)
    assert math.isclose(res.total_revenue, 21_000)
    assert math.isclose(res.total_cost, 1_500)
    assert math.isclose(res.net_profit, 19_500)
    assert math.isclose(res.roi, 1_300)
    # undiscounted NPV is the net profit
    assert math.isclose(res.npv, 19_500)
    assert res.break_even_year == 1
    # cash flows never turn negative
    assert res.irr is None
    assert len(res.yearly_data) == 5
    assert math.isclose(res.yearly_data[0].net_cash_flow, 4200 - 1100)


def test_same_inputs_same_results():
    assert _soil_results(discount_rate=8) == _soil_results(discount_rate=8)


def test_chart_series():
    res = _soil_results(discount_rate=8)
    series = res.chart_series
    assert [p.year for p in series.cash_flow] == [1, 2, 3, 4, 5]
    assert math.isclose(series.npv[-1].cumulative_npv, res.npv)
    assert {b.name: b.value for b in series.cost_breakdown} == {"Fixed Costs": 1000, "Annual Costs": 500}


def test_break_even_and_irr_with_upfront_investment():
    costs = [CostEntry(kind="per_unit", amount=300, effective_year=1)]
    res = calculate_results(
        ForestryParams(project_size=10, tree_type="pine"), costs, 10, 8, CarbonPriceConfig(flat_price=20)
    )
    # year 1: 7.5 * 10 * 0.616 * 20 = 924 revenue against 3000 cost
    assert res.yearly_data[0].net_cash_flow < 0
    # cumulative: -2076, -1128, -156, 840
    assert res.break_even_year == 4
    assert res.irr is not None and res.irr > 0


def test_yearly_price_table():
    price = CarbonPriceConfig(flat_price=10, use_yearly=True, yearly_prices=[CarbonPricePoint(year=2, price=50)])
    df = project_cash_flows(SoilParams(project_size=1), [], 3, price)
    assert df["carbon_price"].tolist() == [10, 50, 10]
    assert math.isclose(df["revenue"].iloc[1], 4.2 * 50)


def test_cash_flow_frame_columns():
    df = project_cash_flows(SoilParams(project_size=1), SOIL_COSTS, 3, CarbonPriceConfig())
    assert df["cumulative_cash_flow"].iloc[-1] == pytest.approx(df["net_cash_flow"].sum())
    assert df["cost_fixed"].tolist() == [1000, 0, 0]


def test_livestock_results():
    params = LivestockParams(
        herd_size=100,
        use_additives=True,
        additive_efficiency=20,
        reproductive_improvement_cost=ReproductiveImprovementCost(kind="fixed", amount=300),
    )
    res = calculate_results(params, [], 4, 5, CarbonPriceConfig(flat_price=30))
    metrics = res.livestock_metrics
    assert metrics is not None
    assert math.isclose(metrics.baseline_emissions, 250)
    assert math.isclose(metrics.emissions_reduction, 50)
    assert math.isclose(metrics.emissions_intensity.percent_reduction, 20)
    assert math.isclose(res.total_sequestration, 200)
    assert math.isclose(res.total_cost, 300)
    assert [b.name for b in res.chart_series.cost_breakdown] == ["Reproductive Improvement"]


def test_livestock_metrics_with_empty_herd():
    res = calculate_results(LivestockParams(herd_size=0), [], 2, 5, CarbonPriceConfig())
    assert res.livestock_metrics.emissions_intensity.reduced == 0
    assert res.total_sequestration == 0


def test_construction_dispatch():
    res = calculate_results(ConstructionParams(), SOIL_COSTS, 20, 8, CarbonPriceConfig())
    assert isinstance(res, ConstructionResults)
    assert res.npv is None and res.irr is None


def test_calculate_config():
    cfg = ProjectConfig(params=SoilParams(project_size=100), costs=SOIL_COSTS, project_years=5, discount_rate=0)
    res = calculate_config(cfg)
    assert math.isclose(res.total_revenue, 4.2 * 100 * 5 * cfg.carbon_price.flat_price)
