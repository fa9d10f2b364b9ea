# MIT License
"""Assemble calculation results.

:func:`calculate_results` is the single entry point of the engine.  It
dispatches once on the active project type: construction goes to its
own model, every other type goes through the cash flow projector and
the financial metrics.  The projected DataFrame is then packaged into a
:class:`~carbon_engine.results.Results` with totals, the yearly table
and chart-ready series.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .cashflow import project_cash_flows
from .construction import calculate_construction_results
from .economics import break_even_year, discounted_cashflows, irr, npv, roi
from .livestock import livestock_emissions
from .params import (
    CarbonPriceConfig,
    ConstructionParams,
    CostEntry,
    CustomTypes,
    LivestockParams,
    ProjectConfig,
    ProjectParameters,
)
from .products import ProductAdjustment, apply_products
from .results import (
    AnyResults,
    Bucket,
    CashFlowPoint,
    ChartSeries,
    EmissionsIntensity,
    LivestockMetrics,
    NpvPoint,
    Results,
    YearRecord,
)
from .utils import kg_to_tonnes, safe_div

logger = logging.getLogger(__name__)

UNIT_LABELS = {
    "livestock": "Per Head",
    "renewable": "Per MW",
}
DEFAULT_UNIT_LABEL = "Per Hectare"


def cost_breakdown(df: pd.DataFrame, project_type: str) -> List[Bucket]:
    """Total cost charged over the projection, one bucket per cost kind.

    Empty buckets are left out.
    """
    unit = UNIT_LABELS.get(project_type, DEFAULT_UNIT_LABEL)
    names: Dict[str, str] = {
        "cost_fixed": "Fixed Costs",
        "cost_annual": "Annual Costs",
        "cost_per_unit": f"{unit} One-time",
        "cost_annual_per_unit": f"{unit} Annual",
        "cost_reproductive": "Reproductive Improvement",
    }
    buckets = []
    for col, name in names.items():
        value = float(df[col].sum()) if col in df.columns else 0.0
        if value > 0:
            buckets.append(Bucket(name=name, value=value))
    return buckets


def build_chart_series(df: pd.DataFrame, discount_rate: float, project_type: str) -> ChartSeries:
    cash_flow = [
        CashFlowPoint(
            year=int(r.year),
            cashflow=float(r.net_cash_flow),
            cumulative=float(r.cumulative_cash_flow),
            is_positive=bool(r.net_cash_flow >= 0),
        )
        for r in df.itertuples(index=False)
    ]
    discounted = discounted_cashflows(df["net_cash_flow"].tolist(), discount_rate)
    running = pd.Series(discounted, dtype=float).cumsum().tolist()
    npv_points = [
        NpvPoint(year=int(year), discounted_cash_flow=dcf, cumulative_npv=cum)
        for year, dcf, cum in zip(df["year"], discounted, running)
    ]
    return ChartSeries(cash_flow=cash_flow, npv=npv_points, cost_breakdown=cost_breakdown(df, project_type))


def livestock_metrics(params: LivestockParams, custom_types: Optional[CustomTypes] = None) -> LivestockMetrics:
    em = livestock_emissions(params, custom_types)
    reduced_per_head = safe_div(em.adjusted_total, params.herd_size)
    intensity = EmissionsIntensity(
        baseline=em.baseline_per_head,
        reduced=reduced_per_head,
        percent_reduction=safe_div(em.baseline_per_head - reduced_per_head, em.baseline_per_head) * 100.0,
    )
    return LivestockMetrics(
        baseline_emissions=kg_to_tonnes(em.baseline_total),
        reduced_emissions=kg_to_tonnes(em.adjusted_total),
        emissions_reduction=em.reduction_tonnes,
        emissions_intensity=intensity,
    )


def calculate_results(
    params: ProjectParameters,
    costs: Sequence[CostEntry],
    project_years: int,
    discount_rate: float,
    carbon_price_config: CarbonPriceConfig,
    custom_types: Optional[CustomTypes] = None,
) -> AnyResults:
    """Run the full calculation for one project.

    Parameters
    ----------
    params:
        Active project parameters (one variant of the tagged union).
    costs:
        Cost schedule.  Ignored for construction projects.
    project_years:
        Projection horizon.  Construction uses the building lifespan.
    discount_rate:
        Discount rate in percent.
    carbon_price_config:
        Flat or per-year carbon credit price.
    custom_types:
        User defined types consulted before the built-in tables.

    Returns
    -------
    Results or ConstructionResults
        A new results object.  Calling again with the same inputs gives
        an equal object.
    """
    if isinstance(params, ConstructionParams):
        return calculate_construction_results(params, custom_types)

    df = project_cash_flows(params, costs, project_years, carbon_price_config, custom_types)
    cashflows = df["net_cash_flow"].tolist()
    total_revenue = float(df["revenue"].sum())
    total_cost = float(df["cost"].sum())
    net_profit = total_revenue - total_cost

    yearly = [
        YearRecord(
            year=int(r.year),
            sequestration=float(r.sequestration),
            revenue=float(r.revenue),
            cost=float(r.cost),
            net_cash_flow=float(r.net_cash_flow),
            cumulative_cash_flow=float(r.cumulative_cash_flow),
            carbon_price=float(r.carbon_price),
            is_positive=bool(r.is_positive),
        )
        for r in df.itertuples(index=False)
    ]
    results = Results(
        project_type=params.project_type,
        total_sequestration=float(df["sequestration"].sum()),
        total_revenue=total_revenue,
        total_cost=total_cost,
        net_profit=net_profit,
        npv=npv(cashflows, discount_rate),
        irr=irr(cashflows),
        roi=roi(net_profit, total_cost),
        break_even_year=break_even_year(df["year"].tolist(), df["cumulative_cash_flow"].tolist()),
        discount_rate=discount_rate,
        yearly_data=yearly,
        chart_series=build_chart_series(df, discount_rate, params.project_type),
        livestock_metrics=livestock_metrics(params, custom_types) if isinstance(params, LivestockParams) else None,
    )
    logger.debug(
        "%s: npv=%.2f irr=%s roi=%.2f break-even=%s",
        params.project_type, results.npv, results.irr, results.roi, results.break_even_year,
    )
    return results


def calculate_config(
    config: ProjectConfig,
    products: Sequence[ProductAdjustment] = (),
) -> AnyResults:
    """Calculate a complete :class:`ProjectConfig`.

    Catalogue products, if any, adjust the parameters before they reach
    the engine.
    """
    params = apply_products(config.params, products, config.custom_types) if products else config.params
    return calculate_results(
        params,
        config.costs,
        config.project_years,
        config.discount_rate,
        config.carbon_price,
        config.custom_types,
    )
