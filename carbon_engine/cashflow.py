# MIT License
"""Yearly cash flow projection for credit-producing projects.

The projector combines a sequestration model, the carbon price schedule
and the cost schedule into a pandas DataFrame with one row per project
year.  The loop is the same for every project type; only the
sequestration model differs.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import pandas as pd

from .livestock import reproductive_cost_for_year
from .params import CarbonPriceConfig, CostEntry, CreditParameters, CustomTypes, LivestockParams
from .schedules import ONE_OFF_KINDS, RECURRING_KINDS, config_price_for_year, yearly_cost, yearly_cost_by_kind
from .sequestration import impact_for_year, resolve_rate

logger = logging.getLogger(__name__)

YEARLY_COLUMNS = [
    "year",
    "sequestration",
    "carbon_price",
    "revenue",
    "cost",
    "net_cash_flow",
    "cumulative_cash_flow",
    "is_positive",
]
COST_COLUMNS = [f"cost_{kind}" for kind in ONE_OFF_KINDS + RECURRING_KINDS] + ["cost_reproductive"]


def project_cash_flows(
    params: CreditParameters,
    costs: Sequence[CostEntry],
    project_years: int,
    carbon_price: CarbonPriceConfig,
    custom_types: Optional[CustomTypes] = None,
) -> pd.DataFrame:
    """Project revenue, cost and net cash flow for each project year.

    Parameters
    ----------
    params:
        Active project parameters.
    costs:
        Cost schedule.
    project_years:
        Number of years to project.
    carbon_price:
        Flat or per-year credit price.
    custom_types:
        User defined types for the rate lookups.

    Returns
    -------
    pandas.DataFrame
        One row per year with the columns in :data:`YEARLY_COLUMNS` and
        :data:`COST_COLUMNS` (cost split by kind).
    """
    size = params.size_multiplier
    base_rate = resolve_rate(params, custom_types)
    logger.debug("%s: base rate %s, size %s", params.project_type, base_rate, size)
    rows = []
    cumulative = 0.0
    for year in range(1, project_years + 1):
        sequestration = impact_for_year(year, params, custom_types, base_rate=base_rate)
        price = config_price_for_year(year, carbon_price)
        revenue = sequestration * price
        cost = yearly_cost(costs, year, size)
        by_kind = yearly_cost_by_kind(costs, year, size)
        repro = reproductive_cost_for_year(params, year) if isinstance(params, LivestockParams) else 0.0
        cost += repro
        net = revenue - cost
        cumulative += net
        rows.append(dict(
            year=year,
            sequestration=sequestration,
            carbon_price=price,
            revenue=revenue,
            cost=cost,
            net_cash_flow=net,
            cumulative_cash_flow=cumulative,
            is_positive=net >= 0,
            **{f"cost_{kind}": value for kind, value in by_kind.items()},
            cost_reproductive=repro,
        ))
    df = pd.DataFrame(rows, columns=YEARLY_COLUMNS + COST_COLUMNS)
    logger.debug("cash flows: \n%s", df.head())
    return df
