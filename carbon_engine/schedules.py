# MIT License
"""Cost and carbon price schedules.

Both schedules are evaluated one project year at a time by the cash
flow projector.  Neither raises: entries that do not apply to a year
contribute nothing, and a missing price falls back to the flat price.
"""
from __future__ import annotations

from typing import Dict, Iterable, Sequence

from .params import CarbonPriceConfig, CarbonPricePoint, CostEntry

ONE_OFF_KINDS = ("fixed", "per_unit")
RECURRING_KINDS = ("annual", "annual_per_unit")
PER_UNIT_KINDS = ("per_unit", "annual_per_unit")


def cost_applies(cost: CostEntry, year: int) -> bool:
    """Return whether ``cost`` is charged in project ``year``.

    One-off kinds match their effective year exactly.  Recurring kinds
    apply from their effective year onward, or every year when the
    effective year is 0.
    """
    if cost.kind in ONE_OFF_KINDS:
        return cost.effective_year == year
    if not cost.effective_year:
        return True
    return year >= cost.effective_year


def cost_amount(cost: CostEntry, year: int, size_multiplier: float) -> float:
    if not cost_applies(cost, year):
        return 0.0
    if cost.kind in PER_UNIT_KINDS:
        return cost.amount * size_multiplier
    return cost.amount


def yearly_cost(costs: Iterable[CostEntry], year: int, size_multiplier: float) -> float:
    """Total cost charged in ``year``.

    Parameters
    ----------
    costs:
        Cost schedule of the project.
    year:
        Project year (starting from 1).
    size_multiplier:
        Project size applied to the per-unit kinds.

    Returns
    -------
    float
        Sum of all entries charged in the year.
    """
    return sum(cost_amount(c, year, size_multiplier) for c in costs)


def yearly_cost_by_kind(costs: Iterable[CostEntry], year: int, size_multiplier: float) -> Dict[str, float]:
    out = {kind: 0.0 for kind in ONE_OFF_KINDS + RECURRING_KINDS}
    for c in costs:
        out[c.kind] += cost_amount(c, year, size_multiplier)
    return out


def price_for_year(
    year: int,
    use_yearly: bool,
    table: Sequence[CarbonPricePoint],
    flat_price: float,
) -> float:
    """Credit price applicable to project ``year``."""
    if not use_yearly or not table:
        return flat_price
    for point in table:
        if point.year == year:
            return point.price
    return flat_price


def config_price_for_year(year: int, config: CarbonPriceConfig) -> float:
    return price_for_year(year, config.use_yearly, config.yearly_prices, config.flat_price)
