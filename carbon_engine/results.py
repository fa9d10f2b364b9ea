# MIT License
"""Output models returned by the engine.

A new :class:`Results` (or :class:`ConstructionResults`) is built on
every calculation and never modified afterwards.  Models are frozen
pydantic models so they compare by value, serialise to JSON for the
scenario store and convert to pandas for tabular export.
"""
from __future__ import annotations

from typing import List, Literal, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class YearRecord(_Frozen):
    year: int
    sequestration: float = Field(description="tCO2e sequestered or avoided in the year")
    revenue: float
    cost: float
    net_cash_flow: float
    cumulative_cash_flow: float
    carbon_price: float
    is_positive: bool


class CashFlowPoint(_Frozen):
    year: int
    cashflow: float
    cumulative: float
    is_positive: bool


class NpvPoint(_Frozen):
    year: int
    discounted_cash_flow: float
    cumulative_npv: float


class Bucket(_Frozen):
    name: str
    value: float


class ChartSeries(_Frozen):
    cash_flow: List[CashFlowPoint] = Field(default_factory=list)
    npv: List[NpvPoint] = Field(default_factory=list)
    cost_breakdown: List[Bucket] = Field(default_factory=list)


class EmissionsIntensity(_Frozen):
    """Per-head emissions in kg CO2e per head per year."""

    baseline: float
    reduced: float
    percent_reduction: float


class LivestockMetrics(_Frozen):
    """Herd emissions in tCO2e per year."""

    baseline_emissions: float
    reduced_emissions: float
    emissions_reduction: float
    emissions_intensity: EmissionsIntensity


class Results(_Frozen):
    project_type: str
    total_sequestration: float
    total_revenue: float
    total_cost: float
    net_profit: float
    npv: float
    irr: Optional[float] = Field(None, description="Percent; None when the cash flows never change sign")
    roi: float
    break_even_year: Optional[int] = None
    discount_rate: float
    yearly_data: List[YearRecord] = Field(default_factory=list)
    chart_series: ChartSeries = Field(default_factory=ChartSeries)
    livestock_metrics: Optional[LivestockMetrics] = None

    def to_frame(self) -> pd.DataFrame:
        """Yearly table as a DataFrame, e.g. for CSV export."""
        return pd.DataFrame([r.model_dump() for r in self.yearly_data], columns=list(YearRecord.model_fields))


class ConstructionYearRecord(_Frozen):
    year: int
    cash_flow: float
    cumulative_cash_flow: float
    embodied_emissions: float
    baseline_embodied: float
    operational_emissions: float
    baseline_operational: float


class ConstructionResults(_Frozen):
    """Green construction outcome.

    Construction projects earn no credits.  Their return comes from
    operating cost savings, so ``roi`` is ``100 / simple_payback`` and
    there is no NPV or IRR.  Emissions are in tCO2e (operational figures
    per year).
    """

    project_type: Literal["construction"] = "construction"
    total_sequestration: float = 0.0
    total_revenue: float = 0.0
    total_cost: float
    net_profit: float
    npv: Optional[float] = None
    irr: Optional[float] = None
    roi: float
    break_even_year: Optional[float] = None

    baseline_embodied: float
    reduced_embodied: float
    embodied_savings: float
    embodied_savings_percentage: float
    base_operational: float
    final_operational: float
    operational_savings: float
    operational_savings_percentage: float
    baseline_lifetime_emissions: float
    reduced_lifetime_emissions: float
    lifetime_savings: float
    lifetime_savings_percentage: float

    is_renovation: bool
    renovation_savings: float
    standard_construction_cost: float
    green_building_premium: float
    annual_savings: float
    simple_payback: float
    building_lifespan: int
    energy_efficiency_improvement: float
    solar_offset: float
    energy_savings_cost: float
    solar_savings_cost: float

    yearly_data: List[ConstructionYearRecord] = Field(default_factory=list)
    emissions_breakdown: List[Bucket] = Field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [r.model_dump() for r in self.yearly_data], columns=list(ConstructionYearRecord.model_fields)
        )


AnyResults = Union[Results, ConstructionResults]
