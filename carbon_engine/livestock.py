# MIT License
"""Livestock methane abatement model.

The herd's baseline emissions are reduced by three groups of
multipliers:

* management factors (feed type, manure management, additives, grazing
  practice and regional climate), combined multiplicatively;
* a reproductive efficiency multiplier, floored at 0.6;
* a feed/energy multiplier (dietary energy profile, seasonal feed
  pattern and custom feed mixture).

The reduction against the baseline is the project impact.  It is the
same every project year.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from . import catalog
from .params import CustomTypes, LivestockParams
from .utils import kg_to_tonnes


class LivestockEmissions(BaseModel):
    """Emission figures of one livestock project year.

    Emission totals are in kg CO2e per year, per-head figures in kg CO2e
    per head per year.
    """

    baseline_per_head: float
    management_multiplier: float
    reproductive_multiplier: float
    feed_energy_multiplier: float
    baseline_total: float
    adjusted_total: float

    @property
    def reduction(self) -> float:
        return self.baseline_total - self.adjusted_total

    @property
    def reduction_tonnes(self) -> float:
        return kg_to_tonnes(self.reduction)

    @property
    def reduction_percent(self) -> float:
        if self.baseline_total == 0:
            return 0.0
        return self.reduction / self.baseline_total * 100.0


def management_multiplier(params: LivestockParams) -> float:
    feed = catalog.FEED_TYPE_FACTORS.get(params.feed_type, 1.0)
    manure = catalog.MANURE_FACTORS.get(params.manure_management, 1.0)
    additive = 1.0 - params.additive_efficiency / 100.0 if params.use_additives else 1.0
    grazing = catalog.GRAZING_FACTORS.get(params.grazing_practice, 1.0)
    climate = catalog.CLIMATE_FACTORS.get(params.region_climate, 1.0)
    return feed * manure * additive * grazing * climate


def reproductive_multiplier(params: LivestockParams) -> float:
    """Efficiency gain from better reproduction.

    Only applies when the calving rate and both time-to-calf values are
    given; otherwise the multiplier is 1.
    """
    if not (params.calving_rate and params.time_to_calf_before and params.time_to_calf_after):
        return 1.0
    calving = params.calving_rate / 100.0
    time_reduction = max(
        0.0, (params.time_to_calf_before - params.time_to_calf_after) / params.time_to_calf_before
    )
    supplementation = catalog.SUPPLEMENTATION_EFFECTS.get(params.supplementation_type, 0.0)
    return max(0.6, 1.0 - (calving * 0.2 + time_reduction * 0.3 + supplementation))


def feed_energy_multiplier(params: LivestockParams) -> float:
    dietary = catalog.DIETARY_ENERGY_FACTORS.get(params.dietary_energy_profile, 1.0)
    seasonal = catalog.SEASONAL_FEED_FACTORS.get(params.seasonal_feed_changes, 1.0)
    custom = 1.0
    if params.use_custom_feed_mixture and params.custom_feed_mixture:
        custom = catalog.CUSTOM_FEED_MIXTURE_FACTOR
    return dietary * seasonal * custom


def livestock_emissions(params: LivestockParams, custom_types: Optional[CustomTypes] = None) -> LivestockEmissions:
    per_head = catalog.cattle_baseline_emissions(params.cattle_type, custom_types)
    baseline = per_head * params.herd_size
    mgmt = management_multiplier(params)
    repro = reproductive_multiplier(params)
    feed = feed_energy_multiplier(params)
    return LivestockEmissions(
        baseline_per_head=per_head,
        management_multiplier=mgmt,
        reproductive_multiplier=repro,
        feed_energy_multiplier=feed,
        baseline_total=baseline,
        adjusted_total=baseline * mgmt * repro * feed,
    )


def reproductive_cost_for_year(params: LivestockParams, year: int) -> float:
    """Cost of the reproductive improvement programme charged in ``year``."""
    cost = params.reproductive_improvement_cost
    if cost is None:
        return 0.0
    if cost.kind == "annual_per_head":
        return cost.amount * params.herd_size
    return cost.amount if year == 1 else 0.0
