"""Calculation engine for carbon credit and green construction projects.

The package turns a project's parameters, a cost schedule and a carbon
price schedule into a year-by-year emissions and cash flow table plus
summary financial metrics (NPV, IRR, ROI, break-even year).

Every calculation is a pure function of its inputs.  Parameters and
results are pydantic models; the yearly projection is a pandas
DataFrame.  :func:`calculate_results` in ``aggregate.py`` is the main
entry point.
"""

from .params import (
    BlueCarbonParams,
    CarbonPriceConfig,
    CarbonPricePoint,
    ConstructionParams,
    CostEntry,
    CustomTypeEntry,
    CustomTypes,
    ForestryParams,
    LivestockParams,
    ProjectConfig,
    ProjectParameters,
    REDDParams,
    RenewableParams,
    SoilParams,
)
from .results import ConstructionResults, Results
from .aggregate import calculate_config, calculate_results
from .cashflow import project_cash_flows
from .economics import break_even_year, irr, npv, roi
from .products import ProductAdjustment, apply_products
from .scenarios import InMemoryScenarioStore, Scenario, ScenarioNotFoundError

__all__ = [
    "BlueCarbonParams",
    "CarbonPriceConfig",
    "CarbonPricePoint",
    "ConstructionParams",
    "CostEntry",
    "CustomTypeEntry",
    "CustomTypes",
    "ForestryParams",
    "LivestockParams",
    "ProjectConfig",
    "ProjectParameters",
    "REDDParams",
    "RenewableParams",
    "SoilParams",
    "Results",
    "ConstructionResults",
    "calculate_results",
    "calculate_config",
    "project_cash_flows",
    "npv",
    "irr",
    "roi",
    "break_even_year",
    "ProductAdjustment",
    "apply_products",
    "Scenario",
    "InMemoryScenarioStore",
    "ScenarioNotFoundError",
]
