# MIT License
"""Catalogue product adjustments.

Marketplace products (feed additives, low-carbon cement, ...) change the
inputs of a calculation, not the calculation itself.  Each product names
the project types it applies to and a reduction factor; applying it
returns new parameters with the target field scaled.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .params import ConstructionParams, CustomTypes, ProjectParameters
from .sequestration import resolve_rate

logger = logging.getLogger(__name__)

TargetField = Literal["custom_rate", "operational_emissions", "additive_efficiency"]

DEFAULT_TARGETS: Dict[str, str] = {
    "forestry": "custom_rate",
    "soil": "custom_rate",
    "bluecarbon": "custom_rate",
    "renewable": "custom_rate",
    "redd": "custom_rate",
    "livestock": "additive_efficiency",
    "construction": "operational_emissions",
}


class ProductAdjustment(BaseModel):
    """A product that modifies project inputs.

    ``emissions_reduction_factor`` is a fraction: 0.2 raises a
    sequestration rate by 20% or cuts an emission figure by 20%.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    project_types: List[str] = Field(default_factory=list)
    emissions_reduction_factor: float = Field(0.0, ge=0.0, le=1.0)
    target_field: Optional[TargetField] = Field(None, description="Defaults to the project type's main field")
    cost_premium: float = Field(0.0, ge=0.0, le=1.0, description="Construction cost premium (fraction)")

    def applies_to(self, project_type: str) -> bool:
        return project_type in self.project_types


def _apply_one(
    params: ProjectParameters,
    product: ProductAdjustment,
    custom_types: Optional[CustomTypes],
) -> ProjectParameters:
    factor = product.emissions_reduction_factor
    target = product.target_field or DEFAULT_TARGETS[params.project_type]
    if not hasattr(params, target):
        logger.warning("Product %r targets %s, which %s projects do not have", product.name, target, params.project_type)
        return params

    update = {}
    if target == "custom_rate":
        rate = resolve_rate(params, custom_types)
        update["custom_rate"] = rate * (1.0 + factor)
    elif target == "additive_efficiency":
        # stack on top of any additive already in use
        remaining = 1.0 - (params.additive_efficiency / 100.0 if params.use_additives else 0.0)
        update["use_additives"] = True
        update["additive_efficiency"] = 100.0 * (1.0 - remaining * (1.0 - factor))
    else:
        update[target] = getattr(params, target) * (1.0 - factor)

    if isinstance(params, ConstructionParams) and product.cost_premium:
        update["construction_cost"] = params.construction_cost * (1.0 + product.cost_premium)
    logger.debug("Product %r on %s: %s", product.name, params.project_type, update)
    return params.model_copy(update=update)


def apply_products(
    params: ProjectParameters,
    products: Sequence[ProductAdjustment],
    custom_types: Optional[CustomTypes] = None,
) -> ProjectParameters:
    """Return new parameters with every applicable product applied in order.

    Products whose ``project_types`` do not include the active project
    type are ignored.  The input parameters are not modified.
    """
    for product in products:
        if product.applies_to(params.project_type):
            params = _apply_one(params, product, custom_types)
    return params
