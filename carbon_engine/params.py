# MIT License
"""Data models for the carbon project engine.

All inputs are defined using [`pydantic.BaseModel`](https://docs.pydantic.dev/)
to provide type checking, validation and JSON serialisation.  Each
project type has its own parameter model; the models are combined in the
closed :data:`ProjectParameters` union, discriminated on
``project_type``, so exactly one variant is active for a calculation.

The top‑level :class:`ProjectConfig` bundles the active parameters with
the cost schedule, carbon price configuration and any user defined
custom types.  This makes it straightforward to serialise and restore a
complete calculation input from a JSON file.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CostKind = Literal["fixed", "annual", "per_unit", "annual_per_unit"]


class CostEntry(BaseModel):
    """A single line of the project cost schedule.

    Attributes
    ----------
    kind:
        ``fixed`` and ``per_unit`` entries are one-off costs charged in
        ``effective_year`` only.  ``annual`` and ``annual_per_unit``
        entries recur from ``effective_year`` onward.
    amount:
        Money amount.  ``per_unit`` kinds are multiplied by the project
        size (hectares, head of cattle, MW, ...).
    effective_year:
        Project year the cost applies to.  ``0`` means every year for
        recurring kinds.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Label shown in cost tables")
    kind: CostKind = Field("fixed", description="Cost kind")
    amount: float = Field(0.0, description="Cost amount (currency units)")
    effective_year: int = Field(0, ge=0, le=1000, description="Project year the cost applies from (0 = every year)")


class CarbonPricePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = Field(1, ge=1, le=1000)
    price: float = Field(0.0, ge=0.0, description="Credit price for this project year")


class CarbonPriceConfig(BaseModel):
    """Flat or per-year carbon credit price."""

    flat_price: float = Field(30.0, ge=0.0, le=10_000.0, description="Flat credit price (per tCO2e)")
    use_yearly: bool = Field(False, description="Use the per-year price table instead of the flat price")
    yearly_prices: List[CarbonPricePoint] = Field(default_factory=list)

    @field_validator("yearly_prices")
    @classmethod
    def _unique_years(cls, v: List[CarbonPricePoint]) -> List[CarbonPricePoint]:
        years = [p.year for p in v]
        if len(years) != len(set(years)):
            raise ValueError("yearly_prices must contain at most one price per year")
        return sorted(v, key=lambda p: p.year)

    @classmethod
    def growing(cls, start_price: float, growth: float, years: int) -> "CarbonPriceConfig":
        """Build a yearly schedule growing by ``growth`` (fraction) per year."""
        points = [CarbonPricePoint(year=y, price=start_price * (1.0 + growth) ** (y - 1)) for y in range(1, years + 1)]
        return cls(flat_price=start_price, use_yearly=True, yearly_prices=points)


class CustomTypeEntry(BaseModel):
    """A user defined type entry (tree species, cattle breed, soil, ...).

    Entries are validated here, at the boundary, so the engine can rely
    on numeric rates.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., description="Display name")
    sequestration_rate: float = Field(0.0, ge=0.0, description="tCO2e per unit per year")
    maturity_years: float = Field(0.0, ge=0.0, description="Forestry only: years to reach mature rate")
    capacity_factor: Optional[float] = Field(None, ge=0.0, le=1.0, description="Renewable only")
    base_emissions: Optional[float] = Field(None, ge=0.0, description="Livestock only: kg CO2e per head per year")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("custom type name must not be empty")
        return v.strip()


class CustomMaterial(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    factor: float = Field(1.0, ge=0.0, le=10.0)
    emission_factor: float = Field(0.0, ge=0.0, description="kg CO2e per standard unit")


class CustomTypes(BaseModel):
    """Explicit lookup table of user defined types, one list per domain."""

    forestry: List[CustomTypeEntry] = Field(default_factory=list)
    livestock: List[CustomTypeEntry] = Field(default_factory=list)
    soil: List[CustomTypeEntry] = Field(default_factory=list)
    renewable: List[CustomTypeEntry] = Field(default_factory=list)
    bluecarbon: List[CustomTypeEntry] = Field(default_factory=list)
    redd: List[CustomTypeEntry] = Field(default_factory=list)
    materials: List[CustomMaterial] = Field(default_factory=list)

    def find(self, domain: str, type_id: str) -> Optional[CustomTypeEntry]:
        for entry in getattr(self, domain, []):
            if entry.id == type_id:
                return entry
        return None


# --- project type variants -------------------------------------------------


class ForestryParams(BaseModel):
    project_type: Literal["forestry"] = "forestry"
    project_size: float = Field(100.0, ge=0.0, le=1e7, description="Project area (ha)")
    tree_type: str = Field("pine", description="Tree species id")
    custom_rate: Optional[float] = Field(None, ge=0.0, description="Overrides the species rate (tCO2e/ha/yr)")

    @property
    def size_multiplier(self) -> float:
        return self.project_size


class SoilParams(BaseModel):
    project_type: Literal["soil"] = "soil"
    project_size: float = Field(100.0, ge=0.0, le=1e7, description="Project area (ha)")
    soil_type: str = Field("cropland")
    custom_rate: Optional[float] = Field(None, ge=0.0)

    @property
    def size_multiplier(self) -> float:
        return self.project_size


class BlueCarbonParams(BaseModel):
    project_type: Literal["bluecarbon"] = "bluecarbon"
    project_size: float = Field(100.0, ge=0.0, le=1e7, description="Project area (ha)")
    blue_carbon_type: str = Field("mangrove")
    custom_rate: Optional[float] = Field(None, ge=0.0)

    @property
    def size_multiplier(self) -> float:
        return self.project_size


class RenewableParams(BaseModel):
    project_type: Literal["renewable"] = "renewable"
    capacity_mw: float = Field(10.0, ge=0.0, le=1e5, description="Installed capacity (MW)")
    renewable_type: str = Field("solar")
    grid_emissions_factor: float = Field(0.5, ge=0.0, le=5.0, description="Displaced grid emissions (tCO2e/MWh)")
    custom_rate: Optional[float] = Field(None, ge=0.0, description="Overrides the derived rate (tCO2e/MW/yr)")

    @property
    def size_multiplier(self) -> float:
        return self.capacity_mw


class REDDParams(BaseModel):
    project_type: Literal["redd"] = "redd"
    project_size: float = Field(1000.0, ge=0.0, le=1e8, description="Protected forest area (ha)")
    forest_type: str = Field("tropical")
    deforestation_rate: float = Field(0.025, ge=0.0, le=1.0, description="Baseline deforestation (fraction/yr)")
    leakage_risk: float = Field(0.20, ge=0.0, le=1.0, description="Share of avoided loss displaced elsewhere")
    non_permanence_buffer: float = Field(0.20, ge=0.0, le=1.0, description="Share withheld in the buffer pool")
    custom_rate: Optional[float] = Field(None, ge=0.0)

    @property
    def size_multiplier(self) -> float:
        return self.project_size


class FeedComponent(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    percentage: float = Field(..., ge=0.0, le=100.0)


class ReproductiveImprovementCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["annual_per_head", "fixed"] = "annual_per_head"
    amount: float = Field(0.0, ge=0.0)


class LivestockParams(BaseModel):
    """Parameters of a livestock methane abatement project.

    Emission factors are per head per year in kg CO2e.  Percentages are
    given on a 0-100 scale.
    """

    project_type: Literal["livestock"] = "livestock"
    herd_size: int = Field(500, ge=0, le=10_000_000)
    cattle_type: str = Field("beef", description="dairy, beef, mixed or a custom id")
    feed_type: str = Field("mixed", description="grain, grass, mixed or optimized")
    manure_management: str = Field("standard", description="covered, standard, anaerobic, composting or daily_spread")
    use_additives: bool = Field(False)
    additive_efficiency: float = Field(0.0, ge=0.0, le=100.0, description="Methane reduction from additives (%)")
    grazing_practice: str = Field("continuous", description="rotational, continuous, adaptive or silvopasture")
    region_climate: str = Field("temperate", description="tropical, temperate, arid or continental")
    calving_rate: float = Field(0.0, ge=0.0, le=100.0, description="Calving rate (%)")
    time_to_calf_before: float = Field(0.0, ge=0.0, le=120.0, description="Months to calf before the project")
    time_to_calf_after: float = Field(0.0, ge=0.0, le=120.0, description="Months to calf with the project")
    supplementation_type: str = Field("none", description="none, mineral, protein, energy or complete")
    dietary_energy_profile: str = Field("medium", description="high, medium, low or variable")
    seasonal_feed_changes: str = Field("constant", description="constant, two_season, four_season or custom")
    use_custom_feed_mixture: bool = Field(False)
    custom_feed_mixture: List[FeedComponent] = Field(default_factory=list)
    reproductive_improvement_cost: Optional[ReproductiveImprovementCost] = None

    @field_validator("custom_feed_mixture")
    @classmethod
    def _mixture_sums_to_100(cls, v: List[FeedComponent]) -> List[FeedComponent]:
        if v and abs(sum(c.percentage for c in v) - 100.0) > 1e-6:
            raise ValueError("custom_feed_mixture percentages must sum to 100")
        return v

    @property
    def size_multiplier(self) -> float:
        return float(self.herd_size)


class MaterialBlend(BaseModel):
    model_config = ConfigDict(frozen=True)

    material_id: str
    percentage: float = Field(..., ge=0.0, le=100.0)


class MaterialSelection(BaseModel):
    """Quantity of one material category and the material chosen for it."""

    category: str
    quantity: float = Field(0.0, ge=0.0)
    unit: Optional[str] = Field(None, description="Unit of quantity; defaults to the category's standard unit")
    material_id: Optional[str] = None
    blends: List[MaterialBlend] = Field(default_factory=list)

    @field_validator("blends")
    @classmethod
    def _blend_sums_to_100(cls, v: List[MaterialBlend]) -> List[MaterialBlend]:
        if v and abs(sum(b.percentage for b in v) - 100.0) > 1e-6:
            raise ValueError("material blend percentages must sum to 100")
        return v


class ConstructionParams(BaseModel):
    project_type: Literal["construction"] = "construction"
    building_size: float = Field(10_000.0, ge=0.0, le=1e8, description="Gross floor area (sqm)")
    building_type: str = Field("Commercial Office")
    construction_type: Literal["new", "renovation"] = "new"
    operational_emissions: float = Field(30.0, ge=0.0, le=1000.0, description="Baseline kg CO2e/sqm/yr")
    construction_cost: float = Field(2500.0, ge=0.0, le=1e6, description="Standard cost per sqm")
    solar_capacity_kw: float = Field(0.0, ge=0.0, le=1e6)
    use_blending: bool = Field(False)
    materials: List[MaterialSelection] = Field(default_factory=list)
    energy_measures: List[str] = Field(default_factory=list)
    operational_measures: List[str] = Field(default_factory=list)

    @property
    def size_multiplier(self) -> float:
        return self.building_size


ProjectParameters = Annotated[
    Union[
        ForestryParams,
        LivestockParams,
        SoilParams,
        RenewableParams,
        BlueCarbonParams,
        REDDParams,
        ConstructionParams,
    ],
    Field(discriminator="project_type"),
]

CreditParameters = Union[
    ForestryParams, LivestockParams, SoilParams, RenewableParams, BlueCarbonParams, REDDParams
]


class ProjectConfig(BaseModel):
    """A complete calculation input.

    Groups the active project parameters with the economic settings.
    Switching project type means replacing ``params``; the other
    variants' values are not kept.
    """

    name: str = Field("Untitled project")
    params: ProjectParameters = Field(default_factory=ForestryParams)
    costs: List[CostEntry] = Field(default_factory=list)
    project_years: int = Field(20, ge=1, le=200, description="Projection horizon (years)")
    discount_rate: float = Field(8.0, ge=0.0, le=100.0, description="Discount rate (%)")
    carbon_price: CarbonPriceConfig = Field(default_factory=CarbonPriceConfig)
    custom_types: CustomTypes = Field(default_factory=CustomTypes)

    @model_validator(mode="after")
    def _prices_within_horizon(self) -> "ProjectConfig":
        for point in self.carbon_price.yearly_prices:
            if point.year > self.project_years:
                raise ValueError(f"carbon price for year {point.year} is beyond project_years={self.project_years}")
        return self
