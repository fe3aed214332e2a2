"""Calculator domain schemas

Documents are stored snake_case; the API speaks camelCase through aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoofTypeCost(CamelModel):
    additional_cost_per_kw: float = Field(ge=0)
    installation_details: str


class RoofTypeCosts(CamelModel):
    concrete: RoofTypeCost
    metal: RoofTypeCost


class SolarTemplate(CamelModel):
    name: str
    description: str
    default_bill: float = 0
    system_sizes: list[float]
    cost_per_kw: float = Field(gt=0)
    roof_type_costs: RoofTypeCosts
    panel_wattage: float = Field(gt=0)
    electricity_reduction: float = Field(gt=0, le=1)
    annual_inflation: float = Field(ge=0)
    panel_degradation: float = Field(ge=0, lt=1)
    payback_period: str

    @field_validator("system_sizes")
    @classmethod
    def five_positive_sizes(cls, v):
        if len(v) != 5 or any(size <= 0 for size in v):
            raise ValueError("systemSizes must hold five positive sizes")
        return v


class Templates(CamelModel):
    residential: SolarTemplate
    commercial: SolarTemplate


class TransportCosts(CamelModel):
    small: float = Field(ge=0)
    medium: float = Field(ge=0)
    large: float = Field(ge=0)


class Region(CamelModel):
    name: str
    transport_costs: TransportCosts
    description: str = ""


class AdditionalCost(CamelModel):
    net_metering_processing_fee: float = Field(ge=0)
    other_fees: float = Field(ge=0)
    net_metering_piping_cost: float = Field(ge=0)

    @property
    def total(self) -> float:
        return self.net_metering_processing_fee + self.other_fees + self.net_metering_piping_cost


class AdditionalCosts(CamelModel):
    residential: AdditionalCost
    commercial: AdditionalCost


class DefaultValues(CamelModel):
    default_system_efficiency: float
    default_annual_radiation: float
    default_peak_sun_hours: float


class CalculatorParams(CamelModel):
    templates: Templates
    regions: dict[str, Region]
    additional_costs: AdditionalCosts
    default_values: DefaultValues

    @field_validator("regions")
    @classmethod
    def at_least_one_region(cls, v):
        if not v:
            raise ValueError("At least one region is required")
        return v


class CalculatorParamsSaved(CamelModel):
    message: str
    params: CalculatorParams


class EstimateRequest(CamelModel):
    monthly_bill: float = Field(gt=0)
    template: str = "residential"
    region: str = "metro-manila"
    roof_type: str = "concrete"
    roof_size: Optional[float] = Field(default=None, gt=0)
    system_type: Optional[str] = None


class RecommendedPackage(CamelModel):
    code: str
    name: str
    type: str
    wattage: int
    cash_price: float


class EstimateResponse(CamelModel):
    system_size: float
    panel_count: int
    system: str
    installation_cost: float
    transport_cost: float
    additional_costs: AdditionalCost
    total_cost: float
    annual_savings: float
    savings_25_years: float
    payback_years: float
    formatted_payback: str
    region_name: str
    roof_type_details: str
    recommended_package: Optional[RecommendedPackage] = None
