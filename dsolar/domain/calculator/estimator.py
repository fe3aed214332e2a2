"""Savings estimate math for the public calculator"""

import math
from typing import Optional

from .schemas import CalculatorParams, SolarTemplate

RESIDENTIAL_BILL_BANDS = (1000, 3000, 5000, 10000)
COMMERCIAL_BILL_BANDS = (100000, 200000, 300000, 400000)
ROOF_KWP_PER_SQM = 0.17
PROJECTION_YEARS = 25
SAVINGS_BOOST_FACTOR = 1.25


class EstimateError(ValueError):
    pass


def pick_system_size(template_key: str, template: SolarTemplate, monthly_bill: float,
                     roof_size: Optional[float] = None) -> float:
    bands = COMMERCIAL_BILL_BANDS if template_key == "commercial" else RESIDENTIAL_BILL_BANDS
    index = next((i for i, limit in enumerate(bands) if monthly_bill < limit), len(bands))
    size = template.system_sizes[index]
    if template_key != "commercial" and roof_size:
        size = min(size, roof_size * ROOF_KWP_PER_SQM)
    return size


def transport_cost(region_costs, system_size: float) -> float:
    if system_size <= 6:
        return region_costs.small
    if system_size <= 10:
        return region_costs.medium
    return region_costs.large


def format_payback(years: float) -> str:
    whole = math.floor(years)
    months = math.floor((years % 1) * 12)
    return f"{whole} years, {months} months"


def projected_savings(annual_savings: float, inflation: float, degradation: float) -> float:
    """25-year savings with compounding tariff inflation and linear panel degradation"""
    total = sum(
        annual_savings * (1 + inflation) ** year * (1 - degradation * year)
        for year in range(PROJECTION_YEARS)
    )
    return total * SAVINGS_BOOST_FACTOR


def estimate(params: CalculatorParams, template_key: str, region_key: str, roof_type: str,
             monthly_bill: float, roof_size: Optional[float] = None) -> dict:
    """Compute cost, savings and payback. Raises EstimateError on unknown inputs."""
    if template_key not in ("residential", "commercial"):
        raise EstimateError(f"Unknown template: {template_key}")
    template = getattr(params.templates, template_key)
    region = params.regions.get(region_key)
    if region is None:
        raise EstimateError(f"Unknown region: {region_key}")
    if roof_type not in ("concrete", "metal"):
        raise EstimateError(f"Unknown roof type: {roof_type}")
    roof = getattr(template.roof_type_costs, roof_type)

    system_size = pick_system_size(template_key, template, monthly_bill, roof_size)
    installation = system_size * (template.cost_per_kw + roof.additional_cost_per_kw)
    transport = transport_cost(region.transport_costs, system_size)
    extras = getattr(params.additional_costs, template_key)
    total_cost = installation + transport + extras.total

    annual_savings = monthly_bill * 12 * template.electricity_reduction
    payback_years = total_cost / annual_savings
    panel_count = math.ceil(system_size * 1000 / template.panel_wattage)

    return {
        "system_size": round(system_size, 2),
        "panel_count": panel_count,
        "system": f"{system_size:.1f}kWp ({panel_count} panels)",
        "installation_cost": installation,
        "transport_cost": transport,
        "additional_costs": extras,
        "total_cost": total_cost,
        "annual_savings": annual_savings,
        "savings_25_years": projected_savings(
            annual_savings, template.annual_inflation, template.panel_degradation
        ),
        "payback_years": round(payback_years, 2),
        "formatted_payback": format_payback(payback_years),
        "region_name": region.name,
        "roof_type_details": roof.installation_details,
    }


def closest_package(packages: list[dict], system_size: float) -> Optional[dict]:
    """Package whose wattage is nearest the system size (kW); ties go to the smaller one"""
    if not packages:
        return None
    target = system_size * 1000
    return min(packages, key=lambda p: (abs(p["wattage"] - target), p["wattage"]))
