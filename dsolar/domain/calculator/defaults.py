"""Stock calculator parameters seeded the first time an admin opens the editor"""

CONCRETE_ROOF_DETAILS = (
    "Installation on concrete roofs requires metal structures for mounting the solar panels. "
    "This typically adds about 20% to the total package cost due to the additional materials "
    "and labor needed for proper structural support."
)
METAL_ROOF_DETAILS = (
    "Installation on metal tin roofs is straightforward with regular installation methods. "
    "There's no additional cost as the panels can be mounted directly to the metal surface "
    "using standard mounting hardware."
)


def _roof_costs(concrete_per_kw: float) -> dict:
    return {
        "concrete": {"additional_cost_per_kw": concrete_per_kw, "installation_details": CONCRETE_ROOF_DETAILS},
        "metal": {"additional_cost_per_kw": 0, "installation_details": METAL_ROOF_DETAILS},
    }


def _region(name: str, small: float, medium: float, large: float, description: str) -> dict:
    return {
        "name": name,
        "transport_costs": {"small": small, "medium": medium, "large": large},
        "description": description,
    }


DEFAULT_CALCULATOR_PARAMS = {
    "templates": {
        "residential": {
            "name": "Residential",
            "description": "For homes and small properties",
            "default_bill": 0,
            "system_sizes": [3, 5, 8, 10, 15],
            "cost_per_kw": 70000,
            "roof_type_costs": _roof_costs(14000),
            "panel_wattage": 450,
            "electricity_reduction": 0.90,
            "annual_inflation": 0.055,
            "panel_degradation": 0.005,
            "payback_period": "5-7 years",
        },
        "commercial": {
            "name": "Commercial",
            "description": "For businesses and large installations",
            "default_bill": 0,
            "system_sizes": [50, 100, 200, 300, 400],
            "cost_per_kw": 34000,
            "roof_type_costs": _roof_costs(6800),
            "panel_wattage": 580,
            "electricity_reduction": 0.95,
            "annual_inflation": 0.05,
            "panel_degradation": 0.004,
            "payback_period": "3 years, 2 months",
        },
    },
    "regions": {
        "metro-manila": _region("Metro Manila", 0, 0, 0, "No additional transport and mobilization costs"),
        "central-luzon": _region(
            "Central Luzon", 10000, 20000, 30000,
            "Additional fees for transport and mobilization to Central Luzon area",
        ),
        "calabarzon": _region(
            "CALABARZON", 10000, 20000, 30000,
            "Additional fees for transport and mobilization to CALABARZON area",
        ),
        "northern-luzon": _region(
            "Northern Luzon", 20000, 30000, 40000,
            "Additional fees for transport and mobilization to Northern Luzon area",
        ),
        "southern-luzon": _region(
            "Southern Luzon", 20000, 30000, 40000,
            "Additional fees for transport and mobilization to Southern Luzon area",
        ),
    },
    "additional_costs": {
        "residential": {
            "net_metering_processing_fee": 19500,
            "other_fees": 5500,
            "net_metering_piping_cost": 9500,
        },
        "commercial": {
            "net_metering_processing_fee": 25000,
            "other_fees": 15000,
            "net_metering_piping_cost": 20000,
        },
    },
    "default_values": {
        "default_system_efficiency": 18,
        "default_annual_radiation": 1800,
        "default_peak_sun_hours": 5.5,
    },
}
