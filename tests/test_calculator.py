"""Tests for the savings estimate math and the calculator endpoints"""

import pytest
from conftest import run

from dsolar.cache import CALCULATOR_PARAMS_KEY
from dsolar.database import PACKAGES
from dsolar.domain.calculator.defaults import DEFAULT_CALCULATOR_PARAMS
from dsolar.domain.calculator.estimator import (
    EstimateError,
    closest_package,
    estimate,
    format_payback,
    pick_system_size,
    projected_savings,
    transport_cost,
)
from dsolar.domain.calculator.schemas import CalculatorParams, TransportCosts


@pytest.fixture
def params():
    return CalculatorParams.model_validate(DEFAULT_CALCULATOR_PARAMS)


# ============================================================================
# ESTIMATOR
# ============================================================================


@pytest.mark.parametrize(
    "bill,size",
    [(500, 3), (999.99, 3), (1000, 5), (2999, 5), (4000, 8), (9999, 10), (10000, 15), (50000, 15)],
)
def test_residential_system_size_bands(params, bill, size):
    assert pick_system_size("residential", params.templates.residential, bill) == size


@pytest.mark.parametrize("bill,size", [(80000, 50), (150000, 100), (250000, 200), (350000, 300), (500000, 400)])
def test_commercial_system_size_bands(params, bill, size):
    assert pick_system_size("commercial", params.templates.commercial, bill) == size


def test_roof_size_caps_residential_system(params):
    assert pick_system_size("residential", params.templates.residential, 12000, roof_size=50) == pytest.approx(8.5)
    assert pick_system_size("residential", params.templates.residential, 12000, roof_size=500) == 15


def test_roof_size_ignored_for_commercial(params):
    assert pick_system_size("commercial", params.templates.commercial, 250000, roof_size=10) == 200


@pytest.mark.parametrize("size,cost", [(3, 1), (6, 1), (6.5, 2), (10, 2), (10.5, 3), (200, 3)])
def test_transport_cost_bands(size, cost):
    assert transport_cost(TransportCosts(small=1, medium=2, large=3), size) == cost


@pytest.mark.parametrize(
    "years,label", [(3.5, "3 years, 6 months"), (16.354, "16 years, 4 months"), (2.99, "2 years, 11 months"), (5, "5 years, 0 months")]
)
def test_format_payback(years, label):
    assert format_payback(years) == label


def test_projected_savings_without_inflation_or_degradation():
    assert projected_savings(1000, 0, 0) == pytest.approx(1000 * 25 * 1.25)


def test_projected_savings_compounds_inflation_and_degradation():
    expected = sum(1000 * 1.05 ** year * (1 - 0.005 * year) for year in range(25)) * 1.25
    assert projected_savings(1000, 0.05, 0.005) == pytest.approx(expected)


def test_residential_estimate(params):
    result = estimate(params, "residential", "metro-manila", "concrete", 4000)

    assert result["system_size"] == 8
    assert result["panel_count"] == 18
    assert result["system"] == "8.0kWp (18 panels)"
    assert result["installation_cost"] == 8 * (70000 + 14000)
    assert result["transport_cost"] == 0
    assert result["additional_costs"].total == 34500
    assert result["total_cost"] == 706500
    assert result["annual_savings"] == pytest.approx(43200)
    assert result["payback_years"] == 16.35
    assert result["formatted_payback"] == "16 years, 4 months"
    assert result["region_name"] == "Metro Manila"
    assert "concrete roofs" in result["roof_type_details"]


def test_metal_roof_and_regional_transport(params):
    result = estimate(params, "residential", "central-luzon", "metal", 12000, roof_size=50)

    assert result["system_size"] == 8.5
    assert result["installation_cost"] == pytest.approx(8.5 * 70000)
    assert result["transport_cost"] == 20000
    assert result["panel_count"] == 19


def test_commercial_estimate(params):
    result = estimate(params, "commercial", "northern-luzon", "concrete", 250000)

    assert result["system_size"] == 200
    assert result["panel_count"] == 345
    assert result["transport_cost"] == 40000
    assert result["total_cost"] == 200 * (34000 + 6800) + 40000 + 60000


@pytest.mark.parametrize(
    "template,region,roof",
    [("industrial", "metro-manila", "metal"), ("residential", "mars", "metal"), ("residential", "metro-manila", "nipa")],
)
def test_estimate_rejects_unknown_inputs(params, template, region, roof):
    with pytest.raises(EstimateError):
        estimate(params, template, region, roof, 4000)


def test_closest_package_prefers_smaller_on_tie():
    packages = [{"code": "B", "wattage": 8000}, {"code": "A", "wattage": 6000}, {"code": "C", "wattage": 12000}]

    assert closest_package(packages, 7)["code"] == "A"
    assert closest_package(packages, 11)["code"] == "C"
    assert closest_package([], 7) is None


# ============================================================================
# ENDPOINTS
# ============================================================================


def test_public_params_missing(client):
    response = client.get("/api/calculator-params")

    assert response.status_code == 404
    assert response.json()["detail"] == "Calculator parameters not found"


def test_admin_get_seeds_defaults(admin_client):
    response = admin_client.get("/api/admin/calculator-params")

    assert response.status_code == 200
    body = response.json()
    assert body["templates"]["residential"]["costPerKw"] == 70000
    assert body["templates"]["commercial"]["systemSizes"] == [50, 100, 200, 300, 400]
    assert set(body["regions"]) == {"metro-manila", "central-luzon", "calabarzon", "northern-luzon", "southern-luzon"}
    assert body["additionalCosts"]["residential"]["netMeteringProcessingFee"] == 19500

    public = admin_client.get("/api/calculator-params")
    assert public.status_code == 200
    assert public.json() == body


def test_admin_save_params_invalidates_cache(admin_client, fake_redis):
    params = admin_client.get("/api/admin/calculator-params").json()
    admin_client.get("/api/calculator-params")
    assert fake_redis.get(CALCULATOR_PARAMS_KEY) is not None

    params["templates"]["residential"]["costPerKw"] = 65000
    params["regions"]["visayas"] = {
        "name": "Visayas",
        "transportCosts": {"small": 30000, "medium": 40000, "large": 50000},
        "description": "Inter-island shipping",
    }
    response = admin_client.post("/api/admin/calculator-params", json=params)

    assert response.status_code == 200
    assert response.json()["message"] == "Calculator parameters updated successfully"
    assert response.json()["params"]["templates"]["residential"]["costPerKw"] == 65000
    assert fake_redis.get(CALCULATOR_PARAMS_KEY) is None

    public = admin_client.get("/api/calculator-params").json()
    assert public["templates"]["residential"]["costPerKw"] == 65000
    assert public["regions"]["visayas"]["name"] == "Visayas"


@pytest.mark.parametrize(
    "path,value",
    [
        (("templates", "residential", "systemSizes"), [3, 5, 8, 10]),
        (("templates", "residential", "costPerKw"), 0),
        (("templates", "commercial", "electricityReduction"), 1.5),
        (("regions",), {}),
    ],
)
def test_admin_save_rejects_invalid_params(admin_client, path, value):
    params = admin_client.get("/api/admin/calculator-params").json()
    target = params
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value

    assert admin_client.post("/api/admin/calculator-params", json=params).status_code == 422


def test_estimate_uses_defaults_when_nothing_is_stored(client):
    response = client.post("/api/calculator/estimate", json={"monthlyBill": 4000})

    assert response.status_code == 200
    body = response.json()
    assert body["systemSize"] == 8
    assert body["totalCost"] == 706500
    assert body["formattedPayback"] == "16 years, 4 months"
    assert body["savings25Years"] > body["annualSavings"] * 25
    assert body["recommendedPackage"] is None


def test_estimate_recommends_closest_package(client, db):
    run(
        db[PACKAGES].insert_many(
            [
                {"code": "DSH-6K-P12", "name": "6kW Hybrid", "type": "hybrid-small", "wattage": 6000, "cash_price": 380000},
                {"code": "DSH-10K-P20", "name": "10kW Hybrid", "type": "hybrid-large", "wattage": 10000, "cash_price": 600000},
                {"code": "DSO-8K-P16", "name": "8kW On-Grid", "type": "ongrid", "wattage": 8000, "cash_price": 300000},
            ]
        )
    )

    hybrid = client.post("/api/calculator/estimate", json={"monthlyBill": 4000}).json()
    ongrid = client.post(
        "/api/calculator/estimate", json={"monthlyBill": 4000, "systemType": "ongrid", "roofType": "metal"}
    ).json()

    assert hybrid["recommendedPackage"]["code"] == "DSH-6K-P12"
    assert ongrid["recommendedPackage"] == {
        "code": "DSO-8K-P16",
        "name": "8kW On-Grid",
        "type": "ongrid",
        "wattage": 8000,
        "cashPrice": 300000,
    }


@pytest.mark.parametrize(
    "body", [{"monthlyBill": 4000, "region": "mars"}, {"monthlyBill": 4000, "systemType": "offgrid"}]
)
def test_estimate_rejects_unknown_options(client, body):
    assert client.post("/api/calculator/estimate", json=body).status_code == 400


@pytest.mark.parametrize("body", [{}, {"monthlyBill": 0}, {"monthlyBill": 4000, "roofSize": -5}])
def test_estimate_validates_numbers(client, body):
    assert client.post("/api/calculator/estimate", json=body).status_code == 422
