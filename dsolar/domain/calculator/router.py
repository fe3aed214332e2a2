"""Calculator router - public parameters and estimates, admin parameter editor"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...auth import get_current_admin
from ...database import get_db
from .schemas import CalculatorParams, CalculatorParamsSaved, EstimateRequest, EstimateResponse
from .service import CalculatorService

router = APIRouter(prefix="/api", tags=["Calculator"])
admin_router = APIRouter(prefix="/api/admin/calculator-params", tags=["Admin Calculator"])


def get_calculator_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> CalculatorService:
    """Dependency injection for CalculatorService"""
    return CalculatorService(db)


@router.get("/calculator-params", response_model=CalculatorParams)
async def get_calculator_params(service: CalculatorService = Depends(get_calculator_service)):
    return await service.get_public_params()


@router.post("/calculator/estimate", response_model=EstimateResponse)
async def estimate_savings(
    data: EstimateRequest,
    service: CalculatorService = Depends(get_calculator_service),
):
    """Size a system for a monthly bill and price it for a region and roof type"""
    return await service.estimate(data)


# ============================================================================
# ADMIN
# ============================================================================


@admin_router.get("", response_model=CalculatorParams)
async def admin_get_calculator_params(
    _admin: dict = Depends(get_current_admin),
    service: CalculatorService = Depends(get_calculator_service),
):
    return await service.get_admin_params()


@admin_router.post("", response_model=CalculatorParamsSaved)
async def admin_save_calculator_params(
    data: CalculatorParams,
    _admin: dict = Depends(get_current_admin),
    service: CalculatorService = Depends(get_calculator_service),
):
    params = await service.save_params(data)
    return CalculatorParamsSaved(message="Calculator parameters updated successfully", params=params)
