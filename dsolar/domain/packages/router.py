"""Package router - public price lists and admin package management"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...auth import get_current_admin
from ...database import get_db
from .schemas import CalculatorPackagesResponse, DeleteResponse, PackagePayload, PackageResponse
from .service import PackageService

router = APIRouter(prefix="/api", tags=["Packages"])
admin_router = APIRouter(prefix="/api/admin/packages", tags=["Admin Packages"])


def get_package_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> PackageService:
    """Dependency injection for PackageService"""
    return PackageService(db)


def to_response(doc: dict) -> PackageResponse:
    return PackageResponse(
        code=doc["code"],
        name=doc["name"],
        description=doc["description"],
        type=doc["type"],
        wattage=doc["wattage"],
        suitableFor=doc["suitable_for"],
        financingPrice=doc["financing_price"],
        srpPrice=doc["srp_price"],
        cashPrice=doc["cash_price"],
    )


@router.get("/packages", response_model=list[PackageResponse])
async def list_packages(service: PackageService = Depends(get_package_service)):
    return [to_response(p) for p in await service.list_packages()]


@router.get("/calculator-packages", response_model=CalculatorPackagesResponse)
async def calculator_packages(service: PackageService = Depends(get_package_service)):
    return await service.calculator_packages()


# ============================================================================
# ADMIN
# ============================================================================


@admin_router.get("", response_model=list[PackageResponse])
async def admin_list_packages(
    _admin: dict = Depends(get_current_admin),
    service: PackageService = Depends(get_package_service),
):
    return [to_response(p) for p in await service.list_packages()]


@admin_router.post("", response_model=PackageResponse, status_code=201)
async def admin_create_package(
    data: PackagePayload,
    _admin: dict = Depends(get_current_admin),
    service: PackageService = Depends(get_package_service),
):
    return to_response(await service.create_package(data))


@admin_router.get("/{code}", response_model=PackageResponse)
async def admin_get_package(
    code: str,
    _admin: dict = Depends(get_current_admin),
    service: PackageService = Depends(get_package_service),
):
    return to_response(await service.get_package(code))


@admin_router.put("/{code}", response_model=PackageResponse)
async def admin_update_package(
    code: str,
    data: PackagePayload,
    _admin: dict = Depends(get_current_admin),
    service: PackageService = Depends(get_package_service),
):
    return to_response(await service.update_package(code, data))


@admin_router.delete("/{code}", response_model=DeleteResponse)
async def admin_delete_package(
    code: str,
    _admin: dict = Depends(get_current_admin),
    service: PackageService = Depends(get_package_service),
):
    return await service.delete_package(code)
