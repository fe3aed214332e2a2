"""Calculator service - parameter document management and savings estimates"""

import logging

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...cache import CALCULATOR_PARAMS_KEY, cache
from ...shared.dates import utc_now
from ..packages.repository import PackageRepository
from ..packages.service import HYBRID_TYPES
from .defaults import DEFAULT_CALCULATOR_PARAMS
from .estimator import EstimateError, closest_package, estimate
from .repository import CalculatorParamsRepository
from .schemas import CalculatorParams, EstimateRequest

logger = logging.getLogger(__name__)

SYSTEM_TYPES = {"hybrid", "ongrid"}


class CalculatorService:
    """Service layer for the savings calculator"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.repo = CalculatorParamsRepository()
        self.package_repo = PackageRepository()

    async def get_public_params(self) -> CalculatorParams:
        cached = cache.get(CALCULATOR_PARAMS_KEY)
        if cached is not None:
            return CalculatorParams.model_validate(cached)

        doc = await self.repo.get(self.db)
        if not doc:
            raise HTTPException(status_code=404, detail="Calculator parameters not found")

        params = CalculatorParams.model_validate(doc)
        cache.set(CALCULATOR_PARAMS_KEY, params.model_dump(mode="json"), ttl=3600)
        return params

    async def get_admin_params(self) -> CalculatorParams:
        """Stored parameters, seeding the stock defaults on first use"""
        doc = await self.repo.get(self.db)
        if not doc:
            logger.info("📋 No calculator parameters found, seeding defaults")
            doc = await self.repo.upsert(self.db, {**DEFAULT_CALCULATOR_PARAMS, "updated_at": utc_now()})
        return CalculatorParams.model_validate(doc)

    async def save_params(self, params: CalculatorParams) -> CalculatorParams:
        doc = await self.repo.upsert(self.db, {**params.model_dump(), "updated_at": utc_now()})
        cache.delete(CALCULATOR_PARAMS_KEY)
        logger.info("✅ Calculator parameters updated")
        return CalculatorParams.model_validate(doc)

    async def _params_or_defaults(self) -> CalculatorParams:
        try:
            return await self.get_public_params()
        except HTTPException:
            return CalculatorParams.model_validate(DEFAULT_CALCULATOR_PARAMS)

    async def estimate(self, data: EstimateRequest) -> dict:
        system_type = (data.system_type or "hybrid").lower()
        if system_type not in SYSTEM_TYPES:
            raise HTTPException(status_code=400, detail=f"Unknown system type: {data.system_type}")

        params = await self._params_or_defaults()
        try:
            result = estimate(
                params, data.template, data.region, data.roof_type, data.monthly_bill, data.roof_size
            )
        except EstimateError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        packages = await self.package_repo.list_packages(self.db)
        if system_type == "hybrid":
            candidates = [p for p in packages if p["type"] in HYBRID_TYPES]
        else:
            candidates = [p for p in packages if p["type"] == "ongrid"]

        best = closest_package(candidates, result["system_size"])
        result["recommended_package"] = (
            {
                "code": best["code"],
                "name": best["name"],
                "type": best["type"],
                "wattage": best["wattage"],
                "cash_price": best["cash_price"],
            }
            if best
            else None
        )
        return result
