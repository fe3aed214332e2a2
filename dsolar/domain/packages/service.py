"""Package service - pricing package management and calculator groupings"""

import logging

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ...cache import CALCULATOR_PACKAGES_KEY, cache
from ...shared.dates import utc_now
from .repository import PackageRepository
from .schemas import PackagePayload, PackageType

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    "code",
    "name",
    "description",
    "type",
    "wattage",
    "suitableFor",
    "financingPrice",
    "srpPrice",
    "cashPrice",
]

HYBRID_TYPES = {PackageType.HYBRID.value, PackageType.HYBRID_SMALL.value, PackageType.HYBRID_LARGE.value}


def normalize_code(code: str) -> str:
    return code.strip().upper()


def battery_capacity(package_type: str) -> str:
    if package_type == PackageType.HYBRID_LARGE.value:
        return "10.24kWh"
    if package_type in HYBRID_TYPES:
        return "5.12kWh"
    return "N/A"


def to_calculator_entry(doc: dict) -> dict:
    return {
        "id": doc["code"].lower().replace(" ", "-"),
        "code": doc["code"],
        "name": doc["name"],
        "watts": doc["wattage"],
        "batteryCapacity": battery_capacity(doc["type"]),
        "financingPrice": doc["financing_price"],
        "srpPrice": doc["srp_price"],
        "cashPrice": doc["cash_price"],
        "suitableFor": doc["suitable_for"],
        "description": doc["description"],
    }


class PackageService:
    """Service layer for pricing packages"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.repo = PackageRepository()

    async def list_packages(self) -> list[dict]:
        return await self.repo.list_packages(self.db)

    async def get_package(self, code: str) -> dict:
        package = await self.repo.get_by_code(self.db, normalize_code(code))
        if not package:
            raise HTTPException(status_code=404, detail="Package not found")
        return package

    def _validate(self, data: PackagePayload) -> dict:
        payload = data.model_dump()
        missing = [
            field
            for field in REQUIRED_FIELDS
            if payload.get(field) is None or (isinstance(payload[field], str) and not payload[field].strip())
        ]
        if missing:
            raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

        if data.type not in {t.value for t in PackageType}:
            raise HTTPException(status_code=400, detail="Invalid package type")
        if data.wattage <= 0:
            raise HTTPException(status_code=400, detail="Wattage must be positive")
        if min(data.financingPrice, data.srpPrice, data.cashPrice) < 0:
            raise HTTPException(status_code=400, detail="Prices cannot be negative")

        return {
            "code": normalize_code(data.code),
            "name": data.name.strip(),
            "description": data.description.strip(),
            "type": data.type,
            "wattage": data.wattage,
            "suitable_for": data.suitableFor.strip(),
            "financing_price": data.financingPrice,
            "srp_price": data.srpPrice,
            "cash_price": data.cashPrice,
        }

    async def create_package(self, data: PackagePayload) -> dict:
        fields = self._validate(data)
        if await self.repo.get_by_code(self.db, fields["code"]):
            raise HTTPException(status_code=409, detail="A package with this code already exists")

        now = utc_now()
        try:
            package = await self.repo.create(self.db, {**fields, "created_at": now, "updated_at": now})
        except DuplicateKeyError as e:
            raise HTTPException(status_code=409, detail="A package with this code already exists") from e

        cache.delete(CALCULATOR_PACKAGES_KEY)
        logger.info(f"✅ Package created: {package['code']}")
        return package

    async def update_package(self, code: str, data: PackagePayload) -> dict:
        current = await self.get_package(code)
        if data.code is None:
            data = data.model_copy(update={"code": current["code"]})
        fields = self._validate(data)

        if fields["code"] != current["code"] and await self.repo.get_by_code(self.db, fields["code"]):
            raise HTTPException(status_code=409, detail="A package with this code already exists")

        try:
            package = await self.repo.update(self.db, current["code"], {**fields, "updated_at": utc_now()})
        except DuplicateKeyError as e:
            raise HTTPException(status_code=409, detail="A package with this code already exists") from e
        if not package:
            raise HTTPException(status_code=404, detail="Package not found")

        cache.delete(CALCULATOR_PACKAGES_KEY)
        logger.info(f"📝 Package updated: {current['code']} -> {package['code']}")
        return package

    async def delete_package(self, code: str) -> dict:
        if not await self.repo.delete(self.db, normalize_code(code)):
            raise HTTPException(status_code=404, detail="Package not found")
        cache.delete(CALCULATOR_PACKAGES_KEY)
        logger.info(f"🗑️ Package deleted: {normalize_code(code)}")
        return {"success": True, "message": "Package deleted successfully"}

    async def calculator_packages(self) -> dict:
        """Packages grouped for the savings calculator: hybrids and on-grid"""
        cached = cache.get(CALCULATOR_PACKAGES_KEY)
        if cached is not None:
            return cached

        packages = await self.repo.list_packages(self.db)
        grouped = {
            "hybrid": [to_calculator_entry(p) for p in packages if p["type"] in HYBRID_TYPES],
            "ongrid": [to_calculator_entry(p) for p in packages if p["type"] == PackageType.ONGRID.value],
        }
        cache.set(CALCULATOR_PACKAGES_KEY, grouped, ttl=600)
        return grouped
