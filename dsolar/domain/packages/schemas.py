"""Package domain schemas"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PackageType(str, Enum):
    ONGRID = "ongrid"
    HYBRID = "hybrid"
    HYBRID_SMALL = "hybrid-small"
    HYBRID_LARGE = "hybrid-large"


class PackagePayload(BaseModel):
    """Create/update body. Required fields are checked in the service (400 when missing)."""

    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    wattage: Optional[int] = None
    suitableFor: Optional[str] = None
    financingPrice: Optional[float] = None
    srpPrice: Optional[float] = None
    cashPrice: Optional[float] = None


class PackageResponse(BaseModel):
    code: str
    name: str
    description: str
    type: PackageType
    wattage: int
    suitableFor: str
    financingPrice: float
    srpPrice: float
    cashPrice: float


class CalculatorPackage(BaseModel):
    id: str
    code: str
    name: str
    watts: int
    batteryCapacity: str
    financingPrice: float
    srpPrice: float
    cashPrice: float
    suitableFor: str
    description: str


class CalculatorPackagesResponse(BaseModel):
    hybrid: list[CalculatorPackage]
    ongrid: list[CalculatorPackage]


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
