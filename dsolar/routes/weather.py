import logging
from typing import Any, Optional

import httpx
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from .. import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Weather"])

FORECAST_PARAMETERS = [
    "temp",
    "rh",
    "wind",
    "lclouds",
    "mclouds",
    "hclouds",
    "pressure",
    "precip",
    "dewpoint",
    "windGust",
    "ptype",
]


class WeatherRequest(BaseModel):
    lat: Optional[Any] = None
    lon: Optional[Any] = None


def _coordinate(value: Any, limit: float) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or abs(number) > limit:
        return None
    return number


@router.post("/weather")
async def point_forecast(data: WeatherRequest):
    """Proxy the Windy point forecast so the API key stays server-side"""
    lat = _coordinate(data.lat, 90)
    lon = _coordinate(data.lon, 180)
    if lat is None or lon is None:
        raise HTTPException(
            status_code=400, detail="Invalid coordinates. Latitude and longitude must be valid numbers."
        )

    if not config.WINDY_API_KEY:
        raise HTTPException(status_code=503, detail="Weather service is not configured")

    payload = {
        "lat": lat,
        "lon": lon,
        "model": "gfs",
        "parameters": FORECAST_PARAMETERS,
        "levels": ["surface"],
        "key": config.WINDY_API_KEY,
    }

    try:
        async with httpx.AsyncClient(timeout=15.0) as client:
            response = await client.post(config.WINDY_API_URL, json=payload)
    except httpx.HTTPError as e:
        logger.error(f"❌ Windy request failed: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch weather data") from e

    if response.status_code != 200:
        logger.error(f"❌ Windy API error {response.status_code}: {response.text[:200]}")
        raise HTTPException(status_code=502, detail="Failed to fetch weather data from Windy API")

    return response.json()
