"""
Redis caching for read-mostly public data (calculator parameters and package groups)
"""
import json
import logging
from typing import Any, Optional

from . import rate_limiter

logger = logging.getLogger(__name__)

CALCULATOR_PARAMS_KEY = "dsolar:calculator_params"
CALCULATOR_PACKAGES_KEY = "dsolar:calculator_packages"


class Cache:
    """Redis cache wrapper with JSON serialization. Every failure reads as a miss."""

    def _get_client(self):
        try:
            return rate_limiter.get_redis_client()
        except Exception as e:
            logger.warning(f"⚠️ Redis cache unavailable: {e}")
            return None

    def get(self, key: str) -> Optional[Any]:
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"Cache MISS: {key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL (default 1 hour)"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value, default=str))
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, *keys: str) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(*keys)
            logger.debug(f"Cache DELETE: {', '.join(keys)}")
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for {keys}: {e}")
            return False


cache = Cache()
