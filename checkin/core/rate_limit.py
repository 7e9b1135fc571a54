"""Per-client request limits.

Counters are kept in Redis when ``REDIS_URL`` answers a ping so every
worker shares them, otherwise in process memory. The limits themselves come
from ``RATE_LIMIT_DEFAULT`` and ``RATE_LIMIT_LOGIN``.
"""

import logging

import redis as sync_redis
from slowapi import Limiter
from slowapi.util import get_remote_address

from checkin.config import settings

logger = logging.getLogger(__name__)

MEMORY_STORAGE = "memory://"


def _storage_uri(redis_url: str) -> str:
    if not redis_url:
        return MEMORY_STORAGE

    client = sync_redis.from_url(redis_url, socket_connect_timeout=1)
    try:
        client.ping()
    except sync_redis.RedisError:
        logger.warning("Rate limiter: Redis unavailable, using in-memory storage")
        return MEMORY_STORAGE
    finally:
        client.close()

    logger.info("Rate limiter: Redis storage (%s)", redis_url)
    return redis_url


def login_limit() -> str:
    """Limit for ``POST /teacher/login``, read on every request."""
    return settings.RATE_LIMIT_LOGIN


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=(
        _storage_uri(settings.REDIS_URL) if settings.RATE_LIMIT_ENABLED else MEMORY_STORAGE
    ),
    enabled=settings.RATE_LIMIT_ENABLED,
)
