"""
Rate limiting for the credential-handling endpoints.

Route modules decorate handlers with ``limiter.limit(...)``; the instance
lives here so they can import it without pulling in the application.
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from snippetbox.core.config import Settings, settings

logger = logging.getLogger(__name__)

MEMORY_STORAGE = "memory://"


def limiter_storage_uri(config: Settings) -> str:
    """Redis when a valid URL is configured, process memory otherwise."""
    url = config.redis_url
    if not url:
        return MEMORY_STORAGE
    if not url.startswith(("redis://", "rediss://")):
        logger.warning("Ignoring SNIPPETBOX_REDIS_URL with unsupported scheme; limits stay in memory")
        return MEMORY_STORAGE
    return url


def create_limiter(config: Settings) -> Limiter:
    """
    Limiter keyed by client address. Limits are only applied where a handler
    asks for one; 429 responses carry Retry-After.
    """
    storage_uri = limiter_storage_uri(config)
    logger.info("Rate limit storage: %s", "redis" if storage_uri != MEMORY_STORAGE else "memory")
    return Limiter(
        key_func=get_remote_address,
        storage_uri=storage_uri,
        default_limits=[],
        headers_enabled=True,
    )


limiter = create_limiter(settings)
