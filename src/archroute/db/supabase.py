"""Supabase client used for building lookups and route storage."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


def supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get the cached Supabase client, or None when credentials are missing.

    Creating the client does not open a connection; queries can still fail
    with network errors and callers handle those themselves.
    """
    if not supabase_configured():
        logger.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None
    logger.info(f"Supabase client created for {settings.supabase_url}")
    return client
