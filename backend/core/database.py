"""
core/database.py
────────────────
Async Supabase client factory.

The client is created once per process, inside the FastAPI lifespan, by
:meth:`data_engine.supabase_gateway.SupabaseGateway.connect`.  All database
interaction must go through the gateway — never call ``acreate_client``
elsewhere.

Usage
-----
    from core.database import create_supabase_client

    client = await create_supabase_client(settings)
"""

import logging

from supabase import AsyncClient, acreate_client

from core.config import Settings

logger = logging.getLogger(__name__)


async def create_supabase_client(settings: Settings) -> AsyncClient:
    """
    Create an authenticated async Supabase client.

    Args:
        settings: Application settings holding ``SUPABASE_URL`` / ``SUPABASE_KEY``.

    Returns:
        Async Supabase ``AsyncClient`` ready for table queries.

    Raises:
        ValueError: If either credential is blank.
    """
    if not settings.supabase_configured:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must both be set")

    client = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client initialised (url=%s)", settings.SUPABASE_URL)
    return client
