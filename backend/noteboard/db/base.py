from __future__ import annotations

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from noteboard.config import settings
from noteboard.core.repositories.implementations.rest.record_store import RestRecordStore
from noteboard.core.repositories.implementations.supabase.record_store import SupabaseRecordStore
from noteboard.core.repositories.record_store import RecordStore
from noteboard.utils.logging import get_logger

logger = get_logger(__name__)


def create_supabase_client() -> Client:
    """Create a Supabase client using the anon key.

    Sessions are owned by this service, so the client neither persists nor
    refreshes auth tokens.
    """
    logger.debug("Creating Supabase client")
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError("supabase_url and supabase_anon_key are required for the supabase backend")

    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


def create_record_store() -> RecordStore:
    """Build the record store selected by `APP_BACKEND`."""
    if settings.backend == "supabase":
        logger.info("Using Supabase record store", extra={"url": settings.supabase_url})
        return SupabaseRecordStore(create_supabase_client())
    logger.info("Using REST record store", extra={"url": settings.rest_base_url})
    return RestRecordStore(settings.rest_base_url, timeout=settings.rest_timeout)
