# airmates/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from airmates.core.config import get_settings

settings = get_settings()


@lru_cache
def supabase_public() -> Client:
    """
    Create a Supabase client with the anon/public key.

    Use cases:
      - calling edge functions (payment-request emails via `send-email`)

    Note: This client still respects RLS.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Edge functions that require the service role (e.g. when `send-email`
    is deployed with JWT verification) are invoked through this client.

    WARNING:
      - Never expose service role key to frontend.
      - Only backend should call this.

    Raises:
        RuntimeError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


def functions_client() -> Client:
    """Service-role client when configured, otherwise the public client."""
    if settings.SUPABASE_SERVICE_ROLE_KEY:
        return supabase_admin()
    return supabase_public()
