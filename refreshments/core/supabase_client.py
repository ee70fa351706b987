# refreshments/core/supabase_client.py
from functools import lru_cache

from supabase import Client, create_client

from refreshments.core.config import get_settings


@lru_cache
def supabase_public() -> Client:
    """
    Create a Supabase client with the anon/public key.

    Used by the supabase store backend for the items / purchases /
    purchase_items tables. The client still respects RLS, so the
    tables must allow the anon role to read and write.

    Raises:
        RuntimeError: if SUPABASE_URL or SUPABASE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise RuntimeError("Missing SUPABASE_URL / SUPABASE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
