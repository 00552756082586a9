"""Singleton Supabase client for file storage."""
from supabase import create_client, Client

from config import settings
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)

_client: Client | None = None


def get_supabase_client() -> Client:
    """Get or create the Supabase client singleton.

    Uses the anon key: uploads are made on behalf of the signed-in user
    and storage policies apply.
    """
    global _client
    if _client is None:
        url = settings.SUPABASE_URL
        key = settings.SUPABASE_ANON_KEY
        if not url or not key:
            raise RuntimeError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment"
            )
        _client = create_client(url, key)
        logger.info(f"Supabase client initialized for {url}")
    return _client
