"""
Supabase client factory.

The user store talks to Supabase with the service-role key: registration
and login run before there is any end-user session to act as.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the process-wide service-role client, creating it on first use.

    Raises:
        RuntimeError: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY, or use PERSISTENCE_MODE=memory."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """Drop the cached client (tests, configuration changes)."""
    global _service_client
    _service_client = None
