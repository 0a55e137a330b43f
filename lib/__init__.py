# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper (service + sign-in clients)
# - utils.py: Shared utilities (UUID normalization, object names, timestamps)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import (
    generate_object_name,
    normalize_uuid,
    object_name_from_url,
    utc_now_iso,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "generate_object_name",
    "normalize_uuid",
    "object_name_from_url",
    "utc_now_iso",
]
