# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import secrets
import time
from datetime import datetime, timezone
from urllib.parse import unquote, urlparse
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        product_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        product_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (for timestamp columns)."""
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Object Name Utilities
# =============================================================================

def generate_object_name(extension: str = "webp") -> str:
    """
    Build a collision-resistant object name.

    Combines the current time in milliseconds with random bits, e.g.
    "1718000000000-3f9a2c7e1b04.webp".
    """
    millis = int(time.time() * 1000)
    return f"{millis}-{secrets.token_hex(6)}.{extension.lstrip('.')}"


def object_name_from_url(url: str) -> str | None:
    """
    Extract the object name (last path segment) from a public storage URL.

    Query strings and fragments are ignored.

    Example:
        object_name_from_url("https://x.supabase.co/storage/v1/object/public/b/1-ab.webp?")
        # -> "1-ab.webp"
    """
    if not url:
        return None
    path = urlparse(url).path
    name = unquote(path.rstrip("/").rsplit("/", 1)[-1])
    return name or None
