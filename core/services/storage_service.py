# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles product image blobs in Supabase Storage: upload under a unique
# name (never overwriting), resolve public URLs, and remove objects with a
# per-name success report.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from lib.utils import generate_object_name, object_name_from_url
from app.config import settings
from app.exceptions import ObjectExistsError, StorageUploadError

logger = logging.getLogger(__name__)

# Substrings Supabase Storage uses when an object name is taken
_DUPLICATE_MARKERS = ("already exists", "duplicate")


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading and removing product images in the configured bucket.
    """

    @staticmethod
    def bucket_name() -> str:
        """Bucket holding product images."""
        return settings.STORAGE_BUCKET

    @staticmethod
    def generate_object_name(extension: str = "webp") -> str:
        """Unique object name built from a millisecond timestamp and random bits."""
        return generate_object_name(extension)

    @staticmethod
    def object_name_from_url(url: str) -> str | None:
        """Object name referenced by a public URL."""
        return object_name_from_url(url)

    @staticmethod
    def get_public_url(name: str) -> str:
        """
        Get a public URL for a storage object.

        Args:
            name: Object name in the bucket

        Returns:
            Public URL string
        """
        client = SupabaseClient.get_client()

        try:
            return client.storage.from_(StorageService.bucket_name()).get_public_url(name)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise

    @staticmethod
    def put(name: str, data: bytes, content_type: str) -> str:
        """
        Upload bytes under `name` and return the object's public URL.

        Existing objects are never overwritten.

        Args:
            name: Object name in the bucket
            data: File bytes
            content_type: MIME type stored with the object

        Returns:
            Public URL of the uploaded object

        Raises:
            ObjectExistsError: If an object with this name already exists
            StorageUploadError: If the upload fails for any other reason
        """
        client = SupabaseClient.get_client()

        # Resolved first so a stored blob always has a URL to roll back by
        try:
            public_url = StorageService.get_public_url(name)
        except Exception as e:
            raise StorageUploadError(f"could not resolve public URL for {name}: {e}")

        try:
            client.storage.from_(StorageService.bucket_name()).upload(
                path=name,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"}
            )

        except Exception as e:
            message = str(e)
            if any(marker in message.lower() for marker in _DUPLICATE_MARKERS):
                logger.error(f"Storage object already exists: {name}")
                raise ObjectExistsError(name)
            logger.error(f"Storage upload failed for {name}: {e}")
            raise StorageUploadError(message)

        logger.info(f"Uploaded file to storage: {name} ({len(data)} bytes)")
        return public_url

    @staticmethod
    def remove(names: list[str]) -> dict[str, bool]:
        """
        Remove objects from storage.

        Never raises: failures are logged and reported per name.

        Args:
            names: Object names in the bucket

        Returns:
            Mapping of object name -> True if it was removed
        """
        names = [name for name in names if name]
        if not names:
            return {}

        client = SupabaseClient.get_client()

        try:
            response = client.storage.from_(StorageService.bucket_name()).remove(names)
        except Exception as e:
            logger.error(f"Failed to remove {len(names)} file(s) from storage: {e}")
            return {name: False for name in names}

        removed = {
            item.get("name")
            for item in (response or [])
            if isinstance(item, dict)
        }
        results = {name: name in removed for name in names}

        missing = [name for name, ok in results.items() if not ok]
        if missing:
            logger.warning(f"Storage did not remove: {missing}")
        logger.info(f"Removed {len(names) - len(missing)}/{len(names)} file(s) from storage")
        return results

    @staticmethod
    def remove_urls(urls: list[str]) -> dict[str, bool]:
        """Remove the objects referenced by public URLs (see `remove`)."""
        names = [object_name_from_url(url) for url in urls or []]
        return StorageService.remove([name for name in names if name])
