# =============================================================================
# core/services/category_service.py - Category Data Access
# =============================================================================
# Reads and seeds product categories.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from core.models.category import CategoryCreate, DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

TABLE = "categories"


class CategoryService:
    """Service for category queries. Categories are listed by name."""

    @staticmethod
    def list_categories() -> list[dict[str, Any]]:
        """Return all categories ordered by name (ascending)."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .order("name")
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list categories: {e}")
            raise

    @staticmethod
    def get_category_by_slug(slug: str) -> dict[str, Any] | None:
        """Return the category with this slug, or None."""
        return SupabaseClient.fetch_one(TABLE, "slug", slug)

    @staticmethod
    def get_category_by_id(category_id: str) -> dict[str, Any] | None:
        """Return the category with this ID, or None."""
        return SupabaseClient.fetch_one(TABLE, "id", category_id)

    @staticmethod
    def create_category(category: CategoryCreate) -> dict[str, Any]:
        """
        Insert a category.

        Returns:
            Created category row

        Raises:
            Exception: If the insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .insert(category.model_dump())
                .execute()
            )

            if response.data:
                created = response.data[0]
                logger.info(f"Created category: {created['slug']}")
                return created

            raise Exception("Insert returned no data")

        except Exception as e:
            logger.error(f"Failed to create category {category.slug}: {e}")
            raise

    @staticmethod
    def ensure_default_categories() -> int:
        """
        Seed the default categories when the table is empty.

        Returns:
            Number of categories created (0 if any already existed)
        """
        if CategoryService.list_categories():
            return 0

        for category in DEFAULT_CATEGORIES:
            CategoryService.create_category(category)

        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
        return len(DEFAULT_CATEGORIES)
