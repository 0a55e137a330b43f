# =============================================================================
# core/services/product_service.py - Product Data Access
# =============================================================================
# CRUD over the products table. Public listings only ever return active
# products; lists are ordered newest first.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import SlugTakenError
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

TABLE = "products"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _is_slug_conflict(error: Exception) -> bool:
    """True for a unique violation on the slug column (concurrent writers)."""
    message = str(error)
    code = getattr(error, "code", None)
    unique_violation = code == UNIQUE_VIOLATION_CODE or UNIQUE_VIOLATION_CODE in message
    return unique_violation and "slug" in message


class ProductService:
    """
    Service for product rows.

    Provides a clean interface between API routes / the mutation service
    and the database.
    """

    @staticmethod
    def list_products(
        category_id: str | UUID | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> list[dict[str, Any]]:
        """
        List products, newest first.

        Args:
            category_id: Only products of this category
            search: Substring the product name must contain
            include_inactive: Also return inactive products (admin listing)

        Returns:
            List of product rows
        """
        client = SupabaseClient.get_client()

        try:
            query = client.table(TABLE).select("*")

            if not include_inactive:
                query = query.eq("is_active", True)
            if category_id:
                query = query.eq("category_id", normalize_uuid(category_id))
            if search:
                query = query.like("name", f"%{_escape_like(search)}%")

            response = query.order("created_at", desc=True).execute()
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list products: {e}")
            raise

    @staticmethod
    def list_products_by_category(category_id: str | UUID) -> list[dict[str, Any]]:
        """Active products of one category, newest first."""
        return ProductService.list_products(category_id=category_id)

    @staticmethod
    def get_product_by_id(product_id: str | UUID) -> dict[str, Any] | None:
        """Return the product with this ID (active or not), or None."""
        return SupabaseClient.fetch_one(TABLE, "id", normalize_uuid(product_id))

    @staticmethod
    def get_product_by_slug(slug: str) -> dict[str, Any] | None:
        """Return the product with this slug (active or not), or None."""
        return SupabaseClient.fetch_one(TABLE, "slug", slug)

    @staticmethod
    def create_product(data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a product row.

        Args:
            data: Column values (see ProductForm.to_record)

        Returns:
            Created product row

        Raises:
            Exception: If the insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                product = response.data[0]
                logger.info(f"Created product: {product['id']} ({product.get('slug')})")
                return product

            raise Exception("Insert returned no data")

        except Exception as e:
            if _is_slug_conflict(e):
                logger.warning(f"Slug taken on insert: {data.get('slug')}")
                raise SlugTakenError(data.get("slug"))
            logger.error(f"Failed to create product: {e}")
            raise

    @staticmethod
    def update_product(product_id: str | UUID, data: dict[str, Any]) -> dict[str, Any] | None:
        """
        Update a product row and bump updated_at.

        Returns:
            Updated product row, or None if no row matched
        """
        client = SupabaseClient.get_client()
        product_id_str = normalize_uuid(product_id)

        update_data = {**data, "updated_at": utc_now_iso()}

        try:
            response = (
                client.table(TABLE)
                .update(update_data)
                .eq("id", product_id_str)
                .execute()
            )

            if response.data:
                logger.info(f"Updated product: {product_id_str}")
                return response.data[0]
            return None

        except Exception as e:
            if _is_slug_conflict(e):
                logger.warning(f"Slug taken on update of {product_id_str}: {data.get('slug')}")
                raise SlugTakenError(data.get("slug"))
            logger.error(f"Failed to update product {product_id_str}: {e}")
            raise

    @staticmethod
    def delete_product(product_id: str | UUID) -> bool:
        """
        Delete a product row.

        Returns:
            True if a row was deleted
        """
        client = SupabaseClient.get_client()
        product_id_str = normalize_uuid(product_id)

        try:
            response = (
                client.table(TABLE)
                .delete()
                .eq("id", product_id_str)
                .execute()
            )
            deleted = bool(response.data)
            logger.info(f"Deleted product: {product_id_str} (found={deleted})")
            return deleted

        except Exception as e:
            logger.error(f"Failed to delete product {product_id_str}: {e}")
            raise
