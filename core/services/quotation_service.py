# =============================================================================
# core/services/quotation_service.py - Quotation Data Access
# =============================================================================
# Stores quotation requests from the public form and lets admins list them
# and change their status.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.quotation import QuotationCreate, QuotationStatus
from app.exceptions import QuotationNotFoundError

logger = logging.getLogger(__name__)

TABLE = "quotations"


class QuotationService:
    """Service for quotation rows."""

    @staticmethod
    def create_quotation(quotation: QuotationCreate) -> dict[str, Any]:
        """
        Insert a quotation with status `new`.

        Returns:
            Created quotation row

        Raises:
            Exception: If the insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .insert(quotation.to_record())
                .execute()
            )

            if response.data:
                created = response.data[0]
                logger.info(f"Created quotation: {created['id']} from {quotation.email}")
                return created

            raise Exception("Insert returned no data")

        except Exception as e:
            logger.error(f"Failed to create quotation: {e}")
            raise

    @staticmethod
    def list_quotations(status: QuotationStatus | None = None) -> list[dict[str, Any]]:
        """List quotations newest first, optionally only one status."""
        client = SupabaseClient.get_client()

        try:
            query = client.table(TABLE).select("*")
            if status:
                query = query.eq("status", status.value)

            response = query.order("created_at", desc=True).execute()
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list quotations: {e}")
            raise

    @staticmethod
    def get_quotation(quotation_id: str | UUID) -> dict[str, Any]:
        """
        Get a quotation by ID.

        Raises:
            QuotationNotFoundError: If it doesn't exist
        """
        quotation = SupabaseClient.fetch_one(TABLE, "id", normalize_uuid(quotation_id))
        if not quotation:
            raise QuotationNotFoundError(str(quotation_id))
        return quotation

    @staticmethod
    def update_quotation_status(
        quotation_id: str | UUID,
        status: QuotationStatus,
    ) -> dict[str, Any]:
        """
        Set a quotation's status. Any status may follow any other.

        Raises:
            QuotationNotFoundError: If it doesn't exist
        """
        client = SupabaseClient.get_client()
        quotation_id_str = normalize_uuid(quotation_id)

        try:
            response = (
                client.table(TABLE)
                .update({"status": status.value})
                .eq("id", quotation_id_str)
                .execute()
            )

        except Exception as e:
            logger.error(f"Failed to update quotation {quotation_id_str}: {e}")
            raise

        if not response.data:
            raise QuotationNotFoundError(quotation_id_str)

        logger.info(f"Quotation {quotation_id_str} -> {status.value}")
        return response.data[0]
