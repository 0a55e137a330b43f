# =============================================================================
# app/routers/admin_quotations.py - Admin Quotation Inbox
# =============================================================================
# Lists quotation requests and changes their status.
# Every endpoint requires an admin bearer token.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import require_admin
from core.models.quotation import Quotation, QuotationStatus, QuotationStatusUpdate
from core.services.quotation_service import QuotationService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[Quotation])
async def list_quotations(
    status: Annotated[QuotationStatus | None, Query(description="Filter by status")] = None,
):
    """List quotations newest first, optionally filtered by status."""
    return QuotationService.list_quotations(status=status)


@router.get("/{quotation_id}", response_model=Quotation)
async def get_quotation(
    quotation_id: Annotated[UUID, Path(description="Quotation UUID")],
):
    """Get one quotation."""
    return QuotationService.get_quotation(quotation_id)


@router.put("/{quotation_id}/status", response_model=Quotation)
async def update_quotation_status(
    quotation_id: Annotated[UUID, Path(description="Quotation UUID")],
    request: QuotationStatusUpdate,
):
    """Move a quotation to any status (new, processing, completed)."""
    return QuotationService.update_quotation_status(quotation_id, request.status)
