# =============================================================================
# app/routers/quotations.py - Public Quotation Form
# =============================================================================
# Stores a quotation request and notifies the site admin by email.
# The email is best-effort: a failed send is logged, never returned.
# =============================================================================

import logging

from fastapi import APIRouter

from core.models.quotation import QuotationCreate, QuotationCreateResponse
from core.services.notification_service import NotificationService
from core.services.quotation_service import QuotationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=QuotationCreateResponse)
async def submit_quotation(request: QuotationCreate):
    """
    Submit a quotation request.

    The quotation is stored with status `new`, then an email notification
    is attempted.
    """
    quotation = QuotationService.create_quotation(request)

    if not NotificationService.send_quotation_notification(quotation):
        logger.error(f"Failed to send email notification for quotation {quotation['id']}")

    return QuotationCreateResponse(quotation=quotation)
