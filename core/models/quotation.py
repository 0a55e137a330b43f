# =============================================================================
# core/models/quotation.py - Quotation Schemas
# =============================================================================
# A quotation is a request for pricing submitted through the public form.
# Admins move it between statuses in any order (new, processing, completed).
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserType(str, Enum):
    """Who is asking for the quotation."""
    BUYER = "buyer"
    SELLER = "seller"


class QuotationStatus(str, Enum):
    """
    Admin-driven processing state.

    Any status may move to any other status.
    """
    NEW = "new"
    PROCESSING = "processing"
    COMPLETED = "completed"


class QuotationCreate(BaseModel):
    """
    Body of POST /api/quotations.

    Field names follow the public form (camelCase `userType`), snake_case is
    accepted too. Blank optional fields are stored as null.

    Example:
        {
            "userType": "buyer",
            "name": "Jane Doe",
            "email": "jane@x.com",
            "message": "Need 500m of denim"
        }
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    user_type: UserType = Field(..., alias="userType")
    name: str = Field(..., min_length=1, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    email: str = Field(..., max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    mobile: str | None = Field(default=None, max_length=50)
    country: str | None = Field(default=None, max_length=100)
    profession: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=100)
    product: str | None = Field(default=None, max_length=255)
    message: str | None = None

    @field_validator(
        "company", "mobile", "country", "profession", "category", "product", "message",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_record(self) -> dict[str, Any]:
        """Row values for the quotations table; new quotations start as `new`."""
        record = self.model_dump(mode="json")
        record["status"] = QuotationStatus.NEW.value
        return record


class Quotation(BaseModel):
    """Schema for returning a quotation to clients."""

    id: str
    user_type: UserType
    name: str
    company: str | None = None
    email: str
    mobile: str | None = None
    country: str | None = None
    profession: str | None = None
    category: str | None = None
    product: str | None = None
    message: str | None = None
    status: QuotationStatus = QuotationStatus.NEW
    created_at: datetime | None = None


class QuotationCreateResponse(BaseModel):
    """Response of POST /api/quotations."""

    message: str = "Quotation submitted successfully"
    quotation: Quotation


class QuotationStatusUpdate(BaseModel):
    """Body of PUT /api/admin/quotations/{id}/status."""

    status: QuotationStatus
