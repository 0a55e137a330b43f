# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the contract for product operations:
# - SpecificationEntry: One ordered key/value pair of a product's specs
# - ProductForm: Parsed admin multipart form (create and update)
# - UploadedImage: Raw bytes of one uploaded image file
# - Product: Product returned to clients
#
# Specifications are stored as a JSON object but exposed as an ordered list
# of pairs so clients never have to deal with an arbitrary dynamic shape.
# =============================================================================

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from app.exceptions import InvalidSpecificationsError, ValidationFailedError


# =============================================================================
# Specifications
# =============================================================================

class SpecificationEntry(BaseModel):
    """A single product specification, e.g. Material: Cotton."""

    key: str = Field(..., min_length=1, max_length=255)
    value: str


def _coerce_spec_value(key: str, value: Any) -> str:
    """Scalars become strings; anything nested is rejected."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise InvalidSpecificationsError(f"value for '{key}' must be a string")


def specifications_from_data(data: Any) -> list[SpecificationEntry]:
    """
    Convert decoded JSON into ordered specification entries.

    Accepts either an object ({"Material": "Cotton"}) or a list of pairs
    ([{"key": "Material", "value": "Cotton"}]). Order is preserved.

    Raises:
        InvalidSpecificationsError: If the shape or any key/value is invalid
    """
    if data is None:
        return []

    if isinstance(data, dict):
        pairs = list(data.items())
    elif isinstance(data, list):
        pairs = []
        for item in data:
            if not isinstance(item, dict) or "key" not in item or "value" not in item:
                raise InvalidSpecificationsError("list items must be objects with 'key' and 'value'")
            pairs.append((item["key"], item["value"]))
    else:
        raise InvalidSpecificationsError("expected a JSON object or a list of key/value pairs")

    entries: list[SpecificationEntry] = []
    seen: set[str] = set()
    for key, value in pairs:
        if not isinstance(key, str) or not key.strip():
            raise InvalidSpecificationsError("keys must be non-empty strings")
        key = key.strip()
        if key in seen:
            raise InvalidSpecificationsError(f"duplicate key '{key}'")
        seen.add(key)
        entries.append(SpecificationEntry(key=key, value=_coerce_spec_value(key, value)))
    return entries


def parse_specifications(text: str | None) -> list[SpecificationEntry]:
    """
    Parse the specifications form field (JSON text).

    Empty or missing text means no specifications.

    Raises:
        InvalidSpecificationsError: If the text is not valid JSON of the right shape
    """
    if text is None or not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidSpecificationsError(f"malformed JSON ({e.msg} at position {e.pos})")
    return specifications_from_data(data)


def specifications_to_record(entries: list[SpecificationEntry]) -> dict[str, str]:
    """Storage shape of specifications: an insertion-ordered JSON object."""
    return {entry.key: entry.value for entry in entries}


# =============================================================================
# Admin Form
# =============================================================================

class ProductForm(BaseModel):
    """
    Product fields submitted through the admin multipart form.

    Only fields the client actually sent end up in `model_fields_set`, which
    is what makes partial updates possible. An empty price string is sent as
    an explicit None (clears the price).
    """

    name: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = None
    category_id: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    price_on_request: bool | None = None
    is_active: bool | None = None
    specifications: list[SpecificationEntry] | None = None
    clear_images: bool = False

    @field_validator("name", "slug", "category_id", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("category_id")
    @classmethod
    def _category_id_is_uuid(cls, value: str | None) -> str | None:
        # Blank is reported later as a missing/empty field
        if not value:
            return value
        try:
            return str(UUID(value))
        except ValueError:
            raise ValueError("must be a UUID")

    @classmethod
    def from_form_fields(
        cls,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        category_id: str | None = None,
        price: str | None = None,
        price_on_request: str | None = None,
        is_active: str | None = None,
        specifications: str | None = None,
        clear_images: str | None = None,
    ) -> "ProductForm":
        """
        Build a ProductForm from raw multipart strings.

        Raises:
            InvalidSpecificationsError: If specifications JSON is malformed
            ValidationFailedError: If any other field has an invalid value
        """
        raw: dict[str, Any] = {
            "name": name,
            "slug": slug,
            "description": description,
            "category_id": category_id,
            "price_on_request": price_on_request,
            "is_active": is_active,
            "clear_images": clear_images,
        }
        values = {key: value for key, value in raw.items() if value is not None}
        # Blank checkboxes mean "not sent"
        for flag in ("price_on_request", "is_active", "clear_images"):
            if isinstance(values.get(flag), str) and not values[flag].strip():
                del values[flag]

        if price is not None:
            values["price"] = price.strip() or None
        if specifications is not None:
            values["specifications"] = parse_specifications(specifications)

        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationFailedError(f"Invalid value for {field}: {first.get('msg')}", field=field)

    def validate_for_create(self) -> None:
        """
        Check the fields a new product cannot do without.

        Raises:
            ValidationFailedError: If name, slug or category_id is missing
        """
        for field in ("name", "slug", "category_id"):
            if not getattr(self, field):
                raise ValidationFailedError(f"Missing required field: {field}", field=field)

    def to_record(self, existing: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Build the row values to write.

        For a create (`existing` is None) defaults are filled in. For an
        update only the supplied fields are written. Whenever the effective
        price_on_request is true the price is written as null.
        """
        supplied = self.model_fields_set
        record: dict[str, Any] = {}

        for field in ("name", "slug", "description", "category_id"):
            if field in supplied:
                record[field] = getattr(self, field)

        # Flags are never written as null
        for field in ("is_active", "price_on_request"):
            if field in supplied and getattr(self, field) is not None:
                record[field] = getattr(self, field)

        if "specifications" in supplied:
            record["specifications"] = specifications_to_record(self.specifications or [])

        if "price" in supplied:
            record["price"] = str(self.price) if self.price is not None else None

        if existing is None:
            record.setdefault("description", None)
            record.setdefault("specifications", {})
            record.setdefault("price", None)
            record.setdefault("price_on_request", False)
            record.setdefault("is_active", True)

        price_on_request = record.get("price_on_request")
        if price_on_request is None and existing is not None:
            price_on_request = existing.get("price_on_request")
        if price_on_request:
            record["price"] = None

        return record


@dataclass(frozen=True)
class UploadedImage:
    """One uploaded image file, already read into memory."""

    filename: str | None
    content: bytes
    content_type: str | None = None


# =============================================================================
# Response Model
# =============================================================================

class Product(BaseModel):
    """
    Schema for returning a product to clients.

    Example:
        {
            "id": "660e8400-e29b-41d4-a716-446655440001",
            "name": "Organic Cotton Shirt",
            "slug": "organic-cotton-shirt",
            "category_id": "550e8400-e29b-41d4-a716-446655440000",
            "images": ["https://xxx.supabase.co/storage/v1/object/public/karmic-images/1718-ab12.webp"],
            "specifications": [{"key": "Material", "value": "Cotton"}],
            "price": null,
            "price_on_request": true,
            "is_active": true
        }
    """

    id: str
    name: str
    slug: str
    description: str | None = None
    category_id: str
    images: list[str] = Field(default_factory=list)
    specifications: list[SpecificationEntry] = Field(default_factory=list)
    price: Decimal | None = None
    price_on_request: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("images", mode="before")
    @classmethod
    def _images_default(cls, value: Any) -> Any:
        return value or []

    @field_validator("specifications", mode="before")
    @classmethod
    def _specifications_from_storage(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, dict):
            return [{"key": key, "value": str(val)} for key, val in value.items()]
        return value

    @model_validator(mode="after")
    def _hide_price_on_request(self) -> "Product":
        if self.price_on_request:
            self.price = None
        return self
