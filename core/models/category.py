# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================
# Categories group products on the public site (Garment, Fabric, Yarn, ...).
# They are seeded at startup and are effectively read-only afterwards.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Schema for inserting a category (used by startup seeding)."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class Category(BaseModel):
    """
    Schema for returning a category to clients.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Fabric",
            "slug": "fabric",
            "description": "High-quality fabrics for various applications"
        }
    """

    id: str
    name: str
    slug: str
    description: str | None = None
    created_at: datetime | None = None


# Categories created on first startup when the table is empty
DEFAULT_CATEGORIES: list[CategoryCreate] = [
    CategoryCreate(name="Garment", slug="garment", description="Premium ready-to-wear garments"),
    CategoryCreate(name="Fabric", slug="fabric", description="High-quality fabrics for various applications"),
    CategoryCreate(name="Yarn", slug="yarn", description="Premium yarns in various counts and materials"),
    CategoryCreate(name="Home Textiles", slug="home-textiles", description="Elegant home textiles and furnishings"),
    CategoryCreate(name="Fiber & Feedstock", slug="fiber-feedstock", description="Raw materials and feedstock"),
]
