# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .category_service import CategoryService
from .image_service import ImageService
from .notification_service import NotificationService
from .product_mutation_service import ProductMutationService
from .product_service import ProductService
from .quotation_service import QuotationService
from .storage_service import StorageService

__all__ = [
    "CategoryService",
    "ImageService",
    "NotificationService",
    "ProductMutationService",
    "ProductService",
    "QuotationService",
    "StorageService",
]
