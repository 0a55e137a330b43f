# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - categories.py: Public category endpoints
# - products.py: Public product endpoints (active products only)
# - quotations.py: Public quotation request form
# - admin_products.py: Admin product create/update/delete with images
# - admin_quotations.py: Admin quotation inbox and status changes
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import categories
from . import products
from . import quotations
from . import admin_products
from . import admin_quotations

__all__ = [
    "health",
    "categories",
    "products",
    "quotations",
    "admin_products",
    "admin_quotations",
]
