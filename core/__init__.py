# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog business logic:
# - models/: Pydantic schemas (categories, products, quotations)
# - services/: Data access, image processing, storage, notifications and
#   the product mutation pipeline
#
# Code in this package should NOT define HTTP routes.
# This keeps the logic testable and reusable.
# =============================================================================
