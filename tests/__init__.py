# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Catalog API:
# - fakes.py: In-memory Supabase (tables, storage, auth)
# - test_models.py: Pydantic model validation and form parsing
# - test_image_service.py / test_storage_service.py: Image pipeline pieces
# - test_services.py: Table services and email notifications
# - test_product_mutation_service.py: Product + image consistency
# - test_auth.py / test_routes.py: API endpoints through FastAPI
#
# Run tests with: poetry run pytest
# =============================================================================
