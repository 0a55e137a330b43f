# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Replaces the Supabase client with an in-memory fake (tests/fakes.py)
# - Provides an API test client, admin tokens and sample images
# =============================================================================

import io
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
# No email provider in tests
os.environ["SENDGRID_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase


# =============================================================================
# Supabase
# =============================================================================

@pytest.fixture
def fake_supabase(monkeypatch):
    """In-memory Supabase installed as the shared client and the auth client."""
    fake = FakeSupabase()
    monkeypatch.setattr(SupabaseClient, "_instance", fake)
    monkeypatch.setattr(SupabaseClient, "create_auth_client", classmethod(lambda cls: fake))
    return fake


@pytest.fixture
def category(fake_supabase):
    """A single category row."""
    return fake_supabase.seed("categories", name="Fabric", slug="fabric", description="Textiles")


@pytest.fixture
def other_category(fake_supabase):
    """A second category row."""
    return fake_supabase.seed("categories", name="Garments", slug="garments", description=None)


# =============================================================================
# API
# =============================================================================

@pytest.fixture
def client(fake_supabase):
    """TestClient with the app lifespan running (default categories seeded)."""
    from app.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(fake_supabase):
    """Authorization header for a signed-in admin."""
    token = fake_supabase.auth.add_user("admin@karmic.com", "admin123", role="admin", username="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(fake_supabase):
    """Authorization header for a signed-in user without the admin role."""
    token = fake_supabase.auth.add_user("someone@karmic.com", "secret123", role=None)
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Images
# =============================================================================

def _image_bytes(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    """Factory returning encoded image bytes: make_image(w, h, fmt="PNG", mode="RGB")."""
    return _image_bytes


@pytest.fixture
def png_bytes():
    """A small 1200x900 PNG."""
    return _image_bytes(1200, 900)
