# =============================================================================
# tests/test_create_admin.py - Admin Bootstrap Script Tests
# =============================================================================
# Run with: poetry run pytest tests/test_create_admin.py -v
# =============================================================================

from scripts.create_admin import create_admin, main


class TestCreateAdmin:
    """Tests for scripts/create_admin.py."""

    def test_creates_admin_with_role(self, fake_supabase):
        assert create_admin("admin@karmic.com", "admin123", "admin") is True

        user = fake_supabase.auth.users["admin@karmic.com"]["user"]
        assert user.user_metadata == {"role": "admin", "username": "admin"}

    def test_existing_user_left_alone(self, fake_supabase):
        fake_supabase.auth.add_user("admin@karmic.com", "old-password")

        assert create_admin("Admin@Karmic.com", "admin123", "admin") is False
        assert fake_supabase.auth.users["admin@karmic.com"]["password"] == "old-password"

    def test_main_requires_password(self, fake_supabase):
        assert main(["--email", "admin@karmic.com", "--password", ""]) == 1
        assert fake_supabase.auth.users == {}

    def test_main_success(self, fake_supabase):
        assert main(["--email", "ops@karmic.com", "--password", "s3cret", "--username", "ops"]) == 0
        assert "ops@karmic.com" in fake_supabase.auth.users
