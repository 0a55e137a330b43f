# =============================================================================
# scripts/ - Operational Scripts
# =============================================================================
# - create_admin.py: Create the admin user in Supabase Auth
# =============================================================================
