# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Sellah dashboard API:
# - test_status_service.py: Order status normalization and tabs
# - test_logout_flags.py: Logout flag store and login banner
# - test_guards.py: Client-side session guards
# - test_routes.py: Public/protected route partition
# - test_api.py: HTTP endpoints and the logout gate
#
# Run tests with: pytest
# =============================================================================
