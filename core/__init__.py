# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - routes.py: The public/protected route partition
# - models/: Pydantic schemas for order statuses and the logout flag
# - services/: Order status normalization and display mapping
# - session/: Logout flag store and client-side session guards
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
