# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the logic behind the HTTP routes:
# - models/: Pydantic schemas for request validation
# - validation.py: schema-kind dispatcher returning field-level errors
# - services/: record store, attachments, auth and mail
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
