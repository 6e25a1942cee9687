# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the portfolio API:
# - test_validation.py: request schemas and field-level error lists
# - test_attachment_service.py: upload acceptance, naming, storage
# - test_record_store.py: SQL composition and connection handling
# - test_auth_service.py: login flow and session tokens
# - test_mail_service.py: template rendering and SMTP dispatch
# - test_record_pipeline.py: multipart save pipeline, form lifetime, stored-image reuse
# - test_api.py: HTTP endpoints end to end (fake store and mailer)
# - test_proxy.py: CORS relay
#
# Run tests with: pytest
# =============================================================================
