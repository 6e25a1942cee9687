# =============================================================================
# tests/test_validation.py - Request Schema Tests
# =============================================================================
# Unit tests for the validation layer to ensure:
# - Valid input is accepted and unknown fields are ignored
# - Every bad field gets its own {field, message} entry
# - Messages are the exact client-facing strings
# =============================================================================

import pytest

from app.exceptions import FormValidationError
from core.models import AppEdit, ContactForm, ProjectCreate
from core.validation import SchemaKind, validate


def _errors(kind, raw) -> dict[str, str]:
    with pytest.raises(FormValidationError) as exc_info:
        validate(kind, raw)
    return {e["field"]: e["message"] for e in exc_info.value.errors}


VALID_APP = {
    "title": "Tidy",
    "content": "A habit tracker",
    "link": "https://tidy.example.com",
    "category": "d-and-d",
    "image": "1718035200000_tidy.png",
}


# =============================================================================
# Contact Form
# =============================================================================

class TestContactForm:
    """Tests for the contact schema."""

    def test_valid_contact(self):
        form = validate("contact", {
            "fullName": "Ada Lovelace",
            "contact": "ada@example.com",
            "message": "Hello",
            "newsletter": True,
        })

        assert isinstance(form, ContactForm)
        assert form.full_name == "Ada Lovelace"
        assert form.contact == "ada@example.com"

    def test_every_missing_field_reported(self):
        with pytest.raises(FormValidationError) as exc_info:
            validate(SchemaKind.CONTACT, {})

        assert exc_info.value.errors == [
            {"field": "fullName", "message": "Full Name is required"},
            {"field": "contact", "message": "Email Address or Phone Number is required"},
            {"field": "contact", "message": "Invalid email format"},
            {"field": "message", "message": "Message is required"},
        ]

    def test_empty_contact_reports_both_checks(self):
        with pytest.raises(FormValidationError) as exc_info:
            validate(SchemaKind.CONTACT, {"fullName": "Ada", "contact": "", "message": "Hi"})

        assert exc_info.value.errors == [
            {"field": "contact", "message": "Email Address or Phone Number is required"},
            {"field": "contact", "message": "Invalid email format"},
        ]

    def test_invalid_email(self):
        errors = _errors(SchemaKind.CONTACT, {
            "fullName": "Ada",
            "contact": "not-an-email",
            "message": "Hi",
        })

        assert errors == {"contact": "Invalid email format"}

    def test_wrong_type_rejected(self):
        errors = _errors(SchemaKind.CONTACT, {
            "fullName": 42,
            "contact": "ada@example.com",
            "message": "Hi",
        })

        assert list(errors) == ["fullName"]


# =============================================================================
# Login
# =============================================================================

class TestLoginForm:

    def test_missing_both(self):
        errors = _errors(SchemaKind.LOGIN, {"email": "", "password": ""})

        assert errors == {
            "email": "Email is required",
            "password": "Password is required",
        }


# =============================================================================
# App Records
# =============================================================================

class TestAppSchemas:
    """Tests for appCreate / appEdit."""

    def test_valid_app_columns(self):
        record = validate(SchemaKind.APP_CREATE, {**VALID_APP, "table": "apps_demo"})

        # `table` is a routing parameter, not a column
        assert record.to_columns() == VALID_APP

    def test_all_bad_fields_reported(self):
        errors = _errors(SchemaKind.APP_CREATE, {
            "title": "",
            "content": "",
            "link": "nope",
            "category": "games",
        })

        assert errors == {
            "title": "Title is required",
            "content": "Content is required",
            "link": "Link must be a valid URL",
            "category": "Category must be one of: d-only, d-and-d",
            "image": "Image path is required",
        }

    def test_missing_category(self):
        errors = _errors(SchemaKind.APP_CREATE, {**VALID_APP, "category": ""})

        assert errors == {"category": "Category is required"}

    def test_edit_requires_id(self):
        errors = _errors(SchemaKind.APP_EDIT, VALID_APP)

        assert errors == {"id": "Record id is required"}

    def test_edit_parses_form_id(self):
        record = validate(SchemaKind.APP_EDIT, {**VALID_APP, "id": "12"})

        assert isinstance(record, AppEdit)
        assert record.id == 12
        assert "id" not in record.to_columns()

    def test_edit_may_omit_image(self):
        fields = {k: v for k, v in VALID_APP.items() if k != "image"}

        record = validate(SchemaKind.APP_EDIT, {**fields, "id": "1"})

        assert record.image is None
        assert "image" not in record.to_columns()

    def test_category_stored_as_plain_value(self):
        record = validate(SchemaKind.APP_CREATE, VALID_APP)

        assert record.to_columns()["category"] == "d-and-d"
        assert type(record.to_columns()["category"]) is str

    def test_edit_rejects_non_numeric_id(self):
        errors = _errors(SchemaKind.APP_EDIT, {**VALID_APP, "id": "twelve"})

        assert list(errors) == ["id"]


# =============================================================================
# Project Records
# =============================================================================

class TestProjectSchemas:

    def test_pdf_optional(self):
        record = validate(SchemaKind.PROJECT_CREATE, {"image": "1_cover.jpg"})

        assert isinstance(record, ProjectCreate)
        assert record.to_columns() == {"image": "1_cover.jpg"}

    def test_empty_pdf_treated_as_absent(self):
        record = validate(SchemaKind.PROJECT_CREATE, {"image": "1_cover.jpg", "pdf": ""})

        assert record.to_columns() == {"image": "1_cover.jpg"}

    def test_project_edit_requires_id(self):
        errors = _errors(SchemaKind.PROJECT_EDIT, {"pdf": "2_case.pdf"})

        assert errors == {"id": "Record id is required"}

    def test_project_edit_without_image_keeps_column_out(self):
        record = validate(SchemaKind.PROJECT_EDIT, {"id": "3", "pdf": "2_case.pdf"})

        assert record.image is None
        assert record.to_columns() == {"pdf": "2_case.pdf"}


def test_unknown_schema_kind():
    with pytest.raises(ValueError):
        validate("invoice", {})
