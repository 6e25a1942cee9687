# =============================================================================
# core/models/forms.py - Contact & Login Schemas
# =============================================================================
# JSON request bodies that are not stored as records:
# - ContactForm: POST /api/send-mail
# - LoginForm: POST /api/login
# =============================================================================

from functools import partial

from pydantic import Field, field_validator

from .base import FormModel, all_checks, check_email, require_text


class ContactForm(FormModel):
    """
    Contact-form submission.

    The reply goes to `contact`, so it must be an email address even though
    the form label also mentions phone numbers.

    Example:
        {
            "fullName": "Ada Lovelace",
            "contact": "ada@example.com",
            "message": "Do you build mobile apps?"
        }
    """

    full_name: str = Field(
        default="",
        alias="fullName",
        validate_default=True,
        description="Name used to greet the sender in the reply"
    )

    contact: str = Field(
        default="",
        validate_default=True,
        description="Reply address"
    )

    message: str = Field(
        default="",
        validate_default=True,
        description="Free-text message"
    )

    @field_validator("full_name")
    @classmethod
    def _full_name(cls, value: str) -> str:
        return require_text(value, "Full Name is required")

    @field_validator("contact")
    @classmethod
    def _contact(cls, value: str) -> str:
        return all_checks(
            value,
            partial(require_text, message="Email Address or Phone Number is required"),
            partial(check_email, message="Invalid email format"),
        )

    @field_validator("message")
    @classmethod
    def _message(cls, value: str) -> str:
        return require_text(value, "Message is required")


class LoginForm(FormModel):
    """Email + password pair submitted to POST /api/login."""

    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return require_text(value, "Email is required")

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return require_text(value, "Password is required")
