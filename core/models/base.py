# =============================================================================
# core/models/base.py - Shared Form Schema Pieces
# =============================================================================
# Base class and field checks shared by every request schema:
# - FormModel: ignores unknown fields, accepts field names or aliases
# - require_text / check_email / check_url: checks that fail with the exact
#   message the client should see next to the field
# - all_checks: runs several checks and reports every failure
#
# Checks raise PydanticCustomError so the message reaches the client
# verbatim (no "Value error, ..." prefix).
# =============================================================================

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, HttpUrl, TypeAdapter
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

_http_url = TypeAdapter(HttpUrl)


class FormModel(BaseModel):
    """Base for all request schemas."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )


def require_text(value: str | None, message: str) -> str:
    """Reject None and the empty string with `message`."""
    if not value:
        raise PydanticCustomError("required", message)
    return value


def check_email(value: str, message: str) -> str:
    try:
        validate_email(value)
    except ValueError:
        raise PydanticCustomError("email", message)
    return value


def check_url(value: str, message: str) -> str:
    """Accept absolute http(s) URLs; the original string is kept."""
    try:
        _http_url.validate_python(value)
    except ValueError:
        raise PydanticCustomError("url", message)
    return value


def all_checks(value: str | None, *checks: Callable[[str | None], Any]) -> str | None:
    """
    Run every check on `value` and report all failures together.

    Each check raises PydanticCustomError on failure. The failures are
    re-raised as one error whose context carries every message, so the
    field gets one {field, message} entry per failed check.
    """
    messages = []
    for check in checks:
        try:
            check(value)
        except PydanticCustomError as e:
            messages.append(e.message())
    if messages:
        raise PydanticCustomError("checks", "{first}", {"first": messages[0], "messages": messages})
    return value
