# =============================================================================
# core/validation.py - Request Validation Layer
# =============================================================================
# Single entry point that checks raw input against a named schema:
#
#   record = validate(SchemaKind.APP_CREATE, {"title": ..., ...})
#
# On success the validated (frozen) model is returned. On failure a
# FormValidationError is raised carrying one {field, message} entry per
# violated field, not just the first. Nothing here has side effects.
# =============================================================================

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from app.exceptions import FormValidationError
from core.models import (
    AppCreate,
    AppEdit,
    ContactForm,
    LoginForm,
    ProjectCreate,
    ProjectEdit,
)


class SchemaKind(str, Enum):
    """Every request shape the API validates."""
    CONTACT = "contact"
    LOGIN = "login"
    APP_CREATE = "appCreate"
    APP_EDIT = "appEdit"
    PROJECT_CREATE = "projectCreate"
    PROJECT_EDIT = "projectEdit"


SCHEMAS: dict[SchemaKind, type[BaseModel]] = {
    SchemaKind.CONTACT: ContactForm,
    SchemaKind.LOGIN: LoginForm,
    SchemaKind.APP_CREATE: AppCreate,
    SchemaKind.APP_EDIT: AppEdit,
    SchemaKind.PROJECT_CREATE: ProjectCreate,
    SchemaKind.PROJECT_EDIT: ProjectEdit,
}


def _public_names(schema: type[BaseModel]) -> dict[str, str]:
    """Map both python names and aliases to the name clients send."""
    names = {}
    for name, info in schema.model_fields.items():
        public = info.alias or name
        names[name] = public
        names[public] = public
    return names


def field_errors(schema: type[BaseModel], exc: ValidationError) -> list[dict[str, str]]:
    """
    Flatten a pydantic ValidationError into [{field, message}, ...].

    One entry per failed check, in schema order. A field whose validator
    ran several checks (see `all_checks`) contributes one entry for each.
    """
    names = _public_names(schema)
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ("",)
        field = names.get(str(loc[0]), str(loc[0]))
        messages = (err.get("ctx") or {}).get("messages") or [err["msg"]]
        for message in messages:
            entry = {"field": field, "message": message}
            if entry not in errors:
                errors.append(entry)
    return errors


def validate(schema_kind: SchemaKind | str, raw_input: Mapping[str, Any]) -> BaseModel:
    """
    Validate `raw_input` against the schema registered for `schema_kind`.

    Args:
        schema_kind: One of SchemaKind (or its string value)
        raw_input: Decoded JSON body or form fields

    Returns:
        The validated model instance

    Raises:
        FormValidationError: If any field is missing or malformed
        ValueError: If schema_kind is not a known kind
    """
    schema = SCHEMAS[SchemaKind(schema_kind)]
    try:
        return schema.model_validate(dict(raw_input))
    except ValidationError as e:
        raise FormValidationError(field_errors(schema, e)) from None
