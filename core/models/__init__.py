# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request validation:
# - base.py: FormModel base and shared field checks
# - forms.py: contact-form and login bodies
# - records.py: app/project rows (create and edit variants)
# - auth.py: stored credentials and session-token payloads
#
# These models define the "contract" between API and clients.
# =============================================================================

from .base import FormModel
from .auth import AuthUser, Credential, TokenPayload
from .forms import ContactForm, LoginForm
from .records import (
    CATEGORY_VALUES,
    AppCategory,
    AppCreate,
    AppEdit,
    ProjectCreate,
    ProjectEdit,
    RecordForm,
)

__all__ = [
    "FormModel",
    "AuthUser",
    "Credential",
    "TokenPayload",
    "ContactForm",
    "LoginForm",
    "CATEGORY_VALUES",
    "AppCategory",
    "AppCreate",
    "AppEdit",
    "ProjectCreate",
    "ProjectEdit",
    "RecordForm",
]
