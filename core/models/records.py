# =============================================================================
# core/models/records.py - App & Project Record Schemas
# =============================================================================
# These models define what may be written to an app or project table:
# - AppCreate / AppEdit: title, content, link, category, image
# - ProjectCreate / ProjectEdit: image, optional pdf
#
# Attachment fields (`image`, `pdf`) hold the resolved storage reference,
# never file bytes: the HTTP layer resolves uploads before validating.
#
# The table itself is chosen per request and is not part of the schema.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from .base import FormModel, check_url, require_text


class AppCategory(str, Enum):
    """
    Which portfolio section an app belongs to.

    - d-only: design only
    - d-and-d: design and development
    """
    DESIGN_ONLY = "d-only"
    DESIGN_AND_DEVELOPMENT = "d-and-d"


CATEGORY_VALUES = [c.value for c in AppCategory]


class RecordForm(FormModel):
    """Base for schemas that become table rows."""

    model_config = ConfigDict(use_enum_values=True)

    def to_columns(self) -> dict[str, Any]:
        """
        Column/value pairs to write.

        The record id is a match key, not a column to set, and attachment
        slots left unset (None) are omitted so they keep their stored value.
        """
        return self.model_dump(exclude={"id"}, exclude_none=True)


class EditMixin(FormModel):
    """Adds the record identifier every edit requires."""

    id: int | None = Field(
        default=None,
        validate_default=True,
        description="Primary key of the row to update"
    )

    @field_validator("id")
    @classmethod
    def _id(cls, value: int | None) -> int:
        if value is None:
            raise PydanticCustomError("required", "Record id is required")
        return value


# =============================================================================
# Apps
# =============================================================================

class AppCreate(RecordForm):
    """
    A portfolio app entry.

    Example:
        {
            "title": "Tidy",
            "content": "A habit tracker",
            "link": "https://tidy.example.com",
            "category": "d-and-d",
            "image": "1718035200000_tidy.png"
        }
    """

    title: str = Field(default="", validate_default=True)
    content: str = Field(default="", validate_default=True)
    link: str = Field(default="", validate_default=True)
    category: AppCategory = Field(default="", validate_default=True)
    image: str = Field(
        default="",
        validate_default=True,
        description="Stored attachment name or retained reference"
    )

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        return require_text(value, "Title is required")

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return require_text(value, "Content is required")

    @field_validator("link")
    @classmethod
    def _link(cls, value: str) -> str:
        return check_url(value, "Link must be a valid URL")

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> Any:
        require_text(value, "Category is required")
        if value not in CATEGORY_VALUES:
            raise PydanticCustomError(
                "enum",
                "Category must be one of: {allowed}",
                {"allowed": ", ".join(CATEGORY_VALUES)},
            )
        return value

    @field_validator("image")
    @classmethod
    def _image(cls, value: str) -> str:
        return require_text(value, "Image path is required")


class AppEdit(EditMixin, AppCreate):
    """
    AppCreate plus the id of the row being replaced.

    `image` may be omitted: the row keeps its stored image, which the
    record pipeline checks exists before writing.
    """

    image: str | None = Field(
        default=None,
        description="New or retained attachment name; None keeps the stored one"
    )

    @field_validator("image")
    @classmethod
    def _image(cls, value: str | None) -> str | None:
        return value or None


# =============================================================================
# Projects
# =============================================================================

class ProjectCreate(RecordForm):
    """
    A portfolio project: a cover image and an optional PDF case study.

    Example:
        {"image": "1718035200000_cover.jpg", "pdf": "1718035200001_case.pdf"}
    """

    image: str = Field(default="", validate_default=True)
    pdf: str | None = Field(
        default=None,
        description="Stored PDF name; None leaves the column untouched"
    )

    @field_validator("image")
    @classmethod
    def _image(cls, value: str) -> str:
        return require_text(value, "Image path is required")

    @field_validator("pdf")
    @classmethod
    def _pdf(cls, value: str | None) -> str | None:
        # An empty string means "no pdf sent", not "clear the pdf"
        return value or None


class ProjectEdit(EditMixin, ProjectCreate):
    """ProjectCreate plus the id of the row being replaced; `image` as in AppEdit."""

    image: str | None = Field(
        default=None,
        description="New or retained cover name; None keeps the stored one"
    )

    @field_validator("image")
    @classmethod
    def _image(cls, value: str | None) -> str | None:
        return value or None
