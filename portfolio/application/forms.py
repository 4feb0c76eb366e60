"""Input forms for profiles, albums and images.

Each form coerces and constrains a raw payload before it reaches a
repository. ``parse_form`` turns pydantic's error list into
``ValidationFailed`` with the generic caller-facing message.
"""
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..config import ALLOWED_IMAGE_TYPES
from ..errors import ValidationFailed

FormT = TypeVar("FormT", bound=BaseModel)


class ProfileForm(BaseModel):
    display_name: str = Field(min_length=2, max_length=50)
    username: str = Field(min_length=2, max_length=50, pattern=r"^[a-z0-9]+$")
    bio: Optional[str] = Field(default=None, max_length=150)

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class AlbumForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=150)
    album_order: Optional[int] = None
    image_url: Optional[str] = Field(default=None, max_length=2000)


class ImageForm(BaseModel):
    image_url: str = Field(min_length=2, max_length=2000)
    alt_text: str = Field(min_length=2, max_length=50)
    caption: str = Field(min_length=2, max_length=150)
    image_order: int


class UploadGrantRequest(BaseModel):
    """Request for a presigned upload URL."""
    file_name: str = Field(min_length=1, max_length=255)
    content_type: str

    @field_validator("content_type")
    @classmethod
    def check_content_type(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ALLOWED_IMAGE_TYPES:
            raise ValueError(f"unsupported content type {value!r}")
        return value


def invalid_input_message(entity: str) -> str:
    """Message shown for both bad input and a missing principal."""
    return f"Invalid {entity} data or user not authenticated."


def parse_form(form_cls: Type[FormT], data: Any, entity: str) -> FormT:
    """Validate ``data`` against ``form_cls``.

    Args:
        form_cls: Form model to validate with
        data: Raw payload (dict or an instance of ``form_cls``)
        entity: Entity name used in the error message

    Returns:
        Normalized form instance

    Raises:
        ValidationFailed: With field-level reasons attached
    """
    if isinstance(data, form_cls):
        return data
    try:
        return form_cls.model_validate(data if data is not None else {})
    except ValidationError as e:
        reasons = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailed(invalid_input_message(entity), reasons=reasons)
