from typing import Any, Optional

from pydantic import Field, field_validator

from . import RequestSchema, decode_json_field

KEY_PATTERN = r"^[a-z0-9]+(?:[-_][a-z0-9]+)*$"


class CreatePageContentDto(RequestSchema):
    page: str = Field(min_length=1, max_length=100, pattern=KEY_PATTERN)
    section: str = Field(min_length=1, max_length=100, pattern=KEY_PATTERN)
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    image_alt: Optional[str] = Field(None, max_length=255)
    metadata: Optional[dict[str, Any]] = None
    is_published: bool = True
    sort_order: int = Field(0, ge=0)

    @field_validator("metadata", mode="before")
    @classmethod
    def _decode(cls, value):
        return decode_json_field(value)


class UpdatePageContentDto(RequestSchema):
    page: str = Field(None, min_length=1, max_length=100, pattern=KEY_PATTERN)
    section: str = Field(None, min_length=1, max_length=100, pattern=KEY_PATTERN)
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    image_alt: Optional[str] = Field(None, max_length=255)
    metadata: Optional[dict[str, Any]] = None
    is_published: bool = None
    sort_order: int = Field(None, ge=0)
