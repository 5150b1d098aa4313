from datetime import datetime
from typing import Optional

from dateutil.parser import parse as parse_date
from pydantic import Field, field_validator

from . import RequestSchema, decode_json_field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def _parse_published_at(value):
    if value in (None, ""):
        return None
    if isinstance(value, str):
        try:
            return parse_date(value)
        except (ValueError, OverflowError) as exc:
            raise ValueError("publishedAt must be a valid date") from exc
    return value


class CreateBlogArticleDto(RequestSchema):
    title: str = Field(min_length=1, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=500)
    content: str = Field(min_length=1)
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)
    published_at: Optional[datetime] = None
    is_published: bool = False
    sort_order: int = Field(0, ge=0)
    tag_ids: Optional[list[str]] = None

    @field_validator("tag_ids", mode="before")
    @classmethod
    def _decode_tags(cls, value):
        return decode_json_field(value)

    @field_validator("published_at", mode="before")
    @classmethod
    def _published_at(cls, value):
        return _parse_published_at(value)


class UpdateBlogArticleDto(RequestSchema):
    title: str = Field(None, min_length=1, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=500)
    content: str = Field(None, min_length=1)
    slug: str = Field(None, max_length=255, pattern=SLUG_PATTERN)
    published_at: Optional[datetime] = None
    is_published: bool = None
    sort_order: int = Field(None, ge=0)
    tag_ids: list[str] = None

    @field_validator("published_at", mode="before")
    @classmethod
    def _published_at(cls, value):
        return _parse_published_at(value)


class AddBlogArticleImagesDto(RequestSchema):
    alt_texts: Optional[list[str]] = None

    @field_validator("alt_texts", mode="before")
    @classmethod
    def _decode(cls, value):
        return decode_json_field(value)


class UpdateBlogArticleImageDto(RequestSchema):
    alt_text: Optional[str] = Field(None, max_length=255)
    is_cover: bool = None
    sort_order: int = Field(None, ge=0)


class CreateBlogTagDto(RequestSchema):
    name: str = Field(min_length=1, max_length=100)


class UpdateBlogTagDto(RequestSchema):
    name: str = Field(None, min_length=1, max_length=100)
