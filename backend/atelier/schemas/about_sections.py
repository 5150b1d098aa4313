from typing import Optional

from pydantic import Field, field_validator

from . import RequestSchema, decode_json_field


class AboutSectionFields(RequestSchema):
    title: str = Field(min_length=1, max_length=255)
    paragraphs: list[str] = Field(min_length=1)
    image_alt: str = Field(min_length=1, max_length=255)
    sort_order: int = Field(0, ge=0)
    is_published: bool = False

    @field_validator("paragraphs", mode="before")
    @classmethod
    def _decode(cls, value):
        return decode_json_field(value)


class CreateAboutSectionDto(AboutSectionFields):
    image: str = Field(min_length=1, max_length=500)


class CreateAboutSectionWithUploadDto(AboutSectionFields):
    """Multipart variant; the image arrives as a file."""


class UpdateAboutSectionDto(RequestSchema):
    title: str = Field(None, min_length=1, max_length=255)
    paragraphs: list[str] = Field(None, min_length=1)
    image_alt: str = Field(None, min_length=1, max_length=255)
    sort_order: int = Field(None, ge=0)
    is_published: bool = None


class ReplaceImageDto(RequestSchema):
    image_alt: Optional[str] = Field(None, max_length=255)
