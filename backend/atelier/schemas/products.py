from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from . import RequestSchema, decode_json_field

Category = Literal["wall-hanging", "rug"]
Status = Literal["available", "sold", "draft"]


class Dimensions(BaseModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    unit: Literal["cm", "inch"]


class CreateProductDto(RequestSchema):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    category: Category
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    status: Status = "draft"
    stock_quantity: int = Field(0, ge=0)
    images: Optional[list[str]] = None
    dimensions: Optional[Dimensions] = None
    materials: Optional[str] = None

    @field_validator("images", "dimensions", mode="before")
    @classmethod
    def _decode(cls, value):
        return decode_json_field(value)


class CreateProductWithUploadDto(CreateProductDto):
    show_on_home: Optional[list[bool]] = None

    @field_validator("show_on_home", mode="before")
    @classmethod
    def _decode_flags(cls, value):
        return decode_json_field(value)


class UpdateProductDto(RequestSchema):
    # Omitted fields stay untouched; explicit nulls are only accepted
    # for nullable columns.
    name: str = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    category: Category = None
    price: Decimal = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: Status = None
    stock_quantity: int = Field(None, ge=0)
    images: Optional[list[str]] = None
    dimensions: Optional[Dimensions] = None
    materials: Optional[str] = None


class ProductQueryDto(RequestSchema):
    category: Optional[Category] = None
    status: Optional[Status] = None
    search: Optional[str] = Field(None, max_length=255)
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


class AddProductImagesDto(RequestSchema):
    show_on_home: Optional[list[bool]] = None

    @field_validator("show_on_home", mode="before")
    @classmethod
    def _decode_flags(cls, value):
        return decode_json_field(value)


class UpdateProductImageDto(RequestSchema):
    show_on_home: bool = None
    sort_order: int = Field(None, ge=0)
