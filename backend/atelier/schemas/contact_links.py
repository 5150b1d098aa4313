from typing import Literal, Optional

from pydantic import Field

from . import RequestSchema

Platform = Literal[
    "email",
    "facebook",
    "instagram",
    "tiktok",
    "linkedin",
    "pinterest",
    "youtube",
    "twitter",
    "website",
    "other",
]

URL_PATTERN = r"^(https?://|mailto:).+"
LABEL_PATTERN = r"^[a-zA-Z0-9@_.\-\s]*$"


class CreateContactLinkDto(RequestSchema):
    platform: Platform
    url: str = Field(max_length=500, pattern=URL_PATTERN)
    label: Optional[str] = Field(None, max_length=255, pattern=LABEL_PATTERN)
    sort_order: int = Field(0, ge=0)
    is_active: bool = True


class UpdateContactLinkDto(RequestSchema):
    platform: Platform = None
    url: str = Field(None, max_length=500, pattern=URL_PATTERN)
    label: Optional[str] = Field(None, max_length=255, pattern=LABEL_PATTERN)
    sort_order: int = Field(None, ge=0)
    is_active: bool = None
