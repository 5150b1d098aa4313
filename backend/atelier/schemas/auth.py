from typing import Optional

from pydantic import Field

from . import RequestSchema


class LoginDto(RequestSchema):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class UpdateCredentialsDto(RequestSchema):
    current_password: str = Field(min_length=1)
    username: Optional[str] = Field(None, min_length=3, max_length=100)
    new_password: Optional[str] = Field(None, min_length=6)
