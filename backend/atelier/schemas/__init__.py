"""
Request schemas.

Every request body or query string is parsed through one of the
pydantic models defined in this package. ``parse`` never raises on
bad input: it hands back ``Ok(value)`` or ``Err(field_errors)`` and the
route decorators decide what to do with it.
"""
import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

T = TypeVar("T", bound=BaseModel)


class RequestSchema(BaseModel):
    """Base for request DTOs: camelCase on the wire, unknown fields rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    errors: dict[str, list[str]]


ParseResult = Union[Ok[T], Err]


def field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        errors.setdefault(field, []).append(error["msg"])
    return errors


def parse(schema: type[T], payload: Any) -> ParseResult:
    try:
        return Ok(schema.model_validate(payload))
    except PydanticValidationError as exc:
        return Err(field_errors(exc))


def decode_json_field(value: Any) -> Any:
    """
    Multipart forms carry structured fields (lists, objects) as JSON text.
    Anything that is not a string is passed through untouched.
    """
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value
