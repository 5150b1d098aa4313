# atelier/utils/pagination.py
from __future__ import annotations

import math
from typing import Any, TypedDict

from sqlalchemy.orm import Query
from werkzeug.exceptions import BadRequest


class PageMeta(TypedDict):
    total: int
    page: int
    limit: int
    totalPages: int


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        raise BadRequest("Limit must be greater than zero")
    return math.ceil(total / limit)


def paginate_offset(query: Query, *, page: int, limit: int) -> tuple[list[Any], PageMeta]:
    """
    Execute an offset-paginated query.

    The query must already carry its ORDER BY; pages past the end
    return an empty item list rather than 404.
    """
    if page < 1:
        raise BadRequest("Page must be greater than zero")

    result = query.paginate(page=page, per_page=limit, error_out=False)

    return result.items, {
        "total": result.total,
        "page": page,
        "limit": limit,
        "totalPages": total_pages(result.total, limit),
    }
