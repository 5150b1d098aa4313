# atelier/normalizers/pagination.py
from typing import Any, Callable, Dict, List

from atelier.utils.pagination import PageMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    meta: PageMeta,
) -> Dict[str, Any]:
    """
    Shape an offset-paginated listing as
    ``{data, total, page, limit, totalPages}``.
    """
    return {
        "data": [normalize_fn(item) for item in items],
        "total": meta["total"],
        "page": meta["page"],
        "limit": meta["limit"],
        "totalPages": meta["totalPages"],
    }
