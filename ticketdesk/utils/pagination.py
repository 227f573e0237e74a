# ticketdesk/utils/pagination.py
"""
Paginate plugin for Motor collections.

Result shape::

    {"results": [...], "page": 1, "limit": 10, "totalPages": 1, "totalResults": 3}

``sort_by`` is a comma separated list of ``field:direction`` pairs applied in
order; anything but ``desc`` sorts ascending. Pages past the end come back
empty instead of failing.
"""
import asyncio
import math
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
DEFAULT_SORT = [("createdAt", 1)]

Populate = Callable[[List[dict]], Awaitable[List[dict]]]


def parse_sort_by(sort_by: Optional[str], allowed: Optional[Iterable[str]] = None) -> List[Tuple[str, int]]:
    keys: List[Tuple[str, int]] = []
    if not sort_by:
        return keys
    allowed_set = set(allowed) if allowed is not None else None
    for part in sort_by.split(","):
        field, _, order = part.strip().partition(":")
        field = field.strip()
        if not field:
            continue
        if allowed_set is not None and field not in allowed_set:
            continue
        keys.append((field, -1 if order.strip() == "desc" else 1))
    return keys


def _positive_int(value: Any, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def page_meta(total: int, page: Any = None, limit: Any = None) -> Dict[str, int]:
    limit = _positive_int(limit, DEFAULT_LIMIT)
    page = _positive_int(page, DEFAULT_PAGE)
    return {
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit),
        "totalResults": total,
    }


async def paginate(
    collection,
    filt: Dict[str, Any],
    sort_by: Optional[str] = None,
    limit: Any = None,
    page: Any = None,
    allowed_sort: Optional[Iterable[str]] = None,
    populate: Optional[Populate] = None,
) -> Dict[str, Any]:
    limit = _positive_int(limit, DEFAULT_LIMIT)
    page = _positive_int(page, DEFAULT_PAGE)
    sort = parse_sort_by(sort_by, allowed_sort) or list(DEFAULT_SORT)
    # insertion order breaks ties so equal keys keep a stable order
    sort.append(("_id", 1))

    cursor = collection.find(filt).sort(sort).skip((page - 1) * limit).limit(limit)
    total, docs = await asyncio.gather(
        collection.count_documents(filt),
        cursor.to_list(length=limit),
    )
    if populate is not None and docs:
        docs = await populate(docs)

    meta = page_meta(total, page, limit)
    return {"results": docs, **meta}
