"""In-memory sorting and page slicing shared by list and search endpoints."""

import math

from protean.exceptions import ValidationError

SORT_ORDERS = ("asc", "desc")
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _sort_key(field):
    def key(record):
        value = getattr(record, field)
        if value is None:
            return (1, 0)
        if isinstance(value, str):
            value = value.lower()
        return (0, value)

    return key


def paginate(
    records,
    sortable_fields,
    sort_by=None,
    sort_order=None,
    page=DEFAULT_PAGE,
    limit=DEFAULT_LIMIT,
    default_sort="created_at",
):
    """Sort and slice ``records``; returns ``(page_items, pagination)``.

    ``sort_order`` defaults to ``desc``. The pagination dict reports
    ``total``, ``page``, ``limit``, ``total_pages``, ``has_next`` and ``has_prev``.
    """
    sort_by = sort_by or default_sort
    sort_order = sort_order or "desc"

    errors = {}
    if sort_by not in sortable_fields:
        errors["sort_by"] = [f"Sort field must be one of: {', '.join(sortable_fields)}"]
    if sort_order not in SORT_ORDERS:
        errors["sort_order"] = ["Sort order must be 'asc' or 'desc'"]
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if not 1 <= limit <= MAX_LIMIT:
        errors["limit"] = [f"Limit must be between 1 and {MAX_LIMIT}"]
    if errors:
        raise ValidationError(errors)

    ordered = sorted(records, key=_sort_key(sort_by), reverse=sort_order == "desc")
    total = len(ordered)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit

    return ordered[start : start + limit], {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
