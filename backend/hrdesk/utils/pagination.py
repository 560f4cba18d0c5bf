from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Query

from .validation import to_number

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    limit: int | None = DEFAULT_LIMIT  # None means "all"

    @property
    def skip(self) -> int:
        return 0 if self.limit is None else (self.page - 1) * self.limit


def parse_pagination(page: Any = None, limit: Any = None) -> Pagination:
    """
    Lenient page/limit parsing shared by the list endpoints.

    limit="all" disables paging. Otherwise a missing, non-numeric or zero
    limit becomes 10 and the result is clamped to [1, 100]; a missing,
    non-numeric or sub-1 page becomes 1, and huge pages are capped.
    """
    page_num = to_number(page)
    page_value = min(int(page_num), MAX_PAGE) if page_num is not None and page_num >= 1 else 1

    if isinstance(limit, str) and limit.strip() == "all":
        return Pagination(page=page_value, limit=None)

    limit_num = to_number(limit)
    limit_value = int(limit_num) if limit_num else DEFAULT_LIMIT
    limit_value = max(1, min(limit_value, MAX_LIMIT))
    return Pagination(page=page_value, limit=limit_value)


def paginate(query: Query, pagination: Pagination) -> tuple[list, int]:
    if pagination.limit is None:
        rows = query.all()
        return rows, len(rows)
    # Count without the ORDER BY, which only matters for the page slice.
    total = query.order_by(None).count()
    rows = query.offset(pagination.skip).limit(pagination.limit).all()
    return rows, total
