"""Page/limit normalization and paginated selects."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest OFFSET a signed 64-bit SQL integer can hold.
MAX_OFFSET = 2**63 - 1


def normalize_page_limit(page: int | None, limit: int | None) -> tuple[int, int, int]:
    """Return ``(page, limit, offset)`` with out-of-range values replaced by defaults."""
    if page is None or page <= 0:
        page = DEFAULT_PAGE
    if limit is None or limit <= 0:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT
    if (page - 1) * limit > MAX_OFFSET:
        page = DEFAULT_PAGE
    return page, limit, (page - 1) * limit


def paginate(session: Session, stmt: Select[Any], *, page: int, limit: int) -> tuple[list[Any], int]:
    _, limit, offset = normalize_page_limit(page, limit)
    total = session.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
    items = list(session.scalars(stmt.limit(limit).offset(offset)))
    return items, total
