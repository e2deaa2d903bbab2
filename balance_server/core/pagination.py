"""Lenient page/limit parsing shared by listing endpoints."""

from __future__ import annotations

import math
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Largest value SQLite accepts for LIMIT and OFFSET.
MAX_SQL_INT = 2**63 - 1


def positive_int(value: Any, default: int) -> int:
    """Parse ``value`` as a positive integer, falling back to ``default``."""
    if isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if 1 <= parsed <= MAX_SQL_INT else default


def normalize_page(page: Any, limit: Any, *, default_limit: int = DEFAULT_LIMIT, max_limit: int | None = None) -> tuple[int, int]:
    page_number = positive_int(page, DEFAULT_PAGE)
    page_size = positive_int(limit, default_limit)
    if max_limit is not None:
        page_size = min(page_size, max_limit)
    return page_number, page_size


def page_offset(page: int, limit: int) -> int:
    return min((page - 1) * limit, MAX_SQL_INT)


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
