from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from workin.errors import INTEGER_PATTERN, InvalidLimit, InvalidPage


MAX_PAGE_LIMIT = 100
T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageEnvelope(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int
    page_count: int = field(init=False)

    def __post_init__(self) -> None:
        self.page_count = page_count(self.total, self.limit)

    def pagination(self) -> dict[str, int]:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.page_count}


def _parse_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def validate_pagination(page_raw: Any, limit_raw: Any) -> PageRequest:
    """Parse raw page/limit values; raise InvalidPage or InvalidLimit when out of bounds."""
    page = _parse_int(page_raw)
    if page is None or page < 1:
        raise InvalidPage()
    limit = _parse_int(limit_raw)
    if limit is None or limit < 1 or limit > MAX_PAGE_LIMIT:
        raise InvalidLimit()
    return PageRequest(page=page, limit=limit)


def page_count(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)
