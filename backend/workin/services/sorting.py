from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


JOB_SORT_FIELDS = ("createdAt", "title", "company", "location", "type")
APPLICATION_SORT_FIELDS = ("createdAt", "status")
DEFAULT_SORT_FIELD = "createdAt"


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str

    @property
    def ascending(self) -> bool:
        return self.direction == "asc"


def resolve_sort(
    sort_by: str | None,
    sort_order: str | None,
    whitelist: Sequence[str],
    default: str = DEFAULT_SORT_FIELD,
) -> SortSpec:
    """Never fails: unknown fields fall back to `default`, anything but "asc" sorts descending."""
    field = sort_by if sort_by in whitelist else default
    direction = "asc" if sort_order == "asc" else "desc"
    return SortSpec(field=field, direction=direction)
