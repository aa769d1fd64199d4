"""
Paged listing queries shared by the job and application endpoints.

A listing runs two reads with the same predicate: the requested page,
ordered and offset-limited, and the total count of matching rows.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query

from workin.errors import StorageError
from workin.logging_config import get_logger
from workin.services.filters import FilterPredicate
from workin.services.pagination import PageEnvelope, PageRequest
from workin.services.sorting import SortSpec


logger = get_logger(__name__)


def _order_by(sort_spec: SortSpec, sort_columns: Mapping[str, Any], tiebreaker: Any | None) -> list:
    column = sort_columns[sort_spec.field]
    ordering = [column.asc() if sort_spec.ascending else column.desc()]
    if tiebreaker is not None:
        ordering.append(tiebreaker.asc() if sort_spec.ascending else tiebreaker.desc())
    return ordering


def execute_listing(
    query: Query,
    predicate: FilterPredicate,
    sort_spec: SortSpec,
    page_request: PageRequest,
    sort_columns: Mapping[str, Any],
    options: Sequence[Any] = (),
    tiebreaker: Any | None = None,
) -> PageEnvelope:
    """
    Fetch one page of `query` plus the total match count.

    Args:
        query: Base ORM query for the listed entity
        predicate: Filter applied to both the page fetch and the count
        sort_spec: Resolved sort field and direction
        page_request: Validated page and limit
        sort_columns: Maps each whitelisted sort field to its column
        options: Loader options for related entities included in each item
        tiebreaker: Column giving a stable order among equal sort keys

    Raises:
        StorageError: the database failed either read
    """
    filtered = query.filter(predicate.expression())
    try:
        items = (
            filtered.options(*options)
            .order_by(*_order_by(sort_spec, sort_columns, tiebreaker))
            .offset(page_request.offset)
            .limit(page_request.limit)
            .all()
        )
        total = filtered.order_by(None).count()
    except SQLAlchemyError as exc:
        logger.exception("Listing query failed")
        query.session.rollback()
        raise StorageError() from exc

    return PageEnvelope(items=items, page=page_request.page, limit=page_request.limit, total=total)
