from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from sqlalchemy import and_, or_, true

from workin.models.application import APPLICATION_STATUSES, Application
from workin.models.job import Job


LIKE_ESCAPE = "\\"


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _like_pattern(term: str) -> str:
    escaped = term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", f"{LIKE_ESCAPE}%").replace("_", f"{LIKE_ESCAPE}_")
    return f"%{escaped}%"


@dataclass
class FilterPredicate:
    """AND of SQLAlchemy clauses; with no clauses it matches every row."""

    clauses: list = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.clauses)

    def expression(self):
        if not self.clauses:
            return true()
        if len(self.clauses) == 1:
            return self.clauses[0]
        return and_(*self.clauses)


class FilterBuilder:
    def __init__(self) -> None:
        self._clauses: list = []

    def contains(self, column, value: Any) -> FilterBuilder:
        term = _clean(value)
        if term:
            self._clauses.append(column.ilike(_like_pattern(term), escape=LIKE_ESCAPE))
        return self

    def contains_any(self, columns: Iterable, value: Any) -> FilterBuilder:
        term = _clean(value)
        if term:
            pattern = _like_pattern(term)
            self._clauses.append(or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns)))
        return self

    def equals(self, column, value: Any) -> FilterBuilder:
        if value is None or (isinstance(value, str) and not value.strip()):
            return self
        self._clauses.append(column == value)
        return self

    def one_of(self, column, value: Any, allowed: Iterable[str]) -> FilterBuilder:
        # Values outside the allowed set are dropped, not rejected.
        if value in tuple(allowed):
            self._clauses.append(column == value)
        return self

    def substring_any_of(self, column, values: Iterable[Any]) -> FilterBuilder:
        terms = [_clean(value) for value in values]
        terms = [term for term in terms if term]
        if terms:
            self._clauses.append(
                or_(*(column.like(_like_pattern(term), escape=LIKE_ESCAPE) for term in terms))
            )
        return self

    def build(self) -> FilterPredicate:
        return FilterPredicate(clauses=list(self._clauses))


def build_job_predicate(
    *,
    search: str | None = None,
    location: str | None = None,
    company: str | None = None,
    job_type: str | None = None,
    skills: str | None = None,
    salary_min: str | None = None,
    salary_max: str | None = None,
    hr_id: int | None = None,
) -> FilterPredicate:
    builder = (
        FilterBuilder()
        .equals(Job.hr_id, hr_id)
        .contains_any((Job.title, Job.description, Job.requirements), search)
        .contains(Job.location, location)
        .contains(Job.company, company)
        .equals(Job.type, _clean(job_type) or None)
        .contains(Job.requirements, skills)
        # salary is free text, so either bound only has to appear in it
        .substring_any_of(Job.salary, (salary_min, salary_max))
    )
    return builder.build()


def build_application_predicate(
    *,
    candidate_id: int | None = None,
    job_id: int | None = None,
    status: str | None = None,
) -> FilterPredicate:
    builder = (
        FilterBuilder()
        .equals(Application.candidate_id, candidate_id)
        .equals(Application.job_id, job_id)
        .one_of(Application.status, status, APPLICATION_STATUSES)
    )
    return builder.build()
