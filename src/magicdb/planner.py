# magicdb/planner.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from sqlalchemy import Select, distinct, func, select

from .compiler import SearchPlan, SearchPredicateCompiler
from .criteria import SearchCriterion
from .errors import InvalidPage
from .models import Card


"""
Query planner for MagicDB.

Builds the SELECT statements for the three ways a search can be fetched:

    UNRESTRICTED     every matching card, default order
    PLAIN            one page of cards (limit/offset on rows)
    GROUPED_BY_NAME  one page of card *names*; every matching card of those names

Grouped fetches run in two phases. Phase one selects (name, multiverse_id)
for the page's names and collect_name_groups() folds the rows into NameGroups
in Python, so a name can carry any number of ids. Phase two loads the full
cards for exactly those ids.

Pages are 1-based.

author: Cole McGregor
date: 2025-11-16
version: 0.1.0
"""

# results per page when a caller does not say
DEFAULT_PAGE_SIZE = 10


# ---------------------------------------------------------------------------
# FetchPlan
# ---------------------------------------------------------------------------

class FetchMode(Enum):
    UNRESTRICTED = "unrestricted"
    PLAIN = "plain"
    GROUPED_BY_NAME = "grouped_by_name"


@dataclass(frozen=True)
class FetchPlan:
    """
    How much of a result to fetch.

    PLAIN needs a page >= 1. GROUPED_BY_NAME with page=None fetches every
    group. page_size counts rows for PLAIN and names for GROUPED_BY_NAME.
    """
    mode: FetchMode = FetchMode.UNRESTRICTED
    page: Optional[int] = None
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.mode is FetchMode.UNRESTRICTED:
            return
        if self.page_size is None or self.page_size <= 0:
            raise InvalidPage(f"Page size must be positive, got {self.page_size!r}")
        if self.mode is FetchMode.PLAIN and self.page is None:
            raise InvalidPage("A plain fetch needs a page; use UNRESTRICTED for all results")
        if self.page is not None and self.page <= 0:
            raise InvalidPage(f"Pages start at 1, got {self.page}")

    @classmethod
    def unrestricted(cls) -> "FetchPlan":
        return cls(FetchMode.UNRESTRICTED)

    @classmethod
    def plain(cls, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> "FetchPlan":
        return cls(FetchMode.PLAIN, page, page_size)

    @classmethod
    def grouped(cls, page: Optional[int] = None, page_size: int = DEFAULT_PAGE_SIZE) -> "FetchPlan":
        return cls(FetchMode.GROUPED_BY_NAME, page, page_size)

    @property
    def is_paged(self) -> bool:
        return self.mode is not FetchMode.UNRESTRICTED and self.page is not None

    @property
    def limit(self) -> Optional[int]:
        return self.page_size if self.is_paged else None

    @property
    def offset(self) -> Optional[int]:
        return self.page_size * (self.page - 1) if self.is_paged else None


# ---------------------------------------------------------------------------
# Name groups
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NameGroup:
    name: str
    ids: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.ids)


def collect_name_groups(rows: Iterable[Sequence]) -> list[NameGroup]:
    """
    Fold (name, multiverse_id) rows into NameGroups, keeping the row order.
    Plain lists grow as needed; no group is ever cut short.
    """
    groups: dict[str, list[int]] = {}
    for name, multiverse_id in rows:
        groups.setdefault(name, []).append(int(multiverse_id))
    return [NameGroup(name, tuple(ids)) for name, ids in groups.items()]


def flatten_ids(groups: Iterable[NameGroup]) -> list[int]:
    return [i for g in groups for i in g.ids]


# ---------------------------------------------------------------------------
# QueryPlanner
# ---------------------------------------------------------------------------

class QueryPlanner:
    """
    Statement builder; it never touches a session. SearchService in query.py
    runs what it builds.
    """

    def __init__(self, compiler: Optional[SearchPredicateCompiler] = None):
        self.compiler = compiler or SearchPredicateCompiler()

    def compile(self, criteria: Optional[Iterable[SearchCriterion]] = None) -> SearchPlan:
        return self.compiler.compile(criteria)

    # -- row fetches -------------------------------------------------------------

    def cards(self, plan: SearchPlan, fetch: Optional[FetchPlan] = None) -> Select:
        """UNRESTRICTED or PLAIN fetch of full cards."""
        fetch = fetch or FetchPlan.unrestricted()
        if fetch.mode is FetchMode.GROUPED_BY_NAME:
            raise ValueError("Grouped fetches go through name_rows() and cards_for_ids()")

        stmt = select(Card).where(plan.predicate).order_by(*plan.order_by)
        if fetch.is_paged:
            stmt = stmt.limit(fetch.limit).offset(fetch.offset)
        return stmt

    # -- grouped fetches -----------------------------------------------------------

    def page_names(self, plan: SearchPlan, fetch: FetchPlan) -> Select:
        """Distinct matching names for one page of groups."""
        stmt = (
            select(Card.name)
            .where(plan.predicate)
            .group_by(Card.name)
            .order_by(Card.name.asc())
        )
        if fetch.is_paged:
            stmt = stmt.limit(fetch.limit).offset(fetch.offset)
        return stmt

    def name_rows(self, plan: SearchPlan, fetch: Optional[FetchPlan] = None) -> Select:
        """Phase one: (name, multiverse_id) of every match whose name is on the page."""
        fetch = fetch or FetchPlan.grouped()
        stmt = select(Card.name, Card.multiverse_id).where(plan.predicate)
        if fetch.is_paged:
            # derived table, not IN (...): MySQL rejects LIMIT inside an IN subquery
            names = self.page_names(plan, fetch).subquery("page_names")
            stmt = stmt.join(names, Card.name == names.c.name)
        return stmt.order_by(*plan.order_by)

    def cards_for_ids(self, ids: Sequence[int]) -> Select:
        """Phase two: full cards for exactly these ids."""
        return (
            select(Card)
            .where(Card.multiverse_id.in_(list(ids)))
            .order_by(Card.name.asc(), Card.multiverse_id.asc())
        )

    # -- counts ------------------------------------------------------------------

    def count(self, plan: SearchPlan) -> Select:
        return select(func.count(Card.multiverse_id)).where(plan.predicate)

    def count_unique_names(self, plan: SearchPlan) -> Select:
        return select(func.count(distinct(Card.name))).where(plan.predicate)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FetchMode",
    "FetchPlan",
    "NameGroup",
    "collect_name_groups",
    "flatten_ids",
    "QueryPlanner",
]
