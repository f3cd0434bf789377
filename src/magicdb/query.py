# magicdb/query.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .db import SessionLocal
from .dto import MagicCard, to_magic_card
from .criteria import SearchCriterion
from .logging import DATABASE_QUERY_LOG_MSG, get_logger
from .planner import (
    DEFAULT_PAGE_SIZE,
    FetchPlan,
    NameGroup,
    QueryPlanner,
    collect_name_groups,
    flatten_ids,
)
from .repos import session_scope


"""
SearchService for MagicDB.

This module runs card searches: criteria go through the QueryPlanner and the
resulting statements run here, one session per call. Results come back as
MagicCard records.

It never writes to the database.

List results are never None; an empty search is an empty list. Only the
single-card lookups (next, next_by_name) answer None for "not found".

author: Cole McGregor
date: 2025-11-16
version: 0.2.0
"""

log = get_logger("query")

# phase-two id lookups are split so a huge name group never hits the
# backend's bound-parameter limit
ID_CHUNK_SIZE = 500

Criteria = Optional[Iterable[SearchCriterion]]


class SearchService:
    """
    Read-only interface for searching cards.

    Responsibilities:
    - Compile criteria into statements (QueryPlanner).
    - Execute them and fold grouped rows into NameGroups.
    - Return MagicCard records.
    """

    def __init__(
        self,
        session_factory=SessionLocal,
        planner: Optional[QueryPlanner] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._session_factory = session_factory
        self.planner = planner or QueryPlanner()
        self._page_size = page_size

    def results_per_page(self) -> int:
        return self._page_size

    # -----------------------------------------------------------------------
    # Plain
    # -----------------------------------------------------------------------
    def page(self, page: int, criteria: Criteria = None, page_size: Optional[int] = None) -> List[MagicCard]:
        """One page (1-based) of matching cards, ordered by name then id."""
        fetch = FetchPlan.plain(page, self._page_size if page_size is None else page_size)
        return self._fetch_cards(criteria, fetch)

    def all(self, criteria: Criteria = None) -> List[MagicCard]:
        return self._fetch_cards(criteria, FetchPlan.unrestricted())

    def next(self, pointer: int, criteria: Criteria = None) -> Optional[MagicCard]:
        """The card at 1-based position `pointer`, or None past the end."""
        cards = self._fetch_cards(criteria, FetchPlan.plain(pointer, 1))
        return cards[0] if cards else None

    # -----------------------------------------------------------------------
    # Grouped by name
    # -----------------------------------------------------------------------
    def page_by_name(
        self,
        page: int,
        criteria: Criteria = None,
        page_size: Optional[int] = None,
    ) -> List[MagicCard]:
        """
        Every matching card for one page of names; page_size counts names.
        """
        fetch = FetchPlan.grouped(page, self._page_size if page_size is None else page_size)
        return self._fetch_grouped(criteria, fetch)

    def all_by_name(self, criteria: Criteria = None) -> List[MagicCard]:
        return self._fetch_grouped(criteria, FetchPlan.grouped())

    def next_by_name(self, pointer: int, criteria: Criteria = None) -> Optional[MagicCard]:
        """First card of the `pointer`-th name, or None past the end."""
        cards = self._fetch_grouped(criteria, FetchPlan.grouped(pointer, 1))
        return cards[0] if cards else None

    def name_groups(self, criteria: Criteria = None, fetch: Optional[FetchPlan] = None) -> List[NameGroup]:
        """Phase one only: the (name, ids) groups of a grouped fetch."""
        plan = self.planner.compile(criteria)
        stmt = self.planner.name_rows(plan, fetch or FetchPlan.grouped())
        with session_scope(self._session_factory) as s:
            log.debug(DATABASE_QUERY_LOG_MSG, stmt)
            rows = s.execute(stmt).all()
        return collect_name_groups(rows)

    # -----------------------------------------------------------------------
    # Counts
    # -----------------------------------------------------------------------
    def number_of_results(self, criteria: Criteria = None) -> int:
        plan = self.planner.compile(criteria)
        return self._scalar(self.planner.count(plan))

    def number_of_unique_names(self, criteria: Criteria = None) -> int:
        plan = self.planner.compile(criteria)
        return self._scalar(self.planner.count_unique_names(plan))

    # -----------------------------------------------------------------------
    # Execution
    # -----------------------------------------------------------------------
    def _fetch_cards(self, criteria: Criteria, fetch: FetchPlan) -> List[MagicCard]:
        plan = self.planner.compile(criteria)
        stmt = self.planner.cards(plan, fetch)
        with session_scope(self._session_factory) as s:
            log.debug(DATABASE_QUERY_LOG_MSG, stmt)
            return [to_magic_card(c) for c in s.execute(stmt).scalars().all()]

    def _fetch_grouped(self, criteria: Criteria, fetch: FetchPlan) -> List[MagicCard]:
        groups = self.name_groups(criteria, fetch)
        ids = flatten_ids(groups)
        if not ids:
            return []
        return self._cards_for_ids(ids)

    def _cards_for_ids(self, ids: Sequence[int]) -> List[MagicCard]:
        by_id: dict[int, MagicCard] = {}
        with session_scope(self._session_factory) as s:
            for start in range(0, len(ids), ID_CHUNK_SIZE):
                stmt = self.planner.cards_for_ids(ids[start:start + ID_CHUNK_SIZE])
                log.debug(DATABASE_QUERY_LOG_MSG, stmt)
                for c in s.execute(stmt).scalars().all():
                    by_id[int(c.multiverse_id)] = to_magic_card(c)
        # phase-one order is already (name, id)
        return [by_id[i] for i in ids if i in by_id]

    def _scalar(self, stmt) -> int:
        with session_scope(self._session_factory) as s:
            log.debug(DATABASE_QUERY_LOG_MSG, stmt)
            return int(s.execute(stmt).scalar_one() or 0)


__all__ = ["SearchService", "ID_CHUNK_SIZE"]
