# magicdb/compiler.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import String, and_, bindparam, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from .criteria import SearchCriterion, SearchTable
from .errors import DuplicateCriterionName
from .models import Card, CardTypeRow, OwnedCard


"""
Search predicate compiler for MagicDB.

Turns an ordered list of SearchCriterion into one SQLAlchemy boolean
expression over all_cards, plus the default ordering (name, multiverse id).

- all_cards fields become   column LIKE :PARAM
- card_types fields become  multiverse_id IN (SELECT multiverse_id FROM card_types WHERE type_name LIKE :PARAM)
- my_cards (owned) becomes  multiverse_id IN (SELECT multiverse_id FROM my_cards)

Joins are strictly left to right: [a, OR b, AND c] is (a OR b) AND c.
Values are never written into SQL text; each criterion contributes one
bind parameter keyed by its generated name.

author: Cole McGregor
date: 2025-11-15
version: 0.1.0
"""

_TABLE_MODELS = {
    SearchTable.ALL_CARDS: Card,
    SearchTable.CARD_TYPES: CardTypeRow,
    SearchTable.MY_CARDS: OwnedCard,
}

DEFAULT_ORDER = (Card.name.asc(), Card.multiverse_id.asc())


# ---------------------------------------------------------------------------
# SearchPlan
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchPlan:
    """Compiled form of a criteria list."""
    predicate: ColumnElement[bool]
    order_by: tuple
    criteria: tuple[SearchCriterion, ...] = ()

    @property
    def is_unrestricted(self) -> bool:
        return not self.criteria

    @property
    def parameters(self) -> dict[str, str]:
        """Bind values by parameter name (membership-only criteria bind nothing)."""
        return {c.parameter_name: c.text for c in self.criteria if c.field.matches_pattern}


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------

class SearchPredicateCompiler:
    """Stateless; one instance can be shared by any number of callers."""

    def compile(self, criteria: Optional[Iterable[SearchCriterion]] = None) -> SearchPlan:
        items = tuple(criteria or ())
        self._check_names(items)

        predicate: Optional[ColumnElement[bool]] = None
        for criterion in items:
            fragment = self.fragment(criterion)
            if predicate is None:
                predicate = fragment
            elif criterion.is_and:
                predicate = and_(predicate, fragment)
            else:
                predicate = or_(predicate, fragment)

        if predicate is None:
            predicate = true()

        return SearchPlan(predicate=predicate, order_by=DEFAULT_ORDER, criteria=items)

    def fragment(self, criterion: SearchCriterion) -> ColumnElement[bool]:
        """Expression for a single criterion, ignoring its join."""
        field = criterion.field
        model = _TABLE_MODELS[field.table]

        if not field.requires_subquery:
            column = getattr(model, field.column_name)
            return column.like(self._param(criterion))

        ids = select(model.multiverse_id)
        if field.matches_pattern:
            ids = ids.where(getattr(model, field.column_name).like(self._param(criterion)))
        return Card.multiverse_id.in_(ids)

    @staticmethod
    def _param(criterion: SearchCriterion):
        # no escaping: wildcards in the text are the caller's
        return bindparam(criterion.parameter_name, value=criterion.text, type_=String)

    @staticmethod
    def _check_names(items: tuple[SearchCriterion, ...]) -> None:
        seen: set[str] = set()
        for c in items:
            if c.parameter_name in seen:
                raise DuplicateCriterionName(c.parameter_name)
            seen.add(c.parameter_name)


def compile_criteria(criteria: Optional[Iterable[SearchCriterion]] = None) -> SearchPlan:
    """Convenience wrapper around a default compiler."""
    return SearchPredicateCompiler().compile(criteria)


__all__ = [
    "DEFAULT_ORDER",
    "SearchPlan",
    "SearchPredicateCompiler",
    "compile_criteria",
]
