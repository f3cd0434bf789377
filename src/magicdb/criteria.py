# magicdb/criteria.py
from __future__ import annotations

import itertools
from dataclasses import dataclass, field as dc_field
from enum import Enum
from typing import Optional, Union

from .enums import DatabaseSearchable
from .errors import UnknownSearchField


"""
Search criteria for MagicDB.

A SearchCriterion is one filter of a search: which field, what text (may
contain SQL wildcards) and whether it joins the previous criterion with
AND or OR. A list of them is compiled into a predicate by compiler.py.

Every criterion carries a generated parameter name ("NAME12") used as its
bind-parameter key. Names come from a NameSequence, so repeating a field
within or across searches never collides.

author: Cole McGregor
date: 2025-11-15
version: 0.1.0
"""


# ---------------------------------------------------------------------------
# Tables & fields
# ---------------------------------------------------------------------------

class SearchTable(Enum):
    ALL_CARDS = "all_cards"
    CARD_TYPES = "card_types"
    MY_CARDS = "my_cards"


class SearchField(Enum):
    """Logical search fields and where each one lives."""
    COLOR = "color"
    NAME = "name"
    TYPE = "type"
    SUBTYPE = "subtype"
    LANGUAGE = "language"
    EXPANSION = "expansion"
    OWNED = "owned"

    @property
    def table(self) -> SearchTable:
        return _FIELD_COLUMNS[self][0]

    @property
    def column_name(self) -> str:
        return _FIELD_COLUMNS[self][1]

    @property
    def requires_subquery(self) -> bool:
        """Fields outside all_cards are matched by id membership."""
        return self.table is not SearchTable.ALL_CARDS

    @property
    def matches_pattern(self) -> bool:
        """False for membership-only fields (OWNED): the row existing is the match."""
        return _FIELD_COLUMNS[self][2]

    @classmethod
    def from_name(cls, name: Union[str, "SearchField"]) -> "SearchField":
        """Resolve 'name', 'NAME' or a SearchField; UnknownSearchField otherwise."""
        if isinstance(name, SearchField):
            return name
        key = (name or "").strip().upper() if isinstance(name, str) else None
        if key and key in cls.__members__:
            return cls.__members__[key]
        raise UnknownSearchField(name)


# field -> (table, column, filter by pattern)
_FIELD_COLUMNS: dict[SearchField, tuple[SearchTable, str, bool]] = {
    SearchField.COLOR: (SearchTable.ALL_CARDS, "color", True),
    SearchField.NAME: (SearchTable.ALL_CARDS, "name", True),
    SearchField.TYPE: (SearchTable.CARD_TYPES, "type_name", True),
    SearchField.SUBTYPE: (SearchTable.CARD_TYPES, "type_name", True),
    SearchField.LANGUAGE: (SearchTable.ALL_CARDS, "language", True),
    SearchField.EXPANSION: (SearchTable.ALL_CARDS, "expansion", True),
    SearchField.OWNED: (SearchTable.MY_CARDS, "multiverse_id", False),
}


# ---------------------------------------------------------------------------
# Parameter names
# ---------------------------------------------------------------------------

# tags keep names from separate sequences apart; only the process default is untagged
_SEQUENCE_TAGS = itertools.count(1)


class NameSequence:
    """
    Mints parameter names: field name + sequence tag + a monotonically
    increasing number ("NAME0" from the default sequence, "NAME_s3_0" from
    the third injected one).

    next() on itertools.count is a single C call, so concurrent callers
    never receive the same number.
    """

    def __init__(self, start: int = 0, *, tag: Optional[str] = None):
        self._counter = itertools.count(start)
        self.tag = f"_s{next(_SEQUENCE_TAGS)}_" if tag is None else tag

    def next_name(self, field: SearchField) -> str:
        return f"{field.name}{self.tag}{next(self._counter)}"


# process-wide default; inject another NameSequence to isolate callers
DEFAULT_SEQUENCE = NameSequence(tag="")


# ---------------------------------------------------------------------------
# SearchCriterion
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchCriterion:
    """
    One filter of a search.

    Equality and hashing use (field, text, is_and) only; parameter_name is
    excluded on purpose, so two criteria built from the same inputs are equal
    even though their parameter names differ.
    """
    field: SearchField
    text: str = ""
    is_and: bool = True
    parameter_name: str = dc_field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "field", SearchField.from_name(self.field))
        object.__setattr__(self, "text", "" if self.text is None else str(self.text))
        object.__setattr__(self, "is_and", bool(self.is_and))
        if not self.parameter_name:
            object.__setattr__(self, "parameter_name", DEFAULT_SEQUENCE.next_name(self.field))

    @classmethod
    def of(
        cls,
        field: Union[str, SearchField],
        value: Union[str, DatabaseSearchable, None],
        is_and: bool = True,
        *,
        sequence: Optional[NameSequence] = None,
    ) -> "SearchCriterion":
        """
        Build a criterion from plain text or from a value that supplies its
        own search text (Color, Language, SuperType, Type, CardType).
        """
        resolved = SearchField.from_name(field)
        if value is None:
            text = ""
        elif isinstance(value, str):
            text = value
        elif isinstance(value, DatabaseSearchable):
            text = value.search_text
        else:
            raise TypeError(f"Cannot search {resolved.name} with {type(value).__name__}")

        seq = sequence or DEFAULT_SEQUENCE
        return cls(resolved, text, is_and, parameter_name=seq.next_name(resolved))

    @property
    def is_or(self) -> bool:
        return not self.is_and

    def with_join(self, is_and: bool, *, sequence: Optional[NameSequence] = None) -> "SearchCriterion":
        """Copy with another join; the copy gets its own parameter name."""
        seq = sequence or DEFAULT_SEQUENCE
        return SearchCriterion(self.field, self.text, is_and, parameter_name=seq.next_name(self.field))


__all__ = [
    "SearchTable",
    "SearchField",
    "NameSequence",
    "DEFAULT_SEQUENCE",
    "SearchCriterion",
]
