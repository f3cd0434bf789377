# magicdb/type_line.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .enums import SuperType, Type
from .errors import BlankTypeLine


"""
Type-line codec for MagicDB.

A card's full type breaks down into SuperTypes, Types and SubTypes:
"Basic Land — Island" is SuperType Basic, Type Land, SubType Island.
SuperTypes and Types are fixed sets; SubTypes are free text.

author: Cole McGregor
date: 2025-11-14
version: 0.1.0
"""

TYPE_SEPARATOR = "—"
TYPE_SEPARATOR_WITH_SPACES = f" {TYPE_SEPARATOR} "

# tokens accepted as the separator when parsing
_SEPARATOR_TOKENS = frozenset({TYPE_SEPARATOR, "–", "-"})


def _normalize(text: str) -> str:
    # "HUMAN" / "human" -> "Human"
    return (text or "").strip().capitalize()


# ---------------------------------------------------------------------------
# CardType
# ---------------------------------------------------------------------------

class TypeKind(Enum):
    SUPERTYPE = "supertype"
    TYPE = "type"
    SUBTYPE = "subtype"


@dataclass(frozen=True, order=True)
class CardType:
    """
    One entry of a type line, tagged with its kind.

    Identity is the normalized display text only, so a SubType("basic")
    equals the Basic SuperType.
    """
    name: str
    kind: TypeKind = field(default=TypeKind.SUBTYPE, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _normalize(self.name))

    @classmethod
    def supertype(cls, value: SuperType) -> "CardType":
        return cls(value.display_name, TypeKind.SUPERTYPE)

    @classmethod
    def card_type(cls, value: Type) -> "CardType":
        return cls(value.display_name, TypeKind.TYPE)

    @classmethod
    def subtype(cls, text: str) -> "CardType":
        return cls(text, TypeKind.SUBTYPE)

    @classmethod
    def classify(cls, token: str) -> "CardType":
        """SuperType first, then Type, anything else is a SubType."""
        st = SuperType.lookup(token)
        if st is not None:
            return cls.supertype(st)
        t = Type.lookup(token)
        if t is not None:
            return cls.card_type(t)
        return cls.subtype(token)

    @property
    def is_subtype(self) -> bool:
        return self.kind is TypeKind.SUBTYPE

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def search_text(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


def is_fixed_type(name: str) -> bool:
    """True when `name` is a SuperType or Type rather than a free SubType."""
    return SuperType.contains(name) or Type.contains(name)


# ---------------------------------------------------------------------------
# TypeLine
# ---------------------------------------------------------------------------

def _unique(items: Iterable[CardType]) -> tuple[CardType, ...]:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class TypeLine:
    super_types: tuple[CardType, ...] = ()
    types: tuple[CardType, ...] = ()
    sub_types: tuple[CardType, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "super_types", _unique(self.super_types))
        object.__setattr__(self, "types", _unique(self.types))
        object.__setattr__(self, "sub_types", _unique(self.sub_types))

    @property
    def all_types(self) -> tuple[CardType, ...]:
        """Every entry in display order; one card_types row each."""
        return self.super_types + self.types + self.sub_types

    def format(self) -> str:
        return format_type_line(self)

    def __str__(self) -> str:
        return self.format()


def parse_type_line(text: Optional[str]) -> TypeLine:
    """
    Parse "Legendary Creature — Human Wizard" into its three parts.
    Raises BlankTypeLine for None, empty or whitespace-only input.
    """
    if text is None or not text.strip():
        raise BlankTypeLine(text)

    supers: list[CardType] = []
    types: list[CardType] = []
    subs: list[CardType] = []

    for token in text.upper().split(" "):
        token = token.strip()
        if not token or token in _SEPARATOR_TOKENS:
            continue
        ct = CardType.classify(token)
        if ct.kind is TypeKind.SUPERTYPE:
            supers.append(ct)
        elif ct.kind is TypeKind.TYPE:
            types.append(ct)
        else:
            subs.append(ct)

    return TypeLine(tuple(supers), tuple(types), tuple(subs))


def format_type_line(type_line: TypeLine) -> str:
    text = ""
    for t in type_line.super_types:
        text += t.name + " "
    for t in type_line.types:
        text += t.name + " "

    for t in type_line.sub_types:
        if text and TYPE_SEPARATOR not in text:
            text += TYPE_SEPARATOR_WITH_SPACES
        text += t.name + " "

    return " ".join(text.split())


__all__ = [
    "TYPE_SEPARATOR",
    "TYPE_SEPARATOR_WITH_SPACES",
    "TypeKind",
    "CardType",
    "TypeLine",
    "is_fixed_type",
    "parse_type_line",
    "format_type_line",
]
