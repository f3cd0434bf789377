# magicdb/enums.py
from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from .errors import InvalidManaSymbol


"""
Closed value sets for MagicDB cards.

- Color: mana/card colors with their single-letter codes
- SuperType / Type: the fixed parts of a type line ("Basic Land — Island")
- Language: printed languages, stored by display value
- DatabaseSearchable: anything able to supply its own search text

author: Cole McGregor
date: 2025-11-13
version: 0.1.0
"""


# ---------------------------------------------------------------------------
# Searchable protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class DatabaseSearchable(Protocol):
    """
    Values usable directly as search criteria.
    The returned text may include SQL wildcards.
    """
    @property
    def search_text(self) -> str: ...


def _display(name: str) -> str:
    # VARIABLE_COLORLESS -> "Variable colorless"
    return name.replace("_", " ").capitalize()


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------

class Color(Enum):
    WHITE = "W"
    BLACK = "B"
    RED = "R"
    BLUE = "U"
    GREEN = "G"
    COLORLESS = "C"
    VARIABLE_COLORLESS = "X"

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _display(self.name)

    @property
    def search_text(self) -> str:
        # stored colors are a run of codes, e.g. "RG"
        return f"%{self.value}%"

    @classmethod
    def from_code(cls, code: str) -> "Color":
        """
        Look up a Color by its single-letter code (case-insensitive).
        Raises InvalidManaSymbol when no Color uses that code.
        """
        key = (code or "").strip().upper()
        try:
            return cls(key)
        except ValueError:
            raise InvalidManaSymbol(code, "not a color code") from None

    @classmethod
    def contains(cls, name: str) -> bool:
        """True if `name` is the name of a Color member (e.g. 'red')."""
        return (name or "").strip().upper() in cls.__members__

    def __str__(self) -> str:
        return self.display_name


# ---------------------------------------------------------------------------
# Type line parts
# ---------------------------------------------------------------------------

class _TypeEnum(Enum):

    @property
    def display_name(self) -> str:
        return _display(self.name)

    @property
    def search_text(self) -> str:
        return self.display_name

    @classmethod
    def contains(cls, name: str) -> bool:
        return (name or "").strip().upper() in cls.__members__

    @classmethod
    def lookup(cls, name: str):
        """Member for `name` (any case), or None."""
        return cls.__members__.get((name or "").strip().upper())

    def __str__(self) -> str:
        return self.display_name


class SuperType(_TypeEnum):
    """Optional leading part of a type line; not every card has one."""
    BASIC = "basic"
    ELITE = "elite"
    LEGENDARY = "legendary"
    ONGOING = "ongoing"
    SNOW = "snow"
    WORLD = "world"


class Type(_TypeEnum):
    ARTIFACT = "artifact"
    CREATURE = "creature"
    ENCHANTMENT = "enchantment"
    HERO = "hero"
    INSTANT = "instant"
    LAND = "land"
    PHENOMENON = "phenomenon"
    PLANE = "plane"
    PLANESWALKER = "planeswalker"
    SCHEME = "scheme"
    SORCERY = "sorcery"
    TRIBAL = "tribal"
    VANGUARD = "vanguard"


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------

class Language(Enum):
    CHINESE_TRADITIONAL = "Chinese Traditional"
    GERMAN = "German"
    FRENCH = "French"
    ITALIAN = "Italian"
    JAPANESE = "Japanese"
    KOREAN = "Korean"
    PORTUGUESE = "Portuguese (Brazil)"
    RUSSIAN = "Russian"
    CHINESE_SIMPLIFIED = "Chinese Simplified"
    SPANISH = "Spanish"
    ENGLISH = "English"
    UNKNOWN_NON_ENGLISH = "Unknown"

    @property
    def search_text(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["Language"]:
        """Case-insensitive lookup by display value; None if unknown or empty."""
        v = (value or "").strip().lower()
        if not v:
            return None
        for lang in cls:
            if lang.value.lower() == v:
                return lang
        return None

    def __str__(self) -> str:
        return self.value


__all__ = [
    "DatabaseSearchable",
    "Color",
    "SuperType",
    "Type",
    "Language",
]
