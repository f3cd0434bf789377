# magicdb/dto.py
from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Sequence

from .enums import Color, Language
from .mana import ManaCost, color_codes, parse_mana_cost
from .type_line import TypeLine, parse_type_line


"""
This is the record object for a card.
It is what the repositories and the search service hand back, and what the
renderers draw. Stored text (cost, types) is parsed on the way out so callers
get ManaCost / TypeLine values, not strings.

Image bytes are never copied here; use CardRepository.card_image().

author: Cole McGregor
date: 2025-11-16
version: 0.2.0
"""


# --- MagicCard ---------------------------------------------------------------
@total_ordering
@dataclass(frozen=True, eq=False)
class MagicCard:
    """
    One card, parsed.

    Sorted by name (case-insensitive), then multiverse id.
    Two records are equal when they share a multiverse id.
    """
    multiverse_id: int
    name: str
    mana_cost: ManaCost
    type_line: TypeLine
    text: Optional[str] = None
    flavor_text: Optional[str] = None
    power: Optional[str] = None
    toughness: Optional[str] = None
    expansion: Optional[str] = None
    rarity: Optional[str] = None
    artist: Optional[str] = None
    number: Optional[str] = None
    watermark: Optional[str] = None
    language: Optional[Language] = None

    @property
    def cost_text(self) -> str:
        return str(self.mana_cost)

    @property
    def converted_cost(self) -> int:
        return self.mana_cost.converted_cost

    @property
    def colors(self) -> tuple[Color, ...]:
        return self.mana_cost.colors

    @property
    def color_codes(self) -> str:
        return color_codes(self.colors)

    @property
    def type_text(self) -> str:
        return self.type_line.format()

    def _key(self) -> tuple[str, int]:
        return (self.name, self.multiverse_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MagicCard):
            return NotImplemented
        return self.multiverse_id == other.multiverse_id

    def __hash__(self) -> int:
        return hash(self.multiverse_id)

    def __lt__(self, other: "MagicCard") -> bool:
        if not isinstance(other, MagicCard):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        return f"{self.name} [{self.multiverse_id}]"


# --- to_magic_card ------------------------------------------------------------
def to_magic_card(card) -> MagicCard:
    """
    Convert a Card ORM row to a MagicCard.
    Raises InvalidManaSymbol / BlankTypeLine if the stored text is corrupt.
    """
    return MagicCard(
        multiverse_id=int(card.multiverse_id),
        name=card.name or "",
        mana_cost=parse_mana_cost(card.cost),
        type_line=parse_type_line(card.types),
        text=card.text,
        flavor_text=card.flavor_text,
        power=card.power,
        toughness=card.toughness,
        expansion=card.expansion,
        rarity=card.rarity,
        artist=card.artist,
        number=card.number,
        watermark=card.watermark,
        language=Language.from_value(card.language),
    )


# --- to_magic_cards -----------------------------------------------------------
def to_magic_cards(cards: Sequence) -> list[MagicCard]:
    return [to_magic_card(c) for c in cards]


__all__ = [
    "MagicCard",
    "to_magic_card",
    "to_magic_cards",
]
