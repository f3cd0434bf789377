# magicdb/mana.py
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .enums import Color
from .errors import InvalidManaSymbol
from .logging import get_logger


"""
Mana cost codec for MagicDB.

A ManaSymbol is one icon printed in a card's cost. It may be mono-colored (G),
generic (2), hybrid ({R/G}), generic/colored hybrid ({2/W}) or Phyrexian (RP),
as long as it is a single icon on the card.

Accepted cost text, in priority order:
  1. ';'-separated tokens          "2;R;G"
  2. brace groups                  "{2}{R/G}{W/P}"  (text outside braces is dropped)
  3. bare runs, Phyrexian aware    "3RPRP" -> 3, RP, RP
  4. bare runs                     "2RG"   -> 2, R, G

Digit runs are one generic count, so "12" is twelve generic mana, not 1 + 2.

author: Cole McGregor
date: 2025-11-14
version: 0.2.0
"""

log = get_logger("mana")

PHYREXIAN_MARKER = "P"
HYBRID_SEPARATOR = "/"

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")
_SYMBOL_PART = re.compile(r"[0-9]+|\S")
_DIGITS = frozenset("0123456789")


# ---------------------------------------------------------------------------
# ManaSymbol
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ManaSymbol:
    """
    One mana icon.

    colors: repeated COLORLESS entries express a generic count ({2/W} is
            COLORLESS, COLORLESS, WHITE). An empty tuple is the zero symbol.
    cost_value: generic count, or 1 for any colored/hybrid symbol; for
            generic/colored hybrids it is the larger of the two.
    """
    colors: tuple[Color, ...] = ()
    phyrexian: bool = False
    cost_value: int = 0

    def __post_init__(self) -> None:
        if self.cost_value < 0:
            raise InvalidManaSymbol(str(self.cost_value), "cost value cannot be negative")
        if not self.colors and (self.cost_value or self.phyrexian):
            raise InvalidManaSymbol("", "only the zero symbol may have no colors")

    @property
    def is_zero(self) -> bool:
        return not self.colors

    @property
    def is_generic(self) -> bool:
        """True when the symbol renders as a bare number (including the zero symbol)."""
        return all(c is Color.COLORLESS for c in self.colors)

    @property
    def is_hybrid(self) -> bool:
        return len(self._parts()) > 1

    def _parts(self) -> list[str]:
        suffix = PHYREXIAN_MARKER if self.phyrexian else ""
        parts: list[str] = []
        pending = 0
        for color in self.colors:
            if color is Color.COLORLESS:
                pending += 1
                continue
            if pending:
                parts.append(str(pending))
                pending = 0
            parts.append(color.code + suffix)
        if pending:
            parts.append(str(pending))
        return parts

    @property
    def inner(self) -> str:
        """Symbol text without surrounding braces ("R/G", "2", "RP", "0")."""
        return HYBRID_SEPARATOR.join(self._parts()) or "0"

    def format(self) -> str:
        """Braces only for hybrids: "{R/G}", "{2/W}", but "RP", "2", "G"."""
        text = self.inner
        return "{" + text + "}" if self.is_hybrid else text

    def __str__(self) -> str:
        return self.format()


ZERO = ManaSymbol()


def parse_mana_symbol(token: str) -> ManaSymbol:
    """
    Resolve one raw token ("{2/W}", "RP", "5", "G") into a ManaSymbol.
    Raises InvalidManaSymbol when a letter is not a color code.
    """
    raw = (token or "").strip().upper().replace("{", "").replace("}", "")
    if not raw:
        raise InvalidManaSymbol(token, "empty symbol")

    phyrexian = PHYREXIAN_MARKER in raw
    raw = raw.replace(PHYREXIAN_MARKER, "")

    colors: list[Color] = []
    for part in raw.split(HYBRID_SEPARATOR):
        for piece in _SYMBOL_PART.findall(part):
            if piece[0] in _DIGITS:
                colors.extend([Color.COLORLESS] * int(piece))
                continue
            try:
                colors.append(Color.from_code(piece))
            except InvalidManaSymbol:
                raise InvalidManaSymbol(token, f"unknown color code {piece!r}") from None

    colorless = colors.count(Color.COLORLESS)
    colored = 1 if any(c is not Color.COLORLESS for c in colors) else 0

    if phyrexian and not colored:
        raise InvalidManaSymbol(token, "Phyrexian marker without a color")

    return ManaSymbol(colors=tuple(colors), phyrexian=phyrexian, cost_value=max(colorless, colored))


# ---------------------------------------------------------------------------
# ManaCost
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ManaCost:
    """
    Ordered symbols of a card's cost.

    Order only matters for display: two costs are equal when they hold the
    same multiset of symbols.
    """
    symbols: tuple[ManaSymbol, ...] = ()

    @property
    def converted_cost(self) -> int:
        return sum(s.cost_value for s in self.symbols)

    @property
    def colors(self) -> tuple[Color, ...]:
        return derive_colors(self)

    def __iter__(self) -> Iterator[ManaSymbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManaCost):
            return NotImplemented
        return Counter(self.symbols) == Counter(other.symbols)

    def __hash__(self) -> int:
        return hash(frozenset(Counter(self.symbols).items()))

    def __str__(self) -> str:
        return format_mana_cost(self)


# --- tokenizing ---------------------------------------------------------------

def _scan_bare(text: str) -> list[str]:
    """
    Split an undelimited run: digit runs stay together, and a letter followed
    by the Phyrexian marker is one token ("3RPG" -> "3", "RP", "G").
    """
    chars = [c for c in text if not c.isspace()]
    tokens: list[str] = []
    i = 0
    while i < len(chars):
        c = chars[i]
        if c in _DIGITS:
            j = i
            while j < len(chars) and chars[j] in _DIGITS:
                j += 1
            tokens.append("".join(chars[i:j]))
            i = j
        elif i + 1 < len(chars) and chars[i + 1] == PHYREXIAN_MARKER:
            tokens.append(c + PHYREXIAN_MARKER)
            i += 2
        else:
            tokens.append(c)
            i += 1
    return tokens


def tokenize_mana_cost(text: str) -> list[str]:
    """Split raw cost text into one raw token per symbol."""
    s = (text or "").strip().upper()
    if not s:
        return []

    if ";" in s:
        tokens: list[str] = []
        for seg in s.split(";"):
            seg = seg.strip()
            if not seg:
                continue
            if HYBRID_SEPARATOR in seg or "{" in seg:
                tokens.append(seg)
            else:
                tokens.extend(_scan_bare(seg))
        return tokens

    if "{" in s:
        leftover = _BRACE_GROUP.sub("", s).strip()
        if leftover:
            log.warning("Dropping characters outside braces in mana cost %r: %r", text, leftover)
        return [t for t in _BRACE_GROUP.findall(s) if t.strip()]

    return _scan_bare(s)


def parse_mana_cost(text: Optional[str]) -> ManaCost:
    """
    Parse cost text into a ManaCost. None/blank text is an empty cost.
    Raises InvalidManaSymbol for any unrecognized letter.
    """
    return ManaCost(tuple(parse_mana_symbol(t) for t in tokenize_mana_cost(text or "")))


# --- formatting ---------------------------------------------------------------

def _needs_braces(symbols: tuple[ManaSymbol, ...]) -> bool:
    """
    A bare concatenation is ambiguous when a hybrid sits next to other
    symbols (brace parsing drops bare text) or two numbers touch ("2" "3" -> "23").
    """
    if len(symbols) < 2:
        return False
    prev_generic = False
    for s in symbols:
        if s.is_hybrid:
            return True
        if s.is_generic and prev_generic:
            return True
        prev_generic = s.is_generic
    return False


def format_mana_cost(cost: ManaCost | Iterable[ManaSymbol]) -> str:
    """
    Render a cost back to text. Usually the plain concatenation of each
    symbol ("2R", "3RPRP", "{R/G}"); every symbol is braced ("{2}{R/G}")
    when the plain form would not parse back to the same symbols.
    """
    symbols = tuple(cost.symbols if isinstance(cost, ManaCost) else cost)
    if _needs_braces(symbols):
        return "".join("{" + s.inner + "}" for s in symbols)
    return "".join(s.format() for s in symbols)


# ---------------------------------------------------------------------------
# Color derivation
# ---------------------------------------------------------------------------

_NOT_A_CARD_COLOR = (Color.COLORLESS, Color.VARIABLE_COLORLESS)


def derive_colors(cost: ManaCost) -> tuple[Color, ...]:
    """
    Card colors implied by a cost, in first-seen order.
    Generic and X mana do not color a card; a cost with no colored
    symbol (or no symbols at all) is Colorless.
    """
    seen: dict[Color, None] = {}
    for symbol in cost.symbols:
        for color in symbol.colors or (Color.COLORLESS,):
            seen.setdefault(color, None)

    final = tuple(c for c in seen if c not in _NOT_A_CARD_COLOR)
    return final or (Color.COLORLESS,)


def color_codes(colors: Iterable[Color]) -> str:
    """Stored form of a color set: "RG", "C"."""
    return "".join(dict.fromkeys(c.code for c in colors))


__all__ = [
    "ManaSymbol",
    "ManaCost",
    "ZERO",
    "parse_mana_symbol",
    "tokenize_mana_cost",
    "parse_mana_cost",
    "format_mana_cost",
    "derive_colors",
    "color_codes",
]
