"""
Parser strategy base types for MagicDB.

- RawRow: canonical row shape expected from any parser strategy
- ParserStrategy: Protocol every parser must implement
- ParserError: raised for parsing/validation issues
- choose_parser(): convenience factory choosing a strategy by file extension

author: Cole McGregor
date: 2025-11-17
version: 0.2.0
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol, TypedDict, runtime_checkable

from ..errors import MagicDBError


# ---- Canonical row shape every parser must yield --------------------------------

class RawRow(TypedDict):
    multiverse_id: str   # Gatherer id, cannot be empty
    name: str            # cannot be empty
    cost: str            # mana cost text, e.g. "2R", "{R/G}", may be empty
    types: str           # type line, e.g. "Basic Land — Island", cannot be empty
    text: str
    power: str
    toughness: str
    expansion: str
    flavor_text: str
    rarity: str
    artist: str
    number: str
    watermark: str
    language: str


# ---- Strategy interface ---------------------------------------------------------

@runtime_checkable
class ParserStrategy(Protocol):
    """Parsers must yield dictionaries matching RawRow keys."""
    def parse(self, path: str | Path) -> Iterable[RawRow]: ...
    def name(self) -> str: ...


# ---- Exceptions ----------------------------------------------------------------

class ParserError(MagicDBError):
    """Raised when a parser encounters an unrecoverable problem."""


# ---- Factory -------------------------------------------------------------------

def choose_parser(path: str | Path) -> ParserStrategy:
    """
    Return an appropriate parser implementation based on file extension.

    .csv  -> CSVParser
    """
    p = Path(path)
    ext = p.suffix.lower()

    if ext == ".csv":
        from .csv_parser import CSVParser
        return CSVParser()

    raise ParserError(f"Unsupported file type: {ext!r} for {p.name}")


__all__ = [
    "RawRow",
    "ParserStrategy",
    "ParserError",
    "choose_parser",
]
