# magicdb/errors.py
from __future__ import annotations

"""
Error types for MagicDB.

The mana-cost and type-line mini-languages are input contracts: a value that
does not follow them raises here instead of being repaired. Storage failures
are SQLAlchemy's and are not wrapped.

author: Cole McGregor
date: 2025-11-13
version: 0.1.0
"""


class MagicDBError(Exception):
    """Base class for every error raised by magicdb itself."""


class InvalidManaSymbol(MagicDBError, ValueError):
    """A mana-cost token holds a letter that is neither a digit nor a color code."""

    def __init__(self, token: str, reason: str | None = None):
        self.token = token
        msg = f"Invalid mana symbol: {token!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class BlankTypeLine(MagicDBError, ValueError):
    """Type lines are mandatory; an empty or whitespace-only one is rejected."""

    def __init__(self, text: str | None = None):
        self.text = text
        super().__init__("Type line cannot be null or empty.")


class UnknownSearchField(MagicDBError, KeyError):
    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Unknown search field: {name!r}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class DuplicateCriterionName(MagicDBError, RuntimeError):
    """Two criteria in one search share a generated parameter name."""

    def __init__(self, parameter_name: str):
        self.parameter_name = parameter_name
        super().__init__(f"Duplicate search parameter name: {parameter_name!r}")


class DuplicateRowError(MagicDBError):
    """A single-row lookup found more than one row for an identifier."""


class InvalidPage(MagicDBError, ValueError):
    pass


__all__ = [
    "MagicDBError",
    "InvalidManaSymbol",
    "BlankTypeLine",
    "UnknownSearchField",
    "DuplicateCriterionName",
    "DuplicateRowError",
    "InvalidPage",
]
