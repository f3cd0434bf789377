# magicdb/repos.py
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import SessionLocal
from .dto import MagicCard, to_magic_card, to_magic_cards
from .enums import Language
from .errors import DuplicateRowError
from .logging import DATABASE_QUERY_LOG_MSG, get_logger
from .mana import color_codes, format_mana_cost, parse_mana_cost
from .models import Card, CardTypeRow, OwnedCard
from .type_line import CardType, is_fixed_type, parse_type_line


"""
Repositories for MagicDB.

- CardRepository       save/load/remove cards, ownership counts
- ExpansionRepository  expansion names
- SubTypeRepository    subtypes seen in card_types

Every public method opens its own session through session_scope() and hands
back MagicCard records (or plain values), never live ORM rows.

author: Cole McGregor
date: 2025-11-16
version: 0.2.0
"""

log = get_logger("repos")


# --- Session scope -------------------------------------------------------------

@contextmanager
def session_scope(session_factory=SessionLocal):
    s: Session = session_factory()
    try:
        yield s
        s.commit()
    except SQLAlchemyError as exc:
        s.rollback()
        log.error("Database error, rolled back: %s", exc)
        raise
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()


def _run(s: Session, stmt):
    log.debug(DATABASE_QUERY_LOG_MSG, stmt)
    return s.execute(stmt)


# --- Internal helpers ----------------------------------------------------------

def _trim(v: Any) -> Optional[str]:
    if v is None:
        return None
    t = str(v).strip()
    return t if t else None


def _coerce_id(v: Any) -> int:
    try:
        mid = int(str(v).strip())
    except (TypeError, ValueError):
        raise ValueError(f"Invalid multiverse id: {v!r}") from None
    if mid <= 0:
        raise ValueError(f"Invalid multiverse id: {v!r}")
    return mid


def _normalize_language(v: Any) -> Optional[str]:
    raw = _trim(v)
    lang = Language.from_value(raw)
    return lang.value if lang else raw


# stored as given (trimmed)
_PASS_THROUGH = (
    "text",
    "flavor_text",
    "power",
    "toughness",
    "expansion",
    "rarity",
    "artist",
    "number",
    "watermark",
)


# --- Card Repository -----------------------------------------------------------

class CardRepository:
    """
    Data-access boundary for cards and their ownership.
    - Insert-or-update by multiverse id.
    - Cost, colors and types are normalized through the codecs before storing.
    """

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    # -- basic reads ------------------------------------------------------------

    def get_card(self, multiverse_id: int) -> Optional[MagicCard]:
        with session_scope(self._session_factory) as s:
            stmt = select(Card).where(Card.multiverse_id == multiverse_id)
            rows = _run(s, stmt).scalars().all()
            if len(rows) > 1:
                raise DuplicateRowError(f"{len(rows)} cards share multiverse id {multiverse_id}")
            return to_magic_card(rows[0]) if rows else None

    def is_card_in_database(self, multiverse_id: int) -> bool:
        with session_scope(self._session_factory) as s:
            stmt = select(Card.multiverse_id).where(Card.multiverse_id == multiverse_id)
            return _run(s, stmt).first() is not None

    def card_image(self, multiverse_id: int) -> Optional[bytes]:
        with session_scope(self._session_factory) as s:
            stmt = select(Card.image).where(Card.multiverse_id == multiverse_id)
            rows = _run(s, stmt).scalars().all()
            if len(rows) > 1:
                raise DuplicateRowError(f"{len(rows)} images for multiverse id {multiverse_id}")
            return rows[0] if rows else None

    # -- save / remove -----------------------------------------------------------

    def save_card(self, data: Dict[str, Any]) -> MagicCard:
        """
        Insert or update a card from a dict of column values.

        Required: multiverse_id, name, types. The cost is parsed and stored in
        its formatted form along with converted cost and color codes; the type
        line is parsed and its card_types rows rewritten.

        Raises InvalidManaSymbol / BlankTypeLine before anything is written.
        """
        mid = _coerce_id(data.get("multiverse_id"))
        name = _trim(data.get("name"))
        if not name:
            raise ValueError(f"Card {mid} has no name")

        cost = parse_mana_cost(_trim(data.get("cost")))
        type_line = parse_type_line(data.get("types"))

        with session_scope(self._session_factory) as s:
            card = s.get(Card, mid)
            if card is None:
                log.debug("Inserting card %s (%s)", mid, name)
                card = Card(multiverse_id=mid)
                s.add(card)
            else:
                log.debug("Updating card %s (%s)", mid, name)

            card.name = name
            card.cost = format_mana_cost(cost)
            card.converted_cost = cost.converted_cost
            card.color = color_codes(cost.colors)
            card.types = type_line.format()
            for fld in _PASS_THROUGH:
                setattr(card, fld, _trim(data.get(fld)))
            card.language = _normalize_language(data.get("language"))
            if "image" in data:
                card.image = data["image"]
            card.touched_by_updater = datetime.now()

            # old rows go first; the new set may reuse the same keys
            card.type_rows.clear()
            s.flush()
            for t in type_line.all_types:
                card.type_rows.append(CardTypeRow(type_name=str(t)))
            s.flush()

            return to_magic_card(card)

    def remove_card(self, multiverse_id: int) -> bool:
        """Delete a card with its type rows and ownership row."""
        with session_scope(self._session_factory) as s:
            card = s.get(Card, multiverse_id)
            if not card:
                return False
            s.delete(card)
            return True

    # -- ownership --------------------------------------------------------------

    def number_owned(self, multiverse_id: int) -> int:
        with session_scope(self._session_factory) as s:
            stmt = select(OwnedCard.count).where(OwnedCard.multiverse_id == multiverse_id)
            count = _run(s, stmt).scalar_one_or_none()
            return int(count or 0)

    def is_card_owned(self, multiverse_id: int) -> bool:
        return self.number_owned(multiverse_id) > 0

    def increment_owned(self, multiverse_id: int) -> int:
        """Add one copy; returns the new count."""
        return self._adjust_owned(multiverse_id, +1)

    def add_owned_card(self, multiverse_id: int) -> int:
        return self.increment_owned(multiverse_id)

    def decrement_owned(self, multiverse_id: int) -> int:
        """Remove one copy; the row goes away at zero. Returns the new count."""
        return self._adjust_owned(multiverse_id, -1)

    def update_owned_count(self, multiverse_id: int, count: int) -> int:
        """Set the owned count; zero or less removes the card from my_cards."""
        with session_scope(self._session_factory) as s:
            owned = s.get(OwnedCard, multiverse_id)
            if count <= 0:
                if owned:
                    s.delete(owned)
                return 0
            if owned is None:
                self._require_card(s, multiverse_id)
                s.add(OwnedCard(multiverse_id=multiverse_id, count=count))
            else:
                owned.count = count
            return count

    def remove_owned_card(self, multiverse_id: int) -> bool:
        with session_scope(self._session_factory) as s:
            stmt = delete(OwnedCard).where(OwnedCard.multiverse_id == multiverse_id)
            result = _run(s, stmt)
            return (result.rowcount or 0) > 0

    def _adjust_owned(self, multiverse_id: int, delta: int) -> int:
        with session_scope(self._session_factory) as s:
            owned = s.get(OwnedCard, multiverse_id)
            current = owned.count if owned else 0
            new_count = current + delta

            if new_count <= 0:
                if owned:
                    s.delete(owned)
                return 0
            if owned is None:
                self._require_card(s, multiverse_id)
                s.add(OwnedCard(multiverse_id=multiverse_id, count=new_count))
            else:
                owned.count = new_count
            return new_count

    @staticmethod
    def _require_card(s: Session, multiverse_id: int) -> None:
        if s.get(Card, multiverse_id) is None:
            raise ValueError(f"Card {multiverse_id} not found")

    # -- counts & lists ---------------------------------------------------------

    def number_of_cards_owned(self) -> int:
        with session_scope(self._session_factory) as s:
            stmt = select(func.count(distinct(OwnedCard.multiverse_id)))
            return int(_run(s, stmt).scalar_one())

    def number_of_cards_in_database(self) -> int:
        with session_scope(self._session_factory) as s:
            stmt = select(func.count(Card.multiverse_id))
            return int(_run(s, stmt).scalar_one())

    def owned_cards(self) -> List[MagicCard]:
        with session_scope(self._session_factory) as s:
            stmt = (
                select(Card)
                .join(OwnedCard, OwnedCard.multiverse_id == Card.multiverse_id)
                .order_by(Card.name.asc(), Card.multiverse_id.asc())
            )
            return to_magic_cards(_run(s, stmt).scalars().all())

    def highest_multiverse_id(self) -> int:
        with session_scope(self._session_factory) as s:
            stmt = select(func.max(Card.multiverse_id))
            return int(_run(s, stmt).scalar_one_or_none() or 0)

    def all_multiverse_ids(self) -> List[int]:
        with session_scope(self._session_factory) as s:
            stmt = select(Card.multiverse_id).order_by(Card.multiverse_id.asc())
            return [int(i) for i in _run(s, stmt).scalars().all()]


# --- Expansion Repository --------------------------------------------------------

class ExpansionRepository:
    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def all_expansions(self) -> List[str]:
        with session_scope(self._session_factory) as s:
            stmt = (
                select(distinct(Card.expansion))
                .where(Card.expansion.isnot(None))
                .order_by(Card.expansion.asc())
            )
            return [e for e in _run(s, stmt).scalars().all() if e]


# --- SubType Repository ----------------------------------------------------------

class SubTypeRepository:
    """
    Subtypes are whatever card_types holds that is not a SuperType or Type.
    """

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def all_subtypes(self) -> List[CardType]:
        with session_scope(self._session_factory) as s:
            stmt = select(distinct(CardTypeRow.type_name)).order_by(CardTypeRow.type_name.asc())
            names = _run(s, stmt).scalars().all()
        return [CardType.subtype(n) for n in names if not is_fixed_type(n)]

    def subtypes_with_frequency(self) -> List[Tuple[CardType, int]]:
        """(subtype, number of cards) pairs, most common first."""
        with session_scope(self._session_factory) as s:
            n = func.count(CardTypeRow.multiverse_id).label("n")
            stmt = (
                select(CardTypeRow.type_name, n)
                .group_by(CardTypeRow.type_name)
                .order_by(n.desc(), CardTypeRow.type_name.asc())
            )
            rows = _run(s, stmt).all()
        return [(CardType.subtype(name), int(count)) for name, count in rows if not is_fixed_type(name)]


__all__ = [
    "session_scope",
    "CardRepository",
    "ExpansionRepository",
    "SubTypeRepository",
]
