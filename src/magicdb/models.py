from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    String,
    Text,
    ForeignKey,
    DateTime,
    Integer,
    LargeBinary,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

"""
These are data models for the MagicDB database.
They are for the tables in the database.
They include:

- Card       (all_cards)
- CardTypeRow (card_types)
- OwnedCard  (my_cards)

Cards are keyed by their Gatherer multiverse id; the other tables
join back to all_cards on that id.

author: Cole McGregor
date: 2025-11-13
version: 0.2.0
"""


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Card
# ---------------------------------------------------------------------------

class Card(Base):
    """
    One printed card. `cost`, `types` and `color` hold the stored text forms;
    the parsed forms live on the MagicCard record (see dto.py).
    """
    __tablename__ = "all_cards"

    multiverse_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    # Core fields
    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    cost: Mapped[str] = mapped_column(String, nullable=False, default="")
    converted_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    types: Mapped[str] = mapped_column(String, nullable=False)
    color: Mapped[str] = mapped_column(String, nullable=False, default="C")

    # Card text
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    flavor_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    power: Mapped[str | None] = mapped_column(String, nullable=True)
    toughness: Mapped[str | None] = mapped_column(String, nullable=True)

    # Printing
    expansion: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    rarity: Mapped[str | None] = mapped_column(String, nullable=True)
    artist: Mapped[str | None] = mapped_column(String, nullable=True)
    number: Mapped[str | None] = mapped_column(String, nullable=True)
    watermark: Mapped[str | None] = mapped_column(String, nullable=True)
    language: Mapped[str | None] = mapped_column(String, nullable=True, index=True)

    # Images load on demand only
    image: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True, deferred=True)

    touched_by_updater: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    type_rows: Mapped[list["CardTypeRow"]] = relationship(
        back_populates="card",
        cascade="all, delete-orphan",
    )
    owned: Mapped["OwnedCard"] = relationship(
        back_populates="card",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Card(multiverse_id={self.multiverse_id}, name={self.name!r}, cost={self.cost!r})>"


# ---------------------------------------------------------------------------
# CardTypeRow
# ---------------------------------------------------------------------------

class CardTypeRow(Base):
    """
    One supertype, type or subtype of a card, e.g. (1234, 'Basic').
    Searched by the Type and SubType fields.
    """
    __tablename__ = "card_types"

    multiverse_id: Mapped[int] = mapped_column(
        ForeignKey("all_cards.multiverse_id", ondelete="CASCADE"),
        primary_key=True,
    )
    type_name: Mapped[str] = mapped_column(String, primary_key=True, index=True)

    card: Mapped["Card"] = relationship(back_populates="type_rows")

    def __repr__(self) -> str:
        return f"<CardTypeRow(multiverse_id={self.multiverse_id}, type_name={self.type_name!r})>"


# ---------------------------------------------------------------------------
# OwnedCard
# ---------------------------------------------------------------------------

class OwnedCard(Base):
    """
    Ownership count for a card. A card is owned while a row exists here.
    """
    __tablename__ = "my_cards"

    multiverse_id: Mapped[int] = mapped_column(
        ForeignKey("all_cards.multiverse_id", ondelete="CASCADE"),
        primary_key=True,
    )
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    card: Mapped["Card"] = relationship(back_populates="owned")

    def __repr__(self) -> str:
        return f"<OwnedCard(multiverse_id={self.multiverse_id}, count={self.count})>"
