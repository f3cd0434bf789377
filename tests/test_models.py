# tests/test_models.py
import os
import tempfile

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from magicdb.models import Base, Card, CardTypeRow, OwnedCard


@pytest.fixture(scope="function")
def session():
    """Provide a fresh file-based SQLite DB session for each test, cleanup after."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    engine = create_engine(f"sqlite:///{path}", echo=False, future=True)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, future=True)
    sess = Session()
    try:
        yield sess
    finally:
        sess.close()
        engine.dispose()
        if os.path.exists(path):
            os.remove(path)


def make_card(mid=1, name="Llanowar Elves") -> Card:
    return Card(multiverse_id=mid, name=name, cost="G", converted_cost=1, types="Creature — Elf Druid", color="G")


def test_create_card(session):
    session.add(make_card())
    session.commit()

    card = session.query(Card).filter_by(name="Llanowar Elves").one()
    assert card.multiverse_id == 1
    assert card.touched_by_updater is not None
    assert repr(card).startswith("<Card(")


def test_defaults(session):
    session.add(Card(multiverse_id=2, name="Forest", types="Basic Land — Forest"))
    session.commit()

    card = session.get(Card, 2)
    assert card.cost == ""
    assert card.converted_cost == 0
    assert card.color == "C"
    assert card.image is None


def test_type_rows_and_owned_relationships(session):
    card = make_card()
    card.type_rows = [CardTypeRow(type_name=t) for t in ("Creature", "Elf", "Druid")]
    card.owned = OwnedCard(count=3)
    session.add(card)
    session.commit()

    rows = session.execute(select(CardTypeRow.type_name).where(CardTypeRow.multiverse_id == 1)).scalars().all()
    assert sorted(rows) == ["Creature", "Druid", "Elf"]
    assert session.get(OwnedCard, 1).count == 3
    assert session.get(OwnedCard, 1).card.name == "Llanowar Elves"


def test_delete_card_cascades(session):
    card = make_card()
    card.type_rows = [CardTypeRow(type_name="Creature")]
    card.owned = OwnedCard(count=1)
    session.add(card)
    session.commit()

    session.delete(session.get(Card, 1))
    session.commit()

    assert session.query(CardTypeRow).count() == 0
    assert session.query(OwnedCard).count() == 0
