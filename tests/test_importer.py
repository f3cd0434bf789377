# tests/test_importer.py
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import select

import magicdb.db as db
from magicdb.importer import import_file
from magicdb.models import Card, CardTypeRow
from magicdb.parsers.base import ParserError
from magicdb.repos import CardRepository


@pytest.fixture(scope="function")
def temp_db(monkeypatch):
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"

    monkeypatch.setattr(db, "DATABASE_URL", url, raising=True)
    db.engine = db.create_engine(url, echo=False, future=True)
    db.SessionLocal.configure(bind=db.engine)
    db.init_db()

    yield path

    db.engine.dispose()
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def make_csv(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "cards.csv"
    p.write_text(content, encoding="utf-8")
    return p


CSV = """Multiverse Id,Name,Cost,Types,Expansion,Language
1,Llanowar Elves,G,Creature — Elf Druid,Alpha,English
2,Lightning Bolt,R,Instant,Alpha,English
3,Boros Guildmage,{R/W}{R/W},Creature — Human Wizard,Dissension,
4,Bad Cost,2Q,Instant,Alpha,English
5,No Types,1,,Alpha,English
abc,Bad Id,1,Instant,Alpha,English
"""


def test_import_counts_and_skips(temp_db, tmp_path, caplog):
    importer_log = logging.getLogger("magicdb.importer")
    importer_log.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.WARNING, logger="magicdb.importer"):
            imported, skipped = import_file(make_csv(tmp_path, CSV))
    finally:
        importer_log.removeHandler(caplog.handler)

    assert (imported, skipped) == (3, 3)
    skipped_msgs = {r.getMessage() for r in caplog.records if "Skipping row" in r.getMessage()}
    assert len(skipped_msgs) == 3

    repo = CardRepository()
    assert repo.all_multiverse_ids() == [1, 2, 3]
    assert repo.get_card(3).color_codes == "RW"
    assert repo.get_card(3).language is None


def test_import_writes_type_rows(temp_db, tmp_path):
    import_file(make_csv(tmp_path, CSV))
    with db.SessionLocal() as s:
        rows = s.execute(select(CardTypeRow.type_name).where(CardTypeRow.multiverse_id == 1)).scalars().all()
        card = s.get(Card, 1)
    assert sorted(rows) == ["Creature", "Druid", "Elf"]
    assert card.types == "Creature — Elf Druid"


def test_reimport_updates_in_place(temp_db, tmp_path):
    import_file(make_csv(tmp_path, CSV))
    changed = CSV.replace("Lightning Bolt,R,Instant,Alpha", "Lightning Bolt,R,Instant,Beta")
    import_file(make_csv(tmp_path, changed))

    repo = CardRepository()
    assert repo.number_of_cards_in_database() == 3
    assert repo.get_card(2).expansion == "Beta"


def test_empty_file(temp_db, tmp_path):
    assert import_file(make_csv(tmp_path, "Multiverse Id,Name,Types\n")) == (0, 0)


def test_unsupported_file(temp_db, tmp_path):
    p = tmp_path / "cards.txt"
    p.write_text("x", encoding="utf-8")
    with pytest.raises(ParserError):
        import_file(p)
