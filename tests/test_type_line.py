# tests/test_type_line.py
import pytest

from magicdb.errors import BlankTypeLine
from magicdb.type_line import (
    TYPE_SEPARATOR,
    CardType,
    TypeKind,
    TypeLine,
    format_type_line,
    is_fixed_type,
    parse_type_line,
)


def test_basic_land_island():
    tl = parse_type_line("Basic Land — Island")
    assert [str(t) for t in tl.super_types] == ["Basic"]
    assert [str(t) for t in tl.types] == ["Land"]
    assert [str(t) for t in tl.sub_types] == ["Island"]
    assert format_type_line(tl) == "Basic Land — Island"


def test_round_trip_keeps_segments():
    text = "Legendary Creature — Human Wizard"
    tl = parse_type_line(text)
    assert tl.format() == text
    assert parse_type_line(tl.format()) == tl


def test_no_subtypes_means_no_separator():
    assert parse_type_line("Instant").format() == "Instant"
    assert TYPE_SEPARATOR not in parse_type_line("Artifact Creature").format()


def test_case_and_hyphen_separator():
    tl = parse_type_line("creature - elf  druid")
    assert [t.kind for t in tl.all_types] == [TypeKind.TYPE, TypeKind.SUBTYPE, TypeKind.SUBTYPE]
    assert tl.format() == "Creature — Elf Druid"


def test_duplicates_are_dropped():
    tl = parse_type_line("Creature Creature — Elf Elf")
    assert len(tl.types) == 1
    assert len(tl.sub_types) == 1


@pytest.mark.parametrize("text", [None, "", "   "])
def test_blank_type_line_raises(text):
    with pytest.raises(BlankTypeLine):
        parse_type_line(text)


def test_card_type_identity_is_display_text():
    assert CardType("HUMAN") == CardType.subtype("human")
    assert CardType.subtype("basic") == CardType.classify("Basic")
    assert CardType.classify("legendary").kind is TypeKind.SUPERTYPE
    assert CardType.classify("land").kind is TypeKind.TYPE
    assert CardType.classify("goblin").is_subtype
    assert CardType.subtype("elf").search_text == "Elf"


def test_is_fixed_type():
    assert is_fixed_type("Snow")
    assert is_fixed_type("sorcery")
    assert not is_fixed_type("Goblin")


def test_format_subtypes_only():
    tl = TypeLine(sub_types=(CardType.subtype("Elf"),))
    # nothing before the subtypes, so no separator
    assert format_type_line(tl) == "Elf"
