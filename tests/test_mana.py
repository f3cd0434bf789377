# tests/test_mana.py
import logging

import pytest

from magicdb.enums import Color
from magicdb.errors import InvalidManaSymbol
from magicdb.mana import (
    ManaCost,
    ManaSymbol,
    ZERO,
    color_codes,
    derive_colors,
    format_mana_cost,
    parse_mana_cost,
    parse_mana_symbol,
    tokenize_mana_cost,
)


# ----------------------------
# Round trips
# ----------------------------

@pytest.mark.parametrize(
    "text, converted",
    [
        ("2R", 3),
        ("0", 0),
        ("{R/G}", 1),
        ("{2/W}", 2),
        ("3RPRP", 5),
    ],
)
def test_parse_format_parse_round_trip(text, converted):
    first = parse_mana_cost(text)
    again = parse_mana_cost(format_mana_cost(first))

    assert first == again
    assert first.converted_cost == converted
    assert again.converted_cost == converted


@pytest.mark.parametrize("text", ["2R", "0", "{R/G}", "{2/W}", "3RPRP"])
def test_simple_costs_format_back_to_input(text):
    assert str(parse_mana_cost(text)) == text


def test_ambiguous_costs_are_braced_and_still_round_trip():
    cost = parse_mana_cost("2;R/G")
    assert len(cost) == 2
    assert format_mana_cost(cost) == "{2}{R/G}"
    assert parse_mana_cost(format_mana_cost(cost)) == cost

    two_numbers = ManaCost((parse_mana_symbol("2"), parse_mana_symbol("3")))
    assert format_mana_cost(two_numbers) == "{2}{3}"
    assert parse_mana_cost(format_mana_cost(two_numbers)) == two_numbers


# ----------------------------
# Grammar
# ----------------------------

def test_semicolon_tokens():
    cost = parse_mana_cost("2;R;G")
    assert [str(s) for s in cost] == ["2", "R", "G"]
    assert cost.converted_cost == 4


def test_multi_digit_is_one_generic_symbol():
    assert parse_mana_cost("12").converted_cost == 12
    assert len(parse_mana_cost("12")) == 1
    assert parse_mana_cost("{10}").converted_cost == 10


def test_phyrexian_tokens():
    assert tokenize_mana_cost("3RPRP") == ["3", "RP", "RP"]
    sym = parse_mana_symbol("RP")
    assert sym.phyrexian is True
    assert sym.colors == (Color.RED,)
    assert sym.cost_value == 1
    assert str(sym) == "RP"


def test_braced_phyrexian():
    cost = parse_mana_cost("{1}{W/P}")
    assert cost.converted_cost == 2
    assert [s.phyrexian for s in cost] == [False, True]


def test_hybrid_with_generic_costs_the_larger_side():
    sym = parse_mana_symbol("{2/W}")
    assert sym.colors == (Color.COLORLESS, Color.COLORLESS, Color.WHITE)
    assert sym.cost_value == 2
    assert sym.is_hybrid


def test_zero_symbol():
    sym = parse_mana_symbol("0")
    assert sym == ZERO
    assert sym.is_zero
    assert str(sym) == "0"


def test_empty_and_none_cost():
    for text in (None, "", "   "):
        cost = parse_mana_cost(text)
        assert len(cost) == 0
        assert cost.converted_cost == 0
        assert str(cost) == ""


def test_text_outside_braces_is_dropped_with_warning(caplog):
    mana_log = logging.getLogger("magicdb.mana")
    mana_log.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.WARNING, logger="magicdb.mana"):
            cost = parse_mana_cost("2{R/G}")
    finally:
        mana_log.removeHandler(caplog.handler)

    assert len(cost) == 1
    assert cost.converted_cost == 1
    assert any("outside braces" in r.getMessage() for r in caplog.records)


def test_equality_ignores_symbol_order():
    assert parse_mana_cost("2R") == parse_mana_cost("R2")
    assert hash(parse_mana_cost("2R")) == hash(parse_mana_cost("R2"))
    assert parse_mana_cost("2R") != parse_mana_cost("2G")


# ----------------------------
# Errors
# ----------------------------

def test_unknown_letter_raises():
    with pytest.raises(InvalidManaSymbol) as exc:
        parse_mana_cost("2Q")
    assert exc.value.token == "Q"
    # still a ValueError for generic callers
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize("text", ["²R", "{²}", "R;²", "³RP", "٣G"])
def test_non_ascii_digits_raise(text):
    with pytest.raises(InvalidManaSymbol):
        parse_mana_cost(text)


def test_phyrexian_marker_without_color_raises():
    with pytest.raises(InvalidManaSymbol):
        parse_mana_symbol("P")


def test_symbol_invariants():
    with pytest.raises(InvalidManaSymbol):
        ManaSymbol(cost_value=-1)
    with pytest.raises(InvalidManaSymbol):
        ManaSymbol(colors=(), cost_value=2)


# ----------------------------
# Color derivation
# ----------------------------

@pytest.mark.parametrize(
    "text, colors",
    [
        ("2R", (Color.RED,)),
        ("0", (Color.COLORLESS,)),
        ("2{R/G}", (Color.RED, Color.GREEN)),
        ("X", (Color.COLORLESS,)),
        ("2X", (Color.COLORLESS,)),
        ("", (Color.COLORLESS,)),
        ("{G/U}", (Color.GREEN, Color.BLUE)),
        ("WUBRG", (Color.WHITE, Color.BLUE, Color.BLACK, Color.RED, Color.GREEN)),
        ("GG1G", (Color.GREEN,)),
    ],
)
def test_derive_colors(text, colors):
    assert derive_colors(parse_mana_cost(text)) == colors
    assert parse_mana_cost(text).colors == colors


def test_color_codes():
    assert color_codes((Color.RED, Color.GREEN)) == "RG"
    assert color_codes(derive_colors(parse_mana_cost("1"))) == "C"
