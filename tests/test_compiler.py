# tests/test_compiler.py
import pytest
from sqlalchemy.sql.elements import True_

from magicdb.compiler import SearchPredicateCompiler
from magicdb.criteria import NameSequence, SearchCriterion, SearchField
from magicdb.errors import DuplicateCriterionName


@pytest.fixture
def seq():
    return NameSequence()


def crit(seq, field, text, is_and=True):
    return SearchCriterion.of(field, text, is_and, sequence=seq)


def name(seq, field, n) -> str:
    return f"{field}{seq.tag}{n}"


def sql(plan) -> str:
    return str(plan.predicate.compile())


def test_empty_criteria_is_unrestricted():
    plan = SearchPredicateCompiler().compile([])
    assert plan.is_unrestricted
    assert isinstance(plan.predicate, True_)
    assert plan.parameters == {}
    assert len(plan.order_by) == 2

    assert isinstance(SearchPredicateCompiler().compile(None).predicate, True_)


def test_primary_table_field_is_a_like(seq):
    plan = SearchPredicateCompiler().compile([crit(seq, SearchField.NAME, "Lightning%")])
    assert sql(plan) == f"all_cards.name LIKE :{name(seq, 'NAME', 0)}"
    assert plan.parameters == {name(seq, "NAME", 0): "Lightning%"}
    assert plan.predicate.compile().params == {name(seq, "NAME", 0): "Lightning%"}


def test_joined_field_is_a_membership_test(seq):
    plan = SearchPredicateCompiler().compile([crit(seq, SearchField.SUBTYPE, "Elf")])
    text = sql(plan)
    assert text.startswith("all_cards.multiverse_id IN (SELECT card_types.multiverse_id")
    assert f"card_types.type_name LIKE :{name(seq, 'SUBTYPE', 0)}" in text


def test_owned_is_membership_only(seq):
    plan = SearchPredicateCompiler().compile([crit(seq, SearchField.OWNED, "")])
    text = sql(plan)
    assert "my_cards" in text
    assert "LIKE" not in text
    assert plan.parameters == {}


def test_joins_are_left_associative(seq):
    c = SearchPredicateCompiler()

    def n(i):
        return name(seq, "NAME", i)

    or_then_and = c.compile([
        crit(seq, SearchField.NAME, "a"),
        crit(seq, SearchField.NAME, "b", is_and=False),
        crit(seq, SearchField.NAME, "c", is_and=True),
    ])
    assert sql(or_then_and) == (
        f"(all_cards.name LIKE :{n(0)} OR all_cards.name LIKE :{n(1)}) "
        f"AND all_cards.name LIKE :{n(2)}"
    )

    and_then_or = c.compile([
        crit(seq, SearchField.NAME, "a"),
        crit(seq, SearchField.NAME, "b", is_and=True),
        crit(seq, SearchField.NAME, "c", is_and=False),
    ])
    assert sql(and_then_or) == (
        f"all_cards.name LIKE :{n(3)} AND all_cards.name LIKE :{n(4)} "
        f"OR all_cards.name LIKE :{n(5)}"
    )


def test_first_criterion_join_is_ignored(seq):
    plan = SearchPredicateCompiler().compile([crit(seq, SearchField.NAME, "a", is_and=False)])
    assert sql(plan) == f"all_cards.name LIKE :{name(seq, 'NAME', 0)}"


def test_repeated_field_gets_separate_parameters(seq):
    plan = SearchPredicateCompiler().compile([
        crit(seq, SearchField.COLOR, "%R%"),
        crit(seq, SearchField.COLOR, "%G%", is_and=False),
    ])
    assert plan.parameters == {name(seq, "COLOR", 0): "%R%", name(seq, "COLOR", 1): "%G%"}


def test_duplicate_parameter_names_rejected(seq):
    c = crit(seq, SearchField.NAME, "a")
    with pytest.raises(DuplicateCriterionName):
        SearchPredicateCompiler().compile([c, c])


def test_values_are_never_inlined(seq):
    plan = SearchPredicateCompiler().compile([crit(seq, SearchField.NAME, "x'; DROP TABLE all_cards; --")])
    assert "DROP" not in sql(plan)


def test_default_and_injected_sequences_never_collide():
    default = SearchCriterion.of(SearchField.NAME, "a")
    first = SearchCriterion.of(SearchField.NAME, "b", sequence=NameSequence())
    second = SearchCriterion.of(SearchField.NAME, "c", sequence=NameSequence())

    names = {default.parameter_name, first.parameter_name, second.parameter_name}
    assert len(names) == 3

    plan = SearchPredicateCompiler().compile([default, first, second])
    assert sorted(plan.parameters.values()) == ["a", "b", "c"]

    # two fresh sequences compiled together, no default-sequence criteria involved
    plan = SearchPredicateCompiler().compile([
        SearchCriterion.of(SearchField.COLOR, "%R%", sequence=NameSequence()),
        SearchCriterion.of(SearchField.COLOR, "%G%", is_and=False, sequence=NameSequence()),
    ])
    assert len(plan.parameters) == 2
