# tests/test_planner.py
import pytest

from magicdb.errors import InvalidPage
from magicdb.planner import (
    DEFAULT_PAGE_SIZE,
    FetchMode,
    FetchPlan,
    NameGroup,
    QueryPlanner,
    collect_name_groups,
    flatten_ids,
)


def test_default_page_size():
    assert DEFAULT_PAGE_SIZE == 10
    assert FetchPlan.grouped(1).page_size == 10


def test_plain_limit_and_offset():
    fp = FetchPlan.plain(3, 10)
    assert fp.mode is FetchMode.PLAIN
    assert fp.limit == 10
    assert fp.offset == 20
    assert FetchPlan.plain(1, 5).offset == 0


def test_unrestricted_has_no_limit():
    fp = FetchPlan.unrestricted()
    assert fp.limit is None
    assert fp.offset is None
    assert FetchPlan.grouped(None).limit is None


@pytest.mark.parametrize("page", [0, -1])
def test_plain_page_must_be_positive(page):
    with pytest.raises(InvalidPage):
        FetchPlan.plain(page)


def test_page_size_must_be_positive():
    with pytest.raises(InvalidPage):
        FetchPlan.plain(1, 0)
    with pytest.raises(InvalidPage):
        FetchPlan.grouped(1, -5)


def test_plain_requires_a_page():
    with pytest.raises(InvalidPage):
        FetchPlan(FetchMode.PLAIN, None)


def test_collect_name_groups_keeps_order():
    rows = [("Bolt", 3), ("Bolt", 4), ("Elves", 1), ("Elves", 2), ("Forest", 6)]
    groups = collect_name_groups(rows)
    assert groups == [
        NameGroup("Bolt", (3, 4)),
        NameGroup("Elves", (1, 2)),
        NameGroup("Forest", (6,)),
    ]
    assert flatten_ids(groups) == [3, 4, 1, 2, 6]


def test_collect_name_groups_does_not_truncate():
    rows = [("Swamp", i) for i in range(1, 20001)]
    (group,) = collect_name_groups(rows)
    assert len(group) == 20000
    assert group.ids[-1] == 20000


def test_grouped_fetch_is_not_a_card_fetch():
    planner = QueryPlanner()
    plan = planner.compile([])
    with pytest.raises(ValueError):
        planner.cards(plan, FetchPlan.grouped(1))


def test_paged_statements_carry_limit():
    planner = QueryPlanner()
    plan = planner.compile([])
    assert "LIMIT" in str(planner.cards(plan, FetchPlan.plain(2, 5)))
    assert "LIMIT" not in str(planner.cards(plan))
    assert "LIMIT" in str(planner.name_rows(plan, FetchPlan.grouped(1, 5)))
    assert "GROUP BY" in str(planner.name_rows(plan, FetchPlan.grouped(1, 5)))


def test_grouped_page_joins_a_derived_table_of_names():
    planner = QueryPlanner()
    plan = planner.compile([])
    text = str(planner.name_rows(plan, FetchPlan.grouped(2, 3)))
    assert "JOIN (SELECT all_cards.name" in text
    assert "AS page_names ON all_cards.name = page_names.name" in text
    assert "all_cards.name IN (" not in text

    # unpaged sweeps need no names table at all
    assert "JOIN" not in str(planner.name_rows(plan, FetchPlan.grouped()))
