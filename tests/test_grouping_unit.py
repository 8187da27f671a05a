# File: tests/test_grouping_unit.py | Version: 1.0 | Title: Visible/hidden board groups (empty group, orphans, multiSelect)
from boardview.crud.grouping import (
    EMPTY_GROUP_ID,
    get_visible_and_hidden_groups,
    group_cards,
)
from boardview.schemas.board import PropertyTemplate
from boardview.schemas.card import Card, CardPage, Page

STATUS = PropertyTemplate(
    id="status",
    name="Status",
    type="select",
    options=[{"id": "o1", "value": "Todo"}, {"id": "o2", "value": "Done"}],
)


def _cp(cid, **props):
    return CardPage(card=Card(id=cid, parent_id="b1", properties=props), page=Page(id=cid))


def _layout(groups):
    return [(g.option.id, [c.id for c in g.cards]) for g in groups]


def test_empty_group_is_unshifted_to_front_of_visible():
    cards = [_cp("A", status="o1"), _cp("B", status="o2"), _cp("C")]
    groups = get_visible_and_hidden_groups(cards, ["o1", "o2"], [], STATUS)
    assert _layout(groups["visible"]) == [("", ["C"]), ("o1", ["A"]), ("o2", ["B"])]
    assert groups["hidden"] == []
    assert groups["visible"][0].option.value == "No Status"


def test_every_card_lands_in_exactly_one_group():
    cards = [
        _cp("a", status="o1"),
        _cp("b", status="o2"),
        _cp("c", status="gone"),
        _cp("d", status=""),
        _cp("e"),
        _cp("f", status="o2"),
    ]
    groups = group_cards(cards, ["o1"], ["o2"], STATUS)
    seen = [c.id for g in groups["visible"] + groups["hidden"] for c in g.cards]
    assert sorted(seen) == ["a", "b", "c", "d", "e", "f"]
    assert len(seen) == len(set(seen))


def test_orphaned_option_goes_to_empty_group():
    cards = [_cp("x", status="deleted-option")]
    groups = get_visible_and_hidden_groups(cards, [], [], STATUS)
    assert _layout(groups["visible"]) == [("", ["x"]), ("o1", []), ("o2", [])]


def test_unassigned_options_are_appended_visible():
    groups = get_visible_and_hidden_groups([], ["o2"], [], STATUS)
    assert [g.option.id for g in groups["visible"]] == ["", "o2", "o1"]


def test_hidden_empty_group_is_not_unshifted():
    cards = [_cp("A", status="o1"), _cp("C")]
    groups = get_visible_and_hidden_groups(cards, ["o1"], [EMPTY_GROUP_ID, "o2"], STATUS)
    assert _layout(groups["visible"]) == [("o1", ["A"])]
    assert _layout(groups["hidden"]) == [("", ["C"]), ("o2", [])]


def test_explicit_empty_group_position_is_kept():
    groups = get_visible_and_hidden_groups([], ["o1", "", "o2"], [], STATUS)
    assert [g.option.id for g in groups["visible"]] == ["o1", "", "o2"]


def test_id_in_both_lists_stays_visible():
    groups = get_visible_and_hidden_groups([], ["o1", "o2"], ["o1"], STATUS)
    assert [g.option.id for g in groups["visible"]] == ["", "o1", "o2"]
    assert groups["hidden"] == []


def test_stale_visible_option_ids_are_skipped():
    groups = get_visible_and_hidden_groups([], ["removed", "o1"], [], STATUS)
    assert [g.option.id for g in groups["visible"]] == ["", "o1", "o2"]


def test_no_group_property_means_no_groups():
    cards = [_cp("A", status="o1")]
    assert get_visible_and_hidden_groups(cards, ["o1"], [], None) == {"visible": [], "hidden": []}


def test_multi_select_groups_by_first_known_option():
    tags = PropertyTemplate(
        id="tags",
        name="Tags",
        type="multiSelect",
        options=[{"id": "t1", "value": "Red"}, {"id": "t2", "value": "Blue"}],
    )
    cards = [_cp("m", tags=["gone", "t2", "t1"]), _cp("n", tags=[])]
    groups = get_visible_and_hidden_groups(cards, [], [], tags)
    assert _layout(groups["visible"]) == [("", ["n"]), ("t1", []), ("t2", ["m"])]


def test_group_keeps_card_pages_alongside_cards():
    cards = [_cp("A", status="o1")]
    group = get_visible_and_hidden_groups(cards, ["o1"], [], STATUS)["visible"][1]
    assert group.card_pages[0].page.id == "A"
