# File: tests/test_sorting_unit.py | Version: 1.0 | Title: Sort options, manual card order and missing values
from boardview.crud.sorting import order_by_card_order, sort_cards
from boardview.schemas.board import Board
from boardview.schemas.card import Card, CardPage, Member, Page
from boardview.schemas.view import BoardView

BOARD = Board(
    id="b1",
    card_properties=[
        {
            "id": "status",
            "name": "Status",
            "type": "select",
            "options": [{"id": "o1", "value": "Todo"}, {"id": "o2", "value": "Done"}],
        },
        {"id": "due", "name": "Due", "type": "date"},
        {"id": "est", "name": "Estimate", "type": "number"},
        {"id": "owner", "name": "Owner", "type": "person"},
    ],
)


def _cp(cid, title="", **props):
    return CardPage(
        card=Card(id=cid, parent_id="b1", title=title, properties=props),
        page=Page(id=cid),
    )


def _view(sort_options=(), card_order=()):
    return BoardView(
        id="v1",
        board_id="b1",
        view_type="table",
        sort_options=list(sort_options),
        card_order=list(card_order),
    )


def _ids(card_pages):
    return [cp.card.id for cp in card_pages]


def test_select_sorts_by_option_order_not_creation_order():
    # B was created first
    cards = [_cp("B", status="o2"), _cp("A", status="o1")]
    view = _view([{"property_id": "status"}])
    assert _ids(sort_cards(cards, BOARD, view)) == ["A", "B"]


def test_reversed_sort_flips_order():
    cards = [_cp("A", status="o1"), _cp("B", status="o2")]
    view = _view([{"property_id": "status", "reversed": True}])
    assert _ids(sort_cards(cards, BOARD, view)) == ["B", "A"]


def test_ties_keep_input_order():
    cards = [_cp(cid, status="o1") for cid in ("c3", "c1", "c2")]
    view = _view([{"property_id": "status"}, {"property_id": "est"}])
    assert _ids(sort_cards(cards, BOARD, view)) == ["c3", "c1", "c2"]


def test_missing_dates_sort_last_in_both_directions():
    cards = [
        _cp("none"),
        _cp("late", due={"from": 2_000_000}),
        _cp("early", due={"from": 1_000_000}),
    ]
    asc = _view([{"property_id": "due"}])
    desc = _view([{"property_id": "due", "reversed": True}])
    assert _ids(sort_cards(cards, BOARD, asc)) == ["early", "late", "none"]
    assert _ids(sort_cards(cards, BOARD, desc)) == ["late", "early", "none"]


def test_missing_numbers_sort_lowest():
    cards = [_cp("five", est=5), _cp("none"), _cp("two", est="2")]
    view = _view([{"property_id": "est"}])
    assert _ids(sort_cards(cards, BOARD, view)) == ["none", "two", "five"]


def test_title_sort_is_case_insensitive():
    cards = [_cp("1", title="banana"), _cp("2", title="Apple"), _cp("3", title="cherry")]
    view = _view([{"property_id": "__title"}])
    assert _ids(sort_cards(cards, BOARD, view)) == ["2", "1", "3"]


def test_person_sorts_by_member_name():
    cards = [_cp("x", owner="u1"), _cp("y", owner="u2")]
    members = [Member(id="u1", username="zed"), Member(id="u2", username="amy")]
    view = _view([{"property_id": "owner"}])
    assert _ids(sort_cards(cards, BOARD, view, members)) == ["y", "x"]


def test_card_order_used_only_without_sort_options():
    cards = [_cp("c1", status="o2"), _cp("c2", status="o1"), _cp("c3", status="o1")]
    manual = _view(card_order=["c3", "c1"])
    # unknown cards keep their input order after the listed ones
    assert _ids(sort_cards(cards, BOARD, manual)) == ["c3", "c1", "c2"]

    sorted_view = _view([{"property_id": "status"}], card_order=["c1", "c2", "c3"])
    assert _ids(sort_cards(cards, BOARD, sorted_view)) == ["c2", "c3", "c1"]


def test_dangling_sort_options_fall_back_to_card_order():
    cards = [_cp("c1"), _cp("c2")]
    view = _view([{"property_id": "ghost"}], card_order=["c2", "c1"])
    assert _ids(sort_cards(cards, BOARD, view)) == ["c2", "c1"]


def test_order_by_card_order_ignores_duplicate_ids():
    cards = [_cp("a"), _cp("b")]
    assert _ids(order_by_card_order(cards, ["b", "a", "b"])) == ["b", "a"]
