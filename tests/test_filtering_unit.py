# File: tests/test_filtering_unit.py | Version: 1.0 | Title: Filter trees, relative dates and filter-implied properties
from datetime import UTC, datetime

import pytest

from boardview.crud.filtering import (
    filter_cards,
    matches,
    properties_that_meet_filter_group,
    resolve_date_range,
)
from boardview.schemas.board import Board, PropertyTemplate
from boardview.schemas.card import Card
from boardview.schemas.filters import FilterGroup

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)


def _ms(y, m, d, hh=0):
    return int(datetime(y, m, d, hh, tzinfo=UTC).timestamp() * 1000)


STATUS = PropertyTemplate(
    id="status",
    name="Status",
    type="select",
    options=[{"id": "o1", "value": "Todo"}, {"id": "o2", "value": "Done"}],
)
TAGS = PropertyTemplate(
    id="tags",
    name="Tags",
    type="multiSelect",
    options=[{"id": "t1", "value": "Red"}, {"id": "t2", "value": "Blue"}],
)
DUE = PropertyTemplate(id="due", name="Due", type="date")
ESTIMATE = PropertyTemplate(id="est", name="Estimate", type="number")
DONE = PropertyTemplate(id="done", name="Done", type="checkbox")
OWNER = PropertyTemplate(id="owner", name="Owner", type="person")
TEMPLATES = [STATUS, TAGS, DUE, ESTIMATE, DONE, OWNER]


def _card(cid, title="", **props):
    return Card(id=cid, parent_id="b1", title=title, properties=props)


def _group(*filters, operation="and"):
    return FilterGroup.model_validate({"operation": operation, "filters": list(filters)})


def _clause(property_id, condition, *values):
    return {"property_id": property_id, "condition": condition, "values": list(values)}


def _ids(cards):
    return [c.id for c in cards]


# ---------------------------
# Pass-through and basic trees
# ---------------------------


def test_empty_filter_returns_cards_unchanged():
    cards = [_card("a", status="o1"), _card("b"), _card("c", est=3)]
    assert filter_cards(cards, FilterGroup(), TEMPLATES) == cards
    assert filter_cards(cards, None, TEMPLATES) == cards


def test_status_is_option_keeps_matching_cards_only():
    a = _card("a", status="o1")
    b = _card("b", status="o2")
    group = _group(_clause("status", "is", "o1"))
    assert _ids(filter_cards([a, b], group, TEMPLATES, now=NOW)) == ["a"]


def test_filter_cards_accepts_the_board_as_schema():
    a = _card("a", status="o1")
    b = _card("b", status="o2")
    group = _group(_clause("status", "is", "o1"))
    board = Board(id="b1", card_properties=[STATUS])
    assert _ids(filter_cards([a, b], group, board, now=NOW)) == ["a"]


def test_filter_cards_without_schema_is_a_type_error():
    group = _group(_clause("status", "is", "o1"))
    with pytest.raises(TypeError):
        filter_cards([_card("a", status="o1")], group)


def test_filter_parses_from_stored_json_shape():
    group = FilterGroup.model_validate(
        {
            "operation": "or",
            "filters": [
                {"operation": "and", "filters": [_clause("status", "is", "o2")]},
                _clause("est", "greater_than", 10),
            ],
        }
    )
    assert isinstance(group.filters[0], FilterGroup)
    assert group.filters[1].property_id == "est"


def test_dangling_property_reference_fails_closed():
    cards = [_card("a", status="o1"), _card("b")]
    group = _group(_clause("ghost", "is", "x"))
    assert filter_cards(cards, group, TEMPLATES, now=NOW) == []

    # inside an "or" the other branch can still match
    either = _group(_clause("ghost", "is", "x"), _clause("status", "is", "o1"), operation="or")
    assert _ids(filter_cards(cards, either, TEMPLATES, now=NOW)) == ["a"]


def test_clause_without_values_passes():
    cards = [_card("a", status="o1"), _card("b")]
    group = _group(_clause("status", "is"))
    assert _ids(filter_cards(cards, group, TEMPLATES, now=NOW)) == ["a", "b"]


def test_nested_groups_combine_with_and_or():
    a = _card("a", status="o1", est=5)
    b = _card("b", status="o1", est=1)
    c = _card("c", status="o2", est=9)
    group = _group(
        _clause("status", "is", "o1"),
        {
            "operation": "or",
            "filters": [_clause("est", "greater_than", 3), _clause("done", "is", True)],
        },
    )
    assert _ids(filter_cards([a, b, c], group, TEMPLATES, now=NOW)) == ["a"]


# ---------------------------
# Per-type conditions
# ---------------------------


def test_title_text_conditions_are_case_insensitive():
    cards = [_card("a", title="Write Docs"), _card("b", title="review PR"), _card("c")]
    assert _ids(filter_cards(cards, _group(_clause("__title", "contains", "DOCS")), [])) == ["a"]
    assert _ids(filter_cards(cards, _group(_clause("__title", "starts_with", "rev")), [])) == ["b"]
    assert _ids(filter_cards(cards, _group(_clause("__title", "is_empty")), [])) == ["c"]
    assert _ids(
        filter_cards(cards, _group(_clause("__title", "does_not_contain", "docs")), [])
    ) == ["b", "c"]


def test_multi_select_includes_and_excludes():
    a = _card("a", tags=["t1", "t2"])
    b = _card("b", tags=["t2"])
    c = _card("c")
    assert _ids(filter_cards([a, b, c], _group(_clause("tags", "includes_any", "t1")), TEMPLATES)) == ["a"]
    assert _ids(
        filter_cards([a, b, c], _group(_clause("tags", "does_not_include", "t1")), TEMPLATES)
    ) == ["b", "c"]
    assert _ids(filter_cards([a, b, c], _group(_clause("tags", "is_empty")), TEMPLATES)) == ["c"]


def test_number_conditions_accept_numeric_strings():
    cards = [_card("a", est=5), _card("b", est="12"), _card("c")]
    assert _ids(filter_cards(cards, _group(_clause("est", "greater_than", 4)), TEMPLATES)) == ["a", "b"]
    assert _ids(filter_cards(cards, _group(_clause("est", "less_than", "6")), TEMPLATES)) == ["a"]
    assert _ids(filter_cards(cards, _group(_clause("est", "is_not_empty")), TEMPLATES)) == ["a", "b"]


def test_checkbox_is_true_and_unchecked_default():
    cards = [_card("a", done=True), _card("b", done="false"), _card("c")]
    assert _ids(filter_cards(cards, _group(_clause("done", "is", True)), TEMPLATES)) == ["a"]
    assert _ids(filter_cards(cards, _group(_clause("done", "is", False)), TEMPLATES)) == ["b", "c"]


def test_person_is_matches_user_id():
    cards = [_card("a", owner="u1"), _card("b", owner="u2")]
    assert _ids(filter_cards(cards, _group(_clause("owner", "is", "u2")), TEMPLATES)) == ["b"]


# ---------------------------
# Dates
# ---------------------------


def test_date_is_today_uses_evaluation_clock():
    today = _card("a", due={"from": _ms(2024, 5, 15, 9)})
    yesterday = _card("b", due={"from": _ms(2024, 5, 14, 9)})
    missing = _card("c")
    group = _group(_clause("due", "is", "today"))
    assert _ids(filter_cards([today, yesterday, missing], group, TEMPLATES, now=NOW)) == ["a"]

    before = _group(_clause("due", "is_before", "today"))
    assert _ids(filter_cards([today, yesterday, missing], before, TEMPLATES, now=NOW)) == ["b"]

    # the same card is no longer "today" a day later
    later = datetime(2024, 5, 16, 8, 0, tzinfo=UTC)
    assert matches(today, group, TEMPLATES, now=later) is False


def test_date_values_in_stored_string_shapes():
    as_json = _card("a", due='{"from": %d}' % _ms(2024, 5, 1, 10))
    as_iso = _card("b", due="2024-05-01")
    other_day = _card("c", due="2024-05-02T08:00:00+00:00")
    group = _group(_clause("due", "is", "2024-05-01"))
    assert _ids(filter_cards([as_json, as_iso, other_day], group, TEMPLATES, now=NOW)) == ["a", "b"]


def test_resolve_relative_week_and_month_ranges():
    assert resolve_date_range("this_week", now=NOW, week_starts_on=0) == (
        _ms(2024, 5, 13),
        _ms(2024, 5, 20),
    )
    assert resolve_date_range("this week", now=NOW, week_starts_on=6) == (
        _ms(2024, 5, 12),
        _ms(2024, 5, 19),
    )
    assert resolve_date_range("next_week", now=NOW, week_starts_on=0) == (
        _ms(2024, 5, 20),
        _ms(2024, 5, 27),
    )
    assert resolve_date_range("this_month", now=NOW) == (_ms(2024, 5, 1), _ms(2024, 6, 1))
    assert resolve_date_range("tomorrow", now=NOW) == (_ms(2024, 5, 16), _ms(2024, 5, 17))
    assert resolve_date_range("not a date", now=NOW) is None


# ---------------------------
# Filter-implied properties for new cards
# ---------------------------


def test_properties_that_meet_and_filter():
    group = _group(
        _clause("status", "is", "o1"),
        _clause("tags", "includes_any", "t2"),
        _clause("done", "is", True),
        _clause("est", "greater_than", 3),
    )
    assert properties_that_meet_filter_group(group, TEMPLATES) == {
        "status": "o1",
        "tags": ["t2"],
        "done": True,
    }


def test_properties_that_meet_or_filter_uses_first_clause():
    group = _group(_clause("status", "is", "o2"), _clause("done", "is", True), operation="or")
    assert properties_that_meet_filter_group(group, TEMPLATES) == {"status": "o2"}


def test_properties_that_meet_filter_skip_unknown_nested_and_not_empty():
    group = _group(
        _clause("ghost", "is", "x"),
        {"operation": "and", "filters": [_clause("est", "is", 4)]},
        _clause("status", "is_not_empty"),
    )
    # is_not_empty picks the first option
    assert properties_that_meet_filter_group(group, TEMPLATES) == {"status": "o1"}
    assert properties_that_meet_filter_group(FilterGroup(), TEMPLATES) == {}
