# File: tests/test_calculations_unit.py | Version: 1.0 | Title: Column calculations
import pytest

from boardview.crud.calculations import calculate, calculate_columns
from boardview.schemas.board import Board, PropertyTemplate
from boardview.schemas.card import Card

EST = PropertyTemplate(id="est", name="Estimate", type="number")
DONE = PropertyTemplate(id="done", name="Done", type="checkbox")
TAGS = PropertyTemplate(
    id="tags",
    name="Tags",
    type="multiSelect",
    options=[{"id": "t1", "value": "Red"}, {"id": "t2", "value": "Blue"}],
)
DUE = PropertyTemplate(id="due", name="Due", type="date")

CARDS = [
    Card(id="a", parent_id="b1", properties={"est": 4, "done": True, "tags": ["t1", "t2"], "due": {"from": 100}}),
    Card(id="b", parent_id="b1", properties={"est": "2", "tags": ["t1"], "due": {"from": 400}}),
    Card(id="c", parent_id="b1", properties={}),
    Card(id="d", parent_id="b1", properties={"est": 9, "done": False}),
]


@pytest.mark.parametrize(
    "name, template, expected",
    [
        ("count", EST, 4),
        ("count_empty", EST, 1),
        ("count_not_empty", EST, 3),
        ("percent_empty", EST, 25.0),
        ("sum", EST, 15.0),
        ("average", EST, 5.0),
        ("median", EST, 4.0),
        ("min", EST, 2.0),
        ("max", EST, 9.0),
        ("range", EST, 7.0),
        ("count_checked", DONE, 1),
        ("count_unchecked", DONE, 3),
        ("percent_checked", DONE, 25.0),
        ("count_value", TAGS, 3),
        ("count_unique_value", TAGS, 2),
        ("earliest", DUE, 100),
        ("latest", DUE, 400),
        ("date_range", DUE, 300),
    ],
)
def test_calculation_functions(name, template, expected):
    assert calculate(name, template, CARDS) == expected


def test_numeric_calculations_on_no_values_return_none():
    assert calculate("sum", EST, []) is None
    assert calculate("earliest", EST, CARDS) is None
    assert calculate("percent_empty", EST, []) == 0.0


def test_calculate_columns_skips_unknown_functions_and_properties():
    board = Board(
        id="b1",
        card_properties=[EST, DONE],
        column_calculations={"est": "sum", "done": "explode", "ghost": "count", "__title": "count"},
    )
    assert calculate_columns(board, CARDS) == {
        "est": 15.0,
        "done": None,
        "ghost": None,
        "__title": 4,
    }
