# File: /boardview/crud/calculations.py | Version: 1.0 | Title: Column calculations (board.column_calculations)
from __future__ import annotations

import logging
import statistics
from typing import Any, Callable, Dict, List, Optional, Sequence

from boardview.crud.property_values import (
    ValueKind,
    as_bool,
    as_epoch_ms,
    as_ids,
    as_number,
    as_text,
    is_empty_value,
    kind_of,
    raw_value,
)
from boardview.schemas.board import Board, PropertyTemplate, find_template
from boardview.schemas.card import Card

log = logging.getLogger(__name__)


def _values(template: PropertyTemplate, cards: Sequence[Card]) -> List[Any]:
    return [raw_value(c, template) for c in cards]


def _numbers(template: PropertyTemplate, cards: Sequence[Card]) -> List[float]:
    if kind_of(template) == ValueKind.date:
        nums = [as_epoch_ms(v) for v in _values(template, cards)]
    else:
        nums = [as_number(v) for v in _values(template, cards)]
    return [n for n in nums if n is not None]


def _percent(part: int, total: int) -> float:
    return round(part * 100.0 / total, 2) if total else 0.0


def _count_empty(t, cards):
    return sum(1 for v in _values(t, cards) if is_empty_value(v))


def _count_not_empty(t, cards):
    return len(cards) - _count_empty(t, cards)


def _unique_values(t, cards) -> set:
    if kind_of(t) in (ValueKind.select, ValueKind.multi_select, ValueKind.person):
        return {i for v in _values(t, cards) for i in as_ids(v)}
    return {as_text(v) for v in _values(t, cards) if not is_empty_value(v)}


def _count_value(t, cards):
    # multi-valued properties count each value
    if kind_of(t) in (ValueKind.multi_select, ValueKind.person):
        return sum(len(as_ids(v)) for v in _values(t, cards))
    return _count_not_empty(t, cards)


def _count_checked(t, cards):
    return sum(1 for v in _values(t, cards) if as_bool(v))


def _numeric(fn: Callable[[List[float]], Any]) -> Callable:
    def calc(t, cards):
        nums = _numbers(t, cards)
        return fn(nums) if nums else None

    return calc


def _date_only(fn: Callable[[List[float]], Any]) -> Callable:
    def calc(t, cards):
        if kind_of(t) != ValueKind.date:
            return None
        nums = _numbers(t, cards)
        return fn(nums) if nums else None

    return calc


CALCULATIONS: Dict[str, Callable[[PropertyTemplate, Sequence[Card]], Any]] = {
    "count": lambda t, cards: len(cards),
    "count_empty": _count_empty,
    "count_not_empty": _count_not_empty,
    "percent_empty": lambda t, cards: _percent(_count_empty(t, cards), len(cards)),
    "percent_not_empty": lambda t, cards: _percent(_count_not_empty(t, cards), len(cards)),
    "count_value": _count_value,
    "count_unique_value": lambda t, cards: len(_unique_values(t, cards)),
    "count_checked": _count_checked,
    "count_unchecked": lambda t, cards: len(cards) - _count_checked(t, cards),
    "percent_checked": lambda t, cards: _percent(_count_checked(t, cards), len(cards)),
    "sum": _numeric(sum),
    "average": _numeric(lambda n: sum(n) / len(n)),
    "median": _numeric(statistics.median),
    "min": _numeric(min),
    "max": _numeric(max),
    "range": _numeric(lambda n: max(n) - min(n)),
    "earliest": _date_only(min),
    "latest": _date_only(max),
    "date_range": _date_only(lambda n: max(n) - min(n)),
}


def calculate(
    function_name: str, property_template: Optional[PropertyTemplate], cards: Sequence[Card]
) -> Any:
    fn = CALCULATIONS.get(function_name)
    if fn is None or property_template is None:
        return None
    return fn(property_template, list(cards))


def calculate_columns(board: Board, cards: Sequence[Card]) -> Dict[str, Any]:
    results: Dict[str, Any] = {}
    for property_id, function_name in (board.column_calculations or {}).items():
        template = find_template(board.card_properties, property_id)
        if template is None or function_name not in CALCULATIONS:
            log.debug("Skipping calculation %s on %s", function_name, property_id)
            results[property_id] = None
            continue
        results[property_id] = calculate(function_name, template, cards)
    return results
