# File: /boardview/crud/filtering.py | Version: 1.0 | Title: Card filter evaluation (boolean filter trees)
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from boardview.core.config import settings
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
from boardview.schemas.board import Board, PropertyTemplate, PropertyType, find_template
from boardview.schemas.card import Card
from boardview.schemas.filters import (
    FilterClause,
    FilterCondition,
    FilterGroup,
    FilterOperation,
)

log = logging.getLogger(__name__)

C = FilterCondition

_DAY_MS = 24 * 60 * 60 * 1000

_POSITIVE_OPTION_CONDITIONS = {C.is_, C.includes_any, C.includes}
_NEGATIVE_OPTION_CONDITIONS = {C.is_not, C.does_not_include, C.not_includes}


# ----------------------
# Relative date tokens
# ----------------------
def _day_start(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _to_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def _week_start(now: datetime, week_starts_on: int) -> datetime:
    today = _day_start(now)
    return today - timedelta(days=(today.weekday() - week_starts_on) % 7)


def resolve_date_range(
    value: Any, *, now: datetime, week_starts_on: Optional[int] = None
) -> Optional[Tuple[int, int]]:
    """
    Resolve a clause value to a half-open [start, end) range in epoch ms.
    Relative tokens are evaluated against `now`; anything else is a single day.
    """
    if week_starts_on is None:
        week_starts_on = settings.WEEK_STARTS_ON
    token = value.strip().lower().replace(" ", "_") if isinstance(value, str) else None

    if token in ("today", "tomorrow", "yesterday"):
        shift = {"today": 0, "tomorrow": 1, "yesterday": -1}[token]
        start = _day_start(now) + timedelta(days=shift)
        return _to_ms(start), _to_ms(start + timedelta(days=1))
    if token in ("this_week", "last_week", "next_week"):
        shift = {"this_week": 0, "last_week": -7, "next_week": 7}[token]
        start = _week_start(now, week_starts_on) + timedelta(days=shift)
        return _to_ms(start), _to_ms(start + timedelta(days=7))
    if token == "this_month":
        start = _day_start(now).replace(day=1)
        nxt = (start + timedelta(days=32)).replace(day=1)
        return _to_ms(start), _to_ms(nxt)

    ms = as_epoch_ms(value)
    if ms is None:
        return None
    start_ms = ms - (ms % _DAY_MS)
    return start_ms, start_ms + _DAY_MS


# ----------------------
# Per-kind matchers
# ----------------------
def _match_text(value: Any, condition: FilterCondition, values: List[Any]) -> bool:
    if condition == C.is_empty:
        return is_empty_value(value)
    if condition == C.is_not_empty:
        return not is_empty_value(value)
    if not values:
        # incomplete clause: nothing to compare against yet
        return True
    text = as_text(value).lower()
    target = as_text(values[0]).lower()
    if condition == C.contains:
        return target in text
    if condition == C.does_not_contain:
        return target not in text
    if condition == C.starts_with:
        return text.startswith(target)
    if condition == C.ends_with:
        return text.endswith(target)
    if condition == C.is_:
        return text == target
    if condition == C.is_not:
        return text != target
    return False


def _match_options(value: Any, condition: FilterCondition, values: List[Any]) -> bool:
    ids = as_ids(value)
    if condition == C.is_empty:
        return not ids
    if condition == C.is_not_empty:
        return bool(ids)
    if not values:
        return True
    wanted = {str(v) for v in values}
    hit = any(i in wanted for i in ids)
    if condition in _POSITIVE_OPTION_CONDITIONS:
        return hit
    if condition in _NEGATIVE_OPTION_CONDITIONS:
        return not hit
    return False


def _match_date(
    value: Any, condition: FilterCondition, values: List[Any], now: datetime
) -> bool:
    ms = as_epoch_ms(value)
    if condition == C.is_empty:
        return ms is None
    if condition == C.is_not_empty:
        return ms is not None
    if not values:
        return True
    if ms is None:
        return False
    rng = resolve_date_range(values[0], now=now)
    if rng is None:
        return False
    start, end = rng
    if condition == C.is_:
        return start <= ms < end
    if condition == C.is_before:
        return ms < start
    if condition == C.is_after:
        return ms >= end
    return False


def _match_number(value: Any, condition: FilterCondition, values: List[Any]) -> bool:
    if condition == C.is_empty:
        return is_empty_value(value)
    if condition == C.is_not_empty:
        return not is_empty_value(value)
    if not values:
        return True
    num = as_number(value)
    target = as_number(values[0])
    if condition == C.is_not:
        return num != target
    if num is None or target is None:
        return False
    if condition == C.is_:
        return num == target
    if condition == C.greater_than:
        return num > target
    if condition == C.less_than:
        return num < target
    return False


def _match_checkbox(value: Any, condition: FilterCondition, values: List[Any]) -> bool:
    checked = as_bool(value)
    target = as_bool(values[0]) if values else True
    if condition == C.is_:
        return checked == target
    if condition == C.is_not:
        return checked != target
    if condition == C.is_empty:
        return not checked
    if condition == C.is_not_empty:
        return checked
    return False


def _clause_matches(
    card: Card,
    clause: FilterClause,
    templates: Dict[str, PropertyTemplate],
    now: datetime,
) -> bool:
    template = templates.get(clause.property_id) or find_template([], clause.property_id)
    if template is None:
        # dangling property reference fails closed
        return False

    value = raw_value(card, template)
    kind = kind_of(template)
    if kind == ValueKind.text:
        return _match_text(value, clause.condition, clause.values)
    if kind in (ValueKind.select, ValueKind.multi_select, ValueKind.person):
        return _match_options(value, clause.condition, clause.values)
    if kind == ValueKind.date:
        return _match_date(value, clause.condition, clause.values, now)
    if kind == ValueKind.number:
        return _match_number(value, clause.condition, clause.values)
    if kind == ValueKind.checkbox:
        return _match_checkbox(value, clause.condition, clause.values)
    return False


def _group_matches(
    card: Card,
    group: FilterGroup,
    templates: Dict[str, PropertyTemplate],
    now: datetime,
) -> bool:
    if not group.filters:
        return True

    def _eval(child) -> bool:
        if isinstance(child, FilterGroup):
            return _group_matches(card, child, templates, now)
        return _clause_matches(card, child, templates, now)

    if group.operation == FilterOperation.or_:
        return any(_eval(child) for child in group.filters)
    return all(_eval(child) for child in group.filters)


def _template_index(
    templates: Union[Board, Iterable[PropertyTemplate]]
) -> Dict[str, PropertyTemplate]:
    if isinstance(templates, Board):
        templates = templates.card_properties
    return {t.id: t for t in templates}


# ----------------------
# Public API
# ----------------------
def matches(
    card: Card,
    filter_group: Optional[FilterGroup],
    property_templates: Union[Board, Sequence[PropertyTemplate]],
    *,
    now: Optional[datetime] = None,
) -> bool:
    """True if `card` passes `filter_group`. Never raises on bad references."""
    if filter_group is None:
        return True
    return _group_matches(
        card, filter_group, _template_index(property_templates), now or datetime.now(UTC)
    )


def filter_cards(
    cards: Iterable[Card],
    filter_group: Optional[FilterGroup],
    property_templates: Union[Board, Sequence[PropertyTemplate]],
    *,
    now: Optional[datetime] = None,
) -> List[Card]:
    """
    Cards passing `filter_group`, in input order. `property_templates` is the
    board schema (or the Board itself); clauses on ids missing from it fail.
    """
    cards = list(cards)
    if filter_group is None or not filter_group.filters:
        return cards
    # one clock reading per pass so every card sees the same "today"
    now = now or datetime.now(UTC)
    templates = _template_index(property_templates)
    return [c for c in cards if _group_matches(c, filter_group, templates, now)]


# -----------------------------
# Values implied by a filter (new cards)
# -----------------------------
def _property_that_meets_clause(
    clause: FilterClause, templates: Dict[str, PropertyTemplate]
) -> Optional[Any]:
    template = templates.get(clause.property_id)
    if template is None:
        log.warning("Filter references unknown property %s", clause.property_id)
        return None
    if template.type in (
        PropertyType.created_by,
        PropertyType.updated_by,
        PropertyType.created_time,
        PropertyType.updated_time,
    ):
        return None

    kind = kind_of(template)
    cond = clause.condition
    values = clause.values

    if kind in (ValueKind.select, ValueKind.person):
        if cond in _POSITIVE_OPTION_CONDITIONS and values:
            return str(values[0])
        if cond == C.is_not_empty and template.options:
            return template.options[0].id
        return None
    if kind == ValueKind.multi_select:
        if cond in _POSITIVE_OPTION_CONDITIONS and values:
            return [str(v) for v in values]
        if cond == C.is_not_empty and template.options:
            return [template.options[0].id]
        return None
    if kind == ValueKind.text:
        if cond in (C.is_, C.contains, C.starts_with, C.ends_with) and values:
            return as_text(values[0])
        return None
    if kind == ValueKind.checkbox:
        if cond == C.is_:
            return as_bool(values[0]) if values else True
        if cond == C.is_not:
            return not (as_bool(values[0]) if values else True)
        return None
    if kind == ValueKind.number:
        if cond == C.is_ and values:
            return values[0]
        return None
    return None


def properties_that_meet_filter_group(
    filter_group: Optional[FilterGroup], property_templates: Sequence[PropertyTemplate]
) -> Dict[str, Any]:
    """
    Property values a new card needs to satisfy the filter's top-level clauses.
    Nested groups are not considered.
    """
    if filter_group is None:
        return {}
    clauses = [f for f in filter_group.filters if isinstance(f, FilterClause)]
    if not clauses:
        return {}

    templates = _template_index(property_templates)
    if filter_group.operation == FilterOperation.or_:
        # meeting the first clause is enough
        clauses = clauses[:1]

    result: Dict[str, Any] = {}
    for clause in clauses:
        value = _property_that_meets_clause(clause, templates)
        if value is not None:
            result[clause.property_id] = value
    return result
