# File: /boardview/crud/sorting.py | Version: 1.0 | Title: Card ordering (view sort options + manual card order)
from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from boardview.crud.property_values import (
    ValueKind,
    as_bool,
    as_epoch_ms,
    as_ids,
    as_number,
    as_text,
    kind_of,
    raw_value,
)
from boardview.schemas.board import Board, PropertyTemplate, find_template
from boardview.schemas.card import Card, CardPage, Member
from boardview.schemas.view import BoardView

log = logging.getLogger(__name__)

# A sort key extractor returns (is_missing, comparable)
KeyFn = Callable[[Card], tuple]


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _member_names(members: Optional[Iterable[Member]]) -> Dict[str, str]:
    return {m.id: m.username for m in (members or [])}


def _key_for(template: PropertyTemplate, names: Dict[str, str]) -> KeyFn:
    kind = kind_of(template)

    if kind == ValueKind.number:
        # missing / non-numeric sorts as the lowest value
        def number_key(card: Card) -> tuple:
            num = as_number(raw_value(card, template))
            return (False, (0, 0.0) if num is None else (1, num))

        return number_key

    if kind == ValueKind.date:
        def date_key(card: Card) -> tuple:
            ms = as_epoch_ms(raw_value(card, template))
            return (ms is None, ms or 0)

        return date_key

    if kind in (ValueKind.select, ValueKind.multi_select):
        def option_key(card: Card) -> tuple:
            ids = as_ids(raw_value(card, template))
            return (False, template.option_index(ids[0]) if ids else -1)

        return option_key

    if kind == ValueKind.person:
        def person_key(card: Card) -> tuple:
            ids = as_ids(raw_value(card, template))
            return (False, ", ".join(names.get(i, i) for i in ids).lower())

        return person_key

    if kind == ValueKind.checkbox:
        def checkbox_key(card: Card) -> tuple:
            return (False, as_bool(raw_value(card, template)))

        return checkbox_key

    def text_key(card: Card) -> tuple:
        return (False, as_text(raw_value(card, template)).lower())

    return text_key


def _build_comparator(keys: List[tuple]) -> Callable[[CardPage, CardPage], int]:
    def compare(a: CardPage, b: CardPage) -> int:
        for key_fn, reversed_ in keys:
            a_missing, a_val = key_fn(a.card)
            b_missing, b_val = key_fn(b.card)
            # missing dates stay last in both directions
            if a_missing or b_missing:
                result = _cmp(a_missing, b_missing)
                if result:
                    return result
                continue
            result = _cmp(a_val, b_val)
            if result:
                return -result if reversed_ else result
        return 0

    return compare


def order_by_card_order(
    card_pages: Sequence[CardPage], card_order: Sequence[str]
) -> List[CardPage]:
    """Manual order: position in `card_order`, unknown cards appended in input order."""
    position = {}
    for idx, card_id in enumerate(card_order or []):
        position.setdefault(card_id, idx)
    tail = len(position)
    return sorted(card_pages, key=lambda cp: position.get(cp.card.id, tail))


def sort_cards(
    card_pages: Iterable[CardPage],
    board: Board,
    view: BoardView,
    members: Optional[Iterable[Member]] = None,
) -> List[CardPage]:
    card_pages = list(card_pages)
    if not view.sort_options:
        return order_by_card_order(card_pages, view.card_order)

    names = _member_names(members)
    keys = []
    for option in view.sort_options:
        template = find_template(board.card_properties, option.property_id)
        if template is None:
            log.debug("Skipping sort on unknown property %s", option.property_id)
            continue
        keys.append((_key_for(template, names), option.reversed))

    if not keys:
        return order_by_card_order(card_pages, view.card_order)

    # list.sort is stable; ties keep their input order
    return sorted(card_pages, key=cmp_to_key(_build_comparator(keys)))
