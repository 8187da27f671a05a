# File: /boardview/crud/grouping.py | Version: 1.0 | Title: Board columns (visible/hidden option groups)
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from boardview.crud.property_values import as_ids, raw_value
from boardview.schemas.board import PropertyOption, PropertyTemplate
from boardview.schemas.card import BoardGroup, CardPage

EMPTY_GROUP_ID = ""


def _dedupe(ids: Iterable[str], exclude: Optional[set] = None) -> List[str]:
    seen = set(exclude or ())
    out: List[str] = []
    for i in ids or []:
        if i is None or i in seen:
            continue
        seen.add(i)
        out.append(i)
    return out


def group_option_id(card_page: CardPage, group_by_property: Optional[PropertyTemplate]) -> str:
    """
    Option id a card is grouped under. Missing, empty and orphaned values
    map to the empty group. multiSelect cards use their first known option.
    """
    if group_by_property is None:
        return EMPTY_GROUP_ID
    for option_id in as_ids(raw_value(card_page.card, group_by_property)):
        if group_by_property.find_option(option_id) is not None:
            return option_id
    return EMPTY_GROUP_ID


def empty_group_option(group_by_property: Optional[PropertyTemplate]) -> PropertyOption:
    name = group_by_property.name if group_by_property else ""
    return PropertyOption(id=EMPTY_GROUP_ID, value=f"No {name}".rstrip(), color="")


def group_cards_by_options(
    card_pages: Sequence[CardPage],
    option_ids: Sequence[str],
    group_by_property: Optional[PropertyTemplate],
) -> List[BoardGroup]:
    buckets: Dict[str, List[CardPage]] = {}
    for cp in card_pages:
        buckets.setdefault(group_option_id(cp, group_by_property), []).append(cp)

    groups: List[BoardGroup] = []
    for option_id in option_ids:
        if option_id:
            option = group_by_property.find_option(option_id) if group_by_property else None
            if option is None:
                # option deleted since the view was saved
                continue
        else:
            option = empty_group_option(group_by_property)
        members = buckets.get(option_id, [])
        groups.append(
            BoardGroup(
                option=option,
                card_pages=list(members),
                cards=[cp.card for cp in members],
            )
        )
    return groups


def get_visible_and_hidden_groups(
    card_pages: Sequence[CardPage],
    visible_option_ids: Sequence[str],
    hidden_option_ids: Sequence[str],
    group_by_property: Optional[PropertyTemplate],
) -> Dict[str, List[BoardGroup]]:
    if group_by_property is None:
        return {"visible": [], "hidden": []}

    visible = _dedupe(visible_option_ids)
    # an id listed in both stays visible
    hidden = _dedupe(hidden_option_ids, exclude=set(visible))

    classified = set(visible) | set(hidden)
    unassigned = [o.id for o in group_by_property.options if o.id not in classified]
    all_visible = visible + unassigned

    # If the empty group position is not explicitly specified, make it the first visible column
    if EMPTY_GROUP_ID not in all_visible and EMPTY_GROUP_ID not in hidden:
        all_visible.insert(0, EMPTY_GROUP_ID)

    return {
        "visible": group_cards_by_options(card_pages, all_visible, group_by_property),
        "hidden": group_cards_by_options(card_pages, hidden, group_by_property),
    }


# Short name used by the HTTP layer and callers outside the engine
group_cards = get_visible_and_hidden_groups
