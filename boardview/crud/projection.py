# File: /boardview/crud/projection.py | Version: 1.0 | Title: View projection (filter -> sort -> group) + card add/delete
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union
from uuid import uuid4

from boardview.core.exceptions import MissingContextError
from boardview.crud.calculations import calculate_columns
from boardview.crud.filtering import filter_cards, properties_that_meet_filter_group
from boardview.crud.grouping import get_visible_and_hidden_groups
from boardview.crud.mutator import BlockStore, UndoAction, UndoGroup, UndoManager
from boardview.crud.sorting import sort_cards
from boardview.schemas.board import (
    SELECT_LIKE_TYPES,
    Board,
    PropertyTemplate,
    PropertyType,
)
from boardview.schemas.card import (
    AddCardResult,
    Card,
    CardPage,
    DeleteCardsResult,
    Member,
    Page,
    ViewProjection,
)
from boardview.schemas.view import BoardView

log = logging.getLogger(__name__)

GOOGLE_FORM_SOURCE = "google_form"


class CardIndex:
    """Cards bucketed by parent board id, built once per snapshot."""

    def __init__(self, cards: Iterable[Card] = ()):
        self._by_board: Dict[str, List[Card]] = {}
        self._by_id: Dict[str, Card] = {}
        for card in cards:
            self.add(card)

    def add(self, card: Card) -> None:
        if card.id in self._by_id:
            self.remove(card.id)
        self._by_id[card.id] = card
        self._by_board.setdefault(card.parent_id, []).append(card)

    def remove(self, card_id: str) -> Optional[Card]:
        card = self._by_id.pop(card_id, None)
        if card is not None:
            bucket = self._by_board.get(card.parent_id, [])
            self._by_board[card.parent_id] = [c for c in bucket if c.id != card_id]
        return card

    def get(self, card_id: str) -> Optional[Card]:
        return self._by_id.get(card_id)

    def for_board(self, board_id: Optional[str]) -> List[Card]:
        if not board_id:
            return []
        return list(self._by_board.get(board_id, []))

    def __len__(self) -> int:
        return len(self._by_id)


# ----------------------------
# Resolution helpers
# ----------------------------
def resolve_active_board_id(board: Board, view: Optional[BoardView]) -> Optional[str]:
    """Linked views show another board's cards; google_form views name theirs in source_data."""
    if view is not None:
        if view.linked_source_id:
            return view.linked_source_id
        if view.source_type == GOOGLE_FORM_SOURCE:
            return (view.source_data or {}).get("board_id")
    return board.id


def _resolve_active_board(
    board: Board, view: Optional[BoardView], boards: Optional[Mapping[str, Board]]
) -> Optional[Board]:
    active_id = resolve_active_board_id(board, view)
    if active_id == board.id:
        return board
    return (boards or {}).get(active_id) if active_id else None


def _first_of_type(board: Board, type_: PropertyType) -> Optional[PropertyTemplate]:
    for template in board.card_properties:
        if template.type == type_:
            return template
    return None


def resolve_group_by_property(board: Board, view: BoardView) -> Optional[PropertyTemplate]:
    explicit = None
    if view.group_by_id:
        explicit = next((t for t in board.card_properties if t.id == view.group_by_id), None)
    if explicit is not None and explicit.type in SELECT_LIKE_TYPES:
        return explicit
    if view.view_type == "board":
        return _first_of_type(board, PropertyType.select)
    return None


def resolve_date_display_property(board: Board, view: BoardView) -> Optional[PropertyTemplate]:
    if view.date_display_property_id:
        for template in board.card_properties:
            if template.id == view.date_display_property_id:
                return template
    if view.view_type == "calendar":
        return _first_of_type(board, PropertyType.date)
    return None


def join_pages(cards: Iterable[Card], pages: Mapping[str, Page]) -> List[CardPage]:
    """Drop cards whose page is missing or soft-deleted."""
    out: List[CardPage] = []
    for card in cards:
        page = pages.get(card.id)
        if page is None or page.deleted_at is not None:
            continue
        out.append(CardPage(card=card, page=page))
    return out


# ----------------------------
# Projection
# ----------------------------
def project_view(
    board: Board,
    view: BoardView,
    cards: Union[CardIndex, Iterable[Card]],
    pages: Mapping[str, Page],
    members: Optional[Iterable[Member]] = None,
    *,
    boards: Optional[Mapping[str, Board]] = None,
    now: Optional[datetime] = None,
) -> ViewProjection:
    active_board_id = resolve_active_board_id(board, view)
    active_board = _resolve_active_board(board, view, boards)
    if active_board is None:
        log.warning("View %s points at unknown board %s", view.id, active_board_id)
        return ViewProjection(active_board_id=active_board_id)

    index = cards if isinstance(cards, CardIndex) else CardIndex(cards)
    board_cards = index.for_board(active_board.id)
    templates = [c for c in board_cards if c.is_template]
    display = [c for c in board_cards if not c.is_template]

    filtered = filter_cards(display, view.filter, active_board.card_properties, now=now)
    card_pages = sort_cards(join_pages(filtered, pages), active_board, view, members)

    group_by_property = resolve_group_by_property(active_board, view)
    groups = get_visible_and_hidden_groups(
        card_pages, view.visible_option_ids, view.hidden_option_ids, group_by_property
    )

    return ViewProjection(
        active_board_id=active_board.id,
        card_pages=card_pages,
        templates=templates,
        group_by_property=group_by_property,
        date_display_property=resolve_date_display_property(active_board, view),
        visible_groups=groups["visible"],
        hidden_groups=groups["hidden"],
        calculations=calculate_columns(active_board, [cp.card for cp in card_pages]),
    )


# ----------------------------
# Mutations
# ----------------------------
def add_card(
    store: BlockStore,
    board: Optional[Board],
    view: Optional[BoardView],
    *,
    group_by_option_id: Optional[str] = None,
    show: bool = False,
    properties: Optional[Dict] = None,
    insert_last: bool = True,
    is_template: bool = False,
    title: str = "",
    created_by: Optional[str] = None,
    group_by_property: Optional[PropertyTemplate] = None,
    boards: Optional[Mapping[str, Board]] = None,
    undo_manager: Optional[UndoManager] = None,
) -> AddCardResult:
    """
    Create a card that is visible under the view's current filter.
    The view's card order is written before the card itself.
    """
    if board is None:
        raise MissingContextError("No active board")
    if view is None:
        raise MissingContextError("No active view")
    active_board = _resolve_active_board(board, view, boards)
    if active_board is None:
        raise MissingContextError("No active board")

    if group_by_property is None:
        group_by_property = resolve_group_by_property(active_board, view)

    implied = properties_that_meet_filter_group(view.filter, active_board.card_properties)
    # no option id: the filter-implied group value is kept
    if (
        view.view_type in ("board", "table")
        and group_by_property is not None
        and group_by_option_id
    ):
        if group_by_property.type == PropertyType.multi_select:
            implied[group_by_property.id] = [group_by_option_id]
        else:
            implied[group_by_property.id] = group_by_option_id

    now = datetime.now(UTC)
    card = Card(
        id=str(uuid4()),
        parent_id=active_board.id,
        root_id=active_board.root_id,
        title=title,
        properties={**implied, **(properties or {})},
        content_order=[],
        is_template=is_template,
        created_by=created_by,
        updated_by=created_by,
        created_at=now,
        updated_at=now,
    )

    old_order = list(view.card_order)
    new_order = old_order + [card.id] if insert_last else [card.id] + old_order

    group = UndoGroup(
        "add card",
        [
            UndoAction(
                "change view card order",
                do=lambda s: s.change_view_card_order(view, new_order),
                undo=lambda s: s.change_view_card_order(view, old_order),
            ),
            UndoAction(
                "insert card",
                do=lambda s: s.insert_block(card),
                undo=lambda s: s.delete_block(card.id),
            ),
            UndoAction("refresh page", do=lambda s: s.refresh_page(card.id)),
        ],
    )
    if undo_manager is not None:
        undo_manager.perform(group, store)
    else:
        group.execute(store)

    log.info(
        "Added card %s to board %s (view %s)",
        card.id,
        active_board.id,
        view.id,
        extra={"board_id": active_board.id, "view_id": view.id, "card_id": card.id},
    )
    return AddCardResult(card=card, card_order=new_order, show=show)


def _delete_action(card: Card, missing: List[str]) -> UndoAction:
    gone = False

    def do(s: BlockStore) -> None:
        nonlocal gone
        if not s.delete_block(card.id):
            log.warning("Assertion failed: card already deleted: %s", card.id)
            gone = True
            missing.append(card.id)

    def undo(s: BlockStore) -> None:
        if gone:
            return
        s.insert_block(card)
        s.refresh_page(card.id)

    return UndoAction(f"delete card {card.id}", do=do, undo=undo)


def delete_cards(
    store: BlockStore,
    card_ids: Sequence[str],
    cards: Union[CardIndex, Iterable[Card]],
    *,
    undo_manager: Optional[UndoManager] = None,
) -> DeleteCardsResult:
    """Delete the selected cards as one undo group; one failure never stops the rest."""
    selected = list(dict.fromkeys(card_ids or []))
    if not selected:
        return DeleteCardsResult()

    index = cards if isinstance(cards, CardIndex) else CardIndex(cards)
    missing: List[str] = []
    action_ids: Dict[int, str] = {}
    group = UndoGroup(
        f"delete {len(selected)} cards" if len(selected) > 1 else "delete card",
        isolate_failures=True,
    )
    for card_id in selected:
        card = index.get(card_id)
        if card is None:
            log.warning("Assertion failed: selected card not found: %s", card_id)
            missing.append(card_id)
            continue
        action = _delete_action(card, missing)
        action_ids[id(action)] = card_id
        group.add(action)

    if group.actions:
        if undo_manager is not None:
            undo_manager.perform(group, store)
        else:
            group.execute(store)

    failed = [action_ids[id(a)] for a in group.failed]
    deleted = [
        action_ids[id(a)] for a in group.applied if action_ids[id(a)] not in missing
    ]
    return DeleteCardsResult(deleted=deleted, missing=missing, failed=failed)
