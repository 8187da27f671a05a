# File: /boardview/routers/views.py | Version: 1.0 | Title: Board Views Router (CRUD + projection + card add/delete + undo)
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from boardview.core.config import settings
from boardview.core.exceptions import MissingContextError, PersistenceError
from boardview.crud import board as crud_board
from boardview.crud import card as crud_card
from boardview.crud import pages as crud_pages
from boardview.crud.mutator import UndoRegistry
from boardview.crud.projection import (
    CardIndex,
    add_card,
    delete_cards,
    project_view,
    resolve_active_board_id,
)
from boardview.crud.view import (
    create_view,
    delete_view as crud_delete_view,
    get_view,
    list_views as crud_list_views,
    update_view as crud_update_view,
)
from boardview.db.session import get_db
from boardview.schemas.board import Board
from boardview.schemas.card import (
    AddCardRequest,
    AddCardResult,
    Card,
    DeleteCardsRequest,
    DeleteCardsResult,
    Member,
    Page,
    ViewProjection,
)
from boardview.schemas.view import BoardView, BoardViewCreate, BoardViewUpdate

log = logging.getLogger(__name__)

router = APIRouter(prefix="/views", tags=["Views"])

Snapshot = Tuple[Board, BoardView, CardIndex, Dict[str, Page], List[Member], Dict[str, Board]]


# ----------------------------
# Helpers
# ----------------------------
def get_undo_registry(request: Request) -> UndoRegistry:
    return request.app.state.undo_registry


def _get_view_or_404(db: Session, view_id: str):
    v = get_view(db, view_id)
    if not v:
        raise HTTPException(status_code=404, detail="View not found")
    return v


def _load_snapshot(db: Session, view_id: str) -> Snapshot:
    """Latest Board/View/Card state for one view, read fresh on every request."""
    view_row = _get_view_or_404(db, view_id)
    board_row = crud_board.get_board(db, view_row.board_id)
    if not board_row:
        raise HTTPException(status_code=404, detail="Board not found")

    board = Board.model_validate(board_row)
    view = BoardView.model_validate(view_row)
    boards = {board.id: board}

    active_id = resolve_active_board_id(board, view)
    if active_id and active_id not in boards:
        linked = crud_board.get_board(db, active_id)
        if linked is not None:
            boards[linked.id] = Board.model_validate(linked)

    cards = [Card.model_validate(c) for c in crud_card.get_cards_by_board(db, [active_id])]
    pages = crud_pages.get_pages_map(db, [c.id for c in cards])
    members = [Member.model_validate(m) for m in crud_pages.list_members(db)]
    return board, view, CardIndex(cards), pages, members, boards


# ----------------------------
# CRUD endpoints
# ----------------------------
@router.get("", response_model=List[BoardView], summary="List views (optionally by board)")
def list_views(
    board_id: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    return crud_list_views(db, board_id=board_id)


@router.post("", response_model=BoardView, summary="Create a view on a board")
def create_view_endpoint(data: BoardViewCreate, db: Session = Depends(get_db)):
    if not crud_board.get_board(db, data.board_id):
        raise HTTPException(status_code=404, detail="Board not found")
    return create_view(db, data=data)


@router.get("/{view_id}", response_model=BoardView, summary="Get a view")
def get_view_endpoint(view_id: str, db: Session = Depends(get_db)):
    return _get_view_or_404(db, view_id)


@router.patch("/{view_id}", response_model=BoardView, summary="Update a view")
def update_view_endpoint(view_id: str, data: BoardViewUpdate, db: Session = Depends(get_db)):
    v = _get_view_or_404(db, view_id)
    return crud_update_view(db, v, data)


@router.delete("/{view_id}", summary="Delete a view")
def delete_view_endpoint(
    view_id: str,
    db: Session = Depends(get_db),
    undo: UndoRegistry = Depends(get_undo_registry),
):
    v = _get_view_or_404(db, view_id)
    crud_delete_view(db, v)
    undo.discard(view_id)
    return {"detail": "View deleted"}


# ----------------------------
# PROJECTION: /views/{id}/cards
# ----------------------------
@router.get(
    "/{view_id}/cards",
    response_model=ViewProjection,
    summary="Filtered, sorted and grouped cards for a view",
)
def project_view_endpoint(view_id: str, db: Session = Depends(get_db)):
    board, view, index, pages, members, boards = _load_snapshot(db, view_id)
    return project_view(board, view, index, pages, members, boards=boards)


@router.post("/{view_id}/cards", response_model=AddCardResult, summary="Add a card through a view")
def add_card_endpoint(
    view_id: str,
    data: AddCardRequest,
    db: Session = Depends(get_db),
    undo: UndoRegistry = Depends(get_undo_registry),
):
    board, view, _, _, _, boards = _load_snapshot(db, view_id)
    insert_last = settings.DEFAULT_INSERT_LAST if data.insert_last is None else data.insert_last
    try:
        return add_card(
            crud_card.SqlBlockStore(db),
            board,
            view,
            group_by_option_id=data.group_by_option_id,
            show=data.show,
            properties=data.properties,
            insert_last=insert_last,
            is_template=data.is_template,
            title=data.title,
            created_by=data.created_by,
            boards=boards,
            undo_manager=undo.for_view(view.id),
        )
    except MissingContextError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post(
    "/{view_id}/cards:delete",
    response_model=DeleteCardsResult,
    summary="Delete selected cards (one undo group)",
)
def delete_cards_endpoint(
    view_id: str,
    data: DeleteCardsRequest,
    db: Session = Depends(get_db),
    undo: UndoRegistry = Depends(get_undo_registry),
):
    _, view, index, _, _, _ = _load_snapshot(db, view_id)
    return delete_cards(
        crud_card.SqlBlockStore(db), data.card_ids, index, undo_manager=undo.for_view(view.id)
    )


@router.post("/{view_id}/undo", summary="Undo the last card mutation made through this view")
def undo_endpoint(
    view_id: str,
    db: Session = Depends(get_db),
    undo: UndoRegistry = Depends(get_undo_registry),
):
    _get_view_or_404(db, view_id)
    try:
        group = undo.for_view(view_id).undo(crud_card.SqlBlockStore(db))
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"detail": "Nothing to undo" if group is None else f"Undid {group.description}"}


@router.post("/{view_id}/redo", summary="Redo the last undone card mutation")
def redo_endpoint(
    view_id: str,
    db: Session = Depends(get_db),
    undo: UndoRegistry = Depends(get_undo_registry),
):
    _get_view_or_404(db, view_id)
    try:
        group = undo.for_view(view_id).redo(crud_card.SqlBlockStore(db))
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"detail": "Nothing to redo" if group is None else f"Redid {group.description}"}
