# File: /boardview/crud/view.py | Version: 1.0 | Title: CRUD helpers for Board Views
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from boardview.models.board import Board, BoardView
from boardview.schemas.view import BoardViewCreate, BoardViewUpdate

# JSON-backed fields that hold pydantic models
_JSON_FIELDS = ("filter", "sort_options")


def create_view(db: Session, data: BoardViewCreate) -> BoardView:
    payload = data.model_dump(mode="json")
    v = BoardView(**payload)
    db.add(v)
    db.flush()

    board = db.query(Board).filter(Board.id == data.board_id).first()
    if board is not None:
        board.view_ids = [*(board.view_ids or []), v.id]
    db.commit()
    db.refresh(v)
    return v


def get_view(db: Session, view_id: str) -> Optional[BoardView]:
    return db.query(BoardView).filter(BoardView.id == view_id).first()


def list_views(db: Session, board_id: Optional[str] = None) -> List[BoardView]:
    q = db.query(BoardView)
    if board_id:
        q = q.filter(BoardView.board_id == board_id)
    return q.order_by(BoardView.created_at.asc()).all()


def update_view(db: Session, v: BoardView, data: BoardViewUpdate) -> BoardView:
    patch = data.model_dump(mode="json", exclude_unset=True)
    for field, value in patch.items():
        if value is None and field in _JSON_FIELDS:
            continue
        setattr(v, field, value)
    db.commit()
    db.refresh(v)
    return v


def delete_view(db: Session, v: BoardView) -> bool:
    board = db.query(Board).filter(Board.id == v.board_id).first()
    if board is not None:
        board.view_ids = [i for i in (board.view_ids or []) if i != v.id]
    db.delete(v)
    db.commit()
    return True
