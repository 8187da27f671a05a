# File: /boardview/routers/boards.py | Version: 1.0 | Title: Boards Router (CRUD + property schema editing)
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from boardview.crud import board as crud_board
from boardview.db.session import get_db
from boardview.schemas import board as schema

router = APIRouter(prefix="/boards", tags=["Boards"])


def _get_board_or_404(db: Session, board_id: str):
    board = crud_board.get_board(db, board_id)
    if not board:
        raise HTTPException(status_code=404, detail="Board not found")
    return board


@router.post("", response_model=schema.Board, summary="Create a board")
def create_board_endpoint(data: schema.BoardCreate, db: Session = Depends(get_db)):
    return crud_board.create_board(db, data)


@router.get("", response_model=List[schema.Board], summary="List boards")
def list_boards_endpoint(db: Session = Depends(get_db)):
    return crud_board.list_boards(db)


@router.get("/{board_id}", response_model=schema.Board)
def get_board_endpoint(board_id: str, db: Session = Depends(get_db)):
    return _get_board_or_404(db, board_id)


@router.patch("/{board_id}", response_model=schema.Board)
def update_board_endpoint(
    board_id: str, data: schema.BoardUpdate, db: Session = Depends(get_db)
):
    board = _get_board_or_404(db, board_id)
    return crud_board.update_board(db, board, data)


@router.delete("/{board_id}", summary="Delete a board and its cards")
def delete_board_endpoint(board_id: str, db: Session = Depends(get_db)):
    board = _get_board_or_404(db, board_id)
    crud_board.delete_board(db, board)
    return {"detail": "Board deleted"}


# ----------------------------
# Property schema
# ----------------------------
@router.post("/{board_id}/properties", response_model=schema.Board)
def add_property_endpoint(
    board_id: str,
    template: schema.PropertyTemplate,
    index: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    board = _get_board_or_404(db, board_id)
    try:
        return crud_board.add_property(db, board, template, index=index)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{board_id}/properties/{property_id}", response_model=schema.Board)
def remove_property_endpoint(board_id: str, property_id: str, db: Session = Depends(get_db)):
    board = _get_board_or_404(db, board_id)
    if not crud_board.remove_property(db, board, property_id):
        raise HTTPException(status_code=404, detail="Property not found")
    return board


@router.post("/{board_id}/properties:reorder", response_model=schema.Board)
def reorder_properties_endpoint(
    board_id: str, data: schema.PropertyReorder, db: Session = Depends(get_db)
):
    board = _get_board_or_404(db, board_id)
    return crud_board.reorder_properties(db, board, data.property_ids)


@router.post(
    "/{board_id}/properties/{property_id}/options",
    response_model=schema.PropertyTemplate,
)
def add_option_endpoint(
    board_id: str,
    property_id: str,
    option: schema.PropertyOption,
    db: Session = Depends(get_db),
):
    board = _get_board_or_404(db, board_id)
    try:
        template = crud_board.add_property_option(db, board, property_id, option)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if template is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return template


@router.delete("/{board_id}/properties/{property_id}/options/{option_id}")
def remove_option_endpoint(
    board_id: str, property_id: str, option_id: str, db: Session = Depends(get_db)
):
    board = _get_board_or_404(db, board_id)
    if not crud_board.remove_property_option(db, board, property_id, option_id):
        raise HTTPException(status_code=404, detail="Option not found")
    return {"detail": "Option removed"}
