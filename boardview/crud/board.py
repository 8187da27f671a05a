# File: /boardview/crud/board.py | Version: 1.0 | Title: Board CRUD + property schema editing
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import or_
from sqlalchemy.orm import Session

from boardview.models import board as models
from boardview.schemas import board as schema

log = logging.getLogger(__name__)

_DEFAULT_STATUS_OPTIONS = [
    ("Completed", "propColorTeal"),
    ("In progress", "propColorYellow"),
    ("Not started", "propColorRed"),
]


def _default_status_property() -> Dict[str, Any]:
    return {
        "id": str(uuid4()),
        "name": "Status",
        "type": schema.PropertyType.select.value,
        "options": [
            {"id": str(uuid4()), "value": value, "color": color}
            for value, color in _DEFAULT_STATUS_OPTIONS
        ],
    }


def _templates(board: models.Board) -> List[schema.PropertyTemplate]:
    return [schema.PropertyTemplate.model_validate(p) for p in (board.card_properties or [])]


def _store_templates(board: models.Board, templates: List[schema.PropertyTemplate]) -> None:
    # JSON columns are only persisted when reassigned
    board.card_properties = [t.model_dump(mode="json", exclude_none=True) for t in templates]


def _board_views(db: Session, board_id: str) -> List[models.BoardView]:
    return (
        db.query(models.BoardView)
        .filter(
            or_(
                models.BoardView.board_id == board_id,
                models.BoardView.linked_source_id == board_id,
            )
        )
        .all()
    )


def _strip_filter(node: Optional[Dict[str, Any]], property_id: str) -> Optional[Dict[str, Any]]:
    if not node:
        return node
    kept = []
    for child in node.get("filters", []):
        if "filters" in child:
            kept.append(_strip_filter(child, property_id))
        elif child.get("property_id") != property_id:
            kept.append(child)
    return {**node, "filters": kept}


# ---------------------------
# Board CRUD
# ---------------------------


def create_board(db: Session, data: schema.BoardCreate) -> models.Board:
    """
    Create a board. With add_default_property and no select property,
    a "Status" select (Completed / In progress / Not started) is added.
    """
    props = [t.model_dump(mode="json", exclude_none=True) for t in data.card_properties]
    if data.add_default_property and not any(
        p["type"] == schema.PropertyType.select.value for p in props
    ):
        props.append(_default_status_property())

    board_id = str(uuid4())
    try:
        obj = models.Board(
            id=board_id,
            root_id=data.root_id or board_id,
            title=data.title,
            card_properties=props,
            column_calculations=dict(data.column_calculations),
            view_ids=[],
        )
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj
    except Exception:
        db.rollback()
        raise


def get_board(db: Session, board_id: str) -> Optional[models.Board]:
    return db.query(models.Board).filter_by(id=str(board_id)).first()


def list_boards(db: Session) -> List[models.Board]:
    return db.query(models.Board).order_by(models.Board.created_at.asc()).all()


def update_board(db: Session, board: models.Board, data: schema.BoardUpdate) -> models.Board:
    patch = data.model_dump(exclude_unset=True)
    if patch.get("title") is not None:
        board.title = patch["title"]
    if patch.get("column_calculations") is not None:
        board.column_calculations = dict(patch["column_calculations"])
    db.commit()
    db.refresh(board)
    return board


def delete_board(db: Session, board: models.Board) -> bool:
    db.query(models.Card).filter(models.Card.parent_id == board.id).delete()
    db.delete(board)
    db.commit()
    return True


# ---------------------------
# Property schema editing
# ---------------------------


def add_property(
    db: Session,
    board: models.Board,
    template: schema.PropertyTemplate,
    index: Optional[int] = None,
) -> models.Board:
    templates = _templates(board)
    if any(t.id == template.id for t in templates):
        raise ValueError(f"Property {template.id} already exists on board {board.id}")
    if index is None or index >= len(templates):
        templates.append(template)
    else:
        templates.insert(max(index, 0), template)
    _store_templates(board, templates)
    db.commit()
    db.refresh(board)
    return board


def remove_property(db: Session, board: models.Board, property_id: str) -> bool:
    """
    Remove a property and clear every trace of it: card values, the column
    calculation, and view group/sort/date/filter references.
    """
    templates = _templates(board)
    remaining = [t for t in templates if t.id != property_id]
    if len(remaining) == len(templates):
        return False

    _store_templates(board, remaining)
    calcs = dict(board.column_calculations or {})
    calcs.pop(property_id, None)
    board.column_calculations = calcs

    cleared = 0
    for card in db.query(models.Card).filter(models.Card.parent_id == board.id).all():
        if property_id in (card.properties or {}):
            props = dict(card.properties)
            del props[property_id]
            card.properties = props
            cleared += 1

    for view in _board_views(db, board.id):
        if view.group_by_id == property_id:
            view.group_by_id = None
        if view.date_display_property_id == property_id:
            view.date_display_property_id = None
        view.sort_options = [
            s for s in (view.sort_options or []) if s.get("property_id") != property_id
        ]
        view.filter = _strip_filter(view.filter, property_id)

    db.commit()
    db.refresh(board)
    log.info("Removed property %s from board %s (%d cards cleared)", property_id, board.id, cleared)
    return True


def reorder_properties(db: Session, board: models.Board, property_ids: List[str]) -> models.Board:
    """Listed ids first in the given order; unlisted ones keep their order after them."""
    templates = _templates(board)
    by_id = {t.id: t for t in templates}
    head = [by_id[pid] for pid in dict.fromkeys(property_ids) if pid in by_id]
    head_ids = {t.id for t in head}
    tail = [t for t in templates if t.id not in head_ids]
    _store_templates(board, head + tail)
    db.commit()
    db.refresh(board)
    return board


def add_property_option(
    db: Session, board: models.Board, property_id: str, option: schema.PropertyOption
) -> Optional[schema.PropertyTemplate]:
    templates = _templates(board)
    template = next((t for t in templates if t.id == property_id), None)
    if template is None:
        return None
    if template.find_option(option.id) is not None:
        raise ValueError(f"Option {option.id} already exists on property {property_id}")
    template.options.append(option)
    _store_templates(board, templates)
    db.commit()
    db.refresh(board)
    return template


def remove_property_option(
    db: Session, board: models.Board, property_id: str, option_id: str
) -> bool:
    """Card values pointing at the option are kept; they group as orphans."""
    templates = _templates(board)
    template = next((t for t in templates if t.id == property_id), None)
    if template is None or template.find_option(option_id) is None:
        return False
    template.options = [o for o in template.options if o.id != option_id]
    _store_templates(board, templates)

    for view in _board_views(db, board.id):
        view.visible_option_ids = [i for i in (view.visible_option_ids or []) if i != option_id]
        view.hidden_option_ids = [i for i in (view.hidden_option_ids or []) if i != option_id]

    db.commit()
    db.refresh(board)
    return True
