# File: /boardview/crud/card.py | Version: 1.0 | Title: Card CRUD + SQLAlchemy-backed block store
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boardview.core.exceptions import CardNotFoundError, PersistenceError
from boardview.models import board as models
from boardview.models.page import Page
from boardview.schemas import card as schema
from boardview.schemas.view import BoardView

log = logging.getLogger(__name__)


# ---------------------------
# Reads
# ---------------------------


def get_card(db: Session, card_id: str) -> Optional[models.Card]:
    return db.query(models.Card).filter_by(id=str(card_id)).first()


def require_card(db: Session, card_id: str) -> models.Card:
    card = get_card(db, card_id)
    if card is None:
        raise CardNotFoundError(card_id)
    return card


def get_cards_by_board(db: Session, board_ids: Iterable[str]) -> List[models.Card]:
    """Cards whose parent is one of `board_ids` (served by the parent_id index)."""
    ids = [b for b in dict.fromkeys(board_ids) if b]
    if not ids:
        return []
    return (
        db.query(models.Card)
        .filter(models.Card.parent_id.in_(ids))
        .order_by(models.Card.created_at.asc(), models.Card.id.asc())
        .all()
    )


def update_card(db: Session, card: models.Card, data: schema.CardUpdate) -> models.Card:
    """Merge property values; a None value clears that property."""
    patch = data.model_dump(exclude_unset=True)
    if patch.get("title") is not None:
        card.title = patch["title"]
    if patch.get("properties") is not None:
        props = dict(card.properties or {})
        for key, value in patch["properties"].items():
            if value is None:
                props.pop(key, None)
            else:
                props[key] = value
        card.properties = props
    if patch.get("updated_by") is not None:
        card.updated_by = patch["updated_by"]
    card.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(card)
    return card


# ---------------------------
# Block store (persistence collaborator for the engine)
# ---------------------------


class SqlBlockStore:
    """BlockStore over a SQLAlchemy session; every call commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, what: str, block_id: Optional[str] = None) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"{what} failed: {exc}", block_id=block_id) from exc

    def get_block(self, card_id: str) -> Optional[schema.Card]:
        row = get_card(self.db, card_id)
        return schema.Card.model_validate(row) if row is not None else None

    def insert_block(self, card: schema.Card) -> schema.Card:
        if get_card(self.db, card.id) is not None:
            raise PersistenceError(f"Block already exists: {card.id}", block_id=card.id)
        values = card.model_dump(exclude_none=True)
        self.db.add(models.Card(**values))
        self._commit("insert block", card.id)
        log.info("Inserted card %s", card.id, extra={"card_id": card.id})
        return card

    def delete_block(self, card_id: str) -> bool:
        row = get_card(self.db, card_id)
        if row is None:
            return False
        self.db.delete(row)
        page = self.db.get(Page, card_id)
        if page is not None and page.deleted_at is None:
            page.deleted_at = datetime.now(UTC)
        self._commit("delete block", card_id)
        log.info("Deleted card %s", card_id, extra={"card_id": card_id})
        return True

    def change_view_card_order(self, view: BoardView, card_order: Sequence[str]) -> None:
        row = self.db.get(models.BoardView, view.id)
        if row is None:
            raise PersistenceError(f"View not found: {view.id}", block_id=view.id)
        row.card_order = list(card_order)
        self._commit("change view card order", view.id)

    def refresh_page(self, card_id: str) -> None:
        """Make sure a live page backs the card so the projection can show it."""
        card = get_card(self.db, card_id)
        page = self.db.get(Page, card_id)
        if page is None:
            page = Page(
                id=card_id,
                title=card.title if card is not None else "",
                type="card_template" if card is not None and card.is_template else "card",
            )
            self.db.add(page)
        elif page.deleted_at is not None:
            page.deleted_at = None
        self._commit("refresh page", card_id)
