# File: /boardview/routers/cards.py | Version: 1.0 | Title: Cards Router (read + property updates)
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from boardview.core.exceptions import CardNotFoundError
from boardview.crud import card as crud_card
from boardview.db.session import get_db
from boardview.schemas.card import Card, CardUpdate

router = APIRouter(prefix="/cards", tags=["Cards"])


def _get_card_or_404(db: Session, card_id: str):
    try:
        return crud_card.require_card(db, card_id)
    except CardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{card_id}", response_model=Card)
def get_card_endpoint(card_id: str, db: Session = Depends(get_db)):
    return _get_card_or_404(db, card_id)


@router.patch("/{card_id}", response_model=Card)
def update_card_endpoint(card_id: str, data: CardUpdate, db: Session = Depends(get_db)):
    card = _get_card_or_404(db, card_id)
    return crud_card.update_card(db, card, data)
