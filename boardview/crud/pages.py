# File: /boardview/crud/pages.py | Version: 1.0 | Title: Page existence + member directory
from __future__ import annotations

from datetime import UTC, datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from boardview.models.page import Member, Page
from boardview.schemas import card as schema


def get_page(db: Session, page_id: str) -> Optional[Page]:
    return db.query(Page).filter_by(id=str(page_id)).first()


def get_pages_map(db: Session, page_ids: Iterable[str]) -> Dict[str, schema.Page]:
    ids = list(dict.fromkeys(page_ids))
    if not ids:
        return {}
    rows = db.query(Page).filter(Page.id.in_(ids)).all()
    return {row.id: schema.Page.model_validate(row) for row in rows}


def soft_delete_page(db: Session, page: Page) -> Page:
    if page.deleted_at is None:
        page.deleted_at = datetime.now(UTC)
        db.commit()
        db.refresh(page)
    return page


def restore_page(db: Session, page: Page) -> Page:
    if page.deleted_at is not None:
        page.deleted_at = None
        db.commit()
        db.refresh(page)
    return page


# ---- Members ----


def create_member(db: Session, data: schema.MemberCreate) -> Member:
    kwargs = {"username": data.username}
    if data.id:
        kwargs["id"] = data.id
    m = Member(**kwargs)
    db.add(m)
    db.commit()
    db.refresh(m)
    return m


def get_member(db: Session, member_id: str) -> Optional[Member]:
    return db.query(Member).filter_by(id=str(member_id)).first()


def list_members(db: Session) -> List[Member]:
    return db.query(Member).order_by(Member.username.asc()).all()
