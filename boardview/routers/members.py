# File: /boardview/routers/members.py | Version: 1.0 | Title: Members & Pages Router (display names + page soft delete)
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from boardview.crud import pages as crud_pages
from boardview.db.session import get_db
from boardview.schemas.card import Member, MemberCreate, Page

router = APIRouter(tags=["Members & Pages"])


@router.post("/members", response_model=Member)
def create_member_endpoint(data: MemberCreate, db: Session = Depends(get_db)):
    if data.id and crud_pages.get_member(db, data.id):
        raise HTTPException(status_code=409, detail="Member already exists")
    return crud_pages.create_member(db, data)


@router.get("/members", response_model=List[Member])
def list_members_endpoint(db: Session = Depends(get_db)):
    return crud_pages.list_members(db)


@router.delete("/pages/{page_id}", response_model=Page, summary="Soft-delete a card's page")
def delete_page_endpoint(page_id: str, db: Session = Depends(get_db)):
    page = crud_pages.get_page(db, page_id)
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")
    return crud_pages.soft_delete_page(db, page)


@router.post("/pages/{page_id}/restore", response_model=Page)
def restore_page_endpoint(page_id: str, db: Session = Depends(get_db)):
    page = crud_pages.get_page(db, page_id)
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")
    return crud_pages.restore_page(db, page)
