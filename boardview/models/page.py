# File: /boardview/models/page.py | Version: 1.0 | Path: /boardview/models/page.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from boardview.db.base_class import Base
from boardview.models.board import _utcnow, gen_uuid


class Page(Base):
    """Page metadata backing a card (page id == card id)."""

    __tablename__ = "page"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    title: Mapped[str] = mapped_column(String(255), default="")
    type: Mapped[str] = mapped_column(String(50), default="card")
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Member(Base):
    __tablename__ = "member"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
