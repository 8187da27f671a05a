# File: /boardview/models/board.py | Version: 1.0 | Path: /boardview/models/board.py
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boardview.db.base_class import Base


def gen_uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Board(Base):
    __tablename__ = "board"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    root_id: Mapped[Optional[str]] = mapped_column(String, index=True)
    title: Mapped[str] = mapped_column(String(255), default="")
    # ordered list of PropertyTemplate dicts
    card_properties: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    column_calculations: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    view_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    views: Mapped[list["BoardView"]] = relationship(
        back_populates="board", cascade="all, delete-orphan"
    )


class BoardView(Base):
    __tablename__ = "board_view"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    board_id: Mapped[str] = mapped_column(ForeignKey("board.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), default="")
    view_type: Mapped[str] = mapped_column(String(20), default="board")

    card_order: Mapped[list[str]] = mapped_column(JSON, default=list)
    filter: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    sort_options: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    group_by_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    visible_option_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    hidden_option_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    date_display_property_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # linked / external sources
    linked_source_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    source_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    source_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    board: Mapped["Board"] = relationship(back_populates="views")


class Card(Base):
    __tablename__ = "card"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    # no FK: linked views may point at boards stored elsewhere
    parent_id: Mapped[str] = mapped_column(String, nullable=False)
    root_id: Mapped[Optional[str]] = mapped_column(String)
    title: Mapped[str] = mapped_column(String(255), default="")
    properties: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    content_order: Mapped[list[Any]] = mapped_column(JSON, default=list)
    is_template: Mapped[bool] = mapped_column(Boolean, default=False)
    created_by: Mapped[Optional[str]] = mapped_column(String)
    updated_by: Mapped[Optional[str]] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


# Cards-by-board lookup is the hot path for large boards
Index("ix_card_parent_id_is_template", Card.parent_id, Card.is_template)
