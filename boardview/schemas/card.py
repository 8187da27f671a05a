# File: /boardview/schemas/card.py | Version: 1.0 | Title: Card, Page & Projection Schemas
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from boardview.schemas._base import BaseSchema
from boardview.schemas.board import PropertyOption, PropertyTemplate


class Card(BaseSchema):
    id: str
    parent_id: str
    root_id: Optional[str] = None
    title: str = ""
    properties: Dict[str, Any] = Field(default_factory=dict)
    content_order: List[Any] = Field(default_factory=list)
    is_template: bool = False
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("properties", mode="before")
    @classmethod
    def _none_as_empty_dict(cls, v):
        return v or {}

    @field_validator("content_order", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return v or []


class CardUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    # merged over existing values; a None value clears the property
    properties: Optional[Dict[str, Any]] = None
    updated_by: Optional[str] = None


class Page(BaseSchema):
    id: str
    title: str = ""
    type: str = "card"
    deleted_at: Optional[datetime] = None


class CardPage(BaseModel):
    card: Card
    page: Page


class BoardGroup(BaseModel):
    option: PropertyOption
    cards: List[Card] = Field(default_factory=list)
    card_pages: List[CardPage] = Field(default_factory=list)


class Member(BaseSchema):
    id: str
    username: str


class MemberCreate(BaseModel):
    id: Optional[str] = None
    username: str = Field(min_length=1, max_length=255)


# ---- View projection / mutation payloads ----


class ViewProjection(BaseModel):
    active_board_id: Optional[str] = None
    card_pages: List[CardPage] = Field(default_factory=list)
    templates: List[Card] = Field(default_factory=list)
    group_by_property: Optional[PropertyTemplate] = None
    date_display_property: Optional[PropertyTemplate] = None
    visible_groups: List[BoardGroup] = Field(default_factory=list)
    hidden_groups: List[BoardGroup] = Field(default_factory=list)
    calculations: Dict[str, Any] = Field(default_factory=dict)


class AddCardRequest(BaseModel):
    group_by_option_id: Optional[str] = None
    show: bool = False
    properties: Dict[str, Any] = Field(default_factory=dict)
    insert_last: Optional[bool] = None  # None -> settings.DEFAULT_INSERT_LAST
    is_template: bool = False
    title: str = Field(default="", max_length=255)
    created_by: Optional[str] = None


class AddCardResult(BaseModel):
    card: Card
    card_order: List[str]
    show: bool = False


class DeleteCardsRequest(BaseModel):
    card_ids: List[str] = Field(default_factory=list)


class DeleteCardsResult(BaseModel):
    deleted: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
