# File: /boardview/schemas/view.py | Version: 1.0 | Title: Pydantic v2 schema for Board Views (ConfigDict + from_attributes)
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boardview.schemas.filters import FilterGroup, SortOption

ViewType = Literal["board", "table", "gallery", "calendar"]


class BoardViewBase(BaseModel):
    title: str = Field(default="", max_length=200)
    view_type: ViewType = "board"
    card_order: List[str] = Field(default_factory=list)
    filter: FilterGroup = Field(default_factory=FilterGroup)
    sort_options: List[SortOption] = Field(default_factory=list)
    group_by_id: Optional[str] = None
    visible_option_ids: List[str] = Field(default_factory=list)
    hidden_option_ids: List[str] = Field(default_factory=list)
    date_display_property_id: Optional[str] = None
    linked_source_id: Optional[str] = None
    source_type: Optional[str] = None  # e.g. "board_page", "google_form"
    source_data: Optional[Dict[str, Any]] = None

    @field_validator(
        "card_order",
        "sort_options",
        "visible_option_ids",
        "hidden_option_ids",
        mode="before",
    )
    @classmethod
    def _none_as_empty_list(cls, v):
        return v or []

    @field_validator("filter", mode="before")
    @classmethod
    def _none_as_pass_through(cls, v):
        return v or {}


class BoardViewCreate(BoardViewBase):
    board_id: str


class BoardViewUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    view_type: Optional[ViewType] = None
    card_order: Optional[List[str]] = None
    filter: Optional[FilterGroup] = None
    sort_options: Optional[List[SortOption]] = None
    group_by_id: Optional[str] = None
    visible_option_ids: Optional[List[str]] = None
    hidden_option_ids: Optional[List[str]] = None
    date_display_property_id: Optional[str] = None
    linked_source_id: Optional[str] = None
    source_type: Optional[str] = None
    source_data: Optional[Dict[str, Any]] = None


class BoardView(BoardViewBase):
    id: str
    board_id: str
    created_at: Optional[datetime] = None

    # Pydantic v2 style
    model_config = ConfigDict(from_attributes=True)
