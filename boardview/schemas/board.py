# File: /boardview/schemas/board.py | Version: 1.0 | Title: Board & Property Template Schemas
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from boardview.schemas._base import BaseSchema

# Pseudo property id for the card title column
TITLE_PROPERTY_ID = "__title"


class PropertyType(str, Enum):
    text = "text"
    number = "number"
    select = "select"
    multi_select = "multiSelect"
    date = "date"
    person = "person"
    file = "file"
    checkbox = "checkbox"
    url = "url"
    email = "email"
    phone = "phone"
    created_time = "createdTime"
    created_by = "createdBy"
    updated_time = "updatedTime"
    updated_by = "updatedBy"
    proposal_url = "proposalUrl"
    proposal_status = "proposalStatus"
    proposal_category = "proposalCategory"


# Types whose values are option ids and can back a board column
SELECT_LIKE_TYPES = frozenset(
    {
        PropertyType.select,
        PropertyType.multi_select,
        PropertyType.proposal_status,
        PropertyType.proposal_category,
    }
)


class PropertyOption(BaseModel):
    id: str
    value: str
    color: str = ""


class PropertyTemplate(BaseModel):
    id: str
    name: str
    type: PropertyType
    options: List[PropertyOption] = Field(default_factory=list)
    description: Optional[str] = None

    def find_option(self, option_id: Optional[str]) -> Optional[PropertyOption]:
        if not option_id:
            return None
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def option_index(self, option_id: Optional[str]) -> int:
        """Display position of an option id; -1 when missing or orphaned."""
        if not option_id:
            return -1
        for i, option in enumerate(self.options):
            if option.id == option_id:
                return i
        return -1


TITLE_TEMPLATE = PropertyTemplate(id=TITLE_PROPERTY_ID, name="Title", type=PropertyType.text)


def find_template(
    templates: List[PropertyTemplate], property_id: Optional[str]
) -> Optional[PropertyTemplate]:
    """Look up a template by id; `__title` resolves to the synthetic title column."""
    if not property_id:
        return None
    if property_id == TITLE_PROPERTY_ID:
        return TITLE_TEMPLATE
    for template in templates:
        if template.id == property_id:
            return template
    return None


class Board(BaseSchema):
    id: str
    root_id: Optional[str] = None
    title: str = ""
    card_properties: List[PropertyTemplate] = Field(default_factory=list)
    column_calculations: Dict[str, str] = Field(default_factory=dict)
    view_ids: List[str] = Field(default_factory=list)

    @field_validator("card_properties", "view_ids", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return v or []

    @field_validator("column_calculations", mode="before")
    @classmethod
    def _none_as_empty_dict(cls, v):
        # older rows stored [] here
        return v or {}


class BoardCreate(BaseModel):
    title: str = Field(default="", max_length=255)
    root_id: Optional[str] = None
    card_properties: List[PropertyTemplate] = Field(default_factory=list)
    column_calculations: Dict[str, str] = Field(default_factory=dict)
    add_default_property: bool = False


class BoardUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    column_calculations: Optional[Dict[str, str]] = None


class PropertyReorder(BaseModel):
    property_ids: List[str]
