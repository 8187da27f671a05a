# File: /boardview/schemas/filters.py | Version: 1.0 | Title: Filter tree & Sort option Schemas
from __future__ import annotations

from enum import Enum
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field


class FilterOperation(str, Enum):
    and_ = "and"
    or_ = "or"


class FilterCondition(str, Enum):
    # text-like
    contains = "contains"
    does_not_contain = "does_not_contain"
    starts_with = "starts_with"
    ends_with = "ends_with"
    # shared
    is_ = "is"
    is_not = "is_not"
    is_empty = "is_empty"
    is_not_empty = "is_not_empty"
    # option sets
    includes_any = "includes_any"
    includes = "includes"  # legacy alias of includes_any
    does_not_include = "does_not_include"
    not_includes = "not_includes"  # legacy alias of does_not_include
    # dates
    is_before = "is_before"
    is_after = "is_after"
    # numbers
    greater_than = "greater_than"
    less_than = "less_than"


class FilterClause(BaseModel):
    # extra="forbid" lets the group/clause union pick the right model
    model_config = ConfigDict(extra="forbid")

    property_id: str
    condition: FilterCondition
    values: List[Any] = Field(default_factory=list)


class FilterGroup(BaseModel):
    model_config = ConfigDict(extra="forbid")

    operation: FilterOperation = FilterOperation.and_
    filters: List[Union["FilterGroup", FilterClause]] = Field(default_factory=list)


FilterGroup.model_rebuild()


class SortOption(BaseModel):
    property_id: str
    reversed: bool = False
