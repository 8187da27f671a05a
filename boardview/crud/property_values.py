# File: /boardview/crud/property_values.py | Version: 1.0 | Title: Typed access to card property bags
"""
Card property bags are untyped JSON. Everything that reads them (filters,
sorting, calculations, grouping) goes through the helpers here so each
PropertyType is interpreted one way only.
"""
from __future__ import annotations

import json
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, List, Optional

from boardview.schemas.board import TITLE_PROPERTY_ID, PropertyTemplate, PropertyType
from boardview.schemas.card import Card


class ValueKind(str, Enum):
    text = "text"
    number = "number"
    select = "select"
    multi_select = "multi_select"
    person = "person"
    date = "date"
    checkbox = "checkbox"


_KIND_BY_TYPE = {
    PropertyType.text: ValueKind.text,
    PropertyType.url: ValueKind.text,
    PropertyType.email: ValueKind.text,
    PropertyType.phone: ValueKind.text,
    PropertyType.file: ValueKind.text,
    PropertyType.proposal_url: ValueKind.text,
    PropertyType.number: ValueKind.number,
    PropertyType.select: ValueKind.select,
    PropertyType.proposal_status: ValueKind.select,
    PropertyType.proposal_category: ValueKind.select,
    PropertyType.multi_select: ValueKind.multi_select,
    PropertyType.person: ValueKind.person,
    PropertyType.created_by: ValueKind.person,
    PropertyType.updated_by: ValueKind.person,
    PropertyType.date: ValueKind.date,
    PropertyType.created_time: ValueKind.date,
    PropertyType.updated_time: ValueKind.date,
    PropertyType.checkbox: ValueKind.checkbox,
}

_TRUTHY = {"1", "true", "yes", "y", "on"}
# numeric strings below 10 digits (before 1970-01-12 as ms) are not read as epoch ms
_MIN_EPOCH_MS_DIGITS = 10


def kind_of(template: PropertyTemplate) -> ValueKind:
    return _KIND_BY_TYPE.get(template.type, ValueKind.text)


def raw_value(card: Card, template: PropertyTemplate) -> Any:
    """Value of `template` on `card`, including metadata-backed columns."""
    if template.id == TITLE_PROPERTY_ID:
        return card.title
    if template.type == PropertyType.created_time:
        return card.created_at
    if template.type == PropertyType.updated_time:
        return card.updated_at or card.created_at
    if template.type == PropertyType.created_by:
        return card.created_by
    if template.type == PropertyType.updated_by:
        return card.updated_by or card.created_by
    return card.properties.get(template.id)


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(as_text(v) for v in value)
    return str(value)


def as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def as_ids(value: Any) -> List[str]:
    """Option ids / user ids as a list, whatever the stored shape."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v not in (None, "")]
    return [str(value)]


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _datetime_to_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp() * 1000)


def as_epoch_ms(value: Any) -> Optional[int]:
    """
    Resolve a stored date to epoch milliseconds (the range start for ranges).
    Accepts {"from": ms, "to": ms}, its JSON string, an epoch-ms number or
    digit string of at least ten digits, an ISO date/datetime string, or a
    datetime/date.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _datetime_to_ms(value)
    if isinstance(value, date):
        return _datetime_to_ms(datetime(value.year, value.month, value.day))
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, dict):
        return as_epoch_ms(value.get("from"))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.startswith("{"):
            try:
                return as_epoch_ms(json.loads(text))
            except ValueError:
                return None
        digits = text.lstrip("-")
        # "2024" or "20240501" fall through to the ISO parser
        if digits.isdigit() and len(digits) >= _MIN_EPOCH_MS_DIGITS:
            return int(text)
        try:
            return _datetime_to_ms(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None
