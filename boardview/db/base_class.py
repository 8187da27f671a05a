# File: boardview/db/base_class.py | Version: 1.1 | Path: /boardview/db/base_class.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Single, authoritative Base for board, view, card and page tables."""
