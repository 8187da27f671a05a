# File: /boardview/schemas/__init__.py | Version: 1.0 | Path: /boardview/schemas/__init__.py
from . import board, card, filters, view

__all__ = ["board", "card", "filters", "view"]
