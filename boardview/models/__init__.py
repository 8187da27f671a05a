# File: /boardview/models/__init__.py | Version: 1.0 | Title: Models Package Exports
from .board import Board, BoardView, Card
from .page import Member, Page

__all__ = [
    "Board",
    "BoardView",
    "Card",
    "Page",
    "Member",
]
