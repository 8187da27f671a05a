# File: /boardview/core/exceptions.py | Version: 1.0 | Title: Board engine error taxonomy
from __future__ import annotations


class BoardViewError(Exception):
    """Base class for errors raised by the board engine."""


class MissingContextError(BoardViewError):
    """No active board/view for an operation that needs one."""


class PersistenceError(BoardViewError):
    """The block store rejected a create/update/delete."""

    def __init__(self, message: str, *, block_id: str | None = None):
        super().__init__(message)
        self.block_id = block_id


class CardNotFoundError(BoardViewError):
    def __init__(self, card_id: str):
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id
