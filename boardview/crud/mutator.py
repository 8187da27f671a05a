# File: /boardview/crud/mutator.py | Version: 1.0 | Title: Undoable block mutations (command objects + caller-held stack)
"""
Every card mutation is expressed as an UndoGroup: an ordered batch of
(do, undo) actions executed against a BlockStore. Callers keep their own
UndoManager; there is no module-level mutator.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from boardview.core.exceptions import PersistenceError
from boardview.schemas.card import Card
from boardview.schemas.view import BoardView

log = logging.getLogger(__name__)


class BlockStore(Protocol):
    """Persistence collaborator for card mutations."""

    def insert_block(self, card: Card) -> Card: ...

    def delete_block(self, card_id: str) -> bool: ...

    def get_block(self, card_id: str) -> Optional[Card]: ...

    def change_view_card_order(self, view: BoardView, card_order: Sequence[str]) -> None: ...

    def refresh_page(self, card_id: str) -> None: ...


StoreFn = Callable[[BlockStore], object]


def _noop(_store: BlockStore) -> None:
    return None


class UndoAction:
    def __init__(self, description: str, do: StoreFn, undo: StoreFn = _noop):
        self.description = description
        self.do = do
        self.undo = undo

    def __repr__(self) -> str:
        return f"UndoAction({self.description!r})"


class UndoGroup:
    """
    A logical operation made of several store calls.

    With isolate_failures=False the first failing action rolls back the
    actions already applied and raises PersistenceError. With
    isolate_failures=True failures are logged and recorded in `failed`
    while the remaining actions still run.
    """

    def __init__(
        self,
        description: str,
        actions: Optional[List[UndoAction]] = None,
        *,
        isolate_failures: bool = False,
    ):
        self.description = description
        self.actions: List[UndoAction] = list(actions or [])
        self.isolate_failures = isolate_failures
        self.applied: List[UndoAction] = []
        self.failed: List[UndoAction] = []

    def add(self, action: UndoAction) -> "UndoGroup":
        self.actions.append(action)
        return self

    def execute(self, store: BlockStore) -> "UndoGroup":
        self.applied = []
        self.failed = []
        for action in self.actions:
            try:
                action.do(store)
            except Exception as exc:
                if self.isolate_failures:
                    log.exception("%s: '%s' failed", self.description, action.description)
                    self.failed.append(action)
                    continue
                self._rollback(store)
                if isinstance(exc, PersistenceError):
                    raise
                raise PersistenceError(
                    f"{self.description}: '{action.description}' failed: {exc}"
                ) from exc
            self.applied.append(action)
        log.info(
            "%s: %d applied, %d failed",
            self.description,
            len(self.applied),
            len(self.failed),
        )
        return self

    def _rollback(self, store: BlockStore) -> None:
        for action in reversed(self.applied):
            try:
                action.undo(store)
            except Exception:
                log.exception("%s: rollback of '%s' failed", self.description, action.description)
        self.applied = []

    def undo(self, store: BlockStore) -> None:
        for action in reversed(self.applied):
            try:
                action.undo(store)
            except Exception as exc:
                raise PersistenceError(
                    f"undo {self.description}: '{action.description}' failed: {exc}"
                ) from exc
        log.info("Undid %s", self.description)


class UndoManager:
    def __init__(self, limit: int = 100):
        self.limit = limit
        self._undo: List[UndoGroup] = []
        self._redo: List[UndoGroup] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def perform(self, group: UndoGroup, store: BlockStore) -> UndoGroup:
        group.execute(store)
        self._undo.append(group)
        del self._undo[: -self.limit]
        self._redo.clear()
        return group

    def undo(self, store: BlockStore) -> Optional[UndoGroup]:
        if not self._undo:
            return None
        group = self._undo.pop()
        try:
            group.undo(store)
        except PersistenceError:
            self._undo.append(group)
            raise
        self._redo.append(group)
        return group

    def redo(self, store: BlockStore) -> Optional[UndoGroup]:
        if not self._redo:
            return None
        group = self._redo.pop()
        try:
            group.execute(store)
        except PersistenceError:
            # a failed redo stays redoable
            self._redo.append(group)
            raise
        self._undo.append(group)
        return group


class UndoRegistry:
    """One UndoManager per view id (held on app.state)."""

    def __init__(self, limit: int = 100):
        self.limit = limit
        self._managers: Dict[str, UndoManager] = {}
        # sync endpoints run in a threadpool
        self._lock = threading.Lock()

    def for_view(self, view_id: str) -> UndoManager:
        with self._lock:
            manager = self._managers.get(view_id)
            if manager is None:
                manager = self._managers[view_id] = UndoManager(limit=self.limit)
            return manager

    def discard(self, view_id: str) -> None:
        with self._lock:
            self._managers.pop(view_id, None)

    def __contains__(self, view_id: str) -> bool:
        with self._lock:
            return view_id in self._managers
