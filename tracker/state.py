"""
Player state store.

Owns the single player snapshot and serialises access to it: updates take an
exclusive lock, reads take a shared lock and get a copy.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from .item_db import ItemDatabase
from .models import EVENT_TYPES, PlayerState, PlayerStateView
from .reducers import reduce_event
from .views import build_player_view

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many readers or one writer.

    A waiting writer blocks new readers so a steady read load cannot starve
    updates.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class PlayerStateStore:
    """Holds the merged player snapshot."""

    def __init__(self, initial_state: Optional[PlayerState] = None):
        if initial_state is None:
            initial_state = PlayerState()
        self._state = initial_state.model_copy(deep=True)
        self._lock = ReadWriteLock()

    def apply_event(self, kind: str, event: Union[BaseModel, Mapping[str, Any]]) -> bool:
        """
        Merge one update into the snapshot.

        Args:
            kind: Event kind (e.g. "inventory_update")
            event: Validated event model, or a raw payload to validate

        Returns:
            True if applied, False if the kind is unknown
        """
        model = EVENT_TYPES.get(kind)
        if model is None:
            logger.info(f"Received unknown update type: {kind}")
            return False

        if not isinstance(event, BaseModel):
            event = model.model_validate(event)
        elif not isinstance(event, model):
            raise TypeError(f"{kind} expects {model.__name__}, got {type(event).__name__}")

        with self._lock.write_locked():
            return reduce_event(self._state, kind, event)

    def read_snapshot(self) -> PlayerState:
        """Return a point-in-time copy of the snapshot."""
        with self._lock.read_locked():
            return self._state.model_copy(deep=True)

    def get_view(self, item_db: ItemDatabase) -> PlayerStateView:
        """Return the snapshot with item names resolved."""
        return build_player_view(self.read_snapshot(), item_db)
