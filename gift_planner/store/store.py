import logging
import threading
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
Listener = Callable[[Any], None]


class Store(Generic[S]):
    """
    Observable state holder.

    ``set_state`` accepts either the new state or a callable receiving the
    current state and returning the new one. Listeners are called with the new
    state, synchronously and in subscription order, after every change.
    """

    def __init__(self, initial_state: S):
        self._state = initial_state
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> S:
        return self._state

    def set_state(self, value) -> S:
        with self._lock:
            new_state = value(self._state) if callable(value) else value
            self._state = new_state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
