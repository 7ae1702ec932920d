"""Per-session collection store.

This is the only component allowed to apply actions to the collection
state.  One instance is created by the composition root and handed to
every consumer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyworldwise.models.city import City
from pyworldwise.state.actions import Action
from pyworldwise.state.reducer import CollectionState, reduce

_logger = logging.getLogger(__name__)

StateListener = Callable[[CollectionState], None]


class CitiesStore:
    """Holds the current :class:`CollectionState` and applies dispatches.

    Dispatches are applied synchronously, in the order they are issued.
    Listeners are called after every transition with the new state.
    """

    def __init__(self, initial: CollectionState | None = None) -> None:
        self._state = initial if initial is not None else CollectionState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> CollectionState:
        return self._state

    @property
    def cities(self) -> tuple[City, ...]:
        return self._state.cities

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def current_city(self) -> City | None:
        return self._state.current_city

    @property
    def error(self) -> str:
        return self._state.error

    def dispatch(self, action: Action) -> CollectionState:
        """Apply *action* and notify listeners.

        Raises
        ------
        InvariantViolation
            If *action* is not a declared variant.  The state is left
            untouched.
        """
        new_state = reduce(self._state, action)
        _logger.debug("dispatch %s (cities=%d)", action.type, len(new_state.cities))
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                _logger.debug("state listener failed", exc_info=True)
        return new_state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
