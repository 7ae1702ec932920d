"""Pure collection state machine.

``reduce`` is the only definition of how the collection changes.  It
never mutates its input and, given the same ``(state, action)`` pair,
always returns an equal state.
"""

from __future__ import annotations

from typing import Never

from pydantic import BaseModel, ConfigDict

from pyworldwise.exceptions import InvariantViolation
from pyworldwise.models.city import City
from pyworldwise.state.actions import (
    Action,
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Loading,
    Rejected,
)


class CollectionState(BaseModel):
    """Snapshot of the in-memory city collection.

    ``cities`` keeps load/create order.  ``current_city`` is ``None`` when
    no record is selected.  ``is_loading`` is one flag shared by every
    operation kind.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cities: tuple[City, ...] = ()
    is_loading: bool = False
    current_city: City | None = None
    error: str = ""


def _unreachable(action: Never) -> Never:
    raise InvariantViolation(f"Unknown action type: {getattr(action, 'type', action)!r}")


def reduce(state: CollectionState, action: Action) -> CollectionState:
    """Apply one action and return the next state."""
    match action:
        case Loading():
            return state.model_copy(update={"is_loading": True})
        case CitiesLoaded(payload=cities):
            return state.model_copy(update={"is_loading": False, "cities": tuple(cities)})
        case CityLoaded(payload=city):
            return state.model_copy(update={"is_loading": False, "current_city": city})
        case CityCreated(payload=city):
            # A re-used id replaces the stale entry so ids stay unique.
            kept = tuple(c for c in state.cities if c.id != city.id)
            return state.model_copy(
                update={"is_loading": False, "cities": (*kept, city), "current_city": city}
            )
        case CityDeleted(payload=city_id):
            # current_city is cleared even when a different city was deleted.
            return state.model_copy(
                update={
                    "is_loading": False,
                    "cities": tuple(c for c in state.cities if c.id != city_id),
                    "current_city": None,
                }
            )
        case Rejected(payload=message):
            return state.model_copy(update={"is_loading": False, "error": message})
        case _:
            _unreachable(action)
