"""Collection actions.

Every change to the collection state is described by one of these
models.  ``type`` is the discriminator; :data:`Action` is the closed
union the reducer matches over.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from pyworldwise.exceptions import InvariantViolation
from pyworldwise.models.city import City


class ActionType(StrEnum):
    LOADING = "loading"
    CITIES_LOADED = "cities/loaded"
    CITY_LOADED = "city/loaded"
    CITY_CREATED = "city/created"
    CITY_DELETED = "city/deleted"
    REJECTED = "rejected"


class _BaseAction(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Loading(_BaseAction):
    type: Literal["loading"] = "loading"


class CitiesLoaded(_BaseAction):
    type: Literal["cities/loaded"] = "cities/loaded"
    payload: tuple[City, ...]


class CityLoaded(_BaseAction):
    type: Literal["city/loaded"] = "city/loaded"
    payload: City


class CityCreated(_BaseAction):
    type: Literal["city/created"] = "city/created"
    payload: City


class CityDeleted(_BaseAction):
    type: Literal["city/deleted"] = "city/deleted"
    payload: str


class Rejected(_BaseAction):
    type: Literal["rejected"] = "rejected"
    payload: str


Action = Annotated[
    Loading | CitiesLoaded | CityLoaded | CityCreated | CityDeleted | Rejected,
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)
_KNOWN_TAGS: frozenset[str] = frozenset(t.value for t in ActionType)


def parse_action(data: Mapping[str, Any]) -> Action:
    """Validate a ``{"type": ..., "payload": ...}`` mapping into an action.

    Raises
    ------
    InvariantViolation
        If the tag is not one of :class:`ActionType`, or the payload does
        not fit the tagged variant.
    """
    tag = data.get("type")
    if not isinstance(tag, str) or tag not in _KNOWN_TAGS:
        raise InvariantViolation(f"Unknown action type: {tag!r}")
    try:
        return _ACTION_ADAPTER.validate_python(dict(data))
    except ValidationError as exc:
        raise InvariantViolation(f"Malformed {tag!r} action: {exc}") from exc
