"""Tests for the pure collection state machine."""

from __future__ import annotations

import pytest
from conftest import make_row

from pyworldwise.exceptions import InvariantViolation
from pyworldwise.models.city import City
from pyworldwise.state.actions import (
    ActionType,
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Loading,
    Rejected,
    parse_action,
)
from pyworldwise.state.reducer import CollectionState, reduce


def _city(record_id: str, name: str = "Paris") -> City:
    return City.from_row(make_row(record_id, name))


def _state(*ids: str, current: str | None = None) -> CollectionState:
    cities = tuple(_city(i) for i in ids)
    current_city = next((c for c in cities if c.id == current), None)
    return CollectionState(cities=cities, current_city=current_city)


def test_initial_state_is_empty() -> None:
    state = CollectionState()
    assert state.cities == ()
    assert state.is_loading is False
    assert state.current_city is None
    assert state.error == ""


def test_loading_sets_flag_only() -> None:
    before = _state("a1", current="a1")
    after = reduce(before, Loading())
    assert after.is_loading is True
    assert after.cities == before.cities
    assert after.current_city == before.current_city
    assert after.error == before.error


def test_cities_loaded_replaces_in_given_order() -> None:
    before = reduce(_state("old"), Loading())
    after = reduce(before, CitiesLoaded(payload=(_city("b2"), _city("a1"))))
    assert [c.id for c in after.cities] == ["b2", "a1"]
    assert after.is_loading is False


def test_cities_loaded_example() -> None:
    state = CollectionState()
    after = reduce(state, CitiesLoaded(payload=(_city("a1", "Paris"),)))
    assert [c.id for c in after.cities] == ["a1"]
    assert after.cities[0].city_name == "Paris"
    assert after.is_loading is False


def test_city_loaded_sets_current_city() -> None:
    city = _city("a1")
    after = reduce(reduce(CollectionState(), Loading()), CityLoaded(payload=city))
    assert after.current_city == city
    assert after.is_loading is False
    assert after.cities == ()


def test_city_created_appends_and_selects() -> None:
    before = _state("a1", "b2")
    created = _city("c3", "Rome")
    after = reduce(before, CityCreated(payload=created))
    assert [c.id for c in after.cities] == ["a1", "b2", "c3"]
    assert after.current_city == created


def test_city_created_with_existing_id_keeps_ids_unique() -> None:
    before = _state("a1", "b2")
    after = reduce(before, CityCreated(payload=_city("a1", "Paris again")))
    assert [c.id for c in after.cities] == ["b2", "a1"]
    assert after.cities[-1].city_name == "Paris again"


def test_city_deleted_removes_match_and_clears_current() -> None:
    after = reduce(_state("a1", "b2", current="a1"), CityDeleted(payload="a1"))
    assert [c.id for c in after.cities] == ["b2"]
    assert after.current_city is None


def test_city_deleted_clears_current_even_for_other_id() -> None:
    after = reduce(_state("a1", "b2", current="b2"), CityDeleted(payload="a1"))
    assert [c.id for c in after.cities] == ["b2"]
    assert after.current_city is None


def test_city_deleted_unknown_id_removes_nothing() -> None:
    after = reduce(_state("a1", "b2", current="a1"), CityDeleted(payload="zz"))
    assert [c.id for c in after.cities] == ["a1", "b2"]
    assert after.current_city is None


def test_rejected_sets_error() -> None:
    after = reduce(reduce(_state("a1"), Loading()), Rejected(payload="boom"))
    assert after.error == "boom"
    assert after.is_loading is False
    assert [c.id for c in after.cities] == ["a1"]


@pytest.mark.parametrize(
    "action",
    [
        Loading(),
        CitiesLoaded(payload=()),
        CityLoaded(payload=_city("x")),
        CityCreated(payload=_city("x")),
        CityDeleted(payload="a1"),
        Rejected(payload="nope"),
    ],
)
def test_reduce_is_pure_and_deterministic(action) -> None:
    before = _state("a1", "b2", current="a1")
    snapshot = before.model_dump()
    first = reduce(before, action)
    second = reduce(before, action)
    assert first == second
    assert before.model_dump() == snapshot


def test_unknown_action_raises_and_leaves_state_alone() -> None:
    before = _state("a1")

    class _Bogus:
        type = "city/renamed"

    with pytest.raises(InvariantViolation):
        reduce(before, _Bogus())  # type: ignore[arg-type]
    assert [c.id for c in before.cities] == ["a1"]


class TestParseAction:
    def test_known_tags_round_through(self) -> None:
        action = parse_action({"type": "city/deleted", "payload": "a1"})
        assert isinstance(action, CityDeleted)
        assert action.payload == "a1"

    def test_payload_rows_are_validated_into_cities(self) -> None:
        action = parse_action({"type": "cities/loaded", "payload": [make_row("a1")]})
        assert isinstance(action, CitiesLoaded)
        assert action.payload[0].position.lat == 48.85

    def test_all_tags_declared(self) -> None:
        assert {t.value for t in ActionType} == {
            "loading",
            "cities/loaded",
            "city/loaded",
            "city/created",
            "city/deleted",
            "rejected",
        }

    @pytest.mark.parametrize("data", [{"type": "city/renamed"}, {"type": None}, {}])
    def test_unknown_tag_is_invariant_violation(self, data) -> None:
        with pytest.raises(InvariantViolation):
            parse_action(data)

    def test_malformed_payload_is_invariant_violation(self) -> None:
        with pytest.raises(InvariantViolation):
            parse_action({"type": "city/loaded", "payload": "not a city"})
