from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyworldwise.exceptions import CityNotFoundError, StoreOperationError
from pyworldwise.models.city import NewCity, Position


def make_row(record_id: str, name: str = "Paris", *, lat: float = 48.85, lng: float = 2.35) -> dict[str, Any]:
    return {
        "id": record_id,
        "cityName": name,
        "country": "France",
        "emoji": "🇫🇷",
        "date": "2024-01-01",
        "notes": "",
        "lat": lat,
        "lng": lng,
    }


@dataclass
class FakeRemoteStore:
    """In-memory table with call counting, failure switches and gates."""

    rows: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: dict[str, int] = field(default_factory=dict)
    fail: set[str] = field(default_factory=set)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    inserted: list[dict[str, Any]] = field(default_factory=list)
    _next_id: int = 1

    def _record_call(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.fail:
            raise StoreOperationError(f"{name} failed", status_code=500, endpoint="/rest/v1/cities")

    async def list_rows(self) -> list[dict[str, Any]]:
        self._record_call("list_rows")
        return [dict(row) for row in self.rows.values()]

    async def get_by_id(self, record_id: str) -> dict[str, Any]:
        self._record_call("get_by_id")
        gate = self.gates.get(record_id)
        if gate is not None:
            await gate.wait()
        if record_id not in self.rows:
            raise CityNotFoundError(f"No row with id {record_id!r}")
        return dict(self.rows[record_id])

    async def insert(self, row: Mapping[str, Any]) -> dict[str, Any]:
        self._record_call("insert")
        stored = dict(row)
        self.inserted.append(dict(row))
        if "id" not in stored:
            stored["id"] = f"srv-{self._next_id}"
            self._next_id += 1
        stored["created_at"] = "2024-01-01T00:00:00Z"
        self.rows[stored["id"]] = stored
        return dict(stored)

    async def delete_by_id(self, record_id: str) -> None:
        self._record_call("delete_by_id")
        self.rows.pop(record_id, None)


@pytest.fixture
def remote() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def lisbon() -> NewCity:
    return NewCity(
        city_name="Lisbon",
        country="Portugal",
        emoji="🇵🇹",
        date="2024-01-01",
        notes="",
        position=Position(lat=38.7, lng=-9.1),
    )
