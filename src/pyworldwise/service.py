"""Asynchronous create/read/delete operations on the city collection.

Each operation dispatches ``loading``, performs exactly one remote call
and then dispatches exactly one success action or ``rejected``.  Local
state only changes after the remote call succeeded, so there is nothing
to roll back on failure.  Overlapping calls are not cancelled: whichever
settles last dispatches last.
"""

from __future__ import annotations

import logging
import secrets

from pydantic import ValidationError

from pyworldwise._constants import (
    ERROR_CREATING_CITY,
    ERROR_DELETING_CITY,
    ERROR_LOADING_CITIES,
    ERROR_LOADING_CITY,
)
from pyworldwise._store import RemoteStore
from pyworldwise.exceptions import StoreOperationError
from pyworldwise.models.city import City, NewCity
from pyworldwise.state.actions import (
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Loading,
    Rejected,
)
from pyworldwise.state.store import CitiesStore

_logger = logging.getLogger(__name__)

_ABSORBED = (StoreOperationError, ValidationError)


def generate_city_id() -> str:
    """Full 128-bit random id for client-assigned records."""
    return secrets.token_hex(16)


class CitiesService:
    """Keeps a :class:`CitiesStore` in sync with a :class:`RemoteStore`.

    Remote failures never propagate out of this class; they end up as the
    fixed message in ``store.error``.
    """

    def __init__(
        self,
        remote: RemoteStore,
        store: CitiesStore,
        *,
        client_side_ids: bool = False,
    ) -> None:
        self._remote = remote
        self._store = store
        self._client_side_ids = client_side_ids

    @property
    def store(self) -> CitiesStore:
        return self._store

    async def fetch_cities(self) -> None:
        """Replace the collection with every stored row."""
        self._store.dispatch(Loading())
        try:
            rows = await self._remote.list_rows()
            cities = tuple(City.from_row(row) for row in rows)
        except _ABSORBED:
            _logger.debug("Loading cities failed", exc_info=True)
            self._store.dispatch(Rejected(payload=ERROR_LOADING_CITIES))
            return
        self._store.dispatch(CitiesLoaded(payload=cities))

    async def get_city(self, city_id: str) -> None:
        """Load one record as ``current_city``.

        Does nothing (no dispatch, no remote call) when *city_id* is
        already the current city.
        """
        current = self._store.current_city
        if current is not None and current.id == city_id:
            return

        self._store.dispatch(Loading())
        try:
            city = City.from_row(await self._remote.get_by_id(city_id))
        except _ABSORBED:
            _logger.debug("Loading city %s failed", city_id, exc_info=True)
            self._store.dispatch(Rejected(payload=ERROR_LOADING_CITY))
            return
        self._store.dispatch(CityLoaded(payload=city))

    async def create_city(self, new_city: NewCity) -> None:
        """Store *new_city* and append the stored record to the collection."""
        self._store.dispatch(Loading())
        record_id = generate_city_id() if self._client_side_ids else None
        try:
            stored = await self._remote.insert(new_city.to_row(record_id))
            city = City.from_row(stored)
        except _ABSORBED:
            _logger.debug("Creating city %r failed", new_city.city_name, exc_info=True)
            self._store.dispatch(Rejected(payload=ERROR_CREATING_CITY))
            return
        self._store.dispatch(CityCreated(payload=city))

    async def delete_city(self, city_id: str) -> None:
        """Delete the stored row and drop it from the collection."""
        self._store.dispatch(Loading())
        try:
            await self._remote.delete_by_id(city_id)
        except StoreOperationError:
            _logger.debug("Deleting city %s failed", city_id, exc_info=True)
            self._store.dispatch(Rejected(payload=ERROR_DELETING_CITY))
            return
        self._store.dispatch(CityDeleted(payload=city_id))
