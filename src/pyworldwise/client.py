"""High-level async client: the composition root for one session."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyworldwise._store import PostgrestStore, RemoteStore
from pyworldwise.config import WorldwiseConfig
from pyworldwise.exceptions import WorldwiseError
from pyworldwise.models.city import City, NewCity, Position
from pyworldwise.position import GeolocationProvider, MapPosition, Navigator, PositionResolver
from pyworldwise.service import CitiesService
from pyworldwise.state.reducer import CollectionState
from pyworldwise.state.store import CitiesStore

_logger = logging.getLogger(__name__)


class WorldwiseClient:
    """Async client exposing the city collection and the map center.

    Exactly one store, service and position resolver exist per client.
    Entering the context loads the full collection, as the application
    does at startup.

    Usage::

        async with WorldwiseClient(config) as client:
            await client.create_city(new_city)
            print(client.cities)
    """

    def __init__(
        self,
        config: WorldwiseConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        remote: RemoteStore | None = None,
        geolocation: GeolocationProvider | None = None,
        navigate: Navigator | None = None,
        load_on_enter: bool = True,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._remote = remote
        self._load_on_enter = load_on_enter
        self._store = CitiesStore()
        self._service: CitiesService | None = None
        self._location: str | None = None
        self._user_navigate = navigate
        self._positions = PositionResolver(
            geolocation,
            navigate=self.navigate,
            default_position=config.default_map_position,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WorldwiseClient:
        remote = self._remote
        if remote is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            remote = PostgrestStore(self._config, self._http_session)
        self._service = CitiesService(
            remote,
            self._store,
            client_side_ids=self._config.client_side_ids,
        )
        if self._load_on_enter:
            try:
                await self._service.fetch_cities()
            except BaseException:
                await self._close()
                raise
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._close()

    async def _close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._service = None

    def _require_service(self) -> CitiesService:
        if self._service is None:
            raise WorldwiseError("Client not initialized. Use 'async with WorldwiseClient(...) as client:'")
        return self._service

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    @property
    def store(self) -> CitiesStore:
        return self._store

    @property
    def state(self) -> CollectionState:
        return self._store.state

    @property
    def cities(self) -> tuple[City, ...]:
        return self._store.cities

    @property
    def is_loading(self) -> bool:
        return self._store.is_loading

    @property
    def current_city(self) -> City | None:
        return self._store.current_city

    @property
    def error(self) -> str:
        return self._store.error

    async def fetch_cities(self) -> None:
        await self._require_service().fetch_cities()

    async def get_city(self, city_id: str) -> None:
        await self._require_service().get_city(city_id)

    async def create_city(self, new_city: NewCity) -> None:
        await self._require_service().create_city(new_city)

    async def delete_city(self, city_id: str) -> None:
        await self._require_service().delete_city(city_id)

    # ------------------------------------------------------------------
    # Map position
    # ------------------------------------------------------------------

    @property
    def positions(self) -> PositionResolver:
        return self._positions

    @property
    def map_position(self) -> MapPosition:
        return self._positions.map_position

    def set_map_position(self, position: MapPosition) -> None:
        self._positions.set_map_position(position)

    @property
    def is_loading_position(self) -> bool:
        return self._positions.is_loading_position

    @property
    def geolocation_position(self) -> Position | None:
        return self._positions.geolocation_position

    async def request_geolocation(self) -> Position | None:
        return await self._positions.request_geolocation()

    @property
    def location(self) -> str | None:
        return self._location

    def navigate(self, location: str) -> None:
        """Move to *location* and let the map center react to it."""
        _logger.debug("navigate %s", location)
        self._location = location
        if self._user_navigate is not None:
            self._user_navigate(location)
        self._positions.on_location_change(location)

    def handle_map_click(self, lat: float, lng: float) -> str:
        return self._positions.handle_map_click(lat, lng)
