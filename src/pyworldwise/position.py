"""Map center arbitration.

Three inputs move the map center, each arriving on its own schedule:

* the current navigable location, when its query string carries both
  ``lat`` and ``lng``;
* the device geolocation, after the user explicitly asks for it;
* a click on the map, which does not move the center itself but
  navigates to the record-entry view with the clicked coordinates in
  the query string, re-entering through the location path.

There is no priority between the location and geolocation inputs: each
overwrites the center whenever it applies, so the most recently applied
one wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol
from urllib.parse import parse_qs, urlencode, urlsplit

from pyworldwise._constants import DEFAULT_MAP_POSITION, FORM_PATH
from pyworldwise._normalize import safe_float
from pyworldwise.exceptions import GeolocationError
from pyworldwise.models.city import Position

_logger = logging.getLogger(__name__)

MapPosition = tuple[float, float]
PositionListener = Callable[[MapPosition], None]
Navigator = Callable[[str], None]


class GeolocationProvider(Protocol):
    async def request_position(self) -> Position:
        """Resolve the device position or raise :class:`GeolocationError`."""
        ...


class StaticGeolocationProvider:
    """Provider that always resolves to a fixed position."""

    def __init__(self, lat: float, lng: float) -> None:
        self._position = Position(lat=lat, lng=lng)

    async def request_position(self) -> Position:
        return self._position


def parse_url_position(location: str) -> MapPosition | None:
    """Extract ``(lat, lng)`` from a location's query string.

    Returns ``None`` unless both parameters are present and numeric.
    """
    query = parse_qs(urlsplit(location).query)
    lat = safe_float(query.get("lat", [None])[0])
    lng = safe_float(query.get("lng", [None])[0])
    if lat is None or lng is None:
        return None
    return (lat, lng)


def build_form_path(lat: float, lng: float) -> str:
    """Location of the record-entry view for a clicked point."""
    return f"{FORM_PATH}?{urlencode({'lat': lat, 'lng': lng})}"


class PositionResolver:
    """Single source of the map center.

    Parameters
    ----------
    geolocation : GeolocationProvider or None
        Where :meth:`request_geolocation` gets the device position from.
    navigate : callable or None
        Called with the target location on a map click.  When omitted the
        location is applied directly through :meth:`on_location_change`.
    default_position : tuple of float
        Center used until the first input resolves.
    """

    def __init__(
        self,
        geolocation: GeolocationProvider | None = None,
        *,
        navigate: Navigator | None = None,
        default_position: MapPosition = DEFAULT_MAP_POSITION,
    ) -> None:
        self._geolocation = geolocation
        self._navigate = navigate
        self._map_position: MapPosition = (float(default_position[0]), float(default_position[1]))
        self._resolved = False
        self._url_position: MapPosition | None = None
        self._is_loading_position = False
        self._geolocation_position: Position | None = None
        self._geolocation_error: str | None = None
        self._listeners: list[PositionListener] = []

    @property
    def map_position(self) -> MapPosition:
        return self._map_position

    @property
    def is_default(self) -> bool:
        """True until any input has set the position."""
        return not self._resolved

    @property
    def is_loading_position(self) -> bool:
        return self._is_loading_position

    @property
    def geolocation_position(self) -> Position | None:
        return self._geolocation_position

    @property
    def geolocation_error(self) -> str | None:
        return self._geolocation_error

    def set_map_position(self, position: MapPosition) -> None:
        lat, lng = position
        self._map_position = (float(lat), float(lng))
        self._resolved = True
        for listener in list(self._listeners):
            try:
                listener(self._map_position)
            except Exception:
                _logger.debug("position listener failed", exc_info=True)

    def subscribe(self, listener: PositionListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_location_change(self, location: str) -> MapPosition | None:
        """React to a new navigable location.

        Coordinates are applied only when they differ from the pair the
        previous location carried, so moving between paths with the same
        query does not pull the center back.  Returns the applied
        position, or ``None`` if nothing was applied.
        """
        position = parse_url_position(location)
        previous, self._url_position = self._url_position, position
        if position is None or position == previous:
            return None
        _logger.debug("map position from location %s", position)
        self.set_map_position(position)
        return position

    async def request_geolocation(self) -> Position | None:
        """Ask the provider for the device position and center on it.

        A provider failure is kept in :attr:`geolocation_error`; the center
        is left alone and ``None`` is returned.
        """
        if self._geolocation is None:
            self._geolocation_error = "Geolocation is not available"
            return None

        self._is_loading_position = True
        try:
            position = await self._geolocation.request_position()
        except GeolocationError as exc:
            _logger.debug("geolocation failed", exc_info=True)
            self._geolocation_error = str(exc)
            return None
        finally:
            self._is_loading_position = False

        self._geolocation_error = None
        self._geolocation_position = position
        _logger.debug("map position from geolocation %s", position.as_tuple())
        self.set_map_position(position.as_tuple())
        return position

    def start_geolocation(self) -> asyncio.Task[Position | None]:
        """Schedule :meth:`request_geolocation` on the running loop."""
        return asyncio.get_running_loop().create_task(self.request_geolocation())

    def handle_map_click(self, lat: float, lng: float) -> str:
        """Navigate to the record-entry view for the clicked point."""
        path = build_form_path(lat, lng)
        if self._navigate is not None:
            self._navigate(path)
        else:
            self.on_location_change(path)
        return path
