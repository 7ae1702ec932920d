"""pyworldwise - Async client for a visited-cities collection and its map."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyworldwise")
except PackageNotFoundError:
    __version__ = "0+local"
from pyworldwise._store import PostgrestStore, RemoteStore
from pyworldwise.client import WorldwiseClient
from pyworldwise.config import WorldwiseConfig
from pyworldwise.exceptions import (
    CityNotFoundError,
    GeolocationError,
    InvariantViolation,
    StoreOperationError,
    WorldwiseConfigError,
    WorldwiseError,
)
from pyworldwise.models import City, NewCity, Position
from pyworldwise.position import GeolocationProvider, PositionResolver, StaticGeolocationProvider
from pyworldwise.service import CitiesService
from pyworldwise.state.actions import Action, ActionType, parse_action
from pyworldwise.state.reducer import CollectionState, reduce
from pyworldwise.state.store import CitiesStore

__all__ = [
    "__version__",
    "Action",
    "ActionType",
    "CitiesService",
    "CitiesStore",
    "City",
    "CityNotFoundError",
    "CollectionState",
    "GeolocationError",
    "GeolocationProvider",
    "InvariantViolation",
    "NewCity",
    "Position",
    "PositionResolver",
    "PostgrestStore",
    "RemoteStore",
    "StaticGeolocationProvider",
    "StoreOperationError",
    "WorldwiseClient",
    "WorldwiseConfig",
    "WorldwiseConfigError",
    "WorldwiseError",
    "parse_action",
    "reduce",
]
