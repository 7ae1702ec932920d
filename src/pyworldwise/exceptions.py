"""Custom exception hierarchy for pyworldwise."""

from __future__ import annotations


class WorldwiseError(Exception):
    """Base exception for all pyworldwise errors."""


class WorldwiseConfigError(WorldwiseError):
    """Invalid or missing configuration."""


class StoreOperationError(WorldwiseError):
    """A remote store call failed (network, non-2xx, invalid JSON).

    The collection service converts these into a fixed per-operation
    message; callers of the service never see them.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CityNotFoundError(StoreOperationError):
    """Single-row lookup matched no row."""


class InvariantViolation(WorldwiseError):
    """An action outside the declared variant set reached the reducer.

    This is a programming defect, not a runtime condition.
    """


class GeolocationError(WorldwiseError):
    """The geolocation provider could not resolve a position."""
