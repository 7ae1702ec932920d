"""Internal constants shared across the library."""

from __future__ import annotations

CITIES_TABLE = "cities"
REST_PREFIX = "/rest/v1"

DEFAULT_MAP_POSITION: tuple[float, float] = (40.0, 0.0)

#: Path of the record-entry view a map click navigates to.
FORM_PATH = "form"

# Fixed messages stored in ``CollectionState.error``.  The underlying cause
# is only logged.
ERROR_LOADING_CITIES = "There was an error loading cities..."
ERROR_LOADING_CITY = "There was an error loading the city..."
ERROR_CREATING_CITY = "There was an error creating the city..."
ERROR_DELETING_CITY = "There was an error deleting the city..."
