"""Base model for records exchanged with the remote table.

Every record model inherits from :class:`WorldwiseBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase column names
  (``cityName``) map automatically to snake_case fields.
* Frozen instances, so a record handed to the state store can never
  change underneath it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WorldwiseBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
