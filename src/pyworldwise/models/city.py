"""City record models.

The remote table stores coordinates as flat ``lat``/``lng`` columns while
the in-memory record nests them under ``position``.  :meth:`City.from_row`
and :meth:`NewCity.to_row` are the only places that translate between
the two shapes.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from pyworldwise.models._base import WorldwiseBaseModel


class Position(WorldwiseBaseModel):
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class NewCity(WorldwiseBaseModel):
    """A city record that has not been stored yet.

    Parameters
    ----------
    city_name : str
        Display name of the place.
    country : str
        Country name.
    emoji : str
        Flag emoji for the country.
    date : str
        Visit date, as entered by the user.
    notes : str
        Free-form notes.
    position : Position
        Where the place is.
    """

    city_name: str = ""
    country: str = ""
    emoji: str = ""
    date: str = ""
    notes: str = ""
    position: Position

    @field_validator("city_name", "country", "emoji", "date", "notes", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="before")
    @classmethod
    def _nest_position(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "position" in values:
            return values
        if "lat" in values and "lng" in values:
            nested = dict(values)
            nested["position"] = {"lat": nested.pop("lat"), "lng": nested.pop("lng")}
            return nested
        return values

    def to_row(self, record_id: str | None = None) -> dict[str, Any]:
        """Flatten into the table's column layout.

        ``id`` is only included when *record_id* is given; otherwise the
        table assigns one.
        """
        row: dict[str, Any] = {}
        if record_id is not None:
            row["id"] = record_id
        row.update(self.model_dump(by_alias=True, exclude={"position"}))
        row["lat"] = self.position.lat
        row["lng"] = self.position.lng
        return row


class City(NewCity):
    """A stored city record (``id`` assigned)."""

    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Integer/UUID primary keys come back as non-strings.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> City:
        """Build a record from a table row, nesting ``lat``/``lng``."""
        return cls.model_validate(row)

    def to_row(self, record_id: str | None = None) -> dict[str, Any]:
        return super().to_row(record_id if record_id is not None else self.id)
