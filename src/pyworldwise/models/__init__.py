"""Data models for city records."""

from pyworldwise.models._base import WorldwiseBaseModel
from pyworldwise.models.city import City, NewCity, Position

__all__ = [
    "City",
    "NewCity",
    "Position",
    "WorldwiseBaseModel",
]
