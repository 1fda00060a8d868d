"""Shared model definition."""

from enum import Enum


class GeomFormatEnum(str, Enum):
    """Enum class containing all supported export geometry formats."""

    WKT = "WKT"
    WKB = "WKB"
    GEOJSON = "GEOJSON"
