"""Spark DataFrame UDFs."""

from pyspark.sql.functions import udf
from pyspark.sql.types import BinaryType, DoubleType, IntegerType, StringType

from h3_grid import cells
from h3_grid.utils import geospatial


@udf(returnType=StringType())
def get_parent_h3(h3_index: str, res: int) -> str | None:
    """
    Get the parent of the H3 index at the given resolution.

    :param h3_index: H3 index - any resolution.
    :param res: Parent resolution.
    :return: parent H3 index at the given resolution
    """
    if h3_index is None or res is None:
        return None
    return cells.cell_to_parent(h3_index, res)


@udf(returnType=BinaryType())
def h3_to_wkb(h3_index: str) -> bytes | None:
    """
    Convert H3 index to WKB geometry bytes.

    :param h3_index: H3 cell index as string.
    :return: WKB representation of the H3 cell boundary as bytes.
    """
    if h3_index is None:
        return None
    return geospatial.h3_to_wkb(h3_index)


@udf(returnType=StringType())
def h3_to_wkt(h3_index: str) -> str | None:
    """
    Convert H3 index to WKT geometry.

    :param h3_index: H3 cell index as string.
    :return: WKT representation of the H3 cell boundary.
    """
    if h3_index is None:
        return None
    return geospatial.h3_to_wkt(h3_index)


@udf(returnType=DoubleType())
def h3_area_km2(h3_index: str) -> float | None:
    """
    Exact area of the H3 cell.

    :param h3_index: H3 cell index as string.
    :return: Area in square kilometers.
    """
    if h3_index is None:
        return None
    return cells.cell_area(h3_index, unit="km^2")


@udf(returnType=StringType())
def latlng_to_h3(lat: float, lng: float, res: int) -> str | None:
    """
    Index a point at the given resolution.

    :param lat: Latitude in degrees.
    :param lng: Longitude in degrees.
    :param res: H3 resolution.
    :return: H3 index of the containing cell.
    """
    if lat is None or lng is None or res is None:
        return None
    return cells.latlng_to_cell(lat, lng, res)


@udf(returnType=IntegerType())
def h3_resolution(h3_index: str) -> int | None:
    """Resolution of the H3 index."""
    if h3_index is None:
        return None
    return cells.get_resolution(h3_index)
