"""
Functional API over cell ids.

Cells are accepted as hexadecimal strings, integers or H3Index values and are
returned as lowercase hexadecimal strings. Coordinates are in degrees.
"""

from typing import Union

from h3_grid.constants import (
    HEXAGON_AREA_AVG_M2,
    HEXAGON_EDGE_LENGTH_AVG_KM,
    HEXAGON_EDGE_LENGTH_AVG_M,
)
from h3_grid.h3_index import H3Index, _check_res
from h3_grid.latlng import LatLng

CellLike = Union[str, int, H3Index]

_AREA_UNITS = ("km^2", "m^2", "rads^2")
_LENGTH_UNITS = ("km", "m", "rads")


def to_index(cell: CellLike) -> H3Index:
    """
    Coerce a cell id into an H3Index.

    :param cell: Hexadecimal string, integer or H3Index.
    :return: The index; not validated.
    :raises FailedError: If a string cannot be parsed.
    """
    if isinstance(cell, H3Index):
        return cell
    if isinstance(cell, int):
        return H3Index(cell)
    return H3Index.from_string(cell)


def str_to_int(cell: str) -> int:
    """Convert a hexadecimal cell id to its integer value."""
    return H3Index.from_string(cell).value


def int_to_str(cell: int) -> str:
    """Convert an integer cell id to its hexadecimal form."""
    return str(H3Index(cell))


def latlng_to_cell(lat: float, lng: float, res: int) -> str:
    """
    Find the cell containing a point.

    :param lat: Latitude in degrees.
    :param lng: Longitude in degrees.
    :param res: Cell resolution.
    :return: The containing cell.
    """
    return str(H3Index.from_latlng(LatLng.from_degrees(lat, lng), res))


def cell_to_latlng(cell: CellLike) -> tuple[float, float]:
    """
    Find the center of a cell.

    :return: Tuple of (lat, lng) in degrees.
    """
    return to_index(cell).to_latlng().to_degrees()


def cell_to_boundary(cell: CellLike) -> tuple[tuple[float, float], ...]:
    """
    Find the boundary of a cell.

    :return: Tuple of (lat, lng) vertices in degrees, not closed.
    """
    return tuple(to_index(cell).to_boundary().to_degrees())


def get_resolution(cell: CellLike) -> int:
    return to_index(cell).resolution


def get_base_cell_number(cell: CellLike) -> int:
    return to_index(cell).base_cell


def is_valid_cell(cell: CellLike) -> bool:
    """Whether the cell id is a valid cell. Unparseable text is not valid."""
    try:
        return to_index(cell).is_valid_cell()
    except ValueError:
        return False


def is_pentagon(cell: CellLike) -> bool:
    return to_index(cell).is_pentagon()


def cell_to_parent(cell: CellLike, res: int | None = None) -> str:
    """
    Find the parent of a cell.

    :param cell: The cell.
    :param res: Parent resolution; defaults to one coarser than the cell.
    :return: The parent cell.
    """
    h = to_index(cell)
    if res is None:
        res = h.resolution - 1
    return str(h.parent(res))


def cell_to_children(cell: CellLike, res: int | None = None) -> list[str]:
    """
    Find the children of a cell.

    :param cell: The cell.
    :param res: Child resolution; defaults to one finer than the cell.
    :return: The child cells.
    """
    h = to_index(cell)
    if res is None:
        res = h.resolution + 1
    return [str(child) for child in h.children(res)]


def cell_to_center_child(cell: CellLike, res: int | None = None) -> str:
    h = to_index(cell)
    if res is None:
        res = h.resolution + 1
    return str(h.center_child(res))


def cell_area(cell: CellLike, unit: str = "km^2") -> float:
    """
    Exact area of a cell.

    :param cell: The cell.
    :param unit: One of "km^2", "m^2" or "rads^2".
    :return: The area in the given unit.
    :raises ValueError: If the unit is not recognized.
    """
    h = to_index(cell)
    if unit == "km^2":
        return h.cell_area_km2()
    if unit == "m^2":
        return h.cell_area_m2()
    if unit == "rads^2":
        return h.cell_area_rads2()
    raise ValueError(f"Unknown area unit {unit!r}; expected one of {_AREA_UNITS}")


def average_hexagon_area(res: int, unit: str = "km^2") -> float:
    """
    Average hexagon area at a resolution.

    :param res: Cell resolution.
    :param unit: "km^2" or "m^2".
    :return: The average area in the given unit.
    """
    _check_res(res)
    if unit == "km^2":
        return HEXAGON_AREA_AVG_M2[res] / 1.0e6
    if unit == "m^2":
        return HEXAGON_AREA_AVG_M2[res]
    raise ValueError(f"Unknown area unit {unit!r}; expected one of {_AREA_UNITS[:2]}")


def average_hexagon_edge_length(res: int, unit: str = "km") -> float:
    """
    Average hexagon edge length at a resolution.

    :param res: Cell resolution.
    :param unit: "km" or "m".
    :return: The average edge length in the given unit.
    """
    _check_res(res)
    if unit == "km":
        return HEXAGON_EDGE_LENGTH_AVG_KM[res]
    if unit == "m":
        return HEXAGON_EDGE_LENGTH_AVG_M[res]
    raise ValueError(f"Unknown length unit {unit!r}; expected one of {_LENGTH_UNITS[:2]}")


def great_circle_distance(
    latlng1: tuple[float, float], latlng2: tuple[float, float], unit: str = "km"
) -> float:
    """
    Great circle distance between two points given in degrees.

    :param latlng1: First (lat, lng) point.
    :param latlng2: Second (lat, lng) point.
    :param unit: One of "km", "m" or "rads".
    :return: The distance in the given unit.
    """
    a = LatLng.from_degrees(*latlng1)
    b = LatLng.from_degrees(*latlng2)
    if unit == "km":
        return a.great_circle_distance_km(b)
    if unit == "m":
        return a.great_circle_distance_m(b)
    if unit == "rads":
        return a.great_circle_distance_rads(b)
    raise ValueError(f"Unknown length unit {unit!r}; expected one of {_LENGTH_UNITS}")


def get_res0_cells() -> list[str]:
    return [str(h) for h in H3Index.res0_cells()]


def get_pentagons(res: int) -> list[str]:
    return [str(h) for h in H3Index.pentagons(res)]


def get_num_cells(res: int) -> int:
    return H3Index.num_cells(res)
