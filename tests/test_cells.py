"""
Unit tests for the functional cell API.
"""

import pytest

from h3_grid import cells
from h3_grid.constants import EARTH_RADIUS_KM
from h3_grid.errors import DomainError, FailedError, H3Error
from h3_grid.h3_index import H3Index

CELL = cells.latlng_to_cell(37.775938728915946, -122.41795063018799, 9)


class TestConversion:
    """Test accepted cell forms."""

    def test_string_and_int(self):
        value = cells.str_to_int(CELL)
        assert cells.int_to_str(value) == CELL
        assert cells.get_resolution(value) == cells.get_resolution(CELL) == 9
        assert cells.to_index(H3Index(value)) == cells.to_index(CELL)

    def test_unparseable(self):
        with pytest.raises(FailedError):
            cells.to_index("xyz")
        assert not cells.is_valid_cell("xyz")

    def test_errors_are_value_errors(self):
        """Grid errors can be caught as ValueError."""
        assert issubclass(H3Error, ValueError)
        with pytest.raises(ValueError) as exc_info:
            cells.latlng_to_cell(0.0, 0.0, 16)
        assert isinstance(exc_info.value, DomainError)
        assert exc_info.value.message


class TestHierarchyDefaults:
    """Test default resolutions of hierarchy functions."""

    def test_parent_default(self):
        assert cells.get_resolution(cells.cell_to_parent(CELL)) == 8

    def test_children_default(self):
        children = cells.cell_to_children(CELL)
        assert len(children) == 7
        assert all(cells.cell_to_parent(child) == CELL for child in children)
        assert cells.cell_to_center_child(CELL) == children[0]

    def test_res0_parent(self):
        with pytest.raises(DomainError):
            cells.cell_to_parent(cells.get_res0_cells()[0])


class TestMetrics:
    """Test unit handling of metric functions."""

    def test_cell_area_units(self):
        km2 = cells.cell_area(CELL, unit="km^2")
        assert cells.cell_area(CELL, unit="m^2") == pytest.approx(km2 * 1e6)
        assert cells.cell_area(CELL, unit="rads^2") == pytest.approx(km2 / EARTH_RADIUS_KM**2)
        with pytest.raises(ValueError):
            cells.cell_area(CELL, unit="acres")

    def test_cell_area_near_average(self):
        assert cells.cell_area(CELL) == pytest.approx(cells.average_hexagon_area(9), rel=0.5)

    def test_average_area(self):
        assert cells.average_hexagon_area(0) == pytest.approx(4357449.416078390)
        assert cells.average_hexagon_area(0, unit="m^2") == pytest.approx(4.357449416078390e12)
        with pytest.raises(ValueError):
            cells.average_hexagon_area(0, unit="rads^2")
        with pytest.raises(DomainError):
            cells.average_hexagon_area(16)

    @pytest.mark.parametrize("res", [1.5, "3", None])
    def test_metrics_reject_non_integer_resolution(self, res):
        with pytest.raises(DomainError):
            cells.average_hexagon_area(res)
        with pytest.raises(DomainError):
            cells.average_hexagon_edge_length(res)

    def test_average_edge_length(self):
        assert cells.average_hexagon_edge_length(0) == pytest.approx(1107.712591)
        assert cells.average_hexagon_edge_length(0, unit="m") == pytest.approx(1107712.591)
        with pytest.raises(ValueError):
            cells.average_hexagon_edge_length(0, unit="mi")

    def test_great_circle_distance(self):
        a, b = (0.0, 0.0), (0.0, 90.0)
        assert cells.great_circle_distance(a, b, unit="rads") == pytest.approx(1.5707963267948966)
        km = cells.great_circle_distance(a, b)
        assert km == pytest.approx(1.5707963267948966 * EARTH_RADIUS_KM)
        assert cells.great_circle_distance(a, b, unit="m") == pytest.approx(km * 1000)
        with pytest.raises(ValueError):
            cells.great_circle_distance(a, b, unit="ft")


class TestListings:
    """Test cell listings."""

    def test_res0_cells(self):
        res0 = cells.get_res0_cells()
        assert len(res0) == 122
        assert res0[0] == "8001fffffffffff"

    def test_pentagons(self):
        pentagons = cells.get_pentagons(3)
        assert len(pentagons) == 12
        assert all(cells.is_pentagon(p) for p in pentagons)

    def test_num_cells(self):
        assert cells.get_num_cells(2) == 5882
