"""
Unit tests for the 64-bit cell index.
"""

import math

import pytest

from h3_grid import base_cells
from h3_grid.constants import (
    EARTH_RADIUS_KM,
    H3_CELL_MODE,
    HEXAGON_EDGE_LENGTH_AVG_KM,
    MAX_H3_RES,
    NUM_BASE_CELLS,
)
from h3_grid.coordijk import Direction
from h3_grid.errors import CellInvalidError, DomainError, FailedError
from h3_grid.h3_index import H3_INIT, H3Index
from h3_grid.latlng import LatLng

POINTS = [
    LatLng.from_degrees(37.775938728915946, -122.41795063018799),
    LatLng.from_degrees(52.0, 5.0),
    LatLng.from_degrees(-33.8688, 151.2093),
    LatLng.from_degrees(0.0, 0.0),
    LatLng.from_degrees(64.7, -147.4),
    LatLng.from_degrees(-77.8, 166.7),
    LatLng.from_degrees(12.5, 179.9),
]


class TestBitFields:
    """Test bit field accessors and mutators."""

    def test_init(self):
        h = H3Index.init(5, 10, Direction.CENTER)
        assert h.high_bit == 0
        assert h.mode == H3_CELL_MODE
        assert h.reserved_bits == 0
        assert h.resolution == 5
        assert h.base_cell == 10
        for r in range(1, 6):
            assert h.index_digit(r) == Direction.CENTER
        for r in range(6, MAX_H3_RES + 1):
            assert h.index_digit(r) is Direction.INVALID
        assert h.is_valid_cell()

    @pytest.mark.parametrize("base_cell", [-1, NUM_BASE_CELLS, 130])
    def test_init_bad_base_cell(self, base_cell):
        """Out of range base cells are rejected instead of masked into the field."""
        with pytest.raises(CellInvalidError):
            H3Index.init(3, base_cell, Direction.CENTER)

    @pytest.mark.parametrize("res", [-1, MAX_H3_RES + 1, 1.5])
    def test_init_bad_resolution(self, res):
        with pytest.raises(DomainError):
            H3Index.init(res, 10, Direction.CENTER)

    def test_init_range_edges(self):
        assert H3Index.init(MAX_H3_RES, NUM_BASE_CELLS - 1, Direction.CENTER).is_valid_cell()
        assert H3Index.init(0, 0, Direction.CENTER).is_valid_cell()

    def test_known_string(self):
        assert str(H3Index.init(0, 0, Direction.CENTER)) == "8001fffffffffff"
        assert str(H3Index.init(0, 4, Direction.CENTER)) == "8009fffffffffff"

    def test_default_value(self):
        h = H3Index()
        assert h.value == H3_INIT
        assert h.mode == 0
        assert not h.is_valid_cell()

    def test_setters_round_trip(self):
        h = H3Index.init(5, 10, Direction.CENTER)
        assert h.set_resolution(9).resolution == 9
        assert h.set_base_cell(121).base_cell == 121
        assert h.set_mode(2).mode == 2
        assert h.set_reserved_bits(5).reserved_bits == 5
        assert h.set_high_bit(1).high_bit == 1
        assert h.set_index_digit(3, Direction.IJ_AXES).index_digit(3) == Direction.IJ_AXES

    def test_setters_leave_other_fields(self):
        h = H3Index.init(5, 10, Direction.J_AXES)
        changed = h.set_base_cell(99)
        assert changed.resolution == 5
        assert changed.mode == H3_CELL_MODE
        assert all(changed.index_digit(r) == Direction.J_AXES for r in range(1, 6))

    def test_immutable(self):
        h = H3Index.init(5, 10, Direction.CENTER)
        h.set_resolution(3)
        assert h.resolution == 5

    def test_value_fits_64_bits(self):
        with pytest.raises(DomainError):
            H3Index(-1)
        with pytest.raises(DomainError):
            H3Index(1 << 64)

    def test_leading_non_zero_digit(self):
        h = H3Index.init(4, 0, Direction.CENTER).set_index_digit(3, Direction.JK_AXES)
        assert h.leading_non_zero_digit() == Direction.JK_AXES
        assert H3Index.init(4, 0, Direction.CENTER).leading_non_zero_digit() == Direction.CENTER


class TestText:
    """Test the text form of an index."""

    def test_round_trip(self):
        h = H3Index.init(9, 20, Direction.IK_AXES)
        assert H3Index.from_string(str(h)) == h
        assert H3Index.from_string(str(h).upper()) == h

    def test_decimal(self):
        h = H3Index.init(2, 3, Direction.I_AXES)
        assert H3Index.from_string(str(int(h)), base=10) == h

    @pytest.mark.parametrize("text", ["", "zz", "not a cell", "1" * 17])
    def test_unparseable(self, text):
        with pytest.raises(FailedError):
            H3Index.from_string(text)

    def test_ordering_and_hash(self):
        a = H3Index.init(1, 0, Direction.CENTER)
        b = H3Index.init(1, 1, Direction.CENTER)
        assert a < b
        assert len({a, b, H3Index(a.value)}) == 2


class TestValidity:
    """Test structural validity checks."""

    def test_all_base_cells_valid(self):
        for h in H3Index.res0_cells():
            assert h.is_valid_cell()

    def test_high_bit(self):
        assert not H3Index.init(1, 0, Direction.CENTER).set_high_bit(1).is_valid_cell()

    def test_mode(self):
        assert not H3Index.init(1, 0, Direction.CENTER).set_mode(2).is_valid_cell()

    def test_reserved_bits(self):
        assert not H3Index.init(1, 0, Direction.CENTER).set_reserved_bits(1).is_valid_cell()

    def test_base_cell_range(self):
        assert not H3Index.init(1, 0, Direction.CENTER).set_base_cell(NUM_BASE_CELLS).is_valid_cell()

    def test_invalid_digit_within_resolution(self):
        assert not H3Index.init(3, 0, Direction.CENTER).set_index_digit(2, 7).is_valid_cell()

    def test_unused_digit_set(self):
        assert not H3Index.init(3, 0, Direction.CENTER).set_index_digit(4, Direction.CENTER).is_valid_cell()

    def test_pentagon_deleted_subsequence(self):
        assert not H3Index.init(1, 4, Direction.K_AXES).is_valid_cell()
        assert not H3Index.init(3, 4, Direction.CENTER).set_index_digit(2, Direction.K_AXES).is_valid_cell()
        # only the leading digit is restricted
        assert H3Index.init(3, 4, Direction.I_AXES).set_index_digit(2, Direction.K_AXES).is_valid_cell()

    def test_hexagon_k_digit(self):
        assert H3Index.init(1, 0, Direction.K_AXES).is_valid_cell()


class TestRotation:
    """Test digit rotation on whole indexes."""

    def test_ccw_then_cw(self):
        h = H3Index.init(6, 0, Direction.I_AXES).set_index_digit(3, Direction.JK_AXES)
        assert h.rotate_60ccw().rotate_60cw() == h

    def test_six_rotations(self):
        h = H3Index.init(4, 0, Direction.J_AXES)
        r = h
        for _ in range(6):
            r = r.rotate_60ccw()
        assert r == h

    def test_rotate_single_digit(self):
        h = H3Index.init(1, 0, Direction.I_AXES)
        assert h.rotate_60ccw().index_digit(1) == Direction.IJ_AXES
        assert h.rotate_60cw().index_digit(1) == Direction.IK_AXES

    def test_pentagon_rotation_skips_k(self):
        """A pentagon digit rotated onto the k-axis rotates once more."""
        h = H3Index.init(1, 14, Direction.JK_AXES)
        rotated = h.rotate_pent_60ccw()
        assert rotated.index_digit(1) == Direction.IK_AXES
        assert rotated.is_valid_cell()

        h = H3Index.init(1, 14, Direction.IK_AXES)
        rotated = h.rotate_pent_60cw()
        assert rotated.index_digit(1) == Direction.JK_AXES
        assert rotated.is_valid_cell()

    def test_unused_digits_unchanged(self):
        h = H3Index.init(2, 0, Direction.I_AXES).rotate_60ccw()
        assert all(h.index_digit(r) is Direction.INVALID for r in range(3, MAX_H3_RES + 1))


class TestPentagons:
    """Test pentagon detection."""

    def test_pentagon_cells(self):
        for res in (0, 1, 5, MAX_H3_RES):
            pentagons = H3Index.pentagons(res)
            assert len(pentagons) == 12
            for h in pentagons:
                assert h.is_pentagon()
                assert h.is_valid_cell()
                assert h.resolution == res

    def test_pentagon_base_cell_hexagon_child(self):
        h = H3Index.init(3, 4, Direction.CENTER).set_index_digit(3, Direction.J_AXES)
        assert h.base_cell_is_pentagon()
        assert not h.is_pentagon()

    def test_hexagon(self):
        assert not H3Index.init(3, 0, Direction.CENTER).is_pentagon()


class TestHierarchy:
    """Test parent and child relationships."""

    def test_parent(self):
        h = H3Index.from_latlng(POINTS[0], 9)
        parent = h.parent(5)
        assert parent.resolution == 5
        assert parent.is_valid_cell()
        assert h.parent(9) == h
        assert h.parent(0).base_cell == h.base_cell
        for r in range(1, 6):
            assert parent.index_digit(r) == h.index_digit(r)

    def test_parent_matches_coarser_index(self):
        """The parent of a cell contains the cell center at its own resolution."""
        for p in POINTS:
            h = H3Index.from_latlng(p, 8)
            assert H3Index.from_latlng(h.to_latlng(), 8) == h
            assert h.parent(7) == h.parent(8).parent(7)

    def test_parent_errors(self):
        h = H3Index.init(5, 0, Direction.CENTER)
        with pytest.raises(DomainError):
            h.parent(6)
        with pytest.raises(DomainError):
            h.parent(-1)
        with pytest.raises(DomainError):
            h.parent(16)

    def test_center_child(self):
        h = H3Index.init(3, 20, Direction.J_AXES)
        child = h.center_child(7)
        assert child.resolution == 7
        assert child.parent(3) == h
        assert all(child.index_digit(r) == Direction.CENTER for r in range(4, 8))
        assert h.center_child(3) == h
        with pytest.raises(DomainError):
            h.center_child(2)

    def test_children_hexagon(self):
        h = H3Index.init(0, 0, Direction.CENTER)
        children = h.children(1)
        assert len(children) == 7
        assert len(set(children)) == 7
        for child in children:
            assert child.is_valid_cell()
            assert child.parent(0) == h
        assert children[0] == h.center_child(1)

    def test_children_pentagon(self):
        h = H3Index.init(0, 4, Direction.CENTER)
        children = h.children(1)
        assert len(children) == 6
        assert all(child.is_valid_cell() for child in children)
        assert len(h.children(2)) == 41

    def test_children_same_res(self):
        h = H3Index.init(2, 0, Direction.I_AXES)
        assert h.children(2) == [h]

    def test_children_errors(self):
        with pytest.raises(DomainError):
            H3Index.init(2, 0, Direction.CENTER).children(1)


class TestCounts:
    """Test cell counts and listings."""

    def test_num_cells(self):
        assert H3Index.num_cells(0) == 122
        assert H3Index.num_cells(1) == 842
        assert H3Index.num_cells(15) == 569707381193162
        with pytest.raises(DomainError):
            H3Index.num_cells(16)

    def test_res0_cells(self):
        cells = H3Index.res0_cells()
        assert len(cells) == NUM_BASE_CELLS
        assert [h.base_cell for h in cells] == list(range(NUM_BASE_CELLS))

    def test_children_count_matches_num_cells(self):
        total = sum(len(h.children(1)) for h in H3Index.res0_cells())
        assert total == H3Index.num_cells(1)


class TestGeometry:
    """Test conversions between indexes and points."""

    def test_resolution_errors(self):
        with pytest.raises(DomainError):
            H3Index.from_latlng(POINTS[0], 16)
        with pytest.raises(DomainError):
            H3Index.from_latlng(POINTS[0], -1)

    def test_non_finite(self):
        with pytest.raises(DomainError):
            H3Index.from_latlng(LatLng(lat=math.nan, lng=0.0), 5)
        with pytest.raises(DomainError):
            H3Index.from_latlng(LatLng(lat=0.0, lng=math.inf), 5)

    @pytest.mark.parametrize("res", [0, 1, 2, 5, 9, 15])
    def test_center_round_trip(self, res):
        for p in POINTS:
            h = H3Index.from_latlng(p, res)
            assert h.is_valid_cell()
            assert h.resolution == res
            assert H3Index.from_latlng(h.to_latlng(), res) == h

    @pytest.mark.parametrize("res", [0, 3, 6, 10])
    def test_point_near_center(self, res):
        """Points index to a cell whose center is within a few edge lengths."""
        edge_rads = HEXAGON_EDGE_LENGTH_AVG_KM[res] / EARTH_RADIUS_KM
        for p in POINTS:
            center = H3Index.from_latlng(p, res).to_latlng()
            assert p.great_circle_distance_rads(center) < 3 * edge_rads

    def test_base_cell_centers(self):
        for h in H3Index.res0_cells():
            assert H3Index.from_latlng(h.to_latlng(), 0) == h

    def test_face_ijk_round_trip(self):
        for bc in range(NUM_BASE_CELLS):
            h = H3Index.init(0, bc, Direction.CENTER)
            assert h.to_face_ijk() == base_cells.home_face_ijk(bc)
            assert H3Index.from_face_ijk(base_cells.home_face_ijk(bc), 0) == h

    def test_invalid_cell_geometry(self):
        with pytest.raises(CellInvalidError):
            H3Index().to_latlng()
        with pytest.raises(CellInvalidError):
            H3Index().to_boundary()


class TestBoundary:
    """Test cell boundaries."""

    def test_hexagon_res0(self):
        assert H3Index.init(0, 0, Direction.CENTER).to_boundary().num_verts == 6

    def test_pentagon_res0(self):
        assert H3Index.init(0, 4, Direction.CENTER).to_boundary().num_verts == 5

    def test_pentagon_class_iii(self):
        """Class III pentagons pick up a distortion vertex on each edge."""
        for h in H3Index.pentagons(1):
            assert h.to_boundary().num_verts == 10

    def test_vertex_counts(self):
        for h in H3Index.res0_cells():
            for child in h.children(1):
                assert 5 <= child.to_boundary().num_verts <= 10


class TestArea:
    """Test exact cell areas."""

    def test_positive(self):
        for p in POINTS:
            for res in (0, 5, 10, 15):
                assert H3Index.from_latlng(p, res).cell_area_rads2() > 0

    @pytest.mark.parametrize("res", [0, 1])
    def test_cells_cover_sphere(self, res):
        """Areas of every cell at a resolution sum to the sphere."""
        cells = H3Index.res0_cells()
        if res:
            cells = [child for h in cells for child in h.children(res)]
        total = sum(h.cell_area_rads2() for h in cells)
        assert total == pytest.approx(4 * math.pi, rel=1e-9)

    def test_children_area_near_parent(self):
        """The seven children of a base cell cover about the parent's area."""
        parent = H3Index.init(0, 0, Direction.CENTER)
        children_area = sum(child.cell_area_rads2() for child in parent.children(1))
        assert children_area == pytest.approx(parent.cell_area_rads2(), rel=0.05)

    def test_units(self):
        h = H3Index.init(2, 10, Direction.CENTER)
        rads2 = h.cell_area_rads2()
        km2 = h.cell_area_km2()
        assert km2 == pytest.approx(rads2 * EARTH_RADIUS_KM**2)
        assert h.cell_area_m2() == pytest.approx(km2 * 1e6)
