"""
Unit tests for the resolution 0 base cell tables.
"""

import pytest

from h3_grid import base_cells
from h3_grid.base_cells import (
    BASE_CELL_DATA,
    BASE_CELL_NEIGHBOR_60CCW_ROTS,
    BASE_CELL_NEIGHBORS,
    INVALID_BASE_CELL,
    PENTAGON_BASE_CELLS,
)
from h3_grid.constants import NUM_BASE_CELLS, NUM_PENTAGONS
from h3_grid.coordijk import CoordIJK, Direction
from h3_grid.errors import CellInvalidError, FailedError
from h3_grid.faceijk import FaceIJK

EXPECTED_PENTAGONS = (4, 14, 24, 38, 49, 58, 63, 72, 83, 97, 107, 117)


class TestBaseCellData:
    """Test base cell home data."""

    def test_table_sizes(self):
        assert len(BASE_CELL_DATA) == NUM_BASE_CELLS
        assert len(BASE_CELL_NEIGHBORS) == NUM_BASE_CELLS
        assert len(BASE_CELL_NEIGHBOR_60CCW_ROTS) == NUM_BASE_CELLS

    def test_pentagons(self):
        assert PENTAGON_BASE_CELLS == EXPECTED_PENTAGONS
        assert len(PENTAGON_BASE_CELLS) == NUM_PENTAGONS
        for bc in range(NUM_BASE_CELLS):
            assert base_cells.is_pentagon(bc) == (bc in EXPECTED_PENTAGONS)

    def test_is_pentagon_out_of_range(self):
        assert not base_cells.is_pentagon(-1)
        assert not base_cells.is_pentagon(NUM_BASE_CELLS)
        assert not base_cells.is_pentagon(INVALID_BASE_CELL)

    def test_polar_pentagons(self):
        polar = [bc for bc in range(NUM_BASE_CELLS) if base_cells.is_polar_pentagon(bc)]
        assert polar == [4, 117]

    def test_home_face_ijk(self):
        assert base_cells.home_face_ijk(0) == FaceIJK(1, CoordIJK(1, 0, 0))
        assert base_cells.home_face_ijk(4) == FaceIJK(0, CoordIJK(2, 0, 0))

    def test_home_face_ijk_is_a_copy(self):
        fijk = base_cells.home_face_ijk(0)
        fijk.coord.i = 2
        assert base_cells.home_face_ijk(0) == FaceIJK(1, CoordIJK(1, 0, 0))

    def test_home_face_ijk_invalid(self):
        with pytest.raises(CellInvalidError):
            base_cells.home_face_ijk(NUM_BASE_CELLS)

    def test_cw_offset(self):
        assert base_cells.base_cell_is_cw_offset(14, 2)
        assert base_cells.base_cell_is_cw_offset(14, 6)
        assert not base_cells.base_cell_is_cw_offset(14, 3)

    def test_cw_offset_hexagon(self):
        """Hexagons are never offset, whatever the face."""
        for face in range(20):
            assert not base_cells.base_cell_is_cw_offset(0, face)


class TestNeighbors:
    """Test base cell adjacency."""

    def test_center_is_self(self):
        for bc in range(NUM_BASE_CELLS):
            assert base_cells.base_cell_neighbor(bc, Direction.CENTER) == (bc, 0)

    def test_pentagon_deleted_direction(self):
        for bc in PENTAGON_BASE_CELLS:
            assert base_cells.base_cell_neighbor(bc, Direction.K_AXES) == (INVALID_BASE_CELL, -1)

    def test_hexagons_have_six_neighbors(self):
        for bc in range(NUM_BASE_CELLS):
            neighbors = [base_cells.base_cell_neighbor(bc, Direction(d))[0] for d in range(1, 7)]
            if bc in EXPECTED_PENTAGONS:
                assert neighbors.count(INVALID_BASE_CELL) == 1
            else:
                assert INVALID_BASE_CELL not in neighbors

    def test_symmetric(self):
        """If B neighbors A then A neighbors B."""
        for bc in range(NUM_BASE_CELLS):
            for d in range(1, 7):
                neighbor, rotations = base_cells.base_cell_neighbor(bc, Direction(d))
                if neighbor == INVALID_BASE_CELL:
                    continue
                assert 0 <= rotations < 6
                assert base_cells.base_cell_direction(neighbor, bc) != Direction.INVALID

    def test_direction(self):
        assert base_cells.base_cell_direction(0, 1) == Direction.K_AXES
        assert base_cells.base_cell_direction(0, 0) == Direction.CENTER
        assert base_cells.base_cell_direction(0, 121) == Direction.INVALID

    def test_invalid_direction(self):
        assert base_cells.base_cell_neighbor(0, Direction.INVALID) == (INVALID_BASE_CELL, -1)

    def test_invalid_base_cell(self):
        with pytest.raises(CellInvalidError):
            base_cells.base_cell_neighbor(NUM_BASE_CELLS, Direction.I_AXES)


class TestFaceLookup:
    """Test the resolution 0 face coordinate to base cell table."""

    def test_home_coordinates_round_trip(self):
        """Every base cell's home coordinate maps back to it without rotation."""
        for bc in range(NUM_BASE_CELLS):
            fijk = base_cells.home_face_ijk(bc)
            assert base_cells.face_ijk_to_base_cell(fijk) == bc
            assert base_cells.face_ijk_to_base_cell_ccw_rot60(fijk) == 0

    def test_every_base_cell_reachable(self):
        found = set()
        for face in range(20):
            for i in range(3):
                for j in range(3):
                    for k in range(3):
                        found.add(base_cells.face_ijk_to_base_cell(FaceIJK(face, CoordIJK(i, j, k))))
        assert found == set(range(NUM_BASE_CELLS))

    def test_shared_coordinate(self):
        """Face 0 (2, 1, 0) and face 4 (1, 0, 0) are the same base cell."""
        assert base_cells.face_ijk_to_base_cell(FaceIJK(0, CoordIJK(2, 1, 0))) == 15
        assert base_cells.face_ijk_to_base_cell(FaceIJK(4, CoordIJK(1, 0, 0))) == 15

    def test_out_of_table(self):
        with pytest.raises(FailedError):
            base_cells.face_ijk_to_base_cell(FaceIJK(0, CoordIJK(3, 0, 0)))
        with pytest.raises(FailedError):
            base_cells.face_ijk_to_base_cell_ccw_rot60(FaceIJK(0, CoordIJK(-1, 0, 0)))
