"""
Unit tests for icosahedron face coordinates, projection and overage handling.
"""

import math

import pytest

from h3_grid.constants import M_SQRT7, NUM_ICOSA_FACES, RES0_U_GNOMONIC
from h3_grid.coordijk import CoordIJK
from h3_grid.faceijk import (
    ADJACENT_FACE_DIR,
    FACE_CENTER_GEO,
    FACE_NEIGHBORS,
    IJ,
    JK,
    KI,
    FaceIJK,
    Overage,
    geo_to_closest_face,
    geo_to_hex2d,
    hex2d_to_geo,
    is_resolution_class_iii,
)
from h3_grid.latlng import LatLng
from h3_grid.vec2d import Vec2d


class TestFaceTables:
    """Test static face adjacency tables for internal consistency."""

    def test_adjacency_is_mutual(self):
        """Each face has exactly three neighbors and adjacency is symmetric."""
        for face in range(NUM_ICOSA_FACES):
            neighbors = [f for f in range(NUM_ICOSA_FACES) if ADJACENT_FACE_DIR[face][f] > 0]
            assert len(neighbors) == 3
            assert ADJACENT_FACE_DIR[face][face] == 0
            for f in neighbors:
                assert ADJACENT_FACE_DIR[f][face] > 0

    def test_neighbor_table_matches_adjacency(self):
        """FACE_NEIGHBORS[face][quadrant] names the face in that quadrant."""
        for face in range(NUM_ICOSA_FACES):
            assert FACE_NEIGHBORS[face][0].face == face
            for quadrant in (IJ, KI, JK):
                other = FACE_NEIGHBORS[face][quadrant].face
                assert ADJACENT_FACE_DIR[face][other] == quadrant
                assert 0 < FACE_NEIGHBORS[face][quadrant].ccw_rot60 < 6


class TestProjection:
    """Test gnomonic projection between hex2d and the sphere."""

    def test_closest_face_of_face_centers(self):
        for face, center in enumerate(FACE_CENTER_GEO):
            found, sqd = geo_to_closest_face(center)
            assert found == face
            assert sqd == pytest.approx(0.0, abs=1e-12)

    def test_origin_is_face_center(self):
        for face in range(NUM_ICOSA_FACES):
            assert hex2d_to_geo(Vec2d(0.0, 0.0), face, 3, False) == FACE_CENTER_GEO[face]

    def test_base_cell_zero_center(self):
        """Face 1 coordinate (1, 0, 0) is one res 0 step from the face center."""
        center = FaceIJK(1, CoordIJK(1, 0, 0)).to_geo(0)
        distance = FACE_CENTER_GEO[1].great_circle_distance_rads(center)
        assert distance == pytest.approx(math.atan(RES0_U_GNOMONIC), abs=1e-9)

    def test_face_center_encodes_to_origin(self):
        for face, center in enumerate(FACE_CENTER_GEO):
            for res in (0, 1, 5, 15):
                fijk = FaceIJK.from_geo(center, res)
                assert fijk == FaceIJK(face, CoordIJK(0, 0, 0))

    @pytest.mark.parametrize("res", [0, 1, 2, 3, 8, 9])
    def test_hex2d_round_trip(self, res):
        """Projecting a point out and back recovers its planar position."""
        v = Vec2d(0.4, 0.3)
        face = 7
        g = hex2d_to_geo(v, face, res, False)
        found_face, back = geo_to_hex2d(g, res)
        assert found_face == face
        assert back.x == pytest.approx(v.x, abs=1e-9 * M_SQRT7**res)
        assert back.y == pytest.approx(v.y, abs=1e-9 * M_SQRT7**res)

    @pytest.mark.parametrize("res", [1, 2, 4, 7])
    def test_cell_center_round_trip(self, res):
        for coord in (CoordIJK(0, 0, 0), CoordIJK(1, 0, 0), CoordIJK(0, 2, 1), CoordIJK(2, 1, 0)):
            fijk = FaceIJK(12, coord)
            assert FaceIJK.from_geo(fijk.to_geo(res), res) == fijk

    def test_class_iii(self):
        assert is_resolution_class_iii(1)
        assert not is_resolution_class_iii(0)
        assert not is_resolution_class_iii(14)
        assert is_resolution_class_iii(15)


class TestOverage:
    """Test moving coordinates past a face's extent onto the neighboring face."""

    def test_no_overage(self):
        fijk = FaceIJK(0, CoordIJK(1, 0, 0))
        assert fijk.adjust_overage_cII(0, False, False) is Overage.NO_OVERAGE
        assert fijk == FaceIJK(0, CoordIJK(1, 0, 0))

    def test_new_face(self):
        """Face 0 (2, 1, 0) lies in the IJ quadrant and belongs to face 4."""
        fijk = FaceIJK(0, CoordIJK(2, 1, 0))
        assert fijk.adjust_overage_cII(0, False, False) is Overage.NEW_FACE
        assert fijk == FaceIJK(4, CoordIJK(1, 0, 0))

    def test_face_edge_on_substrate(self):
        fijk = FaceIJK(0, CoordIJK(6, 0, 0))
        assert fijk.adjust_overage_cII(0, False, True) is Overage.FACE_EDGE
        assert fijk.face == 0

    def test_face_edge_not_reported_off_substrate(self):
        fijk = FaceIJK(0, CoordIJK(2, 0, 0))
        assert fijk.adjust_overage_cII(0, False, False) is Overage.NO_OVERAGE

    def test_pentagon_leading_four_rotates_before_hop(self):
        """The KI quadrant hop rotates about the pentagon center when flagged."""
        plain = FaceIJK(0, CoordIJK(2, 0, 1))
        rotated = FaceIJK(0, CoordIJK(2, 0, 1))
        assert plain.adjust_overage_cII(0, False, False) is Overage.NEW_FACE
        assert rotated.adjust_overage_cII(0, True, False) is Overage.NEW_FACE
        assert plain.face == rotated.face == FACE_NEIGHBORS[0][KI].face
        assert plain.coord != rotated.coord

    def test_pent_vert_overage_settles(self):
        fijk = FaceIJK(0, CoordIJK(6, 0, 0))
        assert fijk.adjust_pent_vert_overage(0) is not Overage.NEW_FACE


class TestVertices:
    """Test substrate vertex generation and boundaries."""

    def test_class_ii_verts(self):
        verts, adj_res = FaceIJK(1, CoordIJK(1, 0, 0)).to_verts(0)
        assert adj_res == 0
        assert len(verts) == 6
        assert all(v.face == 1 for v in verts)

    def test_class_iii_verts(self):
        verts, adj_res = FaceIJK(1, CoordIJK(1, 0, 0)).to_verts(1)
        assert adj_res == 2
        assert len(verts) == 6

    def test_pent_verts(self):
        verts, adj_res = FaceIJK(0, CoordIJK(2, 0, 0)).pent_to_verts(2)
        assert adj_res == 2
        assert len(verts) == 5

    def test_verts_do_not_modify_center(self):
        fijk = FaceIJK(1, CoordIJK(1, 0, 0))
        fijk.to_verts(3)
        assert fijk == FaceIJK(1, CoordIJK(1, 0, 0))

    def test_hexagon_boundary(self):
        boundary = FaceIJK(1, CoordIJK(1, 0, 0)).to_cell_boundary(0)
        assert boundary.num_verts == 6
        center = FaceIJK(1, CoordIJK(1, 0, 0)).to_geo(0)
        distances = [center.great_circle_distance_rads(v) for v in boundary.verts]
        # vertices of a res 0 cell are roughly equidistant from its center
        assert max(distances) / min(distances) < 1.5

    def test_boundary_vertices_distinct(self):
        boundary = FaceIJK(3, CoordIJK(0, 0, 0)).to_cell_boundary(5)
        verts = boundary.verts
        for i, a in enumerate(verts):
            for b in verts[i + 1 :]:
                assert a.great_circle_distance_rads(b) > 1e-9

    def test_partial_boundary(self):
        boundary = FaceIJK(3, CoordIJK(0, 0, 0)).to_cell_boundary(4, start=2, length=3)
        full = FaceIJK(3, CoordIJK(0, 0, 0)).to_cell_boundary(4)
        assert boundary.num_verts == 3
        assert boundary.verts == full.verts[2:5]

    def test_boundary_points_are_latlng(self):
        for v in FaceIJK(9, CoordIJK(0, 1, 0)).to_cell_boundary(2).verts:
            assert isinstance(v, LatLng)
