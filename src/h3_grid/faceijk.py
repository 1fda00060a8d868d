"""
Icosahedron face coordinates.

A FaceIJK pairs one of the 20 icosahedron faces with an ijk+ coordinate in
that face's local frame. Projection to and from the sphere uses a gnomonic
projection centered on the face; coordinates past a face's extent are moved
onto the neighboring face (overage).
"""

import logging
import math
from enum import IntEnum
from typing import NamedTuple

from h3_grid.constants import (
    EPSILON,
    INV_RES0_U_GNOMONIC,
    M_AP7_ROT_RADS,
    M_SQRT3_2,
    M_SQRT7,
    MAX_OVERAGE_ITERATIONS,
    NUM_HEX_VERTS,
    NUM_PENT_VERTS,
    RES0_U_GNOMONIC,
)
from h3_grid.coordijk import CoordIJK
from h3_grid.data_model.boundary import CellBoundary
from h3_grid.errors import PentagonError
from h3_grid.latlng import LatLng, pos_angle_rads
from h3_grid.vec2d import Vec2d

# face quadrants, used as the index into FACE_NEIGHBORS
IJ = 1
KI = 2
JK = 3

# icosahedron face centers in lat/lng radians
FACE_CENTER_GEO = (
    LatLng(lat=0.803582649718989942, lng=1.248397419617396099),  # face  0
    LatLng(lat=1.307747883455638156, lng=2.536945009877921159),  # face  1
    LatLng(lat=1.054751253523952054, lng=-1.347517358900396623),  # face  2
    LatLng(lat=0.600191595538186799, lng=-0.450603909469755746),  # face  3
    LatLng(lat=0.491715428198773866, lng=0.401988202911306943),  # face  4
    LatLng(lat=0.172745327415618701, lng=1.678146885280433686),  # face  5
    LatLng(lat=0.605929321571350690, lng=2.953923329812411617),  # face  6
    LatLng(lat=0.427370518328979641, lng=-1.888876200336285401),  # face  7
    LatLng(lat=-0.079066118549212831, lng=-0.733429513380867741),  # face  8
    LatLng(lat=-0.230961644455383637, lng=0.506495587332349035),  # face  9
    LatLng(lat=0.079066118549212831, lng=2.408163140208925497),  # face 10
    LatLng(lat=0.230961644455383637, lng=-2.635097066257444203),  # face 11
    LatLng(lat=-0.172745327415618701, lng=-1.463445768309359553),  # face 12
    LatLng(lat=-0.605929321571350690, lng=-0.187669323777381622),  # face 13
    LatLng(lat=-0.427370518328979641, lng=1.252716453253507838),  # face 14
    LatLng(lat=-0.600191595538186799, lng=2.690988744120037492),  # face 15
    LatLng(lat=-0.491715428198773866, lng=-2.739604450678486295),  # face 16
    LatLng(lat=-0.803582649718989942, lng=-1.893195233972397139),  # face 17
    LatLng(lat=-1.307747883455638156, lng=-0.604647643711872080),  # face 18
    LatLng(lat=-1.054751253523952054, lng=1.794075294689396615),  # face 19
)

# icosahedron face centers as unit vectors (x, y, z)
FACE_CENTER_POINT = (
    (0.2199307791404606, 0.6583691780274996, 0.7198475378926182),  # face  0
    (-0.2139234834501421, 0.1478171829550703, 0.9656017935214205),  # face  1
    (0.1092625278784797, -0.4811951572873210, 0.8697775121287253),  # face  2
    (0.7428567301586791, -0.3593941678278028, 0.5648005936517033),  # face  3
    (0.8112534709140969, 0.3448953237639384, 0.4721387736413930),  # face  4
    (-0.1055498149613921, 0.9794457296411413, 0.1718874610009365),  # face  5
    (-0.8075407579970092, 0.1533552485898818, 0.5695261994882688),  # face  6
    (-0.2846148069787907, -0.8644080972654206, 0.4144792552473539),  # face  7
    (0.7405621473854482, -0.6673299564565524, -0.0789837646326737),  # face  8
    (0.8512303986474293, 0.4722343788582681, -0.2289137388687808),  # face  9
    (-0.7405621473854481, 0.6673299564565524, 0.0789837646326737),  # face 10
    (-0.8512303986474292, -0.4722343788582682, 0.2289137388687808),  # face 11
    (0.1055498149613919, -0.9794457296411413, -0.1718874610009365),  # face 12
    (0.8075407579970092, -0.1533552485898819, -0.5695261994882688),  # face 13
    (0.2846148069787908, 0.8644080972654204, -0.4144792552473539),  # face 14
    (-0.7428567301586791, 0.3593941678278027, -0.5648005936517033),  # face 15
    (-0.8112534709140971, -0.3448953237639382, -0.4721387736413930),  # face 16
    (-0.2199307791404607, -0.6583691780274996, -0.7198475378926182),  # face 17
    (0.2139234834501420, -0.1478171829550704, -0.9656017935214205),  # face 18
    (-0.1092625278784796, 0.4811951572873210, -0.8697775121287253),  # face 19
)

# azimuths from each face center to its vertices 0, 1 and 2, in radians
FACE_AXES_AZ_RADS_CII = (
    (5.619958268523939882, 3.525563166130744542, 1.431168063737548730),  # face  0
    (5.760339081714187279, 3.665943979320991689, 1.571548876927796127),  # face  1
    (0.780213654393430055, 4.969003859179821079, 2.874608756786625655),  # face  2
    (0.430469363979999913, 4.619259568766391033, 2.524864466373195467),  # face  3
    (6.130269123335111400, 4.035874020941915804, 1.941478918548720291),  # face  4
    (2.692877706530642877, 0.598482604137447119, 4.787272808923838195),  # face  5
    (2.982963003477243874, 0.888567901084048369, 5.077358105870439581),  # face  6
    (3.532912002790141181, 1.438516900396945656, 5.627307105183336758),  # face  7
    (3.494305004259568154, 1.399909901866372864, 5.588700106652763840),  # face  8
    (3.003214169499538391, 0.908819067106342928, 5.097609271892733906),  # face  9
    (5.930472956509811562, 3.836077854116615875, 1.741682751723420374),  # face 10
    (0.138378484090254847, 4.327168688876645809, 2.232773586483450311),  # face 11
    (0.448714947059150361, 4.637505151845541521, 2.543110049452346120),  # face 12
    (0.158629650112549365, 4.347419854898940135, 2.253024752505744869),  # face 13
    (5.891865957979238535, 3.797470855586042958, 1.703075753192847583),  # face 14
    (2.711123289609793325, 0.616728187216597771, 4.805518392002988683),  # face 15
    (3.294508837434268316, 1.200113735041072948, 5.388903939827463911),  # face 16
    (3.804819692245439833, 1.710424589852244509, 5.899214794638635174),  # face 17
    (3.664438879055192436, 1.570043776661997111, 5.758833981448388027),  # face 18
    (2.361378999196363184, 0.266983896803167583, 4.455774101589558636),  # face 19
)


class FaceOrientIJK(NamedTuple):
    """
    Orientation of a neighboring face relative to a face's own ijk frame.

    :param face: The neighboring face number.
    :param translate: Res 0 translation relative to the primary face.
    :param ccw_rot60: Number of 60 degree ccw rotations relative to the primary face.
    """

    face: int
    translate: tuple[int, int, int]
    ccw_rot60: int


def _orient(face: int, translate: tuple[int, int, int], ccw_rot60: int) -> FaceOrientIJK:
    return FaceOrientIJK(face, translate, ccw_rot60)


# neighboring face orientations by [face][quadrant]: central, IJ, KI, JK
FACE_NEIGHBORS = (
    (_orient(0, (0, 0, 0), 0), _orient(4, (2, 0, 2), 1), _orient(1, (2, 2, 0), 5), _orient(5, (0, 2, 2), 3)),
    (_orient(1, (0, 0, 0), 0), _orient(0, (2, 0, 2), 1), _orient(2, (2, 2, 0), 5), _orient(6, (0, 2, 2), 3)),
    (_orient(2, (0, 0, 0), 0), _orient(1, (2, 0, 2), 1), _orient(3, (2, 2, 0), 5), _orient(7, (0, 2, 2), 3)),
    (_orient(3, (0, 0, 0), 0), _orient(2, (2, 0, 2), 1), _orient(4, (2, 2, 0), 5), _orient(8, (0, 2, 2), 3)),
    (_orient(4, (0, 0, 0), 0), _orient(3, (2, 0, 2), 1), _orient(0, (2, 2, 0), 5), _orient(9, (0, 2, 2), 3)),
    (_orient(5, (0, 0, 0), 0), _orient(10, (2, 2, 0), 3), _orient(14, (2, 0, 2), 3), _orient(0, (0, 2, 2), 3)),
    (_orient(6, (0, 0, 0), 0), _orient(11, (2, 2, 0), 3), _orient(10, (2, 0, 2), 3), _orient(1, (0, 2, 2), 3)),
    (_orient(7, (0, 0, 0), 0), _orient(12, (2, 2, 0), 3), _orient(11, (2, 0, 2), 3), _orient(2, (0, 2, 2), 3)),
    (_orient(8, (0, 0, 0), 0), _orient(13, (2, 2, 0), 3), _orient(12, (2, 0, 2), 3), _orient(3, (0, 2, 2), 3)),
    (_orient(9, (0, 0, 0), 0), _orient(14, (2, 2, 0), 3), _orient(13, (2, 0, 2), 3), _orient(4, (0, 2, 2), 3)),
    (_orient(10, (0, 0, 0), 0), _orient(5, (2, 2, 0), 3), _orient(6, (2, 0, 2), 3), _orient(15, (0, 2, 2), 3)),
    (_orient(11, (0, 0, 0), 0), _orient(6, (2, 2, 0), 3), _orient(7, (2, 0, 2), 3), _orient(16, (0, 2, 2), 3)),
    (_orient(12, (0, 0, 0), 0), _orient(7, (2, 2, 0), 3), _orient(8, (2, 0, 2), 3), _orient(17, (0, 2, 2), 3)),
    (_orient(13, (0, 0, 0), 0), _orient(8, (2, 2, 0), 3), _orient(9, (2, 0, 2), 3), _orient(18, (0, 2, 2), 3)),
    (_orient(14, (0, 0, 0), 0), _orient(9, (2, 2, 0), 3), _orient(5, (2, 0, 2), 3), _orient(19, (0, 2, 2), 3)),
    (_orient(15, (0, 0, 0), 0), _orient(16, (2, 0, 2), 1), _orient(19, (2, 2, 0), 5), _orient(10, (0, 2, 2), 3)),
    (_orient(16, (0, 0, 0), 0), _orient(17, (2, 0, 2), 1), _orient(15, (2, 2, 0), 5), _orient(11, (0, 2, 2), 3)),
    (_orient(17, (0, 0, 0), 0), _orient(18, (2, 0, 2), 1), _orient(16, (2, 2, 0), 5), _orient(12, (0, 2, 2), 3)),
    (_orient(18, (0, 0, 0), 0), _orient(19, (2, 0, 2), 1), _orient(17, (2, 2, 0), 5), _orient(13, (0, 2, 2), 3)),
    (_orient(19, (0, 0, 0), 0), _orient(15, (2, 0, 2), 1), _orient(18, (2, 2, 0), 5), _orient(14, (0, 2, 2), 3)),
)

# quadrant direction from one face to another; 0 on the diagonal, -1 if not adjacent
_N = -1
ADJACENT_FACE_DIR = (
    (0, KI, _N, _N, IJ, JK, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N),  # face  0
    (IJ, 0, KI, _N, _N, _N, JK, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N),  # face  1
    (_N, IJ, 0, KI, _N, _N, _N, JK, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N),  # face  2
    (_N, _N, IJ, 0, KI, _N, _N, _N, JK, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N),  # face  3
    (KI, _N, _N, IJ, 0, _N, _N, _N, _N, JK, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N),  # face  4
    (JK, _N, _N, _N, _N, 0, _N, _N, _N, _N, IJ, _N, _N, _N, KI, _N, _N, _N, _N, _N),  # face  5
    (_N, JK, _N, _N, _N, _N, 0, _N, _N, _N, KI, IJ, _N, _N, _N, _N, _N, _N, _N, _N),  # face  6
    (_N, _N, JK, _N, _N, _N, _N, 0, _N, _N, _N, KI, IJ, _N, _N, _N, _N, _N, _N, _N),  # face  7
    (_N, _N, _N, JK, _N, _N, _N, _N, 0, _N, _N, _N, KI, IJ, _N, _N, _N, _N, _N, _N),  # face  8
    (_N, _N, _N, _N, JK, _N, _N, _N, _N, 0, _N, _N, _N, KI, IJ, _N, _N, _N, _N, _N),  # face  9
    (_N, _N, _N, _N, _N, IJ, KI, _N, _N, _N, 0, _N, _N, _N, _N, JK, _N, _N, _N, _N),  # face 10
    (_N, _N, _N, _N, _N, _N, IJ, KI, _N, _N, _N, 0, _N, _N, _N, _N, JK, _N, _N, _N),  # face 11
    (_N, _N, _N, _N, _N, _N, _N, IJ, KI, _N, _N, _N, 0, _N, _N, _N, _N, JK, _N, _N),  # face 12
    (_N, _N, _N, _N, _N, _N, _N, _N, IJ, KI, _N, _N, _N, 0, _N, _N, _N, _N, JK, _N),  # face 13
    (_N, _N, _N, _N, _N, KI, _N, _N, _N, IJ, _N, _N, _N, _N, 0, _N, _N, _N, _N, JK),  # face 14
    (_N, _N, _N, _N, _N, _N, _N, _N, _N, _N, JK, _N, _N, _N, _N, 0, IJ, _N, _N, KI),  # face 15
    (_N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, JK, _N, _N, _N, KI, 0, IJ, _N, _N),  # face 16
    (_N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, JK, _N, _N, _N, KI, 0, IJ, _N),  # face 17
    (_N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, JK, _N, _N, _N, KI, 0, IJ),  # face 18
    (_N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, _N, JK, IJ, _N, _N, KI, 0),  # face 19
)

# overage distance table, Class II resolutions only
MAX_DIM_BY_CII_RES = (
    2, -1, 14, -1, 98, -1, 686, -1, 4802, -1, 33614, -1, 235298, -1, 1647086, -1, 11529602,
)

# unit scale distance table, Class II resolutions only
UNIT_SCALE_BY_CII_RES = (
    1, -1, 7, -1, 49, -1, 343, -1, 2401, -1, 16807, -1, 117649, -1, 823543, -1, 5764801,
)

# substrate vertex offsets around a cell center
_VERTS_CII = ((2, 1, 0), (1, 2, 0), (0, 2, 1), (0, 1, 2), (1, 0, 2), (2, 0, 1))
_VERTS_CIII = ((5, 4, 0), (1, 5, 0), (0, 5, 4), (0, 1, 5), (4, 0, 5), (5, 0, 1))


class Overage(IntEnum):
    """Result of checking a coordinate against its face's extent."""

    # on the original face
    NO_OVERAGE = 0
    # on a face edge (only occurs on substrate grids)
    FACE_EDGE = 1
    # overage on a new face interior
    NEW_FACE = 2


def is_resolution_class_iii(res: int) -> bool:
    """Whether the resolution is a Class III (odd) resolution."""
    return res % 2 == 1


def hex2d_to_geo(v: Vec2d, face: int, res: int, substrate: bool) -> LatLng:
    """
    Determine the center point in spherical coordinates of a cell given by 2D
    hex coordinates on a particular icosahedral face.

    :param v: The 2D hex coordinates of the cell.
    :param face: The icosahedral face upon which the 2D hex coordinate system is centered.
    :param res: The H3 resolution of the cell.
    :param substrate: Whether the grid is a substrate grid.
    :return: The spherical coordinates of the cell center point.
    """
    # calculate (r, theta) in hex2d
    r = v.mag()

    if r < EPSILON:
        return FACE_CENTER_GEO[face]

    theta = math.atan2(v.y, v.x)

    # scale for current resolution length u
    for _ in range(res):
        r /= M_SQRT7

    # scale accordingly if this is a substrate grid
    if substrate:
        r /= 3.0
        if is_resolution_class_iii(res):
            r /= M_SQRT7

    r *= RES0_U_GNOMONIC

    # perform inverse gnomonic scaling of r
    r = math.atan(r)

    # adjust theta for Class III
    # if a substrate grid, then it's already been adjusted for Class III
    if not substrate and is_resolution_class_iii(res):
        theta = pos_angle_rads(theta + M_AP7_ROT_RADS)

    # find theta as an azimuth
    theta = pos_angle_rads(FACE_AXES_AZ_RADS_CII[face][0] - theta)

    # now find the point at (r, theta) from the face center
    return FACE_CENTER_GEO[face].azimuth_distance(theta, r)


def geo_to_closest_face(g: LatLng) -> tuple[int, float]:
    """
    Find the icosahedron face whose center is closest to a point.

    :param g: The spherical coordinates.
    :return: Tuple of (face, squared euclidean distance to the face center).
    """
    cos_lat = math.cos(g.lat)
    x = cos_lat * math.cos(g.lng)
    y = cos_lat * math.sin(g.lng)
    z = math.sin(g.lat)

    face = 0
    # the distance between two farthest points is 2.0, therefore the square of
    # the distance between two points should always be less or equal than 4.0
    sqd = 5.0
    for f, (cx, cy, cz) in enumerate(FACE_CENTER_POINT):
        sqdf = (x - cx) ** 2 + (y - cy) ** 2 + (z - cz) ** 2
        if sqdf < sqd:
            face = f
            sqd = sqdf
    return face, sqd


def geo_to_hex2d(g: LatLng, res: int) -> tuple[int, Vec2d]:
    """
    Encode a coordinate on the sphere to the corresponding icosahedral face
    and containing 2D hex coordinates relative to that face center.

    :param g: The spherical coordinates to encode.
    :param res: The desired H3 resolution for the encoding.
    :return: Tuple of (face, 2D hex coordinates).
    """
    face, sqd = geo_to_closest_face(g)

    # cos(r) = 1 - 2 * sin^2(r/2) = 1 - 2 * (sqd / 4) = 1 - sqd/2
    r = math.acos(max(-1.0, min(1.0, 1.0 - sqd / 2.0)))

    if r < EPSILON:
        return face, Vec2d(0.0, 0.0)

    # now have face and r, now find CCW theta from CII i-axis
    theta = pos_angle_rads(
        FACE_AXES_AZ_RADS_CII[face][0] - pos_angle_rads(FACE_CENTER_GEO[face].azimuth_rads(g))
    )

    # adjust theta for Class III (odd resolutions)
    if is_resolution_class_iii(res):
        theta = pos_angle_rads(theta - M_AP7_ROT_RADS)

    # perform gnomonic scaling of r
    r = math.tan(r)

    # scale for current resolution length u
    r *= INV_RES0_U_GNOMONIC
    for _ in range(res):
        r *= M_SQRT7

    return face, Vec2d(r * math.cos(theta), r * math.sin(theta))


def _face_edge(center_face: int, other_face: int, max_dim: int) -> tuple[Vec2d, Vec2d]:
    # the icosahedron face edge shared with other_face, on the substrate grid
    v0 = Vec2d(3.0 * max_dim, 0.0)
    v1 = Vec2d(-1.5 * max_dim, 3.0 * M_SQRT3_2 * max_dim)
    v2 = Vec2d(-1.5 * max_dim, -3.0 * M_SQRT3_2 * max_dim)

    direction = ADJACENT_FACE_DIR[center_face][other_face]
    if direction == IJ:
        return v0, v1
    if direction == JK:
        return v1, v2
    return v2, v0


class FaceIJK:
    """
    Face number and ijk coordinates on that face-centered coordinate system.

    :param face: Icosahedron face number, 0-19.
    :param coord: ijk coordinates on that face.
    """

    __slots__ = ("face", "coord")

    def __init__(self, face: int = 0, coord: CoordIJK | None = None):
        self.face = face
        self.coord = coord if coord is not None else CoordIJK()

    def __repr__(self) -> str:
        return f"FaceIJK(face={self.face}, coord={self.coord!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FaceIJK):
            return NotImplemented
        return self.face == other.face and self.coord == other.coord

    def __hash__(self) -> int:
        return hash((self.face, self.coord.i, self.coord.j, self.coord.k))

    def copy(self) -> "FaceIJK":
        return FaceIJK(self.face, self.coord.copy())

    def to_geo(self, res: int) -> LatLng:
        """
        Determine the center point in spherical coordinates of a cell given by
        this face and coordinate.

        :param res: The H3 resolution of the cell.
        :return: The spherical coordinates of the cell center point.
        """
        return hex2d_to_geo(self.coord.to_hex2d(), self.face, res, False)

    @classmethod
    def from_geo(cls, g: LatLng, res: int) -> "FaceIJK":
        """
        Encode a coordinate on the sphere to the face and ijk coordinates of the
        containing cell at the specified resolution.

        :param g: The spherical coordinates to encode.
        :param res: The desired H3 resolution for the encoding.
        :return: The containing cell's FaceIJK.
        """
        face, v = geo_to_hex2d(g, res)
        return cls(face, CoordIJK.from_hex2d(v))

    def adjust_overage_cII(self, res: int, pent_leading4: bool, substrate: bool) -> Overage:
        """
        Adjust this Class II FaceIJK address so that the resulting cell address
        is relative to the correct icosahedral face.

        :param res: The H3 resolution of the cell.
        :param pent_leading4: Whether or not the cell is a pentagon with a leading digit 4.
        :param substrate: Whether or not the cell is in a substrate grid.
        :return: The resulting overage kind.
        """
        overage = Overage.NO_OVERAGE
        ijk = self.coord

        # get the maximum dimension value; scale if a substrate grid
        max_dim = MAX_DIM_BY_CII_RES[res]
        if substrate:
            max_dim *= 3

        coord_sum = ijk.i + ijk.j + ijk.k
        if substrate and coord_sum == max_dim:
            # on edge
            overage = Overage.FACE_EDGE
        elif coord_sum > max_dim:
            # overage
            overage = Overage.NEW_FACE

            if ijk.k > 0:
                if ijk.j > 0:
                    orient = FACE_NEIGHBORS[self.face][JK]
                else:
                    orient = FACE_NEIGHBORS[self.face][KI]

                    # adjust for the pentagonal missing sequence
                    if pent_leading4:
                        # translate origin to center of pentagon, rotate to
                        # adjust for the missing sequence, then translate back
                        origin = CoordIJK(max_dim, 0, 0)
                        tmp = (ijk - origin).rotate_60cw()
                        ijk.set(tmp + origin)
            else:
                orient = FACE_NEIGHBORS[self.face][IJ]

            self.face = orient.face

            # rotate and translate for adjacent face
            for _ in range(orient.ccw_rot60):
                ijk.rotate_60ccw()

            unit_scale = UNIT_SCALE_BY_CII_RES[res]
            if substrate:
                unit_scale *= 3
            ijk.i += orient.translate[0] * unit_scale
            ijk.j += orient.translate[1] * unit_scale
            ijk.k += orient.translate[2] * unit_scale
            ijk.normalize()

            # overage points on pentagon boundaries can end up on edges
            if substrate and ijk.i + ijk.j + ijk.k == max_dim:
                overage = Overage.FACE_EDGE

        return overage

    def adjust_pent_vert_overage(self, res: int) -> Overage:
        """
        Adjust a pentagon vertex FaceIJK address so that the resulting address
        is relative to the correct icosahedral face.

        :param res: The H3 resolution of the cell.
        :return: The final overage kind.
        :raises PentagonError: If the vertex keeps crossing faces.
        """
        for _ in range(MAX_OVERAGE_ITERATIONS):
            overage = self.adjust_overage_cII(res, False, True)
            if overage != Overage.NEW_FACE:
                return overage
        logging.error(f"Pentagon vertex overage did not settle after {MAX_OVERAGE_ITERATIONS} face hops: {self}")
        raise PentagonError("Unhandled pentagon distortion while adjusting vertex overage")

    def _substrate_verts(self, res: int, count: int) -> tuple[list["FaceIJK"], int]:
        offsets = _VERTS_CIII if is_resolution_class_iii(res) else _VERTS_CII

        # adjust the center point to be in an aperture 33r substrate grid
        center = self.coord.copy().down_aperture_3().down_aperture_3r()

        # if res is Class III we need to add a cw aperture 7 to get to
        # icosahedral Class II
        if is_resolution_class_iii(res):
            center.down_aperture_7r()
            res += 1

        verts = []
        for offset in offsets[:count]:
            verts.append(FaceIJK(self.face, (center + CoordIJK(*offset)).normalize()))
        return verts, res

    def to_verts(self, res: int) -> tuple[list["FaceIJK"], int]:
        """
        Get the vertices of a cell as substrate FaceIJK addresses.

        :param res: The H3 resolution of the cell.
        :return: Tuple of (six vertices, substrate resolution).
        """
        return self._substrate_verts(res, NUM_HEX_VERTS)

    def pent_to_verts(self, res: int) -> tuple[list["FaceIJK"], int]:
        """
        Get the vertices of a pentagon cell as substrate FaceIJK addresses.

        :param res: The H3 resolution of the cell.
        :return: Tuple of (five vertices, substrate resolution).
        """
        return self._substrate_verts(res, NUM_PENT_VERTS)

    def to_cell_boundary(self, res: int, start: int = 0, length: int = NUM_HEX_VERTS) -> CellBoundary:
        """
        Generate the cell boundary in spherical coordinates for a cell given by
        this FaceIJK address at a specified resolution.

        :param res: The H3 resolution of the cell.
        :param start: The first topological vertex to return.
        :param length: The number of topological vertexes to return.
        :return: The spherical coordinates of the cell boundary.
        """
        verts, adj_res = self.to_verts(res)
        class_iii = is_resolution_class_iii(res)

        # if we're returning the entire loop, we need one more iteration in
        # case of a distortion vertex on the last edge
        additional_iteration = 1 if length == NUM_HEX_VERTS else 0

        boundary = []
        last_face = -1
        last_overage = Overage.NO_OVERAGE
        for vert in range(start, start + length + additional_iteration):
            v = vert % NUM_HEX_VERTS

            fijk = verts[v].copy()
            overage = fijk.adjust_overage_cII(adj_res, False, True)

            # Check for edge-crossing. Each face of the underlying icosahedron
            # is a different projection plane, so if an edge of the hexagon
            # crosses an icosahedron edge an additional vertex must be
            # introduced at that intersection point. Class II cell edges have
            # vertices on the face edge, so no edge-crossing vertices are
            # needed for them.
            if class_iii and vert > start and fijk.face != last_face and last_overage != Overage.FACE_EDGE:
                # find hex2d of the two vertexes on original face
                last_v = (v + 5) % NUM_HEX_VERTS
                orig2d0 = verts[last_v].coord.to_hex2d()
                orig2d1 = verts[v].coord.to_hex2d()

                # find the appropriate icosa face edge vertexes
                face2 = fijk.face if last_face == self.face else last_face
                edge0, edge1 = _face_edge(self.face, face2, MAX_DIM_BY_CII_RES[adj_res])

                # find the intersection and add the lat/lng point to the result
                inter = Vec2d.intersect(orig2d0, orig2d1, edge0, edge1)

                # If a point of intersection occurs at a hexagon vertex, then
                # each adjacent hexagon edge will lie completely on a single
                # icosahedron face, and no additional vertex is required.
                if not (orig2d0.almost_equals(inter) or orig2d1.almost_equals(inter)):
                    boundary.append(hex2d_to_geo(inter, self.face, adj_res, True))

            # convert vertex to lat/lng and add to the result
            # vert == start + NUM_HEX_VERTS is only used to test for possible
            # intersection on last edge
            if vert < start + NUM_HEX_VERTS:
                boundary.append(hex2d_to_geo(fijk.coord.to_hex2d(), fijk.face, adj_res, True))

            last_face = fijk.face
            last_overage = overage

        return CellBoundary(verts=boundary)

    def pentagon_to_cell_boundary(self, res: int, start: int = 0, length: int = NUM_PENT_VERTS) -> CellBoundary:
        """
        Generate the cell boundary in spherical coordinates for a pentagonal
        cell given by this FaceIJK address at a specified resolution.

        :param res: The H3 resolution of the cell.
        :param start: The first topological vertex to return.
        :param length: The number of topological vertexes to return.
        :return: The spherical coordinates of the cell boundary.
        """
        verts, adj_res = self.pent_to_verts(res)
        class_iii = is_resolution_class_iii(res)

        additional_iteration = 1 if length == NUM_PENT_VERTS else 0

        boundary = []
        last_fijk = None
        for vert in range(start, start + length + additional_iteration):
            v = vert % NUM_PENT_VERTS

            fijk = verts[v].copy()
            fijk.adjust_pent_vert_overage(adj_res)

            # all Class III pentagon edges cross icosa edges
            # note that Class II pentagons have vertices on the edge,
            # not edge intersections
            if class_iii and last_fijk is not None:
                # find hex2d of the two vertexes on the last face
                tmp = fijk.copy()
                orig2d0 = last_fijk.coord.to_hex2d()

                current_to_last_dir = ADJACENT_FACE_DIR[tmp.face][last_fijk.face]
                orient = FACE_NEIGHBORS[tmp.face][current_to_last_dir]

                tmp.face = orient.face
                for _ in range(orient.ccw_rot60):
                    tmp.coord.rotate_60ccw()

                unit_scale = UNIT_SCALE_BY_CII_RES[adj_res] * 3
                tmp.coord.i += orient.translate[0] * unit_scale
                tmp.coord.j += orient.translate[1] * unit_scale
                tmp.coord.k += orient.translate[2] * unit_scale
                tmp.coord.normalize()

                orig2d1 = tmp.coord.to_hex2d()

                # find the appropriate icosa face edge vertexes
                edge0, edge1 = _face_edge(tmp.face, fijk.face, MAX_DIM_BY_CII_RES[adj_res])

                # find the intersection and add the lat/lng point to the result
                inter = Vec2d.intersect(orig2d0, orig2d1, edge0, edge1)
                boundary.append(hex2d_to_geo(inter, tmp.face, adj_res, True))

            # convert vertex to lat/lng and add to the result
            # vert == start + NUM_PENT_VERTS is only used to test for possible
            # intersection on last edge
            if vert < start + NUM_PENT_VERTS:
                boundary.append(hex2d_to_geo(fijk.coord.to_hex2d(), fijk.face, adj_res, True))

            last_fijk = fijk

        return CellBoundary(verts=boundary)


