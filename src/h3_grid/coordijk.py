"""
Integer cube coordinates for hexagon grids.

A CoordIJK addresses a hexagon with three axes spaced 120 degrees apart. The
representation is redundant; after normalization every component is
non-negative and at least one is zero.
"""

import math
from enum import IntEnum

from h3_grid.constants import M_SIN60
from h3_grid.vec2d import Vec2d


class Direction(IntEnum):
    """H3 digit representing ijk+ axes direction."""

    CENTER = 0
    K_AXES = 1
    J_AXES = 2
    JK_AXES = 3
    I_AXES = 4
    IK_AXES = 5
    IJ_AXES = 6
    INVALID = 7
    # aliases
    NUM_DIGITS = 7
    PENTAGON_SKIPPED = 1

    @classmethod
    def from_digit(cls, digit: int) -> "Direction":
        """
        Decode a 3-bit digit field value.

        :param digit: Raw digit value.
        :return: The Direction, or INVALID for anything outside 0-6.
        """
        if 0 <= digit < cls.INVALID:
            return cls(digit)
        return cls.INVALID

    def rotate_60ccw(self) -> "Direction":
        """Rotate indexing digit 60 degrees counter-clockwise."""
        return _ROTATE_60CCW.get(self, self)

    def rotate_60cw(self) -> "Direction":
        """Rotate indexing digit 60 degrees clockwise."""
        return _ROTATE_60CW.get(self, self)


_ROTATE_60CCW = {
    Direction.K_AXES: Direction.IK_AXES,
    Direction.IK_AXES: Direction.I_AXES,
    Direction.I_AXES: Direction.IJ_AXES,
    Direction.IJ_AXES: Direction.J_AXES,
    Direction.J_AXES: Direction.JK_AXES,
    Direction.JK_AXES: Direction.K_AXES,
}

_ROTATE_60CW = {
    Direction.K_AXES: Direction.JK_AXES,
    Direction.JK_AXES: Direction.J_AXES,
    Direction.J_AXES: Direction.IJ_AXES,
    Direction.IJ_AXES: Direction.I_AXES,
    Direction.I_AXES: Direction.IK_AXES,
    Direction.IK_AXES: Direction.K_AXES,
}


def _lround(x: float) -> int:
    # round half away from zero
    if x >= 0:
        return int(math.floor(x + 0.5))
    return int(math.ceil(x - 0.5))


class CoordIJK:
    """
    IJK hexagon coordinates.

    Transforms mutate the coordinate in place and return it, so calls can be
    chained. Use copy() to keep the original.

    :param i: The i component.
    :param j: The j component.
    :param k: The k component.
    """

    __slots__ = ("i", "j", "k")

    def __init__(self, i: int = 0, j: int = 0, k: int = 0):
        self.i = i
        self.j = j
        self.k = k

    def __repr__(self) -> str:
        return f"CoordIJK(i={self.i}, j={self.j}, k={self.k})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordIJK):
            return NotImplemented
        return self.i == other.i and self.j == other.j and self.k == other.k

    def __hash__(self) -> int:
        return hash((self.i, self.j, self.k))

    def __add__(self, other: "CoordIJK") -> "CoordIJK":
        return CoordIJK(self.i + other.i, self.j + other.j, self.k + other.k)

    def __sub__(self, other: "CoordIJK") -> "CoordIJK":
        return CoordIJK(self.i - other.i, self.j - other.j, self.k - other.k)

    def copy(self) -> "CoordIJK":
        return CoordIJK(self.i, self.j, self.k)

    def set(self, other: "CoordIJK") -> "CoordIJK":
        """Overwrite the components with those of another coordinate."""
        self.i = other.i
        self.j = other.j
        self.k = other.k
        return self

    def scale(self, factor: int) -> "CoordIJK":
        """Uniformly scale the coordinates by a scalar."""
        self.i *= factor
        self.j *= factor
        self.k *= factor
        return self

    def normalize(self) -> "CoordIJK":
        """
        Normalize the coordinates by setting the components to the smallest
        possible values.

        :return: The normalized coordinate.
        """
        # remove any negative values
        if self.i < 0:
            self.j -= self.i
            self.k -= self.i
            self.i = 0

        if self.j < 0:
            self.i -= self.j
            self.k -= self.j
            self.j = 0

        if self.k < 0:
            self.i -= self.k
            self.j -= self.k
            self.k = 0

        # remove the min value if needed
        min_val = min(self.i, self.j, self.k)
        if min_val > 0:
            self.i -= min_val
            self.j -= min_val
            self.k -= min_val

        return self

    def _combine(self, i_vec: tuple, j_vec: tuple, k_vec: tuple) -> "CoordIJK":
        i, j, k = self.i, self.j, self.k
        self.i = i_vec[0] * i + j_vec[0] * j + k_vec[0] * k
        self.j = i_vec[1] * i + j_vec[1] * j + k_vec[1] * k
        self.k = i_vec[2] * i + j_vec[2] * j + k_vec[2] * k
        return self.normalize()

    def up_aperture_7(self) -> "CoordIJK":
        """Move to the indexing parent in a counter-clockwise aperture 7 grid."""
        i = self.i - self.k
        j = self.j - self.k
        self.i = _lround((3 * i - j) / 7.0)
        self.j = _lround((i + 2 * j) / 7.0)
        self.k = 0
        return self.normalize()

    def up_aperture_7r(self) -> "CoordIJK":
        """Move to the indexing parent in a clockwise aperture 7 grid."""
        i = self.i - self.k
        j = self.j - self.k
        self.i = _lround((2 * i + j) / 7.0)
        self.j = _lround((3 * j - i) / 7.0)
        self.k = 0
        return self.normalize()

    def down_aperture_7(self) -> "CoordIJK":
        """Move to the centered child at the next finer aperture 7 counter-clockwise resolution."""
        return self._combine((3, 0, 1), (1, 3, 0), (0, 1, 3))

    def down_aperture_7r(self) -> "CoordIJK":
        """Move to the centered child at the next finer aperture 7 clockwise resolution."""
        return self._combine((3, 1, 0), (0, 3, 1), (1, 0, 3))

    def down_aperture_3(self) -> "CoordIJK":
        """Move to the centered child at the next finer aperture 3 counter-clockwise resolution."""
        return self._combine((2, 0, 1), (1, 2, 0), (0, 1, 2))

    def down_aperture_3r(self) -> "CoordIJK":
        """Move to the centered child at the next finer aperture 3 clockwise resolution."""
        return self._combine((2, 1, 0), (0, 2, 1), (1, 0, 2))

    def neighbor(self, digit: int) -> "CoordIJK":
        """
        Move to the neighboring hex in the given digit direction.

        Center, Invalid and out-of-range digits leave the coordinate unchanged.

        :param digit: Direction to step in.
        :return: The moved coordinate.
        """
        if Direction.CENTER < digit < Direction.NUM_DIGITS:
            di, dj, dk = UNIT_VECS[digit]
            self.i += di
            self.j += dj
            self.k += dk
            self.normalize()
        return self

    def rotate_60ccw(self) -> "CoordIJK":
        """Rotate the coordinates 60 degrees counter-clockwise."""
        return self._combine((1, 1, 0), (0, 1, 1), (1, 0, 1))

    def rotate_60cw(self) -> "CoordIJK":
        """Rotate the coordinates 60 degrees clockwise."""
        return self._combine((1, 0, 1), (1, 1, 0), (0, 1, 1))

    def distance(self, other: "CoordIJK") -> int:
        """
        Find the grid distance between two coordinates.

        :param other: The other coordinate.
        :return: Number of hex steps between the two.
        """
        diff = (self - other).normalize()
        return max(abs(diff.i), abs(diff.j), abs(diff.k))

    def to_digit(self) -> Direction:
        """
        Determine the digit corresponding to a unit vector in ijk coordinates.

        :return: The matching Direction, or INVALID if this is not a unit vector.
        """
        c = self.copy().normalize()
        for digit in range(Direction.CENTER, Direction.NUM_DIGITS):
            if (c.i, c.j, c.k) == UNIT_VECS[digit]:
                return Direction(digit)
        return Direction.INVALID

    def ijk_to_ij(self) -> tuple:
        """
        Transform to the two-axis IJ coordinate system.

        :return: Tuple of (i, j).
        """
        return (self.i - self.k, self.j - self.k)

    @classmethod
    def ij_to_ijk(cls, i: int, j: int) -> "CoordIJK":
        """Transform IJ coordinates to normalized IJK+ coordinates."""
        return cls(i, j, 0).normalize()

    def to_cube(self) -> "CoordIJK":
        """Convert IJK coordinates to cube coordinates, in place."""
        self.i = -self.i + self.k
        self.j = self.j - self.k
        self.k = -self.i - self.j
        return self

    def from_cube(self) -> "CoordIJK":
        """Convert cube coordinates to normalized IJK coordinates, in place."""
        self.i = -self.i
        self.k = 0
        return self.normalize()

    def to_hex2d(self) -> Vec2d:
        """
        Find the center point in 2D cartesian coordinates of this hex.

        :return: Hex2d vector.
        """
        i = self.i - self.k
        j = self.j - self.k
        return Vec2d(i - 0.5 * j, j * M_SIN60)

    @classmethod
    def from_hex2d(cls, v: Vec2d) -> "CoordIJK":
        """
        Determine the containing hex in ijk+ coordinates for a 2D cartesian
        coordinate vector (from DGGRID).

        :param v: Hex2d vector.
        :return: Normalized coordinate of the containing hex.
        """
        a1 = abs(v.x)
        a2 = abs(v.y)

        # reverse conversion
        x2 = a2 / M_SIN60
        x1 = a1 + x2 / 2.0

        # check if we have the center of a hex
        m1 = int(x1)
        m2 = int(x2)

        # otherwise round correctly
        r1 = x1 - m1
        r2 = x2 - m2

        if r1 < 0.5:
            if r1 < 1.0 / 3.0:
                i = m1
                j = m2 if r2 < (1.0 + r1) / 2.0 else m2 + 1
            else:
                j = m2 if r2 < (1.0 - r1) else m2 + 1
                i = m1 + 1 if (1.0 - r1) <= r2 < (2.0 * r1) else m1
        else:
            if r1 < 2.0 / 3.0:
                j = m2 if r2 < (1.0 - r1) else m2 + 1
                i = m1 if (2.0 * r1 - 1.0) < r2 < (1.0 - r1) else m1 + 1
            else:
                i = m1 + 1
                j = m2 if r2 < (r1 / 2.0) else m2 + 1

        # fold across the axes if necessary
        if v.x < 0.0:
            if j % 2 == 0:
                axis_i = j // 2
                diff = i - axis_i
                i = i - 2 * diff
            else:
                axis_i = (j + 1) // 2
                diff = i - axis_i
                i = i - (2 * diff + 1)

        if v.y < 0.0:
            i = i - (2 * j + 1) // 2
            j = -j

        return cls(i, j, 0).normalize()


# unit vectors by digit as (i, j, k); index 0 is the zero vector
UNIT_VECS = (
    (0, 0, 0),  # direction 0
    (0, 0, 1),  # direction 1
    (0, 1, 0),  # direction 2
    (0, 1, 1),  # direction 3
    (1, 0, 0),  # direction 4
    (1, 0, 1),  # direction 5
    (1, 1, 0),  # direction 6
)
