"""2D cartesian vectors on a face-centered plane."""

import math

from h3_grid.constants import FLT_EPSILON


class Vec2d:
    """
    2D floating-point vector.

    Used for two planar systems: the gnomonic face plane, and the hex2d plane
    scaled to a resolution's unit length with x aligned to the local i-axis.

    :param x: X component.
    :param y: Y component.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"Vec2d(x={self.x!r}, y={self.y!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec2d):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __sub__(self, other: "Vec2d") -> "Vec2d":
        return Vec2d(self.x - other.x, self.y - other.y)

    def mag(self) -> float:
        """
        Calculate the magnitude of the vector.

        :return: Euclidean length.
        """
        return math.sqrt(self.x * self.x + self.y * self.y)

    def almost_equals(self, other: "Vec2d") -> bool:
        """
        Whether two vectors are equal within single precision epsilon.

        :param other: Vector to compare against.
        :return: True if both components are within FLT_EPSILON.
        """
        return abs(self.x - other.x) < FLT_EPSILON and abs(self.y - other.y) < FLT_EPSILON

    @staticmethod
    def intersect(p0: "Vec2d", p1: "Vec2d", p2: "Vec2d", p3: "Vec2d") -> "Vec2d":
        """
        Find the intersection between two lines.

        Assumes that the lines intersect and that the intersection is not at an
        endpoint of either line.

        :param p0: First point of the first line.
        :param p1: Second point of the first line.
        :param p2: First point of the second line.
        :param p3: Second point of the second line.
        :return: The intersection point.
        """
        s1 = p1 - p0
        s2 = p3 - p2

        t = (s2.x * (p0.y - p2.y) - s2.y * (p0.x - p2.x)) / (-s2.x * s1.y + s1.x * s2.y)

        return Vec2d(p0.x + t * s1.x, p0.y + t * s1.y)
