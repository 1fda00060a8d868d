"""
Bit-packed 64-bit cell identifier.

Layout, most significant bit first: 1 reserved high bit, 4 bit mode, 3
reserved bits, 4 bit resolution, 7 bit base cell, then fifteen 3 bit digits
for resolutions 1 to 15. Digits past the cell's resolution hold 7.
"""

import logging
import math

from h3_grid import base_cells
from h3_grid.constants import (
    EARTH_RADIUS_KM,
    H3_CELL_MODE,
    MAX_H3_RES,
    MAX_OVERAGE_ITERATIONS,
    NUM_BASE_CELLS,
)
from h3_grid.coordijk import Direction
from h3_grid.data_model.boundary import CellBoundary
from h3_grid.errors import CellInvalidError, DomainError, FailedError, PentagonError
from h3_grid.faceijk import FaceIJK, Overage, is_resolution_class_iii
from h3_grid.latlng import LatLng, triangle_area

H3_MAX_OFFSET = 63
H3_MODE_OFFSET = 59
H3_RESERVED_OFFSET = 56
H3_RES_OFFSET = 52
H3_BC_OFFSET = 45
H3_PER_DIGIT_OFFSET = 3

H3_HIGH_BIT_MASK = 1 << H3_MAX_OFFSET
H3_MODE_MASK = 15 << H3_MODE_OFFSET
H3_RESERVED_MASK = 7 << H3_RESERVED_OFFSET
H3_RES_MASK = 15 << H3_RES_OFFSET
H3_BC_MASK = 127 << H3_BC_OFFSET
H3_DIGIT_MASK = 7

# all 64 bits set, for masking complements
_U64 = 0xFFFFFFFFFFFFFFFF

# mode 0, res 0, base cell 0, all digits 7
H3_INIT = 35184372088831


def _digit_offset(res: int) -> int:
    return (MAX_H3_RES - res) * H3_PER_DIGIT_OFFSET


def _check_res(res: int) -> None:
    if not isinstance(res, int) or not 0 <= res <= MAX_H3_RES:
        raise DomainError(f"Resolution must be in 0-{MAX_H3_RES}: {res}")


class H3Index:
    """
    Immutable 64-bit cell identifier.

    Every set_* and rotate_* method returns a new index and leaves the
    original untouched.

    :param value: Unsigned 64-bit integer value.
    :raises DomainError: If the value does not fit in 64 unsigned bits.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = H3_INIT):
        if not 0 <= value <= _U64:
            raise DomainError(f"Index value does not fit in 64 unsigned bits: {value}")
        self._value = value

    def __repr__(self) -> str:
        return f"H3Index({self})"

    def __str__(self) -> str:
        return format(self._value, "x")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, H3Index):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: "H3Index") -> bool:
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    @property
    def value(self) -> int:
        """The raw 64-bit value."""
        return self._value

    @classmethod
    def from_string(cls, text: str, base: int = 16) -> "H3Index":
        """
        Parse the text form of an index.

        No cell validation is performed; use is_valid_cell for that.

        :param text: Hexadecimal (default) or decimal digits.
        :param base: Numeric base of the text, 16 or 10.
        :return: The parsed index.
        :raises FailedError: If the text is not a 64-bit unsigned number.
        """
        try:
            value = int(text.strip(), base)
        except (AttributeError, ValueError) as e:
            raise FailedError(f"Could not parse cell index: {text!r}") from e
        if not 0 <= value <= _U64:
            raise FailedError(f"Cell index out of range: {text!r}")
        return cls(value)

    @classmethod
    def init(cls, res: int, base_cell: int, init_digit: Direction) -> "H3Index":
        """
        Build an index with every digit up to the resolution set to the same value.

        :param res: The H3 resolution.
        :param base_cell: The base cell number.
        :param init_digit: The digit to fill resolutions 1 to res with.
        :return: The new index.
        :raises DomainError: If the resolution is outside 0-15.
        :raises CellInvalidError: If the base cell is outside 0-121.
        """
        _check_res(res)
        if not isinstance(base_cell, int) or not 0 <= base_cell < NUM_BASE_CELLS:
            raise CellInvalidError(f"Invalid base cell: {base_cell}")
        h = cls(H3_INIT).set_mode(H3_CELL_MODE).set_resolution(res).set_base_cell(base_cell)
        for r in range(1, res + 1):
            h = h.set_index_digit(r, init_digit)
        return h

    # bit field accessors

    @property
    def high_bit(self) -> int:
        return (self._value & H3_HIGH_BIT_MASK) >> H3_MAX_OFFSET

    def set_high_bit(self, bit: int) -> "H3Index":
        return H3Index((self._value & ~H3_HIGH_BIT_MASK & _U64) | ((bit & 1) << H3_MAX_OFFSET))

    @property
    def mode(self) -> int:
        return (self._value & H3_MODE_MASK) >> H3_MODE_OFFSET

    def set_mode(self, mode: int) -> "H3Index":
        return H3Index((self._value & ~H3_MODE_MASK & _U64) | ((mode & 15) << H3_MODE_OFFSET))

    @property
    def reserved_bits(self) -> int:
        return (self._value & H3_RESERVED_MASK) >> H3_RESERVED_OFFSET

    def set_reserved_bits(self, bits: int) -> "H3Index":
        return H3Index((self._value & ~H3_RESERVED_MASK & _U64) | ((bits & 7) << H3_RESERVED_OFFSET))

    @property
    def resolution(self) -> int:
        return (self._value & H3_RES_MASK) >> H3_RES_OFFSET

    def set_resolution(self, res: int) -> "H3Index":
        return H3Index((self._value & ~H3_RES_MASK & _U64) | ((res & 15) << H3_RES_OFFSET))

    @property
    def base_cell(self) -> int:
        return (self._value & H3_BC_MASK) >> H3_BC_OFFSET

    def set_base_cell(self, base_cell: int) -> "H3Index":
        return H3Index((self._value & ~H3_BC_MASK & _U64) | ((base_cell & 127) << H3_BC_OFFSET))

    def raw_digit(self, res: int) -> int:
        """The undecoded 3-bit digit at the given resolution, 0 to 7."""
        return (self._value >> _digit_offset(res)) & H3_DIGIT_MASK

    def index_digit(self, res: int) -> Direction:
        """
        Get the digit at the given resolution.

        :param res: Resolution 1 to 15.
        :return: The decoded digit; the filler value 7 decodes to INVALID.
        """
        return Direction.from_digit(self.raw_digit(res))

    def set_index_digit(self, res: int, digit: int) -> "H3Index":
        offset = _digit_offset(res)
        cleared = self._value & ~(H3_DIGIT_MASK << offset) & _U64
        return H3Index(cleared | ((int(digit) & H3_DIGIT_MASK) << offset))

    # digit algebra

    def leading_non_zero_digit(self) -> Direction:
        """
        Return the first non-center digit, scanning from resolution 1.

        :return: The leading digit, or CENTER if all digits are center.
        """
        for r in range(1, self.resolution + 1):
            digit = self.index_digit(r)
            if digit != Direction.CENTER:
                return digit
        return Direction.CENTER

    def rotate_60ccw(self) -> "H3Index":
        """Rotate every digit of the index 60 degrees counter-clockwise."""
        h = self
        for r in range(1, self.resolution + 1):
            h = h.set_index_digit(r, h.index_digit(r).rotate_60ccw())
        return h

    def rotate_60cw(self) -> "H3Index":
        """Rotate every digit of the index 60 degrees clockwise."""
        h = self
        for r in range(1, self.resolution + 1):
            h = h.set_index_digit(r, h.index_digit(r).rotate_60cw())
        return h

    def rotate_pent_60ccw(self) -> "H3Index":
        """
        Rotate a pentagonal cell's digits 60 degrees counter-clockwise, rotating
        once more whenever the leading digit would land on the deleted k-axis.

        :return: The rotated index.
        """
        h = self
        found_first_non_zero = False
        for r in range(1, self.resolution + 1):
            h = h.set_index_digit(r, h.index_digit(r).rotate_60ccw())

            # first time we see a non-zero digit, check for the deleted k-axis
            if not found_first_non_zero and h.index_digit(r) != Direction.CENTER:
                found_first_non_zero = True
                if h.leading_non_zero_digit() == Direction.K_AXES:
                    h = h.rotate_60ccw()
        return h

    def rotate_pent_60cw(self) -> "H3Index":
        """
        Rotate a pentagonal cell's digits 60 degrees clockwise, rotating once
        more whenever the leading digit would land on the deleted k-axis.

        :return: The rotated index.
        """
        h = self
        found_first_non_zero = False
        for r in range(1, self.resolution + 1):
            h = h.set_index_digit(r, h.index_digit(r).rotate_60cw())

            if not found_first_non_zero and h.index_digit(r) != Direction.CENTER:
                found_first_non_zero = True
                if h.leading_non_zero_digit() == Direction.K_AXES:
                    h = h.rotate_60cw()
        return h

    # inspection

    def base_cell_is_pentagon(self) -> bool:
        """Whether the index's base cell is one of the twelve pentagons."""
        return base_cells.is_pentagon(self.base_cell)

    def is_pentagon(self) -> bool:
        """
        Whether the cell is a pentagon: a pentagon base cell with all center digits.

        :return: True if the cell is a pentagon.
        """
        return self.base_cell_is_pentagon() and self.leading_non_zero_digit() == Direction.CENTER

    def is_valid_cell(self) -> bool:
        """
        Whether the index is a structurally valid cell.

        :return: True if the index passes every check, False otherwise.
        """
        if self.high_bit != 0:
            return False
        if self.mode != H3_CELL_MODE:
            return False
        if self.reserved_bits != 0:
            return False

        base_cell = self.base_cell
        if base_cell >= NUM_BASE_CELLS:
            return False

        res = self.resolution
        found_first_non_zero = False
        for r in range(1, res + 1):
            digit = self.raw_digit(r)
            if not found_first_non_zero and digit != Direction.CENTER:
                found_first_non_zero = True
                if base_cells.is_pentagon(base_cell) and digit == Direction.K_AXES:
                    return False
            if digit >= Direction.NUM_DIGITS:
                return False

        for r in range(res + 1, MAX_H3_RES + 1):
            if self.raw_digit(r) != Direction.INVALID:
                return False

        return True

    def _require_valid(self) -> None:
        if not self.is_valid_cell():
            raise CellInvalidError(f"Invalid cell index: {self}")

    # geometry conversion

    def _to_face_ijk_with_initialized_fijk(self, fijk: FaceIJK) -> bool:
        # refine the base cell home coordinate by the index digits; returns
        # whether the result might lie past its face
        ijk = fijk.coord
        res = self.resolution

        # center base cell hierarchy is entirely on this face
        possible_overage = True
        if not self.base_cell_is_pentagon() and (res == 0 or (ijk.i == 0 and ijk.j == 0 and ijk.k == 0)):
            possible_overage = False

        for r in range(1, res + 1):
            if is_resolution_class_iii(r):
                # Class III == rotate ccw
                ijk.down_aperture_7()
            else:
                # Class II == rotate cw
                ijk.down_aperture_7r()
            ijk.neighbor(self.index_digit(r))

        return possible_overage

    def to_face_ijk(self) -> FaceIJK:
        """
        Convert the index to the FaceIJK address on the base cell's home face,
        adjusted onto the correct face when the cell lies past it.

        :return: The cell's FaceIJK.
        :raises CellInvalidError: If the base cell is out of range.
        :raises PentagonError: If pentagon overage correction does not settle.
        """
        base_cell = self.base_cell
        if base_cell >= NUM_BASE_CELLS:
            raise CellInvalidError(f"Invalid base cell: {base_cell}")

        h = self
        # adjust for the pentagonal missing sequence; all of sub-sequence 5
        # needs to be adjusted (and some of sub-sequence 4 below)
        if base_cells.is_pentagon(base_cell) and h.leading_non_zero_digit() == Direction.IK_AXES:
            h = h.rotate_60cw()

        # start with the "home" face and ijk+ coordinates for the base cell of c
        fijk = base_cells.home_face_ijk(base_cell)
        if not h._to_face_ijk_with_initialized_fijk(fijk):
            # no overage is possible; h lies on this face
            return fijk

        # if we're here we have the potential for an "overage"; i.e., it is
        # possible that c lies on an adjacent face
        orig_fijk = fijk.copy()

        # if we're in Class III, drop into the next finer Class II grid
        res = h.resolution
        if is_resolution_class_iii(res):
            fijk.coord.down_aperture_7r()
            res += 1

        # adjust for overage if needed
        # a pentagon base cell with a leading 4 digit requires special handling
        pent_leading4 = base_cells.is_pentagon(base_cell) and h.leading_non_zero_digit() == Direction.I_AXES
        if fijk.adjust_overage_cII(res, pent_leading4, False) != Overage.NO_OVERAGE:
            # if the base cell is a pentagon we have the potential for secondary
            # overages
            if base_cells.is_pentagon(base_cell):
                for _ in range(MAX_OVERAGE_ITERATIONS):
                    if fijk.adjust_overage_cII(res, False, False) == Overage.NO_OVERAGE:
                        break
                else:
                    logging.error(f"Overage for {self} did not settle after {MAX_OVERAGE_ITERATIONS} face hops")
                    raise PentagonError(f"Unhandled pentagon distortion for cell {self}")

            if res != h.resolution:
                fijk.coord.up_aperture_7r()
        elif res != h.resolution:
            fijk = orig_fijk

        return fijk

    @classmethod
    def from_face_ijk(cls, fijk: FaceIJK, res: int) -> "H3Index":
        """
        Convert a FaceIJK address to the index of the containing cell.

        :param fijk: The FaceIJK address.
        :param res: The cell resolution.
        :return: The encoded index.
        :raises FailedError: If the address does not resolve to a base cell.
        """
        h = cls(H3_INIT).set_mode(H3_CELL_MODE).set_resolution(res)

        # check for res 0/base cell
        if res == 0:
            return h.set_base_cell(base_cells.face_ijk_to_base_cell(fijk))

        # we need to find the correct base cell FaceIJK for this H3 index;
        # start with the passed in face and resolution res ijk coordinates
        # in that face's coordinate system
        fijk_bc = fijk.copy()

        # build the H3Index from finest res up
        # adjust r for the fact that the res 0 base cell offsets the indexing
        # digits
        ijk = fijk_bc.coord
        for r in range(res - 1, -1, -1):
            last_ijk = ijk.copy()
            if is_resolution_class_iii(r + 1):
                # rotate ccw
                ijk.up_aperture_7()
                last_center = ijk.copy().down_aperture_7()
            else:
                # rotate cw
                ijk.up_aperture_7r()
                last_center = ijk.copy().down_aperture_7r()

            diff = (last_ijk - last_center).normalize()
            h = h.set_index_digit(r + 1, diff.to_digit())

        # fijk_bc should now hold the IJK of the base cell in the
        # coordinate system of the current face; lookup the correct base cell
        base_cell = base_cells.face_ijk_to_base_cell(fijk_bc)
        h = h.set_base_cell(base_cell)

        # rotate if necessary to get canonical base cell orientation
        # for this base cell
        num_rots = base_cells.face_ijk_to_base_cell_ccw_rot60(fijk_bc)
        if base_cells.is_pentagon(base_cell):
            # force rotation out of missing k-axes sub-sequence
            if h.leading_non_zero_digit() == Direction.K_AXES:
                # check for a cw/ccw offset face; default is ccw
                if base_cells.base_cell_is_cw_offset(base_cell, fijk_bc.face):
                    h = h.rotate_60cw()
                else:
                    h = h.rotate_60ccw()

            for _ in range(num_rots):
                h = h.rotate_pent_60ccw()
        else:
            for _ in range(num_rots):
                h = h.rotate_60ccw()

        return h

    @classmethod
    def from_latlng(cls, g: LatLng, res: int) -> "H3Index":
        """
        Find the cell containing a point at the given resolution.

        :param g: The point in radians.
        :param res: The cell resolution.
        :return: The containing cell.
        :raises DomainError: If the resolution is out of range or the point is not finite.
        """
        _check_res(res)
        if not (math.isfinite(g.lat) and math.isfinite(g.lng)):
            raise DomainError(f"Latitude and longitude must be finite: {g}")
        return cls.from_face_ijk(FaceIJK.from_geo(g, res), res)

    def to_latlng(self) -> LatLng:
        """
        Find the center point of the cell.

        :return: The cell center in radians.
        :raises CellInvalidError: If the cell is not valid.
        """
        self._require_valid()
        return self.to_face_ijk().to_geo(self.resolution)

    def to_boundary(self) -> CellBoundary:
        """
        Find the boundary of the cell.

        :return: The cell boundary, 5 to 10 vertices.
        :raises CellInvalidError: If the cell is not valid.
        """
        self._require_valid()
        fijk = self.to_face_ijk()
        if self.is_pentagon():
            return fijk.pentagon_to_cell_boundary(self.resolution)
        return fijk.to_cell_boundary(self.resolution)

    # hierarchy

    def parent(self, parent_res: int) -> "H3Index":
        """
        Find the parent cell at a coarser resolution.

        :param parent_res: The parent resolution, at most the cell's own.
        :return: The parent index.
        :raises DomainError: If the resolution is out of range or finer than the cell.
        """
        _check_res(parent_res)
        child_res = self.resolution
        if parent_res > child_res:
            raise DomainError(f"Parent resolution {parent_res} is finer than cell resolution {child_res}")
        h = self.set_resolution(parent_res)
        for r in range(parent_res + 1, child_res + 1):
            h = h.set_index_digit(r, Direction.INVALID)
        return h

    def center_child(self, child_res: int) -> "H3Index":
        """
        Find the center child cell at a finer resolution.

        :param child_res: The child resolution, at least the cell's own.
        :return: The center child index.
        :raises DomainError: If the resolution is out of range or coarser than the cell.
        """
        _check_res(child_res)
        parent_res = self.resolution
        if child_res < parent_res:
            raise DomainError(f"Child resolution {child_res} is coarser than cell resolution {parent_res}")
        h = self.set_resolution(child_res)
        for r in range(parent_res + 1, child_res + 1):
            h = h.set_index_digit(r, Direction.CENTER)
        return h

    def children(self, child_res: int) -> list["H3Index"]:
        """
        Find all children at a finer resolution. Pentagon cells skip the
        deleted k-axis sub-sequence.

        :param child_res: The child resolution, at least the cell's own.
        :return: The children in digit order.
        :raises DomainError: If the resolution is out of range or coarser than the cell.
        """
        _check_res(child_res)
        parent_res = self.resolution
        if child_res < parent_res:
            raise DomainError(f"Child resolution {child_res} is coarser than cell resolution {parent_res}")
        if child_res == parent_res:
            return [self]

        next_res = parent_res + 1
        base = self.set_resolution(next_res)
        skip_k = self.is_pentagon()

        result = []
        for digit in range(Direction.CENTER, Direction.NUM_DIGITS):
            if skip_k and digit == Direction.K_AXES:
                continue
            result.extend(base.set_index_digit(next_res, digit).children(child_res))
        return result

    # metrics

    def cell_area_rads2(self) -> float:
        """
        Area of the cell in square radians, as the sum of the spherical
        triangles between the center and each boundary edge.

        :return: Area in square radians.
        """
        center = self.to_latlng()
        verts = self.to_boundary().verts
        area = 0.0
        for i, vert in enumerate(verts):
            area += triangle_area(vert, verts[(i + 1) % len(verts)], center)
        return area

    def cell_area_km2(self) -> float:
        return self.cell_area_rads2() * EARTH_RADIUS_KM * EARTH_RADIUS_KM

    def cell_area_m2(self) -> float:
        return self.cell_area_km2() * 1000 * 1000

    @staticmethod
    def res0_cells() -> list["H3Index"]:
        """All 122 resolution 0 cells, in base cell order."""
        return [H3Index.init(0, bc, Direction.CENTER) for bc in range(NUM_BASE_CELLS)]

    @staticmethod
    def pentagons(res: int) -> list["H3Index"]:
        """
        The twelve pentagon cells at a resolution.

        :raises DomainError: If the resolution is out of range.
        """
        _check_res(res)
        return [H3Index.init(res, bc, Direction.CENTER) for bc in base_cells.PENTAGON_BASE_CELLS]

    @staticmethod
    def num_cells(res: int) -> int:
        """
        Number of unique cells at a resolution.

        :raises DomainError: If the resolution is out of range.
        """
        _check_res(res)
        return 2 + 120 * 7**res
