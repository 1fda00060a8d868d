"""Cell boundary data model definition."""

from pydantic import BaseModel, Field

from h3_grid.constants import MAX_CELL_BOUNDARY_VERTS
from h3_grid.latlng import LatLng


class CellBoundary(BaseModel):
    """
    Ordered cell boundary vertices; insertion order is the polygon winding order.

    :param verts: Boundary vertices in lat/lng radians.
    """

    verts: list[LatLng] = Field(default_factory=list, max_length=MAX_CELL_BOUNDARY_VERTS)

    @property
    def num_verts(self) -> int:
        """Number of vertices in the boundary."""
        return len(self.verts)

    def to_degrees(self) -> list[tuple[float, float]]:
        """
        Boundary vertices in decimal degrees.

        :return: List of (lat, lng) tuples.
        """
        return [v.to_degrees() for v in self.verts]
