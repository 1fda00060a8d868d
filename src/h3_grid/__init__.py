"""H3-Grid: a hierarchical hexagonal grid system for indexing the sphere."""

__version__ = "1.0.0"

from .constants import (
    EARTH_RADIUS_KM,
    GEOMETRY_COL_NAME,
    H3_AREA_COL_NAME,
    H3_INDEX_COL_NAME,
    H3_RES_COL_NAME,
    MAX_H3_RES,
    NUM_HEX_VERTS,
    NUM_PENT_VERTS,
    NUM_PENTAGONS,
)

from .errors import (
    CellInvalidError,
    DomainError,
    FailedError,
    H3Error,
    PentagonError,
)

from .coordijk import CoordIJK, Direction
from .latlng import LatLng
from .faceijk import FaceIJK, Overage
from .h3_index import H3Index

from .cells import (
    average_hexagon_area,
    average_hexagon_edge_length,
    cell_area,
    cell_to_boundary,
    cell_to_center_child,
    cell_to_children,
    cell_to_latlng,
    cell_to_parent,
    get_base_cell_number,
    get_num_cells,
    get_pentagons,
    get_res0_cells,
    get_resolution,
    great_circle_distance,
    int_to_str,
    is_pentagon,
    is_valid_cell,
    latlng_to_cell,
    str_to_int,
)

# Make submodules available
from . import base_cells
from . import data_model
from . import utils
