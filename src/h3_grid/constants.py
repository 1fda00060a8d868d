"""Constants for easy management."""

import math

M_PI = math.pi
# pi / 2.0
M_PI_2 = math.pi / 2.0
# 2.0 * pi
M_2PI = 2.0 * math.pi
# pi / 180
M_PI_180 = math.pi / 180.0
# 180 / pi
M_180_PI = 180.0 / math.pi

# threshold epsilon
EPSILON = 0.0000000000000001
# single precision epsilon, used for planar vertex comparisons
FLT_EPSILON = 1.1920929e-07
# sqrt(3) / 2.0
M_SQRT3_2 = 0.8660254037844386467637231707529361834714
# sin(60')
M_SIN60 = M_SQRT3_2
# sqrt(7)
M_SQRT7 = 2.6457513110645905905016157536392604257102

# rotation angle between Class II and Class III resolution axes
# (asin(sqrt(3.0 / 28.0)))
M_AP7_ROT_RADS = 0.333473172251832115336090755351601070065900389

# earth radius in kilometers using WGS84 authalic radius
EARTH_RADIUS_KM = 6371.007180918475

# scaling factor from hex2d resolution 0 unit length
# (or distance between adjacent cell center points
# on the plane) to gnomonic unit length
RES0_U_GNOMONIC = 0.38196601125010500003
INV_RES0_U_GNOMONIC = 2.61803398874989588842

# max H3 resolution; 16 resolutions, numbered 0 through 15
MAX_H3_RES = 15

NUM_ICOSA_FACES = 20
NUM_BASE_CELLS = 122
NUM_HEX_VERTS = 6
NUM_PENT_VERTS = 5
NUM_PENTAGONS = 12
MAX_CELL_BOUNDARY_VERTS = 10

# largest res 0 face coordinate component that still maps to a base cell
MAX_FACE_COORD = 2

# cap on consecutive face hops while resolving an overage
MAX_OVERAGE_ITERATIONS = 8

# index modes
H3_CELL_MODE = 1

# average hexagon area in square meters, resolutions 0-15
HEXAGON_AREA_AVG_M2 = (
    4.357449416078390e12,
    6.097884417941339e11,
    8.680178039899731e10,
    1.239343465508818e10,
    1.770347654491309e09,
    2.529038581819452e08,
    3.612906216441250e07,
    5.161293359717198e06,
    7.373275975944188e05,
    1.053325134272069e05,
    1.504750190766437e04,
    2.149643129451882e03,
    3.070918756316063e02,
    4.387026794728301e01,
    6.267181135324322e00,
    8.953115907605802e-01,
)

# average hexagon edge length in kilometers, resolutions 0-15
HEXAGON_EDGE_LENGTH_AVG_KM = (
    1107.712591,
    418.6760055,
    158.2446558,
    59.81085794,
    22.6063794,
    8.544408276,
    3.229482772,
    1.220629759,
    0.461354684,
    0.174375668,
    0.065907807,
    0.024910561,
    0.009415526,
    0.003559893,
    0.001348575,
    0.000509713,
)

# average hexagon edge length in meters, resolutions 0-15
HEXAGON_EDGE_LENGTH_AVG_M = (
    1107712.591,
    418676.0055,
    158244.6558,
    59810.85794,
    22606.3794,
    8544.408276,
    3229.482772,
    1220.629759,
    461.3546837,
    174.3756681,
    65.90780749,
    24.9105614,
    9.415526211,
    3.559893033,
    1.348574562,
    0.509713273,
)

# column/key name of the geometry in exported records
GEOMETRY_COL_NAME = "geometry"
# column/key name of the H3 area in exported records
H3_AREA_COL_NAME = "h3_area_km2"
# H3 index column name
H3_INDEX_COL_NAME = "h3_index"
# H3 resolution column name
H3_RES_COL_NAME = "h3_resolution"

# epsilon of ~0.1mm in degrees
EPSILON_DEG = 0.000000001
# epsilon of ~0.1mm in radians
EPSILON_RAD = EPSILON_DEG * M_PI_180
