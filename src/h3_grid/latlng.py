"""Spherical geometry on latitude/longitude points in radians."""

import math

from pydantic import BaseModel

from h3_grid.constants import (
    EARTH_RADIUS_KM,
    EPSILON,
    EPSILON_RAD,
    M_2PI,
    M_180_PI,
    M_PI,
    M_PI_2,
    M_PI_180,
)


def degs_to_rads(degrees: float) -> float:
    """Convert from decimal degrees to radians."""
    return degrees * M_PI_180


def rads_to_degs(radians: float) -> float:
    """Convert from radians to decimal degrees."""
    return radians * M_180_PI


def pos_angle_rads(rads: float) -> float:
    """
    Normalize radians to a value between 0.0 and two PI.

    :param rads: The input radians value.
    :return: The normalized radians value.
    """
    tmp = rads + M_2PI if rads < 0.0 else rads
    if rads >= M_2PI:
        tmp -= M_2PI
    return tmp


def constrain_lat(lat: float) -> float:
    """Make sure latitudes are in the proper bounds."""
    while lat > M_PI_2:
        lat = lat - M_PI
    return lat


def constrain_lng(lng: float) -> float:
    """Make sure longitudes are in the proper bounds."""
    while lng > M_PI:
        lng = lng - M_2PI
    while lng < -M_PI:
        lng = lng + M_2PI
    return lng


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


class LatLng(BaseModel):
    """
    Latitude/longitude in radians.

    :param lat: Latitude in radians.
    :param lng: Longitude in radians.
    """

    lat: float
    lng: float

    class Config:
        """Config class."""

        # points are value types
        frozen = True

    @classmethod
    def from_degrees(cls, lat: float, lng: float) -> "LatLng":
        """
        Build a point from decimal degrees.

        :param lat: Latitude in degrees.
        :param lng: Longitude in degrees.
        :return: The point in radians.
        """
        return cls(lat=degs_to_rads(lat), lng=degs_to_rads(lng))

    def to_degrees(self) -> tuple[float, float]:
        """
        Convert the point to decimal degrees.

        :return: Tuple of (lat, lng) in degrees.
        """
        return rads_to_degs(self.lat), rads_to_degs(self.lng)

    def almost_equal_threshold(self, other: "LatLng", threshold: float) -> bool:
        """
        Determine if the components of two points are within some threshold
        distance of each other.

        :param other: The other point.
        :param threshold: Threshold in radians.
        :return: True if both components are within the threshold.
        """
        return abs(self.lat - other.lat) < threshold and abs(self.lng - other.lng) < threshold

    def almost_equal(self, other: "LatLng") -> bool:
        """Whether two points are within EPSILON_RAD of each other."""
        return self.almost_equal_threshold(other, EPSILON_RAD)

    def great_circle_distance_rads(self, other: "LatLng") -> float:
        """
        The great circle distance in radians between two spherical coordinates,
        using the haversine formula.

        :param other: The other point.
        :return: Distance in radians.
        """
        sin_lat = math.sin((other.lat - self.lat) / 2.0)
        sin_lng = math.sin((other.lng - self.lng) / 2.0)

        a = sin_lat * sin_lat + math.cos(self.lat) * math.cos(other.lat) * sin_lng * sin_lng
        a = min(1.0, max(0.0, a))

        return 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))

    def great_circle_distance_km(self, other: "LatLng") -> float:
        """The great circle distance in kilometers between two points."""
        return self.great_circle_distance_rads(other) * EARTH_RADIUS_KM

    def great_circle_distance_m(self, other: "LatLng") -> float:
        """The great circle distance in meters between two points."""
        return self.great_circle_distance_km(other) * 1000.0

    def azimuth_rads(self, other: "LatLng") -> float:
        """
        Determine the azimuth from this point to another in radians.

        :param other: The destination point.
        :return: The azimuth in radians.
        """
        return math.atan2(
            math.cos(other.lat) * math.sin(other.lng - self.lng),
            math.cos(self.lat) * math.sin(other.lat)
            - math.sin(self.lat) * math.cos(other.lat) * math.cos(other.lng - self.lng),
        )

    def azimuth_distance(self, az: float, distance: float) -> "LatLng":
        """
        Compute the point reached by travelling from this point along the given
        azimuth for the given angular distance.

        :param az: The azimuth in radians.
        :param distance: The angular distance in radians.
        :return: The destination point.
        """
        if distance < EPSILON:
            return self

        az = pos_angle_rads(az)

        # due north or south
        if az < EPSILON or abs(az - M_PI) < EPSILON:
            if az < EPSILON:
                lat = self.lat + distance
            else:
                lat = self.lat - distance

            if abs(lat - M_PI_2) < EPSILON:
                return LatLng(lat=M_PI_2, lng=0.0)
            if abs(lat + M_PI_2) < EPSILON:
                return LatLng(lat=-M_PI_2, lng=0.0)
            return LatLng(lat=lat, lng=constrain_lng(self.lng))

        sin_lat = _clamp_unit(
            math.sin(self.lat) * math.cos(distance) + math.cos(self.lat) * math.sin(distance) * math.cos(az)
        )
        lat = math.asin(sin_lat)

        # snap to the poles
        if abs(lat - M_PI_2) < EPSILON:
            return LatLng(lat=M_PI_2, lng=0.0)
        if abs(lat + M_PI_2) < EPSILON:
            return LatLng(lat=-M_PI_2, lng=0.0)

        inv_cos_lat = 1.0 / math.cos(lat)
        sin_lng = _clamp_unit(math.sin(az) * math.sin(distance) * inv_cos_lat)
        cos_lng = _clamp_unit(
            (math.cos(distance) - math.sin(self.lat) * math.sin(lat)) / math.cos(self.lat) * inv_cos_lat
        )
        return LatLng(lat=lat, lng=constrain_lng(self.lng + math.atan2(sin_lng, cos_lng)))


def geo_azimuth_distance_rads(p1: LatLng, az: float, distance: float) -> LatLng:
    """Functional form of LatLng.azimuth_distance."""
    return p1.azimuth_distance(az, distance)


def great_circle_distance_rads(a: LatLng, b: LatLng) -> float:
    """Functional form of LatLng.great_circle_distance_rads."""
    return a.great_circle_distance_rads(b)


def triangle_edge_lengths_to_area(a: float, b: float, c: float) -> float:
    """
    Compute the area of a spherical triangle from its edge lengths using
    L'Huilier's theorem.

    :param a: Length of edge a in radians.
    :param b: Length of edge b in radians.
    :param c: Length of edge c in radians.
    :return: Area in square radians (spherical excess).
    """
    s = (a + b + c) / 2.0

    a = (s - a) / 2.0
    b = (s - b) / 2.0
    c = (s - c) / 2.0
    s = s / 2.0

    product = math.tan(s) * math.tan(a) * math.tan(b) * math.tan(c)
    return 4.0 * math.atan(math.sqrt(max(0.0, product)))


def triangle_area(a: LatLng, b: LatLng, c: LatLng) -> float:
    """
    Compute the area of a spherical triangle given its vertices.

    :return: Area in square radians.
    """
    return triangle_edge_lengths_to_area(
        a.great_circle_distance_rads(b),
        b.great_circle_distance_rads(c),
        c.great_circle_distance_rads(a),
    )
