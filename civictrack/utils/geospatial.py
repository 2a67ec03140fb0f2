# Standard library imports
from dataclasses import dataclass
import math

EARTH_RADIUS_KM = 6371.0
# Arc length of one degree on the sphere used by haversine_km (about 111.195 km)
KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180
# Below this cos(latitude) the longitude span of a box is treated as unbounded
MIN_COS_LATITUDE = 1e-9


@dataclass(frozen=True)
class BoundingBox:
    """
    Rectangular pre-filter around a point, always a superset of the circle.

    ``min_lon > max_lon`` means the box wraps across the antimeridian; use
    ``longitude_ranges`` to query it.
    """

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        return self.min_lat, self.min_lon, self.max_lat, self.max_lon

    @property
    def longitude_ranges(self) -> list[tuple[float, float]]:
        if self.min_lon <= self.max_lon:
            return [(self.min_lon, self.max_lon)]
        return [(self.min_lon, 180.0), (-180.0, self.max_lon)]

    def contains(self, latitude: float, longitude: float) -> bool:
        if not self.min_lat <= latitude <= self.max_lat:
            return False
        return any(low <= longitude <= high for low, high in self.longitude_ranges)


def is_valid_latitude(value: float) -> bool:
    return math.isfinite(value) and -90.0 <= value <= 90.0


def is_valid_longitude(value: float) -> bool:
    return math.isfinite(value) and -180.0 <= value <= 180.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in kilometers.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees
    """
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = math.sin(dlat / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    # Rounding can push a a hair above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def bounding_box(latitude: float, longitude: float, radius_km: float) -> BoundingBox:
    """
    Compute the lat/lon box enclosing a circle of ``radius_km`` around a point.

    The latitude span is the radius as an arc of the same sphere
    ``haversine_km`` measures on. The longitude span is the widest point of
    the circle, ``asin(sin(r / R) / cos(lat))``, which lies poleward of the
    centre, so every point within the radius falls inside the box.

    Latitude bounds are clamped to [-90, 90]. If the circle reaches a pole
    every longitude is included. A longitude range that runs past +/-180
    wraps around.
    """
    angular_radius = radius_km / EARTH_RADIUS_KM
    lat_delta = radius_km / KM_PER_DEGREE

    min_lat = latitude - lat_delta
    max_lat = latitude + lat_delta

    cos_lat = math.cos(math.radians(latitude))
    if min_lat <= -90.0 or max_lat >= 90.0 or cos_lat < MIN_COS_LATITUDE:
        return BoundingBox(max(min_lat, -90.0), -180.0, min(max_lat, 90.0), 180.0)

    sin_lon_delta = math.sin(angular_radius) / cos_lat
    if angular_radius >= math.pi / 2 or sin_lon_delta >= 1.0:
        return BoundingBox(min_lat, -180.0, max_lat, 180.0)

    lon_delta = math.degrees(math.asin(sin_lon_delta))
    min_lon = longitude - lon_delta
    max_lon = longitude + lon_delta
    if min_lon < -180.0:
        min_lon += 360.0
    if max_lon > 180.0:
        max_lon -= 360.0
    return BoundingBox(min_lat, min_lon, max_lat, max_lon)
