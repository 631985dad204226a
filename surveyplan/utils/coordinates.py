# surveyplan/utils/coordinates.py
"""
Core coordinate geometry. Logging is omitted here as these are high-frequency,
low-level functions; they never raise and return degenerate values (zero,
None) on degenerate input.
"""
import math
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString

from ..constants import PlannerConstants

Point = Tuple[float, float]


def distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine great-circle distance in meters."""
    lat1_rad, lon1_rad = math.radians(lat1), math.radians(lon1)
    lat2_rad, lon2_rad = math.radians(lat2), math.radians(lon2)
    dlon = lon2_rad - lon1_rad; dlat = lat2_rad - lat1_rad
    a = math.sin(dlat / 2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2)**2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return PlannerConstants.EARTH_RADIUS_M * c


def rotate_point(point: Point, pivot: Point, angle_rad: float) -> Point:
    """Standard counter-clockwise 2D rotation of ``point`` about ``pivot``."""
    cos_a, sin_a = math.cos(angle_rad), math.sin(angle_rad)
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return (pivot[0] + dx * cos_a - dy * sin_a,
            pivot[1] + dx * sin_a + dy * cos_a)


def segment_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Optional[Point]:
    """
    Intersection of segments p1-p2 and p3-p4, or None when they are parallel
    or the crossing lies outside either segment.
    """
    x1, y1 = p1; x2, y2 = p2
    x3, y3 = p3; x4, y4 = p4

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < PlannerConstants.PARALLEL_EPSILON:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom
    if 0 <= t <= 1 and 0 <= u <= 1:
        return (x1 + t * (x2 - x1), y1 + t * (y2 - y1))
    return None


def interpolate(start: Point, end: Point, ratio: float) -> Point:
    return (start[0] + (end[0] - start[0]) * ratio,
            start[1] + (end[1] - start[1]) * ratio)


def resample_polyline(polyline: Sequence[Point], step_m: float) -> Iterator[Point]:
    """
    Lazily walks a (lon, lat) polyline, yielding a point roughly every
    ``step_m`` meters. The first and last points and every input vertex
    are always yielded; the distance counter restarts at each vertex, so the
    final sub-segment of a leg may be shorter than ``step_m``.
    """
    if not polyline:
        return
    yield polyline[0]
    if len(polyline) < 2:
        return

    for i in range(1, len(polyline)):
        start, end = polyline[i - 1], polyline[i]
        segment_length = distance_m(start[1], start[0], end[1], end[0])
        if step_m > 0 and segment_length > 0:
            leg = LineString([start, end])
            travelled = step_m
            while travelled < segment_length:
                point = leg.interpolate(travelled / segment_length, normalized=True)
                yield (point.x, point.y)
                travelled += step_m
        yield end


class LocalProjection:
    """
    Flat-earth projection about an origin: 111 km per degree of latitude and
    111 km * cos(origin latitude) per degree of longitude. Good to a few
    kilometres from the origin, away from the poles and the antimeridian.
    """

    def __init__(self, origin_lat: float, origin_lon: float):
        self.origin_lat = origin_lat
        self.origin_lon = origin_lon
        self.m_per_deg_lat = PlannerConstants.METERS_PER_DEGREE
        self.m_per_deg_lon = PlannerConstants.METERS_PER_DEGREE * math.cos(math.radians(origin_lat))

    def to_xy(self, lon: float, lat: float) -> Point:
        return ((lon - self.origin_lon) * self.m_per_deg_lon,
                (lat - self.origin_lat) * self.m_per_deg_lat)

    def to_lonlat(self, x: float, y: float) -> Point:
        return (self.origin_lon + x / self.m_per_deg_lon,
                self.origin_lat + y / self.m_per_deg_lat)

    def ring_to_xy(self, ring: Sequence[Point]) -> np.ndarray:
        coords = np.asarray(ring, dtype=float)[:, :2]
        return np.column_stack((
            (coords[:, 0] - self.origin_lon) * self.m_per_deg_lon,
            (coords[:, 1] - self.origin_lat) * self.m_per_deg_lat,
        ))
