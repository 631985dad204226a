# surveyplan/utils/calculations.py
import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

from ..constants import PlannerConstants
from ..data_models import Bounds, GeoPoint, MissionStatistics, Waypoint, CameraTriggerPoint
from .coordinates import distance_m

logger = logging.getLogger(__name__)


def _open_ring(ring: Sequence[Tuple[float, float]]) -> np.ndarray:
    """(lon, lat) vertices as an Nx2 array, closing duplicate removed."""
    coords = np.asarray(ring, dtype=float).reshape(-1, 2) if len(ring) else np.empty((0, 2))
    if len(coords) > 1 and np.array_equal(coords[0], coords[-1]):
        coords = coords[:-1]
    return coords


def polygon_centroid(ring: Sequence[Tuple[float, float]]) -> GeoPoint:
    """Arithmetic mean of the ring's vertices, closing duplicate excluded."""
    coords = _open_ring(ring)
    if len(coords) == 0:
        return GeoPoint(lat=0.0, lon=0.0)
    mean_lon, mean_lat = coords.mean(axis=0)
    return GeoPoint(lat=float(mean_lat), lon=float(mean_lon))


def polygon_bounds(ring: Sequence[Tuple[float, float]]) -> Bounds:
    coords = _open_ring(ring)
    if len(coords) == 0:
        return Bounds(0.0, 0.0, 0.0, 0.0)
    min_lon, min_lat = coords.min(axis=0)
    max_lon, max_lat = coords.max(axis=0)
    return Bounds(min_lat=float(min_lat), max_lat=float(max_lat),
                  min_lon=float(min_lon), max_lon=float(max_lon))


def polygon_area_m2(ring: Sequence[Tuple[float, float]]) -> float:
    """
    Planar (shoelace) area of a (lon, lat) ring scaled to square meters with the
    local degree lengths at the ring's centroid. Rings with fewer than three
    distinct vertices have zero area.
    """
    coords = _open_ring(ring)
    if len(np.unique(coords, axis=0)) < 3:
        return 0.0

    area_deg2 = Polygon(coords).area

    centroid = polygon_centroid(ring)
    m_per_deg_lat = PlannerConstants.METERS_PER_DEGREE
    m_per_deg_lon = PlannerConstants.METERS_PER_DEGREE * math.cos(math.radians(centroid.lat))
    return float(area_deg2 * m_per_deg_lat * m_per_deg_lon)


def path_distance_m(waypoints: Sequence[Waypoint]) -> float:
    """Sum of great-circle distances between consecutive waypoints."""
    total = 0.0
    for i in range(1, len(waypoints)):
        prev, curr = waypoints[i - 1], waypoints[i]
        total += distance_m(prev.lat, prev.lon, curr.lat, curr.lon)
    return total


def ground_footprint_m(altitude: float, sensor_mm: float, focal_length_mm: float) -> Optional[float]:
    """Ground length covered by one sensor dimension, or None for unusable inputs."""
    if altitude <= 0 or sensor_mm <= 0 or focal_length_mm <= 0:
        return None
    return altitude * sensor_mm / focal_length_mm


def line_spacing_m(altitude: float, sensor_width_mm: float, focal_length_mm: float,
                   side_overlap_pct: float) -> Optional[float]:
    """Distance between adjacent survey lines, or None when no grid can be built."""
    footprint = ground_footprint_m(altitude, sensor_width_mm, focal_length_mm)
    if footprint is None or not 0 <= side_overlap_pct < 100:
        return None
    return footprint * (1 - side_overlap_pct / 100)


def trigger_distance_m(altitude: float, sensor_width_mm: float, focal_length_mm: float,
                       frontal_overlap_pct: float, cruise_speed: float,
                       min_trigger_interval_s: float) -> float:
    """
    Along-track distance between camera shots: the frontal-overlap spacing,
    floored by how far the vehicle travels in the minimum shot interval.
    """
    footprint = ground_footprint_m(altitude, sensor_width_mm, focal_length_mm)
    if footprint is None:
        logger.warning("Invalid camera parameters for trigger calculation, using fallback distance")
        return PlannerConstants.FALLBACK_TRIGGER_DISTANCE_M

    overlap_spacing = footprint * (1 - frontal_overlap_pct / 100)
    min_distance = cruise_speed * min_trigger_interval_s
    return max(overlap_spacing, min_distance)


def calculate_statistics(waypoints: List[Waypoint], camera_points: List[CameraTriggerPoint],
                         ring: Sequence[Tuple[float, float]], cruise_speed: float) -> MissionStatistics:
    distance = round(path_distance_m(waypoints))
    flight_time = round(distance / cruise_speed / 60, 1) if cruise_speed > 0 else 0.0
    return MissionStatistics(
        waypoints=len(waypoints),
        distance_m=distance,
        flight_time_min=flight_time,
        camera_shots=len(camera_points),
        area_m2=round(polygon_area_m2(ring)),
    )
