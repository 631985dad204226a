# surveyplan/generators/perimeter.py
import logging
from typing import List, Sequence

import numpy as np
from shapely.geometry import LineString

from ..config import MissionConfig
from ..constants import PlannerConstants, WaypointKind
from ..data_models import BoundaryRing, Waypoint
from ..utils.calculations import polygon_bounds
from ..utils.coordinates import LocalProjection, Point

logger = logging.getLogger(__name__)


def resample_ring(ring: Sequence[Point], spacing_m: float) -> List[Point]:
    """
    Evenly spaced points along the closed ring's outline, measured in the
    local metric plane and starting at the first vertex. The closing point
    is not repeated.
    """
    center = polygon_bounds(ring).center
    projection = LocalProjection(center.lat, center.lon)
    outline = LineString(projection.ring_to_xy(ring))
    if spacing_m <= 0 or outline.length == 0:
        return [tuple(ring[0])]

    points = []
    for walked in np.arange(0.0, outline.length, spacing_m):
        if walked > outline.length - PlannerConstants.COINCIDENT_POINT_M:
            break
        point = outline.interpolate(float(walked))
        points.append(projection.to_lonlat(point.x, point.y))
    return points


class PerimeterGenerator:
    """
    Flies the boundary outline. By default every ring vertex becomes a
    waypoint; a non-zero ``perimeter_spacing`` switches to evenly spaced
    points along the outline instead.
    """

    def __init__(self, config: MissionConfig):
        self.config = config

    def generate(self, boundary: BoundaryRing) -> List[Waypoint]:
        spacing = self.config.perimeter_spacing
        if spacing > 0:
            points = resample_ring(boundary.coordinates, spacing)
        else:
            points = list(boundary.vertices)

        waypoints = [
            Waypoint(id=index + 1, lat=lat, lon=lon, alt=self.config.altitude, kind=WaypointKind.PERIMETER)
            for index, (lon, lat) in enumerate(points)
        ]
        logger.info(f"Generated {len(waypoints)} perimeter waypoints")
        return waypoints
