# surveyplan/generators/vertices.py
import logging
from typing import List

from ..config import MissionConfig
from ..constants import WaypointKind
from ..data_models import BoundaryRing, Waypoint

logger = logging.getLogger(__name__)


class VerticesGenerator:
    """One waypoint per boundary vertex, in ring order."""

    def __init__(self, config: MissionConfig):
        self.config = config

    def generate(self, boundary: BoundaryRing) -> List[Waypoint]:
        waypoints = [
            Waypoint(id=index + 1, lat=lat, lon=lon, alt=self.config.altitude, kind=WaypointKind.VERTEX)
            for index, (lon, lat) in enumerate(boundary.vertices)
        ]
        logger.info(f"Generated {len(waypoints)} vertex waypoints")
        return waypoints
