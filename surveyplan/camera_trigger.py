# surveyplan/camera_trigger.py
"""
Distance-triggered camera shot scheduling.

Shots are measured from every waypoint rather than accumulated across the
whole route: each leg starts with a shot at its first waypoint, then one shot
every trigger interval along the leg. This guarantees overlap from every
waypoint at the cost of extra shots near turns.
"""
import logging
from typing import List, Sequence

from .config import MissionConfig
from .constants import PlannerConstants
from .data_models import CameraTriggerPoint, Waypoint
from .utils.calculations import trigger_distance_m
from .utils.coordinates import distance_m

logger = logging.getLogger(__name__)


class CameraTriggerScheduler:
    def __init__(self, config: MissionConfig):
        self.config = config

    def trigger_distance(self) -> float:
        camera = self.config.camera
        return trigger_distance_m(
            altitude=self.config.altitude,
            sensor_width_mm=camera.sensor_width,
            focal_length_mm=camera.focal_length,
            frontal_overlap_pct=camera.frontal_overlap,
            cruise_speed=self.config.cruise_speed,
            min_trigger_interval_s=self.config.min_trigger_interval,
        )

    def schedule(self, waypoints: Sequence[Waypoint]) -> List[CameraTriggerPoint]:
        """Camera shot locations for the route, or [] when triggering is off."""
        if not self.config.camera_trigger_enabled or len(waypoints) < 2:
            return []
        return schedule_triggers(waypoints, self.trigger_distance())


def schedule_triggers(waypoints: Sequence[Waypoint], interval_m: float) -> List[CameraTriggerPoint]:
    """
    Walks consecutive waypoint pairs emitting a shot at each leg's start and
    every ``interval_m`` meters along it, then one final shot at the last
    waypoint. Interior shots stop short of the leg end, which is itself shot
    as the next leg's start.
    """
    if len(waypoints) < 2:
        return []
    if interval_m <= 0:
        logger.warning("Invalid trigger distance calculated")
        return []

    points: List[CameraTriggerPoint] = []

    def shoot(lat: float, lon: float, alt: float):
        points.append(CameraTriggerPoint(id=len(points) + 1, lat=lat, lon=lon, alt=alt))

    for prev, curr in zip(waypoints[:-1], waypoints[1:]):
        segment_length = distance_m(prev.lat, prev.lon, curr.lat, curr.lon)
        shoot(prev.lat, prev.lon, prev.alt)

        step = 1
        while step * interval_m < segment_length - PlannerConstants.TRIGGER_END_TOLERANCE_M:
            ratio = step * interval_m / segment_length
            shoot(prev.lat + (curr.lat - prev.lat) * ratio,
                  prev.lon + (curr.lon - prev.lon) * ratio,
                  curr.alt)
            step += 1

    last = waypoints[-1]
    shoot(last.lat, last.lon, last.alt)

    logger.info(f"Generated {len(points)} camera trigger points (reset at each waypoint)")
    return points
