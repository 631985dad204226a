# surveyplan/mission/compiler.py
"""
Assembles the ordered mission command list: takeoff, optional camera
trigger arm, one navigation command per waypoint (bracketed by trigger
reset/re-arm when camera triggering is on), and a final return-to-launch.
Sequence IDs follow emission order and are never reordered.
"""
import logging
import math
from typing import List, Optional, Sequence

from ..config import MissionConfig
from ..constants import MavCommand, MavFrame, PlanFormat
from ..data_models import GeoPoint, MissionCommand, Waypoint
from ..exceptions import MissionCompileError

logger = logging.getLogger(__name__)


class MissionCompiler:
    def __init__(self, config: MissionConfig):
        self.config = config

    def compile(self, waypoints: Sequence[Waypoint], takeoff_point: GeoPoint,
                trigger_distance: Optional[float] = None) -> List[MissionCommand]:
        """
        Builds the command list. ``trigger_distance`` is required when camera
        triggering is enabled.
        """
        if not waypoints:
            raise MissionCompileError("No waypoints available for plan generation")
        for index, waypoint in enumerate(waypoints):
            if not all(math.isfinite(v) for v in (waypoint.lat, waypoint.lon, waypoint.alt)):
                raise MissionCompileError(f"Invalid waypoint coordinates at index {index}")
        if not (math.isfinite(takeoff_point.lat) and math.isfinite(takeoff_point.lon)):
            raise MissionCompileError("Invalid takeoff position")

        camera_enabled = self.config.camera_trigger_enabled
        if camera_enabled and (trigger_distance is None or not math.isfinite(trigger_distance) or trigger_distance <= 0):
            raise MissionCompileError(f"Invalid camera trigger distance: {trigger_distance}")

        altitude = self.config.altitude
        items: List[MissionCommand] = []

        def emit(command: MavCommand, frame: MavFrame, params, item_altitude: float):
            if len(params) != PlanFormat.PARAM_COUNT:
                raise MissionCompileError(f"{command.name} expects {PlanFormat.PARAM_COUNT} params, got {len(params)}")
            items.append(MissionCommand(
                sequence_id=len(items),
                command=command,
                frame=frame,
                params=tuple(params),
                altitude=item_altitude,
                altitude_mode=self.config.altitude_mode,
            ))

        emit(MavCommand.NAV_TAKEOFF, MavFrame.GLOBAL_RELATIVE_ALT,
             [0, 0, 0, 0, takeoff_point.lat, takeoff_point.lon, altitude], altitude)

        if camera_enabled:
            emit(MavCommand.DO_SET_CAM_TRIGG_DIST, MavFrame.MISSION,
                 [trigger_distance, 0, 1, 0, 0, 0, 0], altitude)

        rearm = camera_enabled and self.config.rearm_trigger_per_waypoint
        for waypoint in waypoints:
            if rearm:
                emit(MavCommand.DO_SET_CAM_TRIGG_DIST, MavFrame.MISSION,
                     [0, 0, 1, 0, 0, 0, 0], waypoint.alt)
            emit(MavCommand.NAV_WAYPOINT, MavFrame.GLOBAL_RELATIVE_ALT,
                 [0, 0, 0, 0, waypoint.lat, waypoint.lon, waypoint.alt], waypoint.alt)
            if rearm:
                emit(MavCommand.DO_SET_CAM_TRIGG_DIST, MavFrame.MISSION,
                     [trigger_distance, 0, 1, 0, 0, 0, 0], waypoint.alt)

        emit(MavCommand.NAV_RTL, MavFrame.MISSION, [0, 0, 0, 0, 0, 0, 0], 0)

        logger.info(f"Compiled {len(items)} mission items for {len(waypoints)} waypoints")
        return items
