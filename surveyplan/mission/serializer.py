# surveyplan/mission/serializer.py
"""
Wraps a compiled command list into the QGroundControl ``.plan`` document.
Keys are emitted sorted, so serializing the same plan twice is
byte-identical.
"""
import logging
import math
from pathlib import Path
from typing import Sequence, Union

from ..config import MissionConfig
from ..data_models import MissionCommand, MissionPlan, Waypoint
from ..exceptions import MissionCompileError

logger = logging.getLogger(__name__)


class PlanSerializer:
    def __init__(self, config: MissionConfig):
        self.config = config

    def build(self, commands: Sequence[MissionCommand], waypoints: Sequence[Waypoint]) -> MissionPlan:
        """The first waypoint doubles as the planned home position."""
        if not waypoints:
            raise MissionCompileError("No waypoints available for plan generation")
        home = waypoints[0]
        if not all(math.isfinite(v) for v in (home.lat, home.lon, home.alt)):
            raise MissionCompileError("Invalid home position")

        return MissionPlan(
            items=list(commands),
            planned_home_position=(home.lat, home.lon, home.alt),
            cruise_speed=self.config.cruise_speed,
            hover_speed=self.config.hover_speed,
            firmware_type=self.config.firmware_type,
            vehicle_type=self.config.vehicle_type,
            global_plan_altitude_mode=self.config.altitude_mode,
        )


def plan_to_json(plan: MissionPlan) -> str:
    return plan.to_json()


def write_plan(plan: MissionPlan, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(plan_to_json(plan), encoding="utf-8")
    logger.info(f"Mission plan written to {path}")
    return path
