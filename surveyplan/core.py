# surveyplan/core.py
"""
The core orchestrator: one generate call turns a boundary and a mission
configuration into waypoints, camera shots, a mission plan and statistics.
The planner holds no state between calls.
"""
import logging
import time
import warnings
from typing import Any, Dict, Mapping, Optional, Union

from .boundary_loader import resolve_boundary
from .camera_trigger import CameraTriggerScheduler
from .config import MissionConfig
from .data_models import BoundaryRing, MissionResult
from .exceptions import EmptyResult, InvalidConfiguration, SurveyPlanError
from .generators import get_generator
from .mission.compiler import MissionCompiler
from .mission.serializer import PlanSerializer, plan_to_json
from .utils.calculations import calculate_statistics, polygon_centroid

logger = logging.getLogger(__name__)


class SurveyMissionPlanner:
    """Main class to generate survey missions from a boundary polygon."""

    def __init__(self):
        if not logging.getLogger().hasHandlers():
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    def generate(self, boundary: Union[BoundaryRing, Mapping[str, Any]],
                 config: Optional[MissionConfig] = None) -> MissionResult:
        """
        Runs the full pipeline. Raises InvalidConfiguration, InvalidBoundary
        or MissionCompileError; an empty pattern is not an error and yields a
        result with no plan and an EmptyResult warning.
        """
        config = (config or MissionConfig()).check()
        ring = resolve_boundary(boundary)
        logger.info(f"Generating '{config.pattern.value}' mission for '{ring.name}'")

        waypoints = get_generator(config).generate(ring)
        scheduler = CameraTriggerScheduler(config)
        camera_points = scheduler.schedule(waypoints)
        statistics = calculate_statistics(waypoints, camera_points, ring.coordinates, config.cruise_speed)

        if not waypoints:
            message = f"Pattern '{config.pattern.value}' produced no waypoints for '{ring.name}'; nothing to fly."
            logger.warning(message)
            warnings.warn(message, EmptyResult, stacklevel=2)
            return MissionResult(boundary=ring, waypoints=[], camera_points=[], plan=None,
                                 statistics=statistics, warnings=[message])

        trigger_distance = scheduler.trigger_distance() if config.camera_trigger_enabled else None
        commands = MissionCompiler(config).compile(waypoints, polygon_centroid(ring.coordinates), trigger_distance)
        plan = PlanSerializer(config).build(commands, waypoints)

        logger.info(f"Mission generated: {statistics.waypoints} waypoints, {statistics.distance_m} m, "
                    f"{statistics.camera_shots} camera shots")
        return MissionResult(boundary=ring, waypoints=waypoints, camera_points=camera_points,
                             plan=plan, statistics=statistics)

    def run(self, boundary: Union[BoundaryRing, Mapping[str, Any]],
            config: Union[MissionConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        """
        Generate with a standardized response dict instead of exceptions, for
        UI collaborators. ``config`` may be a raw form record.
        """
        try:
            if config is not None and not isinstance(config, MissionConfig):
                config = MissionConfig.from_dict(config)
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", EmptyResult)
                result = self.generate(boundary, config)
        except InvalidConfiguration as e:
            return self._format_response(
                success=False,
                message=str(e),
                data={"error_type": type(e).__name__, "violations": e.violations}
            )
        except SurveyPlanError as e:
            logger.error(f"Mission generation failed: {e}")
            return self._format_response(
                success=False,
                message=str(e),
                data={"error_type": type(e).__name__}
            )

        message = result.warnings[0] if result.is_empty else f"Mission generated with {len(result.waypoints)} waypoints"
        return self._format_response(
            success=True,
            message=message,
            data={
                "boundary_name": result.boundary.name,
                "empty": result.is_empty,
                "waypoints": [wp.to_dict() for wp in result.waypoints],
                "camera_points": [cp.to_dict() for cp in result.camera_points],
                "plan": plan_to_json(result.plan) if result.plan else None,
                "statistics": result.statistics.to_dict(),
                "warnings": list(result.warnings),
            }
        )

    def _format_response(self, success: bool, message: str, data: Dict) -> Dict[str, Any]:
        """Standardized JSON response."""
        return {
            "module": "surveyplan",
            "success": success,
            "message": message,
            "data": data,
            "timestamp": time.time()
        }
