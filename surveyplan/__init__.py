# surveyplan/__init__.py
"""
surveyplan - survey mission planning engine.

Turns a GeoJSON boundary and a flight/camera configuration into ordered
waypoints, camera trigger points and a QGroundControl mission plan.
"""
from .core import SurveyMissionPlanner
from .config import MissionConfig, CameraConfig
from .constants import PatternType, WaypointKind, MavCommand, MavFrame, AltitudeMode, SAMPLE_BOUNDARY
from .data_models import (
    BoundaryRing, Waypoint, CameraTriggerPoint, MissionCommand, MissionPlan,
    MissionStatistics, MissionResult
)
from .exceptions import (
    SurveyPlanError, InvalidBoundary, InvalidConfiguration, MissionCompileError, EmptyResult
)
from .boundary_loader import resolve_boundary, load_boundary_file
from .mission import plan_to_json, write_plan, waypoints_to_csv, write_waypoints_csv

__all__ = [
    'SurveyMissionPlanner',
    'MissionConfig',
    'CameraConfig',
    'PatternType',
    'WaypointKind',
    'MavCommand',
    'MavFrame',
    'AltitudeMode',
    'SAMPLE_BOUNDARY',
    'BoundaryRing',
    'Waypoint',
    'CameraTriggerPoint',
    'MissionCommand',
    'MissionPlan',
    'MissionStatistics',
    'MissionResult',
    'SurveyPlanError',
    'InvalidBoundary',
    'InvalidConfiguration',
    'MissionCompileError',
    'EmptyResult',
    'resolve_boundary',
    'load_boundary_file',
    'plan_to_json',
    'write_plan',
    'waypoints_to_csv',
    'write_waypoints_csv',
]
