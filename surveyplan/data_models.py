# surveyplan/data_models.py
"""
Core data structures shared by the generators, the camera trigger scheduler
and the mission compiler. Points and commands are frozen; a new generate
call builds new objects rather than editing old ones.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    MavCommand, MavFrame, WaypointKind, PlanFormat
)
from .exceptions import MissionCompileError


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in degrees."""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(lat=(self.min_lat + self.max_lat) / 2, lon=(self.min_lon + self.max_lon) / 2)


@dataclass(frozen=True)
class BoundaryRing:
    """
    A closed survey boundary. Coordinates are (lon, lat) pairs in GeoJSON
    order and the last pair repeats the first.
    """
    coordinates: Tuple[Tuple[float, float], ...]
    name: str = "Loaded Area"

    @property
    def vertices(self) -> Tuple[Tuple[float, float], ...]:
        """The ring without its closing duplicate."""
        return self.coordinates[:-1]

    def __len__(self) -> int:
        return len(self.coordinates)


@dataclass(frozen=True)
class Waypoint:
    """A single navigation point. IDs are 1-based in traversal order."""
    id: int
    lat: float
    lon: float
    alt: float
    kind: WaypointKind

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "lat": self.lat, "lng": self.lon, "alt": self.alt, "type": self.kind.value}


@dataclass(frozen=True)
class CameraTriggerPoint:
    id: int
    lat: float
    lon: float
    alt: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "lat": self.lat, "lng": self.lon, "alt": self.alt}


@dataclass(frozen=True)
class MissionCommand:
    """One item of the vehicle's ordered flight program."""
    sequence_id: int
    command: MavCommand
    frame: MavFrame
    params: Tuple[float, ...]
    altitude: float
    altitude_mode: int
    auto_continue: bool = True

    def to_item(self) -> Dict[str, Any]:
        """QGroundControl SimpleItem representation."""
        return {
            "AMSLAltAboveTerrain": None,
            "Altitude": self.altitude,
            "AltitudeMode": self.altitude_mode,
            "autoContinue": self.auto_continue,
            "command": int(self.command),
            "doJumpId": self.sequence_id,
            "frame": int(self.frame),
            "params": list(self.params),
            "type": PlanFormat.ITEM_TYPE,
        }


@dataclass
class MissionPlan:
    """The persisted mission document, rebuilt wholesale on every generate call."""
    items: List[MissionCommand]
    planned_home_position: Tuple[float, float, float]
    cruise_speed: float
    hover_speed: float
    firmware_type: int
    vehicle_type: int
    global_plan_altitude_mode: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileType": PlanFormat.FILE_TYPE,
            "geoFence": {"circles": [], "polygons": [], "version": PlanFormat.GEOFENCE_VERSION},
            "groundStation": PlanFormat.GROUND_STATION,
            "mission": {
                "cruiseSpeed": self.cruise_speed,
                "firmwareType": self.firmware_type,
                "globalPlanAltitudeMode": self.global_plan_altitude_mode,
                "hoverSpeed": self.hover_speed,
                "items": [command.to_item() for command in self.items],
                "plannedHomePosition": list(self.planned_home_position),
                "vehicleType": self.vehicle_type,
                "version": PlanFormat.MISSION_VERSION,
            },
            "rallyPoints": {"points": [], "version": PlanFormat.RALLY_VERSION},
            "version": PlanFormat.PLAN_VERSION,
        }

    def to_json(self) -> str:
        """Sorted keys, so the same plan always serializes to the same text."""
        try:
            return json.dumps(self.to_dict(), indent=2, sort_keys=True, allow_nan=False)
        except ValueError as e:
            raise MissionCompileError(f"Plan contains non-finite values: {e}") from e


@dataclass(frozen=True)
class MissionStatistics:
    """Flat summary consumed by the UI; not persisted."""
    waypoints: int
    distance_m: int
    flight_time_min: float
    camera_shots: int
    area_m2: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "waypoints": self.waypoints,
            "distance": self.distance_m,
            "flightTime": self.flight_time_min,
            "cameraShots": self.camera_shots,
            "area": self.area_m2,
        }


@dataclass
class MissionResult:
    """Everything one generate call hands back to its caller."""
    boundary: BoundaryRing
    waypoints: List[Waypoint]
    camera_points: List[CameraTriggerPoint]
    plan: Optional[MissionPlan]
    statistics: MissionStatistics
    warnings: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.waypoints
