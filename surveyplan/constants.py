# surveyplan/constants.py
from enum import Enum, IntEnum


class PatternType(Enum):
    SURVEY = "survey"
    PERIMETER = "perimeter"
    VERTICES = "vertices"


class WaypointKind(Enum):
    SURVEY = "survey"
    SURVEY_START = "survey_start"
    SURVEY_END = "survey_end"
    PERIMETER = "perimeter"
    VERTEX = "vertex"


class MavCommand(IntEnum):
    """MAVLink command codes emitted into the mission item list."""
    NAV_WAYPOINT = 16
    NAV_RTL = 20
    NAV_LAND = 21
    NAV_TAKEOFF = 22
    DO_DIGICAM_CONTROL = 203
    DO_SET_CAM_TRIGG_DIST = 206
    SET_CAMERA_MODE = 530


class MavFrame(IntEnum):
    MISSION = 2
    GLOBAL_RELATIVE_ALT = 3


class AltitudeMode(IntEnum):
    RELATIVE = 1
    ABSOLUTE = 2
    TERRAIN = 3


class VehicleType(IntEnum):
    FIXED_WING = 1
    MULTI_ROTOR = 2
    GROUND_VEHICLE = 10
    VTOL = 19


class FirmwareType(IntEnum):
    ARDUPILOT = 3
    PX4 = 12


class PlannerConstants:
    EARTH_RADIUS_M: float = 6371000.0
    METERS_PER_DEGREE: float = 111000.0

    # Tolerances
    PARALLEL_EPSILON = 1e-10
    COINCIDENT_POINT_M = 1e-6
    TRIGGER_END_TOLERANCE_M = 1e-6

    SURVEY_SAMPLE_SPACING_M = 10.0
    FALLBACK_TRIGGER_DISTANCE_M = 50.0

    # Overlap policy enforced by configuration validation
    MIN_OVERLAP_PCT = 50.0
    MAX_OVERLAP_PCT = 90.0

    CSV_COORD_DECIMALS = 6


class PlanFormat:
    FILE_TYPE = "Plan"
    GROUND_STATION = "QGroundControl"
    PLAN_VERSION = 1
    MISSION_VERSION = 2
    GEOFENCE_VERSION = 2
    RALLY_VERSION = 2
    ITEM_TYPE = "SimpleItem"
    PARAM_COUNT = 7


VEHICLE_TYPE_LABELS = {
    VehicleType.MULTI_ROTOR: "Multi-Rotor",
    VehicleType.FIXED_WING: "Fixed Wing",
    VehicleType.GROUND_VEHICLE: "Ground Vehicle",
    VehicleType.VTOL: "VTOL",
}

FIRMWARE_TYPE_LABELS = {
    FirmwareType.PX4: "PX4",
    FirmwareType.ARDUPILOT: "ArduPilot",
}

ALTITUDE_MODE_LABELS = {
    AltitudeMode.RELATIVE: "Relative to Home",
    AltitudeMode.ABSOLUTE: "Absolute (MSL)",
    AltitudeMode.TERRAIN: "Above Terrain",
}

CAMERA_PRESETS = {
    "Custom Camera": {
        "image_width": 4000,
        "image_height": 3000,
        "sensor_width": 6.17,
        "sensor_height": 4.55,
        "focal_length": 4.5,
    },
    "Sony ILCE-QX1": {
        "image_width": 5456,
        "image_height": 3632,
        "sensor_width": 23.2,
        "sensor_height": 15.4,
        "focal_length": 16,
    },
    "Manual": {
        "image_width": 1920,
        "image_height": 1080,
        "sensor_width": 5.7,
        "sensor_height": 4.3,
        "focal_length": 3.5,
    },
}
DEFAULT_CAMERA = "Custom Camera"

SAMPLE_BOUNDARY = {
    "type": "Feature",
    "properties": {"name": "Sample Survey Area"},
    "geometry": {
        "type": "Polygon",
        "coordinates": [[
            [-73.9857, 40.7484],
            [-73.9837, 40.7484],
            [-73.9837, 40.7464],
            [-73.9857, 40.7464],
            [-73.9857, 40.7484],
        ]],
    },
}
