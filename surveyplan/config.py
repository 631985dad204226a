# surveyplan/config.py
"""
Mission configuration. A config is built once per generate call (usually
from the UI's form record via ``MissionConfig.from_dict``), validated as a
whole, and then only read by the algorithms.
"""
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from .constants import (
    PatternType, AltitudeMode, VehicleType, FirmwareType,
    PlannerConstants, CAMERA_PRESETS, DEFAULT_CAMERA,
    VEHICLE_TYPE_LABELS, FIRMWARE_TYPE_LABELS, ALTITUDE_MODE_LABELS
)
from .exceptions import InvalidConfiguration


@dataclass(frozen=True)
class CameraConfig:
    """Camera geometry and photogrammetric overlap requirements."""
    name: str = DEFAULT_CAMERA
    sensor_width: float = 6.17      # mm
    sensor_height: float = 4.55     # mm
    focal_length: float = 4.5       # mm
    image_width: int = 4000         # px
    image_height: int = 3000        # px
    frontal_overlap: float = 75.0   # %
    side_overlap: float = 65.0      # %

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "CameraConfig":
        if name not in CAMERA_PRESETS:
            raise KeyError(f"Unknown camera preset '{name}'. Available: {', '.join(CAMERA_PRESETS)}")
        return cls(name=name, **{**CAMERA_PRESETS[name], **overrides})


@dataclass(frozen=True)
class MissionConfig:
    """Configuration for one mission generation."""
    vehicle_type: int = int(VehicleType.MULTI_ROTOR)
    firmware_type: int = int(FirmwareType.PX4)
    altitude: float = 50.0
    altitude_mode: int = int(AltitudeMode.RELATIVE)
    cruise_speed: float = 15.0
    hover_speed: float = 5.0
    pattern: PatternType = PatternType.SURVEY
    grid_angle: float = 0.0
    turnaround_distance: float = 0.0
    turn_waypoints_only: bool = False
    camera: CameraConfig = field(default_factory=CameraConfig)
    camera_trigger_enabled: bool = False
    min_trigger_interval: float = 1.0
    perimeter_spacing: float = 0.0
    rearm_trigger_per_waypoint: bool = True

    # UI field name -> (config field, kind)
    FIELD_ALIASES = {
        "vehicleType": ("vehicle_type", "int"),
        "firmwareType": ("firmware_type", "int"),
        "altitude": ("altitude", "float"),
        "altitudeMode": ("altitude_mode", "int"),
        "cruiseSpeed": ("cruise_speed", "float"),
        "hoverSpeed": ("hover_speed", "float"),
        "pattern": ("pattern", "pattern"),
        "gridAngle": ("grid_angle", "float"),
        "turnAroundDistance": ("turnaround_distance", "float"),
        "turnWaypointsOnly": ("turn_waypoints_only", "bool"),
        "cameraTriggerEnabled": ("camera_trigger_enabled", "bool"),
        "minTriggerInterval": ("min_trigger_interval", "float"),
        "spacing": ("perimeter_spacing", "float"),
        "perimeterSpacing": ("perimeter_spacing", "float"),
        "rearmTriggerPerWaypoint": ("rearm_trigger_per_waypoint", "bool"),
    }
    CAMERA_ALIASES = {
        "cameraName": ("name", "str"),
        "sensorWidth": ("sensor_width", "float"),
        "sensorHeight": ("sensor_height", "float"),
        "focalLength": ("focal_length", "float"),
        "imageWidth": ("image_width", "int"),
        "imageHeight": ("image_height", "int"),
        "frontalOverlap": ("frontal_overlap", "float"),
        "sideOverlap": ("side_overlap", "float"),
    }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MissionConfig":
        """
        Builds a config from a camelCase (UI) or snake_case record. Unknown
        keys are ignored. Every unparseable and out-of-range field is
        collected and raised together as InvalidConfiguration.
        """
        if not isinstance(data, Mapping):
            raise InvalidConfiguration({"config": f"Expected a mapping of settings, got {type(data).__name__}"})

        violations: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        camera_values: Dict[str, Any] = {}

        camera_data = data.get("camera") or {}
        if not isinstance(camera_data, Mapping):
            violations["camera"] = f"Camera settings must be an object, got {type(camera_data).__name__}"
            camera_data = {}
        flat = {k: v for k, v in data.items() if k != "camera"}

        for key, raw in flat.items():
            target = cls._lookup(key, cls.FIELD_ALIASES)
            # a bare "name" is not a camera field outside the camera block
            camera_target = cls._lookup(key, cls.CAMERA_ALIASES) if key != "name" else None
            if target:
                cls._convert_into(values, target, raw, violations)
            elif camera_target:
                cls._convert_into(camera_values, camera_target, raw, violations)
        for key, raw in camera_data.items():
            camera_target = cls._lookup(key, cls.CAMERA_ALIASES)
            if camera_target:
                cls._convert_into(camera_values, camera_target, raw, violations)

        camera = CameraConfig()
        preset = camera_values.pop("name", None)
        if preset is not None:
            if preset in CAMERA_PRESETS:
                camera = CameraConfig.from_preset(preset)
            else:
                camera = replace(camera, name=preset)
        camera = replace(camera, **camera_values)

        config = cls(camera=camera, **values)
        violations.update({k: v for k, v in config.validate().items() if k not in violations})
        if violations:
            raise InvalidConfiguration(violations)
        return config

    @staticmethod
    def _lookup(key: str, aliases: Dict[str, tuple]):
        if key in aliases:
            return aliases[key]
        for name, kind in aliases.values():
            if name == key:
                return name, kind
        return None

    @staticmethod
    def _convert_into(target: Dict[str, Any], alias: tuple, raw: Any, violations: Dict[str, str]):
        name, kind = alias
        try:
            if kind == "float":
                if isinstance(raw, bool):
                    raise ValueError(raw)
                target[name] = float(raw)
            elif kind == "int":
                if isinstance(raw, bool):
                    raise ValueError(raw)
                number = float(raw)
                if not number.is_integer():
                    raise ValueError(raw)
                target[name] = int(number)
            elif kind == "bool":
                if isinstance(raw, str):
                    if raw.strip().lower() not in ("true", "false", "1", "0", "yes", "no", "on", "off"):
                        raise ValueError(raw)
                    target[name] = raw.strip().lower() in ("true", "1", "yes", "on")
                else:
                    target[name] = bool(raw)
            elif kind == "pattern":
                target[name] = raw if isinstance(raw, PatternType) else PatternType(str(raw).lower())
            else:
                target[name] = str(raw)
        except (TypeError, ValueError):
            if kind == "pattern":
                choices = ", ".join(p.value for p in PatternType)
                violations[name] = f"Unknown pattern '{raw}' (expected one of: {choices})"
            else:
                violations[name] = "Please enter a valid number" if kind in ("float", "int") else f"Invalid value '{raw}'"

    def validate(self) -> Dict[str, str]:
        """Returns every field-level violation (field name -> message)."""
        violations: Dict[str, str] = {}
        camera = self.camera

        numeric = {
            "altitude": self.altitude,
            "cruise_speed": self.cruise_speed,
            "hover_speed": self.hover_speed,
            "grid_angle": self.grid_angle,
            "turnaround_distance": self.turnaround_distance,
            "min_trigger_interval": self.min_trigger_interval,
            "perimeter_spacing": self.perimeter_spacing,
        }
        for f in fields(CameraConfig):
            if f.name != "name":
                numeric[f.name] = getattr(camera, f.name)
        for name, value in numeric.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                violations[name] = "Please enter a valid number"

        def positive(name: str, value: float, message: str = "Value must be positive"):
            if name not in violations and value <= 0:
                violations[name] = message

        positive("altitude", self.altitude, "Altitude must be positive")
        positive("cruise_speed", self.cruise_speed, "Speed must be positive")
        positive("hover_speed", self.hover_speed, "Speed must be positive")
        positive("min_trigger_interval", self.min_trigger_interval)
        for name in ("sensor_width", "sensor_height", "focal_length", "image_width", "image_height"):
            positive(name, getattr(camera, name))

        for name in ("frontal_overlap", "side_overlap"):
            value = getattr(camera, name)
            if name not in violations and not (PlannerConstants.MIN_OVERLAP_PCT <= value <= PlannerConstants.MAX_OVERLAP_PCT):
                violations[name] = (f"Overlap must be between {PlannerConstants.MIN_OVERLAP_PCT:g}% "
                                    f"and {PlannerConstants.MAX_OVERLAP_PCT:g}%")

        for name in ("turnaround_distance", "perimeter_spacing"):
            if name not in violations and getattr(self, name) < 0:
                violations[name] = "Value must not be negative"

        if self.altitude_mode not in set(int(m) for m in AltitudeMode):
            violations["altitude_mode"] = f"Unknown altitude mode {self.altitude_mode}"
        if not isinstance(self.pattern, PatternType):
            violations["pattern"] = f"Unknown pattern '{self.pattern}'"
        return violations

    def check(self) -> "MissionConfig":
        """Raises InvalidConfiguration listing all violations; returns self otherwise."""
        violations = self.validate()
        if violations:
            raise InvalidConfiguration(violations)
        return self

    @property
    def normalized_grid_angle(self) -> float:
        return self.grid_angle % 360

    def describe(self) -> Dict[str, str]:
        """Display labels for the vehicle, firmware, altitude mode and camera."""
        return {
            "vehicle": VEHICLE_TYPE_LABELS.get(self.vehicle_type, f"Unknown ({self.vehicle_type})"),
            "firmware": FIRMWARE_TYPE_LABELS.get(self.firmware_type, f"Unknown ({self.firmware_type})"),
            "altitude_mode": ALTITUDE_MODE_LABELS.get(self.altitude_mode, f"Unknown ({self.altitude_mode})"),
            "pattern": self.pattern.value,
            "camera": self.camera.name,
        }
