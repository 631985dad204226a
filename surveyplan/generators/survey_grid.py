# surveyplan/generators/survey_grid.py
"""
Boustrophedon ("lawnmower") survey grid.

The boundary is projected into a local metric plane centred on its bounding
box. Parallel scan lines spaced by the camera's side-overlap spacing are laid
across a square that covers the boundary at any rotation, rotated by the grid
angle, clipped against the boundary edges, and traversed back and forth.
"""
import logging
import math
from typing import List, Sequence, Tuple

from ..config import MissionConfig
from ..constants import PlannerConstants, WaypointKind
from ..data_models import BoundaryRing, Waypoint
from ..utils.calculations import line_spacing_m, polygon_bounds
from ..utils.coordinates import (
    LocalProjection, Point, interpolate, resample_polyline, rotate_point, segment_intersection
)

logger = logging.getLogger(__name__)

Segment = Tuple[Point, Point]


def _side(start: Point, end: Point, point: Point) -> float:
    return (end[0] - start[0]) * (point[1] - start[1]) - (end[1] - start[1]) * (point[0] - start[0])


def _clip_line(start: Point, end: Point, edges: Sequence[Segment]) -> List[Segment]:
    """
    Inside-boundary pieces of the line start-end. Crossings are ordered by
    distance from ``start`` and paired consecutively (0,1), (2,3), ...

    An edge counts as crossed when its endpoints fall on different sides of
    the line, a vertex lying on the line counting as the negative side. A
    vertex the line passes through is therefore counted once, and a vertex
    the line only touches is counted zero or two times.
    """
    crossings = []
    for edge_start, edge_end in edges:
        side_start = _side(start, end, edge_start)
        side_end = _side(start, end, edge_end)
        if (side_start > 0) == (side_end > 0):
            continue
        point = segment_intersection(start, end, edge_start, edge_end)
        if point is None:
            # rounding at an edge endpoint
            point = interpolate(edge_start, edge_end, side_start / (side_start - side_end))
        crossings.append(point)
    crossings.sort(key=lambda p: math.hypot(p[0] - start[0], p[1] - start[1]))

    pieces = [(crossings[j], crossings[j + 1]) for j in range(0, len(crossings) - 1, 2)]
    return [
        (a, b) for a, b in pieces
        if math.hypot(b[0] - a[0], b[1] - a[1]) >= PlannerConstants.COINCIDENT_POINT_M
    ]


def _extend_segment(segment: Segment, distance: float) -> Segment:
    (x1, y1), (x2, y2) = segment
    length = math.hypot(x2 - x1, y2 - y1)
    if distance <= 0 or length == 0:
        return segment
    ux, uy = (x2 - x1) / length, (y2 - y1) / length
    return ((x1 - ux * distance, y1 - uy * distance), (x2 + ux * distance, y2 + uy * distance))


def calculate_survey_lines(ring: Sequence[Point], grid_angle_deg: float, spacing_m: float,
                           turnaround_m: float = 0.0) -> List[Segment]:
    """
    Ordered survey segments as ((lon, lat), (lon, lat)) pairs. Every other
    scan line is reversed so consecutive lines run in opposite directions.
    Returns an empty list when no scan line crosses the boundary.
    """
    if spacing_m <= 0 or len(ring) < 4:
        return []

    center = polygon_bounds(ring).center
    projection = LocalProjection(center.lat, center.lon)
    ring_xy = projection.ring_to_xy(ring)
    vertices = [(float(x), float(y)) for x, y in ring_xy]
    edges = list(zip(vertices[:-1], vertices[1:]))

    x_range = float(ring_xy[:, 0].max() - ring_xy[:, 0].min())
    y_range = float(ring_xy[:, 1].max() - ring_xy[:, 1].min())
    extent = max(x_range, y_range)
    if extent <= 0:
        return []

    angle = math.radians(grid_angle_deg % 360)
    pivot = (0.0, 0.0)
    # Lines are centred on the pivot so one always runs through the box centre.
    half_count = math.ceil(extent / spacing_m)

    segments: List[Segment] = []
    scanned = 0
    for i in range(-half_count, half_count + 1):
        y = i * spacing_m
        line_start = rotate_point((-extent, y), pivot, angle)
        line_end = rotate_point((extent, y), pivot, angle)

        pieces = _clip_line(line_start, line_end, edges)
        if not pieces:
            continue
        pieces = [_extend_segment(piece, turnaround_m) for piece in pieces]
        if scanned % 2 == 1:
            pieces = [(b, a) for a, b in reversed(pieces)]
        scanned += 1
        logger.debug(f"Scan line {i}: {len(pieces)} segment(s)")

        for a, b in pieces:
            segments.append((projection.to_lonlat(*a), projection.to_lonlat(*b)))

    return segments


class SurveyGridGenerator:
    """Generates survey waypoints for a boundary from the mission configuration."""

    def __init__(self, config: MissionConfig):
        self.config = config

    def line_spacing(self):
        camera = self.config.camera
        return line_spacing_m(self.config.altitude, camera.sensor_width,
                              camera.focal_length, camera.side_overlap)

    def generate(self, boundary: BoundaryRing) -> List[Waypoint]:
        spacing = self.line_spacing()
        if not spacing:
            logger.warning("Unable to compute survey line spacing; no grid generated.")
            return []

        logger.info(f"Generating survey grid: spacing {spacing:.1f} m, angle "
                    f"{self.config.normalized_grid_angle:.1f} deg, turn waypoints only: {self.config.turn_waypoints_only}")
        lines = calculate_survey_lines(boundary.coordinates, self.config.grid_angle, spacing,
                                       self.config.turnaround_distance)
        if not lines:
            logger.warning("No survey lines generated")
            return []

        altitude = self.config.altitude
        waypoints: List[Waypoint] = []

        def emit(point: Point, kind: WaypointKind):
            waypoints.append(Waypoint(id=len(waypoints) + 1, lat=point[1], lon=point[0], alt=altitude, kind=kind))

        for start, end in lines:
            if self.config.turn_waypoints_only:
                emit(start, WaypointKind.SURVEY_START)
                emit(end, WaypointKind.SURVEY_END)
            else:
                for point in resample_polyline([start, end], PlannerConstants.SURVEY_SAMPLE_SPACING_M):
                    emit(point, WaypointKind.SURVEY)

        logger.info(f"Generated {len(waypoints)} survey waypoints over {len(lines)} line segment(s)")
        return waypoints
