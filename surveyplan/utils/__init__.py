# surveyplan/utils/__init__.py
from .coordinates import distance_m, rotate_point, segment_intersection, resample_polyline, LocalProjection
from .calculations import (
    polygon_area_m2, polygon_centroid, polygon_bounds, path_distance_m,
    line_spacing_m, trigger_distance_m, calculate_statistics
)
