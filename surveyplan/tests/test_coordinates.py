# surveyplan/tests/test_coordinates.py

import math
import sys
import types
import unittest
from pathlib import Path

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(project_root))

from surveyplan.utils.coordinates import (
    LocalProjection, distance_m, interpolate, resample_polyline, rotate_point, segment_intersection
)

METERS_PER_DEGREE_LAT = 6371000.0 * math.pi / 180


class TestDistance(unittest.TestCase):
    def test_identical_points_are_zero(self):
        for lat, lon in [(0, 0), (40.7484, -73.9857), (-33.9, 151.2), (89.9, 179.9)]:
            self.assertEqual(distance_m(lat, lon, lat, lon), 0.0)

    def test_symmetry(self):
        a = (40.7484, -73.9857)
        b = (40.7464, -73.9837)
        self.assertEqual(distance_m(*a, *b), distance_m(*b, *a))

    def test_one_degree_of_latitude(self):
        self.assertAlmostEqual(distance_m(0, 0, 1, 0), METERS_PER_DEGREE_LAT, delta=0.01)

    def test_non_negative(self):
        self.assertGreater(distance_m(10, 10, -10, -10), 0)


class TestRotatePoint(unittest.TestCase):
    def test_quarter_turn(self):
        x, y = rotate_point((1.0, 0.0), (0.0, 0.0), math.pi / 2)
        self.assertAlmostEqual(x, 0.0)
        self.assertAlmostEqual(y, 1.0)

    def test_rotation_about_pivot(self):
        x, y = rotate_point((3.0, 2.0), (2.0, 2.0), math.pi)
        self.assertAlmostEqual(x, 1.0)
        self.assertAlmostEqual(y, 2.0)

    def test_zero_angle_is_identity(self):
        self.assertEqual(rotate_point((5.5, -2.25), (1.0, 1.0), 0.0), (5.5, -2.25))


class TestSegmentIntersection(unittest.TestCase):
    def test_crossing_segments(self):
        point = segment_intersection((0, 0), (1, 1), (0, 1), (1, 0))
        self.assertAlmostEqual(point[0], 0.5)
        self.assertAlmostEqual(point[1], 0.5)

    def test_parallel_segments(self):
        self.assertIsNone(segment_intersection((0, 0), (1, 0), (0, 1), (1, 1)))

    def test_collinear_segments_are_parallel(self):
        self.assertIsNone(segment_intersection((0, 0), (2, 0), (1, 0), (3, 0)))

    def test_crossing_outside_segment(self):
        self.assertIsNone(segment_intersection((0, 0), (1, 1), (3, 0), (2, 1)))

    def test_touching_endpoint(self):
        point = segment_intersection((0, 0), (2, 0), (1, 0), (1, 5))
        self.assertAlmostEqual(point[0], 1.0)
        self.assertAlmostEqual(point[1], 0.0)


class TestResamplePolyline(unittest.TestCase):
    def setUp(self):
        self.start = (-73.9857, 40.7464)
        self.end = (-73.9857, 40.7464 + 95 / METERS_PER_DEGREE_LAT)

    def test_is_lazy(self):
        self.assertIsInstance(resample_polyline([self.start, self.end], 10), types.GeneratorType)

    def test_keeps_endpoints_and_spacing(self):
        points = list(resample_polyline([self.start, self.end], 10))
        self.assertEqual(points[0], self.start)
        self.assertEqual(points[-1], self.end)
        # 10, 20, ... 90 m plus both ends
        self.assertEqual(len(points), 11)
        second = distance_m(self.start[1], self.start[0], points[1][1], points[1][0])
        self.assertAlmostEqual(second, 10.0, delta=1e-6)
        last_leg = distance_m(points[-2][1], points[-2][0], self.end[1], self.end[0])
        self.assertAlmostEqual(last_leg, 5.0, delta=1e-6)

    def test_interior_vertices_kept_and_counter_resets(self):
        corner = self.end
        far = (corner[0] + 0.0005, corner[1])
        points = list(resample_polyline([self.start, corner, far], 10))
        self.assertIn(corner, points)
        index = points.index(corner)
        first_after = points[index + 1]
        self.assertAlmostEqual(distance_m(corner[1], corner[0], first_after[1], first_after[0]), 10.0, delta=1e-6)

    def test_short_segment(self):
        points = list(resample_polyline([self.start, self.end], 500))
        self.assertEqual(points, [self.start, self.end])

    def test_degenerate_inputs(self):
        self.assertEqual(list(resample_polyline([], 10)), [])
        self.assertEqual(list(resample_polyline([self.start], 10)), [self.start])


class TestLocalProjection(unittest.TestCase):
    def test_round_trip(self):
        projection = LocalProjection(40.7474, -73.9847)
        x, y = projection.to_xy(-73.9857, 40.7484)
        lon, lat = projection.to_lonlat(x, y)
        self.assertAlmostEqual(lon, -73.9857, places=9)
        self.assertAlmostEqual(lat, 40.7484, places=9)

    def test_longitude_scale_is_cosine_corrected(self):
        projection = LocalProjection(60.0, 0.0)
        x, y = projection.to_xy(0.001, 60.001)
        self.assertAlmostEqual(x, 111000 * 0.001 * 0.5, places=6)
        self.assertAlmostEqual(y, 111000 * 0.001, places=6)


def test_interpolate_midpoint():
    assert interpolate((0.0, 0.0), (2.0, 4.0), 0.5) == (1.0, 2.0)


if __name__ == '__main__':
    unittest.main()
