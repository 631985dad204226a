# surveyplan/tests/test_mission.py

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

import pytest

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(project_root))

from surveyplan.config import MissionConfig
from surveyplan.constants import MavCommand, MavFrame, WaypointKind
from surveyplan.data_models import GeoPoint, Waypoint
from surveyplan.exceptions import MissionCompileError
from surveyplan.mission.export import CSV_HEADER
from surveyplan.mission import (
    MissionCompiler, PlanSerializer, plan_to_json, waypoints_to_csv,
    write_plan, write_waypoints_csv
)

TAKEOFF = GeoPoint(lat=40.7474, lon=-73.9847)


def make_waypoints(n=4, alt=50.0):
    return [
        Waypoint(id=i + 1, lat=40.7464 + i * 0.0005, lon=-73.9857 + i * 0.0005, alt=alt, kind=WaypointKind.SURVEY)
        for i in range(n)
    ]


class TestMissionCompiler(unittest.TestCase):
    def test_without_camera(self):
        waypoints = make_waypoints()
        items = MissionCompiler(MissionConfig()).compile(waypoints, TAKEOFF)
        self.assertEqual(len(items), len(waypoints) + 2)
        self.assertEqual(items[0].command, MavCommand.NAV_TAKEOFF)
        self.assertEqual(items[-1].command, MavCommand.NAV_RTL)
        self.assertEqual([i.command for i in items[1:-1]], [MavCommand.NAV_WAYPOINT] * len(waypoints))

    def test_takeoff_at_centroid(self):
        takeoff = MissionCompiler(MissionConfig(altitude=80)).compile(make_waypoints(), TAKEOFF)[0]
        self.assertEqual(takeoff.frame, MavFrame.GLOBAL_RELATIVE_ALT)
        self.assertEqual(takeoff.params, (0, 0, 0, 0, TAKEOFF.lat, TAKEOFF.lon, 80))
        self.assertEqual(takeoff.altitude, 80)

    def test_camera_with_rearm(self):
        waypoints = make_waypoints()
        items = MissionCompiler(MissionConfig(camera_trigger_enabled=True)).compile(waypoints, TAKEOFF, 17.5)
        self.assertEqual(len(items), 3 * len(waypoints) + 3)

        arm = items[1]
        self.assertEqual(arm.command, MavCommand.DO_SET_CAM_TRIGG_DIST)
        self.assertEqual(arm.frame, MavFrame.MISSION)
        self.assertEqual(arm.params, (17.5, 0, 1, 0, 0, 0, 0))

        reset, nav, rearm = items[2:5]
        self.assertEqual(reset.params[0], 0)
        self.assertEqual(nav.command, MavCommand.NAV_WAYPOINT)
        self.assertEqual(nav.params[4:], (waypoints[0].lat, waypoints[0].lon, waypoints[0].alt))
        self.assertEqual(rearm.params[0], 17.5)

    def test_camera_without_rearm(self):
        waypoints = make_waypoints()
        config = MissionConfig(camera_trigger_enabled=True, rearm_trigger_per_waypoint=False)
        items = MissionCompiler(config).compile(waypoints, TAKEOFF, 17.5)
        self.assertEqual(len(items), len(waypoints) + 3)

    def test_sequence_ids_follow_emission_order(self):
        items = MissionCompiler(MissionConfig(camera_trigger_enabled=True)).compile(make_waypoints(), TAKEOFF, 20)
        self.assertEqual([i.sequence_id for i in items], list(range(len(items))))

    def test_rtl_is_last(self):
        rtl = MissionCompiler(MissionConfig()).compile(make_waypoints(), TAKEOFF)[-1]
        self.assertEqual(rtl.frame, MavFrame.MISSION)
        self.assertEqual(rtl.altitude, 0)

    def test_errors(self):
        compiler = MissionCompiler(MissionConfig())
        with self.assertRaises(MissionCompileError):
            compiler.compile([], TAKEOFF)
        bad = make_waypoints()
        bad[2] = Waypoint(id=3, lat=float("nan"), lon=0.0, alt=50.0, kind=WaypointKind.SURVEY)
        with self.assertRaises(MissionCompileError) as ctx:
            compiler.compile(bad, TAKEOFF)
        self.assertIn("index 2", str(ctx.exception))
        with self.assertRaises(MissionCompileError):
            compiler.compile(make_waypoints(), GeoPoint(lat=float("inf"), lon=0.0))

    def test_camera_requires_trigger_distance(self):
        compiler = MissionCompiler(MissionConfig(camera_trigger_enabled=True))
        for distance in (None, 0, -5, float("nan")):
            with self.assertRaises(MissionCompileError):
                compiler.compile(make_waypoints(), TAKEOFF, distance)


class TestPlanSerializer(unittest.TestCase):
    def setUp(self):
        self.config = MissionConfig(cruise_speed=12, hover_speed=4)
        self.waypoints = make_waypoints()
        commands = MissionCompiler(self.config).compile(self.waypoints, TAKEOFF)
        self.plan = PlanSerializer(self.config).build(commands, self.waypoints)

    def test_document_shape(self):
        document = json.loads(plan_to_json(self.plan))
        self.assertEqual(document["fileType"], "Plan")
        self.assertEqual(document["groundStation"], "QGroundControl")
        self.assertEqual(document["version"], 1)
        self.assertEqual(document["geoFence"], {"circles": [], "polygons": [], "version": 2})
        self.assertEqual(document["rallyPoints"], {"points": [], "version": 2})

        mission = document["mission"]
        self.assertEqual(mission["cruiseSpeed"], 12)
        self.assertEqual(mission["hoverSpeed"], 4)
        self.assertEqual(mission["firmwareType"], 12)
        self.assertEqual(mission["vehicleType"], 2)
        self.assertEqual(mission["globalPlanAltitudeMode"], 1)
        self.assertEqual(mission["version"], 2)
        first = self.waypoints[0]
        self.assertEqual(mission["plannedHomePosition"], [first.lat, first.lon, first.alt])

    def test_items(self):
        items = json.loads(plan_to_json(self.plan))["mission"]["items"]
        self.assertEqual(len(items), len(self.waypoints) + 2)
        self.assertEqual(items[0]["command"], 22)
        self.assertEqual(items[-1]["command"], 20)
        for index, item in enumerate(items):
            self.assertEqual(item["doJumpId"], index)
            self.assertEqual(item["type"], "SimpleItem")
            self.assertEqual(len(item["params"]), 7)
            self.assertIsNone(item["AMSLAltAboveTerrain"])
            self.assertTrue(item["autoContinue"])

    def test_serialization_is_deterministic(self):
        self.assertEqual(plan_to_json(self.plan), plan_to_json(self.plan))
        self.assertEqual(self.plan.to_json(), plan_to_json(self.plan))

    def test_non_finite_values_rejected(self):
        self.plan.cruise_speed = float("nan")
        with self.assertRaises(MissionCompileError):
            plan_to_json(self.plan)

    def test_build_requires_waypoints(self):
        with self.assertRaises(MissionCompileError):
            PlanSerializer(self.config).build([], [])

    def test_write_plan(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_plan(self.plan, os.path.join(tmpdir, "mission.plan"))
            self.assertEqual(path.read_text(encoding="utf-8"), plan_to_json(self.plan))


class TestCsvExport(unittest.TestCase):
    def test_rows(self):
        waypoints = make_waypoints(2, alt=50.0)
        lines = waypoints_to_csv(waypoints).splitlines()
        self.assertEqual(lines[0], ",".join(CSV_HEADER))
        self.assertEqual(lines[1], "1,40.746400,-73.985700,50,survey")
        self.assertEqual(len(lines), 3)

    def test_home_row(self):
        waypoints = make_waypoints(2, alt=12.5)
        lines = waypoints_to_csv(waypoints, home=waypoints[0]).splitlines()
        self.assertEqual(lines[1], "HOME,40.746400,-73.985700,12.5,home")
        self.assertEqual(len(lines), 4)

    def test_write_waypoints_csv(self):
        waypoints = make_waypoints(3)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_waypoints_csv(waypoints, os.path.join(tmpdir, "waypoints.csv"), include_home=True)
            content = path.read_text(encoding="utf-8")
        self.assertTrue(content.startswith("ID,Latitude,Longitude,Altitude,Type\nHOME,"))
        self.assertEqual(len(content.splitlines()), 5)


@pytest.mark.parametrize("altitude_mode", [1, 2, 3])
def test_altitude_mode_propagates(altitude_mode):
    config = MissionConfig(altitude_mode=altitude_mode)
    waypoints = make_waypoints(2)
    plan = PlanSerializer(config).build(MissionCompiler(config).compile(waypoints, TAKEOFF), waypoints)
    document = json.loads(plan_to_json(plan))
    assert document["mission"]["globalPlanAltitudeMode"] == altitude_mode
    assert all(item["AltitudeMode"] == altitude_mode for item in document["mission"]["items"])


if __name__ == '__main__':
    unittest.main()
