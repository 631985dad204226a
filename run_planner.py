# run_planner.py
import argparse
import json
import logging
import os
import sys

# Add the project root to the Python path to ensure imports work correctly
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from surveyplan import (
    SurveyMissionPlanner, MissionConfig, SurveyPlanError, InvalidConfiguration,
    SAMPLE_BOUNDARY, load_boundary_file, write_plan, write_waypoints_csv
)


def parse_args():
    parser = argparse.ArgumentParser(description="Generate a QGroundControl survey mission from a GeoJSON boundary.")
    parser.add_argument('boundary', nargs='?', help='GeoJSON boundary file (defaults to the built-in sample area).')
    parser.add_argument('--config', help='JSON file with mission configuration fields (camelCase or snake_case).')
    parser.add_argument('--pattern', choices=['survey', 'perimeter', 'vertices'], help='Override the pattern type.')
    parser.add_argument('--altitude', type=float, help='Override the flight altitude in meters.')
    parser.add_argument('--grid-angle', type=float, help='Override the survey grid angle in degrees.')
    parser.add_argument('--camera-trigger', action='store_true', help='Enable distance-based camera triggering.')
    parser.add_argument('--turn-waypoints-only', action='store_true', help='Only emit survey line endpoints.')
    parser.add_argument('--plan', default='mission.plan', help='Output .plan path.')
    parser.add_argument('--csv', help='Optional waypoint CSV output path.')
    return parser.parse_args()


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    args = parse_args()

    settings = {}
    if args.config:
        with open(args.config, 'r') as f:
            settings = json.load(f)
    if args.pattern:
        settings['pattern'] = args.pattern
    if args.altitude is not None:
        settings['altitude'] = args.altitude
    if args.grid_angle is not None:
        settings['gridAngle'] = args.grid_angle
    if args.camera_trigger:
        settings['cameraTriggerEnabled'] = True
    if args.turn_waypoints_only:
        settings['turnWaypointsOnly'] = True

    try:
        config = MissionConfig.from_dict(settings)
        boundary = load_boundary_file(args.boundary) if args.boundary else SAMPLE_BOUNDARY
        result = SurveyMissionPlanner().generate(boundary, config)
    except InvalidConfiguration as e:
        print("\n[!] Configuration errors:")
        for field, message in sorted(e.violations.items()):
            print(f"    - {field}: {message}")
        return 1
    except SurveyPlanError as e:
        print(f"\n[!] {e}")
        return 1

    print("-" * 40)
    for key, value in config.describe().items():
        print(f"  {key:<12} {value}")
    print("-" * 40)
    for key, value in result.statistics.to_dict().items():
        print(f"  {key:<12} {value}")
    print("-" * 40)

    if result.is_empty:
        print("\n[!] Nothing to fly: no waypoints were generated.")
        return 0

    write_plan(result.plan, args.plan)
    print(f"Plan written to {args.plan}")
    if args.csv:
        write_waypoints_csv(result.waypoints, args.csv)
        print(f"Waypoints written to {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
