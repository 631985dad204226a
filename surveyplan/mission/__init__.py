# surveyplan/mission/__init__.py
from .compiler import MissionCompiler
from .serializer import PlanSerializer, plan_to_json, write_plan
from .export import waypoints_to_csv, write_waypoints_csv

__all__ = [
    'MissionCompiler',
    'PlanSerializer',
    'plan_to_json',
    'write_plan',
    'waypoints_to_csv',
    'write_waypoints_csv',
]
