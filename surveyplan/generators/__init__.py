# surveyplan/generators/__init__.py
"""
Pattern generators. Each takes a BoundaryRing plus the mission configuration
and returns an ordered list of waypoints with 1-based IDs.
"""
from ..config import MissionConfig
from ..constants import PatternType
from .survey_grid import SurveyGridGenerator, calculate_survey_lines
from .perimeter import PerimeterGenerator
from .vertices import VerticesGenerator

GENERATORS = {
    PatternType.SURVEY: SurveyGridGenerator,
    PatternType.PERIMETER: PerimeterGenerator,
    PatternType.VERTICES: VerticesGenerator,
}


def get_generator(config: MissionConfig):
    """Instantiates the generator selected by ``config.pattern``."""
    return GENERATORS[PatternType(config.pattern)](config)


__all__ = [
    'SurveyGridGenerator',
    'PerimeterGenerator',
    'VerticesGenerator',
    'calculate_survey_lines',
    'get_generator',
]
