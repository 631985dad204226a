# surveyplan/exceptions.py
"""
Survey planner error types.

Geometry helpers never raise; only boundary resolution, configuration
validation and mission compilation produce observable failures.
"""
from typing import Dict


class SurveyPlanError(Exception):
    """Base class for all survey planner errors"""
    pass


class InvalidBoundary(SurveyPlanError):
    """Malformed or unsupported GeoJSON boundary"""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid boundary: {reason}")


class InvalidConfiguration(SurveyPlanError):
    """One or more configuration fields are out of range or non-numeric"""
    def __init__(self, violations: Dict[str, str]):
        self.violations = dict(violations)
        details = "; ".join(f"{field}: {message}" for field, message in sorted(self.violations.items()))
        super().__init__(f"Invalid configuration ({len(self.violations)} violation(s)): {details}")


class MissionCompileError(SurveyPlanError):
    """Internal invariant violated while compiling the mission"""
    pass


class EmptyResult(UserWarning):
    """A valid run produced no waypoints."""
    pass
