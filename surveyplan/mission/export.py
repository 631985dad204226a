# surveyplan/mission/export.py
"""Flat waypoint table export."""
import csv
import io
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from ..constants import PlannerConstants
from ..data_models import Waypoint

logger = logging.getLogger(__name__)

CSV_HEADER = ['ID', 'Latitude', 'Longitude', 'Altitude', 'Type']


def _format_coord(value: float) -> str:
    return f"{value:.{PlannerConstants.CSV_COORD_DECIMALS}f}"


def _format_altitude(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def waypoints_to_csv(waypoints: Sequence[Waypoint], home: Optional[Waypoint] = None) -> str:
    """
    CSV text with one row per waypoint. When ``home`` is given a leading
    ``HOME`` row is written for it.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    if home is not None:
        writer.writerow(['HOME', _format_coord(home.lat), _format_coord(home.lon),
                         _format_altitude(home.alt), 'home'])
    for wp in waypoints:
        writer.writerow([wp.id, _format_coord(wp.lat), _format_coord(wp.lon),
                         _format_altitude(wp.alt), wp.kind.value])
    return buffer.getvalue()


def write_waypoints_csv(waypoints: Sequence[Waypoint], path: Union[str, Path],
                        include_home: bool = False) -> Path:
    path = Path(path)
    home = waypoints[0] if include_home and waypoints else None
    path.write_text(waypoints_to_csv(waypoints, home=home), encoding="utf-8")
    logger.info(f"{len(waypoints)} waypoints written to {path}")
    return path
