# surveyplan/boundary_loader.py
"""
Normalizes GeoJSON-shaped input (Polygon, Feature, FeatureCollection or
MultiPolygon) into a single closed BoundaryRing.

Only the outer ring of the first polygon is used: holes and additional
MultiPolygon parts are ignored.
"""
import json
import logging
import math
from pathlib import Path
from typing import Any, List, Mapping, Tuple, Union

from .data_models import BoundaryRing
from .exceptions import InvalidBoundary

logger = logging.getLogger(__name__)

DEFAULT_BOUNDARY_NAME = "Loaded Area"


def resolve_boundary(geojson: Any) -> BoundaryRing:
    """Resolves a GeoJSON value to a BoundaryRing or raises InvalidBoundary."""
    if isinstance(geojson, BoundaryRing):
        return geojson
    if not isinstance(geojson, Mapping):
        raise InvalidBoundary("Invalid GeoJSON format - expected an object")

    name = DEFAULT_BOUNDARY_NAME
    node = geojson

    if node.get("type") == "FeatureCollection":
        features = node.get("features") or []
        node = next((f for f in features if isinstance(f, Mapping) and f.get("geometry")), None)
        if node is None:
            raise InvalidBoundary("Invalid GeoJSON format - missing geometry")

    if node.get("type") == "Feature":
        properties = node.get("properties") or {}
        name = properties.get("name") or DEFAULT_BOUNDARY_NAME
        node = node.get("geometry")
        if not isinstance(node, Mapping):
            raise InvalidBoundary("Invalid GeoJSON format - missing geometry")

    geometry_type = node.get("type")
    if geometry_type not in ("Polygon", "MultiPolygon"):
        raise InvalidBoundary("Only Polygon and MultiPolygon geometries are supported")

    coordinates = node.get("coordinates")
    if geometry_type == "MultiPolygon":
        if not isinstance(coordinates, list) or len(coordinates) == 0:
            raise InvalidBoundary("MultiPolygon has no coordinates")
        if len(coordinates) > 1:
            logger.warning(f"MultiPolygon has {len(coordinates)} parts; only the first is used.")
        coordinates = coordinates[0]

    if not isinstance(coordinates, list) or len(coordinates) == 0:
        raise InvalidBoundary("Invalid polygon coordinates")

    ring = _parse_ring(coordinates[0])
    logger.info(f"Boundary '{name}' loaded with {len(ring) - 1} vertices.")
    return BoundaryRing(coordinates=tuple(ring), name=str(name))


def load_boundary_file(path: Union[str, Path]) -> BoundaryRing:
    """Reads a GeoJSON file from disk and resolves it."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidBoundary(f"Error parsing GeoJSON file {path.name}: {e}") from e
    return resolve_boundary(data)


def _parse_ring(raw_ring: Any) -> List[Tuple[float, float]]:
    if not isinstance(raw_ring, list) or len(raw_ring) < 4:
        raise InvalidBoundary("Polygon must have at least 4 coordinate points")

    ring = []
    for position in raw_ring:
        if not isinstance(position, (list, tuple)) or len(position) < 2:
            raise InvalidBoundary(f"Invalid coordinate pair {position!r}")
        try:
            lon, lat = float(position[0]), float(position[1])
        except (TypeError, ValueError):
            raise InvalidBoundary(f"Non-numeric coordinate pair {position!r}")
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise InvalidBoundary(f"Non-finite coordinate pair {position!r}")
        ring.append((lon, lat))

    if ring[0] != ring[-1]:
        logger.debug("Closing open boundary ring.")
        ring.append(ring[0])

    if len(set(ring)) < 3:
        raise InvalidBoundary("Polygon must have at least 3 distinct vertices")
    return ring
