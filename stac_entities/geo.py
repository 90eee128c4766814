"""Bounding box and GeoJSON helpers.

Bounding boxes follow the STAC convention ``[west, south, east, north]`` or
``[west, south, base, east, north, height]`` in WGS84. A box with
``west > east`` crosses the antimeridian and is valid.
"""

from __future__ import annotations

import math
from typing import Any

from stac_entities.config import get_resolved_setting
from stac_entities.utils import ensure_number, is_number, is_object

BoundingBox = list[float]


def ensure_bounding_box(
    bbox: Any,
    allow_3d: bool = False,
    epsilon: float | None = None,
) -> BoundingBox | None:
    """Normalize a potential bounding box.

    Coordinates that exceed the valid range by at most ``epsilon`` are snapped
    to the boundary. Six-element boxes are reduced to 2D unless ``allow_3d``.

    Args:
        bbox: A potential bounding box.
        allow_3d: Keep base and height of 3D bounding boxes.
        epsilon: Tolerance for coordinates outside of the valid range,
            defaults to the ``bbox_epsilon`` setting.

    Returns:
        A new, valid bounding box or None.
    """
    if not isinstance(bbox, (list, tuple)) or len(bbox) not in (4, 6):
        return None
    if not all(is_number(n) and math.isfinite(n) for n in bbox):
        return None
    if epsilon is None:
        epsilon = get_resolved_setting("bbox_epsilon")

    is_3d = len(bbox) == 6
    if is_3d:
        west, south, base, east, north, height = bbox
    else:
        west, south, east, north = bbox

    west = ensure_number(west, -180, 180, epsilon)
    east = ensure_number(east, -180, 180, epsilon)
    south = ensure_number(south, -90, 90, epsilon)
    north = ensure_number(north, -90, 90, epsilon)
    if west is None or east is None or south is None or north is None:
        return None
    if south > north:
        return None

    if is_3d and allow_3d:
        return [west, south, base, east, north, height]
    return [west, south, east, north]


def is_bounding_box(bbox: Any) -> bool:
    """Check whether the given thing is a valid 2D or 3D bounding box.

    No tolerance is applied here, use ``ensure_bounding_box`` to clean up
    slightly invalid boxes.
    """
    return ensure_bounding_box(bbox, allow_3d=True, epsilon=0) is not None


def is_antimeridian_bounding_box(bbox: Any) -> bool:
    """Check whether a bounding box crosses the antimeridian (west > east)."""
    normalized = ensure_bounding_box(bbox)
    return normalized is not None and normalized[0] > normalized[2]


def union_bounding_box(bboxes: list[Any] | None) -> BoundingBox | None:
    """Compute the 2D bounding box that contains all given bounding boxes.

    Invalid entries (including None) are ignored.

    Args:
        bboxes: List of bounding boxes.

    Returns:
        The union or None if no valid bounding box was given.
    """
    if not isinstance(bboxes, list) or not bboxes:
        return None

    west, south, east, north = 180.0, 90.0, -180.0, -90.0
    for bbox in bboxes:
        normalized = ensure_bounding_box(bbox)
        if normalized is None:
            continue
        west = min(west, normalized[0])
        south = min(south, normalized[1])
        east = max(east, normalized[2])
        north = max(north, normalized[3])

    return ensure_bounding_box([west, south, east, north])


def center_of_bounding_box(bbox: Any, allow_3d: bool = True) -> list[float] | None:
    """Compute the center point of a bounding box.

    For boxes crossing the antimeridian the longitude is averaged across the
    wrap-around and normalized back into [-180, 180].

    Args:
        bbox: A bounding box.
        allow_3d: Include the vertical center for 3D bounding boxes.

    Returns:
        ``[x, y]`` or ``[x, y, z]``, or None for invalid bounding boxes.
    """
    normalized = ensure_bounding_box(bbox, allow_3d=allow_3d)
    if normalized is None:
        return None

    is_3d = len(normalized) == 6
    if is_3d:
        west, south, base, east, north, height = normalized
    else:
        west, south, east, north = normalized

    if west > east:
        x = (west + east + 360) / 2
        if x > 180:
            x -= 360
    else:
        x = (west + east) / 2
    y = (south + north) / 2

    if is_3d:
        return [x, y, (base + height) / 2]
    return [x, y]


def _is_single_bbox(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 0 and all(is_number(n) for n in value)


def _to_ring(bbox: BoundingBox) -> list[list[list[float]]]:
    west, south, east, north = bbox
    return [
        [
            [west, north],
            [west, south],
            [east, south],
            [east, north],
            [west, north],
        ]
    ]


def to_geojson(bboxes: Any) -> dict[str, Any] | None:
    """Convert one or more bounding boxes to a GeoJSON Feature.

    Bounding boxes crossing the antimeridian are split into two polygons.
    A single polygon results in a Polygon geometry, multiple polygons in a
    MultiPolygon geometry.

    Args:
        bboxes: A single bounding box or a list of bounding boxes.

    Returns:
        GeoJSON Feature or None if no valid bounding box was given.
    """
    if _is_single_bbox(bboxes):
        bboxes = [bboxes]
    if not isinstance(bboxes, (list, tuple)):
        return None

    polygons = []
    for bbox in bboxes:
        normalized = ensure_bounding_box(bbox)
        if normalized is None:
            continue
        west, south, east, north = normalized
        if west > east:
            polygons.append(_to_ring([-180, south, east, north]))
            polygons.append(_to_ring([west, south, 180, north]))
        else:
            polygons.append(_to_ring(normalized))

    if not polygons:
        return None
    if len(polygons) == 1:
        geometry = {"type": "Polygon", "coordinates": polygons[0]}
    else:
        geometry = {"type": "MultiPolygon", "coordinates": polygons}
    return {
        "type": "Feature",
        "geometry": geometry,
        "properties": {},
    }


def _clamp(value: Any, minimum: float, maximum: float) -> Any:
    if not is_number(value):
        return value
    return max(minimum, min(maximum, value))


def _fix_coordinates(coordinates: Any) -> Any:
    if not isinstance(coordinates, list) or not coordinates:
        return coordinates
    if is_number(coordinates[0]):
        # A single position
        if len(coordinates) >= 2:
            coordinates[0] = _clamp(coordinates[0], -180, 180)
            coordinates[1] = _clamp(coordinates[1], -90, 90)
        return coordinates
    for i, child in enumerate(coordinates):
        coordinates[i] = _fix_coordinates(child)
    return coordinates


def _fix_bbox(bbox: Any) -> None:
    if not isinstance(bbox, list) or len(bbox) not in (4, 6):
        return
    offset = len(bbox) // 2
    bbox[0] = _clamp(bbox[0], -180, 180)
    bbox[offset] = _clamp(bbox[offset], -180, 180)
    bbox[1] = _clamp(bbox[1], -90, 90)
    bbox[offset + 1] = _clamp(bbox[offset + 1], -90, 90)


def fix_geojson(geojson: Any) -> Any:
    """Clamp all coordinates of a GeoJSON object into the valid WGS84 range.

    Works on geometries, Features, FeatureCollections and GeometryCollections
    including their ``bbox`` members. The object is modified in place.

    Args:
        geojson: A GeoJSON object.

    Returns:
        The given object (non-objects are returned unchanged).
    """
    if not is_object(geojson):
        return geojson

    geojson_type = geojson.get("type")
    if geojson_type == "FeatureCollection" and isinstance(geojson.get("features"), list):
        for feature in geojson["features"]:
            fix_geojson(feature)
    elif geojson_type == "Feature":
        fix_geojson(geojson.get("geometry"))
    elif geojson_type == "GeometryCollection" and isinstance(geojson.get("geometries"), list):
        for geometry in geojson["geometries"]:
            fix_geojson(geometry)
    elif "coordinates" in geojson:
        geojson["coordinates"] = _fix_coordinates(geojson["coordinates"])

    _fix_bbox(geojson.get("bbox"))
    return geojson
