"""Collection entity."""

from __future__ import annotations

from typing import Any

from stac_entities import geo
from stac_entities.geo import BoundingBox, ensure_bounding_box
from stac_entities.models.band import Band
from stac_entities.models.cataloglike import CatalogLike
from stac_entities.temporal import Interval, iso_to_date
from stac_entities.utils import has_text, is_object


class Collection(CatalogLike):
    """A STAC Collection.

    All fields are available as attributes, e.g. ``collection.title``.

    The first bounding box of the spatial extent is the union of all other
    bounding boxes, if more than one is given.

    Args:
        data: The JSON object of the Collection or a Collection to clone.
        absolute_url: Absolute URL of the Collection.
    """

    OBJECT_TYPE = "Collection"

    def __init__(self, data: Any, absolute_url: str | None = None) -> None:
        super().__init__(data, absolute_url)

    def _get_extent(self, dimension: str, field: str) -> list[Any]:
        extent = self._data.get("extent")
        if not is_object(extent) or not is_object(extent.get(dimension)):
            return []
        values = extent[dimension].get(field)
        return values if isinstance(values, list) else []

    def get_raw_bounding_boxes(self) -> list[Any]:
        """Returns all bounding boxes as given, including the union bounding box."""
        return self._get_extent("spatial", "bbox")

    def get_bounding_box(self) -> BoundingBox | None:
        """Returns the first (union) bounding box in 2D, or None."""
        bboxes = self.get_raw_bounding_boxes()
        if not bboxes:
            return None
        return ensure_bounding_box(bboxes[0])

    def get_bounding_boxes(self) -> list[BoundingBox]:
        """Returns the individual bounding boxes in 2D.

        If multiple bounding boxes are given, the first one is the union and
        is not included. Invalid bounding boxes are left out.
        """
        bboxes = self.get_raw_bounding_boxes()
        if len(bboxes) > 1:
            bboxes = bboxes[1:]
        normalized = [ensure_bounding_box(bbox) for bbox in bboxes]
        return [bbox for bbox in normalized if bbox is not None]

    def get_temporal_extents(self) -> list[Interval]:
        """Returns all intervals with at least one bound, parsed to datetimes."""
        extents: list[Interval] = []
        for interval in self._get_extent("temporal", "interval"):
            if not isinstance(interval, list) or len(interval) != 2:
                continue
            start, end = interval
            if has_text(start) or has_text(end):
                extents.append([iso_to_date(start), iso_to_date(end)])
        return extents

    def to_geojson(self) -> dict[str, Any] | None:
        """Returns a GeoJSON Feature with the footprint of the Collection.

        Bounding boxes crossing the antimeridian are split into two polygons.
        """
        geojson = geo.to_geojson(self.get_bounding_boxes())
        if geojson is not None:
            geojson["id"] = self.id
        return geojson

    def get_bands(self) -> list[Any]:
        """Returns the bands from ``bands`` or, if not present, ``summaries.bands``."""
        bands = self._data.get("bands")
        if not isinstance(bands, list):
            summaries = self._data.get("summaries")
            bands = summaries.get("bands") if is_object(summaries) else None
        return Band.from_bands(bands, self)
