"""Item entity."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from stac_entities.geo import BoundingBox, ensure_bounding_box
from stac_entities.models.link import Link
from stac_entities.models.stac import STAC
from stac_entities.temporal import Interval, center_datetime, iso_to_date
from stac_entities.utils import has_text, is_object


class Item(STAC):
    """A STAC Item.

    All fields are available as attributes, e.g. ``item.id`` or
    ``item.properties["datetime"]``. Metadata is only read from
    ``properties``.

    Args:
        data: The JSON object of the Item or an Item to clone.
        absolute_url: Absolute URL of the Item.
    """

    OBJECT_TYPE = "Item"

    def __init__(self, data: Any, absolute_url: str | None = None) -> None:
        super().__init__(data, absolute_url)

    def _get_property(self, field: str) -> Any:
        properties = self._data.get("properties")
        return properties.get(field) if is_object(properties) else None

    def get_metadata(self, field: str) -> Any:
        """Returns the value of the given field in ``properties``."""
        return self._get_property(field)

    def get_bounding_box(self) -> BoundingBox | None:
        return ensure_bounding_box(self._data.get("bbox"))

    def get_bounding_boxes(self) -> list[BoundingBox]:
        bbox = self.get_bounding_box()
        return [bbox] if bbox is not None else []

    def get_datetime(self, force: bool = True) -> datetime | None:
        """Returns the datetime of the Item.

        Args:
            force: If ``datetime`` is not given, use the center of
                ``start_datetime`` and ``end_datetime`` or whichever of the
                two is available.

        Returns:
            The datetime or None.
        """
        dt = iso_to_date(self._get_property("datetime"))
        if dt is None and force:
            start = iso_to_date(self._get_property("start_datetime"))
            end = iso_to_date(self._get_property("end_datetime"))
            if start is not None and end is not None:
                return center_datetime(start, end)
            return start if start is not None else end
        return dt

    def get_temporal_extents(self) -> list[Interval]:
        """Returns the temporal extent as a single interval.

        ``start_datetime`` and ``end_datetime`` take precedence over
        ``datetime``, which results in an interval with equal bounds.
        """
        start = self._get_property("start_datetime")
        end = self._get_property("end_datetime")
        if has_text(start) or has_text(end):
            return [[iso_to_date(start), iso_to_date(end)]]
        dt = self._get_property("datetime")
        if has_text(dt):
            return [[iso_to_date(dt), iso_to_date(dt)]]
        return []

    def to_geojson(self) -> dict[str, Any]:
        """Returns the Item itself, which already is a GeoJSON Feature."""
        return self.to_dict()

    def get_collection_link(self) -> Link | None:
        return self.get_stac_link_with_rel("collection")
