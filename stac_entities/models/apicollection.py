"""Shared behavior of the STAC API containers for Items and Collections."""

from __future__ import annotations

from typing import Any, ClassVar

from stac_entities.geo import BoundingBox, union_bounding_box
from stac_entities.models.base import STACObject
from stac_entities.models.hypermedia import STACHypermedia
from stac_entities.models.stac import STAC
from stac_entities.temporal import Interval, union_datetime


class APICollection(STACHypermedia):
    """A page of Items or Collections as returned by a STAC API.

    Don't instantiate this class directly.

    Spatial and temporal extents are the union of the extents of all members.
    """

    # Field that holds the members
    MEMBER_FIELD: ClassVar[str] = ""

    def get_all(self) -> list[STAC]:
        """Returns all members."""
        members = self._data.get(self.MEMBER_FIELD)
        if not isinstance(members, list):
            return []
        return [member for member in members if isinstance(member, STACObject)]

    def get_metadata(self, field: str) -> Any:
        """Returns the top-level field with the given name."""
        return self._data.get(field)

    def get_bounding_boxes(self) -> list[BoundingBox]:
        """Returns the bounding box of each member that has one."""
        bboxes = [member.get_bounding_box() for member in self.get_all()]
        return [bbox for bbox in bboxes if bbox is not None]

    def get_bounding_box(self) -> BoundingBox | None:
        return union_bounding_box(self.get_bounding_boxes())

    def get_temporal_extents(self) -> list[Interval]:
        """Returns the temporal extent of each member that has one."""
        extents = [member.get_temporal_extent() for member in self.get_all()]
        return [extent for extent in extents if extent is not None]

    def get_temporal_extent(self) -> Interval | None:
        return union_datetime(self.get_temporal_extents())
