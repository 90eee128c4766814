"""ItemCollection entity, a GeoJSON FeatureCollection of Items."""

from __future__ import annotations

from typing import Any

from stac_entities.models.apicollection import APICollection
from stac_entities.models.base import STACObject
from stac_entities.models.item import Item
from stac_entities.utils import is_object


def _to_items(features: Any, context: STACObject) -> list[Any]:
    if not isinstance(features, list):
        return []
    return [Item(feature) if is_object(feature) else feature for feature in features]


class ItemCollection(APICollection):
    """A STAC ItemCollection, e.g. the result of an API search.

    Args:
        data: The JSON object or an ItemCollection to clone.
        absolute_url: Absolute URL of the ItemCollection.
    """

    OBJECT_TYPE = "ItemCollection"
    MEMBER_FIELD = "features"
    KEY_MAP = {**APICollection.KEY_MAP, "features": _to_items}

    def __init__(self, data: Any, absolute_url: str | None = None) -> None:
        super().__init__(data, absolute_url)

    def get_items(self) -> list[Item]:
        return self.get_all()  # type: ignore[return-value]

    def to_geojson(self) -> dict[str, Any]:
        """Returns the ItemCollection itself, which already is a FeatureCollection."""
        return self.to_dict()
