"""CollectionCollection entity, the response of a STAC API's /collections."""

from __future__ import annotations

from typing import Any

from stac_entities.models.apicollection import APICollection
from stac_entities.models.base import STACObject
from stac_entities.models.collection import Collection
from stac_entities.utils import is_object


def _to_collections(collections: Any, context: STACObject) -> list[Any]:
    if not isinstance(collections, list):
        return []
    return [Collection(c) if is_object(c) else c for c in collections]


class CollectionCollection(APICollection):
    """A list of Collections as returned by a STAC API.

    Unlike the other entities this has no ``type`` field.

    Args:
        data: The JSON object or a CollectionCollection to clone.
        absolute_url: Absolute URL of the CollectionCollection.
    """

    OBJECT_TYPE = "CollectionCollection"
    MEMBER_FIELD = "collections"
    KEY_MAP = {**APICollection.KEY_MAP, "collections": _to_collections}

    def __init__(self, data: Any, absolute_url: str | None = None) -> None:
        super().__init__(data, absolute_url)

    def get_collections(self) -> list[Collection]:
        return self.get_all()  # type: ignore[return-value]

    def to_geojson(self) -> dict[str, Any]:
        """Returns a FeatureCollection with the footprints of all Collections."""
        features = [collection.to_geojson() for collection in self.get_collections()]
        return {
            "type": "FeatureCollection",
            "features": [feature for feature in features if feature is not None],
        }
