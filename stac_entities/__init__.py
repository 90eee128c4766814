"""stac-entities - Typed accessor objects for STAC JSON documents."""

from stac_entities.errors import StacEntityError
from stac_entities.factory import create
from stac_entities.models import (
    Asset,
    AssetScore,
    Band,
    Catalog,
    Collection,
    CollectionCollection,
    Item,
    ItemCollection,
    Link,
)

__all__ = [
    "Asset",
    "AssetScore",
    "Band",
    "Catalog",
    "Collection",
    "CollectionCollection",
    "Item",
    "ItemCollection",
    "Link",
    "StacEntityError",
    "create",
]
