"""Entity classes wrapping STAC JSON."""

from __future__ import annotations

from stac_entities.models.apicollection import APICollection
from stac_entities.models.asset import Asset
from stac_entities.models.band import Band
from stac_entities.models.base import STACObject
from stac_entities.models.catalog import Catalog
from stac_entities.models.cataloglike import CatalogLike
from stac_entities.models.collection import Collection
from stac_entities.models.collectioncollection import CollectionCollection
from stac_entities.models.hypermedia import STACHypermedia
from stac_entities.models.item import Item
from stac_entities.models.itemcollection import ItemCollection
from stac_entities.models.link import Link
from stac_entities.models.reference import STACReference
from stac_entities.models.stac import STAC, AssetScore

__all__ = [
    "APICollection",
    "Asset",
    "AssetScore",
    "Band",
    "Catalog",
    "CatalogLike",
    "Collection",
    "CollectionCollection",
    "Item",
    "ItemCollection",
    "Link",
    "STAC",
    "STACHypermedia",
    "STACObject",
    "STACReference",
]
