"""Create the matching entity for a STAC JSON document."""

from __future__ import annotations

import logging
from typing import Any

from stac_entities.config import get_resolved_setting
from stac_entities.errors import InvalidDataError
from stac_entities.migrate import migrate_document
from stac_entities.models.catalog import Catalog
from stac_entities.models.collection import Collection
from stac_entities.models.collectioncollection import CollectionCollection
from stac_entities.models.hypermedia import STACHypermedia
from stac_entities.models.item import Item
from stac_entities.models.itemcollection import ItemCollection
from stac_entities.utils import is_object

logger = logging.getLogger(__name__)


def detect_entity_class(data: Any) -> type[STACHypermedia]:
    """Detect the entity class for a STAC JSON document.

    Checks in this order:

    1. ``type`` is ``Feature``: Item
    2. ``type`` is ``FeatureCollection``: ItemCollection
    3. ``type`` is ``Collection``, or both ``extent`` and ``license`` exist: Collection
    4. no ``type``, but a ``collections`` list: CollectionCollection
    5. anything else: Catalog
    """
    stac_type = data.get("type")
    if stac_type == "Feature":
        return Item
    if stac_type == "FeatureCollection":
        return ItemCollection
    if stac_type == "Collection" or ("extent" in data and "license" in data):
        return Collection
    if "type" not in data and isinstance(data.get("collections"), list):
        return CollectionCollection
    return Catalog


def create(
    data: Any,
    migrate: bool | None = None,
    update_version_number: bool = False,
    absolute_url: str | None = None,
) -> STACHypermedia:
    """Creates the matching entity for a STAC JSON document.

    Args:
        data: The parsed STAC JSON document.
        migrate: Migrate the document to the latest STAC version first.
            Defaults to the ``migrate`` setting.
        update_version_number: Set ``stac_version`` to the latest version
            when migrating, otherwise the original version number is kept.
        absolute_url: Absolute URL of the document, used to resolve relative
            links and assets.

    Returns:
        A Catalog, Collection, CollectionCollection, Item or ItemCollection.

    Raises:
        InvalidDataError: If ``data`` is not a mapping.
        MigrationError: If migration was requested and failed.
    """
    if not is_object(data):
        raise InvalidDataError("STAC entity", data)

    if migrate is None:
        migrate = get_resolved_setting("migrate")
    if migrate:
        data = migrate_document(data, update_version_number)

    entity_class = detect_entity_class(data)
    logger.debug("Creating %s for %r", entity_class.__name__, data.get("id"))
    return entity_class(data, absolute_url)  # type: ignore[call-arg]
