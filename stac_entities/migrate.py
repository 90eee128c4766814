"""Migration of STAC documents to the latest STAC version.

Wraps pystac's serialization helpers. Catalogs, Collections and Items are
migrated directly. Items of an ItemCollection and Collections of a
CollectionCollection are migrated one by one, as pystac doesn't know these
API containers.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pystac.errors import STACError, STACTypeError
from pystac.serialization import identify_stac_object, migrate_to_latest

from stac_entities.errors import MigrationError
from stac_entities.utils import is_object

logger = logging.getLogger(__name__)


def _migrate_entity(data: Mapping[str, Any], update_version_number: bool) -> dict[str, Any]:
    plain = copy.deepcopy(dict(data))
    try:
        info = identify_stac_object(plain)
        migrated = migrate_to_latest(plain, info)
    except (STACError, STACTypeError) as err:
        raise MigrationError(str(err)) from err

    if not update_version_number:
        if "stac_version" in data:
            migrated["stac_version"] = data["stac_version"]
        else:
            migrated.pop("stac_version", None)

    logger.debug(
        "Migrated %s %r from STAC %s",
        info.object_type,
        data.get("id"),
        info.version_range.latest_valid_version(),
    )
    return migrated


def _migrate_members(data: Mapping[str, Any], field: str, update_version_number: bool) -> dict[str, Any]:
    result = copy.deepcopy(dict(data))
    members = result.get(field)
    if isinstance(members, list):
        result[field] = [
            _migrate_entity(member, update_version_number) if is_object(member) else member
            for member in members
        ]
    return result


def migrate_document(data: Mapping[str, Any], update_version_number: bool = False) -> dict[str, Any]:
    """Migrate a STAC document to the latest STAC version.

    The given document is not modified.

    Args:
        data: A Catalog, Collection, Item, ItemCollection or CollectionCollection.
        update_version_number: Set ``stac_version`` to the latest version.
            Otherwise the original version number is kept.

    Returns:
        The migrated document.

    Raises:
        MigrationError: If pystac can't identify or migrate the document.
    """
    if data.get("type") == "FeatureCollection":
        return _migrate_members(data, "features", update_version_number)
    if "type" not in data and isinstance(data.get("collections"), list):
        return _migrate_members(data, "collections", update_version_number)
    return _migrate_entity(data, update_version_number)
