"""Asset entity, covering bound assets and item asset definitions."""

from __future__ import annotations

import logging
from typing import Any

from stac_entities.errors import InvalidAssetKeyError
from stac_entities.models.band import Band
from stac_entities.models.base import STACObject
from stac_entities.models.reference import STACReference
from stac_entities.utils import (
    Statistics,
    get_min_max_values,
    get_no_data_values,
    has_text,
    is_object,
    merge_arrays_of_objects,
)

logger = logging.getLogger(__name__)

# Asset-level fields that are never inherited from the containing entity
NO_INHERIT_FIELDS: frozenset[str] = frozenset(
    {"created", "updated", "published", "expires", "unpublished", "bands"}
)

VISUAL_COMMON_NAMES = ("red", "green", "blue")

# Fields that hold the common name of a band, depending on the STAC version
COMMON_NAME_FIELDS = ("common_name", "eo:common_name")

PREVIEW_ROLES = ["thumbnail", "overview"]


def _band_property_names(prop: str) -> tuple[str, ...]:
    if prop in COMMON_NAME_FIELDS:
        return COMMON_NAME_FIELDS
    return (prop,)


class Asset(STACReference):
    """A STAC Asset or an Item Asset definition.

    All fields of the asset are available as attributes, e.g. ``asset.href``.
    Assets in ``item_assets`` don't have an href and are called definitions.

    Args:
        data: The JSON object of the asset or an Asset to clone.
        key: The asset key, taken from the clone if one is given.
        context: The entity that contains the asset.

    Raises:
        InvalidDataError: If ``data`` is not a mapping.
        InvalidAssetKeyError: If no string key is given.
    """

    OBJECT_TYPE = "Asset"
    KEY_MAP = {"bands": Band.from_bands}
    PRIVATE_ATTRS = ("_context", "_key")

    def __init__(
        self,
        data: Any,
        key: str | None = None,
        context: STACObject | None = None,
    ) -> None:
        super().__init__(data, context)
        if self._key is None:
            self._key = key
        if not isinstance(self._key, str):
            raise InvalidAssetKeyError(self._key)

    def get_key(self) -> str:
        return self._key  # type: ignore[return-value]

    def get_metadata(self, field: str) -> Any:
        """Returns the asset's own value of a field or the inherited value.

        Provenance fields (``created``, ``updated``, ...) and ``bands`` only
        come from the asset itself.

        Args:
            field: Field name.

        Returns:
            The value of the field or None.
        """
        if field in self._data:
            return self._data[field]
        if field in NO_INHERIT_FIELDS or self._context is None:
            return None
        return self._context.get_metadata(field)

    def get_absolute_url(self, stringify: bool = True) -> Any:
        """Gets the absolute URL of the asset, None for definitions."""
        if self.is_definition():
            return None
        return super().get_absolute_url(stringify)

    # Bands

    def get_bands(self) -> list[Any]:
        """Returns the bands of the asset.

        Uses ``bands`` if present. Assets following older STAC versions get
        the positional merge of ``eo:bands`` and ``raster:bands`` instead.
        """
        if "bands" in self._data:
            bands = self._data["bands"]
            return bands if isinstance(bands, list) else []
        merged = merge_arrays_of_objects(self._data.get("eo:bands"), self._data.get("raster:bands"))
        return Band.from_bands(merged, self)

    def find_visual_bands(self) -> dict[str, Band] | None:
        """Find the red, green and blue bands.

        Returns:
            Dict with the keys ``red``, ``green`` and ``blue``, or None if any
            of them is missing.
        """
        rgb: dict[str, Band] = {}
        for band in self.get_bands():
            if not is_object(band):
                continue
            for prop in COMMON_NAME_FIELDS:
                common_name = band.get(prop)
                if common_name in VISUAL_COMMON_NAMES:
                    rgb[common_name] = band
                    break
        if all(name in rgb for name in VISUAL_COMMON_NAMES):
            return {name: rgb[name] for name in VISUAL_COMMON_NAMES}
        return None

    def find_band(self, value: Any, prop: str = "name") -> Band | None:
        """Returns the first band that has one of the given values.

        ``common_name`` and ``eo:common_name`` are treated as the same property.

        Args:
            value: A single value or a list of values.
            prop: The band property to compare against.

        Returns:
            The band or None.
        """
        values = value if isinstance(value, list) else [value]
        names = _band_property_names(prop)
        for band in self.get_bands():
            if not is_object(band):
                continue
            if any(name in band and band[name] in values for name in names):
                return band
        return None

    def get_band(self, band: Any) -> Any:
        """Returns the band for the given index.

        Band objects and None are passed through.
        """
        if band is None or is_object(band):
            return band
        if not isinstance(band, int) or isinstance(band, bool):
            return None
        bands = self.get_bands()
        if 0 <= band < len(bands):
            return bands[band]
        return None

    def get_min_max_values(self) -> Statistics:
        """Gets the reported minimum and maximum values of the asset."""
        return get_min_max_values(self)

    def get_no_data_values(self) -> list[Any]:
        """Gets the reported no-data values of the asset."""
        return get_no_data_values(self)

    # Classification

    def is_definition(self) -> bool:
        """Checks whether this is an Item Asset definition, i.e. has no href."""
        return not has_text(self._data.get("href"))

    def is_preview(self) -> bool:
        return self.has_role(PREVIEW_ROLES, include_key=True)

    def has_role(self, roles: str | list[str], include_key: bool = False) -> bool:
        """Checks whether the asset has one of the given roles.

        Args:
            roles: One or more roles.
            include_key: Also match the asset key against the roles.

        Returns:
            True if a role (or the key) matches, False otherwise.
        """
        if isinstance(roles, str):
            roles = [roles]
        if include_key and self._key in roles:
            return True
        own_roles = self._data.get("roles")
        return isinstance(own_roles, list) and any(role in roles for role in own_roles)

    def is_http(self) -> bool | None:
        if self.is_definition():
            return None
        return super().is_http()

    def can_browser_display_image(self, allow_undefined: bool = False) -> bool:
        if self.is_definition():
            return False
        return super().can_browser_display_image(allow_undefined)

    @staticmethod
    def from_assets(assets: Any, context: STACObject | None = None) -> dict[str, Any]:
        """Converts a mapping of STAC assets into Assets.

        Entries that are not objects are kept as they are.

        Args:
            assets: Mapping from asset key to asset object.
            context: The entity that contains the assets.

        Returns:
            Mapping from asset key to Asset, empty if ``assets`` is not a mapping.
        """
        if not is_object(assets):
            return {}
        converted: dict[str, Any] = {}
        for key, asset in assets.items():
            if is_object(asset):
                converted[key] = Asset(asset, key, context)
            else:
                logger.debug("Keeping malformed asset %r unconverted", key)
                converted[key] = asset
        return converted
