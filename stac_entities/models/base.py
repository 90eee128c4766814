"""Base class for all STAC entities.

An entity wraps a plain JSON mapping. Every field is available as an
attribute (``item.id``) and by key (``item["proj:code"]``), which is needed
for namespaced extension fields. Fields listed in the class-level ``KEY_MAP``
are converted into child entities at construction time and converted back on
export, so ``Item(data).to_dict() == data`` holds.

Internal state (the containing entity, asset key, band index, absolute URL)
lives in private attributes and is never exported.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Mapping
from typing import Any, ClassVar

from stac_entities.errors import InvalidDataError
from stac_entities.geo import BoundingBox
from stac_entities.utils import is_object

# Converts a raw JSON value into entities, gets the owning entity as context
Converter = Callable[[Any, "STACObject"], Any]


def _export(value: Any) -> Any:
    if isinstance(value, STACObject):
        return value.to_dict()
    if isinstance(value, list):
        return [v.to_dict() if isinstance(v, STACObject) else v for v in value]
    if isinstance(value, dict):
        return {k: v.to_dict() if isinstance(v, STACObject) else v for k, v in value.items()}
    return value


class STACObject(Mapping[str, Any]):
    """Generic wrapper around a STAC JSON object.

    Don't instantiate this class directly, use one of the subclasses or
    ``stac_entities.create``.

    Args:
        data: The JSON object, or an entity of the same kind to clone.
        key_map: Converters for fields holding child entities, defaults to the
            class-level ``KEY_MAP``.

    Raises:
        InvalidDataError: If ``data`` is not a mapping.
    """

    KEY_MAP: ClassVar[dict[str, Converter]] = {}
    OBJECT_TYPE: ClassVar[str | None] = None

    # Private attributes copied when cloning
    PRIVATE_ATTRS: ClassVar[tuple[str, ...]] = ()

    _context: STACObject | None = None
    _key: str | None = None
    _index: int | None = None
    _url: str | None = None

    def __init__(self, data: Any, key_map: dict[str, Converter] | None = None) -> None:
        if not is_object(data):
            raise InvalidDataError(type(self).__name__, data)

        if isinstance(data, STACObject):
            for attr in self.PRIVATE_ATTRS:
                if attr in data.__dict__:
                    object.__setattr__(self, attr, data.__dict__[attr])
            data = copy.deepcopy(data.to_dict())

        object.__setattr__(self, "_key_map", self.KEY_MAP if key_map is None else key_map)
        object.__setattr__(self, "_data", {})
        for key, value in data.items():
            if key in self._key_map:
                value = self._key_map[key](value, self)
            self._data[key] = value

    # Field access

    def __getattr__(self, name: str) -> Any:
        # Only called if regular lookup fails, so methods always win
        if name.startswith("_"):
            raise AttributeError(name)
        data = self.__dict__.get("_data")
        if data is None:
            raise AttributeError(name)
        return data.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._data[name] = value

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, STACObject) or type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        identifier = self._data.get("id")
        if identifier is None:
            identifier = self._key if self._key is not None else self._data.get("href")
        return f"{type(self).__name__}({identifier!r})"

    # Export

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain JSON-serializable dict.

        Converted fields are exported through each child's ``to_dict()``, all
        other fields are returned as they are.
        """
        result: dict[str, Any] = {}
        for key, value in self._data.items():
            result[key] = _export(value) if key in self._key_map else value
        return result

    # Type checks

    def get_object_type(self) -> str | None:
        """Returns the kind of entity, e.g. "Item", "Asset" or "Link"."""
        return self.OBJECT_TYPE

    def is_item(self) -> bool:
        return self.get_object_type() == "Item"

    def is_catalog(self) -> bool:
        return self.get_object_type() == "Catalog"

    def is_collection(self) -> bool:
        return self.get_object_type() == "Collection"

    def is_catalog_like(self) -> bool:
        return self.is_catalog() or self.is_collection()

    def is_item_collection(self) -> bool:
        return self.get_object_type() == "ItemCollection"

    def is_collection_collection(self) -> bool:
        return self.get_object_type() == "CollectionCollection"

    def is_asset(self) -> bool:
        return self.get_object_type() == "Asset"

    def is_link(self) -> bool:
        return self.get_object_type() == "Link"

    def is_band(self) -> bool:
        return self.get_object_type() == "Band"

    # Derived queries, overridden by the subclasses that support them

    def get_metadata(self, field: str) -> Any:
        """Returns the value of the given field or None."""
        return self._data.get(field)

    def get_absolute_url(self) -> str | None:
        return None

    def to_geojson(self) -> dict[str, Any] | None:
        """Returns a GeoJSON Feature or FeatureCollection for this entity."""
        return None

    def get_bounding_box(self) -> BoundingBox | None:
        return None

    def get_bounding_boxes(self) -> list[BoundingBox]:
        return []
