"""Band entity, a single data or spectral channel."""

from __future__ import annotations

import logging
from typing import Any

from stac_entities.models.base import STACObject
from stac_entities.utils import Statistics, get_min_max_values, get_no_data_values, is_object

logger = logging.getLogger(__name__)


def _normalize_index(index: Any) -> int | None:
    if isinstance(index, str):
        try:
            return int(index, 10)
        except ValueError:
            return None
    if isinstance(index, int) and not isinstance(index, bool):
        return index
    return None


class Band(STACObject):
    """A STAC band.

    All fields of the band are available as attributes, e.g. ``band.name``.
    Fields missing on the band are inherited from the context, i.e. the
    Asset, Item or Collection that contains the band.

    Args:
        data: The JSON object of the band or a Band to clone.
        index: Position of the band in the bands array, may be a numeric string.
        context: The entity that contains the band.
    """

    OBJECT_TYPE = "Band"
    PRIVATE_ATTRS = ("_index", "_context")

    def __init__(
        self,
        data: Any,
        index: int | str | None = None,
        context: STACObject | None = None,
    ) -> None:
        super().__init__(data)
        if not isinstance(self._index, int):
            self._index = _normalize_index(index)
        if self._context is None:
            self._context = context

    def get_context(self) -> STACObject | None:
        """Returns the entity that contains the band."""
        return self._context

    def get_index(self) -> int | None:
        return self._index

    def get_metadata(self, field: str) -> Any:
        """Returns the band's own value of a field or the inherited value.

        Args:
            field: Field name.

        Returns:
            The value of the field, None if neither the band nor its context
            provide it.
        """
        if field in self._data:
            return self._data[field]
        if self._context is not None:
            return self._context.get_metadata(field)
        return None

    def get_min_max_values(self) -> Statistics:
        """Gets the reported minimum and maximum values of the band."""
        return get_min_max_values(self)

    def get_no_data_values(self) -> list[Any]:
        """Gets the reported no-data values of the band."""
        return get_no_data_values(self)

    @staticmethod
    def from_bands(bands: Any, context: STACObject | None = None) -> list[Any]:
        """Converts a list of STAC bands into Bands.

        Entries that are not objects are kept as they are.

        Args:
            bands: List of band objects.
            context: The entity that contains the bands.

        Returns:
            List of Bands, empty if ``bands`` is not a list.
        """
        if not isinstance(bands, list):
            return []
        converted: list[Any] = []
        for index, band in enumerate(bands):
            if is_object(band):
                converted.append(Band(band, index, context))
            else:
                logger.debug("Keeping malformed band at index %d unconverted: %r", index, band)
                converted.append(band)
        return converted
