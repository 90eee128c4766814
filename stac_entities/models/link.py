"""Link entity."""

from __future__ import annotations

import logging
from typing import Any

from stac_entities.models.base import STACObject
from stac_entities.models.reference import STACReference
from stac_entities.utils import is_object

logger = logging.getLogger(__name__)


class Link(STACReference):
    """A STAC Link.

    All fields of the link are available as attributes, e.g. ``link.rel``.

    Args:
        data: The JSON object of the link or a Link to clone.
        context: The entity that contains the link.
    """

    OBJECT_TYPE = "Link"

    def __init__(self, data: Any, context: STACObject | None = None) -> None:
        super().__init__(data, context)

    def is_preview(self) -> bool:
        return self._data.get("rel") == "preview"

    @staticmethod
    def from_links(links: Any, context: STACObject | None = None) -> list[Any]:
        """Converts a list of STAC links into Links.

        Entries that are not objects are kept as they are.

        Args:
            links: List of link objects.
            context: The entity that contains the links.

        Returns:
            List of Links, empty if ``links`` is not a list.
        """
        if not isinstance(links, list):
            return []
        converted: list[Any] = []
        for link in links:
            if is_object(link):
                converted.append(Link(link, context))
            else:
                logger.debug("Keeping malformed link unconverted: %r", link)
                converted.append(link)
        return converted
