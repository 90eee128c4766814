"""Shared behavior of Catalogs and Collections."""

from __future__ import annotations

from typing import Any

from stac_entities.models.link import Link
from stac_entities.models.stac import STAC


class CatalogLike(STAC):
    """Base class for Catalogs and Collections.

    Don't instantiate this class directly.
    """

    def get_metadata(self, field: str) -> Any:
        """Returns the top-level field with the given name."""
        return self._data.get(field)

    def get_search_link(self, method: str | None = None) -> Link | None:
        """Returns the search link, if present.

        Args:
            method: HTTP method the link must use. Links without a method
                count as GET. Without a method the first search link is
                returned.

        Returns:
            The search link or None.
        """
        links = self.get_stac_links_with_rel("search")
        if method is None:
            return links[0] if links else None
        method = method.upper()
        for link in links:
            link_method = link.method if isinstance(link.method, str) else "GET"
            if link_method.upper() == method:
                return link
        return None

    def get_api_collections_link(self) -> Link | None:
        return self.get_stac_link_with_rel("data")

    def get_api_items_link(self) -> Link | None:
        return self.get_stac_link_with_rel("items")

    def get_child_links(self) -> list[Link]:
        """Returns all child links in document order."""
        return self.get_links_with_rels(["child"])

    def get_item_links(self) -> list[Link]:
        """Returns all item links in document order."""
        return self.get_links_with_rels(["item"])
