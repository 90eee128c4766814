"""Link handling shared by all top-level STAC entities."""

from __future__ import annotations

from typing import Any

from stac_entities.mediatypes import is_stac_media_type
from stac_entities.models.base import Converter, STACObject
from stac_entities.models.link import Link
from stac_entities.utils import has_text


class STACHypermedia(STACObject):
    """A STAC entity with links and an absolute URL.

    Don't instantiate this class directly.

    The absolute URL is the base for resolving relative hrefs of links and
    assets. It defaults to the href of the ``self`` link.

    Args:
        data: The JSON object or an entity to clone.
        absolute_url: Absolute URL of the entity.
        key_map: Converters for fields holding child entities.
    """

    KEY_MAP: dict[str, Converter] = {"links": Link.from_links}
    PRIVATE_ATTRS = ("_url",)

    def __init__(
        self,
        data: Any,
        absolute_url: str | None = None,
        key_map: dict[str, Converter] | None = None,
    ) -> None:
        super().__init__(data, key_map)
        if not self._url:
            self._url = absolute_url
        if not self._url:
            self_link = self.get_self_link()
            if self_link is not None:
                self._url = self_link.href

    def get_absolute_url(self) -> str | None:
        """Gets the absolute URL, given explicitly or taken from the self link."""
        return self._url

    def set_absolute_url(self, url: str | None) -> None:
        self._url = url

    def get_links(self) -> list[Link]:
        """Returns all links that have an href."""
        links = self._data.get("links")
        if not isinstance(links, list):
            return []
        return [link for link in links if isinstance(link, Link) and has_text(link.href)]

    def get_links_with_rels(self, rels: list[str]) -> list[Link]:
        """Returns all links with one of the given relation types, in document order."""
        return [link for link in self.get_links() if link.rel in rels]

    def get_links_with_other_rels(self, rels: list[str]) -> list[Link]:
        """Returns all links whose relation type is not one of the given ones."""
        return [link for link in self.get_links() if link.rel not in rels]

    def get_link_with_rel(self, rel: str) -> Link | None:
        """Returns the first link with the given relation type."""
        for link in self.get_links():
            if link.rel == rel:
                return link
        return None

    def get_stac_links_with_rel(self, rel: str, allow_undefined: bool = True) -> list[Link]:
        """Returns all links with the given relation type that point to STAC.

        Args:
            rel: Relation type.
            allow_undefined: Also return links without a media type.

        Returns:
            Links with a JSON or GeoJSON media type.
        """
        return [
            link
            for link in self.get_links_with_rels([rel])
            if is_stac_media_type(link.get("type"), allow_undefined)
        ]

    def get_stac_link_with_rel(self, rel: str, allow_undefined: bool = True) -> Link | None:
        links = self.get_stac_links_with_rel(rel, allow_undefined)
        return links[0] if links else None

    def get_self_link(self) -> Link | None:
        return self.get_stac_link_with_rel("self")

    def get_root_link(self) -> Link | None:
        return self.get_stac_link_with_rel("root")

    def get_parent_link(self) -> Link | None:
        return self.get_stac_link_with_rel("parent")
