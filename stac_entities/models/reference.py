"""Shared behavior of Assets and Links."""

from __future__ import annotations

from typing import Any
from urllib.parse import SplitResult, urlsplit

from stac_entities.mediatypes import (
    COG_MEDIA_TYPES,
    GEOTIFF_MEDIA_TYPES,
    can_browser_display_image,
    is_media_type,
)
from stac_entities.models.base import Converter, STACObject
from stac_entities.urls import BROWSER_PROTOCOLS, VSICURL_PREFIX, get_scheme, to_absolute
from stac_entities.utils import has_text


class STACReference(STACObject):
    """An href-bearing object, the base for Assets and Links.

    Don't instantiate this class directly.

    Args:
        data: The JSON object or a reference to clone.
        context: The entity that contains the reference.
        key_map: Converters for fields holding child entities.
    """

    PRIVATE_ATTRS = ("_context",)

    def __init__(
        self,
        data: Any,
        context: STACObject | None = None,
        key_map: dict[str, Converter] | None = None,
    ) -> None:
        super().__init__(data, key_map)
        if self._context is None:
            self._context = context

    def get_context(self) -> STACObject | None:
        """Returns the entity that contains the reference."""
        return self._context

    def get_absolute_url(self, stringify: bool = True) -> str | SplitResult | None:  # type: ignore[override]
        """Gets the URL of the reference as absolute URL.

        Relative hrefs are resolved against the absolute URL of the context.
        Without a context only hrefs that are already absolute are returned.

        Args:
            stringify: Return a string instead of a ``SplitResult``.

        Returns:
            The absolute URL or None if it can't be determined.
        """
        href = self._data.get("href")
        if not isinstance(href, str):
            return None
        if self._context is not None:
            return to_absolute(href, self._context.get_absolute_url(), stringify)
        if "://" in href:
            if href.startswith(VSICURL_PREFIX):
                href = href[len(VSICURL_PREFIX) :]
            return href if stringify else urlsplit(href)
        return None

    def is_type(self, types: str | list[str]) -> bool:
        """Checks whether the reference has one of the given media types."""
        media_type = self._data.get("type")
        return has_text(media_type) and is_media_type(media_type, types)

    def is_geotiff(self) -> bool:
        """Checks whether the reference is a GeoTIFF (including COGs)."""
        return self.is_type(GEOTIFF_MEDIA_TYPES)

    def is_cog(self) -> bool:
        """Checks whether the reference is a Cloud Optimized GeoTIFF."""
        return self.is_type(COG_MEDIA_TYPES)

    def is_http(self) -> bool | None:
        """Checks whether the reference is accessible via HTTP(S).

        Returns:
            True or False, or None if the URL can't be resolved at all.
        """
        url = self.get_absolute_url()
        if url is None:
            return None
        return get_scheme(str(url)) in BROWSER_PROTOCOLS

    def can_browser_display_image(self, allow_undefined: bool = False) -> bool:
        """Checks whether a browser can display the referenced image.

        See ``stac_entities.mediatypes.can_browser_display_image``.
        """
        return can_browser_display_image(self, allow_undefined)
