"""Media type constants and classification.

Comparisons are case-insensitive. Parameters are part of the media type, so
``image/tiff; application=geotiff`` and its cloud-optimized profile are
distinct entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from stac_entities.urls import BROWSER_PROTOCOLS, get_extension, get_scheme

GEOJSON_MEDIA_TYPE = "application/geo+json"

# JSON and GeoJSON
STAC_MEDIA_TYPES: list[str] = [
    "application/json",
    GEOJSON_MEDIA_TYPE,
    "text/json",
]

# Images that web browsers can show
BROWSER_IMAGE_TYPES: list[str] = [
    "image/gif",
    "image/jpeg",
    "image/apng",
    "image/png",
    "image/webp",
]

COG_MEDIA_TYPES: list[str] = [
    "image/tiff; application=geotiff; profile=cloud-optimized",
    "image/vnd.stac.geotiff; cloud-optimized=true",
]

# Includes the COG media types
GEOTIFF_MEDIA_TYPES: list[str] = [
    "application/geotiff",
    "image/tiff; application=geotiff",
    "image/vnd.stac.geotiff",
    *COG_MEDIA_TYPES,
]

IMAGE_MEDIA_TYPES: list[str] = BROWSER_IMAGE_TYPES + GEOTIFF_MEDIA_TYPES


def is_undefined_media_type(media_type: Any) -> bool:
    """Check whether a media type is missing, i.e. None or an empty string."""
    return media_type is None or media_type == ""


def is_media_type(
    media_type: Any,
    allowed_types: str | Iterable[str],
    allow_undefined: bool = False,
) -> bool:
    """Check whether a media type is one of the allowed media types.

    Args:
        media_type: The potential media type, None if undefined.
        allowed_types: One or more allowed media types.
        allow_undefined: Return True if ``media_type`` is None or empty.

    Returns:
        True if the media type is allowed, False otherwise.
    """
    if isinstance(allowed_types, str):
        allowed_types = [allowed_types]
    if allow_undefined and is_undefined_media_type(media_type):
        return True
    if not isinstance(media_type, str):
        return False
    return media_type.lower() in {t.lower() for t in allowed_types}


def is_stac_media_type(media_type: Any, allow_undefined: bool = False) -> bool:
    """Check whether a media type is a STAC media type (JSON or GeoJSON)."""
    return is_media_type(media_type, STAC_MEDIA_TYPES, allow_undefined)


def can_browser_display_image(
    img: Any,
    allow_undefined: bool = False,
) -> bool:
    """Check whether a browser can show the referenced image.

    The reference must be served via HTTP(S) (or have no scheme) and either
    declare a browser image media type or, if ``allow_undefined`` is set and
    the type is undefined, have a matching file extension.

    Args:
        img: A mapping with ``href`` and optional ``type``, e.g. a Link or Asset.
        allow_undefined: Fall back to the file extension if ``type`` is
            absent, null or empty.

    Returns:
        True if a browser can display the image, False otherwise.
    """
    if not isinstance(img, Mapping) or not isinstance(img.get("href"), str):
        return False

    type_absent = is_undefined_media_type(img.get("type"))
    if not allow_undefined and type_absent:
        return False

    href = img["href"]
    scheme = get_scheme(href)
    if scheme and scheme not in BROWSER_PROTOCOLS:
        return False

    media_type = img.get("type")
    if isinstance(media_type, str) and media_type.lower() in BROWSER_IMAGE_TYPES:
        return True
    if type_absent:
        extension = get_extension(href)
        return bool(extension) and (
            extension == "jpg" or f"image/{extension}" in BROWSER_IMAGE_TYPES
        )
    return False
