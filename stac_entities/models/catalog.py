"""Catalog entity."""

from __future__ import annotations

from typing import Any

from stac_entities.models.cataloglike import CatalogLike


class Catalog(CatalogLike):
    """A STAC Catalog.

    All fields are available as attributes, e.g. ``catalog.title``.

    Args:
        data: The JSON object of the Catalog or a Catalog to clone.
        absolute_url: Absolute URL of the Catalog.
    """

    OBJECT_TYPE = "Catalog"

    def __init__(self, data: Any, absolute_url: str | None = None) -> None:
        super().__init__(data, absolute_url)
