"""Shared behavior of Catalogs, Collections and Items.

Covers asset lookup, thumbnail and icon discovery and the heuristic that
picks the GeoTIFF asset best suited for visualization.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from stac_entities.config import get_resolved_setting
from stac_entities.models.asset import PREVIEW_ROLES, VISUAL_COMMON_NAMES, Asset
from stac_entities.models.band import Band
from stac_entities.models.base import Converter, STACObject
from stac_entities.models.hypermedia import STACHypermedia
from stac_entities.models.link import Link
from stac_entities.temporal import Interval
from stac_entities.utils import has_text, is_object

logger = logging.getLogger(__name__)

# Extra points for COGs and for assets with a complete set of RGB bands
COG_SCORE = 2
RGB_SCORE = 1


@dataclass(frozen=True)
class AssetScore:
    """A GeoTIFF asset and its visualization score.

    Attributes:
        asset: The asset.
        score: Higher is better.
    """

    asset: Asset
    score: float


class STAC(STACHypermedia):
    """Base class for Catalogs, Collections and Items.

    Don't instantiate this class directly.

    Args:
        data: The JSON object or an entity to clone.
        absolute_url: Absolute URL of the entity.
        key_map: Converters for fields holding child entities.
    """

    KEY_MAP: dict[str, Converter] = {
        **STACHypermedia.KEY_MAP,
        "assets": Asset.from_assets,
        "item_assets": Asset.from_assets,
    }

    # Temporal extent

    def get_temporal_extent(self) -> Interval | None:
        """Returns the first temporal extent or None."""
        extents = self.get_temporal_extents()
        return extents[0] if extents else None

    def get_temporal_extents(self) -> list[Interval]:
        return []

    # Bands

    def get_bands(self) -> list[Any]:
        """Returns the bands defined for the entity (not for its assets)."""
        return Band.from_bands(self.get_metadata("bands"), self)

    # Assets

    def get_asset(self, key: str) -> Asset | None:
        assets = self._data.get("assets")
        if is_object(assets) and isinstance(assets.get(key), Asset):
            return assets[key]
        return None

    def get_assets(self) -> list[Asset]:
        """Returns all assets in document order."""
        assets = self._data.get("assets")
        if not is_object(assets):
            return []
        return [asset for asset in assets.values() if isinstance(asset, Asset)]

    def get_assets_with_roles(self, roles: str | list[str], include_key: bool = False) -> list[Asset]:
        """Returns all assets that have at least one of the given roles.

        Args:
            roles: One or more roles.
            include_key: Also match the asset key against the roles.

        Returns:
            The matching assets.
        """
        return [asset for asset in self.get_assets() if asset.has_role(roles, include_key)]

    def get_asset_with_role(self, role: str, include_key: bool = False) -> Asset | None:
        assets = self.get_assets_with_roles(role, include_key)
        return assets[0] if assets else None

    def get_assets_by_types(self, types: str | list[str]) -> list[Asset]:
        """Returns all assets with one of the given media types."""
        return [asset for asset in self.get_assets() if asset.is_type(types)]

    # Images

    def get_icons(self, allow_undefined: bool = True) -> list[Link]:
        """Returns the icon links that a browser can display.

        Args:
            allow_undefined: Accept links without media type if the file
                extension is an image format.

        Returns:
            The icon links.
        """
        return [
            link
            for link in self.get_links_with_rels(["icon"])
            if link.can_browser_display_image(allow_undefined)
        ]

    def get_thumbnails(self, browser_only: bool = True, prefer: str | None = None) -> list[Any]:
        """Get the thumbnails from the assets and links.

        Assets with the role (or key) ``thumbnail`` or ``overview`` are used,
        the ``preview`` links only if no such asset exists.

        Args:
            browser_only: Return only images a browser can display natively
                (PNG, JPEG, GIF, WebP via HTTP(S)).
            prefer: Role (or key) to sort first, e.g. ``thumbnail`` or ``overview``.

        Returns:
            Assets or Links.
        """
        thumbnails: list[Any] = self.get_assets_with_roles(PREVIEW_ROLES, include_key=True)
        if prefer and len(thumbnails) > 1:
            thumbnails.sort(key=lambda asset: 0 if asset.has_role(prefer, include_key=True) else 1)
        if not thumbnails:
            thumbnails = self.get_links_with_rels(["preview"])
        if browser_only:
            thumbnails = [img for img in thumbnails if img.can_browser_display_image()]
        return thumbnails

    def rank_geotiffs(
        self,
        http_only: bool = True,
        cog_only: bool = False,
        role_scores: dict[str, float] | None = None,
        additional_criteria: Callable[[Asset], float] | None = None,
    ) -> list[AssetScore]:
        """Ranks the GeoTIFF assets for visualization.

        Scores add up as follows:

        - the highest score of all roles that apply, the asset key counts as
          a role (default: overview 3, thumbnail 2, visual 2, data 1)
        - COG media type: +2 (only if not ``cog_only``)
        - complete set of RGB bands: +1
        - whatever ``additional_criteria`` returns for the asset

        Args:
            http_only: Only consider assets accessible via HTTP(S).
            cog_only: Only consider Cloud Optimized GeoTIFFs.
            role_scores: Role (and key) weights, defaults to the
                ``geotiff_role_scores`` setting. An empty dict disables
                role-based scoring.
            additional_criteria: Callback returning a value added to the score.

        Returns:
            Assets with scores, sorted by score in descending order. Assets
            with equal scores keep their document order.
        """
        if role_scores is None:
            role_scores = get_resolved_setting("geotiff_role_scores")

        ranking: list[AssetScore] = []
        for asset in self.get_assets():
            if not asset.is_geotiff():
                continue
            if http_only and not asset.is_http():
                continue
            if cog_only and not asset.is_cog():
                continue

            roles = asset.roles if isinstance(asset.roles, list) else []
            candidates = [*roles, asset.get_key()]
            score: float = max(
                (
                    role_scores[role]
                    for role in candidates
                    if isinstance(role, str) and role in role_scores
                ),
                default=0,
            )
            if not cog_only and asset.is_cog():
                score += COG_SCORE
            if asset.find_visual_bands() is not None:
                score += RGB_SCORE
            if additional_criteria is not None:
                score += additional_criteria(asset)
            ranking.append(AssetScore(asset, score))

        # sorted() is stable, ties keep the document order
        ranking = sorted(ranking, key=lambda entry: entry.score, reverse=True)
        logger.debug(
            "GeoTIFF ranking: %s",
            [(entry.asset.get_key(), entry.score) for entry in ranking],
        )
        return ranking

    def get_default_geotiff(self, http_only: bool = True, cog_only: bool = False) -> Asset | None:
        """Determines the default GeoTIFF asset for visualization.

        See ``rank_geotiffs`` for the scoring.
        """
        ranking = self.rank_geotiffs(http_only, cog_only)
        return ranking[0].asset if ranking else None

    def find_visual_assets(self) -> dict[str, Asset] | None:
        """Find the single-band assets for an RGB composite.

        Returns:
            Dict with the keys ``red``, ``green`` and ``blue``, or None if any
            of them is missing.
        """
        rgb: dict[str, Asset] = {}
        for asset in self.get_assets():
            if len(asset.get_bands()) != 1:
                continue
            band = asset.find_band(list(VISUAL_COMMON_NAMES), "common_name")
            if band is None:
                continue
            common_name = band.get("common_name")
            if common_name not in VISUAL_COMMON_NAMES:
                common_name = band.get("eo:common_name")
            rgb[common_name] = asset
        if all(name in rgb for name in VISUAL_COMMON_NAMES):
            return {name: rgb[name] for name in VISUAL_COMMON_NAMES}
        return None

    def equals(self, other: Any) -> bool:
        """Checks whether two entities are the same.

        Entities are the same if they are identical or are of the same kind
        and have the same, non-empty id.
        """
        if other is self:
            return True
        if not isinstance(other, STACObject):
            return False
        return (
            self.get_object_type() == other.get_object_type()
            and has_text(self.id)
            and self.id == other.id
        )
