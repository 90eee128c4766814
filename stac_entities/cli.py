"""stac-entities CLI - Inspect local STAC documents.

The CLI is a thin wrapper around the Python API (see factory.py).
All logic lives in the library; the CLI reads files and prints results.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn

import click

from stac_entities.config import list_settings
from stac_entities.errors import DocumentLoadError, StacEntityError
from stac_entities.factory import create
from stac_entities.json_output import (
    ErrorDetail,
    OutputEnvelope,
    error_envelope,
    success_envelope,
)
from stac_entities.models.hypermedia import STACHypermedia
from stac_entities.models.stac import STAC
from stac_entities.output import detail, error, field, info, success, warn
from stac_entities.temporal import Interval


def should_output_json(ctx: click.Context) -> bool:
    """Check whether the global --format option asks for JSON."""
    obj = ctx.find_root().obj or {}
    return obj.get("format", "text") == "json"


def output_json_envelope(envelope: OutputEnvelope) -> None:
    click.echo(envelope.to_json())


def load_document(path: Path) -> dict[str, Any]:
    """Read a STAC JSON document from disk.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed document.

    Raises:
        DocumentLoadError: If the file can't be read, isn't JSON or isn't an object.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except OSError as err:
        raise DocumentLoadError(str(path), err.strerror or str(err)) from err
    except json.JSONDecodeError as err:
        raise DocumentLoadError(str(path), f"invalid JSON ({err.msg})") from err

    if not isinstance(data, dict):
        raise DocumentLoadError(str(path), "top-level JSON value is not an object")
    return data


def _open_entity(path: Path, url: str | None, migrate: bool | None) -> STACHypermedia:
    entity = create(load_document(path), migrate=migrate, absolute_url=url)
    # Without a self link, relative hrefs resolve against the file:// URL
    if entity.get_absolute_url() is None:
        entity.set_absolute_url(path.resolve().as_uri())
    return entity


def _fail(ctx: click.Context, command: str, err: Exception) -> NoReturn:
    if should_output_json(ctx):
        output_json_envelope(error_envelope(command, [ErrorDetail.from_exception(err)]))
    else:
        error(str(err))
    raise SystemExit(1) from err


def _format_interval(interval: Interval | None) -> str | None:
    if interval is None:
        return None
    return " / ".join(dt.isoformat() if isinstance(dt, datetime) else ".." for dt in interval)


@click.group()
@click.version_option(package_name="stac-entities")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages to stderr.")
@click.pass_context
def cli(ctx: click.Context, output_format: str, verbose: bool) -> None:
    """stac-entities - Inspect STAC Catalogs, Collections and Items."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--url", help="Absolute URL of the document (default: self link or file:// URL).")
@click.option(
    "--migrate/--no-migrate",
    default=None,
    help="Migrate to the latest STAC version first (default: 'migrate' setting).",
)
@click.pass_context
def inspect(ctx: click.Context, path: Path, url: str | None, migrate: bool | None) -> None:
    """Summarize a STAC document.

    Prints the entity type, id, absolute URL, bounding box, temporal extent,
    thumbnails and the default GeoTIFF asset.
    """
    try:
        entity = _open_entity(path, url, migrate)
    except StacEntityError as err:
        _fail(ctx, "inspect", err)

    thumbnails: list[str] = []
    default_geotiff = None
    if isinstance(entity, STAC):
        thumbnails = [str(img.get_absolute_url()) for img in entity.get_thumbnails()]
        default_geotiff = entity.get_default_geotiff()
    temporal_extent = entity.get_temporal_extent()  # type: ignore[attr-defined]

    data = {
        "type": entity.get_object_type(),
        "id": entity.id,
        "absolute_url": entity.get_absolute_url(),
        "bbox": entity.get_bounding_box(),
        "temporal_extent": temporal_extent,
        "thumbnails": thumbnails,
        "default_geotiff": default_geotiff.get_key() if default_geotiff is not None else None,
        "links": len(entity.get_links()),
    }

    if should_output_json(ctx):
        output_json_envelope(success_envelope("inspect", data))
        return

    label = f"{data['type']} {data['id']!r}" if data["id"] is not None else str(data["type"])
    success(f"Loaded {label}")
    field("Absolute URL", data["absolute_url"])
    field("Bounding box", data["bbox"])
    field("Temporal extent", _format_interval(temporal_extent))
    field("Links", data["links"])
    field("Default GeoTIFF", data["default_geotiff"])
    if thumbnails:
        info("Thumbnails:")
        for href in thumbnails:
            detail(href)


@cli.command()
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def geojson(ctx: click.Context, path: Path) -> None:
    """Print the footprint of a STAC document as GeoJSON.

    Items and ItemCollections are printed as they are. Collections are
    converted from their bounding boxes.
    """
    try:
        entity = _open_entity(path, None, None)
    except StacEntityError as err:
        _fail(ctx, "geojson", err)

    result = entity.to_geojson()
    if should_output_json(ctx):
        output_json_envelope(success_envelope("geojson", {"geojson": result}))
    elif result is None:
        warn(f"No footprint available for {entity.get_object_type()} {entity.id!r}")
    else:
        click.echo(json.dumps(result, indent=2))


@cli.command()
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--url", help="Absolute URL of the document (default: self link or file:// URL).")
@click.option(
    "--all-protocols",
    is_flag=True,
    help="Also rank assets that are not accessible via HTTP(S).",
)
@click.option("--cog-only", is_flag=True, help="Only rank Cloud Optimized GeoTIFFs.")
@click.pass_context
def rank(
    ctx: click.Context,
    path: Path,
    url: str | None,
    all_protocols: bool,
    cog_only: bool,
) -> None:
    """Rank the GeoTIFF assets of a Catalog, Collection or Item for visualization."""
    try:
        entity = _open_entity(path, url, None)
    except StacEntityError as err:
        _fail(ctx, "rank", err)

    if not isinstance(entity, STAC):
        _fail(
            ctx,
            "rank",
            click.UsageError(f"{entity.get_object_type()} documents don't have assets"),
        )

    ranking = entity.rank_geotiffs(http_only=not all_protocols, cog_only=cog_only)
    entries = [
        {
            "key": entry.asset.get_key(),
            "href": entry.asset.get_absolute_url(),
            "score": entry.score,
        }
        for entry in ranking
    ]

    if should_output_json(ctx):
        output_json_envelope(success_envelope("rank", {"ranking": entries}))
        return

    if not entries:
        warn("No GeoTIFF assets found")
        return
    for position, entry in enumerate(entries, start=1):
        info(f"{position}. {entry['key']} (score {entry['score']:g})")
        detail(str(entry["href"]))


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show the resolved settings and where they come from."""
    try:
        settings = list_settings()
    except StacEntityError as err:
        _fail(ctx, "config", err)

    if should_output_json(ctx):
        output_json_envelope(success_envelope("config", {"settings": settings}))
        return

    for key, entry in settings.items():
        field(key, f"{entry['value']} ({entry['source']})")
