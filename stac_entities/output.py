"""Styled terminal output for the stac-entities CLI.

Every human-readable line the CLI prints goes through these helpers, so
prefixes and colors stay consistent:

    from stac_entities.output import success, info, warn, error, detail, field

    success("Loaded Item 'S2B_33UUP_20200413_0_L2A'")
    field("Bounding box", "[11.2, 48.1, 12.4, 49.0]")
    warn("No GeoTIFF assets found")
    error("Cannot load STAC document from item.json")

Warnings and errors go to stderr, everything else to stdout.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click

_STYLES = {
    "success": "green",
    "info": "blue",
    "warn": "yellow",
    "error": "red",
    "detail": "bright_black",
}

_PREFIXES = {
    "success": "✓",  # checkmark
    "info": "→",  # arrow
    "warn": "⚠",  # warning
    "error": "✗",  # X
    "detail": " ",
}


def _output(message: str, style: str, *, file: TextIO | None = None) -> None:
    color = _STYLES[style]
    prefix = click.style(_PREFIXES[style], fg=color)
    click.echo(f"{prefix} {click.style(message, fg=color)}", file=file)


def success(message: str, *, file: TextIO | None = None) -> None:
    """Print a success message with a green checkmark.

    Example:
        >>> success("Loaded Collection 'sentinel-2-l2a'")
        ✓ Loaded Collection 'sentinel-2-l2a'
    """
    _output(message, "success", file=file)


def info(message: str, *, file: TextIO | None = None) -> None:
    """Print an info message with a blue arrow."""
    _output(message, "info", file=file)


def warn(message: str, *, file: TextIO | None = None) -> None:
    """Print a warning with a yellow warning sign (default: stderr)."""
    _output(message, "warn", file=file or sys.stderr)


def error(message: str, *, file: TextIO | None = None) -> None:
    """Print an error with a red X (default: stderr)."""
    _output(message, "error", file=file or sys.stderr)


def detail(message: str, *, file: TextIO | None = None) -> None:
    """Print a dimmed, indented detail line."""
    _output(message, "detail", file=file)


def field(label: str, value: Any, *, file: TextIO | None = None) -> None:
    """Print a labelled value, ``-`` if the value is None.

    Example:
        >>> field("Absolute URL", None)
          Absolute URL: -
    """
    text = "-" if value is None else str(value)
    click.echo(f"  {click.style(label + ':', bold=True)} {text}", file=file)
