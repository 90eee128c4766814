"""URL normalization and resolution.

Relative hrefs are resolved with ``urllib.parse``. GDAL virtual file system
paths such as ``/vsis3/bucket/key.tif`` are kept as they are, while
``/vsicurl/`` is unwrapped to the URL it points to.
"""

from __future__ import annotations

from posixpath import basename
from urllib.parse import SplitResult, urljoin, urlsplit

# Protocols supported by browsers
BROWSER_PROTOCOLS: list[str] = ["http", "https"]

VSICURL_PREFIX = "/vsicurl/"


def is_gdal_vfs_uri(href: str) -> bool:
    """Check whether an href is a GDAL VFS path that must not be resolved.

    ``/vsicurl/`` is excluded as it wraps a regular URL.
    """
    return href.startswith("/vsi") and not href.startswith(VSICURL_PREFIX)


def _lower_netloc(netloc: str) -> str:
    # Only the host is case-insensitive, user info is kept as is
    userinfo, sep, host = netloc.rpartition("@")
    return f"{userinfo}{sep}{host.lower()}"


def normalize_uri(
    href: str,
    base_url: str | None = None,
    no_params: bool = False,
    stringify: bool = True,
) -> str | SplitResult:
    """Normalize an href and resolve it against a base URL if it's relative.

    A base URL whose path doesn't end with ``/`` or ``.json`` is treated as a
    directory, so ``https://example.com/api/v1.0`` resolves ``collections`` to
    ``https://example.com/api/v1.0/collections``.

    Args:
        href: The href to normalize.
        base_url: Base URL for relative hrefs.
        no_params: Remove query string and fragment.
        stringify: Return a string instead of a ``SplitResult``.

    Returns:
        The normalized URL.
    """
    if href.startswith(VSICURL_PREFIX):
        href = href[len(VSICURL_PREFIX) :]

    uri = urlsplit(href)
    if base_url and not uri.scheme and not is_gdal_vfs_uri(href):
        base = urlsplit(base_url)
        if not base.path.endswith("/") and not base.path.endswith(".json"):
            base = base._replace(path=base.path + "/")
        uri = urlsplit(urljoin(base.geturl(), href))

    uri = uri._replace(scheme=uri.scheme.lower(), netloc=_lower_netloc(uri.netloc))
    if no_params:
        uri = uri._replace(query="", fragment="")
    return uri.geturl() if stringify else uri


def to_absolute(
    href: str,
    base_url: str | None,
    stringify: bool = True,
) -> str | SplitResult:
    """Resolve an href against a base URL, keeping query and fragment."""
    return normalize_uri(href, base_url, no_params=False, stringify=stringify)


def get_scheme(href: str) -> str:
    """Get the lowercase scheme of an href, empty if relative."""
    return urlsplit(href).scheme.lower()


def get_extension(href: str) -> str:
    """Get the lowercase file extension of an href's path, empty if none."""
    name = basename(urlsplit(href).path)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()
