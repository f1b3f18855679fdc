"""
URL helpers for block assets and response links.
"""

import re
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

_DISALLOWED_URL_CHARS = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\uffff]", re.IGNORECASE)


def escape_https_url(url: str) -> str:
    """
    Sanitize a URL for storage, allowing only https.

    Returns an empty string when the URL is not an https URL with a host.
    """
    url = url.strip().replace(" ", "%20")
    url = _DISALLOWED_URL_CHARS.sub("", url)
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    if parts.scheme.lower() != "https" or not parts.netloc:
        return ""
    return url


def is_absolute_https_url(url: str) -> bool:
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.scheme.lower() == "https" and bool(parts.hostname)


def add_query_arg(url: str, key: str, value) -> str:
    """Set a query argument on a URL, replacing any existing value for the key."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != key]
    query.append((key, str(value)))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def resolve_asset_url(slug: str, asset: str, cdn_base: str, version: int | None) -> str:
    """
    Resolve one catalog asset entry to an absolute https URL.

    Absolute https URLs pass through (escaped); anything else is treated as a path
    fragment under ``<cdn_base><slug>`` and stamped with a ``v`` cache-buster.
    Entries that cannot be parsed as a URL resolve to an empty string.
    """
    try:
        urlsplit(asset)
    except ValueError:
        return ""

    if is_absolute_https_url(asset):
        return escape_https_url(asset)

    url = cdn_base.rstrip("/") + "/" + quote(slug, safe="") + asset
    if version is not None:
        url = add_query_arg(url, "v", version)
    return escape_https_url(url)
