"""
Item Normalizer

Converts raw catalog records into BlockDirectoryItem instances.
"""

import re
from datetime import datetime

from ..catalog.models import RawCatalogRecord
from ..errors import MalformedRecord
from .humanize import humanize_updated, to_epoch
from .models import DEFAULT_ICON, BlockDirectoryItem, ItemLink
from .urls import resolve_asset_url

DESCRIPTION_WORDS = 30
ELLIPSIS = "..."
RATING_SCALE = 20

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"[\n\r\t ]+")


def strip_all_tags(text: str) -> str:
    """Remove markup, including the contents of script and style elements."""
    text = _SCRIPT_STYLE_RE.sub("", text or "")
    return _TAG_RE.sub("", text).strip()


def trim_words(text: str, num_words: int = DESCRIPTION_WORDS, more: str = ELLIPSIS) -> str:
    """Keep the first ``num_words`` words of a text, appending ``more`` if anything was cut."""
    words = [w for w in _WHITESPACE_RE.split(strip_all_tags(text)) if w]
    if len(words) > num_words:
        return " ".join(words[:num_words]) + more
    return " ".join(words)


def scale_rating(value: float) -> float:
    """Map a 0-100 catalog rating onto a 0-5 star scale."""
    return value / RATING_SCALE


def normalize_record(record: RawCatalogRecord, links: dict[str, list[ItemLink]],
                     asset_cdn_base: str = "https://ps.w.org/",
                     now: datetime | None = None) -> BlockDirectoryItem:
    """
    Build the response item for a catalog record.

    Only the first block of a multi-block record is surfaced. Raises MalformedRecord
    when the record ships no blocks or yields an invalid item.
    """
    if not record.blocks:
        raise MalformedRecord(f"Catalog record {record.slug!r} has no blocks")

    block = record.blocks[0]
    version = to_epoch(record.last_updated)

    assets = []
    for asset in record.block_assets:
        url = resolve_asset_url(record.slug, asset, asset_cdn_base, version)
        if url:
            assets.append(url)

    try:
        return BlockDirectoryItem(
            name=block.name,
            title=block.title or record.name,
            description=trim_words(record.description),
            id=record.slug,
            rating=scale_rating(record.rating),
            rating_count=record.num_ratings,
            active_installs=record.active_installs,
            author_block_rating=scale_rating(record.author_block_rating),
            author_block_count=record.author_block_count,
            author=strip_all_tags(record.author),
            icon=record.icons.get("1x") or DEFAULT_ICON,
            assets=assets,
            last_updated=record.last_updated,
            humanized_updated=humanize_updated(record.last_updated, now),
            links=links
        )
    except ValueError as e:
        raise MalformedRecord(f"Catalog record {record.slug!r} could not be normalized: {e}")
