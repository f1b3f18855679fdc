"""
Block Catalog Models

This module defines the data models exchanged with the remote block catalog.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_PER_PAGE, MAX_PER_PAGE
from ..errors import MalformedRecord


def _as_float(value: Any) -> float:
    """Coerce a loosely typed catalog number to a finite float, treating junk as 0."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_int(value: Any) -> int:
    return int(_as_float(value))


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class CatalogQuery:
    """A validated block search against the catalog."""
    term: str
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE
    max_per_page: int = MAX_PER_PAGE

    def __post_init__(self):
        if not isinstance(self.term, str) or not self.term:
            raise ValueError("term must be a non-empty string")
        if self.page < 1:
            raise ValueError("page must be a positive integer")
        if self.per_page < 1 or self.per_page > self.max_per_page:
            raise ValueError(f"per_page must be between 1 and {self.max_per_page}")


@dataclass(frozen=True)
class BlockDescriptor:
    """One block shipped inside a catalog record."""
    name: str
    title: str = ""


@dataclass
class RawCatalogRecord:
    """A plugin record as reported by the catalog."""
    slug: str
    name: str = ""
    author: str = ""
    description: str = ""
    blocks: list[BlockDescriptor] = field(default_factory=list)
    rating: float = 0.0
    num_ratings: int = 0
    active_installs: int = 0
    author_block_rating: float = 0.0
    author_block_count: int = 0
    icons: dict[str, str] = field(default_factory=dict)
    block_assets: list[str] = field(default_factory=list)
    last_updated: str = ""
    block_icons: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "RawCatalogRecord":
        """Build a record from catalog JSON, raising MalformedRecord when unusable."""
        if not isinstance(payload, dict):
            raise MalformedRecord("Catalog record is not an object")

        slug = payload.get("slug")
        if not isinstance(slug, str) or not slug:
            raise MalformedRecord("Catalog record has no slug")

        # The catalog sends blocks either as a list or as an object keyed by block name
        raw_blocks = payload.get("blocks") or []
        if isinstance(raw_blocks, dict):
            raw_blocks = list(raw_blocks.values())

        blocks = []
        for block in raw_blocks:
            if isinstance(block, dict) and isinstance(block.get("name"), str) and block["name"]:
                blocks.append(BlockDescriptor(name=block["name"], title=_as_str(block.get("title"))))

        icons = payload.get("icons")
        assets = payload.get("block_assets")
        block_icons = payload.get("block_icons")

        return cls(
            slug=slug,
            name=_as_str(payload.get("name")),
            author=_as_str(payload.get("author")),
            description=_as_str(payload.get("description")),
            blocks=blocks,
            rating=_as_float(payload.get("rating")),
            num_ratings=_as_int(payload.get("num_ratings")),
            active_installs=_as_int(payload.get("active_installs")),
            author_block_rating=_as_float(payload.get("author_block_rating")),
            author_block_count=_as_int(payload.get("author_block_count")),
            icons={k: v for k, v in icons.items() if isinstance(v, str)} if isinstance(icons, dict) else {},
            block_assets=[a for a in assets if isinstance(a, str)] if isinstance(assets, list) else [],
            last_updated=_as_str(payload.get("last_updated")),
            block_icons=block_icons if isinstance(block_icons, dict) else {}
        )


@dataclass
class CatalogSearchResult:
    """Result from a catalog search."""
    records: list[RawCatalogRecord]
    page: int = 1
    pages: int = 0
    results: int = 0
