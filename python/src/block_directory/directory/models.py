"""
Block Directory Response Models

This module defines the normalized item returned by block directory searches.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

INSTALL_RELATION = "https://api.w.org/install-plugin"
PLUGIN_RELATION = "https://api.w.org/plugin"
DEFAULT_ICON = "block-default"


class ItemLink(BaseModel):
    """A single hypermedia link."""

    model_config = ConfigDict(frozen=True)

    href: str = Field(description="Target of the link")
    embeddable: bool | None = Field(default=None, description="Whether the target can be embedded")


class BlockDirectoryItem(BaseModel):
    """A catalog block, normalized for API callers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False, title="block-directory-item")

    name: str = Field(description="The block name, in namespace/block-name format.")
    title: str = Field(description="The block title, in human readable format.")
    description: str = Field(description="A short description of the block, in human readable format.")
    id: str = Field(description="The block slug.")
    rating: float = Field(description="The star rating of the block.")
    rating_count: int = Field(description="The number of ratings.")
    active_installs: int = Field(description="The number sites that have activated this block.")
    author_block_rating: float = Field(description="The average rating of blocks published by the same author.")
    author_block_count: int = Field(description="The number of blocks published by the same author.")
    author: str = Field(description="The catalog username of the block author.")
    icon: str = Field(description="The block icon.")
    assets: list[str] = Field(default_factory=list, description="The block CSS and JavaScript asset URLs.")
    last_updated: str = Field(description="The date when the block was last updated, as reported by the catalog.")
    humanized_updated: str = Field(
        description="The date when the block was last updated, in fuzzy human readable format."
    )
    links: dict[str, list[ItemLink]] = Field(default_factory=dict, alias="_links")

    def to_response(self) -> dict[str, Any]:
        """Serialize the item as it is sent to API callers."""
        return self.model_dump(by_alias=True, exclude_none=True)


def item_schema() -> dict[str, Any]:
    """JSON schema of a block directory item."""
    schema = BlockDirectoryItem.model_json_schema(by_alias=True)
    schema["$schema"] = "http://json-schema.org/draft-04/schema#"
    return schema


@dataclass
class SearchResponse:
    """Outcome of a block directory search."""
    items: list[BlockDirectoryItem] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0

    def to_response(self) -> list[dict[str, Any]]:
        return [item.to_response() for item in self.items]
