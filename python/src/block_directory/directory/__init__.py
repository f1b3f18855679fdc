"""
Block Directory Module

Search orchestration, normalization and link building for the block directory.
"""

from .models import BlockDirectoryItem, ItemLink, SearchResponse
from .permissions import CallerContext, check_search_permissions
from .service import BlockDirectoryService

__all__ = [
    "BlockDirectoryItem",
    "BlockDirectoryService",
    "CallerContext",
    "ItemLink",
    "SearchResponse",
    "check_search_permissions"
]
