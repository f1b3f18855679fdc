"""
Block Directory Service

This module drives a block directory search: authorization, catalog query, local
installation filtering, normalization and link building.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

from ..catalog.client import CatalogClient
from ..catalog.installed import InstallationIndex, RequestScopedIndex
from ..catalog.models import CatalogQuery, RawCatalogRecord
from ..config import DirectorySettings, directory_logger
from ..errors import MalformedRecord
from .links import build_links
from .models import BlockDirectoryItem, SearchResponse
from .normalizer import normalize_record
from .permissions import CallerContext, CapabilityCheck, caller_has_capability, check_search_permissions


class BlockDirectoryService:
    """Searches the block catalog on behalf of a caller."""

    def __init__(self, catalog_client: CatalogClient, installation_index: InstallationIndex,
                 settings: DirectorySettings | None = None,
                 capability_check: CapabilityCheck = caller_has_capability,
                 clock: Callable[[], datetime] | None = None):
        self.catalog_client = catalog_client
        self.installation_index = installation_index
        self.settings = settings or DirectorySettings()
        self.capability_check = capability_check
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def search(self, query: CatalogQuery, caller: CallerContext) -> SearchResponse:
        """
        Run a block directory search.

        Raises:
            Unauthorized: the caller may not browse the directory
            UpstreamError: the catalog query failed
        """
        check_search_permissions(caller, self.capability_check)

        result = await self.catalog_client.search_blocks(query)

        index = RequestScopedIndex(self.installation_index)
        now = self.clock()
        items = await asyncio.gather(*[
            self._prepare_item(record, index, now) for record in result.records
        ])

        return SearchResponse(
            items=[item for item in items if item is not None],
            total=result.results,
            total_pages=result.pages
        )

    async def _prepare_item(self, record: RawCatalogRecord, index: RequestScopedIndex,
                            now: datetime) -> BlockDirectoryItem | None:
        """Normalize one record, or return None when it is installed or malformed."""
        local_file = await asyncio.to_thread(index.find_module_for_slug, record.slug)
        if local_file:
            directory_logger.debug(f"Skipping {record.slug}, already installed as {local_file}")
            return None

        links = build_links(record.slug, local_file, self.settings.rest_base,
                            self.settings.module_file_suffix)
        try:
            return normalize_record(record, links, self.settings.asset_cdn_base, now)
        except MalformedRecord as e:
            directory_logger.warning(f"Skipping catalog record {record.slug}: {e.message}")
            return None
