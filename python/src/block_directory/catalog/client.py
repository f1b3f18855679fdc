"""
Block Catalog Client

This module provides the client used to search the remote block catalog.
"""

from typing import Any

import httpx

from ..config import directory_logger
from ..errors import MalformedRecord, UpstreamError
from .models import CatalogQuery, CatalogSearchResult, RawCatalogRecord


class CatalogClient:
    """Client for block catalog search operations."""

    def __init__(self, catalog_url: str = "https://api.wordpress.org/plugins/info/1.2/",
                 timeout: float = 30.0, session: httpx.AsyncClient | None = None):
        """
        Initialize the catalog client.

        Args:
            catalog_url: Catalog query endpoint
            timeout: Request timeout in seconds
            session: Pre-built HTTP client, mostly for tests; one is created lazily otherwise
        """
        self.catalog_url = catalog_url
        self.timeout = timeout
        self.session = session
        self._owns_session = session is None

    async def _get_session(self) -> httpx.AsyncClient:
        """Get or create HTTP session."""
        if self.session is None:
            self.session = httpx.AsyncClient(timeout=self.timeout)
            self._owns_session = True
        return self.session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self.session and self._owns_session:
            await self.session.aclose()
            self.session = None

    def _build_params(self, query: CatalogQuery) -> dict[str, Any]:
        return {
            "action": "query_plugins",
            "request[block]": query.term,
            "request[per_page]": query.per_page,
            "request[page]": query.page
        }

    async def search_blocks(self, query: CatalogQuery) -> CatalogSearchResult:
        """
        Search the catalog for blocks matching the query.

        A single attempt is made; any failure is raised as UpstreamError.
        """
        params = self._build_params(query)
        directory_logger.info(f"Searching block catalog for {query.term!r} (page {query.page}, per_page {query.per_page})")

        try:
            session = await self._get_session()
            response = await session.get(self.catalog_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            directory_logger.error(f"Block catalog timed out: {e}")
            raise UpstreamError(f"The block catalog did not respond in time: {e}")
        except httpx.HTTPStatusError as e:
            directory_logger.error(f"Block catalog returned HTTP {e.response.status_code}")
            raise UpstreamError(
                f"The block catalog returned HTTP {e.response.status_code}",
                data={"upstream_status": e.response.status_code}
            )
        except httpx.HTTPError as e:
            directory_logger.error(f"Error reaching block catalog: {e}")
            raise UpstreamError(f"Could not reach the block catalog: {e}")
        except ValueError as e:
            directory_logger.error(f"Block catalog returned invalid JSON: {e}")
            raise UpstreamError("The block catalog returned an invalid response")

        return self._parse_response(data, query)

    def _parse_response(self, data: Any, query: CatalogQuery) -> CatalogSearchResult:
        """Turn the catalog payload into records plus pagination info."""
        if not isinstance(data, dict):
            raise UpstreamError("The block catalog returned an invalid response")

        if data.get("error"):
            directory_logger.error(f"Block catalog reported an error: {data['error']}")
            raise UpstreamError(str(data["error"]))

        plugins = data.get("plugins") or []
        if isinstance(plugins, dict):
            plugins = list(plugins.values())

        records = []
        for payload in plugins:
            try:
                records.append(RawCatalogRecord.from_payload(payload))
            except MalformedRecord as e:
                directory_logger.warning(f"Dropping catalog record: {e.message}")

        info = data.get("info") if isinstance(data.get("info"), dict) else {}
        return CatalogSearchResult(
            records=records,
            page=self._int_or(info.get("page"), query.page),
            pages=self._int_or(info.get("pages"), 1 if records else 0),
            results=self._int_or(info.get("results"), len(records))
        )

    def _int_or(self, value: Any, default: int) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default
