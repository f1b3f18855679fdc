from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from block_directory.catalog.client import CatalogClient
from block_directory.catalog.installed import InMemoryInstallationIndex
from block_directory.config import DirectorySettings
from block_directory.directory.permissions import CallerContext
from block_directory.directory.service import BlockDirectoryService

CATALOG_URL = "https://catalog.test/plugins/info/1.2/"
FIXED_NOW = datetime(2020, 1, 4, tzinfo=timezone.utc)


def make_plugin(slug: str, **overrides: Any) -> dict[str, Any]:
    """A catalog plugin payload shaped like the real catalog's."""
    plugin = {
        "slug": slug,
        "name": f"{slug.title()} Plugin",
        "author": f"<a href='https://profiles.test/{slug}'>Jane Doe</a>",
        "description": f"A block called {slug}.",
        "blocks": [{"name": f"{slug}/{slug}", "title": f"{slug.title()} Block"}],
        "rating": 80,
        "num_ratings": "12",
        "active_installs": 1000,
        "author_block_rating": 90,
        "author_block_count": "3",
        "icons": {"1x": f"https://ps.w.org/{slug}/assets/icon-128x128.png"},
        "block_assets": ["/block.js", "/block.css"],
        "last_updated": "2020-01-01 00:00:00",
        "block_icons": {},
    }
    plugin.update(overrides)
    return plugin


class FakeCatalog:
    """Records catalog requests and replies with a canned payload."""

    def __init__(self, plugins: list[dict[str, Any]] | None = None, status_code: int = 200,
                 payload: Any = None):
        self.plugins = plugins or []
        self.status_code = status_code
        self.payload = payload
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.payload is not None:
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(
            self.status_code,
            json={
                "info": {"page": 1, "pages": 1, "results": len(self.plugins)},
                "plugins": self.plugins,
            },
        )

    def client(self) -> CatalogClient:
        session = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return CatalogClient(CATALOG_URL, timeout=5.0, session=session)


@pytest.fixture
def settings() -> DirectorySettings:
    return DirectorySettings(catalog_url=CATALOG_URL, rest_base="https://site.test")


@pytest.fixture
def admin() -> CallerContext:
    return CallerContext(user_id="1", capabilities=frozenset({"install_plugins", "activate_plugins"}))


@pytest.fixture
def make_service(settings):
    def _make(catalog: FakeCatalog, installed: dict[str, list[str]] | None = None,
              overrides: DirectorySettings | None = None) -> BlockDirectoryService:
        return BlockDirectoryService(
            catalog_client=catalog.client(),
            installation_index=InMemoryInstallationIndex(installed or {}),
            settings=overrides or settings,
            clock=lambda: FIXED_NOW,
        )

    return _make
