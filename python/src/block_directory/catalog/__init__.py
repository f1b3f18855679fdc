"""
Block Catalog Module

Access to the remote block catalog and to the set of locally installed modules.

Components:
- client: remote catalog search client
- installed: local installation index
- models: catalog query and record models
"""

from .client import CatalogClient
from .installed import (
    FilesystemInstallationIndex,
    InMemoryInstallationIndex,
    InstallationIndex,
    RequestScopedIndex,
)
from .models import BlockDescriptor, CatalogQuery, CatalogSearchResult, RawCatalogRecord

__all__ = [
    "BlockDescriptor",
    "CatalogClient",
    "CatalogQuery",
    "CatalogSearchResult",
    "FilesystemInstallationIndex",
    "InMemoryInstallationIndex",
    "InstallationIndex",
    "RawCatalogRecord",
    "RequestScopedIndex"
]
