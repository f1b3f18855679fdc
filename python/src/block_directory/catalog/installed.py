"""
Local Installation Index

Answers whether a catalog slug is already installed locally, and which module file
identifies the installation.
"""

import os
from collections.abc import Iterable, Mapping
from typing import Protocol

from ..config import directory_logger

HEADER_SCAN_BYTES = 8192
MODULE_HEADER = "Plugin Name:"


class InstallationIndex(Protocol):
    """Anything able to map a slug to its installed module file."""

    def find_module_for_slug(self, slug: str) -> str | None:
        ...


class FilesystemInstallationIndex:
    """Index over a modules directory laid out as ``<modules_dir>/<slug>/<file>``."""

    def __init__(self, modules_dir: str, file_suffix: str = ".php"):
        self.modules_dir = modules_dir
        self.file_suffix = file_suffix

    def list_module_files(self, slug: str) -> list[str]:
        """List module files under the slug directory, in sorted order."""
        if not slug or "/" in slug or "\\" in slug or slug in {".", ".."}:
            return []

        slug_dir = os.path.join(self.modules_dir, slug)
        if not os.path.isdir(slug_dir):
            return []

        files = []
        for entry in sorted(os.listdir(slug_dir)):
            path = os.path.join(slug_dir, entry)
            if entry.endswith(self.file_suffix) and os.path.isfile(path) and self._has_module_header(path):
                files.append(entry)
        return files

    def find_module_for_slug(self, slug: str) -> str | None:
        """Return ``<slug>/<file>`` for the first module file found, or None."""
        files = self.list_module_files(slug)
        if not files:
            return None
        if len(files) > 1:
            directory_logger.debug(f"Multiple module files for {slug}: {files}")
        return f"{slug}/{files[0]}"

    def _has_module_header(self, path: str) -> bool:
        try:
            with open(path, encoding="utf-8", errors="ignore") as f:
                head = f.read(HEADER_SCAN_BYTES)
        except OSError as e:
            directory_logger.warning(f"Could not read module file {path}: {e}")
            return False
        return MODULE_HEADER in head


class InMemoryInstallationIndex:
    """Index over a known mapping of slug to module file names."""

    def __init__(self, installed: Mapping[str, Iterable[str]] | None = None):
        self.installed = {slug: list(files) for slug, files in (installed or {}).items()}

    def find_module_for_slug(self, slug: str) -> str | None:
        files = self.installed.get(slug)
        if not files:
            return None
        return f"{slug}/{files[0]}"


class RequestScopedIndex:
    """Memoizes lookups against another index for the lifetime of one request."""

    def __init__(self, index: InstallationIndex):
        self.index = index
        self._cache: dict[str, str | None] = {}

    def find_module_for_slug(self, slug: str) -> str | None:
        if slug not in self._cache:
            self._cache[slug] = self.index.find_module_for_slug(slug)
        return self._cache[slug]
