"""
Block Directory Errors

Errors raised while serving a block directory search. Each error carries a machine
readable code, a caller-facing message and the HTTP status it maps to.
"""

from typing import Any


class BlockDirectoryError(Exception):
    """Base error for block directory operations."""

    code = "rest_block_directory_error"
    status_code = 500

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None,
                 data: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.data = data or {}

    def to_dict(self) -> dict[str, Any]:
        """Render the error body returned to API callers."""
        return {
            "code": self.code,
            "message": self.message,
            "data": {"status": self.status_code, **self.data}
        }


class Unauthorized(BlockDirectoryError):
    """The caller lacks the capabilities needed to browse the directory."""

    code = "rest_block_directory_cannot_view"
    status_code = 401


class UpstreamError(BlockDirectoryError):
    """The remote catalog query failed."""

    code = "block_directory_catalog_failed"
    status_code = 500


class MalformedRecord(BlockDirectoryError):
    """A single catalog record is missing required structure."""

    code = "block_directory_malformed_record"
    status_code = 500
