"""
Catalog Exceptions - file-level load failures.
==============================================
Raised by the ingestion path when a whole file cannot be read or parsed.
Record-level shape problems never raise; they degrade to absent fields.
"""

from __future__ import annotations


class CatalogLoadError(Exception):
    """Raised when a load call cannot complete."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        self.message = message or f"Failed to load catalog file: {path}"
        super().__init__(self.message)


class CatalogFileReadError(CatalogLoadError):
    """Raised when a matched file (or a glob root) cannot be read."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"Cannot read {path}: {reason}")


class CatalogParseError(CatalogLoadError):
    """Raised when a file is not valid JSON / JSON Lines."""

    def __init__(self, path: str, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        where = f"{path}:{line_number}" if line_number is not None else path
        super().__init__(path, f"Invalid JSON in {where}: {reason}")
