"""
Catalog Loader - ingestion of dealer export files.
==================================================
Expands path patterns, parses JSON / JSON Lines exports and feeds every
record through the normalizer into the store.

Failure policy:
- a file that cannot be read or parsed aborts the whole load call;
  records from files processed earlier in the same call stay loaded
- a file is parsed completely before any of its records is added
- malformed records never abort; they normalize to absent fields
"""

from __future__ import annotations

import glob
import json
import logging
import os
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import json5

from dealer_catalog.core.exceptions import CatalogFileReadError, CatalogParseError
from dealer_catalog.core.models import ProductRecord
from dealer_catalog.services.catalog.normalizer import normalize_product, resolve_dealer_id
from dealer_catalog.services.catalog.store import CatalogStore

logger = logging.getLogger(__name__)

JSON_LINES_EXTENSIONS = frozenset({".jsonl", ".ndjson", ".jsonlines"})


@dataclass(frozen=True)
class ParsedFile:
    path: str
    dealer_id: str | None
    products: list[ProductRecord]


def decode_json_text(text: str) -> Any:
    """Decode strict JSON, falling back to JSON5 for commented fixtures.

    Exports are plain JSON and take the fast path; hand-annotated files with
    // or /* */ comments are handled by the json5 parser.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return json5.loads(text)


def is_json_lines(path: str | Path) -> bool:
    return Path(path).suffix.lower() in JSON_LINES_EXTENSIONS


def expand_patterns(patterns: Iterable[str]) -> list[str]:
    """Expand file paths / glob patterns into unique absolute regular files.

    Relative patterns resolve against the working directory. Matches are
    sorted within each pattern; first occurrence wins across patterns.
    """
    seen: dict[str, None] = {}
    for pattern in patterns:
        absolute = os.path.abspath(os.path.expanduser(pattern))
        try:
            matches = sorted(glob.glob(absolute, recursive=True))
        except OSError as e:
            raise CatalogFileReadError(pattern, str(e)) from e
        for match in matches:
            if os.path.isfile(match):
                seen.setdefault(os.path.abspath(match), None)
    return list(seen)


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogFileReadError(path, str(e)) from e


def _describe(error: Exception) -> str:
    if isinstance(error, RecursionError):
        return "nesting too deep"
    return str(error)


def parse_json_lines(path: str, content: str) -> list[Any]:
    records: list[Any] = []
    # split on \n only: JSON strings may contain U+2028
    for line_number, line in enumerate(content.split("\n"), start=1):
        line = line.removesuffix("\r")
        if not line.strip():
            continue
        try:
            records.append(decode_json_text(line))
        except (ValueError, RecursionError) as e:
            raise CatalogParseError(path, _describe(e), line_number=line_number) from e
    return records


def parse_json_document(path: str, content: str) -> list[Any]:
    try:
        data = decode_json_text(content)
    except (ValueError, RecursionError) as e:
        raise CatalogParseError(path, _describe(e)) from e
    return data if isinstance(data, list) else [data]


def read_raw_records(path: str) -> list[Any]:
    """Read one file and return its top-level raw records."""
    content = _read_text(path)
    if is_json_lines(path):
        return parse_json_lines(path, content)
    return parse_json_document(path, content)


class CatalogLoader:
    """Loads dealer export files into a CatalogStore."""

    def __init__(self, store: CatalogStore, *, max_workers: int = 4) -> None:
        self.store = store
        self.max_workers = max(1, max_workers)

    def _parse_file(
        self,
        path: str,
        dealer_id: str | None,
        infer_dealer_from_filename: bool,
    ) -> ParsedFile:
        resolved = resolve_dealer_id(path, dealer_id, infer_dealer_from_filename)
        raw_records = read_raw_records(path)
        products = [normalize_product(raw, resolved, path) for raw in raw_records]
        return ParsedFile(path=path, dealer_id=resolved, products=products)

    def load_files(
        self,
        patterns: Sequence[str],
        *,
        dealer_id: str | None = None,
        infer_dealer_from_filename: bool = True,
    ) -> int:
        """Load every file matched by `patterns`; return the number of records added.

        Files may be read in parallel, but records are appended in file order
        from this thread only.

        Raises:
            CatalogFileReadError: A matched file cannot be read
            CatalogParseError: A matched file is not valid JSON / JSON Lines
        """
        started = time.perf_counter()
        files = expand_patterns(patterns)
        if not files:
            logger.warning("[CATALOG:LOAD] No files matched %s", list(patterns))
            return 0

        loaded = 0
        executor = ThreadPoolExecutor(max_workers=min(self.max_workers, len(files)))
        try:
            parsed_files = executor.map(
                lambda path: self._parse_file(path, dealer_id, infer_dealer_from_filename),
                files,
            )
            for parsed in parsed_files:
                added = self.store.add_many(parsed.products)
                loaded += added
                logger.info(
                    "[CATALOG:LOAD] %s: %d records (dealer=%s)",
                    parsed.path,
                    added,
                    parsed.dealer_id or "-",
                    extra={"file": parsed.path, "dealer_id": parsed.dealer_id, "records": added},
                )
        except (CatalogFileReadError, CatalogParseError) as e:
            logger.error(
                "[CATALOG:LOAD] Load aborted after %d records: %s",
                loaded,
                e,
                extra={"file": e.path, "records": loaded},
            )
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "[CATALOG:LOAD] Loaded %d records from %d files in %dms",
            loaded,
            len(files),
            duration_ms,
            extra={"records": loaded, "files": len(files), "duration_ms": duration_ms},
        )
        return loaded
