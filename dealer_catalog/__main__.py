"""
Command-line access to the dealer catalog.

Usage:
  python -m dealer_catalog summary [paths ...]
  python -m dealer_catalog search [paths ...] --query drill --dc 10 --region US
  python -m dealer_catalog dealers [paths ...]
  python -m dealer_catalog files [paths ...]

Paths may be glob patterns. Without paths, PRELOAD_GLOBS is used.
Results are printed to stdout as JSON; logs go to stderr.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from dealer_catalog.conf.config import get_settings
from dealer_catalog.core.exceptions import CatalogLoadError
from dealer_catalog.core.logging import get_logger, setup_logging
from dealer_catalog.core.validation import ValidationError
from dealer_catalog.services.catalog.service import CatalogService

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dealer_catalog", description=__doc__.split("\n\n")[0].strip())
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_load_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("paths", nargs="*", help="Files or glob patterns to load")
        p.add_argument("--dealer-id", default=None, help="Dealer id for every loaded record")
        p.add_argument(
            "--no-infer-dealer",
            action="store_true",
            help="Do not infer dealer id from 'products-<dealer>-*' file names",
        )

    summary = sub.add_parser("summary", help="Catalog totals by dealer, status and DC")
    add_load_args(summary)

    dealers = sub.add_parser("dealers", help="List loaded dealers with their summaries")
    add_load_args(dealers)

    files = sub.add_parser("files", help="List loaded files grouped by dealer")
    add_load_args(files)

    search = sub.add_parser("search", help="Search products")
    add_load_args(search)
    search.add_argument("--query", "-q", default=None)
    search.add_argument("--dealer", default=None, help="Filter by dealer id")
    search.add_argument("--sku", default=None)
    search.add_argument("--mpn", default=None)
    search.add_argument("--upc", default=None)
    search.add_argument("--status", default=None)
    search.add_argument("--dc", default=None, help="Distribution center code")
    search.add_argument("--region", default=None, help="Region code, e.g. US or CA")
    search.add_argument("--limit", type=int, default=None)
    search.add_argument("--offset", type=int, default=0)

    return parser


def run(args: argparse.Namespace, service: CatalogService) -> Any:
    if args.paths:
        service.load_files(
            args.paths,
            dealer_id=args.dealer_id,
            infer_dealer_from_filename=not args.no_infer_dealer,
        )
    else:
        service.preload()

    if args.command == "summary":
        return service.get_catalog_summary().to_dict()
    if args.command == "dealers":
        return [service.get_dealer_summary(dealer).to_dict() for dealer in service.list_dealers()]
    if args.command == "files":
        return service.list_loaded_files()

    criteria = {
        "dealer_id": args.dealer,
        "query": args.query,
        "sku": args.sku,
        "mpn": args.mpn,
        "upc": args.upc,
        "status": args.status,
        "dc_code": args.dc,
        "region": args.region,
    }
    return service.search(criteria, offset=args.offset, limit=args.limit).to_dict()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        level=args.log_level or settings.LOG_LEVEL,
        json_format=args.json_logs or settings.LOG_JSON,
    )

    service = CatalogService(settings)
    try:
        result = run(args, service)
    except (CatalogLoadError, ValidationError) as e:
        logger.error("%s", e)
        return 1

    json.dump(result, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
