"""
Run a mobile post bulk import from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import os

from app.connectors.base import BatchSource
from app.connectors.mobile_post_feed import JsonFileBatchSource
from app.repositories.mobile_post_repository import MobilePostRepository
from app.schemas.mobile_post import ImportReportResponse
from app.services.mobile_post_import_service import get_feed_source, get_mobile_post_import_service
from db.session import session_scope


def main() -> int:
    parser = argparse.ArgumentParser(description="Import mobile post rows into the directory.")
    parser.add_argument(
        "--file",
        dest="file",
        default=None,
        help="JSON file with the rows; the configured feed is used when omitted.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    source: BatchSource = JsonFileBatchSource(args.file) if args.file else get_feed_source()
    service = get_mobile_post_import_service()
    with session_scope() as db:
        report = service.run_source(source=source, store=MobilePostRepository(db))

    print(json.dumps(ImportReportResponse.from_report(report).model_dump(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
