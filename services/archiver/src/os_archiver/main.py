"""Snapshot old OpenSearch indices into a snapshot repository."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .archive import run_archive
from .client import connect_opensearch
from .config import DEFAULT_TIMESTAMP_FIELD, ArchiveSettings
from .errors import ArchiveConnectionError, ConfigError, QueryError
from .logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2
EXIT_PARTIAL = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="os-archiver", description=__doc__)
    parser.add_argument("--pattern", help="indices pattern (e.g. 'graylog_*')")
    parser.add_argument("--url", help="OpenSearch URL")
    parser.add_argument(
        "--bypass", type=int, help="number of latest indices to leave alone"
    )
    parser.add_argument("--repo", help="snapshot repository name in OpenSearch")
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="append the min/max document timestamps to snapshot names",
    )
    parser.add_argument(
        "--timestamp-field",
        default=DEFAULT_TIMESTAMP_FIELD,
        help="field analysed with --analyze (default: %(default)s)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run one archival pass and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = ArchiveSettings.from_args(args)
    except ConfigError as exc:
        parser.error(f"{exc}. Use --help for usage instructions.")

    setup_logging()
    client = connect_opensearch(settings.url)
    try:
        report = run_archive(client, settings)
    except (ArchiveConnectionError, QueryError) as exc:
        logger.error("Error fetching indices: %s", exc, extra={"pattern": settings.pattern})
        return EXIT_FATAL
    finally:
        client.close()

    return EXIT_OK if report.ok else EXIT_PARTIAL


if __name__ == "__main__":  # pragma: no cover - script entry
    sys.exit(main())
