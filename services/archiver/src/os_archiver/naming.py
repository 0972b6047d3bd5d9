"""Snapshot naming, optionally from the timestamp range of an index."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from opensearchpy.exceptions import OpenSearchException

from .config import DEFAULT_TIMESTAMP_FIELD
from .errors import AnalysisError, DecodeError
from .schemas import TimestampRange

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d-%H%M"


def build_range_query(field: str) -> dict[str, Any]:
    """Zero-hit search body returning the min and max of ``field``."""
    return {
        "size": 0,
        "aggs": {
            "min_time": {"min": {"field": field}},
            "max_time": {"max": {"field": field}},
        },
    }


def format_epoch_millis(value: float) -> str:
    """Format epoch milliseconds as ``YYYYMMDD-HHMM`` in UTC.

    Sub-second precision is truncated, never rounded.
    """
    seconds = math.trunc(value / 1000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)


def analyze_timestamps(
    client: Any, index: str, *, timestamp_field: str = DEFAULT_TIMESTAMP_FIELD
) -> tuple[str, str]:
    """Return the formatted oldest and newest ``timestamp_field`` of ``index``."""
    try:
        payload = client.search(index=index, body=build_range_query(timestamp_field))
    except OpenSearchException as exc:
        raise AnalysisError(
            f"timestamp aggregation on {index} failed: {exc}", index=index
        ) from exc

    try:
        found = TimestampRange.from_search(payload)
    except DecodeError as exc:
        raise AnalysisError(
            f"unexpected aggregation response for {index}: {exc}", index=index
        ) from exc

    if found.empty:
        raise AnalysisError(
            f"index {index} has no documents with field {timestamp_field!r}",
            index=index,
        )
    try:
        return (
            format_epoch_millis(found.min_millis),
            format_epoch_millis(found.max_millis),
        )
    except (OverflowError, OSError, ValueError) as exc:
        raise AnalysisError(
            f"timestamp range of {index} is out of range: "
            f"{found.min_millis!r}..{found.max_millis!r}",
            index=index,
        ) from exc


def snapshot_name(
    client: Any,
    index: str,
    analyze: bool,
    *,
    timestamp_field: str = DEFAULT_TIMESTAMP_FIELD,
) -> str:
    """Return the snapshot name for ``index``.

    Without analysis the name is the index name itself; with it the
    formatted timestamp range is appended as ``index.min.max``.
    """
    if not analyze:
        return index
    min_ts, max_ts = analyze_timestamps(client, index, timestamp_field=timestamp_field)
    return f"{index}.{min_ts}.{max_ts}"
