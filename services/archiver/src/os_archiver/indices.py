"""Listing and ordering of the indices to archive."""

from __future__ import annotations

import logging
import string
from typing import Any, Sequence

from opensearchpy.exceptions import ConnectionError as OSConnectionError
from opensearchpy.exceptions import NotFoundError, OpenSearchException, TransportError

from .errors import ArchiveConnectionError, DecodeError, QueryError
from .schemas import decode_cat_indices

logger = logging.getLogger(__name__)


def extract_index_number(index: str) -> int:
    """Return the integer value of the trailing ASCII digit run of ``index``.

    ``graylog_42`` gives ``42``; a name without trailing digits gives ``0``.
    """
    stem = index.rstrip(string.digits)
    suffix = index[len(stem):]
    return int(suffix) if suffix else 0


def sort_indices(indices: Sequence[str]) -> list[str]:
    """Order ``indices`` by numeric suffix; equal suffixes keep their order."""
    return sorted(indices, key=extract_index_number)


def list_indices(client: Any, pattern: str) -> list[str]:
    """Return the names of indices matching ``pattern``, oldest first."""
    try:
        payload = client.cat.indices(index=pattern, format="json")
    except NotFoundError:
        logger.info("No index matches pattern %s", pattern, extra={"pattern": pattern})
        return []
    except OSConnectionError as exc:
        raise ArchiveConnectionError(f"cannot reach OpenSearch: {exc}") from exc
    except TransportError as exc:
        raise QueryError(
            f"listing indices for {pattern!r} failed with status "
            f"{exc.status_code}: {exc.error}"
        ) from exc
    except OpenSearchException as exc:
        raise DecodeError(
            f"unreadable response listing indices for {pattern!r}: {exc}"
        ) from exc

    names = [entry.index for entry in decode_cat_indices(payload)]
    return sort_indices(names)


def select_candidates(indices: Sequence[str], bypass: int) -> list[str]:
    """Drop the ``bypass`` newest entries of an already sorted list."""
    if bypass < 0:
        raise ValueError("bypass must be >= 0")
    if len(indices) <= bypass:
        return []
    return list(indices[: len(indices) - bypass])
