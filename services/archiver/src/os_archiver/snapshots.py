"""Deduplicated snapshot creation."""

from __future__ import annotations

import enum
import logging
from typing import Any

from opensearchpy.exceptions import NotFoundError, OpenSearchException, TransportError

from .errors import CreationError, DecodeError, ExistenceCheckError
from .schemas import SnapshotAccepted

logger = logging.getLogger(__name__)

# Also raised for malformed names; only a duplicate when the reason says so.
INVALID_SNAPSHOT_NAME = "invalid_snapshot_name_exception"
SNAPSHOT_NAME_IN_USE = "snapshot_name_already_in_use_exception"


class SnapshotOutcome(str, enum.Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


def _lookup_snapshot(client: Any, repo: str, snapshot: str) -> bool:
    try:
        client.snapshot.get(repository=repo, snapshot=snapshot)
    except NotFoundError:
        return False
    except OpenSearchException as exc:
        raise ExistenceCheckError(
            f"lookup of snapshot {snapshot} in {repo} failed: {exc}"
        ) from exc
    return True


def snapshot_exists(client: Any, repo: str, snapshot: str) -> bool:
    """Return ``True`` when ``snapshot`` is already present in ``repo``.

    A failed lookup is logged and reported as absent so archival is not
    blocked; a duplicate is then caught by :func:`create_snapshot`.
    """
    try:
        return _lookup_snapshot(client, repo, snapshot)
    except ExistenceCheckError as exc:
        logger.warning(
            "Error checking for snapshot %s: %s",
            snapshot,
            exc,
            extra={"snapshot": snapshot, "repo": repo},
        )
        return False


def _is_duplicate(exc: TransportError) -> bool:
    if exc.status_code not in (400, 409):
        return False
    if exc.error == SNAPSHOT_NAME_IN_USE:
        return True
    return exc.error == INVALID_SNAPSHOT_NAME and "already exists" in str(exc.info)


def create_snapshot(client: Any, repo: str, index: str, snapshot: str) -> SnapshotOutcome:
    """Snapshot ``index`` alone into ``repo`` as ``snapshot`` unless present.

    Returns :attr:`SnapshotOutcome.SKIPPED` when the snapshot already exists
    and :attr:`SnapshotOutcome.CREATED` once the engine accepted the request.
    Raises :class:`CreationError` on any other failure.
    """
    if snapshot_exists(client, repo, snapshot):
        logger.info(
            "Snapshot %s already exists. Skipping creation.",
            snapshot,
            extra={"index": index, "snapshot": snapshot, "repo": repo},
        )
        return SnapshotOutcome.SKIPPED

    body = {"indices": index, "include_global_state": False}
    try:
        payload = client.snapshot.create(repository=repo, snapshot=snapshot, body=body)
    except TransportError as exc:
        if _is_duplicate(exc):
            logger.info(
                "Snapshot %s was rejected as a duplicate. Skipping creation.",
                snapshot,
                extra={"index": index, "snapshot": snapshot, "repo": repo},
            )
            return SnapshotOutcome.SKIPPED
        raise CreationError(
            f"failed to create snapshot {snapshot}: status {exc.status_code}: {exc.error}",
            index=index,
        ) from exc
    except OpenSearchException as exc:
        raise CreationError(
            f"failed to create snapshot {snapshot}: {exc}", index=index
        ) from exc

    try:
        accepted = SnapshotAccepted.from_json(payload).accepted
    except DecodeError as exc:
        raise CreationError(
            f"unexpected response creating snapshot {snapshot}: {exc}", index=index
        ) from exc
    if not accepted:
        raise CreationError(f"snapshot {snapshot} was not accepted", index=index)
    return SnapshotOutcome.CREATED
