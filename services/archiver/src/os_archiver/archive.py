"""Archive loop: list, select, name and snapshot indices one at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .config import ArchiveSettings
from .errors import AnalysisError, CreationError
from .indices import list_indices, select_candidates
from .naming import snapshot_name
from .snapshots import SnapshotOutcome, create_snapshot

logger = logging.getLogger(__name__)


@dataclass
class ArchiveReport:
    """What happened to each candidate index during a run."""

    total: int = 0
    candidates: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def record(self, index: str, outcome: SnapshotOutcome) -> None:
        if outcome is SnapshotOutcome.CREATED:
            self.created.append(index)
        elif outcome is SnapshotOutcome.SKIPPED:
            self.skipped.append(index)
        else:
            self.failed.append(index)


def archive_index(client: Any, index: str, settings: ArchiveSettings) -> SnapshotOutcome:
    """Name and snapshot one index; per-index errors become ``FAILED``."""
    extra = {"index": index, "repo": settings.repo}
    try:
        name = snapshot_name(
            client,
            index,
            settings.analyze,
            timestamp_field=settings.timestamp_field,
        )
    except AnalysisError as exc:
        logger.error(
            "Error generating snapshot name for index %s: %s", index, exc, extra=extra
        )
        return SnapshotOutcome.FAILED

    extra["snapshot"] = name
    logger.info("Creating snapshot for index %s: %s", index, name, extra=extra)
    try:
        outcome = create_snapshot(client, settings.repo, index, name)
    except CreationError as exc:
        logger.error("Error creating snapshot for index %s: %s", index, exc, extra=extra)
        return SnapshotOutcome.FAILED

    if outcome is SnapshotOutcome.CREATED:
        logger.info("Snapshot created successfully: %s", name, extra=extra)
    return outcome


def run_archive(client: Any, settings: ArchiveSettings) -> ArchiveReport:
    """Archive every index matching the pattern except the newest ``bypass``.

    Listing failures propagate; per-index failures are logged and recorded
    in the returned report.
    """
    indices = list_indices(client, settings.pattern)
    report = ArchiveReport(total=len(indices))
    report.candidates = select_candidates(indices, settings.bypass)
    if not report.candidates:
        logger.info(
            "No indices to archive.",
            extra={"pattern": settings.pattern, "total": report.total},
        )
        return report

    for index in report.candidates:
        report.record(index, archive_index(client, index, settings))

    logger.info(
        "Archived %d of %d indices (created %d, skipped %d, failed %d).",
        len(report.created) + len(report.skipped),
        len(report.candidates),
        len(report.created),
        len(report.skipped),
        len(report.failed),
        extra={"pattern": settings.pattern, "repo": settings.repo},
    )
    return report
