"""Typed views over the OpenSearch responses the archiver reads.

Each response shape is decoded into a small dataclass instead of being
indexed ad hoc. Any mismatch raises :class:`~os_archiver.errors.DecodeError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import DecodeError


@dataclass(frozen=True)
class CatIndexEntry:
    """One row of ``_cat/indices?format=json``."""

    index: str

    @classmethod
    def from_json(cls, row: Any) -> "CatIndexEntry":
        if not isinstance(row, dict):
            raise DecodeError(f"cat indices row is not an object: {row!r}")
        name = row.get("index")
        if not isinstance(name, str) or not name:
            raise DecodeError(f"cat indices row has no index name: {row!r}")
        return cls(index=name)


def decode_cat_indices(payload: Any) -> list[CatIndexEntry]:
    """Decode a ``_cat/indices`` JSON array."""
    if not isinstance(payload, list):
        raise DecodeError(
            f"cat indices response is not a list: {type(payload).__name__}"
        )
    return [CatIndexEntry.from_json(row) for row in payload]


def _metric_value(aggs: dict[str, Any], name: str) -> Optional[float]:
    agg = aggs.get(name)
    if not isinstance(agg, dict):
        raise DecodeError(f"aggregation {name!r} missing from response")
    value = agg.get("value")
    if value is None:
        return None
    # bool is an int subclass but never a valid metric
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"aggregation {name!r} value is not numeric: {value!r}")
    return float(value)


@dataclass(frozen=True)
class TimestampRange:
    """``min_time``/``max_time`` metric values in epoch milliseconds.

    Either value is ``None`` when the index holds no document with the field.
    """

    min_millis: Optional[float]
    max_millis: Optional[float]

    @classmethod
    def from_search(cls, payload: Any) -> "TimestampRange":
        if not isinstance(payload, dict):
            raise DecodeError("search response is not an object")
        aggs = payload.get("aggregations")
        if not isinstance(aggs, dict):
            raise DecodeError("search response has no aggregations")
        return cls(
            min_millis=_metric_value(aggs, "min_time"),
            max_millis=_metric_value(aggs, "max_time"),
        )

    @property
    def empty(self) -> bool:
        return self.min_millis is None or self.max_millis is None


@dataclass(frozen=True)
class SnapshotAccepted:
    """Body of a snapshot creation response.

    Without ``wait_for_completion`` the engine answers ``{"accepted": true}``;
    with it, a ``snapshot`` object is returned instead.
    """

    accepted: bool

    @classmethod
    def from_json(cls, payload: Any) -> "SnapshotAccepted":
        if not isinstance(payload, dict):
            raise DecodeError("snapshot create response is not an object")
        if "snapshot" in payload:
            return cls(accepted=True)
        return cls(accepted=bool(payload.get("accepted", False)))
