import sys
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class DummyCat:
    def __init__(self, client: "DummyOpenSearch") -> None:
        self._client = client

    def indices(self, index: str, format: str):
        self._client.calls.append(("cat.indices", index))
        if isinstance(self._client.cat_response, Exception):
            raise self._client.cat_response
        return self._client.cat_response


class DummySnapshot:
    def __init__(self, client: "DummyOpenSearch") -> None:
        self._client = client

    def get(self, repository: str, snapshot: str):
        self._client.calls.append(("snapshot.get", repository, snapshot))
        return self._client.on_get(repository, snapshot)

    def create(self, repository: str, snapshot: str, body: dict[str, Any]):
        self._client.calls.append(("snapshot.create", repository, snapshot))
        self._client.created.append((repository, snapshot, body))
        return self._client.on_create(repository, snapshot, body)


class DummyOpenSearch:
    """In-memory stand-in exposing the client calls the archiver makes."""

    def __init__(
        self,
        indices: Optional[list[str]] = None,
        *,
        existing: Optional[set[str]] = None,
        ranges: Optional[dict[str, Any]] = None,
    ) -> None:
        self.cat_response: Any = [{"index": name} for name in indices or []]
        self.existing: set[str] = set(existing or ())
        self.ranges: dict[str, Any] = dict(ranges or {})
        self.calls: list[tuple] = []
        self.created: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False
        self.cat = DummyCat(self)
        self.snapshot = DummySnapshot(self)
        self.on_get: Callable[[str, str], Any] = self._default_get
        self.on_create: Callable[[str, str, dict[str, Any]], Any] = self._default_create

    def _default_get(self, repository: str, snapshot: str):
        from opensearchpy.exceptions import NotFoundError

        if snapshot in self.existing:
            return {"snapshots": [{"snapshot": snapshot, "state": "SUCCESS"}]}
        raise NotFoundError(
            404,
            "snapshot_missing_exception",
            {"error": {"type": "snapshot_missing_exception"}, "status": 404},
        )

    def _default_create(self, repository: str, snapshot: str, body: dict[str, Any]):
        self.existing.add(snapshot)
        return {"accepted": True}

    def search(self, index: str, body: dict[str, Any]):
        self.calls.append(("search", index))
        result = self.ranges[index]
        if isinstance(result, Exception):
            raise result
        return result

    def close(self) -> None:
        self.closed = True


def range_response(min_ms: Optional[float], max_ms: Optional[float]) -> dict[str, Any]:
    return {
        "took": 1,
        "hits": {"total": {"value": 0, "relation": "eq"}, "hits": []},
        "aggregations": {
            "min_time": {"value": min_ms},
            "max_time": {"value": max_ms},
        },
    }


@pytest.fixture
def dummy_client() -> Callable[..., DummyOpenSearch]:
    return DummyOpenSearch


@pytest.fixture
def make_range() -> Callable[[Optional[float], Optional[float]], dict[str, Any]]:
    return range_response
