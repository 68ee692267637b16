"""Resource Registry — in-memory CRUD container for records of one entity kind.

Invariants:
    - Ids are unique within a registry at all times
    - list() yields records in insertion order
    - The id field is immutable after create; update() ignores it in the payload
    - A failed operation leaves the registry unchanged (checks run before mutation)
    - Callers receive deep copies; mutation only through registry operations
    - All operations serialized by one RLock per registry

Design Decisions:
    - dict keyed by id over list scan: insertion-ordered with O(1) get/update/delete
    - Required fields and id strategy injected at construction: one class for every kind
    - Synchronous API: operations never suspend, so they are atomic on the event loop
"""

import copy
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, Mapping

from shuttle.core.domain_types import Record, ResourceKind
from shuttle.core.errors import (
    DuplicateRecordError,
    IdGenerationError,
    RecordValidationError,
    ResourceNotFoundError,
)
from shuttle.core.identifiers import IdGenerator, uuid_ids

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 5


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def is_empty(value: Any) -> bool:
    """None, blank strings, and empty collections count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _matches(record: Record, filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        if key not in record:
            return False
        actual = record[key]
        if actual != expected and str(actual) != str(expected):
            return False
    return True


class ResourceRegistry:
    """Records of one kind, keyed by their id field."""

    def __init__(
        self,
        kind: ResourceKind,
        required_fields: Iterable[str] = (),
        id_field: str = "id",
        id_generator: IdGenerator | None = None,
    ):
        self.kind = kind
        self.required_fields = tuple(required_fields)
        self.id_field = id_field
        self._generate_id = id_generator or uuid_ids()
        self._records: dict[str, Record] = {}
        self._lock = threading.RLock()

    # ─── Queries ────────────────────────────────────────────────

    def list(self, filters: Mapping[str, Any] | None = None) -> list[Record]:
        """All records matching every filter pair, in insertion order."""
        with self._lock:
            records = self._records.values()
            if filters:
                records = [r for r in records if _matches(r, filters)]
            return [copy.deepcopy(r) for r in records]

    def get(self, record_id: str) -> Record:
        with self._lock:
            return copy.deepcopy(self._require(record_id))

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return str(record_id) in self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(self.list())

    # ─── Mutations ──────────────────────────────────────────────

    def validate(self, fields: Mapping[str, Any]) -> None:
        """Raise RecordValidationError naming every missing required field."""
        missing = [f for f in self.required_fields if is_empty(fields.get(f))]
        if missing:
            raise RecordValidationError(missing)

    def create(self, fields: Mapping[str, Any]) -> Record:
        """Validate, assign an id if absent, append, return the new record."""
        self.validate(fields)
        with self._lock:
            supplied = fields.get(self.id_field)
            if is_empty(supplied):
                record_id = self._next_id()
            else:
                record_id = str(supplied)
                if record_id in self._records:
                    raise DuplicateRecordError(self.kind.label, record_id)

            record = copy.deepcopy(dict(fields))
            record[self.id_field] = record_id
            record.setdefault("createdAt", _now_iso())
            self._records[record_id] = record
            logger.debug(
                f"Created {self.kind.label} {record_id}",
                extra={"resource_kind": self.kind.value, "record_id": record_id},
            )
            return copy.deepcopy(record)

    def update(self, record_id: str, partial: Mapping[str, Any]) -> Record:
        """Shallow-merge partial onto the record and stamp updatedAt."""
        with self._lock:
            current = self._require(record_id)
            changes = {k: v for k, v in partial.items() if k != self.id_field}
            merged = {**current, **copy.deepcopy(changes), "updatedAt": _now_iso()}
            self._records[current[self.id_field]] = merged
            logger.debug(
                f"Updated {self.kind.label} {record_id}",
                extra={"resource_kind": self.kind.value, "record_id": str(record_id)},
            )
            return copy.deepcopy(merged)

    def delete(self, record_id: str) -> Record:
        """Remove and return the record."""
        with self._lock:
            self._require(record_id)
            removed = self._records.pop(str(record_id))
            logger.debug(
                f"Deleted {self.kind.label} {record_id}",
                extra={"resource_kind": self.kind.value, "record_id": str(record_id)},
            )
            return removed

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    # ─── Internals ──────────────────────────────────────────────

    def _require(self, record_id: str) -> Record:
        record = self._records.get(str(record_id))
        if record is None:
            raise ResourceNotFoundError(self.kind.label, record_id)
        return record

    def _next_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._generate_id()
            if candidate not in self._records:
                return candidate
            logger.warning(
                f"{self.kind.label} id collision on {candidate}, retrying",
                extra={"resource_kind": self.kind.value, "record_id": candidate},
            )
        raise IdGenerationError(self.kind.label, MAX_ID_ATTEMPTS)
