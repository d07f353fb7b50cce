"""Change log of draft merges, shown in the debug sidebar."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, List, Mapping


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuditEntry:
    source: str  # route that submitted the value
    field: str
    old_value: Any
    new_value: Any
    timestamp: datetime = field(default_factory=_now)


class AuditLog:
    """Append-only, in-memory; one entry per draft key whose value changed."""

    def __init__(self) -> None:
        self.entries: List[AuditEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[AuditEntry]:
        return iter(self.entries)

    def record(self, source: str, field: str, old_value: Any, new_value: Any) -> None:
        self.entries.append(AuditEntry(source, field, old_value, new_value))

    def record_merge(self, source: str, before: Mapping[str, Any], partial: Mapping[str, Any]) -> int:
        """Log every key of ``partial`` that differs from ``before``; return how many."""
        changed = [(k, before.get(k), v) for k, v in partial.items() if before.get(k) != v]
        for key, old, new in changed:
            self.record(source, key, old, new)
        return len(changed)

    def for_source(self, source: str) -> List[AuditEntry]:
        return [e for e in self.entries if e.source == source]

    def as_dict(self) -> List[dict]:
        rows = []
        for e in self.entries:
            row = asdict(e)
            row["old"] = row.pop("old_value")
            row["new"] = row.pop("new_value")
            row["timestamp"] = e.timestamp.isoformat()
            rows.append(row)
        return rows
