"""Draft persistence.

The in-progress application lives in a single durable slot holding a JSON
object. Pages never share mutable state directly: they read a copy through
:meth:`DraftStore.load` and write back through :meth:`DraftStore.merge`.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from core import config
from core.audit import AuditLog
from visa_intake.models import Draft

logger = logging.getLogger(__name__)


class MemorySlot:
    """Durable slot kept in process memory (tests, persistence disabled)."""

    def __init__(self, payload: Optional[str] = None) -> None:
        self.payload = payload

    def read(self) -> Optional[str]:
        return self.payload

    def write(self, payload: str) -> None:
        self.payload = payload

    def delete(self) -> None:
        self.payload = None


class FileSlot:
    """Durable slot backed by ``<data_dir>/<key>.json``."""

    def __init__(self, key: str = config.DRAFT_KEY, data_dir: Optional[Path] = None) -> None:
        self.key = key
        self.path = Path(data_dir or config.DATA_DIR) / f"{key}.json"

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")

    def delete(self) -> None:
        if self.path.exists():
            self.path.unlink()


def _serializable(value: Any) -> bool:
    return value is None or isinstance(value, (int, float, str, bool, list, dict))


class DraftStore:
    """Holds the in-progress application and persists every change."""

    def __init__(self, slot, audit: Optional[AuditLog] = None) -> None:
        self.slot = slot
        self.audit = audit
        self._draft: Draft = self._read()

    def _read(self) -> Draft:
        raw = self.slot.read()
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Failed to parse persisted draft; starting empty")
            return {}
        if not isinstance(data, dict):
            logger.warning("Persisted draft is not an object; starting empty")
            return {}
        return data

    def load(self) -> Draft:
        """Return a copy of the persisted draft (empty if missing or malformed)."""
        self._draft = self._read()
        return json.loads(json.dumps(self._draft))

    def get(self, key: str, default: Any = None) -> Any:
        return self._draft.get(key, default)

    def merge(self, partial: Mapping[str, Any], source: str = "") -> None:
        """Shallow-merge ``partial`` into the draft and write it out immediately.

        Storage errors propagate to the caller.
        """
        bad = [k for k, v in partial.items() if not _serializable(v)]
        if bad:
            raise TypeError(f"Draft values must be JSON serializable: {', '.join(bad)}")
        merged = {**self._draft, **partial}
        self.slot.write(json.dumps(merged, ensure_ascii=False))
        if self.audit is not None:
            self.audit.record_merge(source, self._draft, partial)
        self._draft = merged
        logger.debug("Draft updated from %s: %s", source or "-", ", ".join(partial))

    def clear(self) -> None:
        """Drop the persisted draft."""
        self.slot.delete()
        self._draft = {}
