import json
import logging

import pytest

from core import config
from core.state import DraftStore, FileSlot, MemorySlot


class BrokenSlot(MemorySlot):
    def write(self, payload):
        raise OSError("disk full")


def test_file_slot_uses_storage_key(tmp_path):
    slot = FileSlot(data_dir=tmp_path)
    assert slot.path == tmp_path / "visa-form-data.json"


def test_file_slot_defaults_to_configured_dir():
    assert FileSlot().path.parent == config.DATA_DIR


def test_load_empty_when_nothing_persisted(tmp_path):
    store = DraftStore(FileSlot(data_dir=tmp_path))
    assert store.load() == {}


def test_merge_persists_and_reloads(tmp_path):
    store = DraftStore(FileSlot(data_dir=tmp_path))
    store.merge({"nameRomaji": "Tran Thi B", "totalHours": 120})
    data = json.loads((tmp_path / "visa-form-data.json").read_text(encoding="utf-8"))
    assert data == {"nameRomaji": "Tran Thi B", "totalHours": 120}
    again = DraftStore(FileSlot(data_dir=tmp_path))
    assert again.load() == {"nameRomaji": "Tran Thi B", "totalHours": 120}


def test_merge_is_shallow(store):
    store.merge({"a": "1", "emergencyContact": {"name": "X", "relation": "Y", "phone": "1"}})
    store.merge({"b": "2", "emergencyContact": {"name": "Z", "relation": "", "phone": ""}})
    draft = store.load()
    assert draft["a"] == "1"
    assert draft["b"] == "2"
    assert draft["emergencyContact"] == {"name": "Z", "relation": "", "phone": ""}


def test_load_returns_copy(store):
    store.merge({"father": {"name": "A"}})
    draft = store.load()
    draft["father"]["name"] = "changed"
    draft["extra"] = True
    assert store.load() == {"father": {"name": "A"}}


def test_malformed_payload_treated_as_empty(caplog):
    slot = MemorySlot("{not json")
    with caplog.at_level(logging.WARNING, logger="core.state"):
        store = DraftStore(slot)
        assert store.load() == {}
    assert "Failed to parse" in caplog.text


def test_non_object_payload_treated_as_empty():
    store = DraftStore(MemorySlot(json.dumps(["a", "b"])))
    assert store.load() == {}


def test_merge_after_malformed_payload_overwrites_it():
    slot = MemorySlot("garbage")
    store = DraftStore(slot)
    store.merge({"email": "a@example.com"})
    assert json.loads(slot.payload) == {"email": "a@example.com"}


def test_write_errors_propagate():
    store = DraftStore(BrokenSlot())
    with pytest.raises(OSError):
        store.merge({"a": "1"})
    assert store.load() == {}


def test_non_serializable_values_rejected(store):
    with pytest.raises(TypeError):
        store.merge({"handle": object()})


def test_unicode_written_as_is(tmp_path):
    store = DraftStore(FileSlot(data_dir=tmp_path))
    store.merge({"nameNative": "阮文安"})
    assert "阮文安" in (tmp_path / "visa-form-data.json").read_text(encoding="utf-8")


def test_clear_removes_persisted_draft(tmp_path):
    store = DraftStore(FileSlot(data_dir=tmp_path))
    store.merge({"a": "1"})
    store.clear()
    assert not (tmp_path / "visa-form-data.json").exists()
    assert store.load() == {}
