from core.audit import AuditLog
from core.state import DraftStore, MemorySlot


def test_audit_log_records_changes():
    log = AuditLog()
    log.record("/new/step1", "email", None, "a@example.com")
    assert log.entries[0].field == "email"
    assert log.entries[0].new_value == "a@example.com"
    d = log.as_dict()[0]
    assert d["source"] == "/new/step1"
    assert d["old"] is None
    assert d["timestamp"].endswith("+00:00")


def test_merge_records_only_changed_keys():
    log = AuditLog()
    store = DraftStore(MemorySlot(), audit=log)
    store.merge({"a": "1", "b": "2"}, source="/new/step1")
    store.merge({"a": "1", "b": "3"}, source="/new/step1")
    assert [(e.field, e.old_value, e.new_value) for e in log.entries] == [
        ("a", None, "1"),
        ("b", None, "2"),
        ("b", "2", "3"),
    ]


def test_record_merge_counts_and_filters_by_route():
    log = AuditLog()
    assert log.record_merge("/renewal/step2", {"rent": 45000}, {"rent": 45000, "supporter": "self"}) == 1
    log.record("/renewal/step3", "hasPartTimeJob", None, "no")
    assert len(log) == 2
    assert [e.field for e in log.for_source("/renewal/step2")] == ["supporter"]
