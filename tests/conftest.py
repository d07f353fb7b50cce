import pytest

from core import config
from core.audit import AuditLog
from core.i18n import Translator
from core.navigation import Navigator
from core.state import DraftStore, MemorySlot


@pytest.fixture(autouse=True)
def fast_config(tmp_path, monkeypatch):
    """No simulated latency and a throwaway data directory for every test."""
    monkeypatch.setattr(config, "SUBMIT_DELAY_SECONDS", 0)
    monkeypatch.setattr(config, "LOGIN_DELAY_SECONDS", 0)
    monkeypatch.setattr(config, "DATA_DIR", tmp_path / "data")
    monkeypatch.setattr(config, "DEFAULT_LOCALE", "ja")
    monkeypatch.setattr(config, "CLEAR_DRAFT_ON_COMPLETE", True)
    monkeypatch.setattr(config, "PDF_FONT_PATH", "")


@pytest.fixture
def audit():
    return AuditLog()


@pytest.fixture
def store(audit):
    return DraftStore(MemorySlot(), audit=audit)


@pytest.fixture
def nav():
    return Navigator({})


@pytest.fixture
def tr():
    return Translator("en")
