"""
Pytest configuration for Bill Tracker tests.

No test touches the user's real storage file: ledgers use an in-memory
store or a file under tmp_path.
"""

from datetime import datetime, timedelta, timezone

import pytest

from bill_tracker.audit import AuditLogger
from bill_tracker.config import get_settings
from bill_tracker.ledger import Ledger
from bill_tracker.services.storage import InMemoryStore


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.calls = []

    def _record(self, level):
        def log(event, **kwargs):
            self.calls.append((level, event, kwargs))
        return log

    def __getattr__(self, level):
        if level in {"debug", "info", "warning", "error"}:
            return self._record(level)
        raise AttributeError(level)

    def event_types(self, level=None):
        return [
            kwargs["event_type"]
            for call_level, _, kwargs in self.calls
            if level is None or call_level == level
        ]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; make every test read the environment fresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def ledger(store, clock, recording_logger):
    """An empty, loaded ledger over an in-memory store."""
    ledger = Ledger(
        store=store,
        audit_logger=AuditLogger(recording_logger),
        clock=clock,
    )
    ledger.load()
    return ledger
