"""Shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from chatmemo.domain.memo_parser import MemoParser

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MockClock:
    """Clock frozen at the Unix epoch until moved with add()."""

    def __init__(self, start: datetime = EPOCH):
        self._now = start

    def add(self, delta: timedelta) -> None:
        self._now += delta

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def clock():
    c = MockClock()
    c.add(timedelta(hours=10))  # clock is now 1970-01-01 10:00:00 UTC
    return c


@pytest.fixture
def parser(clock):
    return MemoParser(clock=clock)
