"""Shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from disaster_intel.core import Engagement, Report


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_report():
    """Factory for reports with sensible defaults."""
    base = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

    def _make(
        report_id: str = "r1",
        content: str = "Road cleared, traffic moving",
        priority: str = "low",
        minutes_ago: int = 0,
        keywords: tuple[str, ...] = (),
    ) -> Report:
        return Report(
            id=report_id,
            user="tester",
            content=content,
            timestamp=base - timedelta(minutes=minutes_ago),
            priority=priority,
            location="Somewhere",
            keywords=keywords,
            platform="Twitter",
            verified=False,
            engagement=Engagement(likes=1, shares=2, replies=3),
        )

    return _make
