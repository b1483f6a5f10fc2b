"""Report feed adapters."""

from disaster_intel.adapters.feeds.filters import matches_tags
from disaster_intel.adapters.feeds.fixture_provider import FixtureReportProvider

__all__ = ["FixtureReportProvider", "matches_tags"]
