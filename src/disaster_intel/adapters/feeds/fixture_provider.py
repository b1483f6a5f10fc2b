"""Fixture source of social media reports."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from disaster_intel.adapters.feeds.filters import matches_tags
from disaster_intel.core import Engagement, Report, ReportProvider

# (user, content, minutes ago, priority, location, keywords, verified, likes, shares, replies)
_FIXTURES = (
    (
        "citizen_reporter",
        "#FloodAlert Water levels rising rapidly in downtown area. Multiple streets flooded. "
        "Avoid 5th Avenue between 42nd and 50th Street. Emergency services on scene.",
        15, "urgent", "Manhattan, NYC",
        ("flood", "emergency", "water", "streets"), True, 234, 89, 45,
    ),
    (
        "nyc_emergency",
        "🚨 EMERGENCY ALERT: Evacuation order issued for Lower East Side residents. "
        "Proceed to designated shelters immediately. Transportation available at community centers.",
        25, "urgent", "Lower East Side, NYC",
        ("evacuation", "emergency", "shelter", "transportation"), True, 567, 234, 78,
    ),
    (
        "volunteer_helper",
        "Setting up emergency food distribution at Central Park. Hot meals and water available. "
        "Volunteers needed! #DisasterRelief #NYC",
        45, "medium", "Central Park, NYC",
        ("food", "volunteers", "relief", "help"), False, 123, 67, 23,
    ),
    (
        "medical_team_nyc",
        "Mobile medical unit deployed to Brooklyn Bridge area. First aid and emergency medical "
        "care available. Follow safety protocols when approaching.",
        35, "high", "Brooklyn Bridge, NYC",
        ("medical", "first aid", "emergency", "safety"), True, 189, 45, 12,
    ),
    (
        "local_resident",
        "Power outage affecting entire block on 8th Avenue. Traffic lights down. "
        "Please drive carefully and check on elderly neighbors.",
        55, "medium", "8th Avenue, NYC",
        ("power", "outage", "traffic", "safety"), False, 67, 23, 8,
    ),
    (
        "fire_dept_nyc",
        "🔥 Structure fire contained at 123 Main St. Area secured. Residents from adjacent "
        "buildings evacuated as precaution. Air quality monitoring in progress.",
        65, "high", "Main Street, NYC",
        ("fire", "evacuation", "air quality", "safety"), True, 345, 123, 56,
    ),
    (
        "community_leader",
        "Community center at 456 Oak St open as temporary shelter. Blankets, food, and phone "
        "charging stations available. Pet-friendly facility.",
        75, "medium", "Oak Street, NYC",
        ("shelter", "community", "pets", "charging"), False, 156, 78, 34,
    ),
    (
        "transport_update",
        "Subway lines 4, 5, 6 suspended due to flooding. Bus service rerouted. Check MTA app "
        "for real-time updates. Free rides to evacuation centers.",
        85, "high", "NYC Transit System",
        ("subway", "bus", "transport", "evacuation"), True, 445, 167, 89,
    ),
)


class FixtureReportProvider(ReportProvider):
    """Canned reports standing in for a social media API."""

    name = "Fixture feed"

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def fetch_reports(self, disaster_id: str, tags: Sequence[str]) -> list[Report]:
        """Build the fixture batch for a disaster and narrow it by tags."""
        return [report for report in self.build_reports(disaster_id) if matches_tags(report, tags)]

    def build_reports(self, disaster_id: str) -> list[Report]:
        now = self._clock()
        reports = []

        for index, fixture in enumerate(_FIXTURES, 1):
            user, content, minutes_ago, priority, location, keywords, verified, *counts = fixture
            likes, shares, replies = counts
            reports.append(
                Report(
                    id=f"tweet_{disaster_id}_{index}",
                    user=user,
                    content=content,
                    timestamp=now - timedelta(minutes=minutes_ago),
                    priority=priority,
                    location=location,
                    keywords=keywords,
                    platform="Twitter",
                    verified=verified,
                    engagement=Engagement(likes=likes, shares=shares, replies=replies),
                )
            )

        return reports
