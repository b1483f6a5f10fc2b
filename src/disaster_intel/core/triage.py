"""Priority and sentiment triage over report batches.

Pure functions: nothing here touches the cache or the network, and input
reports are never modified.
"""

from typing import Iterable

from disaster_intel.core.entities import (
    AnnotatedReport,
    Priority,
    Report,
    normalize_priority,
    priority_rank,
)

URGENT_KEYWORDS = (
    "urgent",
    "sos",
    "emergency",
    "help",
    "trapped",
    "critical",
    "evacuation",
    "danger",
)

POSITIVE_KEYWORDS = ("help", "safe", "rescued", "volunteer", "support", "relief")
NEGATIVE_KEYWORDS = ("trapped", "danger", "emergency", "critical", "urgent", "flood", "fire")


def _count_hits(content: str, keywords: Iterable[str]) -> int:
    """Number of keywords present in content (each keyword counts once)."""
    return sum(1 for keyword in keywords if keyword in content)


def is_priority_alert(report: Report) -> bool:
    """Check if a report needs immediate attention."""
    content = report.content.lower()
    if any(keyword in content for keyword in URGENT_KEYWORDS):
        return True
    return normalize_priority(report.priority) == Priority.URGENT.value


def detect_priority_alerts(reports: Iterable[Report]) -> list[Report]:
    """Keep urgent reports, highest priority first, then most recent first.

    The sort is stable, so reports with equal priority and timestamp keep
    their input order.
    """
    alerts = [report for report in reports if is_priority_alert(report)]
    alerts.sort(key=lambda r: (priority_rank(r.priority), r.timestamp), reverse=True)
    return alerts


def score_sentiment(content: str) -> tuple[str, int]:
    """Return (label, score) for a piece of text.

    Score is positive keyword hits minus negative keyword hits.
    """
    text = content.lower()
    score = _count_hits(text, POSITIVE_KEYWORDS) - _count_hits(text, NEGATIVE_KEYWORDS)

    if score > 0:
        return "positive", score
    if score < 0:
        return "negative", score
    return "neutral", score


def analyze_sentiment(reports: Iterable[Report]) -> list[AnnotatedReport]:
    """Annotate every report with a sentiment label and score."""
    annotated = []
    for report in reports:
        sentiment, score = score_sentiment(report.content)
        annotated.append(AnnotatedReport.from_report(report, sentiment, score))
    return annotated
