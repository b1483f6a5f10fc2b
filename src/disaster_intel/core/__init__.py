"""Core domain layer."""

from disaster_intel.core.cache import CacheEntry, TTLCache
from disaster_intel.core.entities import (
    AnnotatedReport,
    Engagement,
    ExtractionMethod,
    ExtractionResult,
    ImageLabel,
    NamedEntity,
    Priority,
    ProbeResult,
    Report,
    VerificationResult,
    VerificationStatus,
    priority_rank,
)
from disaster_intel.core.errors import (
    ConfigurationGap,
    DisasterIntelError,
    UpstreamError,
    UpstreamFailure,
    UpstreamTimeout,
    ValidationError,
)
from disaster_intel.core.interfaces import (
    EntityExtractor,
    ImageClassifier,
    ImageProbe,
    LocationStrategy,
    ReportProvider,
)
from disaster_intel.core.triage import analyze_sentiment, detect_priority_alerts

__all__ = [
    "AnnotatedReport",
    "CacheEntry",
    "ConfigurationGap",
    "DisasterIntelError",
    "Engagement",
    "EntityExtractor",
    "ExtractionMethod",
    "ExtractionResult",
    "ImageClassifier",
    "ImageLabel",
    "ImageProbe",
    "LocationStrategy",
    "NamedEntity",
    "Priority",
    "ProbeResult",
    "Report",
    "ReportProvider",
    "TTLCache",
    "UpstreamError",
    "UpstreamFailure",
    "UpstreamTimeout",
    "ValidationError",
    "VerificationResult",
    "VerificationStatus",
    "analyze_sentiment",
    "detect_priority_alerts",
    "priority_rank",
]
