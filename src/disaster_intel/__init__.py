"""Structured, confidence-annotated signals from noisy disaster reports."""

from disaster_intel.core import (
    AnnotatedReport,
    ExtractionMethod,
    ExtractionResult,
    Report,
    TTLCache,
    VerificationResult,
    VerificationStatus,
    analyze_sentiment,
    detect_priority_alerts,
)
from disaster_intel.use_cases import ImageAuthenticator, LocationResolver, SocialMediaService

__version__ = "0.1.0"

__all__ = [
    "AnnotatedReport",
    "ExtractionMethod",
    "ExtractionResult",
    "ImageAuthenticator",
    "LocationResolver",
    "Report",
    "SocialMediaService",
    "TTLCache",
    "VerificationResult",
    "VerificationStatus",
    "analyze_sentiment",
    "detect_priority_alerts",
]
