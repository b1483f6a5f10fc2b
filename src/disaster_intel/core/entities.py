"""Core domain entities."""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class ExtractionMethod(str, Enum):
    """How a location answer was obtained."""

    NER_AND_PATTERNS = "NER+Patterns"
    PATTERNS_ONLY = "Patterns"
    FAILED = "Failed"


class VerificationStatus(str, Enum):
    """Terminal states of image verification."""

    INVALID = "invalid"
    BASIC_CHECK = "basic_check"
    ANALYZED = "analyzed"
    AUTHENTIC = "authentic"
    ERROR = "error"


class Priority(str, Enum):
    """Known report priorities."""

    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK: dict[str, int] = {
    Priority.URGENT.value: 3,
    Priority.HIGH.value: 2,
    Priority.MEDIUM.value: 1,
    Priority.LOW.value: 0,
}


def normalize_priority(priority: Any) -> str:
    """Lower-cased priority string; accepts Priority members or raw strings."""
    return str(getattr(priority, "value", priority)).lower()


def priority_rank(priority: Any) -> int:
    """Rank used for ordering; unknown priorities rank lowest."""
    return PRIORITY_RANK.get(normalize_priority(priority), 0)


def _check_confidence(confidence: float) -> None:
    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"Confidence must be within [0, 1], got {confidence}")


@dataclass(frozen=True)
class ExtractionResult:
    """Result of location extraction."""

    location: str
    confidence: float
    method: ExtractionMethod
    error: Optional[str] = None

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "location": self.location,
            "confidence": self.confidence,
            "method": self.method.value,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class VerificationResult:
    """Result of image verification."""

    status: VerificationStatus
    analysis: str
    confidence: float
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)
        # Cached results are shared between callers
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "analysis": self.analysis,
            "confidence": self.confidence,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class NamedEntity:
    """Entity returned by the named-entity service."""

    entity_group: str
    word: str
    score: float


@dataclass(frozen=True)
class ImageLabel:
    """Label returned by the image-classification service."""

    label: str
    score: float


@dataclass(frozen=True)
class ProbeResult:
    """Headers read by a header-only request."""

    content_type: Optional[str]
    content_length: Optional[str]


@dataclass(frozen=True)
class Engagement:
    """Engagement counters of a social media report."""

    likes: int = 0
    shares: int = 0
    replies: int = 0


@dataclass(frozen=True)
class Report:
    """Social media report about a disaster."""

    id: str
    user: str
    content: str
    timestamp: datetime
    priority: str
    location: str
    keywords: tuple[str, ...] = ()
    platform: str = "Twitter"
    verified: bool = False
    engagement: Engagement = field(default_factory=Engagement)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Report id cannot be empty")
        # Naive timestamps are taken as UTC so batches always sort
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["keywords"] = list(self.keywords)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Report":
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))

        return cls(
            id=data["id"],
            user=data.get("user", ""),
            content=data.get("content", ""),
            timestamp=timestamp,
            priority=data.get("priority", Priority.LOW.value),
            location=data.get("location", ""),
            keywords=tuple(data.get("keywords", ())),
            platform=data.get("platform", "Twitter"),
            verified=bool(data.get("verified", False)),
            engagement=Engagement(**data.get("engagement", {})),
        )


@dataclass(frozen=True)
class AnnotatedReport(Report):
    """Report carrying a sentiment annotation."""

    sentiment: str = "neutral"
    sentiment_score: int = 0

    @classmethod
    def from_report(cls, report: Report, sentiment: str, sentiment_score: int) -> "AnnotatedReport":
        """Build a new record with every original field plus the annotation."""
        original = {f.name: getattr(report, f.name) for f in fields(Report)}
        return cls(**original, sentiment=sentiment, sentiment_score=sentiment_score)
