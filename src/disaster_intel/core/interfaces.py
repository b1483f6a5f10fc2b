"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from disaster_intel.core.entities import (
    ExtractionMethod,
    ImageLabel,
    NamedEntity,
    ProbeResult,
    Report,
)


class EntityExtractor(ABC):
    """Interface for a named-entity recognition service."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether a credential is available for this service."""

    @abstractmethod
    async def extract_entities(self, text: str) -> list[NamedEntity]:
        """Return entities detected in the text, in service order."""
        pass


class ImageClassifier(ABC):
    """Interface for an image-classification service."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether a credential is available for this service."""

    @abstractmethod
    async def classify_image(self, data: bytes) -> list[ImageLabel]:
        """Return labels ranked by score, highest first."""
        pass


class ImageProbe(ABC):
    """Interface for plain HTTP access to image URLs."""

    @abstractmethod
    async def fetch_image(self, url: str) -> bytes:
        """Download the image body."""
        pass

    @abstractmethod
    async def head(self, url: str) -> ProbeResult:
        """Read content headers without downloading the body."""
        pass


class LocationStrategy(ABC):
    """One step of the location fallback chain."""

    name: str = "strategy"
    method: ExtractionMethod = ExtractionMethod.PATTERNS_ONLY

    def is_available(self) -> bool:
        """Unavailable strategies are skipped without counting as failures."""
        return True

    @abstractmethod
    async def resolve(self, text: str) -> Optional[str]:
        """Return a location, or None when this strategy has no answer."""
        pass


class ReportProvider(ABC):
    """Interface for fetching social media reports."""

    @abstractmethod
    async def fetch_reports(self, disaster_id: str, tags: Sequence[str]) -> list[Report]:
        """Fetch reports for a disaster, narrowed by tags."""
        pass
