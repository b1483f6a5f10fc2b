"""Business logic use cases."""

import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence
from urllib.parse import urlparse

from disaster_intel.core import (
    ExtractionMethod,
    ExtractionResult,
    ImageClassifier,
    ImageProbe,
    LocationStrategy,
    Report,
    ReportProvider,
    TTLCache,
    ValidationError,
    VerificationResult,
    VerificationStatus,
)

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "unknown"
DISASTER_LABELS = ("flood", "fire", "damage", "destruction", "emergency", "disaster")


def _digest(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class LocationResolver:
    """Resolve free-text descriptions to a location through a fallback chain."""

    def __init__(
        self,
        cache: TTLCache,
        strategies: Sequence[LocationStrategy],
        ttl_hours: Optional[float] = None,
    ) -> None:
        self.cache = cache
        self.strategies = list(strategies)
        self.ttl_hours = ttl_hours

    @staticmethod
    def cache_key(description: str) -> str:
        return f"location_extract_{_digest(description)}"

    async def extract_location(self, description: str) -> ExtractionResult:
        """Extract a location from description. Never raises."""
        key = self.cache_key(description)

        try:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("Location extraction cache hit")
                return cached

            result = await self._run_strategies(description)

            self.cache.set(key, result, self.ttl_hours)
            logger.info(
                "Location extracted: %s (confidence: %.1f, method: %s)",
                result.location, result.confidence, result.method.value,
            )
            return result

        except Exception as e:
            logger.error("Location extraction error: %s", e)
            return ExtractionResult(
                location=UNKNOWN_LOCATION,
                confidence=0.0,
                method=ExtractionMethod.FAILED,
                error=str(e),
            )

    async def _run_strategies(self, description: str) -> ExtractionResult:
        for strategy in self.strategies:
            if not strategy.is_available():
                logger.debug("Skipping unavailable location strategy %s", strategy.name)
                continue

            location = await strategy.resolve(description)
            if location and location.strip():
                return ExtractionResult(
                    location=location.strip(),
                    confidence=0.8,
                    method=strategy.method,
                )

            logger.debug("Location strategy %s had no answer", strategy.name)

        return ExtractionResult(
            location=UNKNOWN_LOCATION,
            confidence=0.1,
            method=ExtractionMethod.FAILED,
        )


def validate_image_url(url: str) -> str:
    """Return url if it is an absolute http(s) URL, else raise ValidationError."""
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid URL: {e}") from e

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid URL format: {url!r}")
    return url


class ImageAuthenticator:
    """Check whether an image URL points at plausible disaster imagery."""

    def __init__(
        self,
        cache: TTLCache,
        classifier: ImageClassifier,
        probe: ImageProbe,
        ttl_hours: Optional[float] = None,
    ) -> None:
        self.cache = cache
        self.classifier = classifier
        self.probe = probe
        self.ttl_hours = ttl_hours

    @staticmethod
    def cache_key(url: str) -> str:
        return f"image_verify_{_digest(url)}"

    async def verify_image(self, url: str) -> VerificationResult:
        """Verify an image URL. Never raises."""
        try:
            validate_image_url(url)
        except ValidationError as e:
            logger.info("Rejected image URL: %s", e)
            return VerificationResult(
                status=VerificationStatus.INVALID,
                analysis="Invalid image URL provided",
                confidence=0.0,
                details={"reason": "Invalid URL format"},
            )

        key = self.cache_key(url)
        try:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("Image verification cache hit")
                return cached

            if self.classifier.is_configured:
                result = await self._analyze(url)
            else:
                result = await self._basic_check(url)

            self.cache.set(key, result, self.ttl_hours)
            logger.info("Image verification completed: %s", result.status.value)
            return result

        except Exception as e:
            logger.error("Image verification error: %s", e)
            return self._error_result("Image verification failed due to technical error", e)

    async def _analyze(self, url: str) -> VerificationResult:
        """Download the image and classify it."""
        try:
            image = await self.probe.fetch_image(url)
            labels = await self.classifier.classify_image(image)
        except Exception as e:
            logger.warning("Image classification failed for %s: %s", url, e)
            return self._error_result(f"Image analysis failed: {e}", e)

        status = VerificationStatus.ANALYZED
        confidence = 0.7
        analysis = "Image analyzed successfully"

        if labels:
            top = labels[0]
            confidence = min(max(top.score, 0.0), 1.0)
            analysis = f"Image classification: {top.label} (confidence: {top.score * 100:.1f}%)"

            if any(word in top.label.lower() for word in DISASTER_LABELS):
                status = VerificationStatus.AUTHENTIC
                analysis += " - Appears to be disaster-related content"

        return VerificationResult(
            status=status,
            analysis=analysis,
            confidence=confidence,
            details={
                "raw_analysis": [{"label": label.label, "score": label.score} for label in labels],
                "image_size": len(image),
                "timestamp": _timestamp(),
            },
        )

    async def _basic_check(self, url: str) -> VerificationResult:
        """Validate the URL by its headers only."""
        try:
            probe = await self.probe.head(url)
        except Exception as e:
            logger.warning("Basic image validation failed for %s: %s", url, e)
            return self._error_result(f"Basic image validation failed: {e}", e)

        content_type = probe.content_type
        if not content_type or not content_type.startswith("image/"):
            return VerificationResult(
                status=VerificationStatus.INVALID,
                analysis="URL does not point to a valid image",
                confidence=0.0,
                details={"content_type": content_type},
            )

        return VerificationResult(
            status=VerificationStatus.BASIC_CHECK,
            analysis=f"Image URL validated. Type: {content_type}, Size: {probe.content_length} bytes",
            confidence=0.5,
            details={
                "content_type": content_type,
                "content_length": probe.content_length,
                "method": "basic_validation",
            },
        )

    @staticmethod
    def _error_result(analysis: str, error: Exception) -> VerificationResult:
        return VerificationResult(
            status=VerificationStatus.ERROR,
            analysis=analysis,
            confidence=0.0,
            details={"error": str(error), "timestamp": _timestamp()},
        )


class SocialMediaService:
    """Fetch report batches, caching them for a short time."""

    def __init__(
        self,
        cache: TTLCache,
        provider: ReportProvider,
        ttl_hours: float = 0.5,
    ) -> None:
        self.cache = cache
        self.provider = provider
        self.ttl_hours = ttl_hours

    @staticmethod
    def cache_key(disaster_id: str, tags: Sequence[str]) -> str:
        return f"social_media_{disaster_id}_{_digest(json.dumps(list(tags)))}"

    async def fetch_social_media_reports(
        self, disaster_id: str, tags: Sequence[str] = ()
    ) -> list[Report]:
        """Fetch reports for a disaster. Returns an empty list on failure."""
        key = self.cache_key(disaster_id, tags)

        try:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("Social media cache hit")
                return list(cached)

            reports = await self.provider.fetch_reports(disaster_id, tags)

            self.cache.set(key, tuple(reports), self.ttl_hours)
            logger.info("Fetched %d social media reports", len(reports))
            return list(reports)

        except Exception as e:
            logger.error("Social media fetch error: %s", e)
            return []
