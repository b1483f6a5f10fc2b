"""Hugging Face inference API client for NER and image classification."""

import asyncio
import logging
import time
from typing import Any, Optional

import httpx

from disaster_intel.config import Settings
from disaster_intel.core import (
    ConfigurationGap,
    EntityExtractor,
    ImageClassifier,
    ImageLabel,
    NamedEntity,
    UpstreamFailure,
    UpstreamTimeout,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = (429, 503)


class HuggingFaceClient(EntityExtractor, ImageClassifier):
    """Hosted inference client implementation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.api_key = settings.huggingface_api_key
        self.ner_url = settings.ner_url
        self.image_model_url = settings.image_model_url
        self.ner_timeout = settings.huggingface.ner_timeout
        self.classification_timeout = settings.huggingface.classification_timeout
        self.max_retries = settings.huggingface.max_retries
        self.initial_retry_delay = settings.huggingface.initial_retry_delay

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def extract_entities(self, text: str) -> list[NamedEntity]:
        """Run the NER model over text."""
        data = await self._call_api(
            self.ner_url,
            timeout=self.ner_timeout,
            json={"inputs": text},
        )

        entities = []
        for raw in data:
            if not isinstance(raw, dict):
                raise UpstreamFailure(f"Unexpected entity payload: {raw!r}")
            entities.append(
                NamedEntity(
                    entity_group=self._entity_group(raw),
                    word=str(raw.get("word", "")),
                    score=float(raw.get("score", 0.0)),
                )
            )
        return entities

    async def classify_image(self, data: bytes) -> list[ImageLabel]:
        """Run the image classification model over raw image bytes."""
        payload = await self._call_api(
            self.image_model_url,
            timeout=self.classification_timeout,
            content=data,
            content_type="application/octet-stream",
        )

        labels = []
        for raw in payload:
            if not isinstance(raw, dict) or "label" not in raw:
                raise UpstreamFailure(f"Unexpected classification payload: {raw!r}")
            labels.append(ImageLabel(label=str(raw["label"]), score=float(raw.get("score", 0.0))))
        return labels

    async def _call_api(
        self,
        url: str,
        timeout: float,
        json: Optional[dict[str, Any]] = None,
        content: Optional[bytes] = None,
        content_type: str = "application/json",
    ) -> list[Any]:
        """POST to a model endpoint, retrying while the model is busy or loading.

        Retries and waits share one deadline, so the whole call never takes
        longer than ``timeout``.
        """
        if not self.is_configured:
            raise ConfigurationGap("HUGGINGFACE_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": content_type,
        }

        deadline = time.monotonic() + timeout
        remaining = timeout

        for attempt in range(self.max_retries + 1):
            if attempt:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise UpstreamTimeout(f"{url} timed out after {timeout:.0f}s")

            try:
                async with httpx.AsyncClient(timeout=remaining) as client:
                    response = await client.post(url, headers=headers, json=json, content=content)
            except httpx.TimeoutException as e:
                raise UpstreamTimeout(f"{url} timed out after {timeout:.0f}s") from e
            except httpx.RequestError as e:
                raise UpstreamFailure(f"Request to {url} failed: {e}") from e

            if 200 <= response.status_code < 300:
                return self._parse_list(response, url)

            # Rate limit or model still loading - retry with backoff
            if response.status_code in RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                left = max(0.0, deadline - time.monotonic())
                retry_after = min(self._get_retry_delay(response, attempt), left)
                logger.warning(
                    "HTTP %s from %s, retrying after %.1fs (attempt %d/%d)",
                    response.status_code, url, retry_after, attempt + 1, self.max_retries,
                )
                await asyncio.sleep(retry_after)
                continue

            raise UpstreamFailure(
                f"{url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        raise UpstreamFailure(f"Failed to call {url} after all retries")

    def _parse_list(self, response: httpx.Response, url: str) -> list[Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFailure(f"{url} returned invalid JSON: {e}") from e

        # Some pipelines wrap results in an outer list
        if isinstance(data, list) and len(data) == 1 and isinstance(data[0], list):
            data = data[0]

        if not isinstance(data, list):
            raise UpstreamFailure(f"{url} returned {type(data).__name__}, expected a list")
        return data

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Calculate retry delay from response headers or use exponential backoff."""
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        return self.initial_retry_delay * (2 ** attempt)

    @staticmethod
    def _entity_group(raw: dict[str, Any]) -> str:
        # Non-aggregated pipelines return "entity": "B-LOC"
        group = raw.get("entity_group") or raw.get("entity") or ""
        return str(group).split("-")[-1]
