"""Plain HTTP access to image URLs."""

import httpx

from disaster_intel.config import Settings
from disaster_intel.core import ImageProbe, ProbeResult, UpstreamFailure, UpstreamTimeout


class HttpImageProbe(ImageProbe):
    """Download images and read their headers over HTTP."""

    def __init__(self, settings: Settings) -> None:
        self.fetch_timeout = settings.huggingface.image_fetch_timeout
        self.head_timeout = settings.huggingface.head_timeout
        self.headers = {"User-Agent": settings.huggingface.user_agent}

    async def fetch_image(self, url: str) -> bytes:
        """Download the image body."""
        response = await self._request("GET", url, self.fetch_timeout)
        return response.content

    async def head(self, url: str) -> ProbeResult:
        """Read content-type and content-length without the body."""
        response = await self._request("HEAD", url, self.head_timeout)
        return ProbeResult(
            content_type=response.headers.get("content-type"),
            content_length=response.headers.get("content-length"),
        )

    async def _request(self, method: str, url: str, timeout: float) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                response = await client.request(method, url, headers=self.headers)
                response.raise_for_status()
                return response
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(f"{method} {url} timed out after {timeout:.0f}s") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamFailure(
                f"{method} {url} returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamFailure(f"{method} {url} failed: {e}") from e
