"""Tests for Hugging Face inference client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from disaster_intel.adapters.inference import HuggingFaceClient
from disaster_intel.config import Settings
from disaster_intel.core import ConfigurationGap, UpstreamFailure, UpstreamTimeout


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings with a credential and fast retries."""
    settings = Settings(huggingface_api_key="hf_test")
    settings.huggingface.max_retries = 2
    settings.huggingface.initial_retry_delay = 0.0  # Faster for tests
    return settings


def _response(status_code: int, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.headers = {}
    response.json.return_value = payload
    return response


def _client_with(*responses) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.post.side_effect = list(responses)
    return mock_client


@pytest.mark.asyncio
async def test_extract_entities_success(mock_settings: Settings) -> None:
    """Test NER call and payload parsing."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(_response(200, [
            {"entity_group": "LOC", "word": "Brooklyn Bridge", "score": 0.98},
            {"entity": "B-ORG", "word": "FDNY", "score": 0.91},
        ]))
        mock_client_class.return_value = mock_client

        entities = await client.extract_entities("FDNY at Brooklyn Bridge")

    assert [(e.entity_group, e.word) for e in entities] == [("LOC", "Brooklyn Bridge"), ("ORG", "FDNY")]
    mock_client_class.assert_called_once_with(timeout=10.0)

    call = mock_client.post.call_args
    assert call.args[0] == "https://api-inference.huggingface.co/models/dslim/bert-base-NER"
    assert call.kwargs["headers"]["Authorization"] == "Bearer hf_test"
    assert call.kwargs["json"] == {"inputs": "FDNY at Brooklyn Bridge"}


@pytest.mark.asyncio
async def test_classify_image_success(mock_settings: Settings) -> None:
    """Test image bytes are posted as octet-stream."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(_response(200, [
            {"label": "fireboat", "score": 0.72},
            {"label": "liner", "score": 0.11},
        ]))
        mock_client_class.return_value = mock_client

        labels = await client.classify_image(b"imagebytes")

    assert labels[0].label == "fireboat"
    assert labels[0].score == 0.72
    mock_client_class.assert_called_once_with(timeout=20.0)

    call = mock_client.post.call_args
    assert call.kwargs["content"] == b"imagebytes"
    assert call.kwargs["headers"]["Content-Type"] == "application/octet-stream"


@pytest.mark.asyncio
async def test_retry_while_model_loading(mock_settings: Settings) -> None:
    """Test 503 is retried before succeeding."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(
            _response(503, {"error": "Model is currently loading"}),
            _response(200, [{"label": "flood", "score": 0.6}]),
        )
        mock_client_class.return_value = mock_client

        labels = await client.classify_image(b"img")

    assert labels[0].label == "flood"
    assert mock_client.post.call_count == 2


@pytest.mark.asyncio
async def test_retries_exhausted(mock_settings: Settings) -> None:
    """Test repeated 429 ends in UpstreamFailure."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(*[_response(429) for _ in range(3)])
        mock_client_class.return_value = mock_client

        with pytest.raises(UpstreamFailure) as exc_info:
            await client.extract_entities("text")

    assert exc_info.value.status_code == 429
    assert mock_client.post.call_count == 3


@pytest.mark.asyncio
async def test_client_error_not_retried(mock_settings: Settings) -> None:
    """Test 4xx other than 429 fails immediately."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(_response(401, {"error": "Invalid token"}))
        mock_client_class.return_value = mock_client

        with pytest.raises(UpstreamFailure, match="401"):
            await client.extract_entities("text")

    assert mock_client.post.call_count == 1


@pytest.mark.asyncio
async def test_timeout_raises_upstream_timeout(mock_settings: Settings) -> None:
    """Test httpx timeout is mapped."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(httpx.ReadTimeout("read timed out"))
        mock_client_class.return_value = mock_client

        with pytest.raises(UpstreamTimeout):
            await client.extract_entities("text")


@pytest.mark.asyncio
async def test_network_error_raises_upstream_failure(mock_settings: Settings) -> None:
    """Test connection errors are mapped."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _client_with(httpx.ConnectError("connection refused"))
        mock_client_class.return_value = mock_client

        with pytest.raises(UpstreamFailure, match="connection refused"):
            await client.classify_image(b"img")


@pytest.mark.asyncio
async def test_malformed_payload(mock_settings: Settings) -> None:
    """Test non-list payload is rejected."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = _client_with(_response(200, {"error": "unexpected"}))

        with pytest.raises(UpstreamFailure, match="expected a list"):
            await client.classify_image(b"img")


@pytest.mark.asyncio
async def test_invalid_json(mock_settings: Settings) -> None:
    """Test undecodable body is rejected."""
    client = HuggingFaceClient(mock_settings)
    response = _response(200)
    response.json.side_effect = ValueError("Expecting value")

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = _client_with(response)

        with pytest.raises(UpstreamFailure, match="invalid JSON"):
            await client.extract_entities("text")


@pytest.mark.asyncio
async def test_nested_list_unwrapped(mock_settings: Settings) -> None:
    """Test single nested list payload is flattened."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = _client_with(
            _response(200, [[{"label": "volcano", "score": 0.88}]])
        )

        labels = await client.classify_image(b"img")

    assert labels[0].label == "volcano"


@pytest.mark.asyncio
async def test_missing_credential() -> None:
    """Test calls without credential raise ConfigurationGap."""
    client = HuggingFaceClient(Settings())

    assert not client.is_configured
    with patch("httpx.AsyncClient") as mock_client_class:
        with pytest.raises(ConfigurationGap):
            await client.extract_entities("text")

    mock_client_class.assert_not_called()


def test_retry_delay_from_header(mock_settings: Settings) -> None:
    """Test Retry-After header takes precedence over backoff."""
    client = HuggingFaceClient(mock_settings)
    client.initial_retry_delay = 1.0

    with_header = _response(429)
    with_header.headers = {"retry-after": "7"}
    assert client._get_retry_delay(with_header, attempt=0) == 7.0

    assert client._get_retry_delay(_response(429), attempt=2) == 4.0


@pytest.mark.asyncio
async def test_retry_after_capped_by_call_timeout(mock_settings: Settings) -> None:
    """Test a huge Retry-After never waits past the NER timeout."""
    client = HuggingFaceClient(mock_settings)
    busy = _response(503, {"error": "Model is currently loading"})
    busy.headers = {"retry-after": "3600"}

    with patch("httpx.AsyncClient") as mock_client_class, patch(
        "disaster_intel.adapters.inference.huggingface_client.asyncio.sleep",
        new_callable=AsyncMock,
    ) as mock_sleep:
        mock_client = _client_with(
            busy,
            _response(200, [{"entity_group": "LOC", "word": "Queens", "score": 0.9}]),
        )
        mock_client_class.return_value = mock_client

        entities = await client.extract_entities("Flooding in Queens")

    assert entities[0].word == "Queens"
    slept = [c.args[0] for c in mock_sleep.await_args_list]
    assert sum(slept) <= 10.0
    second_timeout = mock_client_class.call_args_list[1].kwargs["timeout"]
    assert 0 < second_timeout <= 10.0


@pytest.mark.asyncio
async def test_retry_stops_when_deadline_spent(mock_settings: Settings) -> None:
    """Test no new attempt starts once the call timeout has elapsed."""
    client = HuggingFaceClient(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class, patch(
        "disaster_intel.adapters.inference.huggingface_client.asyncio.sleep",
        new_callable=AsyncMock,
    ) as mock_sleep, patch(
        "disaster_intel.adapters.inference.huggingface_client.time"
    ) as mock_time:
        # start, before the wait, before the second attempt
        mock_time.monotonic.side_effect = [0.0, 6.0, 11.0]
        mock_client = _client_with(_response(503), _response(200, []))
        mock_client_class.return_value = mock_client

        with pytest.raises(UpstreamTimeout):
            await client.extract_entities("text")

    assert mock_client.post.call_count == 1
    mock_sleep.assert_awaited_once_with(0.0)
