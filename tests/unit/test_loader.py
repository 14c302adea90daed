"""Unit tests for content loading (local files and httpx)."""

import asyncio
import json

import httpx
import pytest

from folio.contexts.rendering import ContentFetchError, ContentLoader, ContentTimeoutError

URL = "https://example.com/data/data.json"


def _load(loader):
    return asyncio.run(loader.load())


@pytest.mark.unit
def test_load_local_file(tmp_path, sample_content):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_content), encoding="utf-8")

    loader = ContentLoader(str(path))

    assert not loader.is_remote
    assert _load(loader) == sample_content


@pytest.mark.unit
def test_missing_local_file(tmp_path):
    with pytest.raises(ContentFetchError) as exc_info:
        _load(ContentLoader(str(tmp_path / "missing.json")))
    assert "Could not read content file" in str(exc_info.value)


@pytest.mark.unit
def test_non_utf8_local_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes(b'{"sections": "\xff\xfe"}')

    with pytest.raises(ContentFetchError) as exc_info:
        _load(ContentLoader(str(path)))
    assert "Could not read content file" in str(exc_info.value)
    assert isinstance(exc_info.value.original_error, UnicodeDecodeError)


@pytest.mark.unit
def test_invalid_json(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ContentFetchError) as exc_info:
        _load(ContentLoader(str(path)))
    assert isinstance(exc_info.value.original_error, json.JSONDecodeError)


@pytest.mark.unit
def test_load_remote(sample_content):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, json=sample_content)

    loader = ContentLoader(URL, transport=httpx.MockTransport(handler))

    assert loader.is_remote
    assert _load(loader) == sample_content
    assert requested == [URL]


@pytest.mark.unit
def test_remote_non_ok_status():
    loader = ContentLoader(URL, transport=httpx.MockTransport(lambda r: httpx.Response(404)))

    with pytest.raises(ContentFetchError) as exc_info:
        _load(loader)
    assert exc_info.value.status_code == 404
    assert not isinstance(exc_info.value, ContentTimeoutError)


@pytest.mark.unit
def test_remote_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    loader = ContentLoader(URL, transport=httpx.MockTransport(handler))

    with pytest.raises(ContentFetchError) as exc_info:
        _load(loader)
    assert isinstance(exc_info.value.original_error, httpx.ConnectError)


@pytest.mark.unit
def test_remote_timeout_cancels_fetch():
    """A fetch slower than the timeout is cancelled and reported as a timeout."""
    cancelled = []

    async def slow_handler(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return httpx.Response(200, json={})

    loader = ContentLoader(URL, timeout_s=0.05, transport=httpx.MockTransport(slow_handler))

    with pytest.raises(ContentTimeoutError) as exc_info:
        _load(loader)
    assert exc_info.value.timeout_s == 0.05
    assert cancelled == [True]


@pytest.mark.unit
@pytest.mark.parametrize("source, timeout_s", [("", 10.0), ("data.json", 0), ("data.json", -1)])
def test_bad_constructor_arguments(source, timeout_s):
    with pytest.raises(ValueError):
        ContentLoader(source, timeout_s=timeout_s)
