"""
Content Loader

Loads the JSON content document from a URL (httpx) or a local file, bounded by
a fixed timeout. This is the only suspension point of a render pass.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from folio.contexts.rendering.exceptions import ContentFetchError, ContentTimeoutError
from folio.contexts.rendering.logger import _log_debug

REMOTE_SCHEMES = ("http://", "https://")


class ContentLoader:
    """
    Fetches and decodes a content document.

    Args:
        source: http(s) URL or filesystem path
        timeout_s: Upper bound for the whole fetch, in seconds
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
    """

    def __init__(
        self,
        source: str,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not source:
            raise ValueError("Content source must be a non-empty URL or path")
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got: {timeout_s}")

        self.source = str(source)
        self.timeout_s = timeout_s
        self.transport = transport

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(REMOTE_SCHEMES)

    async def load(self) -> Dict[str, Any]:
        """
        Fetch and decode the content document.

        Returns:
            Decoded JSON payload

        Raises:
            ContentTimeoutError: If the fetch exceeds timeout_s (the fetch is cancelled)
            ContentFetchError: On network failure, non-OK status, unreadable file or invalid JSON
        """
        _log_debug(f"Loading content from {self.source} (timeout {self.timeout_s:g}s)")

        try:
            raw = await asyncio.wait_for(self._fetch(), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            raise ContentTimeoutError(self.source, self.timeout_s) from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ContentFetchError(
                "Content is not valid JSON", source=self.source, original_error=e
            ) from e

    async def _fetch(self) -> str:
        if self.is_remote:
            return await self._fetch_remote()
        return await self._read_local()

    async def _fetch_remote(self) -> str:
        async with httpx.AsyncClient(
            transport=self.transport, timeout=self.timeout_s, follow_redirects=True
        ) as client:
            try:
                response = await client.get(self.source)
            except httpx.TimeoutException as e:
                raise ContentTimeoutError(self.source, self.timeout_s, original_error=e) from e
            except httpx.HTTPError as e:
                raise ContentFetchError(
                    "Request for content failed", source=self.source, original_error=e
                ) from e

        if not response.is_success:
            raise ContentFetchError(
                "Unexpected response status", source=self.source, status_code=response.status_code
            )

        return response.text

    async def _read_local(self) -> str:
        path = Path(self.source).expanduser()
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentFetchError(
                "Could not read content file", source=str(path), original_error=e
            ) from e
