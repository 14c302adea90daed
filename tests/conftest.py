"""Shared fixtures for folio tests."""

import asyncio
import copy

import pytest
from lxml import html

from folio.utils.config import SiteConfig

SKELETON_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>Test</title></head>
<body>
  <nav><ul class="linklist"></ul></nav>
  <main id="content"></main>
  <div class="lang-icon-list"></div>
  <div class="tool-icon-list"></div>
  <div class="ext-icon-list"></div>
</body>
</html>
"""

SAMPLE_CONTENT = {
    "sections": [
        {"section": "about", "title": "About", "type": "pg", "body": "Hello"},
        {
            "section": "work",
            "title": "Work",
            "type": "ls",
            "body": [
                {"header": "Engineer", "subheader": "Acme", "main": "Built things."},
                {"subsubheader": "2019"},
            ],
        },
        {"section": "resume", "title": "Resume", "type": "rs", "file": "files/cv.pdf"},
    ],
    "icons": {"languages": ["python", "go"], "tools": ["git"]},
    "ext": {"github": {"icon": "github-original", "link": "https://github.com/example"}},
}


class StaticLoader:
    """Loader stand-in returning a fixed payload, optionally waiting on a gate."""

    def __init__(self, payload, gate: asyncio.Event = None, source: str = "memory://content"):
        self.payload = payload
        self.gate = gate
        self.source = source
        self.calls = 0

    async def load(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.payload, Exception):
            raise self.payload
        return copy.deepcopy(self.payload)


@pytest.fixture
def page():
    return html.document_fromstring(SKELETON_HTML)


@pytest.fixture
def config(tmp_path):
    return SiteConfig(logs_path=tmp_path / "logs")


@pytest.fixture
def sample_content():
    return copy.deepcopy(SAMPLE_CONTENT)
