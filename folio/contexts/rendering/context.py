"""
Render Context

Holds the host page and cached references to its containers. Passed explicitly
to every render step instead of reading page globals.
"""

import re
from typing import Dict, List, Optional

from lxml.html import HtmlElement

from folio.contexts.rendering.exceptions import MissingContainerError
from folio.utils.config import PageSelectors

TAG_SELECTOR = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

REQUIRED_ROLES = ("nav_list", "content")
OPTIONAL_ROLES = ("lang_icons", "tool_icons", "ext_links")


def select_all(root: HtmlElement, selector: str) -> List[HtmlElement]:
    """
    Find elements matching a simple selector.

    Supported forms: `#id`, `.class`, and bare tag names.

    Raises:
        ValueError: For any other selector syntax
    """
    selector = selector.strip()

    if selector.startswith("#") and len(selector) > 1:
        return root.xpath("descendant-or-self::*[@id=$value]", value=selector[1:])
    if selector.startswith(".") and len(selector) > 1:
        return root.find_class(selector[1:])
    if TAG_SELECTOR.match(selector):
        return list(root.iter(selector))

    raise ValueError(f"Unsupported selector: {selector!r} (use '#id', '.class' or a tag name)")


class RenderContext:
    """
    Page plus a cache of queried containers.

    The cache is invalidated after every render pass so a rebuilt page is
    queried fresh.
    """

    def __init__(self, page: HtmlElement, selectors: PageSelectors):
        self.page = page
        self.selectors = selectors
        self._cache: Dict[str, Optional[HtmlElement]] = {}

    def query(self, selector: str) -> Optional[HtmlElement]:
        """First element matching selector, cached."""
        if selector not in self._cache:
            matches = select_all(self.page, selector)
            self._cache[selector] = matches[0] if matches else None
        return self._cache[selector]

    def container(self, role: str) -> Optional[HtmlElement]:
        """Container for a role, or None when the page doesn't have it."""
        return self.query(getattr(self.selectors, role))

    def require(self, role: str) -> HtmlElement:
        """
        Container for a required role.

        Raises:
            MissingContainerError: If the page doesn't have it
        """
        element = self.container(role)
        if element is None:
            raise MissingContainerError(role, getattr(self.selectors, role))
        return element

    def check_required(self) -> None:
        """Fail fast if any required container is missing."""
        for role in REQUIRED_ROLES:
            self.require(role)

    @property
    def nav_list(self) -> HtmlElement:
        return self.require("nav_list")

    @property
    def content(self) -> HtmlElement:
        return self.require("content")

    def owned_containers(self) -> List[HtmlElement]:
        """Every present container the renderer writes into."""
        containers = [self.container(role) for role in REQUIRED_ROLES + OPTIONAL_ROLES]
        return [c for c in containers if c is not None]

    def invalidate(self) -> None:
        self._cache.clear()
