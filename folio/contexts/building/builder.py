"""
Element Builder

Turns declarative option maps into lxml HTML elements and combines them.

Options map:
    inner    - raw markup for the element's content (trusted input, parsed as HTML)
    children - ordered nodes, ElementSpecs or Fragments appended in order
    *        - any other key is set verbatim as an attribute

Examples:
    >>> link = build("a", {"href": "#about-section", "inner": "About"})
    >>> item = build("li", {"children": [link]})
    >>> to_html(item)
    '<li><a href="#about-section">About</a></li>'
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from lxml import html
from lxml.html import HtmlElement

from folio.contexts.building.exceptions import InvalidTagError
from folio.contexts.building.fragment import Fragment

INNER_KEY = "inner"
CHILDREN_KEY = "children"
RESERVED_KEYS = (INNER_KEY, CHILDREN_KEY)


@dataclass(frozen=True)
class ElementSpec:
    """
    Deferred element description: a tag name plus an options map.

    Can be passed anywhere a built node is accepted; it is built on demand.
    """

    tag: str
    options: Dict[str, Any] = field(default_factory=dict)

    def build(self) -> HtmlElement:
        return build(self.tag, self.options)


Buildable = Union[HtmlElement, ElementSpec, Fragment]


def _create_element(tag: str) -> HtmlElement:
    if not isinstance(tag, str) or not tag:
        raise InvalidTagError(tag)
    try:
        return html.Element(tag)
    except ValueError as e:
        raise InvalidTagError(tag, original_error=e) from e


def _resolve(item: Buildable):
    if isinstance(item, ElementSpec):
        return item.build()
    return item


def set_inner(element: HtmlElement, markup: Optional[str]) -> None:
    """
    Replace an element's content with parsed markup.

    Leading text becomes the element's text, parsed elements become children.
    None or an empty string clears the content.
    """
    for child in list(element):
        element.remove(child)
    element.text = None

    if markup is None or markup == "":
        return

    markup = str(markup)
    # Plain text needs no parsing
    if "<" not in markup and "&" not in markup:
        element.text = markup
        return

    for part in html.fragments_fromstring(markup):
        if isinstance(part, str):
            element.text = part
        else:
            element.append(part)


def append_children(element: HtmlElement, children: Iterable[Optional[Buildable]]) -> None:
    """Append children in order, skipping None and splicing fragments."""
    for child in children:
        if child is None:
            continue
        child = _resolve(child)
        if isinstance(child, Fragment):
            child.attach_to(element)
        else:
            element.append(child)


def build(tag: str, options: Optional[Mapping[str, Any]] = None) -> HtmlElement:
    """
    Build one unattached element from a tag name and options map.

    Args:
        tag: Element tag name (e.g., "div")
        options: Options map (see module docstring); may be None

    Returns:
        The constructed element

    Raises:
        InvalidTagError: If lxml rejects the tag name
        ValueError: If lxml rejects an attribute name
    """
    element = _create_element(tag)

    for key, value in (options or {}).items():
        if key == INNER_KEY:
            set_inner(element, value)
        elif key == CHILDREN_KEY:
            append_children(element, value)
        else:
            element.set(key, str(value))

    return element


def multibuild(tag: str, count: int, options: Optional[Mapping[str, Any]] = None) -> Fragment:
    """
    Build one element and bundle `count` independent deep copies in a fragment.

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got: {count}")

    template = build(tag, options)
    return Fragment(copy.deepcopy(template) for _ in range(count))


def pack(items: Any = None, *more: Buildable) -> Fragment:
    """
    Bundle nodes into a fragment, in order.

    Accepts a single list/tuple of nodes or the nodes as separate arguments:
    pack([x, y]) and pack(x, y) are equivalent.
    """
    if items is None:
        nodes = []
    elif isinstance(items, (list, tuple)):
        nodes = list(items)
    else:
        nodes = [items]
    nodes.extend(more)

    return Fragment(_resolve(node) for node in nodes)


def chain(*items: Union[HtmlElement, ElementSpec]) -> Fragment:
    """
    Nest each node as the sole child of the previous one.

    The first item is the root and the last is the deepest leaf; the returned
    fragment holds only the root.

    Raises:
        TypeError: If an item is a Fragment (it has no single node to nest under)
    """
    fragment = Fragment()
    lowest = None

    for position, item in enumerate(items):
        if isinstance(item, Fragment):
            raise TypeError(
                f"chain() items must be elements or ElementSpecs, got a Fragment at position {position}"
            )
        node = _resolve(item)
        if lowest is None:
            fragment.append(node)
        else:
            lowest.append(node)
        lowest = node

    return fragment


def to_html(node: Union[HtmlElement, Fragment]) -> str:
    """Serialize an element or fragment to an HTML string."""
    if isinstance(node, Fragment):
        return "".join(to_html(inner) for inner in node)
    return html.tostring(node, encoding="unicode")
