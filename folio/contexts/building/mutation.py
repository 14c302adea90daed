"""
Element mutation helpers.

Stateless functions that modify an existing element in place. Class and
attribute-name arguments are space-separated token strings; each token is
handled independently.
"""

from typing import Any, List, Mapping

from lxml.html import HtmlElement


def _tokens(token_string: str) -> List[str]:
    return token_string.split()


def set_id(node: HtmlElement, id_string: str) -> None:
    """Set (overwrite) the element id."""
    node.set("id", str(id_string))


def remove_id(node: HtmlElement) -> None:
    """Remove the element id if present."""
    node.attrib.pop("id", None)


def add_classes(node: HtmlElement, class_string: str) -> None:
    """Add each space-separated class token."""
    for token in _tokens(class_string):
        node.classes.add(token)


def remove_classes(node: HtmlElement, class_string: str) -> None:
    """Remove each space-separated class token; absent tokens are ignored."""
    for token in _tokens(class_string):
        node.classes.discard(token)


def toggle_classes(node: HtmlElement, class_string: str) -> None:
    """Toggle each space-separated class token independently."""
    for token in _tokens(class_string):
        node.classes.toggle(token)


def add_attributes(node: HtmlElement, attributes: Mapping[str, Any]) -> None:
    """Set attributes in iteration order (last write wins)."""
    for key, value in attributes.items():
        node.set(key, str(value))


def remove_attributes(node: HtmlElement, attribute_string: str) -> None:
    """Remove each space-separated attribute name; absent names are ignored."""
    for name in _tokens(attribute_string):
        node.attrib.pop(name, None)
