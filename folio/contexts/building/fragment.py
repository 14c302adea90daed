"""
Fragment

Ordered, unattached group of sibling nodes pending a single attach operation.
lxml has no document fragment, so this carrier stands in for one.
"""

from typing import Iterable, Iterator, List

from lxml.html import HtmlElement


class Fragment:
    """
    Ordered collection of detached sibling nodes.

    Adding a node that already has a parent detaches it first, so a node is
    owned either by the fragment or by a tree, never both. Attaching the
    fragment moves every node into the target parent and leaves the fragment
    empty.
    """

    def __init__(self, nodes: Iterable = ()):
        self._nodes: List[HtmlElement] = []
        for node in nodes:
            self.append(node)

    def append(self, node) -> None:
        """Add a node (or splice another fragment) at the end."""
        if isinstance(node, Fragment):
            for inner in node.release():
                self.append(inner)
            return

        parent = node.getparent()
        if parent is not None:
            parent.remove(node)
        self._nodes.append(node)

    def release(self) -> List[HtmlElement]:
        """Hand over all nodes in order and empty the fragment."""
        nodes, self._nodes = self._nodes, []
        return nodes

    def attach_to(self, parent: HtmlElement) -> None:
        """Append all nodes to parent in order, emptying the fragment."""
        for node in self.release():
            parent.append(node)

    @property
    def nodes(self) -> tuple:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[HtmlElement]:
        return iter(tuple(self._nodes))

    def __getitem__(self, index: int) -> HtmlElement:
        return self._nodes[index]

    def __repr__(self) -> str:
        tags = ", ".join(node.tag for node in self._nodes)
        return f"Fragment([{tags}])"
