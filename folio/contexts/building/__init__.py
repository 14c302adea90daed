"""
Building Context

Responsibilities:
- Builds HTML elements from declarative option maps
- Combines nodes into fragments (multibuild, pack, chain)
- Mutates ids, classes and attributes of existing elements

Owns: Element construction and mutation
Never: Knows about content documents, pages or themes
"""

from folio.contexts.building.builder import (
    ElementSpec,
    append_children,
    build,
    chain,
    multibuild,
    pack,
    set_inner,
    to_html,
)
from folio.contexts.building.exceptions import InvalidTagError
from folio.contexts.building.fragment import Fragment
from folio.contexts.building.mutation import (
    add_attributes,
    add_classes,
    remove_attributes,
    remove_classes,
    remove_id,
    set_id,
    toggle_classes,
)

__all__ = [
    # Construction
    "ElementSpec",
    "build",
    "set_inner",
    "append_children",
    "to_html",
    # Combinators
    "Fragment",
    "multibuild",
    "pack",
    "chain",
    # Mutation helpers
    "set_id",
    "remove_id",
    "add_classes",
    "remove_classes",
    "toggle_classes",
    "add_attributes",
    "remove_attributes",
    # Errors
    "InvalidTagError",
]
