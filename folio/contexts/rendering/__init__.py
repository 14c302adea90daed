"""
Rendering Context

Responsibilities:
- Loads the JSON content document (URL or file) with a timeout
- Validates the document as a whole
- Builds navigation, sections, external links and icons into the host page
- Reads, writes and scaffolds host pages

Owns: Content model, validation, page population
Never: Decides the theme (delegates to the theming context)
"""

from folio.contexts.rendering.content import (
    ContentDocument,
    ExternalLink,
    IconSet,
    ListEntry,
    Section,
    SectionKind,
    parse_content,
    validate_content,
)
from folio.contexts.rendering.context import RenderContext
from folio.contexts.rendering.exceptions import (
    ContentFetchError,
    ContentTimeoutError,
    InvalidContentError,
    MissingContainerError,
    RenderInProgressError,
)
from folio.contexts.rendering.loader import ContentLoader
from folio.contexts.rendering.page import load_page, page_to_string, render_skeleton, write_page
from folio.contexts.rendering.portfolio import Portfolio, RenderReport

__all__ = [
    # Content model and validation
    "ContentDocument",
    "Section",
    "SectionKind",
    "ListEntry",
    "IconSet",
    "ExternalLink",
    "parse_content",
    "validate_content",
    # Loading and rendering
    "ContentLoader",
    "RenderContext",
    "Portfolio",
    "RenderReport",
    # Page I/O
    "load_page",
    "write_page",
    "page_to_string",
    "render_skeleton",
    # Errors
    "ContentFetchError",
    "ContentTimeoutError",
    "InvalidContentError",
    "MissingContainerError",
    "RenderInProgressError",
]
