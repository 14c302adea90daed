"""Custom exceptions for the rendering context."""

from typing import List, Optional


class ContentFetchError(Exception):
    """
    Exception raised when the content document cannot be loaded.

    Attributes:
        message: Error description
        source: URL or path the content was loaded from
        status_code: HTTP status for non-OK responses
        original_error: The underlying httpx/OS/JSON error
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.source = source
        self.status_code = status_code
        self.original_error = original_error

        parts = [message]

        if source:
            parts.append(f"Source: {source}")

        if status_code is not None:
            parts.append(f"Status: {status_code}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))


class ContentTimeoutError(ContentFetchError):
    """Exception raised when loading the content document exceeds its timeout."""

    def __init__(self, source: str, timeout_s: float, original_error: Optional[Exception] = None):
        self.timeout_s = timeout_s
        super().__init__(
            f"Timed out after {timeout_s:g}s loading content",
            source=source,
            original_error=original_error,
        )


class InvalidContentError(ValueError):
    """
    Exception raised when a content document is structurally invalid.

    The whole document is rejected; every problem found is listed so the
    author can fix them in one pass.

    Attributes:
        problems: Human-readable description of each missing or invalid field
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        lines = [f"Invalid content document ({len(self.problems)} problems):"]
        lines.extend(f"  - {problem}" for problem in self.problems)
        super().__init__("\n".join(lines))


class MissingContainerError(ValueError):
    """
    Exception raised when the host page lacks a required container.

    Attributes:
        role: Container role (e.g., "nav_list", "content")
        selector: Selector that matched nothing
    """

    def __init__(self, role: str, selector: str):
        self.role = role
        self.selector = selector
        super().__init__(f"Host page has no '{role}' container (selector: {selector!r})")


class RenderInProgressError(RuntimeError):
    """Exception raised when a render pass starts while another is in flight."""

    def __init__(self):
        super().__init__("A render pass is already in progress")
