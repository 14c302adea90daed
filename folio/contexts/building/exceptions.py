"""Custom exceptions for the building context."""

from typing import Any, Optional


class InvalidTagError(ValueError):
    """
    Exception raised when an element cannot be created for a tag name.

    Attributes:
        message: Error description
        tag: The rejected tag value
        original_error: The underlying lxml error, if any
    """

    def __init__(self, tag: Any, original_error: Optional[Exception] = None):
        self.tag = tag
        self.original_error = original_error
        self.message = f"Invalid tag name: {tag!r}"

        parts = [self.message]
        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))
