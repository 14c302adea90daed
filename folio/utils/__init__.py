"""
Shared utilities for folio.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps
"""

from folio.utils.timestamp import now

__all__ = ["now"]
