"""
folio - data-driven static page renderer

Builds a single-page portfolio layout from a JSON content document.

Architecture:
- Building Context: declarative HTML element construction and mutation helpers
- Rendering Context: content loading, validation and page population
- Theming Context: light/dark preference resolution and persistence
"""

__version__ = "0.1.0"
