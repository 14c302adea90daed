"""
Theming Context

Responsibilities:
- Resolves the active light/dark theme (saved choice > system > default)
- Persists explicit choices
- Marks the rendered page with the active theme

Owns: Theme state and its persistence
Never: Builds page content
"""

from folio.contexts.theming.store import PreferenceStore
from folio.contexts.theming.theme import Theme, ThemeController

__all__ = ["PreferenceStore", "Theme", "ThemeController"]
