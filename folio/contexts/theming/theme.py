"""
Theme Controller

Two-state light/dark theme. Resolution order on initialization:
    1. Explicit saved preference (persisted)
    2. System preference signal
    3. Light

A manual toggle stores an explicit choice, which then takes precedence over
system preference changes until reset.
"""

from enum import Enum
from typing import Optional

from lxml.html import HtmlElement

from folio.contexts.building import add_classes, remove_classes
from folio.contexts.theming.logger import _log_debug, _log_info
from folio.contexts.theming.store import PreferenceStore
from folio.utils.config import ThemeConfig


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Theme"]:
        """Theme for a token, or None for anything unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def opposite(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class ThemeController:
    """
    Owns the active theme and its persisted preference.

    Args:
        store: Where the explicit choice is persisted
        system_preference: System-level preference token ("light"/"dark"), if known
        config: Storage key and fallback theme
    """

    def __init__(
        self,
        store: PreferenceStore,
        system_preference: Optional[str] = None,
        config: ThemeConfig = ThemeConfig(),
    ):
        default = Theme.parse(config.default)
        if default is None:
            raise ValueError(
                f"Default theme must be one of {[t.value for t in Theme]}, got: {config.default!r}"
            )

        self.store = store
        self.config = config
        self.default = default
        self.system_preference = Theme.parse(system_preference)
        self.active = self.initialize()

    def saved_preference(self) -> Optional[Theme]:
        """Explicit persisted choice; unrecognized stored values count as absent."""
        return Theme.parse(self.store.get(self.config.storage_key))

    @property
    def has_explicit_choice(self) -> bool:
        return self.saved_preference() is not None

    def initialize(self) -> Theme:
        """Resolve the active theme from saved choice, system signal, then default."""
        saved = self.saved_preference()
        if saved is not None:
            self.active = saved
            _log_debug(f"Using saved theme: {saved.value}")
        elif self.system_preference is not None:
            self.active = self.system_preference
            _log_debug(f"Using system theme: {self.active.value}")
        else:
            self.active = self.default
            _log_debug(f"Using default theme: {self.active.value}")
        return self.active

    def toggle(self) -> Theme:
        """Flip the theme and persist it as the explicit choice."""
        self.active = self.active.opposite
        self.store.set(self.config.storage_key, self.active.value)
        _log_info(f"Theme set to {self.active.value}")
        return self.active

    def on_system_change(self, preference: Optional[str]) -> Theme:
        """
        React to a system preference change.

        Followed only while no explicit choice is stored.
        """
        self.system_preference = Theme.parse(preference)
        if self.has_explicit_choice:
            _log_debug("Ignoring system theme change: explicit choice stored")
        elif self.system_preference is not None:
            self.active = self.system_preference
        return self.active

    def reset(self) -> Theme:
        """Forget the explicit choice and fall back to system preference or default."""
        self.store.delete(self.config.storage_key)
        _log_info("Theme preference reset")
        return self.initialize()

    def apply(self, page: HtmlElement) -> None:
        """Mark the page root and <body> with the active theme."""
        page.set("data-theme", self.active.value)

        bodies = list(page.iter("body"))
        if bodies:
            remove_classes(bodies[0], " ".join(t.value for t in Theme))
            add_classes(bodies[0], self.active.value)
