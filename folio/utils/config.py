"""
Site Configuration

Loads the site YAML with OmegaConf and freezes it into immutable dataclasses
constructed once at startup.

Examples:
    # Bundled defaults (or FOLIO_CONFIG_PATH if set)
    >>> config = load_config()

    # Dotlist overrides, applied after the file
    >>> config = load_config(overrides=["content.timeout_s=5", "resume.breakpoint_px=1200"])
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"
CONFIG_PATH = Path(os.getenv("FOLIO_CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))
LOGS_PATH = Path(os.getenv("FOLIO_LOGS_PATH", "outs/logs"))


@dataclass(frozen=True)
class SiteMetadata:
    title: str = "Portfolio"
    author: str = ""
    description: str = ""
    lang: str = "en"
    stylesheets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ContentConfig:
    source: str = "data/data.json"
    timeout_s: float = 10.0


@dataclass(frozen=True)
class PageSelectors:
    """Selectors for the host page containers (`.class`, `#id` or tag name)."""

    nav_list: str = ".linklist"
    content: str = "#content"
    lang_icons: str = ".lang-icon-list"
    tool_icons: str = ".tool-icon-list"
    ext_links: str = ".ext-icon-list"


@dataclass(frozen=True)
class ResumeConfig:
    breakpoint_px: int = 980
    download_label: str = "Download Resume PDF"
    download_name: Optional[str] = None
    toggle_label: str = "Toggle preview"
    preview_suffix: str = "#toolbar=0"


@dataclass(frozen=True)
class ThemeConfig:
    store_path: str = "~/.folio/preferences.json"
    storage_key: str = "theme"
    default: str = "light"


@dataclass(frozen=True)
class SiteConfig:
    site: SiteMetadata = field(default_factory=SiteMetadata)
    content: ContentConfig = field(default_factory=ContentConfig)
    page: PageSelectors = field(default_factory=PageSelectors)
    resume: ResumeConfig = field(default_factory=ResumeConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    logs_path: Path = LOGS_PATH


def _freeze_section(cls, name: str, data: Optional[Dict[str, Any]]):
    """Build a frozen section dataclass, rejecting unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got: {type(data).__name__}")

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown keys in config section '{name}': {unknown}")

    values = {
        key: tuple(value) if isinstance(value, list) else value for key, value in data.items()
    }
    return cls(**values)


def load_config(config_path: Path = None, overrides: List[str] = None) -> SiteConfig:
    """
    Load site configuration.

    Args:
        config_path: YAML file to load (defaults to FOLIO_CONFIG_PATH or bundled defaults)
        overrides: OmegaConf dotlist overrides applied on top of the file

    Returns:
        Immutable SiteConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the config contains unknown sections or keys
    """
    if config_path is None:
        config_path = CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    conf = OmegaConf.load(config_path)
    if overrides:
        conf = OmegaConf.merge(conf, OmegaConf.from_dotlist(list(overrides)))
    raw = OmegaConf.to_container(conf, resolve=True) or {}

    sections = {
        "site": SiteMetadata,
        "content": ContentConfig,
        "page": PageSelectors,
        "resume": ResumeConfig,
        "theme": ThemeConfig,
    }
    unknown = sorted(set(raw) - set(sections) - {"logs_path"})
    if unknown:
        raise ValueError(f"Unknown config sections: {unknown}")

    return SiteConfig(
        **{name: _freeze_section(cls, name, raw.get(name)) for name, cls in sections.items()},
        logs_path=Path(raw.get("logs_path") or LOGS_PATH),
    )
