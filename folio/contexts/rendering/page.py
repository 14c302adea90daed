"""
Host Page I/O

Reads and writes the host page, and scaffolds a skeleton page that satisfies
the container contract from a Jinja2 template.
"""

from pathlib import Path
from typing import Dict, NamedTuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from lxml import html
from lxml.html import HtmlElement

from folio.contexts.rendering.context import OPTIONAL_ROLES, REQUIRED_ROLES
from folio.utils.config import PageSelectors, SiteMetadata

TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"
SKELETON_TEMPLATE = "index.html.jinja"
DOCTYPE = "<!DOCTYPE html>"


class ContainerAttribute(NamedTuple):
    name: str
    value: str


def load_page(path: Path) -> HtmlElement:
    """
    Parse a host page into an lxml document root.

    Raises:
        FileNotFoundError: If the page doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Host page not found: {path}")
    return html.document_fromstring(path.read_text(encoding="utf-8"))


def page_to_string(page: HtmlElement) -> str:
    """Serialize a page root with an HTML5 doctype."""
    return html.tostring(page, encoding="unicode", doctype=DOCTYPE, pretty_print=True)


def write_page(page: HtmlElement, path: Path) -> Path:
    """Write a rendered page, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(page_to_string(page), encoding="utf-8")
    return path


def _container_attribute(selector: str) -> ContainerAttribute:
    selector = selector.strip()
    if selector.startswith("#"):
        return ContainerAttribute("id", selector[1:])
    if selector.startswith("."):
        return ContainerAttribute("class", selector[1:])
    raise ValueError(f"Cannot scaffold a container for selector {selector!r} (use '#id' or '.class')")


def render_skeleton(
    site: SiteMetadata = SiteMetadata(),
    selectors: PageSelectors = PageSelectors(),
    theme: str = "light",
) -> str:
    """
    Render a host page with every container the renderer expects.

    Args:
        site: Title, author, description, language and stylesheets
        selectors: Container selectors; each must be `#id` or `.class`
        theme: Initial theme token written on <html> and <body>

    Returns:
        HTML document string
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_PATH)),
        undefined=StrictUndefined,
        autoescape=select_autoescape(["html", "jinja"]),
        keep_trailing_newline=True,
    )
    template = env.get_template(SKELETON_TEMPLATE)

    containers: Dict[str, ContainerAttribute] = {
        role: _container_attribute(getattr(selectors, role))
        for role in REQUIRED_ROLES + OPTIONAL_ROLES
    }
    return template.render(site=site, containers=containers, theme=theme)
