"""
Portfolio Renderer

Drives one render pass: load content → validate → build navigation, sections,
external links and icons into the host page.

Fetch and validation failures abort the pass before the page is touched.
Build failures are isolated per step (and per section) so one bad entry
doesn't sink the rest of the page.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from lxml.html import HtmlElement

from folio.contexts.building import Fragment, pack, set_inner
from folio.contexts.rendering.content import ContentDocument, parse_content
from folio.contexts.rendering.context import RenderContext
from folio.contexts.rendering.exceptions import (
    ContentFetchError,
    InvalidContentError,
    RenderInProgressError,
)
from folio.contexts.rendering.loader import ContentLoader
from folio.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_render_result,
    log_render_start,
    log_step_failure,
)
from folio.contexts.rendering.sections import (
    build_dev_icon,
    build_ext_link,
    build_nav_entry,
    build_section,
)
from folio.contexts.theming import ThemeController
from folio.utils.config import SiteConfig


@dataclass
class RenderReport:
    """
    Result of a render pass.

    Attributes:
        nav_entries: Number of navigation entries built
        sections_rendered: Slugs of sections attached to the page
        failures: "step: error" for every step or section that failed
        elapsed_s: Wall time of the build phase
        refresh: Whether this pass replaced previous output
    """

    nav_entries: int = 0
    sections_rendered: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    elapsed_s: float = 0.0
    refresh: bool = False

    @property
    def success(self) -> bool:
        return not self.failures


class Portfolio:
    """
    Populates a host page from a content document.

    Args:
        page: Host page root (lxml document)
        config: Site configuration
        loader: Content loader (defaults to config.content source and timeout)
        notify: Called once with a user-facing message when a pass aborts
        viewport_width: Target viewport width in px; None renders wide-layout extras
        theme: Theme controller applied to the page after each pass

    Raises:
        MissingContainerError: If the page lacks a required container
    """

    def __init__(
        self,
        page: HtmlElement,
        config: SiteConfig,
        loader: Optional[ContentLoader] = None,
        notify: Optional[Callable[[str], None]] = None,
        viewport_width: Optional[int] = None,
        theme: Optional[ThemeController] = None,
    ):
        self.page = page
        self.config = config
        self.context = RenderContext(page, config.page)
        self.context.check_required()

        self.loader = loader or ContentLoader(config.content.source, config.content.timeout_s)
        self.notify = notify or _log_error
        self.viewport_width = viewport_width
        self.theme = theme

        self.document: Optional[ContentDocument] = None
        self._in_flight = False
        self._initialized = False

    @property
    def is_rendering(self) -> bool:
        return self._in_flight

    async def initialize(self) -> RenderReport:
        """
        First render pass: append built content to the page containers.

        Calling it again after a completed pass behaves like refresh(), and so
        does rendering a page whose containers already hold content.

        Raises:
            RenderInProgressError: If a pass is already running
            ContentFetchError: If loading fails or times out (page untouched)
            InvalidContentError: If the document is invalid (page untouched)
        """
        if self._initialized and not self._in_flight:
            _log_warning("Portfolio already initialized; refreshing instead")
            return await self.refresh()
        return await self._run_pass(refresh=False)

    async def refresh(self) -> RenderReport:
        """
        Reload content and rebuild every owned container from scratch.

        Raises:
            RenderInProgressError: If a pass is already running
            ContentFetchError: If loading fails or times out (page untouched)
            InvalidContentError: If the document is invalid (page untouched)
        """
        return await self._run_pass(refresh=True)

    async def _run_pass(self, refresh: bool) -> RenderReport:
        if self._in_flight:
            raise RenderInProgressError()

        self._in_flight = True
        try:
            self.context.check_required()
            document = await self._load_document()

            if not refresh and self._has_rendered_content():
                _log_warning("Page containers already hold content; clearing before render")
                refresh = True
            if refresh:
                self._clear_containers()
            report = self._render(document, refresh)
            self._initialized = True
            return report
        finally:
            self._in_flight = False
            self.context.invalidate()

    async def _load_document(self) -> ContentDocument:
        try:
            payload = await self.loader.load()
            document = parse_content(payload)
        except (ContentFetchError, InvalidContentError) as e:
            self.notify(f"Could not load page content: {e}")
            raise

        self.document = document
        return document

    def _has_rendered_content(self) -> bool:
        return any(
            len(container) or (container.text or "").strip()
            for container in self.context.owned_containers()
        )

    def _clear_containers(self) -> None:
        for container in self.context.owned_containers():
            set_inner(container, None)
        _log_debug("Cleared owned containers")

    def _run_step(self, step: str, report: RenderReport, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception as e:
            log_step_failure(step, e)
            report.failures.append(f"{step}: {e}")

    def _render(self, document: ContentDocument, refresh: bool) -> RenderReport:
        report = RenderReport(refresh=refresh)
        log_render_start(self.loader.source, len(document.sections), refresh)
        start_time = time.time()

        self._run_step("navigation", report, lambda: self._build_links(document, report))
        self._run_step("sections", report, lambda: self._build_sections(document, report))
        self._run_step("external links", report, lambda: self._build_ext_links(document))
        self._run_step("icons", report, lambda: self._build_dev_icons(document))
        if self.theme is not None:
            self._run_step("theme", report, lambda: self.theme.apply(self.page))

        report.elapsed_s = time.time() - start_time
        log_render_result(report)
        return report

    def _build_links(self, document: ContentDocument, report: RenderReport) -> None:
        entries = pack([build_nav_entry(section) for section in document.sections])
        report.nav_entries = len(entries)
        entries.attach_to(self.context.nav_list)

    def _build_sections(self, document: ContentDocument, report: RenderReport) -> None:
        content = self.context.content
        for section in document.sections:
            try:
                element = build_section(section, self.config.resume, self.viewport_width)
            except Exception as e:
                log_step_failure(f"section '{section.slug}'", e)
                report.failures.append(f"section '{section.slug}': {e}")
                continue
            content.append(element)
            report.sections_rendered.append(section.slug)

    def _build_ext_links(self, document: ContentDocument) -> None:
        container = self.context.container("ext_links")
        if container is None:
            _log_debug("No external link container; skipping")
            return
        pack([build_ext_link(link) for link in document.ext]).attach_to(container)

    def _build_dev_icons(self, document: ContentDocument) -> None:
        if document.icons is None:
            _log_debug("No icons in content; skipping")
            return

        for role, names in (
            ("lang_icons", document.icons.languages),
            ("tool_icons", document.icons.tools),
        ):
            container = self.context.container(role)
            if container is None:
                _log_debug(f"No {role} container; skipping")
                continue
            icons: Fragment = pack([build_dev_icon(name) for name in names])
            icons.attach_to(container)
