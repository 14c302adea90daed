"""
Section Builders

Kind-specific builders that turn validated content into page elements.
Every builder returns an unattached element; the Portfolio attaches it.
"""

from pathlib import PurePosixPath
from typing import Optional

from lxml.html import HtmlElement
from typing_extensions import assert_never

from folio.contexts.building import build, toggle_classes
from folio.contexts.rendering.content import (
    ExternalLink,
    ListEntry,
    Section,
    SectionKind,
)
from folio.utils.config import ResumeConfig

# Tag and class for each optional list entry part, in render order
LIST_ENTRY_PARTS = (
    ("header", "h4", "list-item-header"),
    ("subheader", "h4", "list-item-subheader"),
    ("subsubheader", "h6", "list-item-subsubheader"),
    ("main", "p", "list-item-main"),
)

HIDDEN_CLASS = "hidden"


def build_nav_entry(section: Section) -> HtmlElement:
    """Navigation list item linking to the section's anchor."""
    return build(
        "li",
        {
            "children": [
                build(
                    "a",
                    {
                        "href": section.href,
                        "inner": section.title,
                        "data-text": section.title,
                    },
                )
            ]
        },
    )


def _section_title(section: Section) -> HtmlElement:
    return build("h2", {"class": "section-title", "inner": section.title})


def build_paragraph_section(section: Section) -> HtmlElement:
    return build(
        "div",
        {
            "id": section.anchor_id,
            "class": "section",
            "children": [
                _section_title(section),
                build("p", {"class": "section-body", "inner": section.body}),
            ],
        },
    )


def build_list_entry(entry: ListEntry) -> HtmlElement:
    """List item holding only the parts the entry actually has."""
    return build(
        "li",
        {
            "class": "section-list-item",
            "children": [
                build(tag, {"class": css_class, "inner": getattr(entry, name)})
                if getattr(entry, name)
                else None
                for name, tag, css_class in LIST_ENTRY_PARTS
            ],
        },
    )


def build_list_section(section: Section) -> HtmlElement:
    return build(
        "div",
        {
            "id": section.anchor_id,
            "class": "section",
            "children": [
                _section_title(section),
                build(
                    "ul",
                    {
                        "class": "section-body-list",
                        "children": [build_list_entry(entry) for entry in section.body],
                    },
                ),
            ],
        },
    )


def show_preview(viewport_width: Optional[int], breakpoint_px: int) -> bool:
    """Inline previews are for wide viewports; unknown width counts as wide."""
    return viewport_width is None or viewport_width > breakpoint_px


def build_resume_section(
    section: Section,
    resume_config: ResumeConfig = ResumeConfig(),
    viewport_width: Optional[int] = None,
) -> HtmlElement:
    """
    Resume container: title, optional body, download link and inline preview.

    The preview (iframe + toggle button) is only emitted above the configured
    breakpoint.
    """
    preview_id = f"{section.slug}-preview"
    download_name = resume_config.download_name or PurePosixPath(section.file).name

    children = [
        _section_title(section),
        build("p", {"class": "section-body", "inner": section.body}) if section.body else None,
        build(
            "a",
            {
                "class": "resume-download",
                "href": section.file,
                "download": download_name,
                "inner": resume_config.download_label,
            },
        ),
    ]

    if show_preview(viewport_width, resume_config.breakpoint_px):
        children.extend(
            [
                build(
                    "button",
                    {
                        "type": "button",
                        "class": "preview-toggle mobile-hide",
                        "data-target": preview_id,
                        "inner": resume_config.toggle_label,
                    },
                ),
                build(
                    "iframe",
                    {
                        "id": preview_id,
                        "class": "section-body-iframe mobile-hide",
                        "src": section.file + resume_config.preview_suffix,
                    },
                ),
            ]
        )

    return build(
        "div",
        {"id": section.anchor_id, "class": "section", "children": children},
    )


def toggle_preview(container: HtmlElement) -> bool:
    """
    Show or hide the inline resume preview inside a resume container.

    Returns:
        True if the preview is now visible, False if hidden

    Raises:
        ValueError: If the container has no preview
    """
    frames = container.find_class("section-body-iframe")
    if not frames:
        raise ValueError(f"No resume preview in container {container.get('id')!r}")

    frame = frames[0]
    toggle_classes(frame, HIDDEN_CLASS)
    return HIDDEN_CLASS not in frame.classes


def build_section(
    section: Section,
    resume_config: ResumeConfig = ResumeConfig(),
    viewport_width: Optional[int] = None,
) -> HtmlElement:
    """Dispatch a section to the builder for its kind."""
    kind = section.kind
    if kind is SectionKind.PARAGRAPH:
        return build_paragraph_section(section)
    elif kind is SectionKind.LIST:
        return build_list_section(section)
    elif kind is SectionKind.RESUME:
        return build_resume_section(section, resume_config, viewport_width)
    else:
        assert_never(kind)


def build_ext_link(link: ExternalLink) -> HtmlElement:
    """External profile link with its devicon."""
    return build(
        "a",
        {
            "class": "bounce",
            "href": link.link,
            "target": "_blank",
            "children": [build("i", {"class": f"devicon-{link.icon}"})],
        },
    )


def build_dev_icon(name: str) -> HtmlElement:
    """Skill icon (plain devicon variant) labelled with its name."""
    return build(
        "span",
        {
            "children": [
                build("i", {"class": f"devicon-{name}-plain", "data-text": name}),
            ]
        },
    )
