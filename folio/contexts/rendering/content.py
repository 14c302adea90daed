"""
Content Document Structure

Defines the structured representation of the JSON content document and
validates raw payloads against it.

Expected payload shape:
    {
      "sections": [
        {"section": "about", "title": "About", "type": "pg", "body": "Hello"},
        {"section": "work", "title": "Work", "type": "ls",
         "body": [{"header": "...", "subheader": "...", "subsubheader": "...", "main": "..."}]},
        {"section": "resume", "title": "Resume", "type": "rs", "file": "files/resume.pdf"}
      ],
      "icons": {"languages": ["python"], "tools": ["git"]},
      "ext": {"github": {"icon": "github-original", "link": "https://github.com/..."}}
    }
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from folio.contexts.rendering.exceptions import InvalidContentError

REQUIRED_SECTION_FIELDS = ("section", "title", "type")
LIST_ENTRY_FIELDS = ("header", "subheader", "subsubheader", "main")


class SectionKind(str, Enum):
    """Closed set of section kinds, keyed by their tag in the content document."""

    PARAGRAPH = "pg"
    LIST = "ls"
    RESUME = "rs"

    @classmethod
    def tags(cls) -> List[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class ListEntry:
    """One entry of a list section; every part is optional."""

    header: Optional[str] = None
    subheader: Optional[str] = None
    subsubheader: Optional[str] = None
    main: Optional[str] = None


@dataclass(frozen=True)
class Section:
    """
    One titled, independently addressable block of page content.

    Attributes:
        slug: Unique identifier used for the container id and anchor target
        title: Section title (raw markup)
        kind: Section kind
        body: Paragraph markup (PARAGRAPH), list entries (LIST), optional text (RESUME)
        file: Resume document path (RESUME only)
    """

    slug: str
    title: str
    kind: SectionKind
    body: Union[str, Tuple[ListEntry, ...], None] = None
    file: Optional[str] = None

    @property
    def anchor_id(self) -> str:
        return f"{self.slug}-section"

    @property
    def href(self) -> str:
        return f"#{self.anchor_id}"


@dataclass(frozen=True)
class IconSet:
    languages: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExternalLink:
    key: str
    icon: str
    link: str


@dataclass(frozen=True)
class ContentDocument:
    """Validated content document: ordered sections plus optional icons and links."""

    sections: Tuple[Section, ...]
    icons: Optional[IconSet] = None
    ext: Tuple[ExternalLink, ...] = ()

    @property
    def slugs(self) -> List[str]:
        return [section.slug for section in self.sections]


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _string_list(value: Any, where: str, problems: List[str]) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        problems.append(f"{where}: must be a list of strings")
        return ()
    return tuple(value)


def _parse_list_body(body: Any, where: str, problems: List[str]) -> Tuple[ListEntry, ...]:
    if not isinstance(body, list):
        problems.append(f"{where}.body: list sections need a list of entries")
        return ()

    entries = []
    for j, raw_entry in enumerate(body):
        if not isinstance(raw_entry, dict):
            problems.append(f"{where}.body[{j}]: must be an object")
            continue
        values = {}
        for name in LIST_ENTRY_FIELDS:
            value = raw_entry.get(name)
            if value is not None and not isinstance(value, str):
                problems.append(f"{where}.body[{j}].{name}: must be a string")
                continue
            values[name] = value
        entries.append(ListEntry(**values))
    return tuple(entries)


def _parse_section(raw: Any, index: int, seen: set, problems: List[str]) -> Optional[Section]:
    where = f"sections[{index}]"

    if not isinstance(raw, dict):
        problems.append(f"{where}: must be an object")
        return None

    before = len(problems)
    for name in REQUIRED_SECTION_FIELDS:
        if not _is_text(raw.get(name)):
            problems.append(f"{where}: missing required field '{name}'")
    if len(problems) > before:
        return None

    slug = raw["section"]
    if any(ch.isspace() for ch in slug):
        problems.append(f"{where}: slug '{slug}' must not contain whitespace")
    elif slug in seen:
        problems.append(f"{where}: duplicate slug '{slug}'")
    seen.add(slug)

    type_tag = raw["type"]
    if type_tag not in SectionKind.tags():
        problems.append(
            f"{where}: unknown type '{type_tag}' (expected one of {', '.join(SectionKind.tags())})"
        )
        return None
    kind = SectionKind(type_tag)

    body = raw.get("body")
    file = None
    if kind is SectionKind.PARAGRAPH:
        if not isinstance(body, str):
            problems.append(f"{where}.body: paragraph sections need a string body")
    elif kind is SectionKind.LIST:
        body = _parse_list_body(body, where, problems)
    elif kind is SectionKind.RESUME:
        file = raw.get("file")
        if not _is_text(file):
            problems.append(f"{where}: resume sections need a 'file'")
        if body is not None and not isinstance(body, str):
            problems.append(f"{where}.body: resume body must be a string when present")

    if len(problems) > before:
        return None

    return Section(slug=slug, title=raw["title"], kind=kind, body=body, file=file)


def _parse_icons(raw: Any, problems: List[str]) -> Optional[IconSet]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        problems.append("icons: must be an object")
        return None
    return IconSet(
        languages=_string_list(raw.get("languages"), "icons.languages", problems),
        tools=_string_list(raw.get("tools"), "icons.tools", problems),
    )


def _parse_ext(raw: Any, problems: List[str]) -> Tuple[ExternalLink, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, dict):
        problems.append("ext: must be an object")
        return ()

    links = []
    for key, entry in raw.items():
        if not isinstance(entry, dict) or not _is_text(entry.get("icon")) or not _is_text(
            entry.get("link")
        ):
            problems.append(f"ext.{key}: needs string 'icon' and 'link'")
            continue
        links.append(ExternalLink(key=key, icon=entry["icon"], link=entry["link"]))
    return tuple(links)


def validate_content(payload: Any) -> List[str]:
    """
    Check a raw payload and return every problem found (empty when valid).

    Args:
        payload: Decoded JSON content document

    Returns:
        List of human-readable problems
    """
    problems: List[str] = []
    _parse_document(payload, problems)
    return problems


def _parse_document(payload: Any, problems: List[str]) -> Optional[ContentDocument]:
    if not isinstance(payload, dict):
        problems.append("document: must be a JSON object")
        return None

    raw_sections = payload.get("sections")
    if not isinstance(raw_sections, list):
        problems.append("document: missing 'sections' array")
        raw_sections = []
    elif not raw_sections:
        problems.append("document: 'sections' must contain at least one section")

    seen: set = set()
    sections = [_parse_section(raw, i, seen, problems) for i, raw in enumerate(raw_sections)]
    icons = _parse_icons(payload.get("icons"), problems)
    ext = _parse_ext(payload.get("ext"), problems)

    if problems:
        return None
    return ContentDocument(sections=tuple(sections), icons=icons, ext=ext)


def parse_content(payload: Dict[str, Any]) -> ContentDocument:
    """
    Validate a raw payload and build a ContentDocument.

    The document is accepted whole or rejected whole.

    Args:
        payload: Decoded JSON content document

    Returns:
        ContentDocument

    Raises:
        InvalidContentError: If any section or optional block is invalid
    """
    problems: List[str] = []
    document = _parse_document(payload, problems)
    if document is None:
        raise InvalidContentError(problems)
    return document
