"""Section markers in flat templates.

A flat template is divided into sections by HTML comments such as
``<!-- ============ HERO IMAGE ============ -->``. Each marker starts a section
that runs up to the next marker, or to the end of the document for the last
one. Sections are identified as ``{kind}-{ordinal}``, where the ordinal counts
earlier markers of the same kind, so the second product block in a template is
``products-1``.

Examples
--------
>>> html = (
...     "<body><!-- ==== HERO ==== --><tr>hero</tr>"
...     "<!-- ==== FOOTER ==== --><tr>foot</tr></body>"
... )
>>> doc = parse_sections(html)
>>> doc.ids
['hero-0', 'footer-0']
>>> doc.to_html() == html
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import re
import typing as typ

from markupsafe import escape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

# the label never runs past the end of its own comment
_MARKER = r"<!--\s*={4,}\s*((?:(?!-->).)+?)\s*={4,}\s*-->"
MARKER_PATTERN = re.compile(_MARKER)
# a marker, then whitespace or {{#if ...}} tags, then the section's root row
_ANCHORED_MARKER = re.compile(
    "(" + _MARKER + ")"
    r"((?:\s|\{\{#if\s+[^}]+\}\})*?)"
    r"(<(?:tr|table)\b)",
    re.IGNORECASE,
)
_DUPLICATE_SUFFIX = re.compile(r"-dup\d+$")


class MarkerKind(str, enum.Enum):
    """Canonical section kinds recognised in marker text."""

    HEADER = "header"
    HEADLINE = "headline"
    HERO = "hero"
    COUPON = "coupon"
    PRODUCTS = "products"
    CTA = "cta"
    DIVIDER = "divider"
    FOOTER = "footer"
    UNKNOWN = "unknown"


# First match wins, so the order of this table is part of the section ids.
# "headline" precedes "hero" because markers such as "HEADLINE (no hero
# image)" contain both words. Do not reorder or switch to longest match;
# stored section orders refer to the ids this table produces.
MARKER_KEYWORDS: tuple[tuple[str, MarkerKind], ...] = (
    ("header", MarkerKind.HEADER),
    ("headline", MarkerKind.HEADLINE),
    ("hero", MarkerKind.HERO),
    ("coupon", MarkerKind.COUPON),
    ("product", MarkerKind.PRODUCTS),
    ("cta", MarkerKind.CTA),
    ("divider", MarkerKind.DIVIDER),
    ("footer", MarkerKind.FOOTER),
)


def classify_marker(text: str) -> MarkerKind:
    """Return the kind named by marker ``text``.

    >>> classify_marker("HEADLINE + DESCRIPTION (no hero image)")
    <MarkerKind.HEADLINE: 'headline'>
    """
    lowered = text.strip().lower()
    for keyword, kind in MARKER_KEYWORDS:
        if keyword in lowered:
            return kind
    return MarkerKind.UNKNOWN


class _Ordinals:
    """Hands out ``{kind}-{n}`` ids in document order."""

    def __init__(self) -> None:
        self._counts: dict[MarkerKind, int] = {}

    def next_id(self, kind: MarkerKind) -> str:
        count = self._counts.get(kind, 0)
        self._counts[kind] = count + 1
        return f"{kind.value}-{count}"


@dc.dataclass(frozen=True, slots=True)
class FlatSection:
    """One marker and the content that follows it."""

    id: str
    kind: MarkerKind
    label: str
    html: str


@dc.dataclass(frozen=True, slots=True)
class FlatTemplateDocument:
    """A flat template split at its section markers.

    Attributes
    ----------
    preamble : str
        Everything before the first marker.
    sections : tuple[FlatSection, ...]
        Sections in document order. Each ``html`` starts with its marker.
    postamble : str
        Text after the last section. The last section runs to the end of the
        document, so this is empty for parsed templates.
    """

    preamble: str
    sections: tuple[FlatSection, ...] = ()
    postamble: str = ""

    @property
    def ids(self) -> list[str]:
        """Section ids in document order."""
        return [section.id for section in self.sections]

    def section_map(self) -> dict[str, FlatSection]:
        """Return the sections keyed by id."""
        return {section.id: section for section in self.sections}

    def to_html(self) -> str:
        """Reassemble the document."""
        body = "".join(section.html for section in self.sections)
        return f"{self.preamble}{body}{self.postamble}"


def parse_sections(html: str) -> FlatTemplateDocument:
    """Split ``html`` into preamble and marker-delimited sections.

    A document without markers is returned whole as the preamble.
    """
    markers = list(MARKER_PATTERN.finditer(html))
    if not markers:
        return FlatTemplateDocument(preamble=html)

    ordinals = _Ordinals()
    sections: list[FlatSection] = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(html)
        kind = classify_marker(marker.group(1))
        sections.append(
            FlatSection(
                id=ordinals.next_id(kind),
                kind=kind,
                label=marker.group(1),
                html=html[marker.start() : end],
            )
        )
    return FlatTemplateDocument(
        preamble=html[: markers[0].start()],
        sections=tuple(sections),
    )


def resolve_section_id(
    section_id: str, sections: cabc.Mapping[str, FlatSection]
) -> FlatSection | None:
    """Look up ``section_id``, retrying without a ``-dupN`` suffix.

    Editors clone a section as ``hero-0-dup1``; the clone renders the
    original's content.
    """
    found = sections.get(section_id)
    if found is not None:
        return found
    return sections.get(_DUPLICATE_SUFFIX.sub("", section_id))


def reorder_sections(html: str, section_order: cabc.Iterable[str]) -> str:
    """Rebuild ``html`` with its sections in ``section_order``.

    Parameters
    ----------
    html : str
        Flat template text containing section markers.
    section_order : Iterable[str]
        Section ids in the desired order. Ids may repeat and may carry a
        ``-dupN`` suffix. Ids that resolve to no section are skipped.

    Returns
    -------
    str
        The preamble, the resolved sections in order, then the postamble.
        Documents without markers are returned unchanged.
    """
    document = parse_sections(html)
    if not document.sections:
        return html
    sections = document.section_map()
    parts = [document.preamble]
    for section_id in section_order:
        section = resolve_section_id(section_id, sections)
        if section is None:
            logger.debug("dropping unresolved section id %r", section_id)
            continue
        parts.append(section.html)
    parts.append(document.postamble)
    return "".join(parts)


def inject_section_attributes(html: str) -> str:
    """Tag each section's root row with ``data-section-id``.

    The attribute goes onto the first ``<tr`` or ``<table`` after a marker,
    allowing only whitespace and ``{{#if …}}`` tags in between. No wrapper
    elements are added because email sanitizers drop non-table elements
    inside tables. Markers without such a root are left untouched and take
    no ordinal.
    """
    ordinals = _Ordinals()

    def _inject(match: re.Match[str]) -> str:
        marker, label, between, opening = match.groups()
        section_id = ordinals.next_id(classify_marker(label))
        return f'{marker}{between}{opening} data-section-id="{escape(section_id)}"'

    return _ANCHORED_MARKER.sub(_inject, html)


__all__ = [
    "MARKER_KEYWORDS",
    "MARKER_PATTERN",
    "FlatSection",
    "FlatTemplateDocument",
    "MarkerKind",
    "classify_marker",
    "inject_section_attributes",
    "parse_sections",
    "reorder_sections",
    "resolve_section_id",
]
