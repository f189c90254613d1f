"""Coercion and escaping helpers shared by both rendering paths.

Section settings arrive from JSON editors, YAML files and legacy storage, so
numbers may be strings, toggles may be ``"false"`` and link lists may still be
JSON-encoded text. The helpers in this module turn those loosely typed values
into the concrete Python values the layouts interpolate. None of them raise
for malformed input; each documents the value it falls back to instead.

Examples
--------
>>> from mailblocks.formatting import to_int, is_truthy, clean_url
>>> to_int("24px")
24
>>> is_truthy("false")
False
>>> clean_url("javascript:alert(1)")
''
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import json
import re
import typing as typ

from markupsafe import Markup, escape

from ._constants import UNSUBSCRIBE_MERGE_TAG, UNSUBSCRIBE_PLACEHOLDER

if typ.TYPE_CHECKING:
    import collections.abc as cabc

ALIGNMENTS = ("left", "center", "right")
ALLOWED_URL_SCHEMES = frozenset({"http", "https", "mailto", "tel"})
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")
_NUMERIC_STRING = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_URL_SCHEME = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*):")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

CellT = typ.TypeVar("CellT")


@dc.dataclass(frozen=True, slots=True)
class LinkItem:
    """A labelled hyperlink taken from a ``link_list`` setting."""

    label: str
    url: str = ""


def to_text(value: object) -> str:
    """Return ``value`` as text, mapping ``None`` to an empty string."""
    match value:
        case None:
            return ""
        case bool():
            return "1" if value else ""
        case str():
            return value
        case _:
            return str(value)


def to_int(value: object, default: int = 0) -> int:
    """Coerce ``value`` to an integer the way loosely typed settings expect.

    Strings contribute their leading integer (``"24px"`` becomes ``24``),
    floats are truncated toward zero and anything unparseable yields
    ``default``.
    """
    match value:
        case bool():
            return int(value)
        case int():
            return value
        case float():
            return int(value) if value == value and abs(value) != float("inf") else default
        case str():
            found = _LEADING_INT.match(value)
            return int(found.group(1)) if found else default
        case _:
            return default


def to_float(value: object, default: float = 0.0) -> float:
    """Coerce ``value`` to a float using its leading numeric prefix."""
    match value:
        case bool():
            return float(value)
        case int() | float():
            return float(value)
        case str():
            found = _LEADING_NUMBER.match(value)
            return float(found.group(1)) if found else default
        case _:
            return default


def clamp(value: int, lower: int, upper: int) -> int:
    """Return ``value`` limited to the inclusive ``[lower, upper]`` range."""
    return max(lower, min(upper, value))


def is_truthy(value: object) -> bool:
    """Evaluate a toggle or conditional value.

    Parameters
    ----------
    value : object
        Raw value taken from settings or template data.

    Returns
    -------
    bool
        ``bool`` values pass through. Strings are false when empty, ``"0"``
        or ``"false"`` (any case); numeric strings are true only when greater
        than zero and any other string is true. Numbers are true only when
        their integer part is positive. Everything else is true when
        non-empty.
    """
    match value:
        case None:
            return False
        case bool():
            return value
        case str():
            text = value.strip()
            if text in ("", "0") or text.lower() == "false":
                return False
            if _NUMERIC_STRING.match(text):
                return to_float(text) > 0
            return True
        case int() | float():
            return to_int(value) > 0
        case _:
            return bool(value)


def clean_url(value: object) -> str:
    """Return a URL that is safe to place in an ``href`` or ``src`` attribute.

    Merge tags (values starting with ``{{`` or ``{%``) pass through untouched
    so the email service can expand them at send time. Relative URLs and
    fragments are kept, absolute URLs must use an allowed scheme and are
    otherwise dropped. HTML escaping is left to the caller's template.
    """
    text = _CONTROL_CHARS.sub("", to_text(value)).strip()
    if not text:
        return ""
    if text.startswith(("{{", "{%")):
        return text
    scheme = _URL_SCHEME.match(text)
    if scheme and scheme.group(1).lower() not in ALLOWED_URL_SCHEMES:
        return ""
    return text.replace(" ", "%20")


def resolve_link_url(value: object, fallback: str = "#") -> str:
    """Clean a link-list URL, expanding the unsubscribe placeholder."""
    raw = to_text(value)
    if UNSUBSCRIBE_PLACEHOLDER in raw:
        return UNSUBSCRIBE_MERGE_TAG
    return clean_url(raw) or fallback


def choose(value: object, allowed: cabc.Sequence[str], default: str) -> str:
    """Return ``value`` when it is one of ``allowed``, else ``default``."""
    text = to_text(value).strip().lower()
    return text if text in allowed else default


def choose_alignment(value: object, default: str = "left") -> str:
    """Validate a text alignment setting."""
    return choose(value, ALIGNMENTS, default)


def strip_tags(value: object) -> str:
    """Remove markup from ``value`` and collapse whitespace.

    Entities are decoded, so ``"<span>&pound;10</span>"`` becomes ``"£10"``.
    """
    return Markup(to_text(value)).striptags()


def css_value(value: object) -> Markup:
    """Return ``value`` with characters that could end a CSS declaration removed.

    Used where a setting lands inside a ``<style>`` element, where HTML
    entities are not decoded and autoescaping would corrupt quoted font names.
    """
    return Markup(re.sub(r"[<>{};\"\\&]", "", to_text(value)).strip())


def nl2br(value: object) -> Markup:
    """Escape ``value`` and turn line breaks into ``<br />`` tags."""
    escaped = escape(to_text(value))
    lines = re.split(r"\r\n|\r|\n", str(escaped))
    return Markup("<br />\n").join(Markup(line) for line in lines)


def format_expiry(value: object) -> str:
    """Format an ISO date as ``"31 Dec 2025"``.

    Values that are not ISO dates are returned unchanged so free-text expiry
    notes ("Ends Sunday") still render.
    """
    text = to_text(value).strip()
    if not text:
        return ""
    try:
        parsed = dt.datetime.fromisoformat(text).date()
    except ValueError:
        try:
            parsed = dt.date.fromisoformat(text[:10])
        except ValueError:
            return text
    return f"{parsed.day} {MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def chunk_cells(
    cells: cabc.Sequence[CellT], columns: int
) -> list[list[CellT | None]]:
    """Split ``cells`` into rows of ``columns``, padding the last with ``None``.

    >>> chunk_cells(["a", "b", "c"], 2)
    [['a', 'b'], ['c', None]]
    """
    rows: list[list[CellT | None]] = []
    for start in range(0, len(cells), columns):
        row: list[CellT | None] = list(cells[start : start + columns])
        row.extend([None] * (columns - len(row)))
        rows.append(row)
    return rows


def parse_link_list(value: object) -> list[LinkItem]:
    """Decode a link list from a list of mappings or its JSON encoding.

    Entries without a label are dropped. Malformed JSON yields an empty list.
    """
    raw: object = value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            raw = json.loads(text)
        except json.JSONDecodeError:
            return []
    if not isinstance(raw, list):
        return []
    links: list[LinkItem] = []
    for entry in raw:
        match entry:
            case {"label": label, **rest} if to_text(label).strip():
                links.append(
                    LinkItem(label=to_text(label).strip(), url=to_text(rest.get("url")))
                )
            case LinkItem() if entry.label:
                links.append(entry)
            case _:
                continue
    return links


__all__ = [
    "ALIGNMENTS",
    "LinkItem",
    "choose",
    "chunk_cells",
    "choose_alignment",
    "clamp",
    "clean_url",
    "css_value",
    "format_expiry",
    "is_truthy",
    "nl2br",
    "parse_link_list",
    "resolve_link_url",
    "strip_tags",
    "to_float",
    "to_int",
    "to_text",
]
