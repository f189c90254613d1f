"""List layout: marker glyph per style and legacy item parsing.

Items are stored either as plain text with one item per line or, in older
campaigns, as a JSON array of strings or ``{"text": ...}`` objects. A value
whose trimmed text starts with ``[`` is read as JSON; anything else, or JSON
that fails to decode, is split on line breaks.

>>> parse_list_items("One\\n\\nTwo")
['One', 'Two']
>>> parse_list_items('[{"text": "One"}, "Two"]')
['One', 'Two']
"""

from __future__ import annotations

import dataclasses as dc
import json
import re
import typing as typ

from markupsafe import Markup

from ..formatting import choose, choose_alignment, to_text
from .settings import ListSettings, decode_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import LayoutContext

# style -> (glyph, font size in px); ``numbers`` is rendered from the index.
LIST_GLYPHS: dict[str, tuple[str, int]] = {
    "bullets": ("&#8226;", 20),
    "checks": ("&#10003;", 16),
    "arrows": ("&#8594;", 16),
    "stars": ("&#9733;", 16),
    "dashes": ("&#8212;", 16),
    "heart": ("&#9829;", 16),
    "diamond": ("&#9670;", 14),
}
LIST_STYLES = (*LIST_GLYPHS, "numbers", "none")


@dc.dataclass(frozen=True, slots=True)
class ListItem:
    text: str
    marker: Markup


def _item_text(entry: object) -> str:
    match entry:
        case {"text": text}:
            return to_text(text).strip()
        case dict():
            return ""
        case _:
            return to_text(entry).strip()


def parse_list_items(raw: object) -> list[str]:
    """Return the non-blank item texts held by an ``items`` setting."""
    entries: list[object]
    if isinstance(raw, list | tuple):
        entries = list(raw)
    else:
        text = to_text(raw)
        decoded: object = None
        if text.strip().startswith("["):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                decoded = None
        entries = decoded if isinstance(decoded, list) else re.split(r"\r\n|\r|\n", text)
    return [item for item in (_item_text(entry) for entry in entries) if item]


def list_marker(style: str, index: int, *, color: str, font: str, size: int) -> Markup:
    """Return the marker span for item ``index`` (zero based) in ``style``."""
    if style == "none":
        return Markup("")
    if style == "numbers":
        return Markup(
            '<span style="font-family:{font};font-size:{size}px;font-weight:700;'
            'color:{color};">{n}.</span>'
        ).format(font=font, size=size, color=color, n=index + 1)
    glyph, glyph_size = LIST_GLYPHS[style]
    return Markup(
        '<span style="color:{color};font-size:{size}px;line-height:1;">{glyph}</span>'
    ).format(color=color, size=glyph_size, glyph=Markup(glyph))


def render_list(settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext) -> Markup:
    """Render a list with a marker column chosen by ``list_style``.

    Unknown styles fall back to bullets; ``none`` drops the marker column.
    """
    s = decode_settings(ListSettings, settings)
    style = choose(s.list_style, LIST_STYLES, "bullets")
    items = [
        ListItem(
            text=text,
            marker=list_marker(
                style,
                index,
                color=s.accent_color,
                font=ctx.font_family,
                size=s.font_size,
            ),
        )
        for index, text in enumerate(parse_list_items(s.items))
    ]
    return ctx.render(
        "sections/list.jinja",
        s=s,
        items=items,
        align=choose_alignment(s.text_align),
    )


__all__ = [
    "LIST_GLYPHS",
    "LIST_STYLES",
    "ListItem",
    "list_marker",
    "parse_list_items",
    "render_list",
]
