"""Divider and line style handling."""

from __future__ import annotations

import typing as typ

from ..formatting import choose
from .settings import DividerSettings, decode_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markupsafe import Markup

    from .context import LayoutContext

LINE_STYLES = ("solid", "dashed", "dotted", "double")
# a double border needs at least three pixels to show both lines
MIN_DOUBLE_THICKNESS = 3


def render_divider(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Render a horizontal rule between vertical margins.

    ``solid`` lines are drawn as a filled block, which every client supports.
    ``dashed``, ``dotted`` and ``double`` use a CSS ``border-top`` and add an
    MSO-only solid block for Outlook, which ignores those border styles.
    """
    s = decode_settings(DividerSettings, settings)
    line_style = choose(s.line_style, LINE_STYLES, "solid")
    thickness = max(0, s.thickness)
    if line_style == "double":
        thickness = max(thickness, MIN_DOUBLE_THICKNESS)
    return ctx.render(
        "sections/divider.jinja",
        s=s,
        line_style=line_style,
        thickness=thickness,
    )


__all__ = ["LINE_STYLES", "render_divider"]
