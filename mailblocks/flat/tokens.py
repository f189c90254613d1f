"""Token substitution for flat templates.

Flat templates carry ``{{name}}`` placeholders. ``substitute_tokens`` replaces
the campaign tokens from a data mapping and ``apply_settings`` replaces the
``setting_*`` family plus the composite ``navigation_links`` and
``footer_links`` tokens from the template settings. ``render_tokens`` does
both at once. Each runs a single regex pass, so text introduced by a
replacement is never scanned again and a value that happens to contain
``{{coupon_code}}`` or ``{{setting_primary_color}}`` stays literal.

Examples
--------
>>> substitute_tokens("<h1>{{campaign_headline}}</h1>", {"campaign_headline": "A & B"})
'<h1>A &amp; B</h1>'
>>> substitute_tokens("{{mystery}}", {})
'{{mystery}}'
"""

from __future__ import annotations

import datetime as dt
import enum
import re
import typing as typ

from markupsafe import Markup, escape

from .._constants import UNSUBSCRIBE_MERGE_TAG
from ..formatting import clean_url, resolve_link_url, to_text
from .settings import TemplateSettings, parse_template_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class TokenEscape(str, enum.Enum):
    """How a token value is made safe before it is inserted."""

    TEXT = "text"
    URL = "url"
    RAW = "raw"


TOKENS: dict[str, TokenEscape] = {
    "campaign_headline": TokenEscape.TEXT,
    "campaign_description": TokenEscape.TEXT,
    "campaign_image": TokenEscape.URL,
    "coupon_code": TokenEscape.TEXT,
    "coupon_text": TokenEscape.TEXT,
    # built by render_products_block, which escapes its own values
    "products_block": TokenEscape.RAW,
    "store_name": TokenEscape.TEXT,
    "store_url": TokenEscape.URL,
    "logo_url": TokenEscape.URL,
    "unsubscribe_url": TokenEscape.URL,
    "current_year": TokenEscape.TEXT,
    "subject": TokenEscape.TEXT,
    "preview_text": TokenEscape.TEXT,
}

_TOKEN = re.compile(r"\{\{(\w+)\}\}")
_SETTING_TOKEN = re.compile(r"\{\{(setting_\w+|navigation_links|footer_links)\}\}")

NAV_SEPARATOR = Markup('<span style="color:#cccccc;font-size:13px;"> | </span>')
FOOTER_SEPARATOR = Markup(
    '<span style="color:#999999;font-size:12px;"> &middot; </span>'
)


def token_default(name: str) -> str:
    """Return the value used when ``name`` is missing from the data."""
    match name:
        case "current_year":
            return str(dt.datetime.now(dt.UTC).year)
        case "unsubscribe_url":
            return UNSUBSCRIBE_MERGE_TAG
        case _:
            return ""


def escape_token(name: str, value: object) -> str:
    """Escape ``value`` according to the rule registered for ``name``."""
    match TOKENS[name]:
        case TokenEscape.RAW:
            return to_text(value)
        case TokenEscape.URL:
            return str(escape(clean_url(value)))
        case _:
            # Markup values are trusted and inserted as-is
            return str(escape(value if isinstance(value, Markup) else to_text(value)))


def substitute_tokens(html: str, data: cabc.Mapping[str, typ.Any]) -> str:
    """Replace every known ``{{token}}`` in ``html`` with its escaped value.

    Parameters
    ----------
    html : str
        Template text.
    data : Mapping[str, Any]
        Token values keyed by token name. Missing or ``None`` values fall
        back to ``token_default``.

    Returns
    -------
    str
        ``html`` with known tokens replaced. Unknown tokens, including the
        ``setting_*`` family, are left exactly as written.
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in TOKENS:
            return match.group(0)
        return _data_value(name, data)

    return _TOKEN.sub(_replace, html)


def _data_value(name: str, data: cabc.Mapping[str, typ.Any]) -> str:
    value = data.get(name)
    if value is None:
        value = token_default(name)
    return escape_token(name, value)


def setting_values(settings: TemplateSettings) -> dict[str, str]:
    """Return the escaped replacement for each ``setting_*`` token."""
    values: dict[str, object] = {
        "setting_primary_color": settings.primary_color,
        "setting_background_color": settings.background_color,
        "setting_content_background": settings.content_background,
        "setting_text_color": settings.text_color,
        "setting_link_color": settings.link_color,
        "setting_button_color": settings.button_color,
        "setting_button_text_color": settings.button_text_color,
        "setting_button_border_radius": f"{settings.button_border_radius}px",
        "setting_font_family": settings.font_family,
        "setting_heading_font_family": settings.resolved_heading_font,
        "setting_max_width": f"{settings.max_width}px",
        "setting_logo_url": clean_url(settings.logo_url),
        "setting_logo_width": f"{settings.logo_width}px",
        "setting_header_text": settings.header_text,
        "setting_footer_text": settings.footer_text,
        "setting_logo_alignment": settings.logo_alignment,
        "setting_header_bg": settings.header_bg,
    }
    return {name: str(escape(value)) for name, value in values.items()}


def render_navigation(settings: TemplateSettings) -> Markup:
    """Render the header navigation anchors, or nothing when hidden."""
    if not settings.show_nav:
        return Markup("")
    anchors = [
        Markup(
            '<a href="{url}" style="color:{color};text-decoration:none;'
            "font-family:{font};font-size:13px;font-weight:600;padding:0 10px;"
            '" target="_blank">{label}</a>'
        ).format(
            url=clean_url(link.url),
            color=settings.link_color,
            font=settings.font_family,
            label=link.label,
        )
        for link in settings.nav_links
        if link.label and link.url
    ]
    return NAV_SEPARATOR.join(anchors)


def render_footer_links(settings: TemplateSettings) -> Markup:
    """Render the footer anchors.

    A link whose URL contains ``{{unsubscribe_url}}`` points at the email
    service's unsubscribe merge tag instead.
    """
    anchors = [
        Markup(
            '<a href="{url}" style="color:{color};text-decoration:underline;'
            'font-family:{font};font-size:12px;" target="_blank">{label}</a>'
        ).format(
            url=resolve_link_url(link.url),
            color=settings.link_color,
            font=settings.font_family,
            label=link.label,
        )
        for link in settings.footer_links
        if link.label
    ]
    return FOOTER_SEPARATOR.join(anchors)


def apply_settings(
    html: str,
    settings: TemplateSettings | cabc.Mapping[str, typ.Any] | str | None,
) -> str:
    """Replace ``setting_*``, ``navigation_links`` and ``footer_links`` tokens.

    ``settings`` may be a ``TemplateSettings`` or anything
    ``parse_template_settings`` accepts. Unrecognised ``setting_*`` tokens
    are left in place.
    """
    values = _settings_values(settings)

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _SETTING_TOKEN.sub(_replace, html)


def _settings_values(
    settings: TemplateSettings | cabc.Mapping[str, typ.Any] | str | None,
) -> dict[str, str]:
    resolved = parse_template_settings(settings)
    values = setting_values(resolved)
    values["navigation_links"] = str(render_navigation(resolved))
    values["footer_links"] = str(render_footer_links(resolved))
    return values


def render_tokens(
    html: str,
    data: cabc.Mapping[str, typ.Any],
    settings: TemplateSettings | cabc.Mapping[str, typ.Any] | str | None,
) -> str:
    """Replace campaign and settings tokens together in one pass.

    Campaign tokens resolve from ``data`` as in ``substitute_tokens``;
    ``setting_*``, ``navigation_links`` and ``footer_links`` resolve from
    ``settings`` as in ``apply_settings``. A campaign value that spells out a
    settings token is therefore inserted literally.

    >>> render_tokens("{{coupon_code}}", {"coupon_code": "{{footer_links}}"}, None)
    '{{footer_links}}'
    """
    values = _settings_values(settings)

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in TOKENS:
            return _data_value(name, data)
        return values.get(name, match.group(0))

    return _TOKEN.sub(_replace, html)


__all__ = [
    "FOOTER_SEPARATOR",
    "NAV_SEPARATOR",
    "TOKENS",
    "TokenEscape",
    "apply_settings",
    "escape_token",
    "render_footer_links",
    "render_navigation",
    "render_tokens",
    "setting_values",
    "substitute_tokens",
    "token_default",
]
