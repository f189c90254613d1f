"""Template settings for the flat template engine.

Flat templates read their brand colours, fonts, navigation and product block
options from a settings object that is stored as JSON next to the campaign.
``parse_template_settings`` accepts that JSON string (or an already decoded
mapping) and overlays it on the built-in defaults, so a partial or corrupt
payload still yields a complete ``TemplateSettings``.

Examples
--------
>>> settings = parse_template_settings('{"primary_color": "#112233"}')
>>> settings.primary_color, settings.product_layout
('#112233', 'stacked')
>>> parse_template_settings("not json").max_width
600
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ

from .._constants import DEFAULT_MAX_WIDTH, UNSUBSCRIBE_PLACEHOLDER
from ..formatting import LinkItem, is_truthy, parse_link_list, to_int, to_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_FOOTER_TEXT = (
    "You received this email because you subscribed to our newsletter."
)
PRODUCT_LAYOUTS = (
    "stacked",
    "side-by-side",
    "reversed",
    "alternating",
    "compact",
    "full-card",
    "text-only",
    "centered",
    "grid",
    "feature-first",
)
BUTTON_SIZES = ("small", "medium", "large")


def _default_nav_links() -> list[LinkItem]:
    return [LinkItem("Shop", "/shop"), LinkItem("About", "/about")]


def _default_footer_links() -> list[LinkItem]:
    return [
        LinkItem("Privacy Policy", "/privacy-policy"),
        LinkItem("Unsubscribe", UNSUBSCRIBE_PLACEHOLDER),
    ]


@dc.dataclass(slots=True)
class TemplateSettings:
    """Brand and layout options applied to a flat template."""

    logo_url: str = ""
    logo_width: int = 180
    logo_alignment: str = "left"
    header_bg: str = "#ffffff"
    header_text: str = ""
    show_nav: bool = True
    nav_links: list[LinkItem] = dc.field(default_factory=_default_nav_links)
    primary_color: str = "#e84040"
    background_color: str = "#f5f5f5"
    content_background: str = "#ffffff"
    text_color: str = "#333333"
    link_color: str = "#e84040"
    button_color: str = "#e84040"
    button_text_color: str = "#ffffff"
    button_border_radius: int = 4
    font_family: str = "Arial, sans-serif"
    heading_font_family: str | None = None
    footer_text: str = DEFAULT_FOOTER_TEXT
    footer_links: list[LinkItem] = dc.field(default_factory=_default_footer_links)
    max_width: int = DEFAULT_MAX_WIDTH
    show_coupon_block: bool = True
    product_layout: str = "stacked"
    products_per_row: int = 1
    product_gap: int = 24
    product_button_size: str = "medium"
    section_order: list[str] | None = None

    @property
    def resolved_heading_font(self) -> str:
        """Heading font, falling back to the body font."""
        return self.heading_font_family or self.font_family or "Georgia, serif"


_INT_FIELDS = frozenset(
    {
        "logo_width",
        "button_border_radius",
        "max_width",
        "products_per_row",
        "product_gap",
    }
)
_BOOL_FIELDS = frozenset({"show_nav", "show_coupon_block"})
_LINK_FIELDS = frozenset({"nav_links", "footer_links"})


def parse_template_settings(
    raw: str | cabc.Mapping[str, typ.Any] | TemplateSettings | None,
    base: TemplateSettings | None = None,
) -> TemplateSettings:
    """Decode stored template settings and merge them over the defaults.

    Parameters
    ----------
    raw : str, Mapping, TemplateSettings or None
        JSON text, a decoded mapping, an existing settings object (returned
        unchanged) or ``None``. Undecodable JSON and non-object payloads are
        treated as empty.
    base : TemplateSettings, optional
        Settings to overlay instead of the built-in defaults, such as a named
        template style. ``base`` itself is not modified.

    Returns
    -------
    TemplateSettings
        Defaults, or a copy of ``base``, overlaid with every recognised key
        from ``raw``. Unknown keys are ignored; numbers are coerced with
        ``to_int``, toggles with ``is_truthy`` and link lists with
        ``parse_link_list``.
    """
    match raw:
        case TemplateSettings():
            return raw
        case str() if raw.strip():
            try:
                decoded = json.loads(raw)
            except json.JSONDecodeError:
                decoded = {}
            payload = decoded if isinstance(decoded, dict) else {}
        case dict():
            payload = raw
        case _ if raw is not None and hasattr(raw, "items"):
            payload = dict(raw)
        case _:
            payload = {}
    return _build_template_settings(payload, base)


def _build_template_settings(
    payload: cabc.Mapping[str, typ.Any], base: TemplateSettings | None = None
) -> TemplateSettings:
    settings = TemplateSettings() if base is None else copy_settings(base)
    for field in dc.fields(TemplateSettings):
        value = payload.get(field.name)
        if value is None:
            continue
        if field.name in _INT_FIELDS:
            setattr(settings, field.name, abs(to_int(value)))
        elif field.name in _BOOL_FIELDS:
            setattr(settings, field.name, is_truthy(value))
        elif field.name in _LINK_FIELDS:
            setattr(settings, field.name, parse_link_list(value))
        elif field.name == "section_order":
            settings.section_order = _build_section_order(value)
        elif field.name == "heading_font_family":
            settings.heading_font_family = to_text(value) or None
        else:
            setattr(settings, field.name, to_text(value))
    return settings


def copy_settings(settings: TemplateSettings) -> TemplateSettings:
    """Return a copy of ``settings`` that shares no lists with it."""
    return dc.replace(
        settings,
        nav_links=list(settings.nav_links),
        footer_links=list(settings.footer_links),
        section_order=list(settings.section_order)
        if settings.section_order
        else None,
    )


def _build_section_order(value: object) -> list[str] | None:
    match value:
        case list() | tuple():
            order = [to_text(item) for item in value if to_text(item)]
            return order or None
        case str() if value.strip():
            return [part.strip() for part in value.split(",") if part.strip()]
        case _:
            return None


__all__ = [
    "BUTTON_SIZES",
    "DEFAULT_FOOTER_TEXT",
    "PRODUCT_LAYOUTS",
    "TemplateSettings",
    "copy_settings",
    "parse_template_settings",
]
