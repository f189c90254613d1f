"""Typed per-type settings decoded from merged section settings.

Section settings are a loosely typed bag: numbers may arrive as ``"24"`` or
``"24px"``, toggles as ``"false"`` and colours as anything at all. Layouts do
not re-parse that bag. Each one calls ``decode_settings`` with its dataclass
and works with plain ``int``, ``bool`` and ``str`` fields from then on.

Fields annotated ``typ.Any`` carry structured values (link lists, item lists,
product ids) through unchanged for the layout to parse.

Examples
--------
>>> decode_settings(SpacerSettings, {"height": "40px", "bg_color": None})
SpacerSettings(height=40, bg_color='')
"""

from __future__ import annotations

import dataclasses as dc
import functools
import typing as typ

from ..formatting import is_truthy, to_int, to_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

SettingsT = typ.TypeVar("SettingsT")


@dc.dataclass(frozen=True, slots=True)
class HeaderSettings:
    logo_url: str = ""
    logo_width: int = 180
    bg_color: str = "#ffffff"
    text_color: str = "#333333"
    show_nav: bool = False
    nav_links: typ.Any = ()
    nav_color: str = "#555555"


@dc.dataclass(frozen=True, slots=True)
class HeroSettings:
    bg_color: str = "#1a1a2e"
    image_url: str = ""
    headline: str = ""
    headline_size: int = 36
    headline_color: str = "#ffffff"
    subtext: str = ""
    subtext_font_size: int = 16
    subtext_color: str = "#cccccc"
    cta_text: str = ""
    cta_url: str = ""
    cta_bg_color: str = "#e63529"
    cta_text_color: str = "#ffffff"
    cta_font_size: int = 16
    cta_padding_h: int = 32
    cta_padding_v: int = 14
    padding_top: int = 48
    padding_bottom: int = 48


@dc.dataclass(frozen=True, slots=True)
class HeroSplitSettings:
    image_url: str = ""
    image_side: str = "left"
    headline: str = ""
    headline_size: int = 30
    headline_color: str = "#111111"
    subtext: str = ""
    subtext_color: str = "#555555"
    cta_text: str = ""
    cta_url: str = ""
    cta_bg_color: str = "#e63529"
    cta_text_color: str = "#ffffff"
    bg_color: str = "#ffffff"
    padding: int = 30


@dc.dataclass(frozen=True, slots=True)
class TextSettings:
    heading: str = ""
    body: str = ""
    text_color: str = "#333333"
    bg_color: str = "#ffffff"
    font_size: int = 15
    padding: int = 30
    alignment: str = "left"


@dc.dataclass(frozen=True, slots=True)
class ImageSettings:
    image_url: str = ""
    alt_text: str = ""
    link_url: str = ""
    width: int = 100
    alignment: str = "center"
    caption: str = ""


@dc.dataclass(frozen=True, slots=True)
class ProductsSettings:
    product_ids: typ.Any = ""
    columns: int = 1
    show_price: bool = True
    show_button: bool = True
    button_text: str = "Buy Now"
    button_color: str = "#e63529"
    button_text_color: str = "#ffffff"
    button_radius: int = 4
    button_font_size: int = 14
    button_padding_h: int = 20
    button_padding_v: int = 10
    title_font_size: int = 16
    price_font_size: int = 16
    product_gap: int = 15
    text_align: str = "left"
    bg_color: str = "#ffffff"


@dc.dataclass(frozen=True, slots=True)
class BannerSettings:
    bg_color: str = "#e63529"
    text_color: str = "#ffffff"
    heading: str = ""
    heading_font_size: int = 26
    subtext: str = ""
    subtext_font_size: int = 15
    text_align: str = "center"
    padding: int = 30


@dc.dataclass(frozen=True, slots=True)
class CtaSettings:
    heading: str = ""
    heading_font_size: int = 26
    subtext: str = ""
    subtext_font_size: int = 15
    button_text: str = ""
    button_url: str = ""
    button_bg: str = "#e63529"
    button_text_color: str = "#ffffff"
    button_font_size: int = 17
    button_padding_h: int = 40
    button_padding_v: int = 16
    button_radius: int = 4
    bg_color: str = "#f5f5f5"
    text_color: str = "#333333"
    padding: int = 40


@dc.dataclass(frozen=True, slots=True)
class CouponSettings:
    """Settings shared by every coupon layout."""

    headline: str = ""
    coupon_text: str = ""
    subtext: str = ""
    coupon_code: str = ""
    expiry_date: str = ""
    bg_color: str = "#fff8e6"
    accent_color: str = "#e63529"
    text_color: str = "#333333"


@dc.dataclass(frozen=True, slots=True)
class DividerSettings:
    color: str = "#e5e5e5"
    thickness: int = 1
    line_style: str = "solid"
    margin_top: int = 20
    margin_bottom: int = 20
    bg_color: str = ""


@dc.dataclass(frozen=True, slots=True)
class SpacerSettings:
    height: int = 30
    bg_color: str = ""


@dc.dataclass(frozen=True, slots=True)
class HeadingSettings:
    text: str = ""
    subtext: str = ""
    font_size: int = 28
    text_color: str = "#111111"
    bg_color: str = "#ffffff"
    alignment: str = "center"
    accent_color: str = "#e63529"
    show_accent: bool = True
    padding: int = 30


@dc.dataclass(frozen=True, slots=True)
class ListSettings:
    heading: str = ""
    items: typ.Any = ""
    list_style: str = "bullets"
    text_color: str = "#333333"
    bg_color: str = "#ffffff"
    accent_color: str = "#e63529"
    font_size: int = 15
    text_align: str = "left"
    padding: int = 30


@dc.dataclass(frozen=True, slots=True)
class SocialSettings:
    heading: str = ""
    links: typ.Any = ()
    icon_size: int = 32
    icon_color: str = "#333333"
    icon_text_color: str = "#ffffff"
    text_color: str = "#333333"
    bg_color: str = "#ffffff"
    alignment: str = "center"
    padding: int = 24


@dc.dataclass(frozen=True, slots=True)
class FooterSettings:
    footer_text: str = ""
    footer_links: typ.Any = ()
    text_color: str = "#999999"
    bg_color: str = "#f5f5f5"
    show_unsubscribe: bool = True


@functools.cache
def _field_hints(cls: type) -> dict[str, typ.Any]:
    return typ.get_type_hints(cls)


def decode_settings(
    cls: type[SettingsT], settings: cabc.Mapping[str, typ.Any]
) -> SettingsT:
    """Decode a merged settings mapping into the dataclass ``cls``.

    Parameters
    ----------
    cls : type
        One of the settings dataclasses in this module.
    settings : Mapping[str, Any]
        Registry defaults merged with the section's overrides.

    Returns
    -------
    SettingsT
        Instance of ``cls``. ``int`` fields go through ``to_int`` (falling
        back to the field default when no number can be read), ``bool``
        fields through ``is_truthy`` and ``str`` fields through ``to_text``.
        Missing keys and ``None`` values keep the field default; unknown keys
        are ignored.
    """
    hints = _field_hints(cls)
    values: dict[str, typ.Any] = {}
    for field in dc.fields(cls):  # type: ignore[arg-type]
        raw = settings.get(field.name)
        if raw is None:
            continue
        hint = hints[field.name]
        if hint is bool:
            values[field.name] = is_truthy(raw)
        elif hint is int:
            values[field.name] = to_int(raw, field.default)
        elif hint is str:
            values[field.name] = to_text(raw)
        else:
            values[field.name] = raw
    return cls(**values)


__all__ = [
    "BannerSettings",
    "CouponSettings",
    "CtaSettings",
    "DividerSettings",
    "FooterSettings",
    "HeaderSettings",
    "HeadingSettings",
    "HeroSettings",
    "HeroSplitSettings",
    "ImageSettings",
    "ListSettings",
    "ProductsSettings",
    "SocialSettings",
    "SpacerSettings",
    "TextSettings",
    "decode_settings",
]
