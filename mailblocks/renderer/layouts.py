"""Layouts for the content and chrome sections.

Each function takes the merged settings mapping and the ``LayoutContext`` of
the render call and returns one self-contained, inline-styled fragment. The
more involved layouts (products, lists, coupons, dividers and social icons)
live in their own modules.
"""

from __future__ import annotations

import typing as typ

from markupsafe import Markup

from ..formatting import (
    LinkItem,
    choose,
    choose_alignment,
    clamp,
    clean_url,
    parse_link_list,
    resolve_link_url,
)
from .settings import (
    BannerSettings,
    CtaSettings,
    FooterSettings,
    HeaderSettings,
    HeadingSettings,
    HeroSettings,
    HeroSplitSettings,
    ImageSettings,
    SpacerSettings,
    TextSettings,
    decode_settings,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import LayoutContext

_ACCENT_MARGINS = {
    "center": "margin:10px auto 0;",
    "right": "margin:10px 0 0 auto;",
    "left": "margin:10px 0 0;",
}


def _links(raw: object) -> list[LinkItem]:
    return [
        LinkItem(label=link.label, url=resolve_link_url(link.url))
        for link in parse_link_list(raw)
    ]


def render_header(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Logo (or store name) with optional navigation links on the right."""
    s = decode_settings(HeaderSettings, settings)
    return ctx.render(
        "sections/header.jinja",
        s=s,
        logo_url=clean_url(s.logo_url),
        store_url=clean_url(ctx.store_url),
        nav_links=_links(s.nav_links) if s.show_nav else [],
    )


def render_hero(settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext) -> Markup:
    """Full-width hero with headline, subtext and an optional button.

    The button row is omitted entirely when ``cta_text`` is empty.
    """
    s = decode_settings(HeroSettings, settings)
    background = ""
    image_url = clean_url(s.image_url).replace("'", "%27")
    if image_url:
        background = (
            f"background-image:url('{image_url}');"
            "background-size:cover;background-position:center;"
        )
    return ctx.render(
        "sections/hero.jinja",
        s=s,
        background=background,
        cta_url=clean_url(s.cta_url) or "#",
    )


def render_hero_split(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Image beside the hero copy, on the side named by ``image_side``."""
    s = decode_settings(HeroSplitSettings, settings)
    image_url = clean_url(s.image_url)
    image_width = (ctx.max_width + 1) // 2 if image_url else 0
    return ctx.render(
        "sections/hero_split.jinja",
        s=s,
        image_url=image_url,
        image_side=choose(s.image_side, ("left", "right"), "left"),
        image_width=image_width,
        copy_width=ctx.max_width - image_width,
        cta_url=clean_url(s.cta_url) or "#",
    )


def render_text(settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext) -> Markup:
    s = decode_settings(TextSettings, settings)
    return ctx.render(
        "sections/text.jinja", s=s, alignment=choose_alignment(s.alignment)
    )


def render_image(settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext) -> Markup:
    """Single image, optionally linked and captioned.

    Renders nothing when no image URL is set. ``width`` is a percentage of
    the section width limited to 1-100.
    """
    s = decode_settings(ImageSettings, settings)
    image_url = clean_url(s.image_url)
    if not image_url:
        return Markup("")
    return ctx.render(
        "sections/image.jinja",
        s=s,
        image_url=image_url,
        link_url=clean_url(s.link_url),
        width=clamp(s.width, 1, 100),
        alignment=choose_alignment(s.alignment, "center"),
    )


def render_banner(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    s = decode_settings(BannerSettings, settings)
    return ctx.render(
        "sections/banner.jinja", s=s, align=choose_alignment(s.text_align, "center")
    )


def render_cta(settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext) -> Markup:
    s = decode_settings(CtaSettings, settings)
    return ctx.render(
        "sections/cta.jinja", s=s, button_url=clean_url(s.button_url) or "#"
    )


def render_heading(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Section heading with an accent rule positioned to match the alignment."""
    s = decode_settings(HeadingSettings, settings)
    align = choose_alignment(s.alignment, "center")
    return ctx.render(
        "sections/heading.jinja",
        s=s,
        align=align,
        accent_margin=_ACCENT_MARGINS[align],
    )


def render_spacer(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    s = decode_settings(SpacerSettings, settings)
    return ctx.render("sections/spacer.jinja", s=s)


def render_footer(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Footer text with the link list joined by pipes.

    A ``{{unsubscribe_url}}`` link becomes the send-time unsubscribe merge
    tag.
    """
    s = decode_settings(FooterSettings, settings)
    return ctx.render(
        "sections/footer.jinja",
        s=s,
        links=_links(s.footer_links) if s.show_unsubscribe else [],
    )


__all__ = [
    "render_banner",
    "render_cta",
    "render_footer",
    "render_header",
    "render_heading",
    "render_hero",
    "render_hero_split",
    "render_image",
    "render_spacer",
    "render_text",
]
