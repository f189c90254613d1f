"""Social profile icons.

Known platforms are drawn as inline SVG inside a coloured circle. Outlook
(MSO) does not render inline SVG, so each of those icons also carries an
MSO-only table cell showing the platform's abbreviation. Platforms without an
icon render the abbreviation circle for every client.

>>> resolve_platform("Twitter", "")
'x'
>>> resolve_platform("Profile", "https://www.instagram.com/shop")
'instagram'
>>> abbreviate("Blue Sky")
'BS'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import urlsplit

from markupsafe import Markup

from ..formatting import choose_alignment, clean_url, parse_link_list
from .settings import SocialSettings, decode_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import LayoutContext


@dc.dataclass(frozen=True, slots=True)
class Platform:
    abbreviation: str
    path: str
    domains: tuple[str, ...] = ()


# Paths use a 24x24 viewBox.
PLATFORMS: dict[str, Platform] = {
    "facebook": Platform(
        "f",
        "M14 8h3V4h-3c-2.8 0-5 2.2-5 5v2H7v4h2v9h4v-9h3l1-4h-4V9c0-.6.4-1 1-1z",
        ("facebook.com", "fb.com"),
    ),
    "instagram": Platform(
        "IG",
        "M7 2h10a5 5 0 0 1 5 5v10a5 5 0 0 1-5 5H7a5 5 0 0 1-5-5V7a5 5 0 0 1 5-5z"
        "m0 2a3 3 0 0 0-3 3v10a3 3 0 0 0 3 3h10a3 3 0 0 0 3-3V7a3 3 0 0 0-3-3H7z"
        "m5 3.5a4.5 4.5 0 1 1 0 9 4.5 4.5 0 0 1 0-9zm0 2a2.5 2.5 0 1 0 0 5 "
        "2.5 2.5 0 0 0 0-5zM17.5 5.5a1 1 0 1 1 0 2 1 1 0 0 1 0-2z",
        ("instagram.com",),
    ),
    "x": Platform(
        "X",
        "M3 3h4.6l4.3 6 5.1-6H20l-6.7 7.9L21 21h-4.6l-4.7-6.5L6 21H3.1l7.2-8.4L3 3z",
        ("x.com", "twitter.com"),
    ),
    "linkedin": Platform(
        "in",
        "M4 3a2 2 0 1 1 0 4 2 2 0 0 1 0-4zM2 9h4v12H2V9zm7 0h3.8v1.7h.1c.5-1 "
        "1.8-2 3.8-2 4 0 4.8 2.6 4.8 6V21h-4v-5.6c0-1.3 0-3-1.9-3s-2.1 1.5-2.1 "
        "2.9V21H9V9z",
        ("linkedin.com",),
    ),
    "youtube": Platform(
        "YT",
        "M23 7.2a3 3 0 0 0-2.1-2.1C19 4.6 12 4.6 12 4.6s-7 0-8.9.5A3 3 0 0 0 1 "
        "7.2 31 31 0 0 0 .5 12a31 31 0 0 0 .5 4.8 3 3 0 0 0 2.1 2.1c1.9.5 8.9.5 "
        "8.9.5s7 0 8.9-.5a3 3 0 0 0 2.1-2.1 31 31 0 0 0 .5-4.8 31 31 0 0 0-.5-4.8z"
        "M9.8 15.1V8.9l5.8 3.1-5.8 3.1z",
        ("youtube.com", "youtu.be"),
    ),
    "tiktok": Platform(
        "TT",
        "M16.5 2h-3.3v13.2a2.9 2.9 0 1 1-2.9-2.9c.3 0 .6 0 .9.1V9a6.3 6.3 0 1 0 "
        "5.3 6.2V8.5a7.9 7.9 0 0 0 4.5 1.4V6.6a4.6 4.6 0 0 1-4.5-4.6z",
        ("tiktok.com",),
    ),
    "pinterest": Platform(
        "P",
        "M12 2a10 10 0 0 0-3.6 19.3c-.1-.8-.2-2 0-2.9l1.2-5s-.3-.6-.3-1.5c0-1.4.8"
        "-2.5 1.8-2.5.9 0 1.3.7 1.3 1.4 0 .9-.6 2.2-.9 3.4-.2 1 .5 1.9 1.6 1.9 1.9"
        " 0 3.3-2 3.3-4.8 0-2.5-1.8-4.3-4.4-4.3-3 0-4.8 2.3-4.8 4.6 0 .9.4 1.9.8 "
        "2.4l.1.4-.3 1.1c0 .2-.2.3-.4.2-1.3-.6-2.1-2.5-2.1-4 0-3.3 2.4-6.3 6.9-6.3"
        " 3.6 0 6.4 2.6 6.4 6 0 3.6-2.3 6.5-5.4 6.5-1.1 0-2.1-.6-2.4-1.2l-.7 2.5c"
        "-.2.9-.9 2.1-1.3 2.8A10 10 0 1 0 12 2z",
        ("pinterest.com", "pin.it"),
    ),
}
PLATFORM_ALIASES = {
    "twitter": "x",
    "x (twitter)": "x",
    "fb": "facebook",
    "ig": "instagram",
    "insta": "instagram",
    "yt": "youtube",
    "linked in": "linkedin",
}


@dc.dataclass(frozen=True, slots=True)
class SocialIcon:
    label: str
    url: str
    abbreviation: str
    svg: Markup | None


def resolve_platform(label: str, url: str) -> str | None:
    """Return the platform key for a link, matching the label then the URL."""
    key = label.strip().lower()
    key = PLATFORM_ALIASES.get(key, key)
    if key in PLATFORMS:
        return key
    host = (urlsplit(url).hostname or "").lower()
    for name, platform in PLATFORMS.items():
        if any(host == d or host.endswith(f".{d}") for d in platform.domains):
            return name
    return None


def abbreviate(label: str) -> str:
    """Return a one or two letter abbreviation for an unknown platform."""
    words = label.split()
    if not words:
        return "?"
    if len(words) == 1:
        return words[0][0].upper()
    return (words[0][0] + words[1][0]).upper()


def _svg(path: str, *, size: int, color: str) -> Markup:
    return Markup(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" '
        'width="{size}" height="{size}" fill="{color}" fill-rule="evenodd" '
        'style="display:inline-block;vertical-align:middle;border:0;">'
        '<path d="{path}"/></svg>'
    ).format(size=size, color=color, path=path)


def render_social(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Render a centred (or aligned) row of social profile icons."""
    s = decode_settings(SocialSettings, settings)
    icon_size = max(16, s.icon_size)
    glyph_size = max(10, round(icon_size * 0.55))
    icons: list[SocialIcon] = []
    for link in parse_link_list(s.links):
        url = clean_url(link.url) or "#"
        name = resolve_platform(link.label, url)
        platform = PLATFORMS.get(name) if name else None
        if platform is None:
            icons.append(SocialIcon(link.label, url, abbreviate(link.label), None))
            continue
        svg = _svg(platform.path, size=glyph_size, color=s.icon_text_color)
        icons.append(SocialIcon(link.label, url, platform.abbreviation, svg))
    if not icons:
        return Markup("")
    return ctx.render(
        "sections/social.jinja",
        s=dc.replace(s, icon_size=icon_size),
        icons=icons,
        abbr_size=max(10, icon_size * 2 // 5),
        align=choose_alignment(s.alignment, "center"),
    )


__all__ = [
    "PLATFORMS",
    "Platform",
    "SocialIcon",
    "abbreviate",
    "render_social",
    "resolve_platform",
]
