"""Section records and the closed set of section kinds."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ..formatting import to_text
from ..registry.section_types import normalize_slug

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class SectionKind(str, enum.Enum):
    """Section types the renderer knows how to lay out."""

    HEADER = "header"
    HERO = "hero"
    HERO_SPLIT = "hero_split"
    TEXT = "text"
    IMAGE = "image"
    PRODUCTS = "products"
    BANNER = "banner"
    CTA = "cta"
    COUPON = "coupon"
    COUPON_BANNER = "coupon_banner"
    COUPON_CARD = "coupon_card"
    COUPON_SPLIT = "coupon_split"
    COUPON_MINIMAL = "coupon_minimal"
    COUPON_RIBBON = "coupon_ribbon"
    DIVIDER = "divider"
    SPACER = "spacer"
    HEADING = "heading"
    LIST = "list"
    SOCIAL = "social"
    FOOTER = "footer"
    UNKNOWN = "unknown"

    @classmethod
    def from_slug(cls, slug: object) -> SectionKind:
        """Map an incoming type string to a kind, or ``UNKNOWN``."""
        try:
            return cls(normalize_slug(slug))
        except ValueError:
            return cls.UNKNOWN


@dc.dataclass(frozen=True, slots=True)
class Section:
    """One addressable content block: a type slug plus sparse settings.

    ``settings`` only holds overrides; missing keys are filled from the
    registry defaults at render time. Rendering never mutates it.
    """

    type: str
    settings: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)
    id: str = ""

    @property
    def kind(self) -> SectionKind:
        """Kind resolved from ``type``."""
        return SectionKind.from_slug(self.type)

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> Section:
        """Decode a persisted ``{id, type, settings}`` mapping.

        A missing or non-mapping ``settings`` value becomes an empty dict.

        Examples
        --------
        >>> Section.from_mapping({"type": "hero", "settings": None}).settings
        {}
        """
        settings = payload.get("settings")
        if settings is not None and hasattr(settings, "items"):
            decoded = dict(settings)
        else:
            decoded = {}
        return cls(
            type=to_text(payload.get("type")),
            settings=decoded,
            id=to_text(payload.get("id")),
        )


__all__ = ["Section", "SectionKind"]
