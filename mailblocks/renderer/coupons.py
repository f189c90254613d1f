"""Coupon layouts.

Six coupon sections share one settings shape (``CouponSettings``) and differ
only in markup: ``coupon`` (dashed box), ``coupon_banner`` (55/45 columns),
``coupon_card``, ``coupon_split`` (two equal columns), ``coupon_minimal`` and
``coupon_ribbon``. Column widths always add up to the section width.

>>> split_widths(600)
(300, 300)
>>> split_widths(601)
(301, 300)
>>> banner_widths(600)
(330, 270)
"""

from __future__ import annotations

import functools
import logging
import typing as typ

from ..formatting import format_expiry
from .settings import CouponSettings, decode_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markupsafe import Markup

    from .context import LayoutContext, LayoutFunction

COUPON_VARIANTS = (
    "coupon",
    "coupon_banner",
    "coupon_card",
    "coupon_split",
    "coupon_minimal",
    "coupon_ribbon",
)
BANNER_RATIO = 0.55
DEFAULT_VARIANT = "coupon"

logger = logging.getLogger(__name__)


def split_widths(max_width: int) -> tuple[int, int]:
    """Return two column widths, each half of ``max_width`` rounded."""
    left = (max_width + 1) // 2
    return left, max_width - left


def banner_widths(max_width: int) -> tuple[int, int]:
    """Return the 55/45 column widths used by ``coupon_banner``."""
    left = int(max_width * BANNER_RATIO)
    return left, max_width - left


def render_coupon_variant(
    variant: str, settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Render coupon ``variant`` from the shared coupon settings.

    An unknown variant logs a warning and renders as the default ``coupon``.
    """
    if variant not in COUPON_VARIANTS:
        logger.warning(
            "unknown coupon variant %r; rendering %r", variant, DEFAULT_VARIANT
        )
        variant = DEFAULT_VARIANT
    s = decode_settings(CouponSettings, settings)
    match variant:
        case "coupon_split":
            left_width, right_width = split_widths(ctx.max_width)
        case "coupon_banner":
            left_width, right_width = banner_widths(ctx.max_width)
        case _:
            left_width, right_width = ctx.max_width, 0
    return ctx.render(
        f"sections/{variant}.jinja",
        s=s,
        expiry=format_expiry(s.expiry_date),
        left_width=left_width,
        right_width=right_width,
    )


def coupon_layouts() -> dict[str, LayoutFunction]:
    """Return a layout function per coupon variant slug."""
    return {
        variant: functools.partial(render_coupon_variant, variant)
        for variant in COUPON_VARIANTS
    }


__all__ = [
    "BANNER_RATIO",
    "COUPON_VARIANTS",
    "DEFAULT_VARIANT",
    "banner_widths",
    "coupon_layouts",
    "render_coupon_variant",
    "split_widths",
]
