"""Campaign records and the token data built from them.

``build_campaign_data`` maps a stored campaign onto the token vocabulary of
flat templates. ``sample_data`` supplies realistic placeholder values for
previews, including three products for the ``products_block`` token.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

from .._constants import UNSUBSCRIBE_MERGE_TAG
from ..formatting import to_float, to_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .settings import TemplateSettings

DEFAULT_CURRENCY = "£"
SAMPLE_STORE_NAME = "Your Store"


@dc.dataclass(frozen=True, slots=True)
class CampaignRecord:
    """Campaign-level fields as kept by campaign storage."""

    headline: str = ""
    description: str = ""
    image_url: str = ""
    coupon_code: str = ""
    coupon_discount: float = 0.0
    coupon_type: str = "percent"
    subject: str = ""
    preview_text: str = ""

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> CampaignRecord:
        """Decode a stored row, accepting its ``main_*`` column names too."""
        return cls(
            headline=to_text(payload.get("headline", payload.get("main_headline"))),
            description=to_text(
                payload.get("description", payload.get("main_description"))
            ),
            image_url=to_text(
                payload.get("image_url", payload.get("main_image_url"))
            ),
            coupon_code=to_text(payload.get("coupon_code")).strip(),
            coupon_discount=to_float(payload.get("coupon_discount")),
            coupon_type=to_text(payload.get("coupon_type")) or "percent",
            subject=to_text(payload.get("subject")),
            preview_text=to_text(payload.get("preview_text")),
        )


def coupon_text(campaign: CampaignRecord, *, currency: str = DEFAULT_CURRENCY) -> str:
    """Describe the campaign coupon, or return ``""`` without code or discount.

    >>> coupon_text(CampaignRecord(coupon_code="SAVE20", coupon_discount=20))
    'Use code SAVE20 for 20% off!'
    >>> coupon_text(CampaignRecord(coupon_code="TENOFF", coupon_discount=10,
    ...                            coupon_type="fixed_cart"))
    'Use code TENOFF for £10.00 off!'
    """
    if not campaign.coupon_code or not campaign.coupon_discount:
        return ""
    if campaign.coupon_type == "percent":
        amount = f"{campaign.coupon_discount:,.0f}%"
    else:
        amount = f"{currency}{campaign.coupon_discount:,.2f}"
    return f"Use code {campaign.coupon_code} for {amount} off!"


def current_year() -> str:
    return str(dt.datetime.now(dt.UTC).year)


def build_campaign_data(
    campaign: CampaignRecord | cabc.Mapping[str, typ.Any],
    settings: TemplateSettings,
    *,
    store_name: str = "",
    store_url: str = "",
    currency: str = DEFAULT_CURRENCY,
) -> dict[str, typ.Any]:
    """Return the token data for rendering ``campaign``.

    Parameters
    ----------
    campaign : CampaignRecord or Mapping
        The campaign, or a stored row decoded with ``CampaignRecord.from_mapping``.
    settings : TemplateSettings
        Template settings; supply the logo and the coupon and navigation
        toggles.
    store_name, store_url : str
        Store identity for the ``store_*`` tokens.
    currency : str
        Symbol used for fixed-amount coupons.

    Returns
    -------
    dict[str, Any]
        Token values plus the ``show_coupon_block`` and ``show_nav`` flags
        read by ``{{#if}}`` blocks. ``products_block`` is not included.
    """
    record = (
        campaign
        if isinstance(campaign, CampaignRecord)
        else CampaignRecord.from_mapping(campaign)
    )
    return {
        "campaign_headline": record.headline,
        "campaign_description": record.description,
        "campaign_image": record.image_url,
        "coupon_code": record.coupon_code,
        "coupon_text": coupon_text(record, currency=currency),
        "subject": record.subject,
        "preview_text": record.preview_text,
        "store_name": store_name,
        "store_url": store_url,
        "logo_url": settings.logo_url,
        "unsubscribe_url": UNSUBSCRIBE_MERGE_TAG,
        "current_year": current_year(),
        "show_coupon_block": bool(record.coupon_code) and settings.show_coupon_block,
        "show_nav": settings.show_nav,
    }


SAMPLE_PRODUCTS: tuple[tuple[str, str, str], ...] = (
    (
        "Premium Diamond Blade",
        "Cut Through Anything with Precision",
        "Professional-grade diamond blade designed for clean, precise cuts in "
        "concrete, stone, and masonry.",
    ),
    (
        "Core Drill Bit Set",
        "The Professional's Choice",
        "Complete set of core drill bits for all your drilling needs. Built to "
        "last with premium materials.",
    ),
    (
        "Grinding Cup Wheel",
        "Smooth Finishes Every Time",
        "High-performance grinding cup wheel for surface preparation and "
        "concrete finishing.",
    ),
)


def sample_data(
    settings: TemplateSettings,
    *,
    store_name: str = "",
    store_url: str = "/",
    image_url: str = "",
) -> dict[str, typ.Any]:
    """Return placeholder token data for template previews.

    The ``products`` entry holds raw product rows; ``FlatTemplateEngine``
    turns them into the ``products_block`` token.
    """
    shop_url = f"{store_url.rstrip('/')}/shop"
    return {
        "campaign_headline": "Discover Our Best Sellers",
        "campaign_description": (
            "Handpicked products just for you. Explore our latest collection "
            "and find something you will love. Limited time offers on "
            "selected items."
        ),
        "campaign_image": image_url,
        "coupon_code": "SAVE20",
        "coupon_text": "Use code SAVE20 for 20% off your order!",
        "store_name": store_name or SAMPLE_STORE_NAME,
        "store_url": store_url,
        "logo_url": settings.logo_url,
        "header_text": settings.header_text,
        "unsubscribe_url": "#",
        "current_year": current_year(),
        "subject": "Our Top Picks Just for You",
        "preview_text": "Discover handpicked products and exclusive discounts.",
        "show_coupon_block": True,
        "show_nav": True,
        "products": [
            {
                "name": name,
                "headline": headline,
                "short_desc": description,
                "image_url": image_url,
                "buy_url": shop_url,
                "show_buy_button": True,
            }
            for name, headline, description in SAMPLE_PRODUCTS
        ],
    }


__all__ = [
    "DEFAULT_CURRENCY",
    "SAMPLE_PRODUCTS",
    "CampaignRecord",
    "build_campaign_data",
    "coupon_text",
    "sample_data",
]
