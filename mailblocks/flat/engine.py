"""Flat template rendering pipeline.

A flat template is a complete HTML email written with ``{{token}}``
placeholders, ``{{#if}}`` blocks and section markers. ``FlatTemplateEngine``
renders one in a fixed order:

1. build ``products_block`` from the product rows;
2. resolve conditional blocks against the data;
3. substitute campaign, ``setting_*``, navigation and footer link tokens in
   one pass;
4. reorder sections when the settings carry a ``section_order``.

Conditionals run on the template text before any value is inserted, and the
single token pass never rescans its own output, so token or ``{{#if}}`` syntax
inside a value is kept literally.

Previews additionally merge sample data under the caller's values and tag
each section root with ``data-section-id`` for editor overlays.

>>> engine = FlatTemplateEngine()
>>> engine.render("{{#if show_nav}}nav{{/if}}|{{coupon_code}}", {"coupon_code": "X"})
'|X'
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from .campaign import DEFAULT_CURRENCY, build_campaign_data, sample_data
from .conditionals import evaluate_conditionals
from .markers import inject_section_attributes, reorder_sections
from .products_block import render_products_block
from .settings import parse_template_settings
from .tokens import render_tokens

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment

    from ..products import ProductLookup
    from .campaign import CampaignRecord
    from .products_block import ProductRecord
    from .settings import TemplateSettings

    SettingsInput = TemplateSettings | cabc.Mapping[str, typ.Any] | str | None

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = (
    Path(__file__).resolve().parents[1] / "data" / "default_template.html"
)


def load_template(path: Path | None = None) -> str:
    """Read a flat template, defaulting to the bundled one."""
    return (path or DEFAULT_TEMPLATE_PATH).read_text(encoding="utf-8")


class FlatTemplateEngine:
    """Render flat templates from campaign data and template settings."""

    def __init__(
        self,
        catalog: ProductLookup | None = None,
        *,
        store_name: str = "",
        store_url: str = "",
        currency: str = DEFAULT_CURRENCY,
        env: Environment | None = None,
    ) -> None:
        """Initialise the engine.

        Parameters
        ----------
        catalog : ProductLookup, optional
            Catalog used to complete product rows that only carry an id.
        store_name, store_url : str
            Store identity used for campaign and sample token data.
        currency : str
            Symbol for fixed-amount coupon text.
        env : Environment, optional
            Jinja environment holding the product block templates.
        """
        self.catalog = catalog
        self.store_name = store_name
        self.store_url = store_url
        self.currency = currency
        self.env = env

    def products_block(
        self, products: cabc.Iterable[ProductRecord], settings: TemplateSettings
    ) -> str:
        return str(
            render_products_block(
                products, settings, catalog=self.catalog, env=self.env
            )
        )

    def render(
        self,
        template_html: str,
        data: cabc.Mapping[str, typ.Any],
        settings: SettingsInput = None,
    ) -> str:
        """Render ``template_html`` with ``data``.

        Parameters
        ----------
        template_html : str
            Flat template text.
        data : Mapping[str, Any]
            Token values and conditional flags. A ``products`` list is
            rendered into ``products_block``; without one, a supplied
            ``products_block`` value is used as is.
        settings : TemplateSettings, Mapping or str, optional
            Template settings or their JSON encoding.

        Returns
        -------
        str
            The rendered HTML.
        """
        resolved = parse_template_settings(settings)
        values = dict(data)
        products = values.pop("products", None) or []
        if products or "products_block" not in values:
            values["products_block"] = self.products_block(products, resolved)
        return self._render(template_html, values, resolved)

    def render_campaign(
        self,
        campaign: CampaignRecord | cabc.Mapping[str, typ.Any],
        products: cabc.Iterable[ProductRecord] = (),
        settings: SettingsInput = None,
        template_html: str | None = None,
    ) -> str:
        """Render a stored campaign, using the bundled template by default."""
        resolved = parse_template_settings(settings)
        data = build_campaign_data(
            campaign,
            resolved,
            store_name=self.store_name,
            store_url=self.store_url,
            currency=self.currency,
        )
        data["products"] = list(products)
        html = template_html if template_html else load_template()
        return self.render(html, data, resolved)

    def render_preview(
        self,
        template_html: str,
        settings: SettingsInput = None,
        data: cabc.Mapping[str, typ.Any] | None = None,
    ) -> str:
        """Render a preview over sample data and tag the section roots.

        Values in ``data`` override the sample values key by key, including
        the sample ``products``.
        """
        resolved = parse_template_settings(settings)
        merged = {
            **sample_data(
                resolved, store_name=self.store_name, store_url=self.store_url or "/"
            ),
            **(data or {}),
        }
        products = merged.pop("products", None) or []
        merged["products_block"] = self.products_block(products, resolved)
        html = self._render(template_html, merged, resolved)
        return inject_section_attributes(html)

    def _render(
        self,
        template_html: str,
        data: cabc.Mapping[str, typ.Any],
        settings: TemplateSettings,
    ) -> str:
        html = evaluate_conditionals(template_html, data)
        html = render_tokens(html, data, settings)
        if settings.section_order:
            logger.debug("reordering sections: %s", settings.section_order)
            html = reorder_sections(html, settings.section_order)
        return html


__all__ = ["DEFAULT_TEMPLATE_PATH", "FlatTemplateEngine", "load_template"]
