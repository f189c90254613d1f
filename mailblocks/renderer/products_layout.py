"""Product grid layout for the section renderer.

Products are looked up by id through the ``ProductLookup`` on the layout
context and laid out ``columns`` per row. The last row is padded with empty
cells so every row has exactly ``columns`` cells and the table stays
rectangular in clients that do not tolerate ragged rows.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup

from .._constants import PRODUCTS_PLACEHOLDER_TEXT
from ..formatting import chunk_cells, choose_alignment, clamp, clean_url, strip_tags
from ..products import parse_product_ids
from .settings import ProductsSettings, decode_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..products import ProductInfo
    from .context import LayoutContext

DEFAULT_BUTTON_COLOR = "#e63529"
DEFAULT_BUTTON_TEXT_COLOR = "#ffffff"
DEFAULT_BUTTON_TEXT = "Buy Now"


@dc.dataclass(frozen=True, slots=True)
class ProductCell:
    """Display values for one product cell."""

    name: str
    image_url: str
    price: str
    url: str


def price_text(product: ProductInfo) -> str:
    """Return the price line for ``product``.

    Variable-priced products show ``"from {min price}"``; everything else
    shows the formatted price with its markup stripped.
    """
    if product.is_variable_priced:
        minimum = strip_tags(product.min_variable_price or product.price)
        return f"from {minimum}" if minimum else ""
    return strip_tags(product.price_html or product.price)


def render_products(
    settings: cabc.Mapping[str, typ.Any], ctx: LayoutContext
) -> Markup:
    """Render the products grid.

    Parameters
    ----------
    settings : Mapping[str, Any]
        Merged ``products`` settings. ``product_ids`` may be a comma-separated
        string or a list; ``columns`` is limited to 1-3.
    ctx : LayoutContext
        Render context; ``ctx.products`` resolves each id.

    Returns
    -------
    Markup
        A placeholder block when there are no ids or no catalog, an empty
        fragment when none of the ids resolve, otherwise the grid. Ids the
        catalog does not know are skipped.
    """
    s = decode_settings(ProductsSettings, settings)
    columns = clamp(s.columns, 1, 3)
    product_ids = parse_product_ids(s.product_ids)

    if not product_ids or ctx.products is None:
        return ctx.render(
            "sections/products.jinja",
            s=s,
            rows=[],
            placeholder=PRODUCTS_PLACEHOLDER_TEXT,
        )

    cells: list[ProductCell] = []
    for product_id in product_ids:
        product = ctx.products.get(product_id)
        if product is None:
            continue
        cells.append(
            ProductCell(
                name=product.name,
                image_url=clean_url(product.image_url),
                price=price_text(product),
                url=clean_url(product.permalink) or "#",
            )
        )
    if not cells:
        return Markup("")

    return ctx.render(
        "sections/products.jinja",
        s=s,
        rows=chunk_cells(cells, columns),
        cell_width=100 // columns,
        align=choose_alignment(s.text_align),
        button_text=s.button_text or DEFAULT_BUTTON_TEXT,
        button_color=s.button_color or DEFAULT_BUTTON_COLOR,
        button_text_color=s.button_text_color or DEFAULT_BUTTON_TEXT_COLOR,
        button_padding_v=s.button_padding_v or 10,
        button_padding_h=s.button_padding_h or 20,
    )


__all__ = ["ProductCell", "price_text", "render_products"]
