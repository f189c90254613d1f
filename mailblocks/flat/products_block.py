"""The ``{{products_block}}`` token of flat templates.

Campaign product rows are normalized (custom copy over AI copy over catalog
fields) and laid out according to ``TemplateSettings.product_layout``:

``stacked``
    Image above the text.
``side-by-side`` / ``reversed``
    Image column left or right of the text.
``alternating``
    ``side-by-side`` for even positions, ``reversed`` for odd ones.
``compact``
    80px thumbnail next to small text.
``full-card``
    Bordered card with the image flush to the top.
``text-only``
    No image, separated by a rule.
``centered``
    ``stacked`` with centred text.
``grid``
    Two or three products per row; incomplete rows are padded.
``feature-first``
    The first product ``stacked``, the rest ``compact``.

Buttons use one of three size presets. Grid cells and the compact entries of
``feature-first`` step down one size so buttons fit the narrower columns.

>>> from mailblocks.flat.settings import TemplateSettings
>>> render_products_block([], TemplateSettings())
Markup('')
>>> step_down("large")
'medium'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup

from ..formatting import chunk_cells, clamp, clean_url
from ..products import NormalizedProduct, normalize_product
from ..templating import default_environment
from .settings import BUTTON_SIZES, PRODUCT_LAYOUTS, parse_template_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment

    from ..products import ProductLookup
    from .settings import TemplateSettings

ProductRecord = NormalizedProduct | typ.Mapping[str, typ.Any]

BUY_BUTTON_TEXT = "Buy Now"
MIN_GRID_COLUMNS = 2
MAX_GRID_COLUMNS = 3


@dc.dataclass(frozen=True, slots=True)
class ButtonSize:
    padding: str
    font_size: str


BUTTON_SIZE_PRESETS: dict[str, ButtonSize] = {
    "small": ButtonSize("8px 16px", "13px"),
    "medium": ButtonSize("10px 24px", "14px"),
    "large": ButtonSize("14px 36px", "16px"),
}
_STEP_DOWN = {"small": "small", "medium": "small", "large": "medium"}


def step_down(size: str) -> str:
    """Return the preset one size smaller than ``size``."""
    return _STEP_DOWN.get(size, "small")


@dc.dataclass(frozen=True, slots=True)
class BlockStyle:
    """Colours and spacing shared by every product in the block."""

    button_color: str
    button_text_color: str
    button_radius: int
    text_color: str
    font_family: str
    gap: int

    @classmethod
    def from_settings(cls, settings: TemplateSettings) -> BlockStyle:
        return cls(
            button_color=settings.button_color,
            button_text_color=settings.button_text_color,
            button_radius=settings.button_border_radius,
            text_color=settings.text_color,
            font_family=settings.font_family,
            gap=settings.product_gap,
        )


@dc.dataclass(frozen=True, slots=True)
class BuyButton:
    url: str
    size: ButtonSize
    margin_top: int = 12
    label: str = BUY_BUTTON_TEXT


@dc.dataclass(frozen=True, slots=True)
class ProductEntry:
    """A normalized product ready for one of the layout macros."""

    layout: str
    name: str
    headline: str
    description: str
    image_url: str
    button: BuyButton | None


def _normalize(record: ProductRecord, catalog: ProductLookup | None) -> NormalizedProduct:
    if isinstance(record, NormalizedProduct):
        return record
    return normalize_product(record, catalog)


def _entry(
    product: NormalizedProduct, layout: str, size: ButtonSize, *, margin_top: int = 12
) -> ProductEntry:
    buy_url = clean_url(product.buy_url)
    button = (
        BuyButton(buy_url, size, margin_top)
        if product.show_buy_button and buy_url
        else None
    )
    return ProductEntry(
        layout=layout,
        name=product.name,
        headline=product.headline,
        description=product.short_description,
        image_url=clean_url(product.image_url),
        button=button,
    )


def _list_entries(
    products: cabc.Sequence[NormalizedProduct], layout: str, size_key: str
) -> list[ProductEntry]:
    size = BUTTON_SIZE_PRESETS[size_key]
    entries: list[ProductEntry] = []
    for index, product in enumerate(products):
        match layout:
            case "alternating":
                item_layout = "side-by-side" if index % 2 == 0 else "reversed"
                entries.append(_entry(product, item_layout, size))
            case "feature-first" if index == 0:
                entries.append(_entry(product, "stacked", size))
            case "feature-first":
                small = BUTTON_SIZE_PRESETS[step_down(size_key)]
                entries.append(_entry(product, "compact", small))
            case _:
                entries.append(_entry(product, layout, size))
    return entries


def render_products_block(
    products: cabc.Iterable[ProductRecord],
    settings: TemplateSettings | cabc.Mapping[str, typ.Any] | str | None = None,
    *,
    catalog: ProductLookup | None = None,
    env: Environment | None = None,
) -> Markup:
    """Render campaign products as inline-styled tables.

    Parameters
    ----------
    products : Iterable[NormalizedProduct or Mapping]
        Product rows in display order. Mappings are passed through
        ``normalize_product``.
    settings : TemplateSettings, Mapping or str, optional
        Template settings or anything ``parse_template_settings`` accepts.
    catalog : ProductLookup, optional
        Catalog used to fill names, images and links missing from a row.
    env : Environment, optional
        Jinja environment holding ``flat/products.jinja``.

    Returns
    -------
    Markup
        The products HTML, or an empty fragment when there are no products.
        A product only gets a buy button when its ``show_buy_button`` flag is
        set and it has a usable buy URL.
    """
    normalized = [_normalize(record, catalog) for record in products]
    if not normalized:
        return Markup("")
    resolved = parse_template_settings(settings)
    layout = (
        resolved.product_layout
        if resolved.product_layout in PRODUCT_LAYOUTS
        else "stacked"
    )
    size_key = (
        resolved.product_button_size
        if resolved.product_button_size in BUTTON_SIZES
        else "medium"
    )
    style = BlockStyle.from_settings(resolved)
    template = (env or default_environment()).get_template("flat/products.jinja")

    if layout == "grid":
        columns = clamp(
            max(1, resolved.products_per_row), MIN_GRID_COLUMNS, MAX_GRID_COLUMNS
        )
        small = BUTTON_SIZE_PRESETS[step_down(size_key)]
        cells = [_entry(p, "grid", small, margin_top=8) for p in normalized]
        html = template.render(
            style=style,
            rows=chunk_cells(cells, columns),
            columns=columns,
            cell_width=100 // columns,
        )
    else:
        html = template.render(
            style=style, entries=_list_entries(normalized, layout, size_key)
        )
    return Markup(html.strip())


__all__ = [
    "BUTTON_SIZE_PRESETS",
    "BlockStyle",
    "ButtonSize",
    "BuyButton",
    "ProductEntry",
    "render_products_block",
    "step_down",
]
