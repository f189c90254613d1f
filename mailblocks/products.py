"""Product catalog interface and product record normalization.

Both rendering paths show products, but they receive them in different
shapes. The section renderer only holds product ids and asks a catalog for
each record, while the flat template engine receives stored campaign rows
that may carry custom copy, AI-generated copy and catalog fields at the same
time. ``normalize_product`` resolves those rows to a single canonical record.

Examples
--------
>>> catalog = StaticProductCatalog.from_records(
...     [{"id": 7, "name": "Lamp", "permalink": "https://shop.test/lamp"}]
... )
>>> normalize_product({"product_id": 7, "ai_headline": "Glow up"}, catalog).buy_url
'https://shop.test/lamp'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .formatting import is_truthy, to_int, to_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class ProductInfo:
    """Catalog view of a product, as returned by a ``ProductLookup``."""

    id: int
    name: str = ""
    price: str = ""
    price_html: str = ""
    short_description: str = ""
    image_url: str = ""
    permalink: str = ""
    stock_status: str = "instock"
    is_variable_priced: bool = False
    min_variable_price: str = ""


@typ.runtime_checkable
class ProductLookup(typ.Protocol):
    """Read interface onto a product catalog."""

    def get(self, product_id: int) -> ProductInfo | None:
        """Return the product with ``product_id`` or ``None`` when unknown."""
        ...


class StaticProductCatalog:
    """In-memory ``ProductLookup`` backed by a dictionary of records."""

    def __init__(self, products: cabc.Iterable[ProductInfo] = ()) -> None:
        self._products = {product.id: product for product in products}

    @classmethod
    def from_records(
        cls, records: cabc.Iterable[cabc.Mapping[str, typ.Any]]
    ) -> StaticProductCatalog:
        """Build a catalog from plain mappings such as a parsed YAML list."""
        return cls(_build_product_info(record) for record in records)

    def get(self, product_id: int) -> ProductInfo | None:
        """Return the product with ``product_id`` or ``None`` when unknown."""
        return self._products.get(product_id)

    def __len__(self) -> int:
        return len(self._products)


@dc.dataclass(frozen=True, slots=True)
class NormalizedProduct:
    """Canonical product shape consumed by the layouts."""

    name: str
    headline: str
    short_description: str
    image_url: str
    buy_url: str
    show_buy_button: bool = True


def _build_product_info(record: cabc.Mapping[str, typ.Any]) -> ProductInfo:
    return ProductInfo(
        id=to_int(record.get("id")),
        name=to_text(record.get("name")),
        price=to_text(record.get("price")),
        price_html=to_text(record.get("price_html") or record.get("price")),
        short_description=to_text(record.get("short_description")),
        image_url=to_text(record.get("image_url")),
        permalink=to_text(record.get("permalink")),
        stock_status=to_text(record.get("stock_status") or "instock"),
        is_variable_priced=is_truthy(record.get("is_variable_priced")),
        min_variable_price=to_text(record.get("min_variable_price")),
    )


def parse_product_ids(raw: object) -> list[int]:
    """Parse product ids from a comma-separated string or a sequence.

    Values are read as absolute integers and zeros are discarded, so
    ``"12, x, -4, 0"`` yields ``[12, 4]``.
    """
    match raw:
        case str():
            candidates: list[object] = list(raw.split(","))
        case list() | tuple():
            candidates = list(raw)
        case int() if not isinstance(raw, bool):
            candidates = [raw]
        case _:
            return []
    ids = [abs(to_int(candidate)) for candidate in candidates]
    return [product_id for product_id in ids if product_id]


def _first_filled(raw: cabc.Mapping[str, typ.Any], *keys: str) -> str:
    for key in keys:
        value = to_text(raw.get(key)).strip()
        if value:
            return value
    return ""


def normalize_product(
    raw: cabc.Mapping[str, typ.Any], catalog: ProductLookup | None = None
) -> NormalizedProduct:
    """Resolve a heterogeneous product record to a ``NormalizedProduct``.

    Parameters
    ----------
    raw : Mapping[str, Any]
        Stored product row. It may carry ``custom_*`` overrides, ``ai_*``
        generated copy, plain fields and a ``product_id`` catalog reference.
    catalog : ProductLookup, optional
        Catalog consulted for the image, permalink and name when the row does
        not provide them.

    Returns
    -------
    NormalizedProduct
        Copy chosen with custom text first, then AI text, then the plain
        field. When ``use_product_image`` (or ``use_catalog_image``) is false
        and a generated image exists, that image wins over every other
        source.
    """
    headline = _first_filled(raw, "custom_headline", "ai_headline", "headline")
    short_description = _first_filled(
        raw,
        "custom_short_desc",
        "ai_short_desc",
        "short_desc",
        "short_description",
    )

    product_id = abs(to_int(raw.get("product_id")))
    catalog_entry = (
        catalog.get(product_id) if catalog is not None and product_id else None
    )

    use_catalog_image = True
    for flag in ("use_product_image", "use_catalog_image"):
        if flag in raw:
            use_catalog_image = is_truthy(raw[flag])
            break
    generated_image = to_text(raw.get("generated_image_url")).strip()
    if not use_catalog_image and generated_image:
        image_url = generated_image
    else:
        image_url = to_text(raw.get("image_url")).strip() or (
            catalog_entry.image_url if catalog_entry else ""
        )

    buy_url = to_text(raw.get("buy_url")).strip() or (
        catalog_entry.permalink if catalog_entry else ""
    )
    name = to_text(raw.get("name")).strip() or (
        catalog_entry.name if catalog_entry else ""
    )
    show_buy_button = (
        is_truthy(raw["show_buy_button"]) if "show_buy_button" in raw else True
    )
    return NormalizedProduct(
        name=name,
        headline=headline,
        short_description=short_description,
        image_url=image_url,
        buy_url=buy_url,
        show_buy_button=show_buy_button,
    )


__all__ = [
    "NormalizedProduct",
    "ProductInfo",
    "ProductLookup",
    "StaticProductCatalog",
    "normalize_product",
    "parse_product_ids",
]
