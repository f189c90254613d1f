"""Tests for the products grid of the section renderer."""

from __future__ import annotations

import math
import typing as typ

import pytest
from bs4 import BeautifulSoup

from mailblocks.products import ProductInfo, ProductLookup, StaticProductCatalog
from mailblocks.renderer import SectionRenderer
from mailblocks.renderer.products_layout import price_text

if typ.TYPE_CHECKING:
    from bs4 import Tag
    from pytest_mock import MockerFixture

PLACEHOLDER = "Products will appear here."


def _catalog(count: int) -> StaticProductCatalog:
    return StaticProductCatalog(
        ProductInfo(
            id=index,
            name=f"Product {index}",
            price_html=f"<span>&pound;{index}.00</span>",
            image_url=f"https://cdn.test/{index}.jpg",
            permalink=f"https://shop.test/p/{index}",
        )
        for index in range(1, count + 1)
    )


def _grid_rows(fragment: str) -> list[list[Tag]]:
    soup = BeautifulSoup(fragment, "html.parser")
    grid = soup.find_all("table")[1]
    return [
        row.find_all("td", recursive=False)
        for row in grid.find_all("tr", recursive=False)
    ]


@pytest.mark.parametrize(("count", "columns"), [(1, 1), (4, 3), (5, 2), (6, 3)])
def test_grid_is_rectangular(count: int, columns: int) -> None:
    renderer = SectionRenderer(products=_catalog(count))
    ids = ",".join(str(index) for index in range(1, count + 1))
    fragment = renderer.render_section(
        {"type": "products", "settings": {"product_ids": ids, "columns": str(columns)}}
    )
    rows = _grid_rows(fragment)
    assert len(rows) == math.ceil(count / columns)
    assert all(len(cells) == columns for cells in rows)
    padding = [cell for cells in rows for cell in cells if "Product" not in cell.get_text()]
    assert len(padding) == len(rows) * columns - count


def test_columns_are_clamped() -> None:
    renderer = SectionRenderer(products=_catalog(4))
    fragment = renderer.render_section(
        {"type": "products", "settings": {"product_ids": [1, 2, 3, 4], "columns": 9}}
    )
    assert [len(cells) for cells in _grid_rows(fragment)] == [3, 3]


def test_placeholder_without_ids_or_catalog() -> None:
    assert PLACEHOLDER in SectionRenderer(products=_catalog(2)).render_section(
        {"type": "products", "settings": {}}
    )
    assert PLACEHOLDER in SectionRenderer().render_section(
        {"type": "products", "settings": {"product_ids": "1,2"}}
    )


def test_unknown_ids_are_skipped(mocker: MockerFixture) -> None:
    lookup = mocker.Mock(spec=ProductLookup)
    known = ProductInfo(id=2, name="Lamp", price="10", permalink="https://shop.test/lamp")
    lookup.get.side_effect = lambda product_id: known if product_id == 2 else None

    fragment = SectionRenderer(products=lookup).render_section(
        {"type": "products", "settings": {"product_ids": "1, 2, 3"}}
    )

    assert [call.args[0] for call in lookup.get.call_args_list] == [1, 2, 3]
    assert "Lamp" in fragment
    assert 'href="https://shop.test/lamp"' in fragment


def test_no_resolvable_ids_renders_nothing(mocker: MockerFixture) -> None:
    lookup = mocker.Mock(spec=ProductLookup)
    lookup.get.return_value = None
    fragment = SectionRenderer(products=lookup).render_section(
        {"type": "products", "settings": {"product_ids": "8"}}
    )
    assert fragment == ""


def test_price_and_button_toggles() -> None:
    renderer = SectionRenderer(products=_catalog(1))
    shown = renderer.render_section(
        {"type": "products", "settings": {"product_ids": "1"}}
    )
    assert "£1.00" in shown
    assert "Buy Now" in shown

    hidden = renderer.render_section(
        {
            "type": "products",
            "settings": {"product_ids": "1", "show_price": False, "show_button": "0"},
        }
    )
    assert "£1.00" not in hidden
    assert "Buy Now" not in hidden


def test_price_text_for_variable_products() -> None:
    product = ProductInfo(id=1, price="12", is_variable_priced=True, min_variable_price="9.50")
    assert price_text(product) == "from 9.50"
    assert price_text(ProductInfo(id=2, price_html="<b>£5</b>")) == "£5"
