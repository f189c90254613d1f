"""Tests for the ``{{products_block}}`` token of flat templates."""

from __future__ import annotations

import math
import typing as typ

import pytest
from bs4 import BeautifulSoup

from mailblocks.flat import TemplateSettings, render_products_block
from mailblocks.flat.products_block import BUTTON_SIZE_PRESETS, step_down
from mailblocks.products import NormalizedProduct

if typ.TYPE_CHECKING:
    from bs4 import Tag


def _products(count: int, **overrides: typ.Any) -> list[NormalizedProduct]:
    return [
        NormalizedProduct(
            name=f"Item {index}",
            headline=overrides.get("headline", f"Headline {index}"),
            short_description=f"Description {index}",
            image_url=overrides.get("image_url", f"https://cdn.test/{index}.jpg"),
            buy_url=overrides.get("buy_url", f"https://shop.test/p/{index}"),
            show_buy_button=overrides.get("show_buy_button", True),
        )
        for index in range(count)
    ]


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _buttons(html: str) -> list[Tag]:
    return [a for a in _soup(html).find_all("a") if a.get_text() == "Buy Now"]


def test_no_products_renders_nothing() -> None:
    assert render_products_block([], TemplateSettings()) == ""


def test_stacked_layout_orders_products() -> None:
    html = render_products_block(_products(3), TemplateSettings())
    headlines = [h.get_text() for h in _soup(html).find_all("h3")]
    assert headlines == ["Headline 0", "Headline 1", "Headline 2"]
    assert [a["href"] for a in _buttons(html)] == [
        "https://shop.test/p/0",
        "https://shop.test/p/1",
        "https://shop.test/p/2",
    ]
    assert "class=" not in html


def test_button_requires_flag_and_url() -> None:
    hidden = render_products_block(_products(1, show_buy_button=False), None)
    assert _buttons(hidden) == []
    missing = render_products_block(_products(1, buy_url=""), None)
    assert _buttons(missing) == []
    unsafe = render_products_block(_products(1, buy_url="javascript:void(0)"), None)
    assert _buttons(unsafe) == []


def test_text_only_layout_has_no_images() -> None:
    html = render_products_block(
        _products(2), TemplateSettings(product_layout="text-only")
    )
    assert "<img" not in html
    assert "Headline 1" in html


def test_alternating_layout_flips_image_side() -> None:
    html = render_products_block(
        _products(2), TemplateSettings(product_layout="alternating")
    )
    soup = _soup(html)
    first, second = soup.find_all("table", recursive=False)[:2]
    first_cells = first.find("tr").find_all("td", recursive=False)
    second_cells = second.find("tr").find_all("td", recursive=False)
    assert first_cells[0].find("img") is not None
    assert second_cells[-1].find("img") is not None


def test_feature_first_steps_down_later_buttons() -> None:
    html = render_products_block(
        _products(3),
        TemplateSettings(product_layout="feature-first", product_button_size="large"),
    )
    large = BUTTON_SIZE_PRESETS["large"]
    medium = BUTTON_SIZE_PRESETS["medium"]
    styles = [a["style"] for a in _buttons(html)]
    assert f"padding:{large.padding}" in styles[0]
    assert all(f"padding:{medium.padding}" in style for style in styles[1:])


def test_unknown_layout_and_size_fall_back() -> None:
    html = render_products_block(
        _products(1),
        {"product_layout": "carousel", "product_button_size": "huge"},
    )
    medium = BUTTON_SIZE_PRESETS["medium"]
    assert f"padding:{medium.padding}" in _buttons(html)[0]["style"]
    assert 'width="560"' in html


@pytest.mark.parametrize(
    ("count", "per_row", "columns"),
    [(5, 2, 2), (4, 3, 3), (2, 3, 3), (3, 1, 2), (7, 6, 3)],
)
def test_grid_rows_are_padded(count: int, per_row: int, columns: int) -> None:
    html = render_products_block(
        _products(count),
        TemplateSettings(product_layout="grid", products_per_row=per_row),
    )
    table = _soup(html).find("table")
    rows = [
        row
        for row in table.find_all("tr", recursive=False)
        if row.find("td", attrs={"colspan": True}, recursive=False) is None
    ]
    assert len(rows) == math.ceil(count / columns)
    for row in rows:
        cells = row.find_all("td", recursive=False)
        assert len(cells) == columns
        assert all(cell["width"] == f"{100 // columns}%" for cell in cells)
    filled = sum(1 for row in rows for cell in row.find_all("td", recursive=False) if cell.find("h3"))
    assert filled == count


def test_grid_buttons_step_down() -> None:
    html = render_products_block(
        _products(2),
        TemplateSettings(product_layout="grid", products_per_row=2, product_button_size="medium"),
    )
    small = BUTTON_SIZE_PRESETS["small"]
    assert all(f"padding:{small.padding}" in a["style"] for a in _buttons(html))


def test_mapping_rows_are_normalized() -> None:
    html = render_products_block(
        [{"name": "Lamp", "ai_headline": "Glow", "custom_headline": "Bright", "buy_url": "/lamp"}],
        TemplateSettings(),
    )
    assert "Bright" in html
    assert "Glow" not in html


def test_values_are_escaped() -> None:
    html = render_products_block(_products(1, headline="<script>x</script>"), None)
    assert "<script>" not in html


def test_step_down() -> None:
    assert step_down("large") == "medium"
    assert step_down("medium") == "small"
    assert step_down("small") == "small"
    assert step_down("giant") == "small"
