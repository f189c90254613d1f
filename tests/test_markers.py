"""Tests for section markers: parsing, reordering and attribute injection."""

from __future__ import annotations

import logging

import pytest

from mailblocks.flat import (
    MarkerKind,
    classify_marker,
    inject_section_attributes,
    load_template,
    parse_sections,
    reorder_sections,
)

TEMPLATE = (
    "<html><body><table>\n"
    "<!-- ============ HEADER ============ -->\n<tr><td>head</td></tr>\n"
    "<!-- ============ HERO IMAGE ============ -->\n<tr><td>hero</td></tr>\n"
    "<!-- ============ PRODUCTS ============ -->\n<tr><td>first</td></tr>\n"
    "<!-- ============ PRODUCTS (more) ============ -->\n<tr><td>second</td></tr>\n"
    "<!-- ============ FOOTER ============ -->\n<tr><td>foot</td></tr>\n"
    "</table></body></html>\n"
)


@pytest.mark.parametrize(
    ("label", "kind"),
    [
        ("HEADER", MarkerKind.HEADER),
        ("HEADLINE + DESCRIPTION (no hero image)", MarkerKind.HEADLINE),
        ("Hero Image", MarkerKind.HERO),
        ("COUPON BLOCK", MarkerKind.COUPON),
        ("FEATURED PRODUCTS", MarkerKind.PRODUCTS),
        ("CTA BUTTON", MarkerKind.CTA),
        ("DIVIDER", MarkerKind.DIVIDER),
        ("FOOTER", MarkerKind.FOOTER),
        ("SOMETHING ELSE", MarkerKind.UNKNOWN),
    ],
)
def test_classify_marker(label: str, kind: MarkerKind) -> None:
    assert classify_marker(label) is kind


def test_parse_is_lossless() -> None:
    document = parse_sections(TEMPLATE)
    assert document.to_html() == TEMPLATE
    assert document.ids == ["header-0", "hero-0", "products-0", "products-1", "footer-0"]
    assert document.preamble == "<html><body><table>\n"
    assert document.sections[-1].html.endswith("</html>\n")


def test_template_without_markers_is_preamble_only() -> None:
    document = parse_sections("<p>plain</p>")
    assert document.sections == ()
    assert document.to_html() == "<p>plain</p>"
    assert reorder_sections("<p>plain</p>", ["hero-0"]) == "<p>plain</p>"


def test_identity_order_is_a_no_op() -> None:
    ids = parse_sections(TEMPLATE).ids
    assert reorder_sections(TEMPLATE, ids) == TEMPLATE


def test_bundled_template_round_trips() -> None:
    template = load_template()
    document = parse_sections(template)
    assert document.ids == [
        "header-0",
        "hero-0",
        "headline-0",
        "coupon-0",
        "products-0",
        "cta-0",
        "footer-0",
    ]
    assert reorder_sections(template, document.ids) == template


def test_reorder_moves_sections() -> None:
    html = reorder_sections(TEMPLATE, ["footer-0", "header-0"])
    assert html.index("foot") < html.index("head")
    assert "hero" not in html
    assert html.startswith("<html><body><table>\n")


def test_duplicate_ids_render_the_original_again() -> None:
    html = reorder_sections(TEMPLATE, ["hero-0", "hero-0-dup1", "footer-0"])
    assert html.count("<tr><td>hero</td></tr>") == 2


def test_unresolved_ids_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="mailblocks.flat.markers"):
        html = reorder_sections(TEMPLATE, ["gallery-0", "footer-0"])
    assert html == "<html><body><table>\n" + parse_sections(TEMPLATE).sections[-1].html
    assert "gallery-0" in caplog.text


def test_inject_section_attributes() -> None:
    html = inject_section_attributes(TEMPLATE)
    assert '<tr data-section-id="header-0"><td>head</td></tr>' in html
    assert '<tr data-section-id="products-1"><td>second</td></tr>' in html
    assert html.count("data-section-id=") == 5


def test_injection_skips_markers_without_a_root_row() -> None:
    html = (
        "<!-- ==== HERO ==== --><div>not a row</div>"
        "<!-- ==== HERO ==== -->{{#if show_hero}}<tr>hero</tr>{{/if}}"
    )
    injected = inject_section_attributes(html)
    assert '<tr data-section-id="hero-0">hero</tr>' in injected
    assert "<div>not a row</div>" in injected


def test_injection_matches_parse_ids_for_bundled_template() -> None:
    template = load_template()
    injected = inject_section_attributes(template)
    for section_id in parse_sections(template).ids:
        assert f'data-section-id="{section_id}"' in injected
