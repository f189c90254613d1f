"""Tests for flat template token substitution and conditional blocks."""

from __future__ import annotations

import datetime as dt

import pytest
from bs4 import BeautifulSoup
from markupsafe import Markup

from mailblocks.flat import TemplateSettings, apply_settings, evaluate_conditionals
from mailblocks.flat.tokens import render_tokens, substitute_tokens
from mailblocks.formatting import LinkItem


def test_values_are_escaped() -> None:
    html = substitute_tokens(
        '<p>{{campaign_description}}</p><a href="{{store_url}}">x</a>',
        {"campaign_description": "<b>bold</b>", "store_url": 'https://shop.test/?a=1&b="2"'},
    )
    assert "<p>&lt;b&gt;bold&lt;/b&gt;</p>" in html
    assert 'href="https://shop.test/?a=1&amp;b=&#34;2&#34;"' in html


def test_markup_values_are_trusted() -> None:
    html = substitute_tokens("{{campaign_description}}", {"campaign_description": Markup("<b>ok</b>")})
    assert html == "<b>ok</b>"


def test_substitution_is_single_pass() -> None:
    html = substitute_tokens(
        "{{campaign_headline}} / {{coupon_code}}",
        {"campaign_headline": "Use {{coupon_code}}", "coupon_code": "SAVE"},
    )
    assert html == "Use {{coupon_code}} / SAVE"


def test_unknown_and_setting_tokens_are_left_alone() -> None:
    html = substitute_tokens("{{mystery}} {{setting_primary_color}}", {"mystery": "x"})
    assert html == "{{mystery}} {{setting_primary_color}}"


def test_render_tokens_resolves_both_families() -> None:
    html = render_tokens(
        '<h1 style="color:{{setting_primary_color}}">{{campaign_headline}}</h1>',
        {"campaign_headline": "Sale"},
        {"primary_color": "#123456"},
    )
    assert html == '<h1 style="color:#123456">Sale</h1>'


def test_render_tokens_keeps_settings_tokens_inside_values() -> None:
    html = render_tokens(
        "<h1>{{campaign_headline}}</h1>",
        {"campaign_headline": "Sale {{setting_primary_color}} {{footer_links}}"},
        TemplateSettings(),
    )
    assert html == "<h1>Sale {{setting_primary_color}} {{footer_links}}</h1>"


def test_defaults_for_missing_values() -> None:
    html = substitute_tokens("{{current_year}}|{{unsubscribe_url}}|{{subject}}", {})
    assert html == f"{dt.datetime.now(dt.UTC).year}|{{{{ unsubscribe }}}}|"


def test_products_block_is_raw() -> None:
    block = '<table role="presentation"></table>'
    assert substitute_tokens("{{products_block}}", {"products_block": block}) == block


def test_unsafe_url_tokens_are_emptied() -> None:
    assert substitute_tokens("{{campaign_image}}", {"campaign_image": "javascript:x"}) == ""


def test_apply_settings_replaces_setting_tokens() -> None:
    settings = TemplateSettings(primary_color="#112233", max_width=640, button_border_radius=8)
    html = apply_settings(
        "{{setting_primary_color}} {{setting_max_width}} "
        "{{setting_button_border_radius}} {{setting_unknown}}",
        settings,
    )
    assert html == "#112233 640px 8px {{setting_unknown}}"


def test_heading_font_falls_back_to_body_font() -> None:
    settings = TemplateSettings(font_family="Helvetica, sans-serif")
    assert apply_settings("{{setting_heading_font_family}}", settings) == (
        "Helvetica, sans-serif"
    )


def test_apply_settings_accepts_json() -> None:
    html = apply_settings("{{setting_text_color}}", '{"text_color": "#000000"}')
    assert html == "#000000"


def test_navigation_links() -> None:
    settings = TemplateSettings(
        nav_links=[LinkItem("Shop", "/shop"), LinkItem("Blog", ""), LinkItem("Sale", "/sale")]
    )
    soup = BeautifulSoup(apply_settings("{{navigation_links}}", settings), "html.parser")
    assert [(a.get_text(), a["href"]) for a in soup.find_all("a")] == [
        ("Shop", "/shop"),
        ("Sale", "/sale"),
    ]

    settings.show_nav = False
    assert apply_settings("{{navigation_links}}", settings) == ""


def test_footer_links_expand_unsubscribe_placeholder() -> None:
    soup = BeautifulSoup(apply_settings("{{footer_links}}", TemplateSettings()), "html.parser")
    assert [(a.get_text(), a["href"]) for a in soup.find_all("a")] == [
        ("Privacy Policy", "/privacy-policy"),
        ("Unsubscribe", "{{ unsubscribe }}"),
    ]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, "A"),
        ("1", "A"),
        ("yes", "A"),
        (2, "A"),
        (False, "B"),
        ("", "B"),
        ("0", "B"),
        ("false", "B"),
        (0, "B"),
        (None, "B"),
    ],
)
def test_conditional_truthiness(value: object, expected: str) -> None:
    assert evaluate_conditionals("{{#if flag}}A{{else}}B{{/if}}", {"flag": value}) == expected


def test_conditional_without_else() -> None:
    html = "x{{#if show}}\n<tr>row</tr>\n{{/if}}y"
    assert evaluate_conditionals(html, {}) == "xy"
    assert evaluate_conditionals(html, {"show": True}) == "x\n<tr>row</tr>\ny"


def test_conditionals_resolve_independently() -> None:
    html = "{{#if a}}A{{/if}}-{{#if b}}B{{else}}b{{/if}}"
    assert evaluate_conditionals(html, {"a": 1, "b": 0}) == "A-b"
