"""Unit tests for the loose-value coercion helpers shared by both renderers."""

from __future__ import annotations

import pytest

from mailblocks.formatting import (
    LinkItem,
    chunk_cells,
    clean_url,
    format_expiry,
    is_truthy,
    nl2br,
    parse_link_list,
    resolve_link_url,
    strip_tags,
    to_int,
    to_text,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, False),
        (True, True),
        ("", False),
        ("0", False),
        ("false", False),
        ("FALSE", False),
        ("-1", False),
        ("0.5", True),
        ("yes", True),
        (0, False),
        (3, True),
        (-2, False),
        ([], False),
        (["x"], True),
    ],
)
def test_is_truthy(value: object, expected: bool) -> None:  # noqa: FBT001
    assert is_truthy(value) is expected


def test_to_int_reads_leading_integer() -> None:
    assert to_int("24px") == 24
    assert to_int("-4") == -4
    assert to_int(7.9) == 7
    assert to_int("wide", 30) == 30
    assert to_int(None, 5) == 5


def test_to_text_maps_none_and_bools() -> None:
    assert to_text(None) == ""
    assert to_text(True) == "1"
    assert to_text(False) == ""
    assert to_text(12) == "12"


def test_clean_url_rejects_script_schemes() -> None:
    assert clean_url("javascript:alert(1)") == ""
    assert clean_url("  https://shop.test/a b ") == "https://shop.test/a%20b"
    assert clean_url("mailto:hi@shop.test") == "mailto:hi@shop.test"
    assert clean_url("/relative/path") == "/relative/path"
    assert clean_url("{{ unsubscribe }}") == "{{ unsubscribe }}"


def test_resolve_link_url_expands_unsubscribe_placeholder() -> None:
    assert resolve_link_url("{{unsubscribe_url}}") == "{{ unsubscribe }}"
    assert resolve_link_url("") == "#"
    assert resolve_link_url("https://shop.test/privacy") == "https://shop.test/privacy"


def test_parse_link_list_drops_unlabelled_entries() -> None:
    raw = '[{"label": "Shop", "url": "/shop"}, {"label": " ", "url": "/x"}, {"url": "/y"}]'
    assert parse_link_list(raw) == [LinkItem("Shop", "/shop")]
    assert parse_link_list("not json") == []
    assert parse_link_list(None) == []


def test_format_expiry() -> None:
    assert format_expiry("2025-12-31") == "31 Dec 2025"
    assert format_expiry("2025-03-01T10:00:00") == "1 Mar 2025"
    assert format_expiry("Ends Sunday") == "Ends Sunday"
    assert format_expiry(None) == ""


def test_nl2br_escapes_before_breaking() -> None:
    assert str(nl2br("a<b\nc")) == "a&lt;b<br />\nc"


def test_strip_tags_decodes_entities() -> None:
    assert strip_tags("<span>&pound;10</span>") == "£10"


def test_chunk_cells_pads_last_row() -> None:
    assert chunk_cells([1, 2, 3, 4], 3) == [[1, 2, 3], [4, None, None]]
    assert chunk_cells([1, 2], 2) == [[1, 2]]
    assert chunk_cells([], 2) == []
