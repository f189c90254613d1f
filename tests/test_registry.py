"""Unit tests for the section type registry.

The packaged table is exercised through the module-level lookups, while
validation failures are provoked with small YAML tables written to
``tmp_path`` and loaded through a private ``SectionTypeRegistry``.
"""

from __future__ import annotations

import json
import typing as typ
from textwrap import dedent

import pytest

from mailblocks.registry import (
    FieldKind,
    RegistryError,
    SectionTypeRegistry,
    get,
    get_all,
    get_defaults,
    normalize_slug,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

EXPECTED_TYPES = {
    "header",
    "hero",
    "hero_split",
    "text",
    "image",
    "products",
    "banner",
    "cta",
    "coupon",
    "coupon_banner",
    "coupon_card",
    "coupon_split",
    "coupon_minimal",
    "coupon_ribbon",
    "divider",
    "spacer",
    "heading",
    "list",
    "social",
    "footer",
}


def _write_types(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "section_types.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_packaged_registry_lists_every_type() -> None:
    assert set(get_all()) == EXPECTED_TYPES


def test_spacer_defaults() -> None:
    assert get_defaults("spacer") == {"height": 30, "bg_color": ""}


def test_unknown_type_has_empty_defaults() -> None:
    assert get("carousel") is None
    assert get_defaults("carousel") == {}


def test_defaults_are_fresh_copies() -> None:
    first = get_defaults("footer")
    first["footer_links"].append({"label": "Extra", "url": "/x"})
    first["footer_text"] = "changed"

    second = get_defaults("footer")
    assert second["footer_links"] == [{"label": "Unsubscribe", "url": "{{unsubscribe_url}}"}]
    assert second["footer_text"].startswith("You received this email")


def test_registry_mapping_is_read_only() -> None:
    with pytest.raises(TypeError):
        get_all()["carousel"] = get_all()["hero"]  # type: ignore[index]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Hero-Split", "hero_split"),
        ("  coupon_banner ", "coupon_banner"),
        (None, ""),
    ],
)
def test_normalize_slug(raw: object, expected: str) -> None:
    assert normalize_slug(raw) == expected


def test_lookup_accepts_hyphenated_slugs() -> None:
    definition = get("coupon-split")
    assert definition is not None
    assert definition.slug == "coupon_split"


def test_hero_defaults_include_cta() -> None:
    defaults = get_defaults("hero")
    assert defaults["headline"] == "Your Campaign Headline"
    assert defaults["cta_text"] == "Shop Now"


def test_select_defaults_are_among_their_options() -> None:
    for definition in get_all().values():
        for field in definition.fields:
            if field.kind is FieldKind.SELECT:
                values = {option.value for option in field.options}
                assert field.default in values, f"{definition.slug}.{field.key}"


def test_for_editor_is_json_serialisable() -> None:
    registry = SectionTypeRegistry()
    payload = registry.for_editor()
    assert payload["spacer"]["defaults"] == {"height": 30, "bg_color": ""}
    assert [field["key"] for field in payload["spacer"]["fields"]] == [
        "height",
        "bg_color",
    ]
    json.dumps(payload)


def test_custom_table_loads(tmp_path: Path) -> None:
    path = _write_types(
        tmp_path,
        """
        types:
          note:
            label: Note
            fields:
              - {key: body, kind: textarea, default: Hello}
              - {key: size, kind: number, default: 14}
        """,
    )
    registry = SectionTypeRegistry(path)
    assert list(registry.get_all()) == ["note"]
    assert registry.get_defaults("note") == {"body": "Hello", "size": 14}


@pytest.mark.parametrize(
    "fields",
    [
        "fields: []",
        "fields:\n      - {key: a, kind: text}\n      - {key: a, kind: text}",
        "fields:\n      - {key: a, kind: wysiwyg}",
        "fields:\n      - {key: a, kind: select, default: x}",
        "fields:\n      - {key: a, kind: number, default: ten}",
        "fields:\n      - {key: a, kind: toggle, default: 'yes'}",
    ],
)
def test_invalid_tables_raise(tmp_path: Path, fields: str) -> None:
    path = tmp_path / "section_types.yaml"
    path.write_text(f"types:\n  broken:\n    {fields}\n", encoding="utf-8")
    registry = SectionTypeRegistry(path)
    with pytest.raises(RegistryError):
        registry.get_all()


def test_missing_table_raises(tmp_path: Path) -> None:
    registry = SectionTypeRegistry(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        registry.get_all()
