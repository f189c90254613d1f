"""Unit tests for the curated section preset library."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from mailblocks.registry import (
    PresetLibrary,
    RegistryError,
    get_presets,
    get_variant,
    preset_section,
    variants_for,
)
from mailblocks.renderer import SectionRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_presets(tmp_path: Path, settings: str) -> Path:
    path = tmp_path / "presets.yaml"
    path.write_text(
        dedent(
            f"""
            categories:
              - category: hero
                label: Hero
                variants:
                  - id: custom-hero
                    type: hero
                    settings: {settings}
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return path


def test_variant_ids_are_unique() -> None:
    ids = [variant.id for category in get_presets() for variant in category.variants]
    assert len(ids) == len(set(ids))
    assert "hero-bold" in ids


def test_preset_section_copies_settings() -> None:
    section = preset_section("hero-bold", section_id="s1")
    assert section.id == "s1"
    assert section.type == "hero"
    assert section.settings["headline_size"] == 42

    section.settings["headline_size"] = 10
    assert get_variant("hero-bold").settings["headline_size"] == 42


def test_preset_section_defaults_id_to_variant() -> None:
    assert preset_section("spacer-sm").id == "spacer-sm"


def test_unknown_preset_raises_key_error() -> None:
    with pytest.raises(KeyError, match="no-such-preset"):
        preset_section("no-such-preset")


def test_variants_for_filters_by_type() -> None:
    headers = variants_for("header")
    assert {variant.id for variant in headers} >= {
        "header-light",
        "header-dark",
        "header-accent",
    }
    assert all(variant.type == "header" for variant in headers)
    assert variants_for("carousel") == []


def test_every_preset_renders() -> None:
    renderer = SectionRenderer()
    for category in get_presets():
        for variant in category.variants:
            section = preset_section(variant.id)
            if variant.type == "image":
                # image sections render nothing until an image is chosen
                section.settings["image_url"] = "https://cdn.test/banner.jpg"
            fragment = renderer.render_section(section)
            assert "<table" in fragment, variant.id


def test_preset_with_unknown_field_is_rejected(tmp_path: Path) -> None:
    library = PresetLibrary(_write_presets(tmp_path, "{carousel_speed: 3}"))
    with pytest.raises(RegistryError, match="carousel_speed"):
        library.categories()


def test_preset_with_wrong_value_kind_is_rejected(tmp_path: Path) -> None:
    library = PresetLibrary(_write_presets(tmp_path, "{headline_size: big}"))
    with pytest.raises(RegistryError):
        library.categories()


def test_custom_library_lookup(tmp_path: Path) -> None:
    library = PresetLibrary(_write_presets(tmp_path, "{headline: Hello}"))
    variant = library.get_variant("custom-hero")
    assert variant is not None
    assert dict(variant.settings) == {"headline": "Hello"}
    assert library.get_variant("missing") is None
