"""Curated section variants offered by the authoring palette.

Presets are partial settings maps layered over a section type's defaults. The
library is validated against the section type registry when it loads, so a
preset can never reference a type or field that the renderer does not know.

Examples
--------
>>> from mailblocks.registry import preset_section
>>> section = preset_section("hero-bold", section_id="s1")
>>> section.type, section.settings["headline_size"]
('hero', 42)
"""

from __future__ import annotations

import dataclasses as dc
import threading
import typing as typ
from types import MappingProxyType

from .loader import SECTION_PRESETS_PATH, check_value, read_yaml_mapping
from .models import RegistryError
from .section_types import SectionTypeRegistry, default_registry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from ..renderer.models import Section


@dc.dataclass(frozen=True, slots=True)
class PresetVariant:
    """A ready-made section: a type plus partial settings."""

    id: str
    label: str
    description: str
    type: str
    indicator_color: str
    settings: cabc.Mapping[str, typ.Any]


@dc.dataclass(frozen=True, slots=True)
class PresetCategory:
    """A palette group of related variants."""

    category: str
    label: str
    icon: str
    variants: tuple[PresetVariant, ...]


def load_presets(
    path: Path = SECTION_PRESETS_PATH,
    registry: SectionTypeRegistry = default_registry,
) -> tuple[PresetCategory, ...]:
    """Parse and validate the preset library at ``path``.

    Raises
    ------
    RegistryError
        If a variant id repeats, a variant names an unknown section type, or
        a preset setting is not a field of that type or does not fit its kind.
    """
    raw = read_yaml_mapping(path)
    categories: list[PresetCategory] = []
    seen: set[str] = set()
    for entry in raw.get("categories") or []:
        variants: list[PresetVariant] = []
        for variant_raw in entry.get("variants") or []:
            variant = _build_variant(variant_raw, registry)
            if variant.id in seen:
                msg = f"Preset id '{variant.id}' is defined more than once."
                raise RegistryError(msg)
            seen.add(variant.id)
            variants.append(variant)
        categories.append(
            PresetCategory(
                category=str(entry.get("category", "")),
                label=str(entry.get("label", "")),
                icon=str(entry.get("icon", "")),
                variants=tuple(variants),
            )
        )
    return tuple(categories)


def _build_variant(
    payload: cabc.Mapping[str, typ.Any], registry: SectionTypeRegistry
) -> PresetVariant:
    variant_id = str(payload.get("id", ""))
    type_slug = str(payload.get("type", ""))
    definition = registry.get(type_slug)
    if definition is None:
        msg = f"Preset '{variant_id}' uses unknown section type '{type_slug}'."
        raise RegistryError(msg)
    settings = dict(payload.get("settings") or {})
    for key, value in settings.items():
        field = definition.field(key)
        if field is None:
            msg = f"Preset '{variant_id}' sets unknown field '{type_slug}.{key}'."
            raise RegistryError(msg)
        check_value(field, value, where=f"preset value '{variant_id}.{key}'")
    return PresetVariant(
        id=variant_id,
        label=str(payload.get("label", variant_id)),
        description=str(payload.get("description", "")),
        type=definition.slug,
        indicator_color=str(payload.get("indicator_color", "")),
        settings=MappingProxyType(settings),
    )


class PresetLibrary:
    """Lazily loaded, read-only view over the preset file."""

    def __init__(
        self,
        path: Path = SECTION_PRESETS_PATH,
        registry: SectionTypeRegistry = default_registry,
    ) -> None:
        self.path = path
        self.registry = registry
        self._lock = threading.Lock()
        self._categories: tuple[PresetCategory, ...] | None = None

    def categories(self) -> tuple[PresetCategory, ...]:
        """Return every category in palette order."""
        categories = self._categories
        if categories is None:
            with self._lock:
                if self._categories is None:
                    self._categories = load_presets(self.path, self.registry)
                categories = self._categories
        return categories

    def get_variant(self, variant_id: str) -> PresetVariant | None:
        """Return the variant called ``variant_id`` or ``None``."""
        for category in self.categories():
            for variant in category.variants:
                if variant.id == variant_id:
                    return variant
        return None

    def variants_for(self, type_slug: str) -> list[PresetVariant]:
        """Return every variant that renders as ``type_slug``."""
        definition = self.registry.get(type_slug)
        if definition is None:
            return []
        return [
            variant
            for category in self.categories()
            for variant in category.variants
            if variant.type == definition.slug
        ]


default_presets = PresetLibrary()


def get_presets() -> tuple[PresetCategory, ...]:
    """Return the packaged preset categories."""
    return default_presets.categories()


def get_variant(variant_id: str) -> PresetVariant | None:
    """Look up a packaged preset by id."""
    return default_presets.get_variant(variant_id)


def variants_for(type_slug: str) -> list[PresetVariant]:
    """Return packaged presets for a section type."""
    return default_presets.variants_for(type_slug)


def preset_section(variant_id: str, *, section_id: str = "") -> Section:
    """Create a ``Section`` pre-filled from the preset ``variant_id``.

    Raises
    ------
    KeyError
        If no preset has that id.
    """
    from ..renderer.models import Section

    variant = get_variant(variant_id)
    if variant is None:
        msg = f"Unknown preset '{variant_id}'."
        raise KeyError(msg)
    return Section(
        id=section_id or variant.id,
        type=variant.type,
        settings=dict(variant.settings),
    )


__all__ = [
    "PresetCategory",
    "PresetLibrary",
    "PresetVariant",
    "default_presets",
    "get_presets",
    "get_variant",
    "load_presets",
    "preset_section",
    "variants_for",
]
