"""Section type registry and preset library public API."""

from __future__ import annotations

from .loader import load_section_types
from .models import (
    FieldDefinition,
    FieldKind,
    RegistryError,
    SectionTypeDefinition,
    SelectOption,
)
from .presets import (
    PresetCategory,
    PresetLibrary,
    PresetVariant,
    get_presets,
    get_variant,
    load_presets,
    preset_section,
    variants_for,
)
from .section_types import (
    SectionTypeRegistry,
    default_registry,
    get,
    get_all,
    get_defaults,
    normalize_slug,
)

__all__ = [
    "FieldDefinition",
    "FieldKind",
    "PresetCategory",
    "PresetLibrary",
    "PresetVariant",
    "RegistryError",
    "SectionTypeDefinition",
    "SectionTypeRegistry",
    "SelectOption",
    "default_registry",
    "get",
    "get_all",
    "get_defaults",
    "get_presets",
    "get_variant",
    "load_presets",
    "load_section_types",
    "normalize_slug",
    "preset_section",
    "variants_for",
]
