"""Read-only lookup over the registered section types.

The registry is populated lazily from ``data/section_types.yaml`` the first
time any lookup runs, guarded by a lock so concurrent first access loads the
table exactly once. Afterwards the table is exposed as a
``MappingProxyType`` and never changes, which keeps every render in a batch
working from the same defaults.

Examples
--------
>>> from mailblocks.registry import get_defaults
>>> get_defaults("spacer")
{'height': 30, 'bg_color': ''}
>>> get_defaults("no-such-type")
{}
"""

from __future__ import annotations

import threading
import typing as typ
from types import MappingProxyType

from .loader import SECTION_TYPES_PATH, load_section_types

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import SectionTypeDefinition


def normalize_slug(value: object) -> str:
    """Return the canonical slug for an incoming type string.

    Slugs are trimmed and lower-cased and hyphens become underscores, so
    ``"Hero-Split"`` resolves to ``"hero_split"``.
    """
    if value is None:
        return ""
    return str(value).strip().lower().replace("-", "_")


class SectionTypeRegistry:
    """Immutable catalog of section types loaded once on first use."""

    def __init__(self, path: Path = SECTION_TYPES_PATH) -> None:
        """Prepare a registry backed by the YAML table at ``path``.

        Parameters
        ----------
        path : Path, optional
            Section type table. Defaults to the file shipped with the
            package; tests pass a temporary file to exercise validation.
        """
        self.path = path
        self._lock = threading.Lock()
        self._types: cabc.Mapping[str, SectionTypeDefinition] | None = None

    def get_all(self) -> cabc.Mapping[str, SectionTypeDefinition]:
        """Return every registered type keyed by slug."""
        types = self._types
        if types is None:
            with self._lock:
                if self._types is None:
                    self._types = MappingProxyType(load_section_types(self.path))
                types = self._types
        return types

    def get(self, slug: object) -> SectionTypeDefinition | None:
        """Return the definition for ``slug`` or ``None`` when unknown."""
        return self.get_all().get(normalize_slug(slug))

    def get_defaults(self, slug: object) -> dict[str, typ.Any]:
        """Return a fresh defaults mapping for ``slug`` (empty when unknown)."""
        definition = self.get(slug)
        return definition.defaults() if definition else {}

    def for_editor(self) -> dict[str, dict[str, typ.Any]]:
        """Return a JSON-serialisable description of every type.

        Authoring surfaces use this to build their field forms; each entry
        carries the slug, label, icon, AI flag, the field list and the
        resolved defaults.
        """
        return {
            slug: {
                "slug": slug,
                "label": definition.label,
                "icon": definition.icon,
                "has_ai": definition.has_ai,
                "fields": [field.to_dict() for field in definition.fields],
                "defaults": definition.defaults(),
            }
            for slug, definition in self.get_all().items()
        }


default_registry = SectionTypeRegistry()


def get_all() -> cabc.Mapping[str, SectionTypeDefinition]:
    """Return every type from the packaged registry."""
    return default_registry.get_all()


def get(slug: object) -> SectionTypeDefinition | None:
    """Look up ``slug`` in the packaged registry."""
    return default_registry.get(slug)


def get_defaults(slug: object) -> dict[str, typ.Any]:
    """Return defaults for ``slug`` from the packaged registry."""
    return default_registry.get_defaults(slug)


__all__ = [
    "SectionTypeRegistry",
    "default_registry",
    "get",
    "get_all",
    "get_defaults",
    "normalize_slug",
]
