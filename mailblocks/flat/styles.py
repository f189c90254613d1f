"""Named template styles for the flat template engine.

A style is a named starting point for ``TemplateSettings``: a shared base
plus a few layout overrides such as the product layout, products per row and
the body width. Styles are read from ``data/template_styles.yaml`` the first
time they are needed and validated against the settings fields.

Examples
--------
>>> from mailblocks.flat.styles import get_default_settings, get_slugs
>>> get_slugs()[:3]
['classic', 'full-width', 'reversed']
>>> settings = get_default_settings("compact")
>>> settings.product_layout, settings.max_width
('compact', 480)
"""

from __future__ import annotations

import dataclasses as dc
import logging
import threading
import typing as typ
from pathlib import Path
from types import MappingProxyType

from ..registry.loader import read_yaml_mapping
from ..registry.models import RegistryError
from .settings import (
    BUTTON_SIZES,
    PRODUCT_LAYOUTS,
    TemplateSettings,
    parse_template_settings,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

TEMPLATE_STYLES_PATH = (
    Path(__file__).resolve().parents[1] / "data" / "template_styles.yaml"
)

_SETTING_FIELDS = frozenset(field.name for field in dc.fields(TemplateSettings))
_CHOICES: dict[str, tuple[str, ...]] = {
    "product_layout": PRODUCT_LAYOUTS,
    "product_button_size": BUTTON_SIZES,
}


@dc.dataclass(frozen=True, slots=True)
class TemplateStyle:
    """A named set of template settings."""

    slug: str
    name: str
    description: str
    settings: cabc.Mapping[str, typ.Any]

    def template_settings(self) -> TemplateSettings:
        """Return fresh ``TemplateSettings`` for this style."""
        return parse_template_settings(dict(self.settings))


def _check_settings(where: str, payload: object) -> dict[str, typ.Any]:
    if not isinstance(payload, dict):
        msg = f"Settings for {where} must be a mapping."
        raise RegistryError(msg)
    for key, value in payload.items():
        if key not in _SETTING_FIELDS:
            msg = f"Template style {where} sets unknown setting '{key}'."
            raise RegistryError(msg)
        choices = _CHOICES.get(key)
        if choices is not None and value not in choices:
            msg = (
                f"Template style {where} sets {key} to {value!r}; "
                f"expected one of {', '.join(choices)}."
            )
            raise RegistryError(msg)
    return dict(payload)


def load_template_styles(
    path: Path = TEMPLATE_STYLES_PATH,
) -> dict[str, TemplateStyle]:
    """Parse the style table at ``path`` into styles keyed by slug.

    Each style's settings are the file's ``base`` mapping overlaid with the
    style's own ``settings``.

    Raises
    ------
    RegistryError
        If a slug is missing or repeated, or a setting is unknown or outside
        its allowed choices.
    """
    raw = read_yaml_mapping(path)
    base = _check_settings("'base'", raw.get("base") or {})
    styles: dict[str, TemplateStyle] = {}
    for entry in raw.get("styles") or []:
        slug = str(entry.get("slug", "")).strip()
        if not slug:
            msg = f"A template style in '{path}' has no slug."
            raise RegistryError(msg)
        if slug in styles:
            msg = f"Template style '{slug}' is defined more than once."
            raise RegistryError(msg)
        overrides = _check_settings(f"'{slug}'", entry.get("settings") or {})
        styles[slug] = TemplateStyle(
            slug=slug,
            name=str(entry.get("name", slug)),
            description=str(entry.get("description", "")),
            settings=MappingProxyType({**base, **overrides}),
        )
    return styles


class TemplateStyleLibrary:
    """Lazily loaded, read-only view over the template style file."""

    def __init__(self, path: Path = TEMPLATE_STYLES_PATH) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._styles: cabc.Mapping[str, TemplateStyle] | None = None

    def get_templates(self) -> cabc.Mapping[str, TemplateStyle]:
        """Return every style keyed by slug, in file order."""
        styles = self._styles
        if styles is None:
            with self._lock:
                if self._styles is None:
                    self._styles = MappingProxyType(load_template_styles(self.path))
                styles = self._styles
        return styles

    def get_template(self, slug: str) -> TemplateStyle | None:
        return self.get_templates().get(slug)

    def get_slugs(self) -> list[str]:
        return list(self.get_templates())

    def get_template_settings(self, slug: str) -> dict[str, typ.Any]:
        """Return the raw settings of ``slug``, or ``{}`` when it is unknown."""
        style = self.get_template(slug)
        return dict(style.settings) if style is not None else {}

    def get_default_settings(self, slug: str = "") -> TemplateSettings:
        """Return the starting ``TemplateSettings`` for ``slug``.

        An empty slug gives the built-in defaults. An unknown slug logs a
        warning and also gives the built-in defaults.
        """
        if not slug:
            return TemplateSettings()
        style = self.get_template(slug)
        if style is None:
            logger.warning("unknown template style %r; using defaults", slug)
            return TemplateSettings()
        return style.template_settings()


default_styles = TemplateStyleLibrary()


def get_templates() -> cabc.Mapping[str, TemplateStyle]:
    """Return the packaged template styles."""
    return default_styles.get_templates()


def get_template(slug: str) -> TemplateStyle | None:
    return default_styles.get_template(slug)


def get_slugs() -> list[str]:
    return default_styles.get_slugs()


def get_template_settings(slug: str) -> dict[str, typ.Any]:
    return default_styles.get_template_settings(slug)


def get_default_settings(slug: str = "") -> TemplateSettings:
    """Return starting settings for a packaged style; see the library method."""
    return default_styles.get_default_settings(slug)


__all__ = [
    "TEMPLATE_STYLES_PATH",
    "TemplateStyle",
    "TemplateStyleLibrary",
    "default_styles",
    "get_default_settings",
    "get_slugs",
    "get_template",
    "get_template_settings",
    "get_templates",
    "load_template_styles",
]
