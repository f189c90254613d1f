"""Load render configuration and product catalog YAML files."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_MAX_WIDTH,
)
from ..flat.settings import parse_template_settings
from ..flat.styles import get_default_settings
from ..formatting import to_int, to_text
from ..products import StaticProductCatalog
from .models import GlobalSettings, RenderConfig, RenderConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _load_yaml(path: Path) -> object:
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        return loader.load(handle)


def load_render_config(path: Path, style: str = "") -> RenderConfig:
    """Load the YAML file describing document-wide render options.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (for example,
        ``render.yaml``). It may contain a ``global`` mapping for the section
        renderer and a ``template`` mapping for the flat template engine.
    style : str, optional
        Named template style whose settings sit under the ``template``
        mapping. Defaults to the mapping's own ``style`` key, if any.

    Returns
    -------
    RenderConfig
        Parsed global settings plus template settings merged over the
        style's settings, or over the defaults when no style is named.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    RenderConfigError
        If ``global`` or ``template`` is present but not a mapping.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mailblocks.config import load_render_config
    >>> config = load_render_config(Path("render.yaml"))  # doctest: +SKIP
    >>> config.global_settings.max_width  # doctest: +SKIP
    600
    """
    loaded = _load_yaml(path) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    global_raw = raw.get("global") or {}
    template_raw = raw.get("template") or {}
    for name, section in (("global", global_raw), ("template", template_raw)):
        if not isinstance(section, dict):
            msg = f"'{name}' must be a mapping in '{path}'."
            raise RenderConfigError(msg)

    style = style or to_text(template_raw.get("style"))
    base = get_default_settings(style) if style else None
    return RenderConfig(
        global_settings=build_global_settings(global_raw),
        template=parse_template_settings(template_raw, base),
    )


def build_global_settings(payload: cabc.Mapping[str, typ.Any]) -> GlobalSettings:
    """Build ``GlobalSettings`` from a mapping.

    ``max_width`` is used as given; a missing, unparseable or non-positive
    width keeps the default, as do other missing keys.
    """
    max_width = to_int(payload.get("max_width"), DEFAULT_MAX_WIDTH)
    return GlobalSettings(
        max_width=max_width if max_width > 0 else DEFAULT_MAX_WIDTH,
        font_family=to_text(payload.get("font_family")) or DEFAULT_FONT_FAMILY,
        store_url=to_text(payload.get("store_url")),
        store_name=to_text(payload.get("store_name")),
        background_color=to_text(payload.get("background_color"))
        or DEFAULT_BACKGROUND_COLOR,
        title=to_text(payload.get("title")),
    )


def load_catalog(path: Path) -> StaticProductCatalog:
    """Load a product catalog from a YAML list of product records.

    The file may hold a bare list or a mapping with a ``products`` list.
    Entries that are not mappings are skipped.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    RenderConfigError
        If the document holds neither a list nor a ``products`` list.
    """
    loaded = _load_yaml(path) or []
    match loaded:
        case list():
            records = loaded
        case {"products": list() as products}:
            records = products
        case _:
            msg = f"Catalog '{path}' must contain a list of products."
            raise RenderConfigError(msg)
    return StaticProductCatalog.from_records(
        record for record in records if isinstance(record, dict)
    )


def load_sections(path: Path) -> list[dict[str, typ.Any]]:
    """Load persisted sections from a YAML or JSON file.

    The file may hold a bare list of ``{id, type, settings}`` mappings or a
    mapping with a ``sections`` list. Entries that are not mappings are
    skipped.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    RenderConfigError
        If the document holds neither a list nor a ``sections`` list.
    """
    loaded = _load_yaml(path) or []
    match loaded:
        case list():
            records = loaded
        case {"sections": list() as sections}:
            records = sections
        case _:
            msg = f"Sections file '{path}' must contain a list of sections."
            raise RenderConfigError(msg)
    return [dict(record) for record in records if isinstance(record, dict)]


def load_template_data(path: Path) -> dict[str, typ.Any]:
    """Load flat template token data from a YAML or JSON mapping.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the document is not a mapping.
    """
    loaded = _load_yaml(path) or {}
    if not isinstance(loaded, dict):
        msg = f"Template data in '{path}' must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


__all__ = [
    "build_global_settings",
    "load_catalog",
    "load_render_config",
    "load_sections",
    "load_template_data",
]
