"""Render configuration public API."""

from __future__ import annotations

from .loader import (
    build_global_settings,
    load_catalog,
    load_render_config,
    load_sections,
    load_template_data,
)
from .models import GlobalSettings, RenderConfig, RenderConfigError

__all__ = [
    "GlobalSettings",
    "RenderConfig",
    "RenderConfigError",
    "build_global_settings",
    "load_catalog",
    "load_render_config",
    "load_sections",
    "load_template_data",
]
