"""Section renderer public API."""

from __future__ import annotations

from .context import LayoutContext, LayoutFunction
from .engine import LAYOUTS, SectionRenderer, render_all, render_section
from .models import Section, SectionKind
from .settings import decode_settings

__all__ = [
    "LAYOUTS",
    "LayoutContext",
    "LayoutFunction",
    "Section",
    "SectionKind",
    "SectionRenderer",
    "decode_settings",
    "render_all",
    "render_section",
]
