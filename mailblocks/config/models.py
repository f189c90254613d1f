"""Typed dataclasses describing render configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_MAX_WIDTH,
)

if typ.TYPE_CHECKING:
    from ..flat.settings import TemplateSettings


class RenderConfigError(ValueError):
    """Raised when a render configuration file is invalid."""


@dc.dataclass(frozen=True, slots=True)
class GlobalSettings:
    """Document-wide values applied to every section in one render call."""

    max_width: int = DEFAULT_MAX_WIDTH
    font_family: str = DEFAULT_FONT_FAMILY
    store_url: str = ""
    store_name: str = ""
    background_color: str = DEFAULT_BACKGROUND_COLOR
    title: str = ""

    @property
    def document_title(self) -> str:
        """Title used for the ``<title>`` element."""
        return self.title or self.store_name


@dc.dataclass(frozen=True, slots=True)
class RenderConfig:
    """Parsed render configuration file."""

    global_settings: GlobalSettings
    template: TemplateSettings


__all__ = ["GlobalSettings", "RenderConfig", "RenderConfigError"]
