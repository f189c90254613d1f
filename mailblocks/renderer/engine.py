"""Section renderer: ordered sections in, complete email document out.

``SectionRenderer`` merges each section's sparse settings over the registry
defaults, dispatches on its ``SectionKind`` to a layout function and wraps the
concatenated fragments in the document shell. Rendering is pure: the same
sections and settings always yield byte-identical output and the input
sections are never modified.

Typical usage:

>>> from mailblocks.renderer import SectionRenderer
>>> html = SectionRenderer().render_all(
...     [{"type": "hero", "settings": {"headline": "Sale", "cta_text": ""}}],
...     {"store_name": "Acme"},
... )
>>> html.startswith("<!DOCTYPE html>")
True

Unknown section types render nothing. ``render_all`` logs a warning for each
one it skips; the layout functions themselves never log.
"""

from __future__ import annotations

import logging
import typing as typ

from markupsafe import Markup

from ..config.loader import build_global_settings
from ..config.models import GlobalSettings
from ..formatting import css_value
from ..registry import SectionTypeRegistry, default_registry
from ..templating import build_environment, default_environment
from .context import LayoutContext
from .coupons import coupon_layouts
from .dividers import render_divider
from .layouts import (
    render_banner,
    render_cta,
    render_footer,
    render_header,
    render_heading,
    render_hero,
    render_hero_split,
    render_image,
    render_spacer,
    render_text,
)
from .lists import render_list
from .models import Section, SectionKind
from .products_layout import render_products
from .social import render_social

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from ..products import ProductLookup
    from .context import LayoutFunction

logger = logging.getLogger(__name__)

SectionInput = Section | typ.Mapping[str, typ.Any]
GlobalInput = GlobalSettings | typ.Mapping[str, typ.Any] | None


def _build_layouts() -> dict[SectionKind, LayoutFunction]:
    layouts: dict[SectionKind, LayoutFunction] = {
        SectionKind.HEADER: render_header,
        SectionKind.HERO: render_hero,
        SectionKind.HERO_SPLIT: render_hero_split,
        SectionKind.TEXT: render_text,
        SectionKind.IMAGE: render_image,
        SectionKind.PRODUCTS: render_products,
        SectionKind.BANNER: render_banner,
        SectionKind.CTA: render_cta,
        SectionKind.DIVIDER: render_divider,
        SectionKind.SPACER: render_spacer,
        SectionKind.HEADING: render_heading,
        SectionKind.LIST: render_list,
        SectionKind.SOCIAL: render_social,
        SectionKind.FOOTER: render_footer,
    }
    for slug, layout in coupon_layouts().items():
        layouts[SectionKind(slug)] = layout
    return layouts


LAYOUTS: typ.Final = _build_layouts()


def _as_section(section: SectionInput) -> Section:
    if isinstance(section, Section):
        return section
    return Section.from_mapping(section)


def _as_global(settings: GlobalInput) -> GlobalSettings:
    if isinstance(settings, GlobalSettings):
        return settings
    return build_global_settings(settings or {})


class SectionRenderer:
    """Render sections to fragments and full email documents."""

    def __init__(
        self,
        registry: SectionTypeRegistry | None = None,
        products: ProductLookup | None = None,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialise the renderer.

        Parameters
        ----------
        registry : SectionTypeRegistry, optional
            Source of per-type defaults. Defaults to the packaged registry.
        products : ProductLookup, optional
            Catalog used by ``products`` sections. Without one those sections
            render their placeholder.
        templates_dir : Path, optional
            Alternative template directory. Defaults to the bundled
            ``mailblocks/templates``.
        """
        self.registry = registry or default_registry
        self.products = products
        self.env = (
            build_environment(templates_dir) if templates_dir else default_environment()
        )
        self.document = self.env.get_template("document.jinja")

    def context(self, global_settings: GlobalInput = None) -> LayoutContext:
        """Return the layout context for one render call."""
        return LayoutContext.from_global(
            _as_global(global_settings), products=self.products, env=self.env
        )

    def merged_settings(self, section: SectionInput) -> dict[str, typ.Any]:
        """Return the registry defaults overlaid with the section's settings."""
        resolved = _as_section(section)
        return {**self.registry.get_defaults(resolved.type), **resolved.settings}

    def render_section(
        self, section: SectionInput, global_settings: GlobalInput = None
    ) -> Markup:
        """Render one section fragment, or an empty fragment when unknown."""
        return self._render(_as_section(section), self.context(global_settings))

    def render_fragments(
        self, sections: cabc.Iterable[SectionInput], global_settings: GlobalInput = None
    ) -> list[Markup]:
        """Render each section in order, skipping untyped and unknown ones."""
        ctx = self.context(global_settings)
        fragments: list[Markup] = []
        for raw in sections:
            section = _as_section(raw)
            if not section.type:
                continue
            if section.kind is SectionKind.UNKNOWN:
                logger.warning(
                    "skipping section %r with unknown type %r",
                    section.id,
                    section.type,
                )
                continue
            fragment = self._render(section, ctx)
            if fragment:
                fragments.append(fragment)
        return fragments

    def render_all(
        self, sections: cabc.Iterable[SectionInput], global_settings: GlobalInput = None
    ) -> str:
        """Render ``sections`` and wrap them in the email document shell.

        Parameters
        ----------
        sections : Iterable[Section or Mapping]
            Sections in display order, as ``Section`` objects or persisted
            ``{id, type, settings}`` mappings.
        global_settings : GlobalSettings or Mapping, optional
            Width, font, store name and URL applied to every section.

        Returns
        -------
        str
            A complete HTML document ending in a newline.
        """
        settings = _as_global(global_settings)
        fragments = self.render_fragments(sections, settings)
        html = self.document.render(
            settings=settings,
            font_css=css_value(settings.font_family),
            body=Markup("\n").join(fragments),
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _render(self, section: Section, ctx: LayoutContext) -> Markup:
        layout = LAYOUTS.get(section.kind)
        if layout is None:
            return Markup("")
        return layout(self.merged_settings(section), ctx)


def render_all(
    sections: cabc.Iterable[SectionInput],
    global_settings: GlobalInput = None,
    *,
    products: ProductLookup | None = None,
) -> str:
    """Render a complete document with the packaged registry."""
    return SectionRenderer(products=products).render_all(sections, global_settings)


def render_section(
    section: SectionInput,
    global_settings: GlobalInput = None,
    *,
    products: ProductLookup | None = None,
) -> Markup:
    """Render a single fragment with the packaged registry."""
    return SectionRenderer(products=products).render_section(section, global_settings)


__all__ = ["LAYOUTS", "SectionRenderer", "render_all", "render_section"]
