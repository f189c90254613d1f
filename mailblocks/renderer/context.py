"""Per-render values handed to every layout function."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from markupsafe import Markup

from .._constants import DEFAULT_FONT_FAMILY, DEFAULT_MAX_WIDTH
from ..templating import default_environment

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from ..config.models import GlobalSettings
    from ..products import ProductLookup


@dc.dataclass(frozen=True, slots=True)
class LayoutContext:
    """Document-wide values shared by the sections of one render call.

    Attributes
    ----------
    max_width : int
        Width in pixels of every section's outer table.
    font_family : str
        CSS font stack used for all text.
    store_name : str
        Shown by the header when no logo is configured.
    store_url : str
        Target of the header logo link.
    products : ProductLookup or None
        Catalog used by the products layout; ``None`` renders a placeholder.
    env : Environment
        Jinja environment holding the section templates.
    """

    max_width: int = DEFAULT_MAX_WIDTH
    font_family: str = DEFAULT_FONT_FAMILY
    store_name: str = ""
    store_url: str = ""
    products: ProductLookup | None = None
    env: Environment = dc.field(default_factory=default_environment)

    @classmethod
    def from_global(
        cls,
        settings: GlobalSettings,
        *,
        products: ProductLookup | None = None,
        env: Environment | None = None,
    ) -> LayoutContext:
        """Build a context from parsed global settings."""
        return cls(
            max_width=settings.max_width,
            font_family=settings.font_family,
            store_name=settings.store_name,
            store_url=settings.store_url,
            products=products,
            env=env or default_environment(),
        )

    def render(self, template_name: str, **values: typ.Any) -> Markup:
        """Render ``template_name`` with ``ctx`` bound to this context."""
        template = self.env.get_template(template_name)
        return Markup(template.render(ctx=self, **values).strip())


LayoutFunction = cabc.Callable[[cabc.Mapping[str, typ.Any], LayoutContext], Markup]


__all__ = ["LayoutContext", "LayoutFunction"]
