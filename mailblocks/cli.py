"""Cyclopts CLI entrypoint for rendering mailblocks emails.

The ``mailblocks`` console script renders a sections file to a complete HTML
email, runs a flat template through the legacy token engine, lists the section
markers of a flat template and prints the named template styles and the
registered section types. Parameters can also be supplied through
``MAILBLOCKS_*`` environment variables, which is convenient in CI.

Examples
--------
Render a sections file with a render config:

>>> from mailblocks.cli import app
>>> app(
...     ["render", "--sections", "sections.yaml", "--config", "render.yaml"]
... )  # doctest: +SKIP

Preview the bundled flat template with sample data:

>>> app(["flat", "--preview", "--output", "preview.html"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import (
    GlobalSettings,
    RenderConfig,
    load_catalog,
    load_render_config,
    load_sections,
    load_template_data,
)
from .flat import (
    FlatTemplateEngine,
    get_default_settings,
    get_templates,
    load_template,
    parse_sections,
)
from .registry import default_registry
from .renderer import SectionRenderer

if typ.TYPE_CHECKING:
    from .products import StaticProductCatalog

LOG_LEVEL_ENV = "MAILBLOCKS_LOG_LEVEL"

app = App(name="mailblocks", config=cyclopts.config.Env("MAILBLOCKS_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool = False) -> None:
    level = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load_config(config: Path | None, style: str = "") -> RenderConfig:
    if config is None:
        return RenderConfig(GlobalSettings(), get_default_settings(style))
    return load_render_config(config, style)


def _load_catalog(catalog: Path | None) -> StaticProductCatalog | None:
    return load_catalog(catalog) if catalog else None


def _emit(html: str, output: Path | None) -> None:
    if output is None:
        print(html, end="" if html.endswith("\n") else "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Render a sections file to a complete HTML email.")
def render(
    *,
    sections: typ.Annotated[
        Path,
        Parameter(help="YAML or JSON list of sections", env_var="MAILBLOCKS_SECTIONS"),
    ],
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to render config", env_var="MAILBLOCKS_CONFIG"),
    ] = None,
    catalog: typ.Annotated[
        Path | None,
        Parameter(help="YAML product catalog for products sections"),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the HTML here instead of stdout")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log at DEBUG level")] = False,
) -> None:
    """Render ``sections`` with the section renderer.

    Parameters
    ----------
    sections : Path
        File holding the persisted ``{id, type, settings}`` sections.
    config : Path or None, optional
        Render config whose ``global`` mapping sets width, font and store.
    catalog : Path or None, optional
        Product catalog; without one products sections show a placeholder.
    output : Path or None, optional
        Destination file. The document is printed when omitted.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes or prints the rendered document.
    """
    _configure_logging(verbose=verbose)
    render_config = _load_config(config)
    renderer = SectionRenderer(products=_load_catalog(catalog))
    html = renderer.render_all(load_sections(sections), render_config.global_settings)
    _emit(html, output)


@app.command(help="Render a flat template with campaign data or sample data.")
def flat(
    *,
    template: typ.Annotated[
        Path | None,
        Parameter(help="Flat template HTML (defaults to the bundled template)"),
    ] = None,
    data: typ.Annotated[
        Path | None, Parameter(help="YAML or JSON mapping of token values")
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to render config", env_var="MAILBLOCKS_CONFIG"),
    ] = None,
    catalog: typ.Annotated[
        Path | None, Parameter(help="YAML product catalog for product rows")
    ] = None,
    style: typ.Annotated[
        str,
        Parameter(
            help="Named template style the config settings build on",
            env_var="MAILBLOCKS_STYLE",
        ),
    ] = "",
    preview: typ.Annotated[
        bool, Parameter(help="Merge sample data and tag sections for editors")
    ] = False,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the HTML here instead of stdout")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log at DEBUG level")] = False,
) -> None:
    """Run a flat template through the token engine.

    Parameters
    ----------
    template : Path or None, optional
        Template to render; the bundled default template when omitted.
    data : Path or None, optional
        Token values, optionally with a ``products`` list of product rows.
    config : Path or None, optional
        Render config whose ``template`` mapping holds the template settings
        and whose ``global`` mapping names the store.
    catalog : Path or None, optional
        Catalog used to complete product rows that only carry an id.
    style : str, optional
        Template style slug such as ``grid`` or ``compact``; see ``styles``.
        An unknown slug logs a warning and uses the default settings.
    preview : bool, optional
        Render over sample data and inject ``data-section-id`` attributes.
    output : Path or None, optional
        Destination file. The HTML is printed when omitted.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes or prints the rendered HTML.
    """
    _configure_logging(verbose=verbose)
    render_config = _load_config(config, style)
    store = render_config.global_settings
    engine = FlatTemplateEngine(
        _load_catalog(catalog), store_name=store.store_name, store_url=store.store_url
    )
    template_html = load_template(template)
    values = load_template_data(data) if data else {}
    if preview:
        html = engine.render_preview(template_html, render_config.template, values)
    else:
        values.setdefault("store_name", store.store_name)
        values.setdefault("store_url", store.store_url)
        html = engine.render(template_html, values, render_config.template)
    _emit(html, output)


@app.command(help="List the section markers of a flat template.")
def markers(
    *,
    template: typ.Annotated[
        Path | None,
        Parameter(help="Flat template HTML (defaults to the bundled template)"),
    ] = None,
) -> None:
    """Print ``id<TAB>label`` for every section marker in ``template``."""
    document = parse_sections(load_template(template))
    for section in document.sections:
        print(f"{section.id}\t{section.label}")


@app.command(help="List the named flat template styles.")
def styles() -> None:
    """Print ``slug<TAB>name<TAB>product layout`` for every template style."""
    for slug, style in get_templates().items():
        print(f"{slug}\t{style.name}\t{style.settings['product_layout']}")


@app.command(help="List the registered section types.")
def types() -> None:
    """Print ``slug<TAB>label`` for every registered section type."""
    for slug, definition in default_registry.get_all().items():
        print(f"{slug}\t{definition.label}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``mailblocks`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
