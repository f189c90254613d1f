"""Render email-client-safe HTML from declarative marketing email sections.

The package has two rendering paths. ``mailblocks.renderer`` turns an ordered
list of ``{type, settings}`` sections into a complete table-based document,
using the defaults held by ``mailblocks.registry``. ``mailblocks.flat`` renders
legacy flat templates with ``{{token}}`` placeholders, ``{{#if}}`` blocks and
``<!-- ==== NAME ==== -->`` section markers.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mailblocks import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
