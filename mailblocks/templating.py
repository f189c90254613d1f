"""Shared Jinja environment for section layouts and flat product blocks.

Every layout renders through one ``Environment`` with autoescape enabled, so
plain strings interpolated into a template are HTML-escaped and values already
wrapped in ``markupsafe.Markup`` are inserted verbatim. The environment is
read-only once built and may be shared between threads.

>>> from mailblocks.templating import default_environment
>>> env = default_environment()
>>> env.from_string("{{ value }}").render(value="<b>")
'&lt;b&gt;'
"""

from __future__ import annotations

import functools
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .formatting import clean_url, nl2br

TEMPLATES_DIR = Path(__file__).parent / "templates"


def build_environment(templates_dir: Path | None = None) -> Environment:
    """Create a Jinja environment for the layout templates.

    Parameters
    ----------
    templates_dir : Path, optional
        Directory containing the Jinja templates. Defaults to the
        ``mailblocks/templates`` directory when ``None``.

    Returns
    -------
    Environment
        Environment with autoescape, trimmed blocks and the ``nl2br`` and
        ``clean_url`` filters registered.
    """
    env = Environment(
        loader=FileSystemLoader(templates_dir or TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.filters["nl2br"] = nl2br
    env.filters["clean_url"] = clean_url
    return env


@functools.lru_cache(maxsize=1)
def default_environment() -> Environment:
    """Return the process-wide environment over the bundled templates."""
    return build_environment()


__all__ = ["TEMPLATES_DIR", "build_environment", "default_environment"]
