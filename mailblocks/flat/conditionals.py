"""``{{#if name}}…{{else}}…{{/if}}`` blocks in flat templates.

Blocks do not nest. A ``{{#if}}`` inside another block's branch closes at the
first ``{{/if}}`` and leaves stray tags behind, so templates must keep
conditionals flat.

>>> evaluate_conditionals("{{#if x}}A{{else}}B{{/if}}", {"x": "false"})
'B'
>>> evaluate_conditionals("{{#if x}}A{{/if}}", {"x": 1})
'A'
"""

from __future__ import annotations

import re
import typing as typ

from ..formatting import is_truthy

if typ.TYPE_CHECKING:
    import collections.abc as cabc

CONDITIONAL_PATTERN = re.compile(
    r"\{\{#if\s+(\w+)\}\}(.*?)(?:\{\{else\}\}(.*?))?\{\{/if\}\}",
    re.DOTALL,
)


def evaluate_condition(name: str, data: cabc.Mapping[str, typ.Any]) -> bool:
    """Return whether ``data[name]`` counts as true; absent keys are false."""
    return is_truthy(data.get(name))


def evaluate_conditionals(html: str, data: cabc.Mapping[str, typ.Any]) -> str:
    """Resolve every conditional block in ``html`` against ``data``.

    Each block is replaced by its first branch when the named value is
    truthy, otherwise by its ``{{else}}`` branch or by nothing.
    """

    def _resolve(match: re.Match[str]) -> str:
        if evaluate_condition(match.group(1), data):
            return match.group(2)
        return match.group(3) or ""

    return CONDITIONAL_PATTERN.sub(_resolve, html)


__all__ = ["CONDITIONAL_PATTERN", "evaluate_condition", "evaluate_conditionals"]
