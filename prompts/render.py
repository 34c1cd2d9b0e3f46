"""Placeholder substitution for prompt templates."""
from __future__ import annotations

import re
from typing import Any, Mapping

_PLACEHOLDER = re.compile(r"\{([A-Z][A-Z0-9_]*)\}")


def render_prompt(template: str, bindings: Mapping[str, Any]) -> str:
    """Replace ``{NAME}`` placeholders with values from ``bindings``.

    Placeholders without a binding are left as-is and ``None`` renders as an
    empty string. Substituted values are not scanned again.
    """

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in bindings:
            return match.group(0)
        value = bindings[name]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_sub, template)


__all__ = ["render_prompt"]
