"""Placeholder substitution over nested settings structures."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_SCALAR_TYPES = (str, int, float, bool)
_TOKEN_RE = re.compile(r"\$\{([^{}]+)\}")


def substitute_placeholders(node: Any, parameters: Mapping[str, Any]) -> Any:
    """Return a copy of ``node`` with ``${name}`` tokens replaced in every string.

    Only scalar parameters take part. Mapping keys are kept as-is and unknown
    tokens stay untouched. The input structure is never mutated.
    """

    replacements = {
        str(name): _as_text(value)
        for name, value in parameters.items()
        if isinstance(value, _SCALAR_TYPES)
    }
    return _substitute(node, replacements)


def _substitute(node: Any, replacements: dict[str, str]) -> Any:
    if isinstance(node, str):
        return _replace_tokens(node, replacements)
    if isinstance(node, Mapping):
        return {key: _substitute(value, replacements) for key, value in node.items()}
    if isinstance(node, list | tuple):
        return [_substitute(item, replacements) for item in node]
    return node


def _replace_tokens(text: str, replacements: dict[str, str]) -> str:
    if "${" not in text:
        return text
    # Single pass: substituted values are never scanned again.
    return _TOKEN_RE.sub(lambda found: replacements.get(found.group(1), found.group(0)), text)


def _as_text(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
