# magicdb/renderers/__init__.py
from __future__ import annotations

from typing import Dict

from .base import CardRenderer, RendererError
from .txt import TextCardRenderer

"""
Renderer registry.

- Registers concrete renderer instances keyed by renderer.name (lowercased/stripped).
- Used by the CLI to select an output format.
"""

_REGISTRY: Dict[str, CardRenderer] = {}


def register(renderer: CardRenderer) -> None:
    _REGISTRY[renderer.name.lower().strip()] = renderer


def get(name: str) -> CardRenderer:
    key = name.lower().strip()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise RendererError(
            f"Unknown renderer: {name!r}. Available: {', '.join(sorted(_REGISTRY))}"
        ) from None


def available() -> list[str]:
    return sorted(_REGISTRY.keys())


# Pre-register built-ins
register(TextCardRenderer())

__all__ = ["CardRenderer", "RendererError", "TextCardRenderer", "register", "get", "available"]
