# magicdb/renderers/base.py
from __future__ import annotations

from typing import Iterable, Protocol

from ..dto import MagicCard

"""
Base protocol for card renderers.

Renderers produce a complete text "page" from a sequence of MagicCards.

Author: Cole McGregor
Date: 2025-11-17
Version: 0.2.0
"""


# ---------------------------------------------------------------------------
# Renderer Base
# ---------------------------------------------------------------------------

class RendererError(Exception):
    pass


class CardRenderer(Protocol):
    """
    Strategy interface: render MagicCards to a string.
    """

    name: str  # stable key, e.g., "text"

    def render_card(self, card: MagicCard, *, owned: int = 0) -> str: ...

    def render_page(
        self,
        cards: Iterable[MagicCard],
        *,
        page_title: str,
    ) -> str: ...

    def write_page(
        self,
        cards: Iterable[MagicCard],
        out_path: str,
        *,
        page_title: str,
    ) -> None: ...
