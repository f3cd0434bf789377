# magicdb/renderers/txt.py
from __future__ import annotations

from typing import Iterable, Optional

from ..dto import MagicCard
from .base import CardRenderer

"""
Plain-text renderer for MagicCards.

author: Cole McGregor
date: 2025-11-17
version: 0.2.0
"""


def _stats(power: Optional[str], toughness: Optional[str]) -> Optional[str]:
    if power is None and toughness is None:
        return None
    return f"{power or '-'}/{toughness or '-'}"


def _colors_text(card: MagicCard) -> str:
    return ", ".join(c.display_name for c in card.colors)


class TextCardRenderer(CardRenderer):
    """
    Plain-text renderer (good for CLI output or logs).
    """
    name = "text"

    def render_card(self, c: MagicCard, *, owned: int = 0) -> str:
        header = f"{c.name}  [id={c.multiverse_id}]"
        if c.cost_text:
            header += f"  {c.cost_text}"

        lines = [
            "=" * 72,
            header,
            "-" * 72,
            f"Type: {c.type_text}",
            f"Colors: {_colors_text(c)}",
            f"Converted cost: {c.converted_cost}",
        ]
        stats = _stats(c.power, c.toughness)
        if stats:
            lines.append(f"P/T: {stats}")
        lines += [
            f"Expansion: {c.expansion or '(unknown)'}"
            + (f" #{c.number}" if c.number else ""),
            f"Rarity: {c.rarity or '(unknown)'}",
            f"Language: {c.language or '(unknown)'}",
        ]
        if c.artist:
            lines.append(f"Artist: {c.artist}")
        if c.watermark:
            lines.append(f"Watermark: {c.watermark}")
        if owned:
            lines.append(f"Owned: {owned}")
        lines.append("-" * 72)
        lines.append(c.text or "(no rules text)")
        if c.flavor_text:
            lines.append("")
            lines.append(c.flavor_text)
        lines.append("=" * 72)
        return "\n".join(lines)

    def render_line(self, c: MagicCard) -> str:
        """One-line summary for result lists."""
        cost = f" {c.cost_text}" if c.cost_text else ""
        return f"{c.multiverse_id:>8}  {c.name}{cost}  ({c.type_text})  {c.expansion or ''}".rstrip()

    def render_page(self, cards: Iterable[MagicCard], *, page_title: str = "MagicDB - Cards") -> str:
        parts = [f"# {page_title}"]
        emitted = False
        for c in cards:
            parts.append(self.render_card(c))
            emitted = True
        if not emitted:
            parts.append("(no cards)")
        return "\n".join(parts)

    def write_page(self, cards: Iterable[MagicCard], out_path: str, *, page_title: str = "MagicDB - Cards") -> None:
        doc = self.render_page(cards, page_title=page_title)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(doc)
