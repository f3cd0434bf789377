"""
CSV parser for MagicDB.

Reads a card export with columns:
  Multiverse Id, Name, Cost, Types, Text, Power, Toughness, Expansion,
  Flavor Text, Rarity, Artist, Number, Watermark, Language

- Validates required headers (Multiverse Id, Name, Types), with common aliases.
- Trims whitespace; missing optional columns come through as "".
- Ignores blank/comment-only rows.
- Yields RawRow dictionaries; the cost and type line are left as text for
  the repository to parse.

author: Cole McGregor
date: 2025-11-17
version: 0.3.0

Usage:
    parser = CSVParser()
    for row in parser.parse("cards.csv"):
        ...
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List

from .base import RawRow, ParserStrategy, ParserError


# ---------------------------------------------------------------------------
# Header normalization
# ---------------------------------------------------------------------------

# canonical header -> RawRow key
CANONICAL_FIELDS = {
    "Multiverse Id": "multiverse_id",
    "Name": "name",
    "Cost": "cost",
    "Types": "types",
    "Text": "text",
    "Power": "power",
    "Toughness": "toughness",
    "Expansion": "expansion",
    "Flavor Text": "flavor_text",
    "Rarity": "rarity",
    "Artist": "artist",
    "Number": "number",
    "Watermark": "watermark",
    "Language": "language",
}

# Header normalization map (supports some common variants)
HEADER_ALIASES = {
    "multiverse id": "Multiverse Id",
    "multiverseid": "Multiverse Id",
    "multiverse_id": "Multiverse Id",
    "id": "Multiverse Id",

    "name": "Name",
    "card name": "Name",

    "cost": "Cost",
    "mana cost": "Cost",
    "manacost": "Cost",

    "types": "Types",
    "type": "Types",
    "type line": "Types",

    "text": "Text",
    "rules text": "Text",
    "oracle text": "Text",

    "power": "Power",
    "toughness": "Toughness",

    "expansion": "Expansion",
    "set": "Expansion",

    "flavor text": "Flavor Text",
    "flavor": "Flavor Text",
    "flavour text": "Flavor Text",

    "rarity": "Rarity",
    "artist": "Artist",

    "number": "Number",
    "collector number": "Number",

    "watermark": "Watermark",

    "language": "Language",
    "lang": "Language",
}

# Required columns (after normalization)
REQUIRED_HEADERS: List[str] = ["Multiverse Id", "Name", "Types"]


def _normalize_header(h: str) -> str:
    """Normalize a CSV header to our canonical name (if known)."""
    key = (h or "").strip().lower()
    return HEADER_ALIASES.get(key, None) or (h or "").strip()


def _trim(v) -> str:
    """Convert value to string and strip whitespace; None -> empty string."""
    return "" if v is None else str(v).strip()


# ---------------------------------------------------------------------------
# CSV Parser
# ---------------------------------------------------------------------------

class CSVParser(ParserStrategy):
    """
    Strategy for parsing CSV card exports.

    Tries UTF-8 first, then falls back to Windows-1252 (cp1252), which is
    what older spreadsheet exports of card text tend to use.
    """

    def name(self) -> str:
        return "CSVParser"

    def parse(self, path: str | Path) -> Iterable[RawRow]:
        """
        Parse the CSV at `path` and yield RawRow objects.

        - Tries encodings in order: "utf-8-sig", "utf-8", "cp1252".
        - If an encoding fails with UnicodeDecodeError, tries the next.
        - If all fail, raises ParserError with details.
        """
        p = Path(path)
        if not p.exists():
            raise ParserError(f"CSV file not found: {p}")

        encodings = ["utf-8-sig", "utf-8", "cp1252"]
        last_decode_err: UnicodeDecodeError | None = None

        for enc in encodings:
            rows: list[RawRow] = []

            try:
                with p.open("r", encoding=enc, newline="") as f:
                    reader = csv.DictReader(f)

                    if reader.fieldnames is None:
                        raise ParserError("CSV has no header row.")

                    header_map = {orig: _normalize_header(orig) for orig in reader.fieldnames}

                    missing = [h for h in REQUIRED_HEADERS if h not in set(header_map.values())]
                    if missing:
                        raise ParserError(
                            f"CSV missing required columns: {', '.join(missing)}"
                        )

                    for raw in reader:
                        # Skip completely blank rows
                        if not raw or all((_trim(v) == "" for v in raw.values())):
                            continue

                        # Skip comment rows where the first cell starts with '#'
                        first_val = next(iter(raw.values()))
                        if isinstance(first_val, str) and first_val.strip().startswith("#"):
                            continue

                        row: dict[str, str] = {key: "" for key in CANONICAL_FIELDS.values()}
                        for orig_key, val in raw.items():
                            field = CANONICAL_FIELDS.get(header_map.get(orig_key, ""))
                            if field:
                                row[field] = _trim(val)

                        rows.append(RawRow(**row))

            except UnicodeDecodeError as e:
                # Could not decode with this encoding; keep error and try next.
                last_decode_err = e
                continue
            except csv.Error as e:
                # Structural CSV error; retrying with a different encoding won't help.
                raise ParserError(f"CSV parsing error: {e}") from e

            for r in rows:
                yield r
            return

        # All encoding attempts failed
        raise ParserError(
            f"CSV encoding error (tried {', '.join(encodings)}): {last_decode_err}"
        ) from last_decode_err

    def parse_with_count(self, path: str | Path):
        """
        Parse the CSV and return (rows, total_count).
        """
        rows = list(self.parse(path))
        return rows, len(rows)
