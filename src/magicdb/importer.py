from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Tuple

from .errors import BlankTypeLine, InvalidManaSymbol
from .logging import get_logger
from .parsers.base import RawRow, choose_parser
from .repos import CardRepository


"""
Importer pipeline for MagicDB.

- Parses a file using the ParserStrategy system (CSV).
- For each row, in order:
    1. Read raw fields
    2. Save through CardRepository.save_card, which parses the mana cost
       and type line and rewrites the card's type rows

Rows that break the mana-cost or type-line format (or carry a bad id) are
logged with their row number and counted as skipped; the rest of the file
still imports.

author: Cole McGregor
date: 2025-11-17
version: 0.4.0
"""

log = get_logger("importer")

# errors that reject a single row rather than the whole file
ROW_ERRORS = (InvalidManaSymbol, BlankTypeLine, ValueError)


def _row_to_card_data(row: RawRow) -> dict:
    data = dict(row)
    # blank optional cells are stored as NULL
    return {k: (v if v != "" else None) for k, v in data.items()}


def import_file(
    path: str | Path,
    *,
    repo: Optional[CardRepository] = None,
    progress_every: int = 100,
) -> Tuple[int, int]:
    """
    Import cards from a data file into the database.

    Returns (imported, skipped).
    """
    parser = choose_parser(path)
    rows: list[RawRow] = list(parser.parse(path))

    repo = repo or CardRepository()
    imported = 0
    skipped = 0

    total_rows = len(rows)
    if total_rows == 0:
        log.info("No rows found in %s; nothing to do.", path)
        return 0, 0

    start_time = time.perf_counter()

    for idx, row in enumerate(rows, start=1):
        data = _row_to_card_data(row)
        try:
            repo.save_card(data)
        except ROW_ERRORS as e:
            skipped += 1
            log.warning(
                "Skipping row %d (id=%s, name=%s): %s",
                idx, row.get("multiverse_id") or "?", row.get("name") or "?", e,
            )
            continue
        imported += 1

        # --- progress / ETA --------------------------------------------------
        if (idx % progress_every == 0) or (idx == total_rows):
            elapsed = time.perf_counter() - start_time
            rate = idx / elapsed if elapsed > 0 else 0.0
            eta_sec = (total_rows - idx) / rate if rate > 0 else 0.0
            log.info(
                "Imported %d/%d rows; elapsed=%.1fs, ETA≈%.1fs",
                idx, total_rows, elapsed, eta_sec,
            )

    log.info("Import finished: %d imported, %d skipped.", imported, skipped)
    return imported, skipped


__all__ = ["import_file", "ROW_ERRORS"]
