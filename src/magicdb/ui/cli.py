# src/magicdb/ui/cli.py
from __future__ import annotations

"""
MagicDB CLI

Commands:
  init-db         Create the database tables.
  import-file     Parse a CSV card export and save every card.
  show            Show a single card.
  search          Criteria search with pagination or grouping by name.
  own             Add copies of a card to the collection (or set the count).
  unown           Remove a card from the collection.
  expansions      List expansion names.
  subtypes        List subtypes (optionally with card counts).

Search criteria are applied left to right. --or switches every following
criterion to OR, --and switches back:

  magicdb search --type creature --or --subtype elf --subtype goblin

author: Cole McGregor
date: 2025-11-18
version: 0.3.0
"""

import argparse
import os
import sys
from typing import Optional, Sequence

from .. import db
from ..criteria import SearchCriterion, SearchField
from ..enums import Color, Language
from ..errors import InvalidPage, MagicDBError
from ..importer import import_file
from ..logging import logger, setup
from ..parsers.base import ParserError
from ..planner import DEFAULT_PAGE_SIZE
from ..query import SearchService
from ..repos import CardRepository, ExpansionRepository, SubTypeRepository
from ..renderers import get as get_renderer


# ------------------------------------------------------------------------------
# Criteria parsing
# ------------------------------------------------------------------------------

_WILDCARDS = ("%", "_")


def _contains(text: str) -> str:
    """Wrap plain text as a substring match; text with wildcards is left alone."""
    return text if any(w in text for w in _WILDCARDS) else f"%{text}%"


def _color_value(text: str):
    t = text.strip()
    if len(t) == 1:
        try:
            return Color.from_code(t)
        except MagicDBError:
            return t
    return Color.__members__.get(t.upper().replace(" ", "_"), t)


def _language_value(text: str):
    return Language.from_value(text) or text


# field -> how its CLI text becomes a search value
_VALUE_OF = {
    SearchField.NAME: _contains,
    SearchField.COLOR: _color_value,
    SearchField.TYPE: str.strip,
    SearchField.SUBTYPE: str.strip,
    SearchField.LANGUAGE: _language_value,
    SearchField.EXPANSION: str.strip,
}


class _CriterionAction(argparse.Action):
    """Appends a SearchCriterion to args.criteria, keeping command-line order."""

    def __call__(self, parser, namespace, values, option_string=None):
        field: SearchField = self.const
        items = list(getattr(namespace, "criteria", None) or [])
        is_and = not getattr(namespace, "join_or", False)
        if field is SearchField.OWNED:
            value = ""
        else:
            value = _VALUE_OF[field](values)
        items.append(SearchCriterion.of(field, value, is_and))
        setattr(namespace, "criteria", items)


class _JoinAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, "join_or", self.const)


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

def _print_rows(cards, renderer) -> None:
    if not cards:
        print("No results.")
        return
    for c in cards:
        print(renderer.render_line(c))


# ------------------------------------------------------------------------------
# Command implementations
# ------------------------------------------------------------------------------

def cmd_init_db(_args) -> int:
    db.init_db()
    print(f"Database ready at {db.DATABASE_URL}")
    return 0


def cmd_import(args) -> int:
    """Import cards from a file."""
    db.init_db()
    try:
        imported, skipped = import_file(args.path)
    except ParserError as e:
        print(f"Import failed: {e}", file=sys.stderr)
        return 1
    print(f"Imported {imported} card{'' if imported == 1 else 's'}; skipped {skipped}.")
    return 0


def cmd_show(args) -> int:
    repo = CardRepository()
    card = repo.get_card(int(args.id))
    if not card:
        print(f"Card {args.id} not found.", file=sys.stderr)
        return 1
    renderer = get_renderer(args.format)
    print(renderer.render_card(card, owned=repo.number_owned(card.multiverse_id)))
    return 0


def cmd_search(args) -> int:
    criteria = list(args.criteria or [])
    svc = SearchService(page_size=args.size)
    renderer = get_renderer(args.format)

    if args.count:
        print(f"Results: {svc.number_of_results(criteria)}")
        print(f"Unique names: {svc.number_of_unique_names(criteria)}")
        return 0

    try:
        if args.group_by_name:
            cards = svc.all_by_name(criteria) if args.all else svc.page_by_name(args.page, criteria)
        else:
            cards = svc.all(criteria) if args.all else svc.page(args.page, criteria)
    except InvalidPage as e:
        print(str(e), file=sys.stderr)
        return 2

    _print_rows(cards, renderer)
    return 0


def cmd_own(args) -> int:
    repo = CardRepository()
    mid = int(args.id)
    if not repo.is_card_in_database(mid):
        print(f"Card {mid} not found.", file=sys.stderr)
        return 1
    if args.count is None:
        count = repo.increment_owned(mid)
    else:
        count = repo.update_owned_count(mid, args.count)
    print(f"Card {mid}: {count} owned.")
    return 0


def cmd_unown(args) -> int:
    repo = CardRepository()
    mid = int(args.id)
    if not repo.remove_owned_card(mid):
        print(f"Card {mid} is not in the collection.", file=sys.stderr)
        return 1
    print(f"Removed card {mid} from the collection.")
    return 0


def cmd_expansions(_args) -> int:
    names = ExpansionRepository().all_expansions()
    for n in names:
        print(n)
    if not names:
        print("No expansions.")
    return 0


def cmd_subtypes(args) -> int:
    repo = SubTypeRepository()
    if args.frequency:
        rows = repo.subtypes_with_frequency()
        for st, n in rows:
            print(f"{n:>6}  {st}")
    else:
        rows = repo.all_subtypes()
        for st in rows:
            print(st)
    if not rows:
        print("No subtypes.")
    return 0


# ------------------------------------------------------------------------------
# argparse wiring
# ------------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="magicdb",
        description="MagicDB CLI: import, search and track Magic: The Gathering cards."
    )
    sub = p.add_subparsers(dest="command", required=True)

    # init-db
    sp = sub.add_parser("init-db", help="Create the database tables.")
    sp.set_defaults(func=cmd_init_db)

    # import-file
    sp = sub.add_parser("import-file", help="Import cards from a CSV export.")
    sp.add_argument("path", help="Path to CSV file.")
    sp.set_defaults(func=cmd_import)

    # show
    sp = sub.add_parser("show", help="Show a single card.")
    sp.add_argument("id", help="Multiverse id.")
    sp.add_argument("--format", default="text", help="Renderer name.")
    sp.set_defaults(func=cmd_show)

    # search
    sp = sub.add_parser("search", help="Search cards.")
    for flag, field, help_text in (
        ("--name", SearchField.NAME, "Name contains (or a LIKE pattern with %% / _)."),
        ("--color", SearchField.COLOR, 'Color name or code, e.g. "red" or "R".'),
        ("--type", SearchField.TYPE, 'Supertype or type, e.g. "Legendary", "Creature".'),
        ("--subtype", SearchField.SUBTYPE, 'Subtype, e.g. "Elf".'),
        ("--language", SearchField.LANGUAGE, 'Language, e.g. "German".'),
        ("--expansion", SearchField.EXPANSION, "Expansion name (LIKE pattern)."),
    ):
        sp.add_argument(flag, action=_CriterionAction, const=field, dest="criteria",
                        metavar="TEXT", help=help_text + " Repeatable.")
    sp.add_argument("--owned", action=_CriterionAction, const=SearchField.OWNED, nargs=0,
                    dest="criteria", help="Only cards in the collection.")
    sp.add_argument("--or", action=_JoinAction, const=True, nargs=0, dest="join_or",
                    help="Join the following criteria with OR.")
    sp.add_argument("--and", action=_JoinAction, const=False, nargs=0, dest="join_or",
                    help="Join the following criteria with AND (default).")
    sp.add_argument("--page", type=int, default=1)
    sp.add_argument("--size", type=int, default=DEFAULT_PAGE_SIZE)
    sp.add_argument("--group-by-name", action="store_true",
                    help="Page over distinct names; show every printing of each.")
    sp.add_argument("--all", action="store_true", help="Every result, no paging.")
    sp.add_argument("--count", action="store_true", help="Only print result counts.")
    sp.add_argument("--format", default="text", help="Renderer name.")
    sp.set_defaults(func=cmd_search, criteria=None, join_or=False)

    # own
    sp = sub.add_parser("own", help="Add a copy of a card to the collection.")
    sp.add_argument("id", help="Multiverse id.")
    sp.add_argument("--count", type=int, default=None,
                    help="Set the owned count instead (0 removes the card).")
    sp.set_defaults(func=cmd_own)

    # unown
    sp = sub.add_parser("unown", help="Remove a card from the collection.")
    sp.add_argument("id", help="Multiverse id.")
    sp.set_defaults(func=cmd_unown)

    # expansions
    sp = sub.add_parser("expansions", help="List expansion names.")
    sp.set_defaults(func=cmd_expansions)

    # subtypes
    sp = sub.add_parser("subtypes", help="List subtypes.")
    sp.add_argument("--frequency", action="store_true", help="Include card counts, most common first.")
    sp.set_defaults(func=cmd_subtypes)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup(os.getenv("MAGICDB_LOG_LEVEL", "INFO"))
    parser = _build_parser()
    args = parser.parse_args(argv)
    logger.debug("Running command %s", args.command)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
