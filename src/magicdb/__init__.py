"""
MagicDB package initializer.

This sets up environment loading and exposes key classes/functions
for convenience imports.

author: Cole McGregor
date: 2025-11-13
version: 0.2.0
"""

from dotenv import load_dotenv

# Load .env file if present (DATABASE_URL, MAGICDB_LOG_LEVEL)
load_dotenv()

# Re-export commonly used components
from .db import SessionLocal, engine, init_db
from .models import Card, CardTypeRow, OwnedCard
from .enums import Color, Language, SuperType, Type
from .errors import (
    MagicDBError,
    InvalidManaSymbol,
    BlankTypeLine,
    UnknownSearchField,
    DuplicateCriterionName,
    DuplicateRowError,
    InvalidPage,
)
from .mana import ManaCost, ManaSymbol, parse_mana_cost, format_mana_cost, derive_colors
from .type_line import CardType, TypeLine, parse_type_line, format_type_line
from .criteria import NameSequence, SearchCriterion, SearchField
from .compiler import SearchPlan, SearchPredicateCompiler
from .planner import DEFAULT_PAGE_SIZE, FetchMode, FetchPlan, NameGroup, QueryPlanner
from .dto import MagicCard
from .repos import CardRepository, ExpansionRepository, SubTypeRepository
from .query import SearchService
from . import importer

__all__ = [
    # DB
    "SessionLocal",
    "engine",
    "init_db",
    # Models
    "Card",
    "CardTypeRow",
    "OwnedCard",
    # Values
    "Color",
    "Language",
    "SuperType",
    "Type",
    "ManaCost",
    "ManaSymbol",
    "CardType",
    "TypeLine",
    "MagicCard",
    # Codecs
    "parse_mana_cost",
    "format_mana_cost",
    "derive_colors",
    "parse_type_line",
    "format_type_line",
    # Search
    "NameSequence",
    "SearchCriterion",
    "SearchField",
    "SearchPlan",
    "SearchPredicateCompiler",
    "DEFAULT_PAGE_SIZE",
    "FetchMode",
    "FetchPlan",
    "NameGroup",
    "QueryPlanner",
    "SearchService",
    # Repos
    "CardRepository",
    "ExpansionRepository",
    "SubTypeRepository",
    "importer",
    # Errors
    "MagicDBError",
    "InvalidManaSymbol",
    "BlankTypeLine",
    "UnknownSearchField",
    "DuplicateCriterionName",
    "DuplicateRowError",
    "InvalidPage",
]
