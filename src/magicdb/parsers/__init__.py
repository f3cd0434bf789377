from .base import ParserError, ParserStrategy, RawRow, choose_parser

__all__ = ["ParserError", "ParserStrategy", "RawRow", "choose_parser"]
