import pytest
from magicdb.errors import MagicDBError
from magicdb.parsers import base
from magicdb.parsers.csv_parser import CSVParser


def test_parsererror_is_exception():
    with pytest.raises(base.ParserError):
        raise base.ParserError("oops")
    assert issubclass(base.ParserError, MagicDBError)


def test_choose_parser_csv():
    parser = base.choose_parser("cards.csv")
    assert isinstance(parser, CSVParser)
    assert isinstance(parser, base.ParserStrategy)


def test_choose_parser_unsupported():
    with pytest.raises(base.ParserError):
        base.choose_parser("cards.xlsx")
