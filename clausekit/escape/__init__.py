"""clausekit escaping layer: raw identifiers and values → SQL fragments."""
from clausekit.escape.base import QueryEscaper, StringEscaper, nullable
from clausekit.escape.mysql import MySQLQueryEscaper, PyMySQLStringEscaper
from clausekit.escape.sqlite import QuoteDoublingStringEscaper, SQLiteQueryEscaper

__all__ = [
    "QueryEscaper",
    "StringEscaper",
    "nullable",
    "MySQLQueryEscaper",
    "PyMySQLStringEscaper",
    "SQLiteQueryEscaper",
    "QuoteDoublingStringEscaper",
]
