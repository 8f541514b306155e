"""Unit tests for the query escapers."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from clausekit.escape.base import StringEscaper, nullable
from clausekit.escape.mysql import MySQLQueryEscaper, PyMySQLStringEscaper
from clausekit.escape.sqlite import QuoteDoublingStringEscaper, SQLiteQueryEscaper

# ---------------------------------------------------------------------------
# Identifiers (MySQL)
# ---------------------------------------------------------------------------


def test_quote_identifier_doubles_delimiter(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.quote_identifier("a`b") == "`a``b`"


def test_quote_qualified_keeps_star(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.quote_qualified("db.t.*") == "`db`.`t`.*"
    assert mysql_escaper.quote_qualified(" t . col ") == "`t`.`col`"


def test_column_with_collation(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.column("t.a") == "`t`.`a`"
    assert mysql_escaper.column("a", "utf8mb4_bin") == "`a` COLLATE utf8mb4_bin"


def test_result_column_alias(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.result_column("t.a", "x") == "`t`.`a` AS `x`"
    assert mysql_escaper.result_column("*", "x") == "*"
    assert mysql_escaper.result_column("a") == "`a`"


def test_hex_result_column(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.hex_result_column("id") == "HEX(`id`) AS `id`"
    assert mysql_escaper.hex_result_column("t.id", "hid") == "HEX(`t`.`id`) AS `hid`"


def test_table_alias(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.table("db.t") == "`db`.`t`"
    assert mysql_escaper.table("t", "x") == "`t` AS `x`"


# ---------------------------------------------------------------------------
# Values (MySQL)
# ---------------------------------------------------------------------------


def test_escape_value_escapes_quotes(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.escape_value("O'Brien") == "'O\\'Brien'"
    assert mysql_escaper.escape_value(42) == "'42'"


def test_escape_value_charset_and_collation(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.escape_value("a", charset="_utf8mb4") == "_utf8mb4 'a'"
    assert (
        mysql_escaper.escape_value("a", "utf8mb4_bin", "_utf8mb4")
        == "_utf8mb4 'a' COLLATE utf8mb4_bin"
    )


@pytest.mark.parametrize(
    "match, expected",
    [
        ("forward", "'abc%'"),
        ("backward", "'%abc'"),
        ("both", "'%abc%'"),
        ("anything", "'%abc%'"),
    ],
)
def test_like_value(mysql_escaper: MySQLQueryEscaper, match, expected):
    assert mysql_escaper.like_value("abc", match) == expected


def test_hex_and_uuid_values(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.hex_value("ab01") == "UNHEX('ab01')"
    assert (
        mysql_escaper.uuid_value("7f1c-22")
        == "UNHEX(REPLACE('7f1c-22', '-', ''))"
    )


def test_geo_value(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.geo_value("POINT(1 1)") == "ST_GeomFromText('POINT(1 1)')"
    assert mysql_escaper.geo_value("POINT(1 1)", 4326) == "ST_GeomFromText('POINT(1 1)', 4326)"


def test_mysql_index_hints(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.index_hint("force", ["idx"], "JOIN") == "FORCE INDEX FOR JOIN (`idx`)"
    assert mysql_escaper.index_hint("bogus", ["a", "b"]) == "USE INDEX (`a`, `b`)"
    assert mysql_escaper.index_hint("ignore", ["a"], "nowhere") == "IGNORE INDEX (`a`)"
    assert mysql_escaper.index_hint("use", []) is None


def test_numbers_lists_and_subqueries(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.int_value("5") == 5
    assert mysql_escaper.float_value("1.5") == 1.5
    assert mysql_escaper.escape_list(["'a'", "'b'"]) == "('a', 'b')"
    assert mysql_escaper.escape_subquery("SELECT 1") == "(SELECT 1)"
    assert mysql_escaper.escape_subquery("SELECT 1", "x") == "(SELECT 1) AS `x`"
    assert mysql_escaper.escape_subquery("") == ""


# ---------------------------------------------------------------------------
# NULL-safe variants
# ---------------------------------------------------------------------------


def test_null_or_variants_short_circuit(mysql_escaper: MySQLQueryEscaper):
    assert mysql_escaper.null_or_value(None) is None
    assert mysql_escaper.null_or_value("a") == "'a'"
    assert mysql_escaper.null_or_like_value(None) is None
    assert mysql_escaper.null_or_hex_value(None) is None
    assert mysql_escaper.null_or_int_value(None) is None
    assert mysql_escaper.null_or_int_value("3") == 3
    assert mysql_escaper.null_or_float_value(None) is None
    assert mysql_escaper.null_or_list(None) is None
    assert mysql_escaper.null_or_subquery(None) is None
    assert mysql_escaper.null_or_uuid_value(None) is None
    assert mysql_escaper.null_or_geo_value(None) is None


def test_nullable_never_calls_wrapped_function():
    fn = Mock(return_value="x")
    wrapped = nullable(fn)
    assert wrapped(None) is None
    fn.assert_not_called()
    assert wrapped("v", 1) == "x"
    fn.assert_called_once_with("v", 1)


def test_null_input_never_reaches_string_escaper():
    string_escaper = Mock()
    escaper = MySQLQueryEscaper(string_escaper)
    assert escaper.null_or_value(None) is None
    string_escaper.escape_string.assert_not_called()


def test_string_escapers_satisfy_protocol():
    assert isinstance(PyMySQLStringEscaper(), StringEscaper)
    assert isinstance(QuoteDoublingStringEscaper(), StringEscaper)


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------


def test_sqlite_identifiers(sqlite_escaper: SQLiteQueryEscaper):
    assert sqlite_escaper.quote_identifier('a"b') == '"a""b"'
    assert sqlite_escaper.table("main.t", "x") == '"main"."t" AS "x"'


def test_sqlite_values(sqlite_escaper: SQLiteQueryEscaper):
    assert sqlite_escaper.escape_value("it's") == "'it''s'"
    assert sqlite_escaper.escape_value("a", charset="_utf8") == "'a'"
    assert sqlite_escaper.escape_value("a", "NOCASE") == "'a' COLLATE NOCASE"
    assert sqlite_escaper.hex_value("ab") == "'ab'"
    assert sqlite_escaper.like_value("a'b", "forward") == "'a''b%'"


def test_sqlite_index_hints(sqlite_escaper: SQLiteQueryEscaper):
    assert sqlite_escaper.index_hint("indexed by", ["i"]) == 'INDEXED BY "i"'
    assert sqlite_escaper.index_hint("not indexed", ["i"]) == "NOT INDEXED"
    assert sqlite_escaper.index_hint("use", ["i"]) == 'INDEXED BY "i"'
    assert sqlite_escaper.index_hint("indexed by", []) is None
