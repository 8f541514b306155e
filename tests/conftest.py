"""Shared pytest fixtures for clausekit unit and integration tests."""
from __future__ import annotations

import pytest

from clausekit.build.mariadb import MariaDBDMLQueryBuilder
from clausekit.build.mysql import MySQLDMLQueryBuilder
from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.build.sqlite import SQLiteDMLQueryBuilder
from clausekit.escape.mysql import MySQLQueryEscaper, PyMySQLStringEscaper
from clausekit.escape.sqlite import QuoteDoublingStringEscaper, SQLiteQueryEscaper


@pytest.fixture()
def sql() -> SQLDMLQueryBuilder:
    """Fresh dialect-neutral builder."""
    return SQLDMLQueryBuilder()


@pytest.fixture()
def mysql() -> MySQLDMLQueryBuilder:
    return MySQLDMLQueryBuilder()


@pytest.fixture()
def mariadb() -> MariaDBDMLQueryBuilder:
    return MariaDBDMLQueryBuilder()


@pytest.fixture()
def sqlite() -> SQLiteDMLQueryBuilder:
    return SQLiteDMLQueryBuilder()


@pytest.fixture(scope="session")
def mysql_escaper() -> MySQLQueryEscaper:
    return MySQLQueryEscaper(PyMySQLStringEscaper())


@pytest.fixture(scope="session")
def sqlite_escaper() -> SQLiteQueryEscaper:
    return SQLiteQueryEscaper(QuoteDoublingStringEscaper())
