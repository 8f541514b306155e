"""clausekit – Dialect-aware SQL DML statement builders.

Build statements clause by clause, render them once.

Public API
----------
``SQLDMLQueryBuilder``
    Fluent builder for portable SQL; ``MySQLDMLQueryBuilder``,
    ``MariaDBDMLQueryBuilder`` and ``SQLiteDMLQueryBuilder`` add dialect
    modifiers and clauses.

``SimpleDMLQueryBuilder``
    Escaping facade: quotes identifiers and escapes values before handing
    them to a builder.

``MySQLQueryEscaper`` / ``SQLiteQueryEscaper``
    Identifier and literal escaping per dialect.

Re-exported types
-----------------
``Clause``, ``Condition``, ``JoinState``, ``ModeList``, ``DialectProfile``
and all error classes.

Extensibility
-------------
New dialect builders can be registered via::

    from clausekit.build.registry import BuilderFactory

    @BuilderFactory.register("postgres")
    class PostgresDMLQueryBuilder(SQLDMLQueryBuilder):
        ...

After registration, ``BuilderFactory.create("postgres")`` returns a fresh
instance.
"""

from __future__ import annotations

from clausekit.build.base import DMLQueryBuilder
from clausekit.build.mariadb import MariaDBDMLQueryBuilder
from clausekit.build.mysql import MySQLDMLQueryBuilder
from clausekit.build.registry import BuilderFactory
from clausekit.build.simple import (
    MariaDBSimpleDMLQueryBuilder,
    MySQLSimpleDMLQueryBuilder,
    SimpleDMLQueryBuilder,
)
from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.build.sqlite import SQLiteDMLQueryBuilder
from clausekit.errors import (
    ClauseKitError,
    MissingTableReferenceError,
    ProfileConfigError,
    UnknownDialectError,
)
from clausekit.escape.base import QueryEscaper, StringEscaper, nullable
from clausekit.escape.mysql import MySQLQueryEscaper, PyMySQLStringEscaper
from clausekit.escape.sqlite import QuoteDoublingStringEscaper, SQLiteQueryEscaper
from clausekit.schema.clauses import Clause, Condition, JoinState, ModeList
from clausekit.schema.dialect import (
    MARIADB_PROFILE,
    MYSQL_PROFILE,
    SQL_PROFILE,
    SQLITE_PROFILE,
    DialectProfile,
    DialectProfileBuilder,
)

# ---------------------------------------------------------------------------
# Register built-in builders with BuilderFactory
# ---------------------------------------------------------------------------

BuilderFactory.register_class("sql", SQLDMLQueryBuilder)
BuilderFactory.register_class("mysql", MySQLDMLQueryBuilder)
BuilderFactory.register_class("mariadb", MariaDBDMLQueryBuilder)
BuilderFactory.register_class("sqlite", SQLiteDMLQueryBuilder)

__all__ = [
    # Builders
    "DMLQueryBuilder",
    "SQLDMLQueryBuilder",
    "MySQLDMLQueryBuilder",
    "MariaDBDMLQueryBuilder",
    "SQLiteDMLQueryBuilder",
    "BuilderFactory",
    # Escaping
    "SimpleDMLQueryBuilder",
    "MySQLSimpleDMLQueryBuilder",
    "MariaDBSimpleDMLQueryBuilder",
    "QueryEscaper",
    "StringEscaper",
    "nullable",
    "MySQLQueryEscaper",
    "PyMySQLStringEscaper",
    "SQLiteQueryEscaper",
    "QuoteDoublingStringEscaper",
    # Schema types
    "Clause",
    "Condition",
    "JoinState",
    "ModeList",
    "DialectProfile",
    "DialectProfileBuilder",
    "SQL_PROFILE",
    "MYSQL_PROFILE",
    "MARIADB_PROFILE",
    "SQLITE_PROFILE",
    # Errors
    "ClauseKitError",
    "MissingTableReferenceError",
    "ProfileConfigError",
    "UnknownDialectError",
]
