"""Escaper abstractions: the StringEscaper protocol and the QueryEscaper ABC.

The Template Method pattern is used:
- ``QueryEscaper`` implements identifier quoting, aliasing, lists and
  subqueries once, parameterised by the dialect's delimiter constants.
- ``MySQLQueryEscaper`` and ``SQLiteQueryEscaper`` implement literal
  escaping (charset introducers, collation, index hints).

Escapers never touch builder state.  Callers escape raw input first and hand
the resulting fragments to a builder.
"""
from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class StringEscaper(Protocol):
    """Escapes the body of a string literal (without surrounding quotes).

    Database drivers usually provide this; a ``pymysql.Connection`` satisfies
    the protocol as-is.
    """

    def escape_string(self, value: str) -> str: ...


def nullable(fn: Callable[..., T]) -> Callable[..., T | None]:
    """Wrap an escaping function so ``None`` input short-circuits to ``None``.

    The wrapped function is never called with ``None``, so callers can pass
    optional values without emitting a spurious ``'None'`` literal.
    """

    @functools.wraps(fn)
    def wrapper(value: Any, *args: Any, **kwargs: Any) -> T | None:
        if value is None:
            return None
        return fn(value, *args, **kwargs)

    return wrapper


class QueryEscaper(ABC):
    """Abstract base for dialect-specific query escapers.

    Args:
        escaper: String escaper used for literal bodies.
    """

    IDENTIFIER_DELIMITER_L: str = "`"
    IDENTIFIER_DELIMITER_R: str = "`"

    def __init__(self, escaper: StringEscaper) -> None:
        self._escaper = escaper

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        """Return a single delimited identifier.

        Closing delimiters inside ``name`` are doubled.
        """
        right = self.IDENTIFIER_DELIMITER_R
        escaped = name.replace(right, right * 2)
        return f"{self.IDENTIFIER_DELIMITER_L}{escaped}{right}"

    def quote_qualified(self, name: str) -> str:
        """Quote every dot-separated part of ``name``; ``*`` stays bare.

        ``db.table.*`` becomes ```db`.`table`.*`` for MySQL.
        """
        parts = []
        for part in name.split("."):
            part = part.strip()
            parts.append(part if part == "*" else self.quote_identifier(part))
        return ".".join(parts)

    def column(self, name: str, collation: str = "") -> str:
        return self._collate(self.quote_qualified(name), collation).strip()

    def result_column(self, column: str, alias: str = "") -> str:
        """Quote a projected column, adding ``AS alias`` when given."""
        column = self.quote_qualified(column)
        if alias == "" or column == "*":
            return column
        return f"{column} AS {self.quote_identifier(alias)}"

    def hex_result_column(self, column: str, alias: str = "") -> str:
        """Project ``HEX(column)``, aliased to the column name by default."""
        alias = column if alias == "" else alias
        return f"HEX({self.quote_qualified(column)}) AS {self.quote_identifier(alias)}"

    def table(self, table: str, alias: str = "") -> str:
        table = self.quote_qualified(table)
        if alias == "":
            return table
        return f"{table} AS {self.quote_identifier(alias)}"

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @abstractmethod
    def escape_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        """Return ``value`` as a quoted, escaped string literal.

        Args:
            value: Raw value; converted with ``str()`` before escaping.
            collation: Optional ``COLLATE`` clause target.
            charset: Optional charset introducer (ignored where unsupported).
        """

    @abstractmethod
    def like_value(
        self,
        value: Any,
        match: str = "both",
        collation: str = "",
        charset: str = "",
    ) -> str:
        """Return ``value`` as a LIKE pattern literal.

        Args:
            match: ``'forward'`` (``value%``), ``'backward'`` (``%value``) or
                ``'both'`` (``%value%``, the default for anything else).
        """

    @abstractmethod
    def hex_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        """Return ``value`` as a literal holding hex-encoded binary data."""

    @abstractmethod
    def index_hint(self, keyword: str, indices: list[str], for_: str = "") -> str | None:
        """Return an index hint for ``from_()`` / ``join()``, or ``None``
        when ``indices`` is empty."""

    def int_value(self, value: Any) -> int:
        return int(value)

    def float_value(self, value: Any) -> float:
        return float(value)

    def escape_list(self, values: Iterable[str]) -> str:
        """Parenthesise pre-escaped values: ``('a', 'b')``."""
        return f"({', '.join(values)})"

    def escape_subquery(self, sql: str, alias: str | None = None) -> str:
        """Parenthesise a sub-select, optionally aliased."""
        value = f"({sql})" if sql else ""
        if alias is None:
            return value
        return f"{value} AS {self.quote_identifier(alias)}"

    # ------------------------------------------------------------------
    # NULL-safe variants
    # ------------------------------------------------------------------

    def null_or_value(self, value: Any, collation: str = "", charset: str = "") -> str | None:
        return nullable(self.escape_value)(value, collation, charset)

    def null_or_like_value(
        self,
        value: Any,
        match: str = "both",
        collation: str = "",
        charset: str = "",
    ) -> str | None:
        return nullable(self.like_value)(value, match, collation, charset)

    def null_or_hex_value(self, value: Any, collation: str = "", charset: str = "") -> str | None:
        return nullable(self.hex_value)(value, collation, charset)

    def null_or_int_value(self, value: Any) -> int | None:
        return nullable(self.int_value)(value)

    def null_or_float_value(self, value: Any) -> float | None:
        return nullable(self.float_value)(value)

    def null_or_list(self, values: Iterable[str] | None) -> str | None:
        return nullable(self.escape_list)(values)

    def null_or_subquery(self, sql: str | None, alias: str | None = None) -> str | None:
        return nullable(self.escape_subquery)(sql, alias)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _escape_string(self, value: Any) -> str:
        return self._escaper.escape_string(str(value))

    @staticmethod
    def _collate(value: str, collation: str) -> str:
        if collation == "":
            return value
        return f"{value} COLLATE {collation}"

    @staticmethod
    def _like_pattern(body: str, match: str) -> str:
        if match == "forward":
            return f"'{body}%'"
        if match == "backward":
            return f"'%{body}'"
        return f"'%{body}%'"
