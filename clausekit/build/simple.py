"""Escaping facade over a fluent builder.

``SimpleDMLQueryBuilder`` accepts raw identifiers and values, runs them
through a :class:`~clausekit.escape.base.QueryEscaper` and forwards the
escaped fragments to the wrapped builder::

    builder = SimpleDMLQueryBuilder(
        MySQLDMLQueryBuilder(), MySQLQueryEscaper(PyMySQLStringEscaper())
    )
    builder.select("id, name AS n").from_("users").where("name", "O'Brien")
    builder.get_select_query()
    # SELECT `id`, `name` AS `n` FROM `users` WHERE `name` = 'O\\'Brien'

What gets escaped
-----------------
- table and column references are quoted; ``x AS y`` aliases are split,
  comma lists are quoted element by element;
- right-hand sides of plain comparisons and BETWEEN bounds are escaped as
  string literals;
- IN and UNION operands are treated as sub-selects and parenthesised;
- LIKE and REGEXP patterns, SET assignments, VALUES rows and CTE bodies are
  forwarded verbatim (build them with the escaper's ``like_value`` /
  ``escape_value``).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from clausekit.build.mariadb import MariaDBDMLQueryBuilder
from clausekit.build.mysql import MySQLDMLQueryBuilder
from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.escape.base import QueryEscaper


class SimpleDMLQueryBuilder:
    """Escapes raw input, then delegates to ``builder``.

    Args:
        builder: Fluent builder receiving the escaped fragments.
        escaper: Escaper matching the builder's dialect.
    """

    def __init__(self, builder: SQLDMLQueryBuilder, escaper: QueryEscaper) -> None:
        self._builder = builder
        self._escaper = escaper

    @property
    def builder(self) -> SQLDMLQueryBuilder:
        return self._builder

    # ------------------------------------------------------------------
    # Statement assembly
    # ------------------------------------------------------------------

    def get_select_query(self) -> str:
        return self._builder.get_select_query()

    def get_insert_query(self) -> str:
        return self._builder.get_insert_query()

    def get_replace_query(self) -> str:
        return self._builder.get_replace_query()

    def get_update_query(self) -> str:
        return self._builder.get_update_query()

    def get_delete_query(self) -> str:
        return self._builder.get_delete_query()

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def select_mode(self, mode: str) -> SimpleDMLQueryBuilder:
        self._builder.select_mode(mode)
        return self

    def insert_mode(self, mode: str) -> SimpleDMLQueryBuilder:
        self._builder.insert_mode(mode)
        return self

    def replace_mode(self, mode: str) -> SimpleDMLQueryBuilder:
        self._builder.replace_mode(mode)
        return self

    def update_mode(self, mode: str) -> SimpleDMLQueryBuilder:
        self._builder.update_mode(mode)
        return self

    def delete_mode(self, mode: str) -> SimpleDMLQueryBuilder:
        self._builder.delete_mode(mode)
        return self

    def lock_mode(self, mode: str) -> SimpleDMLQueryBuilder:
        self._builder.lock_mode(mode)
        return self

    # ------------------------------------------------------------------
    # Statement targets
    # ------------------------------------------------------------------

    def select(self, select: str) -> SimpleDMLQueryBuilder:
        """Project a comma-separated column list, ``col AS alias`` allowed."""
        self._builder.select(self._escape_list(select, table=False))
        return self

    def select_statement(self, select: str) -> SimpleDMLQueryBuilder:
        self._builder.select_statement(select)
        return self

    def update(self, table_references: str) -> SimpleDMLQueryBuilder:
        self._builder.update(self._escape_list(table_references, table=True))
        return self

    def delete(self, table_references: str = "") -> SimpleDMLQueryBuilder:
        if table_references:
            table_references = self._escape_list(table_references, table=True)
        self._builder.delete(table_references)
        return self

    def into(self, table: str) -> SimpleDMLQueryBuilder:
        self._builder.into(self._escaper.table(table))
        return self

    def set(self, set_: Mapping[str, Any]) -> SimpleDMLQueryBuilder:
        self._builder.set(set_)
        return self

    def column_names(self, keys: Iterable[str]) -> SimpleDMLQueryBuilder:
        self._builder.column_names([self._escaper.column(key) for key in keys])
        return self

    def values(self, values: Sequence[Any] | Mapping[str, Any]) -> SimpleDMLQueryBuilder:
        self._builder.values(values)
        return self

    def from_(
        self, table_reference: str, index_hints: Sequence[str | None] | None = None
    ) -> SimpleDMLQueryBuilder:
        self._builder.from_(self.escape_alias(table_reference), index_hints)
        return self

    def join(
        self,
        table_reference: str,
        type: str = "INNER",
        index_hints: Sequence[str | None] | None = None,
    ) -> SimpleDMLQueryBuilder:
        self._builder.join(self.escape_alias(table_reference), type, index_hints)
        return self

    def using(self, column_list: str) -> SimpleDMLQueryBuilder:
        columns = ", ".join(
            self._escaper.column(column.strip()) for column in column_list.split(",")
        )
        self._builder.using(columns)
        return self

    # ------------------------------------------------------------------
    # ON (both sides are columns)
    # ------------------------------------------------------------------

    def on(self, left: str, right: str, operator: str = "=") -> SimpleDMLQueryBuilder:
        self._builder.on(self._escaper.column(left), self._escaper.column(right), operator)
        return self

    def on_like(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.on_like(self._escaper.column(left), right, negate)
        return self

    def on_in(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.on_in(
            self._escaper.column(left), self._escaper.escape_subquery(right), negate
        )
        return self

    def on_in_list(
        self, left: str, right: Iterable[Any], negate: bool = False
    ) -> SimpleDMLQueryBuilder:
        self._builder.on_in(self._escaper.column(left), self._value_list(right), negate)
        return self

    def on_between(
        self, left: str, lower: Any, upper: Any, negate: bool = False
    ) -> SimpleDMLQueryBuilder:
        self._builder.on_between(
            self._escaper.column(left),
            self._escaper.escape_value(lower),
            self._escaper.escape_value(upper),
            negate,
        )
        return self

    def on_null(self, left: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.on_null(self._escaper.column(left), negate)
        return self

    def on_regexp(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.on_regexp(self._escaper.column(left), right, negate)
        return self

    def start_on_group(self) -> SimpleDMLQueryBuilder:
        self._builder.start_on_group()
        return self

    def end_on_group(self) -> SimpleDMLQueryBuilder:
        self._builder.end_on_group()
        return self

    # ------------------------------------------------------------------
    # WHERE (left is a column, right a value)
    # ------------------------------------------------------------------

    def where(self, left: str, right: Any, operator: str = "=") -> SimpleDMLQueryBuilder:
        self._builder.where(
            self._escaper.column(left), self._escaper.escape_value(right), operator
        )
        return self

    def where_like(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.where_like(self._escaper.column(left), right, negate)
        return self

    def where_in(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.where_in(
            self._escaper.column(left), self._escaper.escape_subquery(right), negate
        )
        return self

    def where_in_list(
        self, left: str, right: Iterable[Any], negate: bool = False
    ) -> SimpleDMLQueryBuilder:
        self._builder.where_in(self._escaper.column(left), self._value_list(right), negate)
        return self

    def where_between(
        self, left: str, lower: Any, upper: Any, negate: bool = False
    ) -> SimpleDMLQueryBuilder:
        self._builder.where_between(
            self._escaper.column(left),
            self._escaper.escape_value(lower),
            self._escaper.escape_value(upper),
            negate,
        )
        return self

    def where_null(self, left: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.where_null(self._escaper.column(left), negate)
        return self

    def where_regexp(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.where_regexp(self._escaper.column(left), right, negate)
        return self

    def start_where_group(self) -> SimpleDMLQueryBuilder:
        self._builder.start_where_group()
        return self

    def end_where_group(self) -> SimpleDMLQueryBuilder:
        self._builder.end_where_group()
        return self

    # ------------------------------------------------------------------
    # HAVING (left is a column, right a value)
    # ------------------------------------------------------------------

    def having(self, left: str, right: Any, operator: str = "=") -> SimpleDMLQueryBuilder:
        self._builder.having(
            self._escaper.column(left), self._escaper.escape_value(right), operator
        )
        return self

    def having_like(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.having_like(self._escaper.column(left), right, negate)
        return self

    def having_in(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.having_in(
            self._escaper.column(left), self._escaper.escape_subquery(right), negate
        )
        return self

    def having_in_list(
        self, left: str, right: Iterable[Any], negate: bool = False
    ) -> SimpleDMLQueryBuilder:
        self._builder.having_in(self._escaper.column(left), self._value_list(right), negate)
        return self

    def having_between(
        self, left: str, lower: Any, upper: Any, negate: bool = False
    ) -> SimpleDMLQueryBuilder:
        self._builder.having_between(
            self._escaper.column(left),
            self._escaper.escape_value(lower),
            self._escaper.escape_value(upper),
            negate,
        )
        return self

    def having_null(self, left: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.having_null(self._escaper.column(left), negate)
        return self

    def having_regexp(self, left: str, right: str, negate: bool = False) -> SimpleDMLQueryBuilder:
        self._builder.having_regexp(self._escaper.column(left), right, negate)
        return self

    def start_having_group(self) -> SimpleDMLQueryBuilder:
        self._builder.start_having_group()
        return self

    def end_having_group(self) -> SimpleDMLQueryBuilder:
        self._builder.end_having_group()
        return self

    # ------------------------------------------------------------------
    # Grouping, ordering, compounds, connectors
    # ------------------------------------------------------------------

    def group_by(self, expr: str, order: bool | None = None) -> SimpleDMLQueryBuilder:
        """Group by a column; ``order`` needs a builder that supports it."""
        if order is None:
            self._builder.group_by(self._escaper.column(expr))
        else:
            self._builder.group_by(self._escaper.column(expr), order)  # type: ignore[call-arg]
        return self

    def order_by(self, expr: str, asc: bool = True) -> SimpleDMLQueryBuilder:
        self._builder.order_by(self._escaper.column(expr), asc)
        return self

    def limit(self, amount: Any, offset: Any = -1) -> SimpleDMLQueryBuilder:
        self._builder.limit(self._escaper.int_value(amount), self._escaper.int_value(offset))
        return self

    def union(self, sql_query: str, operator: str = "") -> SimpleDMLQueryBuilder:
        self._builder.union(self._escaper.escape_subquery(sql_query), operator)
        return self

    def and_(self) -> SimpleDMLQueryBuilder:
        self._builder.and_()
        return self

    def or_(self) -> SimpleDMLQueryBuilder:
        self._builder.or_()
        return self

    def with_(
        self, alias: str, sql_query: str, column_names: Sequence[str] | None = None
    ) -> SimpleDMLQueryBuilder:
        self._builder.with_(alias, sql_query, column_names)
        return self

    def with_recursive(
        self,
        alias: str,
        anchor_query: str,
        recursive_query: str,
        union_all: bool = False,
        column_names: Sequence[str] | None = None,
    ) -> SimpleDMLQueryBuilder:
        self._builder.with_recursive(
            alias, anchor_query, recursive_query, union_all, column_names
        )
        return self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def escape_alias(self, location_reference: str, table: bool = True) -> str:
        """Quote ``name`` or ``name AS alias`` as a table or result column."""
        method = self._escaper.table if table else self._escaper.result_column
        for separator in (" AS ", " as "):
            if separator in location_reference:
                name, alias = location_reference.split(separator, 1)
                return method(name.strip(), alias.strip())
        return method(location_reference.strip())

    def _escape_list(self, references: str, table: bool) -> str:
        return ", ".join(
            self.escape_alias(reference, table=table) for reference in references.split(",")
        )

    def _value_list(self, values: Iterable[Any]) -> str:
        return self._escaper.escape_list(self._escaper.escape_value(value) for value in values)


class MySQLSimpleDMLQueryBuilder(SimpleDMLQueryBuilder):
    """Escaping facade for :class:`MySQLDMLQueryBuilder`."""

    _builder: MySQLDMLQueryBuilder

    def __init__(self, builder: MySQLDMLQueryBuilder, escaper: QueryEscaper) -> None:
        super().__init__(builder, escaper)

    def xor(self) -> MySQLSimpleDMLQueryBuilder:
        self._builder.xor()
        return self

    def on_duplicate_key_update(self, set_: str | Mapping[str, Any]) -> MySQLSimpleDMLQueryBuilder:
        self._builder.on_duplicate_key_update(set_)
        return self


class MariaDBSimpleDMLQueryBuilder(MySQLSimpleDMLQueryBuilder):
    """Escaping facade for :class:`MariaDBDMLQueryBuilder`."""

    _builder: MariaDBDMLQueryBuilder

    def __init__(self, builder: MariaDBDMLQueryBuilder, escaper: QueryEscaper) -> None:
        super().__init__(builder, escaper)

    def returning(self, fields: str) -> MariaDBSimpleDMLQueryBuilder:
        """Return a comma-separated column list, ``col AS alias`` allowed."""
        self._builder.returning(self._escape_list(fields, table=False))
        return self

    def intersect(self, sql_query: str, operator: str = "") -> MariaDBSimpleDMLQueryBuilder:
        self._builder.intersect(self._escaper.escape_subquery(sql_query), operator)
        return self

    def except_(self, sql_query: str, operator: str = "") -> MariaDBSimpleDMLQueryBuilder:
        self._builder.except_(self._escaper.escape_subquery(sql_query), operator)
        return self
