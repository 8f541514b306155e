"""Dialect-neutral fluent facade over :class:`DMLQueryBuilder`.

Every method forwards to one ``sql_*`` mutator and returns ``self`` so calls
can be chained::

    sql = (
        SQLDMLQueryBuilder()
        .select("id")
        .from_("users")
        .where("age", "18", ">")
        .get_select_query()
    )

Arguments are inserted verbatim.  Escape user input first, or use
:class:`~clausekit.build.simple.SimpleDMLQueryBuilder`.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from clausekit.build.base import DMLQueryBuilder
from clausekit.schema.clauses import Clause, Condition

logger = logging.getLogger(__name__)


class SQLDMLQueryBuilder(DMLQueryBuilder):
    """Fluent builder for portable SQL.

    Modifier methods consult the builder's
    :class:`~clausekit.schema.dialect.DialectProfile`; keywords it does not
    list are dropped silently.
    """

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def select_mode(self, mode: str) -> SQLDMLQueryBuilder:
        self._add_mode(Clause.SELECT_MODE, self.profile.select_modes, mode)
        return self

    def insert_mode(self, mode: str) -> SQLDMLQueryBuilder:
        self._add_mode(Clause.INSERT_MODE, self.profile.insert_modes, mode)
        return self

    def replace_mode(self, mode: str) -> SQLDMLQueryBuilder:
        """REPLACE shares the INSERT modifier buffer."""
        self._add_mode(Clause.INSERT_MODE, self.profile.replace_modes, mode)
        return self

    def update_mode(self, mode: str) -> SQLDMLQueryBuilder:
        self._add_mode(Clause.UPDATE_MODE, self.profile.update_modes, mode)
        return self

    def delete_mode(self, mode: str) -> SQLDMLQueryBuilder:
        self._add_mode(Clause.DELETE_MODE, self.profile.delete_modes, mode)
        return self

    def lock_mode(self, mode: str) -> SQLDMLQueryBuilder:
        """Set ``FOR UPDATE`` / ``LOCK IN SHARE MODE``; replaces any previous
        lock mode."""
        mode = mode.upper()
        if mode not in self.profile.lock_modes:
            logger.debug("Dropping lock mode %r unsupported by %s", mode, self.profile.name)
            return self
        self._parts[Clause.LOCK_MODE] = mode
        return self

    # ------------------------------------------------------------------
    # Statement targets
    # ------------------------------------------------------------------

    def select(self, select: str | None) -> SQLDMLQueryBuilder:
        self.sql_select(select)
        return self

    def select_statement(self, select: str) -> SQLDMLQueryBuilder:
        self.sql_select_statement(select)
        return self

    def update(self, table_references: str) -> SQLDMLQueryBuilder:
        self.sql_update(table_references)
        return self

    def delete(self, table_references: str = "") -> SQLDMLQueryBuilder:
        """Name the tables to delete from in a multi-table DELETE.

        Single-table deletes only need :meth:`from_`.
        """
        if table_references:
            self.sql_delete(table_references)
        return self

    def into(self, table: str) -> SQLDMLQueryBuilder:
        self.sql_into(table)
        return self

    def set(self, set_: Mapping[str, Any]) -> SQLDMLQueryBuilder:
        self.sql_set(set_)
        return self

    def column_names(self, keys: Iterable[str]) -> SQLDMLQueryBuilder:
        self.sql_column_names(keys)
        return self

    def values(self, values: Sequence[Any] | Mapping[str, Any]) -> SQLDMLQueryBuilder:
        self.sql_values(values)
        return self

    def from_(
        self, table_reference: str, index_hints: Sequence[str | None] | None = None
    ) -> SQLDMLQueryBuilder:
        self.sql_from(table_reference, index_hints)
        return self

    def join(
        self,
        table_reference: str,
        type: str = "INNER",
        index_hints: Sequence[str | None] | None = None,
    ) -> SQLDMLQueryBuilder:
        self.sql_join(table_reference, type, index_hints)
        return self

    def using(self, column_list: str) -> SQLDMLQueryBuilder:
        self.sql_using(column_list)
        return self

    # ------------------------------------------------------------------
    # ON
    # ------------------------------------------------------------------

    def on(self, left: str, right: str, operator: str = "=") -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, operator, Condition.ON)
        return self

    def on_like(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _like(negate), Condition.ON)
        return self

    def on_in(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _in(negate), Condition.ON)
        return self

    def on_between(
        self, left: str, lower: str, upper: str, negate: bool = False
    ) -> SQLDMLQueryBuilder:
        self.sql_condition(left, f"{lower} AND {upper}", _between(negate), Condition.ON)
        return self

    def on_null(self, left: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, "NULL", _is(negate), Condition.ON)
        return self

    def on_regexp(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _regexp(negate), Condition.ON)
        return self

    def start_on_group(self) -> SQLDMLQueryBuilder:
        self.sql_group_start(Condition.ON)
        return self

    def end_on_group(self) -> SQLDMLQueryBuilder:
        self.sql_group_end(Condition.ON)
        return self

    # ------------------------------------------------------------------
    # WHERE
    # ------------------------------------------------------------------

    def where(self, left: str, right: str, operator: str = "=") -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, operator, Condition.WHERE)
        return self

    def where_like(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _like(negate), Condition.WHERE)
        return self

    def where_in(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _in(negate), Condition.WHERE)
        return self

    def where_between(
        self, left: str, lower: str, upper: str, negate: bool = False
    ) -> SQLDMLQueryBuilder:
        self.sql_condition(left, f"{lower} AND {upper}", _between(negate), Condition.WHERE)
        return self

    def where_null(self, left: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, "NULL", _is(negate), Condition.WHERE)
        return self

    def where_regexp(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _regexp(negate), Condition.WHERE)
        return self

    def start_where_group(self) -> SQLDMLQueryBuilder:
        self.sql_group_start(Condition.WHERE)
        return self

    def end_where_group(self) -> SQLDMLQueryBuilder:
        self.sql_group_end(Condition.WHERE)
        return self

    # ------------------------------------------------------------------
    # HAVING
    # ------------------------------------------------------------------

    def having(self, left: str, right: str, operator: str = "=") -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, operator, Condition.HAVING)
        return self

    def having_like(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _like(negate), Condition.HAVING)
        return self

    def having_in(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _in(negate), Condition.HAVING)
        return self

    def having_between(
        self, left: str, lower: str, upper: str, negate: bool = False
    ) -> SQLDMLQueryBuilder:
        self.sql_condition(left, f"{lower} AND {upper}", _between(negate), Condition.HAVING)
        return self

    def having_null(self, left: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, "NULL", _is(negate), Condition.HAVING)
        return self

    def having_regexp(self, left: str, right: str, negate: bool = False) -> SQLDMLQueryBuilder:
        self.sql_condition(left, right, _regexp(negate), Condition.HAVING)
        return self

    def start_having_group(self) -> SQLDMLQueryBuilder:
        self.sql_group_start(Condition.HAVING)
        return self

    def end_having_group(self) -> SQLDMLQueryBuilder:
        self.sql_group_end(Condition.HAVING)
        return self

    # ------------------------------------------------------------------
    # Grouping, ordering, compounds
    # ------------------------------------------------------------------

    def group_by(self, expr: str) -> SQLDMLQueryBuilder:
        self.sql_group_by(expr)
        return self

    def order_by(self, expr: str, asc: bool = True) -> SQLDMLQueryBuilder:
        self.sql_order_by(expr, asc)
        return self

    def limit(self, amount: int, offset: int = -1) -> SQLDMLQueryBuilder:
        self.sql_limit(amount, offset)
        return self

    def union(self, sql_query: str, operator: str = "") -> SQLDMLQueryBuilder:
        """Chain ``UNION [ALL|DISTINCT] sql_query``."""
        self.sql_compound(sql_query, "UNION", operator.upper())
        return self

    # ------------------------------------------------------------------
    # Connectors
    # ------------------------------------------------------------------

    def and_(self) -> SQLDMLQueryBuilder:
        self.sql_connector("AND")
        return self

    def or_(self) -> SQLDMLQueryBuilder:
        self.sql_connector("OR")
        return self

    def sql_and(self) -> SQLDMLQueryBuilder:
        """Deprecated alias of :meth:`and_`."""
        warnings.warn(
            "sql_and() is deprecated, use and_() instead", DeprecationWarning, stacklevel=2
        )
        return self.and_()

    def sql_or(self) -> SQLDMLQueryBuilder:
        """Deprecated alias of :meth:`or_`."""
        warnings.warn(
            "sql_or() is deprecated, use or_() instead", DeprecationWarning, stacklevel=2
        )
        return self.or_()

    # ------------------------------------------------------------------
    # Common table expressions
    # ------------------------------------------------------------------

    def with_(
        self, alias: str, sql_query: str, column_names: Sequence[str] | None = None
    ) -> SQLDMLQueryBuilder:
        self.sql_with(alias, sql_query, "", "", column_names)
        return self

    def with_recursive(
        self,
        alias: str,
        anchor_query: str,
        recursive_query: str,
        union_all: bool = False,
        column_names: Sequence[str] | None = None,
    ) -> SQLDMLQueryBuilder:
        """Add a recursive CTE: ``alias AS ( anchor UNION [ALL] recursive )``."""
        union = "UNION ALL" if union_all else "UNION"
        self.sql_with(alias, anchor_query, recursive_query, union, column_names)
        return self


def _like(negate: bool) -> str:
    return "NOT LIKE" if negate else "LIKE"


def _in(negate: bool) -> str:
    return "NOT IN" if negate else "IN"


def _between(negate: bool) -> str:
    return "NOT BETWEEN" if negate else "BETWEEN"


def _is(negate: bool) -> str:
    return "IS NOT" if negate else "IS"


def _regexp(negate: bool) -> str:
    return "NOT REGEXP" if negate else "REGEXP"
