"""Clause accumulator and statement assembler.

``DMLQueryBuilder`` owns every per-statement buffer and the low-level
``sql_*`` mutators that merge repeated contributions into one clause.  The
``get_*_query`` family reads the buffers, in a fixed order per statement
kind, into the final query string.

Buffers
-------
All buffers live in one ``dict[Clause, str | ModeList]``.  An empty string
means "clause not present yet": the first contribution to a clause carries
its keyword (``FROM``, ``WHERE``, ...), later ones carry a separator.

Join state
----------
Each JOIN is qualified by ON or USING, never both.  ``join_state`` tracks the
most recent join (see :class:`~clausekit.schema.clauses.JoinState`):
``sql_join`` opens it, the first ON predicate/group or USING list binds it,
and calls of the other kind are ignored until the next join.

Values are never escaped here: callers pass ready-made SQL fragments,
usually produced by a :class:`~clausekit.escape.base.QueryEscaper`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, ClassVar

from clausekit.errors import MissingTableReferenceError
from clausekit.schema.clauses import Clause, Condition, JoinState, ModeList
from clausekit.schema.dialect import SQL_PROFILE, DialectProfile

logger = logging.getLogger(__name__)

_SELECT_COMPONENTS = (
    Clause.SELECT_MODE,
    Clause.SELECT,
    Clause.FROM,
    Clause.JOIN,
    Clause.WHERE,
    Clause.GROUP_BY,
    Clause.HAVING,
    Clause.ORDER_BY,
    Clause.LIMIT,
    Clause.LOCK_MODE,
)


def _as_condition(base: Condition | str) -> Condition:
    if isinstance(base, Condition):
        return base
    return Condition(base.upper())


class DMLQueryBuilder(ABC):
    """Stateful accumulator for one SELECT/INSERT/REPLACE/UPDATE/DELETE.

    One instance per statement; instances are mutated in place and must not
    be shared between threads.

    Args:
        profile: Modifier allow-lists; defaults to the class's
            ``default_profile``.
    """

    default_profile: ClassVar[DialectProfile] = SQL_PROFILE

    def __init__(self, profile: DialectProfile | None = None) -> None:
        self.profile = profile if profile is not None else self.default_profile
        self._parts: dict[Clause, str | ModeList] = {
            clause: ModeList() if clause.is_mode else "" for clause in Clause
        }
        self._with = ""
        self._is_recursive = False
        self._connector = ""
        self._join_state = JoinState.FRESH

    # ------------------------------------------------------------------
    # State inspection
    # ------------------------------------------------------------------

    def clause(self, clause: Clause) -> str:
        """Return the current text of ``clause`` (modifiers de-duplicated)."""
        part = self._parts[clause]
        if isinstance(part, ModeList):
            return part.render()
        return part

    @property
    def ctes(self) -> str:
        """The comma-separated CTE list, without the ``WITH`` keyword."""
        return self._with

    @property
    def is_recursive(self) -> bool:
        return self._is_recursive

    @property
    def connector(self) -> str:
        """Pending logical operator for the next predicate, or ``''``."""
        return self._connector

    @property
    def join_state(self) -> JoinState:
        return self._join_state

    # ------------------------------------------------------------------
    # Modifiers (dialect specific)
    # ------------------------------------------------------------------

    @abstractmethod
    def select_mode(self, mode: str) -> DMLQueryBuilder:
        """Add a SELECT modifier (``DISTINCT``, ``SQL_CACHE``, ...)."""

    @abstractmethod
    def insert_mode(self, mode: str) -> DMLQueryBuilder:
        """Add an INSERT modifier (``IGNORE``, ``OR REPLACE``, ...)."""

    @abstractmethod
    def replace_mode(self, mode: str) -> DMLQueryBuilder:
        """Add a REPLACE modifier."""

    @abstractmethod
    def update_mode(self, mode: str) -> DMLQueryBuilder:
        """Add an UPDATE modifier."""

    @abstractmethod
    def delete_mode(self, mode: str) -> DMLQueryBuilder:
        """Add a DELETE modifier."""

    @abstractmethod
    def lock_mode(self, mode: str) -> DMLQueryBuilder:
        """Set the locking read mode of a SELECT."""

    # ------------------------------------------------------------------
    # Statement assembly
    # ------------------------------------------------------------------

    def get_select_query(self) -> str:
        """Render the SELECT statement.

        With a compound chain (UNION, ...) the base SELECT is parenthesised
        and the chain appended.
        """
        with_query = ""
        if self._with:
            keyword = "WITH RECURSIVE" if self._is_recursive else "WITH"
            with_query = f"{keyword} {self._with} "

        standard = f"{with_query}SELECT {self.implode_query(_SELECT_COMPONENTS)}"
        if self._text(Clause.COMPOUND) == "":
            return self._assembled("SELECT", standard)

        compound = self.implode_query([Clause.COMPOUND])
        return self._assembled("SELECT", f"({standard}) {compound}")

    def get_delete_query(self) -> str:
        """Render the DELETE statement.

        ORDER BY, LIMIT and RETURNING only apply to single-table deletes
        (no explicit table list, no join).

        Raises:
            MissingTableReferenceError: If ``from_()`` was never called.
        """
        if self._text(Clause.FROM) == "":
            raise MissingTableReferenceError("from", "DELETE")

        components = [
            Clause.DELETE_MODE,
            Clause.DELETE,
            Clause.FROM,
            Clause.JOIN,
            Clause.WHERE,
        ]
        if self._text(Clause.DELETE) == "" and self._text(Clause.JOIN) == "":
            components += [Clause.ORDER_BY, Clause.LIMIT, Clause.RETURNING]

        return self._assembled("DELETE", f"DELETE {self.implode_query(components)}")

    def get_insert_query(self) -> str:
        """Render the INSERT statement.

        The row source is the sub-select if one was given, else the SET
        list, else column names plus VALUES.

        Raises:
            MissingTableReferenceError: If ``into()`` was never called.
        """
        if self._text(Clause.INTO) == "":
            raise MissingTableReferenceError("into", "INSERT")

        components = [Clause.INSERT_MODE, Clause.INTO]
        overrides: dict[Clause, ModeList] = {}

        if self._text(Clause.SELECT_STATEMENT) != "":
            components += [Clause.COLUMN_NAMES, Clause.SELECT_STATEMENT]
            overrides[Clause.INSERT_MODE] = self._modes(Clause.INSERT_MODE).keep(
                self.profile.insert_select_modes
            )
        elif self._text(Clause.SET) != "":
            components.append(Clause.SET)
        else:
            components += [Clause.COLUMN_NAMES, Clause.VALUES]

        components += [Clause.UPSERT, Clause.RETURNING]

        return self._assembled("INSERT", f"INSERT {self.implode_query(components, overrides)}")

    def get_replace_query(self) -> str:
        """Render the REPLACE statement.

        Raises:
            MissingTableReferenceError: If ``into()`` was never called.
        """
        if self._text(Clause.INTO) == "":
            raise MissingTableReferenceError("into", "REPLACE")

        overrides = {
            Clause.INSERT_MODE: self._modes(Clause.INSERT_MODE).keep(
                self.profile.replace_query_modes
            )
        }
        components = [Clause.INSERT_MODE, Clause.INTO, *self._row_source(), Clause.RETURNING]

        return self._assembled("REPLACE", f"REPLACE {self.implode_query(components, overrides)}")

    def get_update_query(self) -> str:
        """Render the UPDATE statement.

        ORDER BY and LIMIT only apply to single-table updates without joins.

        Raises:
            MissingTableReferenceError: If ``update()`` was never called.
        """
        update = self._text(Clause.UPDATE)
        if update == "":
            raise MissingTableReferenceError("update", "UPDATE")

        overrides = {
            Clause.UPDATE_MODE: self._modes(Clause.UPDATE_MODE).keep(
                self.profile.update_query_modes
            )
        }
        components = [
            Clause.UPDATE_MODE,
            Clause.UPDATE,
            Clause.JOIN,
            Clause.SET,
            Clause.WHERE,
        ]
        if "," not in update and self._text(Clause.JOIN) == "":
            components += [Clause.ORDER_BY, Clause.LIMIT]

        return self._assembled("UPDATE", f"UPDATE {self.implode_query(components, overrides)}")

    def implode_query(
        self,
        components: Iterable[Clause],
        overrides: Mapping[Clause, str | ModeList] | None = None,
    ) -> str:
        """Join the non-empty ``components`` with single spaces.

        An empty ``SELECT`` component renders as ``*``; a result that is only
        ``*`` collapses to ``''``.

        Args:
            components: Buffers to concatenate, in order.
            overrides: Replacement buffers used for this rendering only.
        """
        overrides = overrides or {}
        pieces: list[str] = []
        for component in components:
            part = overrides.get(component, self._parts[component])
            text = part.render() if isinstance(part, ModeList) else part
            if text:
                pieces.append(text)
            elif component is Clause.SELECT:
                pieces.append("*")

        sql = " ".join(pieces).strip()
        return "" if sql == "*" else sql

    # ------------------------------------------------------------------
    # Clause mutators
    # ------------------------------------------------------------------

    def sql_select(self, select: str | None, base: str = "SELECT") -> None:
        """Add a projection; ``base='RETURNING'`` targets RETURNING instead."""
        target = Clause.RETURNING if base.upper() == "RETURNING" else Clause.SELECT
        current = self._text(target)

        if current == "" and target is Clause.RETURNING:
            current = "RETURNING "
        elif current != "":
            current += ", "

        self._parts[target] = current + ("NULL" if select is None else select)

    def sql_with(
        self,
        alias: str,
        query: str,
        recursive_query: str = "",
        union: str = "",
        column_names: Sequence[str] | None = None,
    ) -> None:
        """Add a common table expression.

        A recursive CTE switches the whole clause to ``WITH RECURSIVE`` and is
        placed before the CTEs already present; plain CTEs are appended.
        """
        columns = f" ({', '.join(column_names)})" if column_names is not None else ""

        recursive_part = ""
        if recursive_query:
            self._is_recursive = True
            recursive_part = f" {union} {recursive_query}" if union else f" {recursive_query}"

        cte = f"{alias}{columns} AS ( {query}{recursive_part} )"

        if self._with == "":
            self._with = cte
        elif recursive_query:
            self._with = f"{cte}, {self._with}"
        else:
            self._with = f"{self._with}, {cte}"

    def sql_update(self, table_references: str) -> None:
        self._append_list(Clause.UPDATE, table_references)

    def sql_delete(self, table_references: str) -> None:
        self._append_list(Clause.DELETE, table_references)

    def sql_from(self, table: str, index_hints: Sequence[str | None] | None = None) -> None:
        current = self._text(Clause.FROM)
        current = "FROM " if current == "" else current + ", "
        self._parts[Clause.FROM] = current + table + self.prepare_index_hints(index_hints)

    def sql_join(
        self,
        table_reference: str,
        type: str,
        index_hints: Sequence[str | None] | None = None,
    ) -> None:
        """Open a join.

        ``STRAIGHT`` renders ``STRAIGHT_JOIN``; an empty type renders a bare
        ``JOIN``.  NATURAL joins need no qualifier and leave the join state
        fresh.
        """
        type = type.upper()
        join = "STRAIGHT_JOIN " if type == "STRAIGHT" else f"{type} JOIN ".lstrip()

        current = self._text(Clause.JOIN)
        if current != "":
            current += " "
        self._parts[Clause.JOIN] = (
            current + join + table_reference + self.prepare_index_hints(index_hints)
        )

        if type.startswith("NATURAL"):
            self._join_state = JoinState.FRESH
        else:
            self._join_state = JoinState.AWAITING_CONDITION

    def sql_using(self, column_list: str) -> None:
        """Qualify the current join with ``USING (columns)``.

        Repeated calls extend the column list.  Ignored on a join already
        qualified with ON.
        """
        if self._join_state is JoinState.BOUND_ON:
            logger.debug("Ignoring USING (%s) on a join qualified with ON", column_list)
            return

        current = self._text(Clause.JOIN)
        if self._join_state is JoinState.AWAITING_CONDITION:
            current += " USING ("
        elif not current.endswith("("):
            current = current.rstrip(")") + ", "

        self._parts[Clause.JOIN] = current + column_list + ")"
        self._join_state = JoinState.BOUND_USING

    def sql_into(self, table: str) -> None:
        self._parts[Clause.INTO] = f"INTO {table}"

    def sql_set(self, set_: Mapping[str, Any]) -> None:
        """Add ``column = value`` assignments; ``None`` renders ``NULL``."""
        assignments = [
            f"{key} = {'NULL' if value is None else value}" for key, value in set_.items()
        ]
        if not assignments:
            return

        current = self._text(Clause.SET)
        current = "SET " if current == "" else current + ", "
        self._parts[Clause.SET] = current + ", ".join(assignments)

    def sql_column_names(self, keys: Iterable[str]) -> None:
        self._parts[Clause.COLUMN_NAMES] = f"({', '.join(keys)})"

    def sql_values(self, values: Sequence[Any] | Mapping[str, Any]) -> None:
        """Add one row or a list of rows to ``VALUES``.

        A flat sequence (or a mapping) is a single row; a sequence of
        sequences (or mappings) is several rows.  ``None`` renders ``NULL``.
        """
        if not values:
            return

        if isinstance(values, Mapping):
            rows: Sequence[Any] = [values]
        elif isinstance(values[0], (Mapping, list, tuple)):
            rows = values
        else:
            rows = [values]

        rendered = []
        for row in rows:
            items = row.values() if isinstance(row, Mapping) else row
            rendered.append(
                "(" + ", ".join("NULL" if item is None else str(item) for item in items) + ")"
            )

        current = self._text(Clause.VALUES)
        current = "VALUES " if current == "" else current + ", "
        self._parts[Clause.VALUES] = current + ", ".join(rendered)

    def sql_upsert(self, key: str, action: str, target: str | None = None) -> None:
        """Set the conflict clause, e.g. ``ON DUPLICATE KEY UPDATE a = 1``."""
        upsert = f"{key} "
        if target is not None:
            upsert += f"{target} "
        self._parts[Clause.UPSERT] = upsert + action

    def sql_select_statement(self, select: str) -> None:
        """Use a SELECT as the row source of an INSERT/REPLACE.

        Anything not starting with ``SELECT`` is ignored.
        """
        if select.startswith("SELECT"):
            self._parts[Clause.SELECT_STATEMENT] = select

    def sql_condition(
        self,
        left: str,
        right: str,
        operator: str = "=",
        base: Condition | str = Condition.WHERE,
    ) -> None:
        """Append ``left operator right`` to WHERE, HAVING or the join's ON.

        The first predicate of a clause gets the clause keyword; later ones
        are joined by the pending connector, or ``AND`` unless they open a
        group.  ON predicates are ignored on a join qualified with USING.
        """
        target = self._continue_condition(_as_condition(base))
        if target is None:
            return
        self._parts[target] = f"{self._text(target)}{left} {operator} {right}"

    def sql_group_start(self, base: Condition | str = Condition.WHERE) -> None:
        """Open a parenthesised group of predicates."""
        target = self._continue_condition(_as_condition(base))
        if target is None:
            return
        self._parts[target] = self._text(target) + "("

    def sql_group_end(self, base: Condition | str = Condition.WHERE) -> None:
        """Close the innermost group of predicates."""
        base = _as_condition(base)
        if base is Condition.ON and self._join_state is JoinState.BOUND_USING:
            return
        self._parts[base.target] = self._text(base.target) + ")"

    def sql_compound(self, query: str, type: str, operator: str | None = None) -> None:
        """Chain ``UNION|INTERSECT|EXCEPT [ALL|DISTINCT] query``.

        Other operators are dropped.
        """
        base = f"{type} {operator}" if operator in ("ALL", "DISTINCT") else type

        current = self._text(Clause.COMPOUND)
        if current != "":
            current += " "
        self._parts[Clause.COMPOUND] = f"{current}{base} {query}"

    def sql_order_by(self, expr: str, asc: bool = True) -> None:
        direction = "ASC" if asc else "DESC"
        current = self._text(Clause.ORDER_BY)
        current = "ORDER BY " if current == "" else current + ", "
        self._parts[Clause.ORDER_BY] = f"{current}{expr} {direction}"

    def sql_limit(self, amount: int, offset: int = -1) -> None:
        limit = f"LIMIT {amount}"
        if offset > -1:
            limit += f" OFFSET {offset}"
        self._parts[Clause.LIMIT] = limit

    def sql_connector(self, connector: str) -> None:
        self._connector = connector

    def sql_group_by(self, expr: str) -> None:
        current = self._text(Clause.GROUP_BY)
        current = "GROUP BY " if current == "" else current + ", "
        self._parts[Clause.GROUP_BY] = current + expr

    @staticmethod
    def prepare_index_hints(index_hints: Sequence[str | None] | None) -> str:
        """Render index hints as a space-prefixed suffix; ``None`` entries
        are dropped."""
        if not index_hints:
            return ""
        hints = [hint for hint in index_hints if hint is not None]
        if not hints:
            return ""
        return " " + ", ".join(hints)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _continue_condition(self, base: Condition) -> Clause | None:
        """Write what precedes the next predicate or group of ``base``.

        Returns the target buffer, or ``None`` when the call must be
        ignored (ON against a USING join).
        """
        target = base.target

        if base is Condition.ON:
            if self._join_state is JoinState.BOUND_USING:
                logger.debug("Ignoring ON condition on a join qualified with USING")
                return None
            if self._join_state is JoinState.AWAITING_CONDITION:
                self._parts[target] = self._text(target) + " ON "
                self._join_state = JoinState.BOUND_ON
                self._connector = ""
                return target

        current = self._text(target)
        if current.rstrip("(") == "":
            current = f"{base.value} {current}"
            self._connector = ""
        elif current.endswith("("):
            # First predicate of a group: nothing to connect to.
            self._connector = ""
        elif self._connector != "":
            current += f" {self._connector} "
            self._connector = ""
        else:
            current += " AND "

        self._parts[target] = current
        return target

    def _add_mode(self, clause: Clause, allowed: Mapping[str, str | None], mode: str) -> None:
        mode = mode.upper()
        if mode not in allowed:
            logger.debug(
                "Dropping %s modifier %r unsupported by %s", clause.value, mode, self.profile.name
            )
            return
        self._modes(clause).add(mode, slot=allowed[mode])

    def _append_list(self, clause: Clause, item: str) -> None:
        current = self._text(clause)
        if current != "":
            current += ", "
        self._parts[clause] = current + item

    def _row_source(self) -> list[Clause]:
        if self._text(Clause.SELECT_STATEMENT) != "":
            return [Clause.COLUMN_NAMES, Clause.SELECT_STATEMENT]
        if self._text(Clause.SET) != "":
            return [Clause.SET]
        return [Clause.COLUMN_NAMES, Clause.VALUES]

    def _text(self, clause: Clause) -> str:
        part = self._parts[clause]
        return part.render() if isinstance(part, ModeList) else part

    def _modes(self, clause: Clause) -> ModeList:
        part = self._parts[clause]
        if not isinstance(part, ModeList):
            raise TypeError(f"{clause.value} does not hold modifiers")
        return part

    @staticmethod
    def _assembled(statement: str, sql: str) -> str:
        logger.debug("Assembled %s query: %s", statement, sql)
        return sql
