"""SQLite flavour of the fluent builder.

SQLite differs from the portable assembly in two places:

- INSERT and REPLACE have no ``SET`` form; rows come from ``VALUES`` or a
  sub-select.
- REPLACE takes no modifiers (``INSERT OR REPLACE`` is the modifier form).

Upserts use ``ON CONFLICT [target] DO UPDATE SET ...`` / ``DO NOTHING``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.errors import MissingTableReferenceError
from clausekit.schema.clauses import Clause
from clausekit.schema.dialect import SQLITE_PROFILE, DialectProfile

logger = logging.getLogger(__name__)


class SQLiteDMLQueryBuilder(SQLDMLQueryBuilder):
    """Fluent builder for SQLite 3.35+ (``RETURNING`` support)."""

    default_profile: ClassVar[DialectProfile] = SQLITE_PROFILE

    def get_insert_query(self) -> str:
        if self.clause(Clause.INTO) == "":
            raise MissingTableReferenceError("into", "INSERT")

        components = [
            Clause.INSERT_MODE,
            Clause.INTO,
            Clause.COLUMN_NAMES,
            self._rows(),
            Clause.UPSERT,
            Clause.RETURNING,
        ]
        return self._assembled("INSERT", f"INSERT {self.implode_query(components)}")

    def get_replace_query(self) -> str:
        if self.clause(Clause.INTO) == "":
            raise MissingTableReferenceError("into", "REPLACE")

        components = [Clause.INTO, Clause.COLUMN_NAMES, self._rows(), Clause.RETURNING]
        return self._assembled("REPLACE", f"REPLACE {self.implode_query(components)}")

    def group_by(self, expr: str, order: bool | None = None) -> SQLiteDMLQueryBuilder:
        """Add a GROUP BY expression.  SQLite does not order groups, so
        ``order`` is ignored."""
        if order is not None:
            logger.debug("Ignoring GROUP BY direction for %s", expr)
        self.sql_group_by(expr)
        return self

    def returning(self, fields: str) -> SQLiteDMLQueryBuilder:
        self.sql_select(fields, "RETURNING")
        return self

    def except_(self, sql_query: str, operator: str = "") -> SQLiteDMLQueryBuilder:
        """Chain ``EXCEPT``; only the ``DISTINCT`` operator is kept."""
        self.sql_compound(sql_query, "EXCEPT", _distinct_only(operator))
        return self

    def intersect(self, sql_query: str, operator: str = "") -> SQLiteDMLQueryBuilder:
        """Chain ``INTERSECT``; only the ``DISTINCT`` operator is kept."""
        self.sql_compound(sql_query, "INTERSECT", _distinct_only(operator))
        return self

    def on_conflict_do_update(
        self, target: str, set_: str | Mapping[str, Any]
    ) -> SQLiteDMLQueryBuilder:
        """Upsert: ``ON CONFLICT target DO UPDATE SET ...``.

        Args:
            target: Conflict target, e.g. ``("id")``.
            set_: Assignment list, or a mapping of escaped columns to
                escaped values (``excluded."col"`` refers to the new row).
        """
        if isinstance(set_, Mapping):
            set_ = ", ".join(
                f"{key} = {'NULL' if value is None else value}" for key, value in set_.items()
            )
        self.sql_upsert("ON CONFLICT", f"DO UPDATE SET {set_}", target)
        return self

    def on_conflict_do_nothing(self, target: str | None = None) -> SQLiteDMLQueryBuilder:
        self.sql_upsert("ON CONFLICT", "DO NOTHING", target)
        return self

    def _rows(self) -> Clause:
        if self.clause(Clause.SELECT_STATEMENT) != "":
            return Clause.SELECT_STATEMENT
        return Clause.VALUES


def _distinct_only(operator: str) -> str | None:
    return "DISTINCT" if operator.upper() == "DISTINCT" else None
