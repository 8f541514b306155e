"""MySQL flavour of the fluent builder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.schema.clauses import Clause
from clausekit.schema.dialect import MYSQL_PROFILE, DialectProfile


class MySQLDMLQueryBuilder(SQLDMLQueryBuilder):
    """Adds MySQL modifiers, ``XOR``, ordered ``GROUP BY`` and
    ``ON DUPLICATE KEY UPDATE``.

    Example::

        sql = (
            MySQLDMLQueryBuilder()
            .insert_mode("IGNORE")
            .into("`counters`")
            .column_names(["`id`", "`hits`"])
            .values(["1", "1"])
            .on_duplicate_key_update("`hits` = `hits` + 1")
            .get_insert_query()
        )
    """

    default_profile: ClassVar[DialectProfile] = MYSQL_PROFILE

    def group_by(self, expr: str, order: bool | None = None) -> MySQLDMLQueryBuilder:
        """Add a GROUP BY expression; ``order`` appends ``ASC``/``DESC``."""
        self.sql_group_by(expr)
        if order is not None:
            direction = " ASC" if order else " DESC"
            self._parts[Clause.GROUP_BY] = self.clause(Clause.GROUP_BY) + direction
        return self

    def xor(self) -> MySQLDMLQueryBuilder:
        self.sql_connector("XOR")
        return self

    def sql_xor(self) -> MySQLDMLQueryBuilder:
        return self.xor()

    def on_duplicate_key_update(self, set_: str | Mapping[str, Any]) -> MySQLDMLQueryBuilder:
        """Set the upsert action of an INSERT.

        ``set_`` is either a ready assignment list or a mapping of escaped
        columns to escaped values.
        """
        if isinstance(set_, Mapping):
            set_ = ", ".join(
                f"{key} = {'NULL' if value is None else value}" for key, value in set_.items()
            )
        self.sql_upsert("ON DUPLICATE KEY UPDATE", set_)
        return self
