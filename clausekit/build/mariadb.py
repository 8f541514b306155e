"""MariaDB flavour of the fluent builder."""

from __future__ import annotations

from typing import ClassVar

from clausekit.build.mysql import MySQLDMLQueryBuilder
from clausekit.schema.dialect import MARIADB_PROFILE, DialectProfile


class MariaDBDMLQueryBuilder(MySQLDMLQueryBuilder):
    """MySQL builder plus ``RETURNING``, ``EXCEPT`` and ``INTERSECT``."""

    default_profile: ClassVar[DialectProfile] = MARIADB_PROFILE

    def returning(self, fields: str) -> MariaDBDMLQueryBuilder:
        """Add fields to the ``RETURNING`` clause of INSERT/REPLACE/DELETE."""
        self.sql_select(fields, "RETURNING")
        return self

    def except_(self, sql_query: str, operator: str = "") -> MariaDBDMLQueryBuilder:
        self.sql_compound(sql_query, "EXCEPT", operator.upper())
        return self

    def intersect(self, sql_query: str, operator: str = "") -> MariaDBDMLQueryBuilder:
        self.sql_compound(sql_query, "INTERSECT", operator.upper())
        return self
