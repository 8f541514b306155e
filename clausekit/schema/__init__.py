"""clausekit schema: clause identifiers, modifier lists, DialectProfile."""
from clausekit.schema.clauses import Clause, Condition, JoinState, ModeList
from clausekit.schema.dialect import (
    MARIADB_PROFILE,
    MYSQL_PROFILE,
    SQL_PROFILE,
    SQLITE_PROFILE,
    DialectProfile,
    DialectProfileBuilder,
)

__all__ = [
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
]
