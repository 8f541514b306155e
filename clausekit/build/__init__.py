"""clausekit builders: clause accumulation, fluent facades, assembly."""
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

__all__ = [
    "DMLQueryBuilder",
    "SQLDMLQueryBuilder",
    "MySQLDMLQueryBuilder",
    "MariaDBDMLQueryBuilder",
    "SQLiteDMLQueryBuilder",
    "SimpleDMLQueryBuilder",
    "MySQLSimpleDMLQueryBuilder",
    "MariaDBSimpleDMLQueryBuilder",
    "BuilderFactory",
]
