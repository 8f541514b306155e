"""Unit tests for predicates, connectors, groups and ON/USING exclusivity."""

from __future__ import annotations

import pytest

from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.schema.clauses import Clause, Condition, JoinState

# ---------------------------------------------------------------------------
# WHERE / HAVING
# ---------------------------------------------------------------------------


def test_first_where_gets_keyword(sql: SQLDMLQueryBuilder):
    sql.where("a", "1")
    assert sql.clause(Clause.WHERE) == "WHERE a = 1"


def test_where_defaults_to_and(sql: SQLDMLQueryBuilder):
    sql.where("a", "1").where("b", "2", "<>")
    assert sql.clause(Clause.WHERE) == "WHERE a = 1 AND b <> 2"


def test_connector_applies_to_next_predicate_only(sql: SQLDMLQueryBuilder):
    sql.where("a", "1").or_().where("b", "2").where("c", "3")
    assert sql.clause(Clause.WHERE) == "WHERE a = 1 OR b = 2 AND c = 3"
    assert sql.connector == ""


def test_connector_before_first_predicate_is_discarded(sql: SQLDMLQueryBuilder):
    sql.or_().where("a", "b").where("c", "d")
    assert sql.clause(Clause.WHERE) == "WHERE a = b AND c = d"
    assert sql.connector == ""


def test_having_is_independent_of_where(sql: SQLDMLQueryBuilder):
    sql.where("a", "1").having("COUNT(*)", "1", ">").having("MAX(b)", "9", "<")
    assert sql.clause(Clause.WHERE) == "WHERE a = 1"
    assert sql.clause(Clause.HAVING) == "HAVING COUNT(*) > 1 AND MAX(b) < 9"


def test_condition_accepts_clause_name(sql: SQLDMLQueryBuilder):
    sql.sql_condition("a", "1", "=", "having")
    assert sql.clause(Clause.HAVING) == "HAVING a = 1"


@pytest.mark.parametrize(
    "method, args, expected",
    [
        ("where_like", ("a", "'%x%'"), "WHERE a LIKE '%x%'"),
        ("where_like", ("a", "'%x%'", True), "WHERE a NOT LIKE '%x%'"),
        ("where_in", ("a", "(1, 2)"), "WHERE a IN (1, 2)"),
        ("where_in", ("a", "(1, 2)", True), "WHERE a NOT IN (1, 2)"),
        ("where_between", ("a", "1", "5"), "WHERE a BETWEEN 1 AND 5"),
        ("where_between", ("a", "1", "5", True), "WHERE a NOT BETWEEN 1 AND 5"),
        ("where_null", ("a",), "WHERE a IS NULL"),
        ("where_null", ("a", True), "WHERE a IS NOT NULL"),
        ("where_regexp", ("a", "'^x'"), "WHERE a REGEXP '^x'"),
        ("where_regexp", ("a", "'^x'", True), "WHERE a NOT REGEXP '^x'"),
    ],
)
def test_where_predicate_variants(sql: SQLDMLQueryBuilder, method, args, expected):
    getattr(sql, method)(*args)
    assert sql.clause(Clause.WHERE) == expected


@pytest.mark.parametrize(
    "method, args, expected",
    [
        ("having_like", ("a", "'x%'"), "HAVING a LIKE 'x%'"),
        ("having_in", ("a", "(1)", True), "HAVING a NOT IN (1)"),
        ("having_between", ("a", "1", "2"), "HAVING a BETWEEN 1 AND 2"),
        ("having_null", ("a", True), "HAVING a IS NOT NULL"),
        ("having_regexp", ("a", "'y'"), "HAVING a REGEXP 'y'"),
    ],
)
def test_having_predicate_variants(sql: SQLDMLQueryBuilder, method, args, expected):
    getattr(sql, method)(*args)
    assert sql.clause(Clause.HAVING) == expected


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def test_group_opened_on_empty_where(sql: SQLDMLQueryBuilder):
    (
        sql.start_where_group()
        .where("a", "1")
        .or_()
        .where("b", "2")
        .end_where_group()
        .where("c", "3")
    )
    assert sql.clause(Clause.WHERE) == "WHERE (a = 1 OR b = 2) AND c = 3"


def test_nested_groups_on_empty_where(sql: SQLDMLQueryBuilder):
    sql.start_where_group().start_where_group().where("a", "1")
    assert sql.clause(Clause.WHERE) == "WHERE ((a = 1"


def test_group_after_predicate_uses_pending_connector(sql: SQLDMLQueryBuilder):
    sql.where("a", "1").or_().start_where_group().where("b", "2").where("c", "3")
    sql.end_where_group()
    assert sql.clause(Clause.WHERE) == "WHERE a = 1 OR (b = 2 AND c = 3)"


def test_group_after_predicate_defaults_to_and(sql: SQLDMLQueryBuilder):
    sql.where("a", "1").start_where_group().where("b", "2").end_where_group()
    assert sql.clause(Clause.WHERE) == "WHERE a = 1 AND (b = 2)"


def test_connector_inside_fresh_group_is_discarded(sql: SQLDMLQueryBuilder):
    sql.start_where_group().or_().where("a", "b").end_where_group()
    assert sql.clause(Clause.WHERE) == "WHERE (a = b)"
    assert sql.connector == ""


@pytest.mark.parametrize(
    "start, add, end, clause, expected",
    [
        ("start_where_group", "where", "end_where_group", Clause.WHERE, "WHERE ((a = b))"),
        ("start_having_group", "having", "end_having_group", Clause.HAVING, "HAVING ((a = b))"),
        ("start_on_group", "on", "end_on_group", Clause.JOIN, "INNER JOIN t2 ON ((a = b))"),
    ],
)
def test_connector_inside_nested_group_is_discarded(
    sql: SQLDMLQueryBuilder, start, add, end, clause, expected
):
    sql.join("t2")
    getattr(sql, start)()
    sql.or_()
    getattr(sql, start)()
    sql.or_()
    getattr(sql, add)("a", "b")
    getattr(sql, end)()
    getattr(sql, end)()
    assert sql.clause(clause) == expected
    assert sql.connector == ""


def test_group_after_predicate_then_connector_inside(sql: SQLDMLQueryBuilder):
    sql.where("a", "1").or_().start_where_group().and_().where("b", "2").end_where_group()
    assert sql.clause(Clause.WHERE) == "WHERE a = 1 OR (b = 2)"


def test_having_groups(sql: SQLDMLQueryBuilder):
    sql.start_having_group().having("a", "1").end_having_group()
    assert sql.clause(Clause.HAVING) == "HAVING (a = 1)"


# ---------------------------------------------------------------------------
# ON / USING
# ---------------------------------------------------------------------------


def test_on_binds_the_join(sql: SQLDMLQueryBuilder):
    sql.join("t2").on("t1.id", "t2.id").on("t1.x", "t2.x", "<")
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 ON t1.id = t2.id AND t1.x < t2.x"
    assert sql.join_state is JoinState.BOUND_ON


def test_using_is_ignored_after_on(sql: SQLDMLQueryBuilder):
    sql.join("t2").on("t1.id", "t2.id").using("id")
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 ON t1.id = t2.id"
    assert sql.join_state is JoinState.BOUND_ON


def test_using_merges_columns(sql: SQLDMLQueryBuilder):
    sql.join("t2").using("id").using("name")
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 USING (id, name)"
    assert sql.join_state is JoinState.BOUND_USING


def test_on_is_ignored_after_using(sql: SQLDMLQueryBuilder):
    sql.join("t2").using("id").on("a", "b").start_on_group().end_on_group()
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 USING (id)"


def test_each_join_chooses_its_own_qualifier(sql: SQLDMLQueryBuilder):
    sql.join("t2").using("id").join("t3", "LEFT").on("t2.k", "t3.k")
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 USING (id) LEFT JOIN t3 ON t2.k = t3.k"


def test_where_leaves_pending_join_untouched(sql: SQLDMLQueryBuilder):
    sql.join("t2").where("a", "1").on("t1.id", "t2.id")
    assert sql.clause(Clause.WHERE) == "WHERE a = 1"
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 ON t1.id = t2.id"


def test_on_group_right_after_join(sql: SQLDMLQueryBuilder):
    (
        sql.join("t2")
        .start_on_group()
        .on("a", "b")
        .or_()
        .on("c", "d")
        .end_on_group()
    )
    assert sql.clause(Clause.JOIN) == "INNER JOIN t2 ON (a = b OR c = d)"


@pytest.mark.parametrize(
    "method, args, expected",
    [
        ("on_like", ("a", "'x'"), "INNER JOIN t2 ON a LIKE 'x'"),
        ("on_in", ("a", "(1)"), "INNER JOIN t2 ON a IN (1)"),
        ("on_between", ("a", "1", "2", True), "INNER JOIN t2 ON a NOT BETWEEN 1 AND 2"),
        ("on_null", ("a",), "INNER JOIN t2 ON a IS NULL"),
        ("on_regexp", ("a", "'z'", True), "INNER JOIN t2 ON a NOT REGEXP 'z'"),
    ],
)
def test_on_predicate_variants(sql: SQLDMLQueryBuilder, method, args, expected):
    sql.join("t2")
    getattr(sql, method)(*args)
    assert sql.clause(Clause.JOIN) == expected


def test_condition_targets():
    assert Condition.WHERE.target is Clause.WHERE
    assert Condition.HAVING.target is Clause.HAVING
    assert Condition.ON.target is Clause.JOIN


# ---------------------------------------------------------------------------
# Deprecated connector aliases
# ---------------------------------------------------------------------------


def test_sql_and_is_deprecated(sql: SQLDMLQueryBuilder):
    with pytest.warns(DeprecationWarning):
        assert sql.sql_and() is sql
    assert sql.connector == "AND"


def test_sql_or_is_deprecated(sql: SQLDMLQueryBuilder):
    with pytest.warns(DeprecationWarning):
        sql.sql_or()
    assert sql.connector == "OR"
