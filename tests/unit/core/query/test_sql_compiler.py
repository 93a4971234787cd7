"""Unit tests for lowering filter predicates to SQL."""

import pytest

from simpledata.core.query import QueryError, SQLCompiler, compile_filters, parse_filters
from simpledata.core.query.ast import FilterOperator, FilterPredicate


def test_empty_predicates_compile_to_empty_fragment():
    sql, params = SQLCompiler("sqlite").compile([])
    assert sql == ""
    assert params == {}


def test_unsupported_dialect():
    with pytest.raises(QueryError):
        SQLCompiler("mysql")


def test_operands_are_bound_not_inlined():
    sql, params = compile_filters({"name": "O'Brien"}, "sqlite")
    assert "O'Brien" not in sql
    assert params == {"filter_0": "O'Brien"}
    assert ":filter_0" in sql


def test_predicates_combine_with_and():
    sql, params = compile_filters({"age_gte": "18", "status": "active"}, "sqlite")
    assert sql.count(" AND ") == 1
    assert sql.startswith("(") and sql.endswith(")")
    assert params == {"filter_0": 18.0, "filter_1": "active"}


def test_sqlite_numeric_comparison_uses_number_function():
    sql, _ = compile_filters({"age_gt": "30"}, "sqlite")
    assert "sd_to_number(" in sql
    assert "> :filter_0" in sql


def test_sqlite_text_expression_uses_text_function():
    sql, params = compile_filters({"active": "true"}, "sqlite")
    assert sql == "(sd_text(data, 'active') = :filter_0)"
    assert params == {"filter_0": "true"}


def test_sqlite_regex_uses_registered_function():
    sql, params = compile_filters({"name_regex": "^jo"}, "sqlite")
    assert "sd_iregex(" in sql
    assert params == {"filter_0": "^jo"}


def test_sqlite_in_binds_each_token():
    sql, params = compile_filters({"status_in": "a,b,c"}, "sqlite")
    assert "IN (:filter_0, :filter_1, :filter_2)" in sql
    assert list(params.values()) == ["a", "b", "c"]


def test_sqlite_exists():
    present, _ = compile_filters({"email_exists": "true"}, "sqlite")
    absent, _ = compile_filters({"email_exists": "false"}, "sqlite")
    assert present.endswith("IS NOT NULL)")
    assert absent.endswith("IS NULL)")
    assert "IS NOT NULL" not in absent


def test_postgresql_lowering():
    sql, params = compile_filters(
        {"age_gte": "18", "name_regex": "smith", "email_exists": "1"}, "postgresql"
    )
    assert "(data ->> 'age')" in sql
    assert "double precision" in sql
    assert "~* :filter_1" in sql
    assert "jsonb_exists(data, 'email')" in sql
    assert params == {"filter_0": 18.0, "filter_1": "smith"}


def test_postgresql_exists_false():
    sql, _ = compile_filters({"email_exists": "no"}, "postgresql")
    assert sql == "(NOT jsonb_exists(data, 'email'))"


def test_custom_column():
    sql, _ = SQLCompiler("postgresql", column="records.data").compile(
        parse_filters({"status_ne": "done"})
    )
    assert sql == "((records.data ->> 'status') <> :filter_0)"


def test_field_name_is_revalidated_at_compile_time():
    predicate = FilterPredicate(field="bad name", operator=FilterOperator.EQ, operands=("x",))
    with pytest.raises(QueryError):
        SQLCompiler("sqlite").compile([predicate])


def test_bind_counter_restarts_per_compile():
    compiler = SQLCompiler("sqlite")
    compiler.compile(parse_filters({"a": "1", "b": "2"}))
    _, params = compiler.compile(parse_filters({"c": "3"}))
    assert params == {"filter_0": "3"}
