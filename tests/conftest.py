"""Shared test fixtures for shardplan tests."""
import pytest
import sqlglot

from shardplan.config import config
from shardplan.pagination.values import (
    NumberLiteralValue,
    PaginationClause,
    ParameterMarkerValue,
)
from shardplan.statement import OrderByItem, OrderDirection, SelectStatementContext


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Pin config to its defaults regardless of the caller's environment."""
    monkeypatch.setattr(config, "max_row_count", 2147483647)
    monkeypatch.setattr(config, "accept_float_parameters", True)
    return config


@pytest.fixture
def literal():
    def _make(value, bound_opened=False, clause=PaginationClause.LIMIT):
        return NumberLiteralValue(value=value, bound_opened=bound_opened, clause=clause)

    return _make


@pytest.fixture
def marker():
    def _make(index, bound_opened=False, clause=PaginationClause.LIMIT):
        return ParameterMarkerValue(
            parameter_index=index, bound_opened=bound_opened, clause=clause
        )

    return _make


@pytest.fixture
def plain_select():
    """SELECT without grouping or aggregation."""
    return SelectStatementContext(
        order_by_items=[OrderByItem("order_id")],
    )


@pytest.fixture
def grouped_select_mismatched_order():
    """SELECT user_id, COUNT(*) ... GROUP BY user_id ORDER BY order_id DESC."""
    return SelectStatementContext(
        group_by_items=[OrderByItem("user_id")],
        order_by_items=[OrderByItem("order_id", OrderDirection.DESC)],
        aggregation_projections=["COUNT(*)"],
    )


@pytest.fixture
def grouped_select_matching_order():
    """SELECT user_id, COUNT(*) ... GROUP BY user_id ORDER BY user_id."""
    return SelectStatementContext(
        group_by_items=[OrderByItem("user_id")],
        order_by_items=[OrderByItem("user_id")],
        aggregation_projections=["COUNT(*)"],
    )


@pytest.fixture
def parse_select():
    def _parse(sql: str):
        return sqlglot.parse_one(sql, dialect="postgres")

    return _parse
