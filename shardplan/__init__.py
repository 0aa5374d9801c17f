"""Pagination planning for sharded SQL execution.

Resolves the LIMIT/OFFSET window of a query once per planning pass and
revises it for per-shard execution:
- Offset and row count from number literals or bound parameters
- Open (exclusive) and closed (inclusive) dialect bounds
- Per-shard row counts that stay correct under GROUP BY and aggregation
"""
from shardplan.pagination import (
    NumberLiteralValue,
    PaginationClause,
    PaginationContext,
    ParameterMarkerValue,
)
from shardplan.statement import OrderByItem, OrderDirection, SelectStatementContext
from shardplan.utils.errors import InvalidPaginationParameter

__all__ = [
    "InvalidPaginationParameter",
    "NumberLiteralValue",
    "OrderByItem",
    "OrderDirection",
    "PaginationClause",
    "PaginationContext",
    "ParameterMarkerValue",
    "SelectStatementContext",
]
