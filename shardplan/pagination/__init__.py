"""Pagination window resolution for sharded SELECT execution."""
from shardplan.pagination.context import PaginationContext
from shardplan.pagination.values import (
    NumberLiteralValue,
    PaginationClause,
    PaginationValue,
    PaginationValueAdapter,
    ParameterMarkerValue,
    adjust_for_bound,
)

__all__ = [
    "NumberLiteralValue",
    "PaginationClause",
    "PaginationContext",
    "PaginationValue",
    "PaginationValueAdapter",
    "ParameterMarkerValue",
    "adjust_for_bound",
]
