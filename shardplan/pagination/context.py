"""Pagination window resolution for sharded SELECT execution.

Every shard runs its own rewritten copy of the query and the merge layer
combines the partial results, so the window written in the original SQL
cannot be pushed down to the shards as-is. PaginationContext resolves the
window once per query and answers the questions the rewriter and merge
planner ask about it.
"""
import logging
import math
import numbers
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence

from shardplan.config import config
from shardplan.pagination.values import (
    PaginationValue,
    ParameterMarkerValue,
    adjust_for_bound,
)
from shardplan.statement import SelectStatementContext
from shardplan.utils.errors import InvalidPaginationParameter

logger = logging.getLogger(__name__)


def _reject(index: int, reason: str) -> InvalidPaginationParameter:
    logger.warning(f"Rejecting pagination parameter #{index}: {reason}")
    return InvalidPaginationParameter(index, reason)


def _whole_number(raw: Any, index: int, accept_float: bool) -> int:
    """Coerce a bound parameter to int, accepting any whole-number numeric."""
    if isinstance(raw, bool):
        raise _reject(index, "is a boolean, not a whole number")
    if isinstance(raw, numbers.Integral):
        return int(raw)
    if isinstance(raw, (numbers.Rational, Decimal)):
        try:
            value = int(raw)
        except (ValueError, OverflowError) as e:
            raise _reject(index, f"is not finite ({raw!r})") from e
        if value != raw:
            raise _reject(index, f"is not a whole number ({raw!r})")
        return value
    if not isinstance(raw, numbers.Real):
        raise _reject(index, f"has non-numeric type {type(raw).__name__}")

    # Floating types, including driver scalars such as numpy.float32
    if not accept_float:
        raise _reject(index, f"is a float ({raw!r}) and float parameters are disabled")
    as_float = float(raw)
    if not math.isfinite(as_float):
        raise _reject(index, f"is not finite ({raw!r})")
    if not as_float.is_integer():
        raise _reject(index, f"is not a whole number ({raw!r})")
    return int(as_float)


def _resolve_value(
    value: PaginationValue, parameters: Sequence[Any], accept_float: bool
) -> int:
    if isinstance(value, ParameterMarkerValue):
        index = value.parameter_index
        if not 0 <= index < len(parameters):
            raise _reject(
                index, f"is out of range ({len(parameters)} parameter(s) supplied)"
            )
        return _whole_number(parameters[index], index, accept_float)
    return value.value


@dataclass(frozen=True)
class PaginationContext:
    """Resolved pagination window of one query.

    Built once per planning pass with resolve(); immutable afterwards and
    safe to share between shard-rewriting workers.
    """

    has_pagination: bool
    offset_value: Optional[PaginationValue]
    row_count_value: Optional[PaginationValue]
    resolved_offset: int
    resolved_row_count: Optional[int]
    max_row_count: int

    @classmethod
    def resolve(
        cls,
        offset_value: Optional[PaginationValue] = None,
        row_count_value: Optional[PaginationValue] = None,
        parameters: Sequence[Any] = (),
        max_row_count: Optional[int] = None,
    ) -> "PaginationContext":
        """Resolve offset and row count against the runtime parameters.

        Raises:
            InvalidPaginationParameter: A parameter marker points past the
                parameter list or at a value that is not a whole number.
        """
        accept_float = config.accept_float_parameters
        resolved_offset = (
            0
            if offset_value is None
            else _resolve_value(offset_value, parameters, accept_float)
        )
        resolved_row_count = (
            None
            if row_count_value is None
            else _resolve_value(row_count_value, parameters, accept_float)
        )
        context = cls(
            has_pagination=offset_value is not None or row_count_value is not None,
            offset_value=offset_value,
            row_count_value=row_count_value,
            resolved_offset=resolved_offset,
            resolved_row_count=resolved_row_count,
            max_row_count=(
                config.max_row_count if max_row_count is None else max_row_count
            ),
        )
        logger.debug(
            f"Pagination resolved: offset={resolved_offset}, "
            f"row_count={resolved_row_count}"
        )
        return context

    def actual_offset(self) -> int:
        if self.offset_value is None:
            return 0
        return adjust_for_bound(
            self.resolved_offset, self.offset_value.bound_opened, -1
        )

    def actual_row_count(self) -> Optional[int]:
        if self.row_count_value is None:
            return None
        return adjust_for_bound(
            self.resolved_row_count, self.row_count_value.bound_opened, 1
        )

    def offset_parameter_index(self) -> Optional[int]:
        if isinstance(self.offset_value, ParameterMarkerValue):
            return self.offset_value.parameter_index
        return None

    def row_count_parameter_index(self) -> Optional[int]:
        if isinstance(self.row_count_value, ParameterMarkerValue):
            return self.row_count_value.parameter_index
        return None

    def revised_offset(self) -> int:
        """Offset for each shard query.

        Always 0: rows are skipped after the merge, since a shard's own
        ordering only approximates the merged ordering.
        """
        return 0

    def revised_row_count(self, statement: SelectStatementContext) -> int:
        """Rows each shard must return so the merged result covers the window.

        Grouped or aggregated queries whose GROUP BY differs from ORDER BY
        cannot be capped per shard; the merge layer sees every row and the
        max_row_count sentinel is returned. LIMIT row counts are counted from
        the start of the result, so the skipped prefix is fetched as well.
        """
        if self._is_max_row_count(statement) or self.resolved_row_count is None:
            logger.debug(
                f"Revised row count unbounded, using sentinel {self.max_row_count}"
            )
            return self.max_row_count
        if self.row_count_value.is_limit:
            return self.resolved_offset + self.resolved_row_count
        return self.resolved_row_count

    @staticmethod
    def _is_max_row_count(statement: SelectStatementContext) -> bool:
        return (
            statement.has_grouping_or_aggregation()
            and not statement.is_same_group_by_and_order_by_items()
        )
