"""Pagination value descriptors handed over by the SQL parser.

A descriptor is either a number literal written in the SQL text or a
parameter marker whose value arrives with the runtime parameter list.
Both carry the bound semantics of the dialect clause they came from:

- LIMIT ... OFFSET ...     (MySQL, PostgreSQL) closed bounds, offset-relative
- ROWNUM / ROW_NUMBER()    (Oracle, SQL Server) open when written with < or >
- TOP n                    (SQL Server) closed
"""
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class PaginationClause(str, Enum):
    """Dialect clause a pagination value was taken from."""

    LIMIT = "limit"
    ROW_NUMBER = "row_number"
    TOP = "top"


class _PaginationValueBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    bound_opened: bool = Field(
        default=False,
        description="Exclusive boundary, e.g. rownum > 5 or rownum < 10",
    )
    clause: PaginationClause = Field(default=PaginationClause.LIMIT)

    @property
    def is_limit(self) -> bool:
        """Row counts from a LIMIT clause count from the start of the result."""
        return self.clause == PaginationClause.LIMIT


class NumberLiteralValue(_PaginationValueBase):
    kind: Literal["literal"] = "literal"
    value: int = Field(..., description="Literal written in the SQL text")


class ParameterMarkerValue(_PaginationValueBase):
    kind: Literal["parameter"] = "parameter"
    parameter_index: int = Field(
        ..., ge=0, description="Position in the runtime parameter list"
    )


PaginationValue = Annotated[
    Union[NumberLiteralValue, ParameterMarkerValue],
    Field(discriminator="kind"),
]

PaginationValueAdapter: TypeAdapter[PaginationValue] = TypeAdapter(PaginationValue)


def adjust_for_bound(value: int, bound_opened: bool, step: int) -> int:
    """Convert an exclusive boundary to the inclusive one used internally.

    Offsets step down by one, row counts step up by one.
    """
    return value + step if bound_opened else value
