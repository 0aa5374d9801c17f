"""Select statement context consumed by pagination planning.

Reports what the merge layer needs to know about a SELECT: its GROUP BY
items, its ORDER BY items and its aggregation projections. Contexts can be
built directly or read off an already-parsed sqlglot AST.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum

from sqlglot import exp
from sqlglot.optimizer.normalize_identifiers import normalize_identifiers

logger = logging.getLogger(__name__)


class OrderDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class OrderByItem:
    """One GROUP BY or ORDER BY item."""

    expression: str
    direction: OrderDirection = OrderDirection.ASC

    @property
    def key(self) -> tuple[str, OrderDirection]:
        return self.expression.strip(), self.direction


def _render(node: exp.Expression, dialect: str) -> str:
    """Render an item with unquoted identifiers case-folded for the dialect."""
    return normalize_identifiers(node.copy(), dialect=dialect).sql(dialect=dialect)


def _is_aggregation(projection: exp.Expression) -> bool:
    """True for aggregates computed by this SELECT itself.

    Aggregates inside subqueries or under OVER (...) do not group the outer
    result.
    """
    if isinstance(projection, exp.AggFunc):
        return True
    if isinstance(projection, (exp.Subquery, exp.Query, exp.Window)):
        return False
    return any(_is_aggregation(child) for child in projection.iter_expressions())


@dataclass
class SelectStatementContext:
    """GROUP BY / ORDER BY / aggregation facts about one SELECT."""

    group_by_items: list[OrderByItem] = field(default_factory=list)
    order_by_items: list[OrderByItem] = field(default_factory=list)
    aggregation_projections: list[str] = field(default_factory=list)

    def has_grouping_or_aggregation(self) -> bool:
        return bool(self.group_by_items) or bool(self.aggregation_projections)

    def is_same_group_by_and_order_by_items(self) -> bool:
        """True when GROUP BY is present and matches ORDER BY item for item."""
        if not self.group_by_items:
            return False
        return [i.key for i in self.group_by_items] == [
            i.key for i in self.order_by_items
        ]

    @classmethod
    def from_expression(
        cls,
        select: exp.Select,
        dialect: str = "postgres",
        derive_order_from_group_by: bool = True,
    ) -> "SelectStatementContext":
        """Build a context from a parsed sqlglot SELECT.

        Args:
            select: Root SELECT node, e.g. from sqlglot.parse_one().
            dialect: Dialect used to render item expressions for comparison.
            derive_order_from_group_by: With no ORDER BY, the merge layer
                streams groups in GROUP BY order, so ORDER BY takes the
                GROUP BY items.
        """
        if not isinstance(select, exp.Select):
            raise TypeError(
                f"Expected a sqlglot Select expression, got {type(select).__name__}"
            )

        group_by_items: list[OrderByItem] = []
        group = select.args.get("group")
        if group:
            group_by_items = [
                OrderByItem(_render(node, dialect)) for node in group.expressions
            ]

        order_by_items: list[OrderByItem] = []
        order = select.args.get("order")
        if order:
            for ordered in order.expressions:
                if isinstance(ordered, exp.Ordered):
                    direction = (
                        OrderDirection.DESC
                        if ordered.args.get("desc")
                        else OrderDirection.ASC
                    )
                    order_by_items.append(
                        OrderByItem(_render(ordered.this, dialect), direction)
                    )
                else:
                    order_by_items.append(OrderByItem(_render(ordered, dialect)))
        elif derive_order_from_group_by:
            order_by_items = list(group_by_items)

        aggregation_projections = [
            projection.sql(dialect=dialect)
            for projection in select.expressions
            if _is_aggregation(projection)
        ]

        logger.debug(
            f"Statement context: group_by={len(group_by_items)}, "
            f"order_by={len(order_by_items)}, "
            f"aggregations={len(aggregation_projections)}"
        )
        return cls(
            group_by_items=group_by_items,
            order_by_items=order_by_items,
            aggregation_projections=aggregation_projections,
        )
