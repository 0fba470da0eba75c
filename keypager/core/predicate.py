from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from keypager.core.cursor import Cursor
from keypager.core.order import OrderSpec
from keypager.utils.exceptions import InvalidOrderError
from keypager.utils.types import get_field

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    GT = ">"
    LT = "<"

    def compare(self, left: Any, right: Any) -> bool:
        if self is Operator.GT:
            return left > right
        return left < right


@dataclass(frozen=True)
class Comparison:
    """Strict comparison of a field against a typed operand."""

    field: str
    operator: Operator
    operand: Any

    def fields(self) -> tuple[str, ...]:
        return (self.field,)

    def matches(self, row: Any) -> bool:
        """Evaluate against a row. Missing or null values never match."""
        value = get_field(row, self.field, None)
        if value is None or self.operand is None:
            return False
        return self.operator.compare(value, self.operand)


@dataclass(frozen=True)
class And:
    """Conjunction of two predicates."""

    left: Predicate
    right: Predicate

    def fields(self) -> tuple[str, ...]:
        return self.left.fields() + self.right.fields()

    def matches(self, row: Any) -> bool:
        return self.left.matches(row) and self.right.matches(row)


Predicate = Union[Comparison, And]


def build_predicate(
    order: OrderSpec,
    after: Cursor | None = None,
    before: Cursor | None = None,
    ascending: bool = True,
    *,
    strict: bool = False,
) -> Predicate | None:
    """Compile cursors into the predicate selecting rows strictly between them.

    Only the primary key (``order[0]``) is compared. ``ascending`` is that key's
    logical direction, so ``after`` always means "follows the cursor" and
    ``before`` "precedes the cursor" regardless of the fetch direction.

    Args:
        order: Normalized ordering, at least one key
        after: Exclusive lower boundary in logical order
        before: Exclusive upper boundary in logical order
        ascending: Whether the primary key runs ascending in logical order
        strict: Reject orderings with more than one key when a cursor is used

    Returns:
        The predicate, or None when no cursor was given

    Raises:
        InvalidOrderError: If order is empty, or strict and order has several keys
    """
    if after is None and before is None:
        return None
    if not order:
        raise InvalidOrderError("Cannot build a boundary predicate without an order key")
    if len(order) > 1:
        if strict:
            raise InvalidOrderError(
                f"Cursor pagination compares only '{order[0].field}'; "
                f"{len(order) - 1} secondary key(s) would be ignored"
            )
        logger.debug(
            "Boundary predicate uses '%s' only, ignoring %d secondary key(s)",
            order[0].field,
            len(order) - 1,
        )

    field = order[0].field
    predicate: Predicate | None = None
    if after is not None:
        op = Operator.GT if ascending else Operator.LT
        predicate = Comparison(field, op, after.value)
    if before is not None:
        op = Operator.LT if ascending else Operator.GT
        upper = Comparison(field, op, before.value)
        predicate = upper if predicate is None else And(predicate, upper)
    return predicate
