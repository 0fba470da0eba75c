from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from keypager.core.order import Nulls, OrderKey, OrderSpec
from keypager.core.plan import Plan
from keypager.core.predicate import And, Comparison, Predicate
from keypager.utils.exceptions import InvalidOrderError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def _identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise InvalidOrderError(f"Invalid column name '{name}'")
    return name


@dataclass(frozen=True)
class QueryArgs:
    """SQL fragments for a compiled plan, values bound through ``params``.

    ``params`` holds WHERE operands first, then the LIMIT value, matching the
    placeholder order of append_all().
    """

    where: str | None
    order: str
    limit: str | None
    where_params: tuple[Any, ...] = ()
    limit_params: tuple[Any, ...] = ()

    @property
    def params(self) -> tuple[Any, ...]:
        return self.where_params + self.limit_params

    def append_where(self, query: str) -> str:
        if self.where is None:
            return query
        return f"{query} WHERE {self.where}"

    def append_order(self, query: str) -> str:
        if not self.order:
            return query
        return f"{query} ORDER BY {self.order}"

    def append_limit(self, query: str) -> str:
        if self.limit is None:
            return query
        return f"{query} {self.limit}"

    def append_all(self, query: str) -> str:
        query = self.append_where(query)
        query = self.append_order(query)
        return self.append_limit(query)


def render_order_key(key: OrderKey) -> str:
    clause = f"{_identifier(key.field)} {key.direction.value}"
    if key.nulls is not Nulls.UNSPECIFIED:
        clause += f" NULLS {key.nulls.value}"
    return clause


def render_order(order: OrderSpec) -> str:
    return ", ".join(render_order_key(key) for key in order)


def render_predicate(predicate: Predicate, placeholder: str = "%s") -> tuple[str, list[Any]]:
    """Render a predicate as a WHERE expression with bound operands."""
    if isinstance(predicate, Comparison):
        clause = f"{_identifier(predicate.field)} {predicate.operator.value} {placeholder}"
        return clause, [predicate.operand]
    if isinstance(predicate, And):
        left, left_params = render_predicate(predicate.left, placeholder)
        right, right_params = render_predicate(predicate.right, placeholder)
        return f"{left} AND {right}", left_params + right_params
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def render_sql(plan: Plan, placeholder: str = "%s") -> QueryArgs:
    """Render a plan as SQL fragments.

    Args:
        plan: Compiled plan
        placeholder: DB-API parameter marker ("%s" for format, "?" for qmark)

    Returns:
        QueryArgs with WHERE, ORDER BY and LIMIT fragments
    """
    where = None
    where_params: list[Any] = []
    if plan.predicate is not None:
        where, where_params = render_predicate(plan.predicate, placeholder)

    limit = None
    limit_params: tuple[Any, ...] = ()
    if plan.limit:
        limit = f"LIMIT {placeholder}"
        limit_params = (plan.limit,)

    return QueryArgs(
        where=where,
        order=render_order(plan.order),
        limit=limit,
        where_params=tuple(where_params),
        limit_params=limit_params,
    )
