"""In-memory plan executor over Python sequences."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from keypager.core.order import Nulls, OrderKey, OrderSpec
from keypager.core.page import Page
from keypager.core.plan import PageRequest, Plan, compile_plan
from keypager.core.policy import apply_page_size_policy
from keypager.utils.settings import PaginationSettings
from keypager.utils.types import Row, get_field


def _nulls_first(key: OrderKey) -> bool:
    if key.nulls is Nulls.UNSPECIFIED:
        # Nulls compare greater than any value
        return not key.ascending
    return key.nulls is Nulls.FIRST


def _sort_key(key: OrderKey) -> Callable[[Any], tuple]:
    # reverse=True flips the rank too, so pick it for the post-reverse position
    first = _nulls_first(key)
    null_rank = 0 if first == key.ascending else 2

    def extract(row: Any) -> tuple:
        value = get_field(row, key.field, None)
        if value is None:
            return (null_rank, None)
        return (1, value)

    return extract


def sort_rows(rows: Iterable[Row], order: OrderSpec) -> list[Row]:
    """Sort rows by every key of ``order``, honouring null placement."""
    result = list(rows)
    # Stable sorts from the least significant key up
    for key in reversed(order):
        result.sort(key=_sort_key(key), reverse=not key.ascending)
    return result


def execute(rows: Iterable[Row], plan: Plan, where: Callable[[Row], bool] | None = None) -> list[Row]:
    """Run a plan against rows: filter, order, then limit.

    Args:
        rows: Candidate rows in any order
        plan: Compiled plan
        where: Caller filter ANDed with the plan's predicate
    """
    selected = [
        row
        for row in rows
        if (where is None or where(row))
        and (plan.predicate is None or plan.predicate.matches(row))
    ]
    ordered = sort_rows(selected, plan.order)
    return ordered[: plan.limit] if plan.limit else ordered


def paginate(
    rows: Iterable[Row],
    request: PageRequest,
    settings: PaginationSettings | None = None,
    where: Callable[[Row], bool] | None = None,
    strict: bool = False,
) -> Page:
    """Compile, execute and finish a request over in-memory rows."""
    settings = settings or PaginationSettings()
    plan = compile_plan(
        apply_page_size_policy(request, settings),
        id_field=settings.id_field,
        strict=strict,
    )
    return plan.finish(execute(rows, plan, where))
