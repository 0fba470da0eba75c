from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from keypager.core.cursor import Cursor
from keypager.core.direction import fetch_limit, resolve
from keypager.core.order import OrderLike, OrderSpec, as_order_spec, normalize, reverse_order
from keypager.core.page import Page, finish
from keypager.core.predicate import Predicate, build_predicate
from keypager.utils.exceptions import InvalidPageRequestError
from keypager.utils.settings import DEFAULT_ID_FIELD
from keypager.utils.types import Row

logger = logging.getLogger(__name__)


def _check_count(name: str, value: Any) -> None:
    if value is None:
        return
    # bool is an int subclass, but True is not a page size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPageRequestError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise InvalidPageRequestError(f"{name} must be >= 1")


@dataclass(frozen=True)
class PageRequest:
    """Client pagination intent.

    ``order_by`` accepts OrderKey instances or '-field' strings and is stored
    as a tuple. When ``ascending`` is False the whole ordering is reversed.
    """

    first: int | None = None
    last: int | None = None
    after: Cursor | None = None
    before: Cursor | None = None
    order_by: OrderSpec = field(default=())
    ascending: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "order_by", as_order_spec(self.order_by))

    def validate(self) -> None:
        """Raise InvalidPageRequestError for conflicting or non-positive counts."""
        if self.first is not None and self.last is not None:
            raise InvalidPageRequestError("first and last cannot both be set")
        _check_count("first", self.first)
        _check_count("last", self.last)
        for name in ("after", "before"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Cursor):
                raise InvalidPageRequestError(
                    f"{name} must be a Cursor, got {type(value).__name__}"
                )


@dataclass(frozen=True)
class Plan:
    """Store-agnostic execution plan for one page.

    ``limit`` includes the lookahead row (0 means unbounded). ``flipped`` and
    ``has_prior_boundary`` are what finish() needs to rebuild the page.
    """

    predicate: Predicate | None
    order: OrderSpec
    limit: int
    flipped: bool = False
    has_prior_boundary: bool = False

    @property
    def page_size(self) -> int:
        return self.limit - 1 if self.limit > 0 else 0

    def finish(self, rows: Iterable[Row]) -> Page:
        """Turn rows fetched with this plan into a Page."""
        return finish(rows, self.page_size, self.flipped, self.has_prior_boundary)


def logical_order(req: PageRequest, id_field: str = DEFAULT_ID_FIELD) -> OrderSpec:
    """The order pages are presented in, before any backward flip."""
    order = normalize(req.order_by, id_field)
    return order if req.ascending else reverse_order(order)


def compile_plan(
    req: PageRequest,
    *,
    id_field: str = DEFAULT_ID_FIELD,
    strict: bool = False,
) -> Plan:
    """Compile a page request into a Plan.

    Args:
        req: The page request
        id_field: Unique identifier used when ``req.order_by`` is empty
        strict: Reject multi-key orderings when a cursor is given

    Returns:
        The compiled Plan

    Raises:
        InvalidPageRequestError: If first/last are conflicting or not positive
        InvalidOrderError: If the ordering is malformed
    """
    req.validate()
    order = logical_order(req, id_field)
    _, limit, flipped = resolve(req)

    predicate = build_predicate(
        order, req.after, req.before, order[0].ascending, strict=strict
    )
    effective_order = reverse_order(order) if flipped else order
    prior = req.before if flipped else req.after

    plan = Plan(
        predicate=predicate,
        order=effective_order,
        limit=fetch_limit(limit),
        flipped=flipped,
        has_prior_boundary=prior is not None,
    )
    logger.debug("Compiled %r into %r", req, plan)
    return plan
