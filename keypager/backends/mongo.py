from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from keypager.core.cursor import Cursor, CursorCodec, default_codec
from keypager.core.order import Nulls, OrderKey, OrderSpec
from keypager.core.page import Page
from keypager.core.plan import PageRequest, Plan, compile_plan
from keypager.core.policy import apply_page_size_policy
from keypager.core.predicate import And, Comparison, Operator, Predicate
from keypager.lifecycle.observability import track_query
from keypager.utils.settings import PaginationSettings, SettingsResolver
from keypager.utils.types import FilterSpec, SortSpec, and_filters

logger = logging.getLogger(__name__)

T = TypeVar("T")

_OPERATORS = {Operator.GT: "$gt", Operator.LT: "$lt"}


def render_filter(predicate: Predicate | None) -> FilterSpec:
    """Render a predicate as a MongoDB filter document."""
    if predicate is None:
        return {}
    if isinstance(predicate, Comparison):
        return {predicate.field: {_OPERATORS[predicate.operator]: predicate.operand}}
    if isinstance(predicate, And):
        return {"$and": [render_filter(predicate.left), render_filter(predicate.right)]}
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def _native_nulls(key: OrderKey) -> Nulls:
    # MongoDB sorts null/missing below every other value
    return Nulls.FIRST if key.ascending else Nulls.LAST


def render_sort(order: OrderSpec) -> SortSpec:
    """Render an ordering as a pymongo sort specification."""
    sort_spec: SortSpec = []
    for key in order:
        if key.nulls is not Nulls.UNSPECIFIED and key.nulls is not _native_nulls(key):
            logger.warning(
                "MongoDB cannot sort '%s' %s with NULLS %s; using store default",
                key.field,
                key.direction.value,
                key.nulls.value,
            )
        sort_spec.append((key.field, ASCENDING if key.ascending else DESCENDING))
    return sort_spec


class KeysetQuery(Generic[T]):
    """Fluent, lazy, immutable keyset page query over a MongoDB collection.

    Each chainable method returns a new KeysetQuery instance.
    The fetch only runs when page() is awaited.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        filter: FilterSpec | None = None,
        order_by: tuple[OrderKey, ...] = (),
        first: int | None = None,
        last: int | None = None,
        after: Cursor | None = None,
        before: Cursor | None = None,
        ascending: bool = True,
        settings: PaginationSettings | None = None,
        codec: CursorCodec | None = None,
        strict: bool = False,
        factory: Callable[[dict[str, Any]], T] | None = None,
    ) -> None:
        self._collection = collection
        self._filter: FilterSpec = filter or {}
        self._order_by = order_by
        self._first = first
        self._last = last
        self._after = after
        self._before = before
        self._ascending = ascending
        self._settings = settings or PaginationSettings(id_field="_id")
        self._codec = codec or default_codec
        self._strict = strict
        self._factory = factory

    @classmethod
    def for_model(
        cls,
        collection: AsyncCollection,
        model: type,
        **kwargs: Any,
    ) -> KeysetQuery[Any]:
        """Build a query configured from the inner Settings class of ``model``.

        Settings default to ordering on ``_id``; a ``factory`` defaults to
        ``model.model_validate`` when the model is a pydantic model.
        """
        settings = SettingsResolver.resolve(model, PaginationSettings(id_field="_id"))
        factory = kwargs.pop("factory", getattr(model, "model_validate", None))
        return cls(collection, settings=settings, factory=factory, **kwargs)

    def _clone(self, **overrides: Any) -> KeysetQuery[T]:
        """Return a new KeysetQuery with merged overrides."""
        defaults = {
            "collection": self._collection,
            "filter": self._filter.copy(),
            "order_by": self._order_by,
            "first": self._first,
            "last": self._last,
            "after": self._after,
            "before": self._before,
            "ascending": self._ascending,
            "settings": self._settings,
            "codec": self._codec,
            "strict": self._strict,
            "factory": self._factory,
        }
        defaults.update(overrides)
        return KeysetQuery(**defaults)

    def _as_cursor(self, cursor: Cursor | str | None) -> Cursor | None:
        if cursor is None or isinstance(cursor, Cursor):
            return cursor
        return self._codec.decode(cursor)

    # --- Chainable methods ---

    def filter(self, _filter: FilterSpec | None = None, **kwargs: Any) -> KeysetQuery[T]:
        """Add filter conditions, ANDed with the existing filter."""
        return self._clone(filter=and_filters(self._filter, _filter, kwargs))

    def order_by(self, *fields: OrderKey | str) -> KeysetQuery[T]:
        """Set sort order. Prefix with '-' for descending.

        Example: .order_by("-created_at")
        """
        keys = tuple(OrderKey.parse(f) if isinstance(f, str) else f for f in fields)
        return self._clone(order_by=keys)

    def first(self, n: int) -> KeysetQuery[T]:
        return self._clone(first=n, last=None)

    def last(self, n: int) -> KeysetQuery[T]:
        return self._clone(last=n, first=None)

    def after(self, cursor: Cursor | str | None) -> KeysetQuery[T]:
        """Start after a cursor (a Cursor or an encoded token)."""
        return self._clone(after=self._as_cursor(cursor))

    def before(self, cursor: Cursor | str | None) -> KeysetQuery[T]:
        """End before a cursor (a Cursor or an encoded token)."""
        return self._clone(before=self._as_cursor(cursor))

    def ascending(self, flag: bool = True) -> KeysetQuery[T]:
        return self._clone(ascending=flag)

    # --- Compilation ---

    def request(self) -> PageRequest:
        """The page request after the page size policy is applied."""
        req = PageRequest(
            first=self._first,
            last=self._last,
            after=self._after,
            before=self._before,
            order_by=self._order_by,
            ascending=self._ascending,
        )
        return apply_page_size_policy(req, self._settings)

    def plan(self) -> Plan:
        return compile_plan(self.request(), id_field=self._settings.id_field, strict=self._strict)

    # --- Terminal methods ---

    async def page(self) -> Page[T]:
        """Fetch one page and build its Page."""
        plan = self.plan()
        filter_spec = and_filters(self._filter, render_filter(plan.predicate))
        sort_spec = render_sort(plan.order)

        async with track_query(
            "page",
            self._collection.name,
            plan=plan,
            filter=filter_spec,
            sort=sort_spec,
        ) as ctx:
            cursor = self._collection.find(filter_spec)
            if sort_spec:
                cursor = cursor.sort(sort_spec)
            if plan.limit:
                cursor = cursor.limit(plan.limit)
            rows = []
            async for raw in cursor:
                rows.append(self._factory(raw) if self._factory else raw)
            ctx["result_count"] = len(rows)

        return plan.finish(rows)

    def cursor_for(self, row: Any) -> str:
        """Encode the cursor of a row on this query's primary sort key."""
        field = self._order_by[0].field if self._order_by else self._settings.id_field
        return self._codec.encode_row(row, field)
