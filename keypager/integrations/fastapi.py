from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field

from keypager.core.cursor import CursorCodec, default_codec
from keypager.core.order import OrderLike
from keypager.core.page import Page
from keypager.core.plan import PageRequest
from keypager.core.policy import apply_page_size_policy
from keypager.utils.exceptions import KeypagerError
from keypager.utils.settings import PaginationSettings, SettingsResolver
from keypager.utils.types import get_field

T = TypeVar("T")


def register_exception_handlers(app: Any) -> None:
    """Register keypager exception handlers on a FastAPI app."""
    from starlette.responses import JSONResponse

    @app.exception_handler(KeypagerError)
    async def keypager_error_handler(request: Any, exc: KeypagerError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})


class KeysetParams:
    """FastAPI dependency for keyset pagination query parameters.

    Cursors are decoded eagerly, so a malformed token surfaces as
    CursorDecodeError before the endpoint body runs. Subclasses tune page
    sizes with an inner Settings class:

        class ItemParams(KeysetParams):
            class Settings:
                max_page_size = 50
    """

    codec: CursorCodec = default_codec

    def __init__(
        self,
        first: Optional[int] = Query(None, ge=1),
        last: Optional[int] = Query(None, ge=1),
        after: Optional[str] = Query(None),
        before: Optional[str] = Query(None),
    ):
        self.first = first
        self.last = last
        self.after = self.codec.decode(after) if after else None
        self.before = self.codec.decode(before) if before else None

    def to_request(self, order_by: OrderLike = (), ascending: bool = True) -> PageRequest:
        """Build a PageRequest with the page size policy applied."""
        req = PageRequest(
            first=self.first,
            last=self.last,
            after=self.after,
            before=self.before,
            order_by=order_by,
            ascending=ascending,
        )
        return apply_page_size_policy(req, self.settings)

    @property
    def settings(self) -> PaginationSettings:
        return SettingsResolver.resolve(type(self))


class PageInfo(BaseModel):
    """Relay-style page metadata."""

    has_next_page: bool
    has_previous_page: bool
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


class Edge(BaseModel, Generic[T]):
    node: T
    cursor: str


class Connection(BaseModel, Generic[T]):
    """Paginated response model for API endpoints."""

    edges: list[Edge[T]] = Field(default_factory=list)
    page_info: PageInfo

    @classmethod
    def from_page(
        cls,
        page: Page,
        *,
        key: str,
        codec: CursorCodec | None = None,
    ) -> Connection:
        """Build a connection, encoding each row's ``key`` value as its cursor."""
        codec = codec or default_codec
        edges = [
            {"node": row, "cursor": codec.encode(get_field(row, key))}
            for row in page.rows
        ]
        return cls(
            edges=edges,
            page_info=PageInfo(
                has_next_page=page.has_next_page,
                has_previous_page=page.has_previous_page,
                start_cursor=edges[0]["cursor"] if edges else None,
                end_cursor=edges[-1]["cursor"] if edges else None,
            ),
        )
