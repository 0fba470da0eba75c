from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from keypager.utils.exceptions import InvalidPageRequestError
from keypager.utils.types import Row

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of rows in logical order, with neighbour flags."""

    rows: tuple[T, ...]
    has_next_page: bool
    has_previous_page: bool

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def start_row(self) -> T | None:
        return self.rows[0] if self.rows else None

    @property
    def end_row(self) -> T | None:
        return self.rows[-1] if self.rows else None


def finish(
    rows: Iterable[Row],
    requested_limit: int,
    flipped: bool,
    has_prior_boundary: bool = False,
) -> Page:
    """Build a Page from rows fetched in effective order.

    Args:
        rows: Rows as returned by the store, at most requested_limit + 1
        requested_limit: Page size the client asked for, 0 for unbounded
        flipped: Whether rows were fetched in reversed order
        has_prior_boundary: Whether the cursor behind the fetch direction was
            supplied (``after`` forward, ``before`` backward)

    Returns:
        The page, rows in logical order
    """
    if requested_limit < 0:
        raise InvalidPageRequestError("requested_limit must be >= 0")

    fetched = list(rows)
    if requested_limit == 0:
        return Page(rows=tuple(fetched), has_next_page=False, has_previous_page=False)

    has_more = len(fetched) > requested_limit
    if has_more:
        fetched = fetched[:requested_limit]

    if flipped:
        fetched.reverse()
        return Page(
            rows=tuple(fetched),
            has_next_page=has_prior_boundary,
            has_previous_page=has_more,
        )
    return Page(
        rows=tuple(fetched),
        has_next_page=has_more,
        has_previous_page=has_prior_boundary,
    )
