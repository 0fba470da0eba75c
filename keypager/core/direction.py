from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from keypager.core.plan import PageRequest


class Resolution(NamedTuple):
    """Effective fetch direction for a page request.

    ``limit`` is the requested page size (0 when unbounded), not the fetch
    size: the store is asked for ``limit + 1`` rows.
    """

    ascending: bool
    limit: int
    flipped: bool


def resolve(req: PageRequest) -> Resolution:
    """Pick the fetch direction and page size.

    "last N" is fetched as "first N" of the reversed order, and the rows are
    put back into logical order by the page assembler.
    """
    if req.first is not None:
        return Resolution(req.ascending, req.first, False)
    if req.last is not None:
        return Resolution(not req.ascending, req.last, True)
    return Resolution(req.ascending, 0, False)


def fetch_limit(limit: int) -> int:
    """Rows to request from the store: one lookahead row past the page."""
    return limit + 1 if limit > 0 else 0
