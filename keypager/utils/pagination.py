from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from keypager.utils.exceptions import InvalidPageRequestError


@dataclass(frozen=True)
class LimitOffset:
    """Offset-based window, for listings that do not need stable cursors."""

    limit: int
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise InvalidPageRequestError("limit must be >= 0")
        if self.offset < 0:
            raise InvalidPageRequestError("offset must be >= 0")

    def sql(self) -> tuple[str, list[int]]:
        """Return the ``LIMIT ... OFFSET ...`` fragment and its parameters."""
        return "LIMIT %s OFFSET %s", [self.limit, self.offset]

    def to_mongo(self) -> dict[str, Any]:
        """Return pymongo ``find`` keyword arguments (skip/limit)."""
        kwargs: dict[str, Any] = {}
        if self.offset:
            kwargs["skip"] = self.offset
        if self.limit:
            kwargs["limit"] = self.limit
        return kwargs
