from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Union

from keypager.utils.exceptions import InvalidOrderError
from keypager.utils.settings import DEFAULT_ID_FIELD


class Direction(str, Enum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"

    def reversed(self) -> Direction:
        if self is Direction.ASCENDING:
            return Direction.DESCENDING
        return Direction.ASCENDING


class Nulls(str, Enum):
    FIRST = "FIRST"
    LAST = "LAST"
    UNSPECIFIED = "UNSPECIFIED"

    def reversed(self) -> Nulls:
        if self is Nulls.FIRST:
            return Nulls.LAST
        if self is Nulls.LAST:
            return Nulls.FIRST
        return self


@dataclass(frozen=True)
class OrderKey:
    """A single sort key: field, direction and null placement."""

    field: str
    direction: Direction = Direction.ASCENDING
    nulls: Nulls = Nulls.UNSPECIFIED

    @property
    def ascending(self) -> bool:
        return self.direction is Direction.ASCENDING

    @classmethod
    def parse(cls, spec: str) -> OrderKey:
        """Parse a sort string. Prefix with '-' for descending.

        Example: OrderKey.parse("-created_at")
        """
        if spec.startswith("-"):
            return cls(spec[1:], Direction.DESCENDING)
        return cls(spec)

    def reversed(self) -> OrderKey:
        """Return the key that sorts in exactly the opposite order.

        An explicit null placement moves to the other end as well, so that
        reversing a fetched sequence restores the original order.
        """
        return replace(self, direction=self.direction.reversed(), nulls=self.nulls.reversed())


OrderSpec = tuple[OrderKey, ...]
OrderLike = Iterable[Union[OrderKey, str]]


def as_order_spec(keys: OrderLike | None) -> OrderSpec:
    """Coerce keys or '-field' strings into an OrderSpec tuple (no validation)."""
    if keys is None:
        return ()
    if isinstance(keys, (str, OrderKey)):
        keys = [keys]
    return tuple(OrderKey.parse(k) if isinstance(k, str) else k for k in keys)


def reverse_order(order: OrderSpec) -> OrderSpec:
    """Reverse every key of an ordering."""
    return tuple(key.reversed() for key in order)


def validate_key(key: object) -> OrderKey:
    """Check a single key, raising InvalidOrderError when malformed."""
    if not isinstance(key, OrderKey):
        raise InvalidOrderError(f"Expected OrderKey, got {type(key).__name__}")
    if not isinstance(key.field, str) or not key.field.strip():
        raise InvalidOrderError("Order key field cannot be empty")
    if not isinstance(key.direction, Direction):
        raise InvalidOrderError(
            f"Order key '{key.field}' has no valid direction: {key.direction!r}"
        )
    if not isinstance(key.nulls, Nulls):
        raise InvalidOrderError(
            f"Order key '{key.field}' has invalid null placement: {key.nulls!r}"
        )
    return key


def normalize(spec: OrderLike | None, id_field: str = DEFAULT_ID_FIELD) -> OrderSpec:
    """Validate an ordering, substituting the identifier key when it is empty.

    Args:
        spec: Sort keys (OrderKey instances or '-field' strings)
        id_field: Unique identifier used for the default ordering

    Returns:
        A non-empty OrderSpec

    Raises:
        InvalidOrderError: If a key is malformed
    """
    order = as_order_spec(spec)
    if not order:
        return (validate_key(OrderKey(id_field)),)
    return tuple(validate_key(key) for key in order)
