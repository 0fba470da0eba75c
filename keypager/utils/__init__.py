from keypager.utils.exceptions import (
    KeypagerError,
    InvalidOrderError,
    InvalidPageRequestError,
    CursorDecodeError,
)
from keypager.utils.pagination import LimitOffset
from keypager.utils.settings import PaginationSettings, SettingsResolver
from keypager.utils.types import (
    Row,
    FilterSpec,
    SortSpec,
    and_filters,
    get_field,
)

__all__ = [
    "KeypagerError",
    "InvalidOrderError",
    "InvalidPageRequestError",
    "CursorDecodeError",
    "LimitOffset",
    "PaginationSettings",
    "SettingsResolver",
    "Row",
    "FilterSpec",
    "SortSpec",
    "and_filters",
    "get_field",
]
