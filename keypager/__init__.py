from keypager.core import (
    Cursor,
    CursorCodec,
    decode_cursor,
    encode_cursor,
    Direction,
    Nulls,
    OrderKey,
    OrderSpec,
    normalize,
    resolve,
    build_predicate,
    Comparison,
    And,
    Operator,
    Predicate,
    PageRequest,
    Plan,
    compile_plan,
    Page,
    finish,
    apply_page_size_policy,
)
from keypager.lifecycle import (
    enable_tracing,
    disable_tracing,
    FetchEvent,
    add_listener,
)
from keypager.utils import (
    KeypagerError,
    InvalidOrderError,
    InvalidPageRequestError,
    CursorDecodeError,
    LimitOffset,
    PaginationSettings,
    SettingsResolver,
)

__all__ = [
    # Core
    "Cursor",
    "CursorCodec",
    "decode_cursor",
    "encode_cursor",
    "Direction",
    "Nulls",
    "OrderKey",
    "OrderSpec",
    "normalize",
    "resolve",
    "build_predicate",
    "Comparison",
    "And",
    "Operator",
    "Predicate",
    "PageRequest",
    "Plan",
    "compile_plan",
    "Page",
    "finish",
    "apply_page_size_policy",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "FetchEvent",
    "add_listener",
    # Utils
    "KeypagerError",
    "InvalidOrderError",
    "InvalidPageRequestError",
    "CursorDecodeError",
    "LimitOffset",
    "PaginationSettings",
    "SettingsResolver",
]
