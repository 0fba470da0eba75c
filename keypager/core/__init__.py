from keypager.core.cursor import Cursor, CursorCodec, decode_cursor, encode_cursor
from keypager.core.direction import Resolution, fetch_limit, resolve
from keypager.core.order import Direction, Nulls, OrderKey, OrderSpec, normalize, reverse_order
from keypager.core.page import Page, finish
from keypager.core.plan import PageRequest, Plan, compile_plan, logical_order
from keypager.core.policy import apply_page_size_policy
from keypager.core.predicate import And, Comparison, Operator, Predicate, build_predicate

__all__ = [
    "Cursor",
    "CursorCodec",
    "decode_cursor",
    "encode_cursor",
    "Resolution",
    "fetch_limit",
    "resolve",
    "Direction",
    "Nulls",
    "OrderKey",
    "OrderSpec",
    "normalize",
    "reverse_order",
    "Page",
    "finish",
    "PageRequest",
    "Plan",
    "compile_plan",
    "logical_order",
    "apply_page_size_policy",
    "And",
    "Comparison",
    "Operator",
    "Predicate",
    "build_predicate",
]
