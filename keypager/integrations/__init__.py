from keypager.integrations.fastapi import (
    Connection,
    Edge,
    KeysetParams,
    PageInfo,
    register_exception_handlers,
)

__all__ = [
    "Connection",
    "Edge",
    "KeysetParams",
    "PageInfo",
    "register_exception_handlers",
]
