from keypager.backends.memory import execute, paginate, sort_rows
from keypager.backends.mongo import KeysetQuery, render_filter, render_sort
from keypager.backends.sql import QueryArgs, render_sql

__all__ = [
    "execute",
    "paginate",
    "sort_rows",
    "KeysetQuery",
    "render_filter",
    "render_sort",
    "QueryArgs",
    "render_sql",
]
