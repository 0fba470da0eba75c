import pytest

from keypager import Cursor, Direction, InvalidOrderError, Nulls, OrderKey, PageRequest, compile_plan
from keypager.backends.sql import render_order, render_sql


class TestRenderSql:
    def test_first_page(self):
        args = render_sql(compile_plan(PageRequest(first=2, order_by=["id"])))
        assert args.where is None
        assert args.order == "id ASC"
        assert args.limit == "LIMIT %s"
        assert args.params == (3,)

    def test_backward_page_binds_cursor(self):
        plan = compile_plan(PageRequest(last=2, before=Cursor(4)))
        args = render_sql(plan)
        assert args.where == "id < %s"
        assert args.order == "id DESC"
        assert args.params == (4, 3)

    def test_both_cursors(self):
        plan = compile_plan(PageRequest(first=5, after=Cursor(1), before=Cursor(9)))
        args = render_sql(plan, placeholder="?")
        assert args.where == "id > ? AND id < ?"
        assert args.params == (1, 9, 6)

    def test_cursor_value_never_interpolated(self):
        hostile = "1; DROP TABLE users; --"
        args = render_sql(compile_plan(PageRequest(first=1, after=Cursor(hostile))))
        assert hostile not in args.append_all("SELECT * FROM users")
        assert hostile in args.params

    def test_append_all(self):
        plan = compile_plan(PageRequest(first=10, after=Cursor(7), order_by=["-created_at", "id"]))
        args = render_sql(plan)
        assert args.append_all("SELECT * FROM events") == (
            "SELECT * FROM events WHERE created_at < %s "
            "ORDER BY created_at DESC, id ASC LIMIT %s"
        )

    def test_unbounded_has_no_limit(self):
        args = render_sql(compile_plan(PageRequest()))
        assert args.limit is None
        assert args.append_limit("SELECT 1") == "SELECT 1"

    def test_nulls_placement(self):
        order = (
            OrderKey("rank", Direction.DESCENDING, Nulls.LAST),
            OrderKey("id"),
        )
        assert render_order(order) == "rank DESC NULLS LAST, id ASC"

    def test_qualified_column(self):
        assert render_order((OrderKey("users.id"),)) == "users.id ASC"

    def test_unsafe_identifier_rejected(self):
        plan = compile_plan(PageRequest(first=1, order_by=["id; DROP TABLE x"]))
        with pytest.raises(InvalidOrderError, match="Invalid column name"):
            render_sql(plan)
