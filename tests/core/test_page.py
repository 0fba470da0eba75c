import pytest

from keypager import Cursor, InvalidPageRequestError, Page, PageRequest, compile_plan, finish


class TestFinish:
    def test_lookahead_row_sets_has_next(self):
        page = finish([1, 2, 3, 4], 3, flipped=False)
        assert page.rows == (1, 2, 3)
        assert page.has_next_page is True
        assert page.has_previous_page is False

    def test_exact_page_has_no_next(self):
        page = finish([1, 2, 3], 3, flipped=False)
        assert page.rows == (1, 2, 3)
        assert page.has_next_page is False

    def test_prior_boundary_sets_has_previous(self):
        page = finish([3, 4], 2, flipped=False, has_prior_boundary=True)
        assert page.has_previous_page is True
        assert page.has_next_page is False

    def test_flipped_rows_reversed(self):
        page = finish([3, 2, 1], 2, flipped=True, has_prior_boundary=True)
        assert page.rows == (2, 3)
        assert page.has_previous_page is True
        assert page.has_next_page is True

    def test_flipped_without_more_rows(self):
        page = finish([2, 1], 2, flipped=True)
        assert page.rows == (1, 2)
        assert page.has_previous_page is False
        assert page.has_next_page is False

    def test_unbounded_returns_all(self):
        page = finish([5, 4, 3], 0, flipped=False, has_prior_boundary=True)
        assert page.rows == (5, 4, 3)
        assert page.has_next_page is False
        assert page.has_previous_page is False

    def test_empty_rows(self):
        page = finish([], 10, flipped=False)
        assert len(page) == 0
        assert page.start_row is None
        assert page.end_row is None

    def test_accepts_iterators(self):
        page = finish(iter([1, 2, 3]), 2, flipped=False)
        assert page.rows == (1, 2)

    def test_negative_limit_raises(self):
        with pytest.raises(InvalidPageRequestError):
            finish([1], -1, flipped=False)


class TestScenarios:
    def test_forward_round_trip(self, rows):
        plan = compile_plan(PageRequest(first=2, order_by=["id"]))
        fetched = rows[: plan.limit]
        page = plan.finish(fetched)
        assert [r["id"] for r in page.rows] == [1, 2]
        assert page.has_next_page is True
        assert page.has_previous_page is False

    def test_backward_round_trip(self):
        plan = compile_plan(PageRequest(last=2, before=Cursor(4), order_by=["id"]))
        page = plan.finish([3, 2, 1])
        assert page.rows == (2, 3)
        assert page.has_previous_page is True
        # the before cursor marks a row after this page
        assert page.has_next_page is True

    def test_direction_symmetry(self):
        n = 4
        plan = compile_plan(PageRequest(last=n, before=Cursor(100)))
        fetched = list(range(99, 99 - (n + 1), -1))
        page = plan.finish(fetched)
        assert len(page) == n
        assert list(page.rows) == sorted(page.rows)
        assert page.end_row == 99

    def test_page_is_immutable(self):
        page = Page(rows=(1,), has_next_page=False, has_previous_page=False)
        with pytest.raises(AttributeError):
            page.rows = (2,)
