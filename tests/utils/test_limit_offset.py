import pytest

from keypager import InvalidPageRequestError, LimitOffset
from keypager.utils.types import and_filters, get_field


class TestLimitOffset:
    def test_sql_binds_values(self):
        assert LimitOffset(limit=10, offset=20).sql() == ("LIMIT %s OFFSET %s", [10, 20])

    def test_to_mongo(self):
        assert LimitOffset(limit=10, offset=20).to_mongo() == {"skip": 20, "limit": 10}

    def test_to_mongo_omits_zero_values(self):
        assert LimitOffset(limit=0).to_mongo() == {}

    def test_negative_values_rejected(self):
        with pytest.raises(InvalidPageRequestError):
            LimitOffset(limit=-1)
        with pytest.raises(InvalidPageRequestError):
            LimitOffset(limit=1, offset=-1)


class TestHelpers:
    def test_and_filters_single(self):
        assert and_filters({"a": 1}, None, {}) == {"a": 1}

    def test_and_filters_never_overrides(self):
        assert and_filters({"id": {"$gt": 1}}, {"id": {"$lt": 5}}) == {
            "$and": [{"id": {"$gt": 1}}, {"id": {"$lt": 5}}]
        }

    def test_and_filters_empty(self):
        assert and_filters() == {}

    def test_get_field_missing_raises(self):
        with pytest.raises(KeyError):
            get_field({"a": 1}, "b")

    def test_get_field_default(self):
        assert get_field({"a": {"b": 2}}, "a.c", None) is None
        assert get_field({"a": {"b": 2}}, "a.b") == 2
