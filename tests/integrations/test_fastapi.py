from __future__ import annotations

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

import base64

from keypager import Cursor, Page, PaginationSettings, encode_cursor
from keypager.backends.memory import paginate
from keypager.integrations.fastapi import (
    Connection,
    KeysetParams,
    PageInfo,
    register_exception_handlers,
)

ITEMS = [{"id": i, "name": f"item_{i}"} for i in range(1, 8)]


class SmallPages(KeysetParams):
    class Settings:
        default_page_size = 3
        max_page_size = 4


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/items")
    async def list_items(params: SmallPages = Depends()):
        page = paginate(ITEMS, params.to_request(order_by=["id"]))
        return Connection.from_page(page, key="id").model_dump()

    return app


def _ids(body):
    return [edge["node"]["id"] for edge in body["edges"]]


def test_connection_from_page():
    page = Page(rows=({"id": 1}, {"id": 2}), has_next_page=True, has_previous_page=False)
    conn = Connection.from_page(page, key="id")
    assert [edge.cursor for edge in conn.edges] == [encode_cursor(1), encode_cursor(2)]
    assert conn.page_info == PageInfo(
        has_next_page=True,
        has_previous_page=False,
        start_cursor=encode_cursor(1),
        end_cursor=encode_cursor(2),
    )


def test_connection_from_empty_page():
    page = Page(rows=(), has_next_page=False, has_previous_page=False)
    conn = Connection.from_page(page, key="id")
    assert conn.edges == []
    assert conn.page_info.start_cursor is None
    assert conn.page_info.end_cursor is None


def test_default_page_size():
    client = TestClient(_app())
    body = client.get("/items").json()
    assert _ids(body) == [1, 2, 3]
    assert body["page_info"]["has_next_page"] is True
    assert body["page_info"]["has_previous_page"] is False


def test_follow_end_cursor():
    client = TestClient(_app())
    first = client.get("/items", params={"first": 2}).json()
    second = client.get(
        "/items", params={"first": 2, "after": first["page_info"]["end_cursor"]}
    ).json()
    assert _ids(second) == [3, 4]
    assert second["page_info"]["has_previous_page"] is True


def test_last_before():
    client = TestClient(_app())
    body = client.get("/items", params={"last": 2, "before": encode_cursor(5)}).json()
    assert _ids(body) == [3, 4]
    assert body["page_info"]["has_previous_page"] is True


def test_page_size_clamped():
    client = TestClient(_app())
    body = client.get("/items", params={"first": 50}).json()
    assert len(body["edges"]) == 4


def test_first_and_last_rejected():
    client = TestClient(_app())
    response = client.get("/items", params={"first": 1, "last": 1})
    assert response.status_code == 400
    assert "cannot both be set" in response.json()["detail"]


def test_malformed_cursor_rejected():
    client = TestClient(_app())
    response = client.get("/items", params={"after": "not-a-cursor"})
    assert response.status_code == 400
    assert "Malformed cursor" in response.json()["detail"]


def test_zero_count_rejected_by_validation():
    client = TestClient(_app())
    response = client.get("/items", params={"first": 0})
    assert response.status_code == 422


def test_params_decode_cursors():
    params = KeysetParams(first=2, last=None, after=encode_cursor(3), before=None)
    assert params.after == Cursor(3)
    assert params.to_request().first == 2


def test_invalid_decimal_cursor_rejected():
    raw = b'{"v": {"$numberDecimal": "abc"}}'
    token = base64.urlsafe_b64encode(raw).decode().rstrip("=")
    client = TestClient(_app())
    response = client.get("/items", params={"after": token})
    assert response.status_code == 400
    assert "Malformed cursor" in response.json()["detail"]


def test_settings_resolved_from_inner_class():
    params = SmallPages(first=None, last=None, after=None, before=None)
    assert params.settings == PaginationSettings(default_page_size=3, max_page_size=4)
    defaults = KeysetParams(first=None, last=None, after=None, before=None)
    assert defaults.settings == PaginationSettings()
