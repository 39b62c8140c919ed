"""
Unit tests for HttpBillStore against a mocked transport.
"""
import json

import httpx
import pytest

from billed.bills.schemas import BillPayload, ReceiptFile
from billed.store.exceptions import RemoteStoreError
from billed.store.http import HttpBillStore


def _store(handler, token="test-token") -> HttpBillStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://store.test")
    return HttpBillStore(token=token, client=client)


@pytest.mark.unit
async def test_list_returns_raw_bills(bills_fixture):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=bills_fixture)

    async with _store(handler) as store:
        bills = await store.list()

    assert [bill.id for bill in bills] == [doc["id"] for doc in bills_fixture]
    assert bills[0].file_url == bills_fixture[0]["fileUrl"]
    assert requests[0].method == "GET"
    assert requests[0].url.path == "/bills"
    assert requests[0].headers["Authorization"] == "Bearer test-token"


@pytest.mark.unit
async def test_no_authorization_header_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        return httpx.Response(200, json=[])

    store = _store(handler, token="")
    await store.list()
    await store.aclose()

    assert "Authorization" not in seen["headers"]


@pytest.mark.parametrize("status_code", [404, 500])
@pytest.mark.unit
async def test_error_status_becomes_store_error(status_code):
    store = _store(lambda request: httpx.Response(status_code))

    with pytest.raises(RemoteStoreError) as exc_info:
        await store.list()

    assert exc_info.value.message == f"Erreur {status_code}"
    assert exc_info.value.status_code == status_code


@pytest.mark.parametrize(
    "answer",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"bills": []}),
        httpx.Response(200, json=42),
    ],
)
@pytest.mark.unit
async def test_unreadable_list_answer_becomes_store_error(answer):
    with pytest.raises(RemoteStoreError) as exc_info:
        await _store(lambda request: answer).list()

    assert exc_info.value.message == "Réponse invalide du serveur"
    assert exc_info.value.status_code == 200


@pytest.mark.unit
async def test_unreadable_create_answer_becomes_store_error():
    store = _store(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(RemoteStoreError) as exc_info:
        await store.create(ReceiptFile(name="hello.png", content=b"x", content_type="image/png"))

    assert exc_info.value.message == "Réponse invalide du serveur"


@pytest.mark.unit
async def test_create_answer_without_key_becomes_store_error():
    store = _store(lambda request: httpx.Response(201, json={"url": "x"}))

    with pytest.raises(RemoteStoreError):
        await store.create(ReceiptFile(name="hello.png", content=b"x", content_type="image/png"))


@pytest.mark.unit
async def test_unreadable_update_answer_becomes_store_error():
    store = _store(lambda request: httpx.Response(200, text="not json"))

    with pytest.raises(RemoteStoreError) as exc_info:
        await store.update(BillPayload(id="1234", name="Taxi"))

    assert exc_info.value.message == "Réponse invalide du serveur"


@pytest.mark.unit
async def test_transport_failure_becomes_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteStoreError) as exc_info:
        await _store(handler).list()

    assert "connection refused" in exc_info.value.message
    assert exc_info.value.status_code is None


@pytest.mark.unit
async def test_create_uploads_multipart_receipt():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.read()
        return httpx.Response(200, json={"fileUrl": "https://cdn.test/hello.png", "key": "1234"})

    staged = await _store(handler).create(
        ReceiptFile(name="hello.png", content=b"PNGDATA", content_type="image/png"),
        email="a@a",
    )

    assert staged.key == "1234"
    assert staged.file_url == "https://cdn.test/hello.png"
    assert seen["method"] == "POST"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'filename="hello.png"' in seen["body"]
    assert b"PNGDATA" in seen["body"]
    assert b"a@a" in seen["body"]


@pytest.mark.unit
async def test_update_patches_bill_under_its_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        body = json.loads(request.read())
        seen["body"] = body
        return httpx.Response(200, json={"id": "1234", **body})

    payload = BillPayload(id="1234", email="a@a", name="Taxi", amount=42, fileUrl="u", fileName="r.png")
    stored = await _store(handler).update(payload)

    assert seen["method"] == "PATCH"
    assert seen["path"] == "/bills/1234"
    assert "id" not in seen["body"]
    assert seen["body"]["status"] == "pending"
    assert seen["body"]["fileName"] == "r.png"
    assert stored.id == "1234"
    assert stored.name == "Taxi"


@pytest.mark.unit
async def test_store_built_from_settings(test_settings):
    store = HttpBillStore(
        base_url=test_settings.API_URL,
        token=test_settings.API_TOKEN,
        timeout=test_settings.API_TIMEOUT,
    )

    assert store.client.base_url.host == "store.test"
    assert store.client.timeout.read == 5
    assert store._headers()["Authorization"] == "Bearer test-token"
    await store.aclose()
