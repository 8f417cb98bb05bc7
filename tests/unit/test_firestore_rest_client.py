"""Firestore REST client and repositories against httpx.MockTransport."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import httpx
import pytest

from app.application.dtos.product import ProductCreate
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase import SERVER_TIMESTAMP, FirestoreRESTClient
from app.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_document,
    field_path,
    query_field_path,
)
from app.infrastructure.firebase.repositories import (
    FirestorePettyCashExpenseRepository,
    FirestoreProductRepository,
    FirestoreServiceAssignmentRepository,
)

PREFIX = "projects/demo/databases/(default)/documents"


class Recorder:
    """Mock transport handler that records requests and replies from a routing function."""

    def __init__(self, reply):
        self.requests: list[httpx.Request] = []
        self._reply = reply

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.content]


def _client(handler) -> FirestoreRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    credentials = SimpleNamespace(valid=True, token="test-token")
    return FirestoreRESTClient("demo", credentials, http_client=http)


def test_encode_decode_values() -> None:
    when = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    encoded = encode_document(
        {"n": 3, "f": 1.5, "d": Decimal("2.25"), "t": when, "b": True, "l": [1, "x"], "m": {"k": None}}
    )["fields"]
    assert encoded["n"] == {"integerValue": "3"}
    assert encoded["d"] == {"doubleValue": 2.25}
    assert encoded["t"] == {"timestampValue": "2024-01-02T03:04:05.678000Z"}
    decoded = decode_fields(encoded)
    assert decoded["t"] == when
    assert decoded["l"] == [1, "x"]
    assert decoded["m"] == {"k": None}


def test_decode_truncates_nanoseconds() -> None:
    decoded = decode_fields({"t": {"timestampValue": "2024-05-01T00:00:00.123456789Z"}})
    assert decoded["t"].microsecond == 123456


def test_field_path_quotes_non_identifiers() -> None:
    assert field_path("status") == "status"
    assert field_path("Request No.") == "`Request No.`"


def test_query_field_path_keeps_nested_paths() -> None:
    assert query_field_path("cms.player_id") == "cms.player_id"
    assert query_field_path("__name__") == "__name__"
    assert query_field_path("Request No.") == "`Request No.`"


async def test_query_quotes_filter_and_order_fields() -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json=[{}]))
    client = _client(recorder)

    query = (
        client.collection("request")
        .where("Request No.", "==", 1001)
        .where("company_id", "==", "c1")
        .order_by("O.R No.", "desc")
    )
    assert await query.get() == []

    structured = recorder.bodies()[0]["structuredQuery"]
    filters = structured["where"]["compositeFilter"]["filters"]
    assert filters[0]["fieldFilter"]["field"] == {"fieldPath": "`Request No.`"}
    assert filters[1]["fieldFilter"]["field"] == {"fieldPath": "company_id"}
    assert structured["orderBy"] == [
        {"field": {"fieldPath": "`O.R No.`"}, "direction": "DESCENDING"}
    ]


async def test_cancel_is_a_single_commit_with_server_timestamp() -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json={"writeResults": [{}]}))
    repo = FirestoreServiceAssignmentRepository(_client(recorder))

    await repo.mark_cancelled("sa1", "user-1")

    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url.path.endswith(":commit")
    assert request.headers["Authorization"] == "Bearer test-token"
    (write,) = recorder.bodies()[0]["writes"]
    assert write["update"]["name"] == f"{PREFIX}/service_assignments/sa1"
    assert write["update"]["fields"] == {
        "status": {"stringValue": "Cancelled"},
        "cancelled_by_uid": {"stringValue": "user-1"},
    }
    assert write["updateMask"] == {"fieldPaths": ["status", "cancelled_by_uid"]}
    assert write["updateTransforms"] == [
        {"fieldPath": "cancellation_date", "setToServerValue": "REQUEST_TIME"}
    ]
    assert write["currentDocument"] == {"exists": True}


async def test_patch_of_missing_document_raises_not_found() -> None:
    recorder = Recorder(lambda request: httpx.Response(404, json={"error": {"code": 404}}))
    repo = FirestoreServiceAssignmentRepository(_client(recorder))

    with pytest.raises(ResourceNotFoundException):
        await repo.update("missing", {"status": "Ongoing"})


async def test_get_missing_document_returns_none() -> None:
    recorder = Recorder(lambda request: httpx.Response(404))
    repo = FirestoreProductRepository(_client(recorder))

    assert await repo.get_by_id("nope") is None
    assert recorder.requests[0].method == "GET"


async def test_created_product_that_cannot_be_read_back_raises_not_found() -> None:
    def reply(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(404)
        return httpx.Response(200, json={"writeResults": [{}]})

    recorder = Recorder(reply)
    repo = FirestoreProductRepository(_client(recorder))

    with pytest.raises(ResourceNotFoundException) as exc:
        await repo.create(ProductCreate(name="EDSA LED", company_id="c1", price=100000))

    assert exc.value.details["resource_type"] == "Product"
    assert [r.method for r in recorder.requests] == ["POST", "GET"]


async def test_query_page_reports_cursor_and_has_more() -> None:
    def reply(request: httpx.Request) -> httpx.Response:
        docs = [
            {
                "document": {
                    "name": f"{PREFIX}/service_assignments/sa{i}",
                    "fields": {
                        "saNumber": {"stringValue": f"SA-00000{i}"},
                        "company_id": {"stringValue": "c1"},
                        "status": {"stringValue": "Pending"},
                    },
                }
            }
            for i in (1, 2)
        ]
        return httpx.Response(200, json=docs)

    recorder = Recorder(reply)
    repo = FirestoreServiceAssignmentRepository(_client(recorder))

    page = await repo.page_by_company("c1", page_size=2)

    assert [a.sa_number for a in page.items] == ["SA-000001", "SA-000002"]
    assert page.last_doc_id == "sa2"
    assert page.has_more is True
    query = recorder.bodies()[0]["structuredQuery"]
    assert query["from"] == [{"collectionId": "service_assignments"}]
    assert query["limit"] == 2
    assert query["where"]["fieldFilter"]["field"] == {"fieldPath": "company_id"}


async def test_batch_commits_all_writes_at_once() -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json={"writeResults": [{}, {}]}))
    client = _client(recorder)
    batch = client.batch()
    coll = client.collection("collectibles")
    batch.create(coll.document("a"), {"status": "pending"})
    batch.update(client.collection("quotations").document("q"), {"status": "accepted", "updated": SERVER_TIMESTAMP})

    await batch.commit()

    assert len(recorder.requests) == 1
    writes = recorder.bodies()[0]["writes"]
    assert writes[0]["currentDocument"] == {"exists": False}
    assert writes[1]["updateTransforms"][0]["fieldPath"] == "updated"


async def test_expense_and_cycle_total_increment_share_one_commit() -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json={"writeResults": [{}, {}]}))
    repo = FirestorePettyCashExpenseRepository(_client(recorder))

    expense_id = await repo.create(
        {"company_id": "c1", "cycle_id": "cy3", "item": "Fuel", "amount": 200.0}
    )

    assert len(recorder.requests) == 1
    expense_write, cycle_write = recorder.bodies()[0]["writes"]
    assert expense_write["update"]["name"] == f"{PREFIX}/petty_cash_expenses/{expense_id}"
    assert expense_write["currentDocument"] == {"exists": False}
    assert cycle_write["update"]["name"] == f"{PREFIX}/petty_cash_cycles/cy3"
    assert cycle_write["update"]["fields"] == {}
    assert cycle_write["updateMask"] == {"fieldPaths": []}
    assert cycle_write["updateTransforms"] == [
        {"fieldPath": "total", "increment": {"doubleValue": 200.0}},
        {"fieldPath": "updated", "setToServerValue": "REQUEST_TIME"},
    ]
    assert cycle_write["currentDocument"] == {"exists": True}


async def test_expense_for_missing_cycle_raises_not_found() -> None:
    recorder = Recorder(lambda request: httpx.Response(404, json={"error": {"code": 404}}))
    repo = FirestorePettyCashExpenseRepository(_client(recorder))

    with pytest.raises(ResourceNotFoundException):
        await repo.create({"company_id": "c1", "cycle_id": "gone", "amount": 5.0})
