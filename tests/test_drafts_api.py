import pytest
from fastapi.testclient import TestClient

from invoice_engine.app.db.base import Base
from invoice_engine.app.db.session import engine
from invoice_engine.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def draft_payload(bill_number="CLG-555555-042"):
    return {
        "billNumber": bill_number,
        "issueDate": "2024-03-05T00:00:00Z",
        "customer": {"id": "1", "name": "Ahmed Khan", "contact": "0303 1234567"},
        "vehicleInfo": {"vehicleNumber": "LEA-1234", "vehicleType": "Sedan"},
        "lineItems": [
            {"id": "1", "description": "Oil Change", "unitRate": "15.00"},
            {"id": "2", "description": "Filter", "unitRate": "8.00", "quantity": "2"},
        ],
        "total": "0",
    }


def test_new_draft_has_fresh_bill_number_and_is_not_saved():
    client = TestClient(app)
    resp = client.post("/drafts/new")
    assert resp.status_code == 200
    data = resp.json()
    assert data["billNumber"].startswith("CLG-")
    assert data["isDraft"] is True
    assert client.get("/drafts").json() == {}


def test_save_list_and_get_draft():
    client = TestClient(app)
    resp = client.post("/drafts", json=draft_payload())
    assert resp.status_code == 200
    saved = resp.json()
    assert saved["isDraft"] is True
    assert saved["total"] == "31.00"

    drafts = client.get("/drafts").json()
    assert list(drafts) == ["CLG-555555-042"]

    fetched = client.get("/drafts/CLG-555555-042").json()
    assert fetched == saved


def test_get_unknown_draft_is_404():
    client = TestClient(app)
    assert client.get("/drafts/missing").status_code == 404


def test_delete_draft_is_idempotent():
    client = TestClient(app)
    client.post("/drafts", json=draft_payload())
    assert client.delete("/drafts/CLG-555555-042").status_code == 204
    assert client.delete("/drafts/CLG-555555-042").status_code == 204
    assert client.get("/drafts").json() == {}


def test_line_item_endpoints():
    client = TestClient(app)
    client.post("/drafts", json=draft_payload())

    added = client.post(
        "/drafts/CLG-555555-042/items",
        json={"id": "3", "description": "Wash", "unitRate": "5"},
    )
    assert added.status_code == 201
    assert added.json()["invoice"]["total"] == "36.00"
    assert added.json()["item"]["amount"] == "5.00"

    updated = client.patch("/drafts/CLG-555555-042/items/3", json={"quantity": "3"})
    assert updated.status_code == 200
    assert updated.json()["invoice"]["total"] == "46.00"
    assert [item["id"] for item in updated.json()["invoice"]["lineItems"]] == ["1", "2", "3"]

    removed = client.delete("/drafts/CLG-555555-042/items/1")
    assert removed.status_code == 200
    assert removed.json()["invoice"]["total"] == "31.00"

    assert client.get("/drafts/CLG-555555-042").json()["total"] == "31.00"


def test_line_item_errors():
    client = TestClient(app)
    assert client.post("/drafts/missing/items", json={"description": "x"}).status_code == 404
    client.post("/drafts", json=draft_payload())
    assert client.patch("/drafts/CLG-555555-042/items/nope", json={"quantity": "2"}).status_code == 404
    duplicate = client.post("/drafts/CLG-555555-042/items", json={"id": "1", "description": "again"})
    assert duplicate.status_code == 409
    negative = client.post("/drafts/CLG-555555-042/items", json={"description": "bad", "unitRate": "-1"})
    assert negative.status_code == 422


def test_out_of_range_rate_is_rejected():
    client = TestClient(app)
    payload = draft_payload()
    payload["lineItems"][0]["unitRate"] = "1e30"
    assert client.post("/drafts", json=payload).status_code == 422
    resp = client.post(f"/drafts/{payload['billNumber']}/items", json={"unitRate": "1e30"})
    assert resp.status_code == 422
