import pytest
from fastapi.testclient import TestClient

from invoice_engine.app.db.base import Base
from invoice_engine.app.db.session import engine
from invoice_engine.app.main import app
from invoice_engine.app.services.settings_store import SettingsStore


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.settings_store = SettingsStore()
    yield
    Base.metadata.drop_all(bind=engine)


def invoice_payload(item_count=1):
    return {
        "billNumber": "CLG-555555-042",
        "issueDate": "2024-03-05T00:00:00Z",
        "lineItems": [
            {"id": str(index), "description": f"Item {index}", "unitRate": "10"} for index in range(item_count)
        ],
    }


def test_view_model_uses_stored_settings():
    client = TestClient(app)
    client.put("/template-settings", json={"businessName": "Acme", "includeAmountInWords": True})
    resp = client.post("/render/view-model", json={"invoice": invoice_payload(10)})
    assert resp.status_code == 200
    data = resp.json()
    assert data["settings"]["businessName"] == "Acme"
    assert data["financials"]["amount_due"] == "90.00"
    assert data["sections"]["amount_in_words"]["text"] == "Ninety USD only"
    assert data["sections"]["issue_date"] == "03/05/2024"


def test_view_model_with_settings_override():
    client = TestClient(app)
    resp = client.post(
        "/render/view-model",
        json={"invoice": invoice_payload(), "settings": {"headerStyle": "box", "dateFormat": "yyyy-MM-dd"}},
    )
    data = resp.json()
    assert data["styles"]["header"]["border"]["left"] == "2px solid #2e7d32"
    assert data["sections"]["issue_date"] == "2024-03-05"


def test_render_stored_draft():
    client = TestClient(app)
    assert client.get("/render/drafts/CLG-555555-042").status_code == 404
    client.post("/drafts", json=invoice_payload(2))
    resp = client.get("/render/drafts/CLG-555555-042")
    assert resp.status_code == 200
    assert resp.json()["financials"]["subtotal"] == "20.00"


def test_export_plan():
    client = TestClient(app)
    client.put("/template-settings", json={"businessName": "Car Line Garage"})
    resp = client.post(
        "/render/export-plan",
        json={"invoice": invoice_payload(11), "elementHandle": "invoice-preview"},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "filename": "Car_Line_Garage_Invoice_CLG-555555-042.pdf",
        "page_size": "a4",
        "line_item_count": 11,
    }


def test_export_plan_without_target_is_404():
    client = TestClient(app)
    resp = client.post("/render/export-plan", json={"invoice": invoice_payload()})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Element not found"
