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


def test_list_presets_filtered_by_kind():
    client = TestClient(app)
    everything = client.get("/presets").json()
    headers = client.get("/presets", params={"kind": "header"}).json()
    assert len(headers) < len(everything)
    assert all(preset["kind"] == "header" for preset in headers)


def test_get_preset_exposes_only_defined_fields():
    client = TestClient(app)
    resp = client.get("/presets/modern")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Modern"
    assert data["defaultSettings"]["cornerStyle"] == "rounded"
    assert "businessName" not in data["defaultSettings"]


def test_unknown_preset_is_404():
    client = TestClient(app)
    assert client.get("/presets/nope").status_code == 404
    assert client.post("/presets/nope/apply").status_code == 404


def test_apply_preset_keeps_unrelated_fields():
    client = TestClient(app)
    client.put("/template-settings", json={"businessName": "Acme", "notes": "Cash only"})
    resp = client.post("/presets/elegant/apply")
    assert resp.status_code == 200
    data = resp.json()
    assert data["templateId"] == "elegant"
    assert data["borderStyle"] == "full"
    assert data["businessName"] == "Acme"
    assert data["notes"] == "Cash only"
    assert client.get("/template-settings").json()["templateId"] == "elegant"


def test_apply_preset_preview_does_not_persist():
    client = TestClient(app)
    resp = client.post("/presets/creative/apply", params={"persist": "false"})
    assert resp.status_code == 200
    assert resp.json()["templateId"] == "creative"
    assert client.get("/template-settings").json()["templateId"] == "classic"
