import pytest
from fastapi.testclient import TestClient

from masterlabel.app.api.dependencies import get_design_store
from masterlabel.app.config import Settings, get_settings
from masterlabel.app.main import app
from masterlabel.app.services.serialization import design_to_payload
from masterlabel.app.storage.store import InMemoryDesignStore
from masterlabel.tests.fixtures.label_data import (
    sample_batch,
    sample_importer,
    sample_product,
    simple_design,
)


@pytest.fixture
def store():
    return InMemoryDesignStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_design_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: Settings(
        public_base_url="https://dpp.example.com",
        max_label_count=5,
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _label_request(**overrides):
    body = {
        "design": design_to_payload(simple_design()),
        "product": sample_product().model_dump(mode="json", by_alias=True),
        "batch": sample_batch().model_dump(mode="json", by_alias=True),
        "importer": sample_importer().model_dump(mode="json", by_alias=True),
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------------
# Templates and catalogues
# ---------------------------------------------------------------------------


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_templates(client):
    response = client.get("/templates")

    assert response.status_code == 200
    items = response.json()
    assert len(items) == 6
    assert items[0]["id"] == "builtin-electronics"
    assert items[0]["isDefault"] is True
    assert "design" not in items[0]


def test_get_template(client):
    response = client.get("/templates/builtin-toys")

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "toys"
    assert body["design"]["_version"] == 2


def test_get_unknown_template(client):
    assert client.get("/templates/builtin-spaceships").status_code == 404


def test_default_design_lookup(client):
    matched = client.get("/templates/defaults/household").json()
    blank = client.get("/templates/defaults/spaceships").json()

    assert matched["matched"] is True
    assert matched["templateId"] == "builtin-household"
    assert blank["matched"] is False
    assert blank["design"]["elements"] == []


def test_catalogues(client):
    pictograms = client.get("/pictograms", params={"category": "handling"}).json()
    fields = client.get("/fields").json()

    assert {p["id"] for p in pictograms} == {
        "iso780-this-way-up",
        "iso780-fragile",
        "iso780-keep-dry",
    }
    assert "viewBox" in pictograms[0]
    assert any(f["key"] == "productName" and f["labelKey"] == "ml.field.productName" for f in fields)


# ---------------------------------------------------------------------------
# Tenant designs
# ---------------------------------------------------------------------------


def test_tenant_design_defaults_to_template(client):
    response = client.get("/designs/tenant-a/electronics")

    assert response.status_code == 200
    assert response.json()["source"] == "template"
    assert "etag" not in response.headers


def test_save_and_reload_tenant_design(client):
    payload = design_to_payload(simple_design())

    saved = client.put("/designs/tenant-a/electronics", json=payload)
    loaded = client.get("/designs/tenant-a/electronics")

    assert saved.status_code == 200
    revision = saved.json()["revision"]
    assert saved.headers["etag"] == f'"{revision}"'
    assert loaded.json()["source"] == "stored"
    assert loaded.json()["design"] == payload
    assert loaded.headers["etag"] == f'"{revision}"'


def test_put_with_stale_if_match_conflicts(client):
    payload = design_to_payload(simple_design())
    first = client.put("/designs/tenant-a/toys", json=payload)
    etag = first.headers["etag"]

    payload["padding"] = 10
    second = client.put("/designs/tenant-a/toys", json=payload, headers={"If-Match": etag})
    payload["padding"] = 12
    stale = client.put("/designs/tenant-a/toys", json=payload, headers={"If-Match": etag})

    assert second.status_code == 200
    assert stale.status_code == 409


def test_put_with_wildcard_if_match_overwrites(client):
    payload = design_to_payload(simple_design())
    client.put("/designs/tenant-a/toys", json=payload)

    payload["padding"] = 10
    response = client.put("/designs/tenant-a/toys", json=payload, headers={"If-Match": "*"})

    assert response.status_code == 200
    assert client.get("/designs/tenant-a/toys").json()["design"]["padding"] == 10


def test_put_invalid_design(client):
    payload = design_to_payload(simple_design())
    payload["elements"][0]["sectionId"] = "nowhere"

    assert client.put("/designs/tenant-a/toys", json=payload).status_code == 422


def test_put_upgrades_legacy_design(client):
    payload = design_to_payload(simple_design())
    payload.pop("_version")
    for element in payload["elements"]:
        element.pop("sectionId")

    response = client.put("/designs/tenant-a/toys", json=payload)
    stored = client.get("/designs/tenant-a/toys").json()["design"]

    assert response.status_code == 200
    assert stored["_version"] == 2
    assert {e["sectionId"] for e in stored["elements"]} == {"custom"}


def test_unreadable_stored_design(client, store):
    store.save("tenant-a", "toys", b"corrupt")

    assert client.get("/designs/tenant-a/toys").status_code == 500


def test_delete_tenant_design(client):
    client.put("/designs/tenant-a/toys", json=design_to_payload(simple_design()))

    assert client.delete("/designs/tenant-a/toys").status_code == 204
    assert client.delete("/designs/tenant-a/toys").status_code == 404
    assert client.get("/designs/tenant-a/toys").json()["source"] == "template"


def test_validate_design(client):
    response = client.post("/designs/validate", json=design_to_payload(simple_design()))

    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is True
    assert [i["field"] for i in body["issues"]] == ["manufacturer"]


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def test_resolve_label(client):
    response = client.post("/labels/resolve", json=_label_request())

    assert response.status_code == 200
    labels = response.json()
    assert len(labels) == 1
    assert labels[0]["dppUrl"] == "https://dpp.example.com/p/4012345678901/SN-0001"
    first = labels[0]["sections"][0]["elements"][0]
    assert first["text"] == "Smart Kettle 2000"


def test_resolve_without_batch_has_no_dpp_url(client):
    response = client.post("/labels/resolve", json=_label_request(batch=None))

    assert response.json()[0]["dppUrl"] == ""


def test_resolve_series(client):
    body = _label_request(series={"labelCount": 3, "format": "x-slash-y"}, locale="de")

    labels = client.post("/labels/resolve", json=body).json()

    assert [label["counter"]["current"] for label in labels] == [1, 2, 3]
    assert all(label["locale"] == "de" for label in labels)


def test_resolve_series_over_configured_limit(client):
    body = _label_request(series={"labelCount": 6})

    assert client.post("/labels/resolve", json=body).status_code == 422


def test_preview_label(client):
    response = client.post("/labels/preview", json=_label_request())

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Smart Kettle 2000" in response.text


def test_compliance_report(client):
    response = client.post("/labels/compliance", json=_label_request(variant="b2b"))

    assert response.status_code == 200
    body = response.json()
    assert 0 <= body["score"] <= 100
    assert body["checks"][0]["id"] == "ce-marking"
    assert body["checks"][0]["fixAction"] == {"type": "add-badge", "badgeId": "ce", "symbol": "CE"}
    assert {i["field"] for i in body["recordIssues"]} == {"ceMark"}
