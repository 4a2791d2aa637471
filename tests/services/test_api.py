# tests/services/test_api.py
from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from prodmedia.services.api.app import create_app
from prodmedia.services.api.deps import get_dispatcher
from prodmedia.services.ingest.factory import build_dispatcher


@pytest.fixture()
def api_client(records, storage, fetcher):
    """
    A TestClient whose `get_dispatcher` dependency is overridden to use the
    in-memory record store, storage and fetcher fixtures.
    """
    app = create_app()
    dispatcher = build_dispatcher(variant="store_as_is", records=records, storage=storage, fetcher=fetcher)
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def test_healthz(api_client):
    r = api_client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_product_created_trigger(api_client, records, fetcher):
    doc = {"sourceImages": {"main": "https://host/a.jpg", "gallery": ["https://host/404.jpg"]}}
    records.docs["p1"] = dict(doc)
    fetcher.responses["https://host/a.jpg"] = (b"jpeg", "image/jpeg")

    r = api_client.post("/api/triggers/product-created", json={"productId": "p1", "document": doc})

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "completed_with_errors"
    assert body["written"] is True
    assert [a["status"] for a in body["assets"]] == ["completed", "failed"]
    assert body["error_details"] == ["gallery_0: Image download failed: 404"]
    assert records.docs["p1"]["imageStatus"] == "completed_with_errors"


def test_product_created_skip(api_client, records):
    records.docs["p1"] = {"imageStatus": "completed", "sourceImages": {"main": "https://host/a.jpg"}}
    r = api_client.post("/api/triggers/product-created", json={"productId": "p1", "document": records.docs["p1"]})
    assert r.status_code == 200
    assert r.json()["skipped"] is True
    assert r.json()["status"] is None
    assert records.writes == []


def test_product_created_missing_record_is_404(api_client, fetcher):
    fetcher.responses["https://host/a.jpg"] = (b"jpeg", "image/jpeg")
    r = api_client.post(
        "/api/triggers/product-created",
        json={"productId": "gone", "document": {"sourceImages": {"main": "https://host/a.jpg"}}},
    )
    assert r.status_code == 404


def test_reprocess_endpoint(api_client, records, fetcher):
    records.docs["p2"] = {"sourceImages": {"main": "https://host/a.jpg"}, "imageStatus": "pending"}
    fetcher.responses["https://host/a.jpg"] = (b"jpeg", "image/jpeg")

    r = api_client.post("/api/products/p2/process")
    assert r.status_code == 200
    assert r.json()["status"] == "completed"

    assert api_client.post("/api/products/nope/process").status_code == 404


def test_normalize_endpoint(api_client):
    r = api_client.post("/api/media/normalize", json={"url": "https://drive.google.com/file/d/F1/view"})
    assert r.status_code == 200
    assert r.json() == {
        "url": "https://drive.google.com/file/d/F1/view",
        "normalizedUrl": "https://drive.google.com/uc?export=download&id=F1",
        "isYouTube": False,
    }
