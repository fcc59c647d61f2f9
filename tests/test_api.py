"""HTTP tests for the catalog endpoints."""

import re

import pytest
from fastapi.testclient import TestClient

from app_catalog_api.app.core.config import Settings
from app_catalog_api.app.core.errors import PersistenceError
from app_catalog_api.app.main import create_app


def _upload(client, form, filename="app.apk", content=b"PK\x03\x04"):
    files = {"apk": (filename, content, "application/vnd.android.package-archive")}
    return client.post("/api/upload", data=form, files=files)


def test_upload_scenario(client, upload_form):
    response = _upload(client, upload_form)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "App metadata saved successfully"

    data = body["data"]
    assert data["name"] == "Foo"
    assert data["description"] == "bar"
    assert data["version"] == "1.0"
    assert data["githubLink"] == "https://x/y"
    assert data["apkFile"]["filename"] == "app.apk"
    assert re.fullmatch(r"/apps/\d+_app\.apk", data["apkFile"]["storagePath"])
    assert data["apkFile"]["uploadDate"]
    assert data["id"]


@pytest.mark.parametrize(
    "files",
    [
        None,
        {"apk": ("", b"PK\x03\x04", "application/vnd.android.package-archive")},
        {"apk": (None, "not a file")},
    ],
    ids=["no-apk-part", "empty-filename", "text-apk-part"],
)
def test_upload_without_file(client, upload_form, files):
    response = client.post("/api/upload", data=upload_form, files=files)
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "No file uploaded"}
    assert client.get("/api/apps").json()["data"] == []


@pytest.mark.parametrize("missing", ["name", "description", "version", "githubLink"])
def test_upload_with_missing_field(client, upload_form, missing):
    form = {key: value for key, value in upload_form.items() if key != missing}
    response = _upload(client, form)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == (
        "Missing required fields: name, description, version, and githubLink are required"
    )
    assert client.get("/api/apps").json()["data"] == []


def test_upload_with_empty_field(client, upload_form):
    response = _upload(client, {**upload_form, "version": ""})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_list_endpoints_empty(client):
    for path in ["/api/apps", "/api/apps/featured", "/api/apps/recent"]:
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}


def test_list_limits_and_order(client, upload_form):
    for index in range(5):
        assert _upload(client, {**upload_form, "name": f"app-{index}"}).status_code == 200

    all_apps = client.get("/api/apps").json()["data"]
    featured = client.get("/api/apps/featured").json()["data"]
    recent = client.get("/api/apps/recent").json()["data"]

    assert [app["name"] for app in all_apps] == ["app-4", "app-3", "app-2", "app-1", "app-0"]
    assert featured == all_apps[:2]
    assert recent == all_apps[:4]


def test_recent_lists_later_upload_first(client, upload_form):
    _upload(client, {**upload_form, "name": "first"})
    _upload(client, {**upload_form, "name": "second"})
    recent = client.get("/api/apps/recent").json()["data"]
    assert [app["name"] for app in recent] == ["second", "first"]


def test_get_by_id_after_create(client, upload_form):
    created = _upload(client, upload_form).json()["data"]
    response = client.get(f"/api/apps/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": created}


@pytest.mark.parametrize("app_id", ["0123456789abcdef01234567", "not-a-valid-id"])
def test_get_by_id_not_found(client, app_id):
    response = client.get(f"/api/apps/{app_id}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "App not found"}


def test_store_failures_return_500(settings, failing_store, upload_form):
    app = create_app(settings, store=failing_store)
    with TestClient(app) as client:
        expectations = {
            "/api/apps": "Failed to fetch apps",
            "/api/apps/featured": "Failed to fetch featured apps",
            "/api/apps/recent": "Failed to fetch recent apps",
            "/api/apps/0123456789abcdef01234567": "Failed to fetch app details",
        }
        for path, message in expectations.items():
            response = client.get(path)
            assert response.status_code == 500
            assert response.json() == {"success": False, "message": message}

        response = _upload(client, upload_form)
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "connection refused"}


def test_injected_store_lifecycle(settings, memory_store):
    app = create_app(settings, store=memory_store)
    with TestClient(app) as client:
        assert memory_store.opened
        assert client.get("/api/apps").status_code == 200
    assert memory_store.closed


def test_missing_database_url_fails_startup():
    app = create_app(Settings(database_url=""))
    with pytest.raises(Exception, match="DATABASE_URL"):
        with TestClient(app):
            pass


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_persistence_error_status_code():
    assert PersistenceError().status_code == 500
