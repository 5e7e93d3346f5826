import pytest

from api.storage_models import get_catalog_reader
from conftest import FakeCatalog
from core.errors import UpstreamConnectionError
from main import app

IMPORT_PAYLOAD = {
    "name": "Shop",
    "connection": {"host": "db.internal", "user": "reporter", "password": "s3cr3t-pass", "database": "shop"},
}


@pytest.fixture
def imported(client):
    response = client.post("/api/storage-models/import", json=IMPORT_PAYLOAD)
    assert response.status_code == 201
    model = response.json()
    users = next(t for t in model["tables"] if t["name"] == "users")
    return model, users


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "services": {"store": {"status": "up", "dialect": "sqlite"}},
    }


# ── Storage models ────────────────────────────────────────────────────────────

def test_import_storage_model(client, shop_catalog):
    response = client.post("/api/storage-models/import", json=IMPORT_PAYLOAD)
    assert response.status_code == 201
    body = response.json()

    assert shop_catalog.calls[0].port == 3306
    assert shop_catalog.calls[0].password == "s3cr3t-pass"
    assert body["connection"] == "mysql://reporter@db.internal:3306/shop"
    assert [t["name"] for t in body["tables"]] == ["orders", "users"]
    users = body["tables"][1]
    assert [c["name"] for c in users["schema"]["columns"]] == ["id", "name", "email"]
    assert users["schema"]["columns"][0]["key"] == "PRI"
    assert body["createdAt"].endswith("Z")

    listed = client.get("/api/storage-models").json()
    assert [m["id"] for m in listed] == [body["id"]]


def test_import_requires_connection_fields(client):
    response = client.post("/api/storage-models/import", json={
        "name": "Shop", "connection": {"host": "", "user": "reporter", "database": "shop"},
    })
    assert response.status_code == 400
    assert "connection.host" in response.json()["detail"]


def test_import_empty_catalog(client):
    app.dependency_overrides[get_catalog_reader] = lambda: FakeCatalog([], [])
    response = client.post("/api/storage-models/import", json=IMPORT_PAYLOAD)
    assert response.status_code == 400
    assert response.json() == {"detail": "No tables found in the target database"}
    assert client.get("/api/storage-models").json() == []


def test_import_unreachable_database(client):
    def unreachable(params):
        raise UpstreamConnectionError("Access denied for user 'reporter'")

    app.dependency_overrides[get_catalog_reader] = lambda: unreachable
    response = client.post("/api/storage-models/import", json=IMPORT_PAYLOAD)
    assert response.status_code == 500
    assert response.json()["detail"].startswith("Could not connect to database: Access denied")


# ── View, form, operation models ──────────────────────────────────────────────

def test_create_view_model(client, imported):
    model, users = imported
    payload = {
        "name": "User list",
        "storageModelId": model["id"],
        "storageTableId": users["id"],
        "layout": {"fields": [{"column": "email", "label": "Email", "type": "text"}]},
    }
    response = client.post("/api/view-models", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "User list"
    assert body["layout"] == payload["layout"]
    assert body["storageTable"]["id"] == users["id"]
    assert [v["id"] for v in client.get("/api/view-models").json()] == [body["id"]]


def test_create_view_model_requires_fields(client, imported):
    model, users = imported
    response = client.post("/api/view-models", json={
        "name": "Empty",
        "storageModelId": model["id"],
        "storageTableId": users["id"],
        "layout": {"fields": []},
    })
    assert response.status_code == 400
    assert "select at least one field" in response.json()["detail"]
    assert client.get("/api/view-models").json() == []


def test_create_form_model_and_components(client, imported):
    _, users = imported
    response = client.post("/api/form-models", json={
        "name": "Signup",
        "storageTableId": users["id"],
        "schema": {"fields": [{"column": "email", "label": "Email", "required": True, "component": "text"}]},
    })
    assert response.status_code == 201
    assert response.json()["operations"] == []
    assert client.get("/api/form-models/components").json() == {
        "components": ["text", "textarea", "number", "select", "date"],
    }


def test_create_form_model_with_unknown_table(client):
    response = client.post("/api/form-models", json={
        "name": "Orphan",
        "storageTableId": "missing",
        "schema": {"fields": [{"column": "a", "label": "A", "component": "text"}]},
    })
    assert response.status_code == 500
    assert response.json()["detail"].startswith("Creating form model failed:")


def test_create_operation_defaults_to_read(client):
    response = client.post("/api/operation-models", json={"name": "Ping", "endpoint": "/ping", "method": "GET"})
    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "READ"
    assert body["endpoint"] == "/ping"
    assert "formModel" not in body


def test_create_operation_rejects_unknown_type(client):
    response = client.post("/api/operation-models", json={"name": "Ping", "type": "PATCH"})
    assert response.status_code == 400


# ── Domain models and dashboard ───────────────────────────────────────────────

def test_create_domain_model_dedupes_ids(client, imported):
    _, users = imported
    response = client.post("/api/domain-models", json={
        "name": "Customer",
        "schema": {"fields": [{"key": "uid", "name": "User ID"}]},
        "storageTableIds": [users["id"], users["id"]],
    })
    assert response.status_code == 201
    body = response.json()
    assert [t["id"] for t in body["storageTables"]] == [users["id"]]
    assert body["fields"] == [{"key": "uid", "name": "User ID"}]
    assert client.get("/api/domain-models").json()[0]["id"] == body["id"]


def test_create_domain_model_renders_back_references(client, imported):
    model, users = imported
    view = client.post("/api/view-models", json={
        "name": "User list",
        "storageModelId": model["id"],
        "storageTableId": users["id"],
        "layout": {"fields": [{"column": "email", "label": "Email", "type": "text"}]},
    }).json()
    form = client.post("/api/form-models", json={
        "name": "Signup",
        "storageTableId": users["id"],
        "schema": {"fields": [{"column": "email", "label": "Email", "component": "text"}]},
    }).json()
    operation = client.post("/api/operation-models", json={
        "name": "Create user",
        "type": "CREATE",
        "endpoint": "/users",
        "method": "POST",
        "formModelId": form["id"],
    }).json()

    response = client.post("/api/domain-models", json={
        "name": "Customer",
        "schema": {"fields": [{"key": "uid", "name": "User ID"}]},
        "storageTableIds": [users["id"]],
        "viewModelIds": [view["id"]],
        "formModelIds": [form["id"]],
        "operationModelIds": [operation["id"]],
    })
    assert response.status_code == 201
    body = response.json()

    table = body["storageTables"][0]
    assert [v["id"] for v in table["views"]] == [view["id"]]
    assert [f["id"] for f in table["forms"]] == [form["id"]]
    assert [op["id"] for op in table["forms"][0]["operations"]] == [operation["id"]]
    assert body["viewModels"][0]["storageTable"]["id"] == users["id"]
    assert body["formModels"][0]["storageTable"]["id"] == users["id"]
    assert [op["id"] for op in body["formModels"][0]["operations"]] == [operation["id"]]
    assert body["operationModels"][0]["formModel"]["id"] == form["id"]

    listed = client.get("/api/domain-models").json()[0]
    assert listed["viewModels"][0]["storageTable"]["id"] == users["id"]
    assert listed["operationModels"][0]["formModel"]["id"] == form["id"]


def test_create_domain_model_requires_fields(client):
    response = client.post("/api/domain-models", json={"name": "Nothing", "schema": {"fields": []}})
    assert response.status_code == 400
    assert "define at least one business field" in response.json()["detail"]


def test_dashboard_snapshot(client, imported):
    model, users = imported
    client.post("/api/operation-models", json={"name": "List users", "storageModelId": model["id"]})

    body = client.get("/api/dashboard").json()
    assert set(body) == {"storageModels", "viewModels", "formModels", "operationModels", "domainModels"}
    assert len(body["storageModels"]) == 1
    assert body["storageModels"][0]["operations"][0]["name"] == "List users"
    assert body["operationModels"][0]["storageModelId"] == model["id"]
    assert body["domainModels"] == []
