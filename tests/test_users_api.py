from datetime import datetime

from fastapi.testclient import TestClient

from user_directory_api.app.core.config import Settings
from user_directory_api.app.main import create_app
from user_directory_api.app.services.user_service import UserService


def _ids(client):
    return [user["id"] for user in client.get("/api/users").json()]


def test_list_users_empty(client):
    response = client.get("/api/users")

    assert response.status_code == 200
    assert response.json() == []


def test_create_user_and_list(client):
    response = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ann"
    assert body["email"] == "ann@x.com"
    assert body["role"] == "User"
    assert body["id"]
    assert set(body) == {"id", "name", "email", "role", "createdAt"}
    datetime.fromisoformat(body["createdAt"].replace("Z", "+00:00"))

    listed = client.get("/api/users").json()
    assert body in listed


def test_create_user_missing_field_is_rejected(client, service):
    response = client.post("/api/users", json={"name": "", "email": "a@b.com", "role": "User"})

    assert response.status_code == 400
    assert response.json() == {"error": "Name, email, and role are required"}
    assert client.get("/api/users").json() == []
    assert len(service) == 0


def test_create_user_absent_or_null_fields_are_rejected(client):
    for body in ({"email": "a@b.com", "role": "User"}, {"name": "Ann", "email": None, "role": "User"}, {}):
        response = client.post("/api/users", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Name, email, and role are required"}


def test_create_user_accepts_any_role_label(client):
    response = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "Auditor"})

    assert response.status_code == 201
    assert response.json()["role"] == "Auditor"


def test_create_user_malformed_body_returns_generic_error(client):
    response = client.post(
        "/api/users",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create user"}


def test_create_user_non_object_body_returns_generic_error(client):
    response = client.post("/api/users", json=["Ann", "ann@x.com", "User"])

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create user"}


def test_get_user(client):
    created = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"}).json()

    response = client.get(f"/api/users/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_user_returns_404(client):
    response = client.get("/api/users/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_update_user_partial(client):
    created = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"}).json()

    response = client.put(f"/api/users/{created['id']}", json={"role": "Manager"})

    assert response.status_code == 200
    body = response.json()
    assert body == {**created, "role": "Manager"}


def test_update_user_empty_body_is_noop(client):
    created = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"}).json()

    response = client.put(f"/api/users/{created['id']}", json={})

    assert response.status_code == 200
    assert response.json() == created


def test_update_user_ignores_id_and_created_at(client):
    created = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"}).json()

    response = client.put(
        f"/api/users/{created['id']}",
        json={"id": "other", "createdAt": "1999-01-01T00:00:00.000Z", "name": "Annie"},
    )

    assert response.status_code == 200
    assert response.json() == {**created, "name": "Annie"}


def test_update_unknown_user_returns_404(client):
    response = client.put("/api/users/does-not-exist", json={"name": "X"})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_update_user_malformed_body_returns_generic_error(client):
    created = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"}).json()

    response = client.put(
        f"/api/users/{created['id']}",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to update user"}
    assert client.get(f"/api/users/{created['id']}").json() == created


def test_delete_user(client):
    created = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"}).json()

    response = client.delete(f"/api/users/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}
    assert created["id"] not in _ids(client)

    second = client.delete(f"/api/users/{created['id']}")
    assert second.status_code == 404
    assert second.json() == {"error": "User not found"}


def test_service_failure_is_reported_as_generic_error(client, service, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("internal detail")

    monkeypatch.setattr(service, "list_all", boom)
    monkeypatch.setattr(service, "delete", boom)

    listed = client.get("/api/users")
    assert listed.status_code == 500
    assert listed.json() == {"error": "Failed to fetch users"}

    deleted = client.delete("/api/users/1")
    assert deleted.status_code == 500
    assert deleted.json() == {"error": "Failed to delete user"}
    assert "internal detail" not in deleted.text


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "error" in response.json()


def test_app_seeds_sample_users_by_default():
    app = create_app(Settings(seed_sample_users=True, log_level="WARNING"))

    with TestClient(app) as client:
        users = client.get("/api/users").json()

    assert [user["name"] for user in users] == ["John Doe", "Jane Smith", "Bob Johnson"]


def test_app_without_seed_and_custom_prefix():
    app = create_app(Settings(seed_sample_users=False, api_prefix="/v1", log_level="WARNING"))

    with TestClient(app) as client:
        assert client.get("/v1/users").json() == []
        assert client.get("/api/users").status_code == 404


def test_apps_do_not_share_state():
    first = create_app(Settings(seed_sample_users=False, log_level="WARNING"), service=UserService())
    second = create_app(Settings(seed_sample_users=False, log_level="WARNING"), service=UserService())

    with TestClient(first) as first_client, TestClient(second) as second_client:
        first_client.post("/api/users", json={"name": "Ann", "email": "ann@x.com", "role": "User"})
        assert len(first_client.get("/api/users").json()) == 1
        assert second_client.get("/api/users").json() == []


def test_fault_outside_endpoint_returns_generic_error():
    app = create_app(Settings(seed_sample_users=False, log_level="WARNING"), service=UserService())
    del app.state.user_service

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/users")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "user_service" not in response.text
