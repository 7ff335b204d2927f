"""Tests for the users API."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from repositories import EntityStore, NotFound
from schemas.users import User


class MemoryUserStore:
    """In-memory stand-in satisfying StoreProtocol[User]."""

    def __init__(self):
        self.users: dict[str, User] = {}

    def list(self):
        return list(self.users.values())

    def get(self, identifier):
        if identifier not in self.users:
            raise NotFound(identifier)
        return self.users[identifier]

    def create(self, record):
        data = dict(record)
        data["id"] = data.get("id") or f"u{len(self.users)}"
        user = User.model_validate(data)
        self.users[user.id] = user
        return user

    def delete(self, identifier):
        if self.users.pop(identifier, None) is None:
            raise NotFound(identifier)


@pytest.fixture
def settings(monkeypatch, tmp_path: Path) -> Settings:
    monkeypatch.setenv("USERBASE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("USERBASE_USERS_FILE", raising=False)
    return Settings()


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


class TestApp:
    def test_creates_data_dir(self, settings: Settings):
        create_app(settings)
        assert settings.USERBASE_DATA_DIR.is_dir()

    def test_uses_injected_store(self, tmp_path: Path, settings: Settings):
        store = EntityStore(tmp_path / "other.json", User)
        store.create({"id": "ada", "name": "Ada"})
        client = TestClient(create_app(settings, store=store))
        assert client.get("/api/users").json()["users"][0]["id"] == "ada"

    def test_accepts_any_store_protocol(self, settings: Settings):
        client = TestClient(create_app(settings, store=MemoryUserStore()))
        user = client.post("/api/users", json={"name": "Ada"}).json()
        assert user["id"] == "u0"
        assert client.get("/api/users").json() == {"users": [user]}
        assert client.delete("/api/users/u0").status_code == 204
        assert client.delete("/api/users/u0").status_code == 404


class TestHealth:
    def test_ok(self, client: TestClient):
        client.post("/api/users", json={"name": "Ada"})
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["storage"] == "ok"
        assert body["users"] == 1

    def test_corrupt_file_is_degraded(self, client: TestClient, settings: Settings):
        settings.users_path.write_text("{oops", encoding="utf-8")
        resp = client.get("/health")
        assert resp.status_code == 503
        assert resp.json()["status"] == "degraded"
        assert resp.json()["storage"] == "corrupt"
        assert resp.json()["users"] is None

    def test_unreadable_file_is_degraded(self, settings: Settings):
        settings.USERBASE_DATA_DIR.mkdir(parents=True)
        settings.users_path.mkdir()
        resp = TestClient(create_app(settings)).get("/health")
        assert resp.status_code == 503
        assert resp.json()["storage"] == "unavailable"


class TestUsers:
    def test_list_empty(self, client: TestClient):
        resp = client.get("/api/users")
        assert resp.status_code == 200
        assert resp.json() == {"users": []}

    def test_create_list_get_delete(self, client: TestClient):
        resp = client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})
        assert resp.status_code == 201
        user = resp.json()
        assert user["id"]
        assert user["name"] == "Ada"

        assert client.get("/api/users").json() == {"users": [user]}
        assert client.get(f"/api/users/{user['id']}").json() == user

        assert client.delete(f"/api/users/{user['id']}").status_code == 204
        assert client.get("/api/users").json() == {"users": []}

    def test_persisted_to_settings_path(self, client: TestClient, settings: Settings):
        client.post("/api/users", json={"id": "ada", "name": "Ada"})
        reopened = EntityStore(settings.users_path, User)
        assert [u.id for u in reopened.list()] == ["ada"]

    def test_duplicate_is_409(self, client: TestClient):
        client.post("/api/users", json={"id": "ada", "name": "Ada"})
        resp = client.post("/api/users", json={"id": "ada", "name": "Eve"})
        assert resp.status_code == 409
        assert "ada" in resp.json()["detail"]

    def test_missing_name_is_422(self, client: TestClient):
        assert client.post("/api/users", json={"email": "x@example.com"}).status_code == 422

    def test_blank_name_is_422(self, client: TestClient):
        resp = client.post("/api/users", json={"name": "  "})
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"] == ["name"]

    def test_get_missing_is_404(self, client: TestClient):
        assert client.get("/api/users/missing").status_code == 404

    def test_delete_missing_is_404(self, client: TestClient):
        assert client.delete("/api/users/missing").status_code == 404

    def test_corrupt_file_is_500(self, client: TestClient, settings: Settings):
        settings.users_path.write_text("{oops", encoding="utf-8")
        assert client.get("/api/users").status_code == 500
        assert client.post("/api/users", json={"name": "Ada"}).status_code == 500
        assert settings.users_path.read_text(encoding="utf-8") == "{oops"

    def test_storage_unavailable_is_503(self, settings: Settings):
        settings.USERBASE_DATA_DIR.mkdir(parents=True)
        settings.users_path.mkdir()
        client = TestClient(create_app(settings))
        assert client.get("/api/users").status_code == 503
