import pytest
from fastapi.testclient import TestClient

from kop_signup.main import create_app
from kop_signup.routes.signup import get_service
from kop_signup.services.registration_service import RegistrationService


@pytest.fixture
def client(store):
    app = create_app(use_lifespan=False)
    app.dependency_overrides[get_service] = lambda: RegistrationService(store)
    return TestClient(app)


def test_alive(client):
    res = client.get("/alive")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_signup_created(client, store, jane):
    res = client.post("/api/signup", json=jane)

    assert res.status_code == 201
    assert res.json() == {"success": True, "message": "You have been successfully signed up."}
    assert len(store.records) == 1


def test_signup_twice_conflicts(client, store, jane):
    client.post("/api/signup", json=jane)
    res = client.post("/api/signup", json=jane)

    assert res.status_code == 409
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "DUPLICATE"
    assert len(store.records) == 1


def test_invalid_form_never_reaches_store(client, store, jane):
    jane["shouldInviteToWhatsapp"] = False
    jane["phone"] = "123"

    res = client.post("/api/signup", json=jane)

    assert res.status_code == 422
    body = res.json()
    assert body["error"]["code"] == "VALIDATION"
    assert [v["field"] for v in body["violations"]] == ["phone", "shouldInviteToWhatsapp"]
    assert store.inserts == 0


def test_store_down_is_500(client, store, jane, monkeypatch):
    async def boom(email, phone):
        raise TimeoutError("server selection timeout")

    monkeypatch.setattr(store, "find_by_email_or_phone", boom)

    res = client.post("/api/signup", json=jane)

    assert res.status_code == 500
    assert res.json()["error"] == {"message": "server selection timeout", "code": "UNKNOWN"}


@pytest.mark.parametrize("payload", [[1, 2], "jane", 7])
def test_non_object_body_gets_uniform_validation_error(client, store, payload):
    res = client.post("/api/signup", json=payload)

    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION"
    assert [v["field"] for v in body["violations"]] == ["__root__"]
    assert store.inserts == 0


def test_string_booleans_rejected_over_http(client, store, jane):
    jane["shouldInviteToWhatsapp"] = "yes"

    res = client.post("/api/signup", json=jane)

    assert res.status_code == 422
    assert [v["field"] for v in res.json()["violations"]] == ["shouldInviteToWhatsapp"]
    assert store.records == []
