from django.contrib.auth import get_user_model

from api.hashers import SHA256PasswordHasher, sha256_hex
from api.models import SessionToken


def _legacy_user(username, password):
    user = get_user_model()(username=username)
    user.password = SHA256PasswordHasher.from_hex(sha256_hex(password))
    user.save()
    return user


def test_login_with_legacy_sha256_hash_then_create_entry(api_client, db):
    user = _legacy_user("a", "pw")

    r = api_client.post("/api/login", {"username": "a", "password": "pw"}, format="json")
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["username"] == "a"
    assert SessionToken.objects.filter(pk=data["token"], user=user).exists()

    # empreinte héritée migrée vers le hasher par défaut
    user.refresh_from_db()
    assert not user.password.startswith("sha256$")
    assert user.check_password("pw")

    body = {"id": "e1", "title": "T", "content": "C", "date": "2024-01-01", "mood": "😊"}
    r2 = api_client.post("/api/entries", body, format="json", HTTP_X_SESSION_TOKEN=data["token"])
    assert r2.status_code == 201

    listed = api_client.get("/api/entries").json()
    assert [(e["id"], e["title"], e["date"], e["owner"]) for e in listed] == [("e1", "T", "2024-01-01", "a")]


def test_login_rejects_bad_password(api_client, alice):
    r = api_client.post("/api/login", {"username": "alice", "password": "wrong"}, format="json")

    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}
    assert SessionToken.objects.count() == 0


def test_login_rejects_inactive_user(api_client, alice):
    alice.is_active = False
    alice.save()

    r = api_client.post("/api/login", {"username": "alice", "password": "pw"}, format="json")

    assert r.status_code == 401


def test_login_requires_both_fields(api_client, db):
    r = api_client.post("/api/login", {"username": "alice"}, format="json")

    assert r.status_code == 400
    assert "error" in r.json()


def test_login_updates_last_login(api_client, alice):
    assert alice.last_login is None

    api_client.post("/api/login", {"username": "alice", "password": "pw"}, format="json")

    alice.refresh_from_db()
    assert alice.last_login is not None


def test_logout_deletes_session_and_is_idempotent(api_client, alice):
    token = api_client.post("/api/login", {"username": "alice", "password": "pw"}, format="json").json()["token"]

    r = api_client.post("/api/logout", {"token": token}, format="json")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert not SessionToken.objects.filter(pk=token).exists()

    again = api_client.post("/api/logout", {"token": token}, format="json")
    assert again.status_code == 200
    assert api_client.get("/api/whoami", HTTP_X_SESSION_TOKEN=token).status_code == 401


def test_logout_accepts_header_token(api_client, alice, alice_auth):
    r = api_client.post("/api/logout", {}, format="json", **alice_auth)

    assert r.status_code == 200
    assert SessionToken.objects.count() == 0


def test_logout_without_token_still_succeeds(api_client, db):
    r = api_client.post("/api/logout", {}, format="json")

    assert r.status_code == 200


def test_whoami(api_client, alice, alice_auth):
    r = api_client.get("/api/whoami", **alice_auth)

    assert r.status_code == 200
    data = r.json()
    assert data["username"] == "alice"
    assert data["id"] == alice.id
    assert data["expires_at"]


def test_whoami_requires_session(api_client, db):
    r = api_client.get("/api/whoami")

    assert r.status_code == 401
    assert r["WWW-Authenticate"].startswith("X-Session-Token")
