from app.database.supabase_client import SupabaseClient
from app.modules.auth.service import FORGOT_PASSWORD_MESSAGE


def test_signup_creates_user_with_names_in_metadata(client, supabase):
    res = client.post("/api/auth/signup", json={
        "email": "dana@example.com",
        "password": "hunter22",
        "firstName": "Dana",
        "lastName": "Reyes",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "dana@example.com"
    assert body["user_id"] == supabase.auth.users["dana@example.com"].id
    assert supabase.auth.users["dana@example.com"].user_metadata == {"first_name": "Dana", "last_name": "Reyes"}


def test_signup_twice_is_400(client, alice):
    res = client.post("/api/auth/signup", json={"email": alice.email, "password": "hunter22"})
    assert res.status_code == 400
    assert res.json()["detail"] == "User already exists"


def test_signup_rejects_invalid_email(client):
    res = client.post("/api/auth/signup", json={"email": "not-an-email", "password": "hunter22"})
    assert res.status_code == 400


def test_login_returns_tokens(client, alice):
    res = client.post("/api/auth/login", json={"email": alice.email, "password": "secret123"})
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["user_id"] == alice.id
    assert body["access_token"]
    assert body["refresh_token"]
    assert body["expires_in"] == 3600


def test_login_with_wrong_password_is_401(client, alice):
    res = client.post("/api/auth/login", json={"email": alice.email, "password": "wrong"})
    assert res.status_code == 401


def test_forgot_password_does_not_reveal_unknown_emails(client, supabase, alice):
    known = client.post("/api/auth/forgot-password", json={"email": alice.email})
    unknown = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": FORGOT_PASSWORD_MESSAGE}
    assert [email for email, _ in supabase.auth.reset_requests] == [alice.email, "nobody@example.com"]


def test_missing_token_is_401(client):
    res = client.get("/api/profile")
    assert res.status_code == 401


def test_rejected_token_is_403(client):
    res = client.get("/api/profile", headers={"Authorization": "Bearer forged"})
    assert res.status_code == 403


def test_me_returns_identity(client, alice):
    res = client.get("/api/auth/me", headers=alice.headers)
    assert res.status_code == 200
    assert res.json()["id"] == alice.id
    assert res.json()["email"] == alice.email


def test_logout_revokes_the_callers_session(client, supabase, alice):
    res = client.post("/api/auth/logout", headers=alice.headers)
    assert res.status_code == 200
    assert supabase.auth.admin.signed_out == [alice.headers["Authorization"].split(" ", 1)[1]]
    assert supabase.auth.session is None


def test_login_does_not_sign_in_the_shared_client(client, supabase, alice):
    res = client.post("/api/auth/login", json={"email": alice.email, "password": "secret123"})
    assert res.status_code == 200

    assert supabase.auth.session is None
    assert len(supabase.session_clients) == 1
    assert supabase.session_clients[0].auth.session.access_token == res.json()["access_token"]


def test_session_clients_are_created_per_call(monkeypatch):
    created = []

    def fake_create_client(url, key, options=None):
        created.append(options)
        return object()

    monkeypatch.setattr("app.database.supabase_client.create_client", fake_create_client)
    first = SupabaseClient.create_session_client()
    second = SupabaseClient.create_session_client()

    assert first is not second
    assert all(options.persist_session is False for options in created)
