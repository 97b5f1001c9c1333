from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from content_studio.api.routes import auth as auth_routes
from content_studio.core.config import get_settings
from content_studio.models.user import UserType
from content_studio.services.access_control import Identity
from content_studio.utils import auth as auth_utils
from content_studio.utils.auth import InvalidTokenError, create_session_token, decode_session_token


def _google_token(private_key, **overrides):
    now = datetime.now(timezone.utc)
    claims = {
        "iss": "https://accounts.google.com",
        "aud": get_settings().google_client_id,
        "sub": "109876543210",
        "email": "ana@example.com",
        "email_verified": True,
        "name": "Ana Creator",
        "picture": "https://lh3.googleusercontent.com/a/ana",
        "iat": now,
        "exp": now + timedelta(hours=1),
    }
    claims.update(overrides)
    return jwt.encode(claims, private_key, algorithm="RS256")


@pytest.fixture
def google_key(monkeypatch):
    """Sign Google ID tokens with a local key instead of Google's published ones."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    signing_key = SimpleNamespace(key=private_key.public_key())
    jwks_client = SimpleNamespace(get_signing_key_from_jwt=lambda token: signing_key)
    monkeypatch.setattr(auth_utils, "_google_jwks_client", lambda: jwks_client)
    return private_key


# Session tokens

def test_session_token_round_trip(make_user):
    user = make_user(user_type=UserType.PREMIUM)

    identity = decode_session_token(create_session_token(user))

    assert identity.user_id == user.id
    assert identity.email == user.email
    assert identity.name == user.name
    assert identity.user_type is UserType.PREMIUM


def test_expired_session_token_is_rejected():
    settings = get_settings()
    past = datetime.now(timezone.utc) - timedelta(days=1)
    token = jwt.encode(
        {"sub": "user-1", "email": "ana@example.com", "iat": past - timedelta(days=1), "exp": past},
        settings.session_secret,
        algorithm=settings.session_algorithm,
    )

    with pytest.raises(InvalidTokenError, match="expired"):
        decode_session_token(token)


def test_session_token_signed_with_another_secret_is_rejected():
    token = jwt.encode(
        {"sub": "user-1", "email": "ana@example.com", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        "some-other-secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        decode_session_token(token)


def test_session_token_without_email_is_rejected():
    settings = get_settings()
    token = jwt.encode(
        {"sub": "user-1", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        settings.session_secret,
        algorithm=settings.session_algorithm,
    )

    with pytest.raises(InvalidTokenError):
        decode_session_token(token)


# Authorization header

@pytest.mark.parametrize(
    "headers, detail",
    [
        ({}, "Missing authorization header"),
        ({"Authorization": "Token abc"}, "Invalid header format. Expected 'Bearer <token>'"),
        ({"Authorization": "Bearer null"}, "Missing token"),
        ({"Authorization": "Bearer undefined"}, "Missing token"),
        ({"Authorization": "Bearer not-a-jwt"}, None),
    ],
)
def test_bad_authorization_headers_get_401(client, headers, detail):
    response = client.get("/auth/session", headers=headers)

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    if detail:
        assert response.json()["detail"] == detail


def test_session_returns_user_with_profile_flags(client, make_user, auth_headers):
    user = make_user()

    response = client.get("/auth/session", headers=auth_headers(user))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user.id
    assert body["user_type"] == "basic"
    assert body["is_first_login"] is True
    assert body["is_profile_complete"] is False


def test_session_creates_unknown_user_on_first_sight(client, store):
    identity_user = SimpleNamespace(
        id="external-id", email="fresh@example.com", name="Fresh", image=None, user_type=UserType.BASIC
    )
    token = create_session_token(identity_user)

    response = client.get("/auth/session", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert store.find_user_by_email("fresh@example.com") is not None


def test_tier_comes_from_stored_user_not_token(client, make_user, auth_headers, store):
    user = make_user(user_type=UserType.ADMIN)
    headers = auth_headers(user)
    store.update_user_fields(user.id, user_type=UserType.BASIC)

    response = client.get("/auth/session", headers=headers)

    assert response.json()["user_type"] == "basic"


# Google sign-in

def test_verify_google_id_token(google_key):
    identity = auth_utils.verify_google_id_token(_google_token(google_key))

    assert identity.email == "ana@example.com"
    assert identity.name == "Ana Creator"
    assert identity.image == "https://lh3.googleusercontent.com/a/ana"


@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "someone-else.apps.googleusercontent.com"},
        {"iss": "https://evil.example.com"},
        {"email_verified": False},
        {"email": None},
        {"exp": datetime.now(timezone.utc) - timedelta(minutes=5)},
    ],
)
def test_invalid_google_tokens_are_rejected(google_key, overrides):
    with pytest.raises(InvalidTokenError):
        auth_utils.verify_google_id_token(_google_token(google_key, **overrides))


def test_google_sign_in_creates_user_and_returns_session(client, store, google_key):
    response = client.post("/auth/google", json={"id_token": _google_token(google_key)})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 30 * 24 * 3600
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["user_type"] == "basic"
    assert body["user"]["is_first_login"] is True

    user = store.find_user_by_email("ana@example.com")
    assert decode_session_token(body["access_token"]).user_id == user.id


def test_google_sign_in_refreshes_existing_user(client, store, monkeypatch):
    existing = store.upsert_user("ana@example.com", name="Old name")
    monkeypatch.setattr(
        auth_routes,
        "verify_google_id_token",
        lambda token, settings: Identity(user_id=None, email="ana@example.com", name="Ana Creator"),
    )

    response = client.post("/auth/google", json={"id_token": "google-token"})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == existing.id
    assert store.find_user_by_id(existing.id).name == "Ana Creator"


def test_google_sign_in_with_invalid_token(client, monkeypatch):
    def reject(token, settings):
        raise InvalidTokenError("bad signature")

    monkeypatch.setattr(auth_routes, "verify_google_id_token", reject)

    response = client.post("/auth/google", json={"id_token": "forged"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid Google credentials"


def test_google_sign_in_without_client_id(client):
    settings = get_settings().model_copy(update={"google_client_id": ""})
    client.app.dependency_overrides[get_settings] = lambda: settings

    response = client.post("/auth/google", json={"id_token": "anything"})

    assert response.status_code == 503


def test_auth_log_accepts_frontend_events(client):
    response = client.post(
        "/auth/log",
        json={"type": "signin_error", "url": "/login", "error": {"type": "OAuthCallback", "message": "denied"}},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
