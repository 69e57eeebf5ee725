from passlib.hash import bcrypt
from pymongo.errors import OperationFailure

from app.utils.auth_utils import create_access_token
from app.utils.identity_utils import derive_user_id
from conftest import PROVIDER_COMPLETION, bearer
from facilitiease.db.database import SERVICE_PROVIDERS, STARTUPS, USERS


def test_health(client):
    assert client.get("/healthz").json() == {"status": "ok"}


# ------------------------
# Sign up
# ------------------------
def test_signup_returns_derived_account_id(signup, database):
    res = signup("alice@x.com")

    assert res.status_code == 201
    assert res.json() == {"accountId": str(derive_user_id("alice@x.com"))}
    user = database[USERS].docs[0]
    assert user["role"] == "Startup"
    assert user["auth_provider_id"] == str(user["_id"])
    assert user["password_hash"] != "pw123456"
    assert "password" not in user
    assert database[STARTUPS].docs[0]["user_id"] == user["_id"]


def test_second_signup_with_same_email_already_exists(signup):
    assert signup("alice@x.com").status_code == 201

    res = signup("alice@x.com")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ALREADY_EXISTS"


def test_email_uniqueness_ignores_case(signup):
    assert signup("alice@x.com").status_code == 201
    assert signup("ALICE@X.com", role="ServiceProvider").status_code == 400


def test_signup_rejects_short_password(signup):
    res = signup("alice@x.com", password="12345")
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


def test_signup_rejects_unknown_role(signup):
    assert signup("alice@x.com", role="Admin", seed={}).status_code == 422


def test_signup_validates_seed_for_role(signup, database):
    res = signup("alice@x.com", seed={"startupName": "Acme Labs"})

    assert res.status_code == 422
    assert database[USERS].docs == []


def test_signup_rejects_foreign_seed_fields(signup):
    seed = {"serviceName": "BioHub", "primaryContactNumber": "9123456780", "isAdmin": True}
    assert signup("sp@x.com", role="ServiceProvider", seed=seed).status_code == 422


def test_storage_failure_during_signup_is_internal(signup, database):
    database[STARTUPS].fail_next_insert = OperationFailure("not primary")

    res = signup("alice@x.com")

    assert res.status_code == 500
    assert res.json() == {"error": {"code": "INTERNAL", "message": "Internal server error"}}
    assert database[USERS].docs == []
    assert database[STARTUPS].docs == []


def test_provider_signup_defaults_primary_email(signup, database):
    assert signup("SP@X.com", role="ServiceProvider").status_code == 201

    profile = database[SERVICE_PROVIDERS].docs[0]
    assert profile["primary_email_id"] == "sp@x.com"
    assert profile["service_name"] == "BioHub"
    assert profile["address"] is None


# ------------------------
# Sign in
# ------------------------
def test_signin_with_correct_password(signup, signin):
    signup("alice@x.com")

    res = signin("alice@x.com")

    assert res.status_code == 200
    body = res.json()
    assert body["tokenType"] == "bearer"
    assert body["accessToken"] and body["refreshToken"]
    # Startup seed lacks an address
    assert body["requiresCompletion"] is True


def test_wrong_password_and_unknown_email_look_the_same(signup, signin):
    signup("alice@x.com")

    wrong = signin("alice@x.com", password="not-the-password")
    unknown = signin("nobody@x.com")

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_signin_with_other_role_is_rejected(signup, signin):
    signup("alice@x.com")
    assert signin("alice@x.com", role="ServiceProvider").status_code == 401
    assert signin("alice@x.com", role="Startup").status_code == 200


def test_provider_completion_flow(client, signup, signin):
    signup("sp@x.com", role="ServiceProvider")

    first = signin("sp@x.com", role="ServiceProvider")
    assert first.json()["requiresCompletion"] is True

    account_id = str(derive_user_id("sp@x.com"))
    res = client.patch(
        f"/api/profiles/{account_id}",
        json=PROVIDER_COMPLETION,
        headers=bearer(first.json()["accessToken"]),
    )
    assert res.status_code == 200
    assert res.json()["requiresCompletion"] is False

    second = signin("sp@x.com", role="ServiceProvider")
    assert second.json()["requiresCompletion"] is False


def test_legacy_bcrypt_password_is_upgraded_on_signin(signup, signin, database):
    signup("alice@x.com")
    user = database[USERS].docs[0]
    user["password_hash"] = bcrypt.using(rounds=4).hash("pw123456")

    assert signin("alice@x.com").status_code == 200

    assert user["password_hash"].startswith("$argon2id$")
    assert signin("alice@x.com").status_code == 200


def test_account_without_password_cannot_sign_in(signup, signin, database):
    signup("alice@x.com")
    database[USERS].docs[0].pop("password_hash")

    assert signin("alice@x.com").status_code == 401


# ------------------------
# Tokens
# ------------------------
def test_refresh_issues_new_tokens(client, signup, signin):
    signup("alice@x.com")
    tokens = signin("alice@x.com").json()

    res = client.post("/api/sessions/refresh", json={"refreshToken": tokens["refreshToken"]})

    assert res.status_code == 200
    assert res.json()["accessToken"]


def test_access_token_cannot_be_used_to_refresh(client, signup, signin):
    signup("alice@x.com")
    tokens = signin("alice@x.com").json()

    res = client.post("/api/sessions/refresh", json={"refreshToken": tokens["accessToken"]})
    assert res.status_code == 401


def test_me(client, signup, signin):
    signup("alice@x.com")
    token = signin("alice@x.com").json()["accessToken"]

    res = client.get("/api/accounts/me", headers=bearer(token))

    assert res.status_code == 200
    assert res.json() == {
        "id": str(derive_user_id("alice@x.com")),
        "email": "alice@x.com",
        "role": "Startup",
        "authProvider": "local",
        "emailVerified": False,
    }


def test_me_requires_session(client):
    res = client.get("/api/accounts/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


def test_me_for_deleted_user(client):
    token = create_access_token({"sub": str(derive_user_id("gone@x.com")), "email": "gone@x.com", "role": "Startup"})
    assert client.get("/api/accounts/me", headers=bearer(token)).status_code == 401
