from backend.hrdesk.utils.jwt import create_access_token, decode_access_token

from conftest import TEST_SECRET


def _signup(client, *, email: str, password: str = "secret1", name: str = "Test User"):
    return client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": password},
    )


def _login(client, *, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_health_is_public(client):
    r = client.get("/api/health")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["ok"] is True
    assert isinstance(data["now"], str)


def test_signup_returns_token_with_hr_claims(client):
    r = _signup(client, email="recruiter@example.com")
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    claims = decode_access_token(token, TEST_SECRET)
    assert claims["role"] == "hr"
    assert isinstance(claims["userId"], int)
    # 8 hours
    assert claims["exp"] - claims["iat"] == 8 * 60 * 60


def test_signup_email_is_case_normalized_before_uniqueness(client):
    r1 = _signup(client, email="Dup@Example.com")
    assert r1.status_code == 200, r1.text

    r2 = _signup(client, email="dup@example.COM")
    assert r2.status_code == 400, r2.text
    assert r2.json() == {"error": "Email already registered"}

    # Login works with any casing.
    r3 = _login(client, email="DUP@example.com", password="secret1")
    assert r3.status_code == 200, r3.text


def test_signup_validation_errors_are_listed(client):
    r = client.post("/api/auth/signup", json={"name": "", "email": "not-an-email", "password": "123"})
    assert r.status_code == 400, r.text
    errors = r.json()["errors"]
    assert {e["path"] for e in errors} == {"name", "email", "password"}
    assert all(e["location"] == "body" for e in errors)
    by_path = {e["path"]: e["msg"] for e in errors}
    assert by_path["password"] == "Password min 6 chars"
    assert by_path["email"] == "Valid email required"


def test_signup_missing_body_is_a_validation_error(client):
    r = client.post("/api/auth/signup")
    assert r.status_code == 400, r.text
    assert len(r.json()["errors"]) == 3


def test_malformed_json_is_a_validation_error(client):
    r = client.post(
        "/api/auth/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400, r.text
    assert "errors" in r.json()


def test_login_wrong_password_and_unknown_email_look_the_same(client):
    _signup(client, email="rec2@example.com", password="secret1")

    wrong_password = _login(client, email="rec2@example.com", password="wrong-password")
    unknown_email = _login(client, email="nobody@example.com", password="secret1")

    assert wrong_password.status_code == 401, wrong_password.text
    assert unknown_email.status_code == 401, unknown_email.text
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_requires_password(client):
    r = _login(client, email="rec@example.com", password="")
    assert r.status_code == 400, r.text
    assert r.json()["errors"][0]["path"] == "password"


def test_signup_login_then_create_candidate(client):
    t1 = _signup(client, name="A", email="a@x.com", password="secret1").json()["token"]
    r = _login(client, email="a@x.com", password="secret1")
    assert r.status_code == 200, r.text
    t2 = r.json()["token"]

    assert t1 != t2
    c1 = decode_access_token(t1, TEST_SECRET)
    c2 = decode_access_token(t2, TEST_SECRET)
    assert (c1["userId"], c1["role"]) == (c2["userId"], c2["role"])

    created = client.post(
        "/api/candidates",
        headers=_auth_headers(t1),
        json={"name": "Bob", "role": "Eng", "experience": 3},
    )
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["experience"] == 3
    assert body["rating"] == 0
    assert body["notes"] == ""
    assert body["createdBy"] == c1["userId"]
    assert body["createdAt"] and body["updatedAt"]


def test_missing_token_is_rejected(client):
    r = client.get("/api/candidates")
    assert r.status_code == 401, r.text
    assert r.json() == {"error": "No token provided"}


def test_token_signed_with_another_secret_is_rejected(client):
    forged = create_access_token({"userId": 1, "role": "hr"}, "some-other-secret")
    r = client.get("/api/candidates", headers=_auth_headers(forged))
    assert r.status_code == 401, r.text
    assert r.json() == {"error": "Invalid token"}


def test_tampered_token_is_rejected(client, hr_token):
    header, _, signature = hr_token.split(".")
    other = create_access_token({"userId": 999, "role": "hr"}, "another-secret")
    tampered = ".".join([header, other.split(".")[1], signature])
    r = client.get("/api/candidates", headers=_auth_headers(tampered))
    assert r.status_code == 401, r.text
    assert r.json() == {"error": "Invalid token"}


def test_expired_token_is_rejected(client):
    expired = create_access_token({"userId": 1, "role": "hr"}, TEST_SECRET, expires_hours=-1)
    r = client.get("/api/candidates", headers=_auth_headers(expired))
    assert r.status_code == 401, r.text
    assert r.json() == {"error": "Invalid token"}


def test_non_hr_role_is_forbidden(client):
    token = create_access_token({"userId": 1, "role": "admin"}, TEST_SECRET)
    r = client.get("/api/candidates", headers=_auth_headers(token))
    assert r.status_code == 403, r.text
    assert r.json() == {"error": "Forbidden"}


def test_unmatched_routes_are_not_found(client, hr_headers):
    assert client.get("/api/nope").json() == {"error": "Not found"}
    assert client.get("/api/nope").status_code == 404
    # Known path, unsupported method.
    r = client.delete("/api/candidates", headers=hr_headers)
    assert r.status_code == 404, r.text
    assert r.json() == {"error": "Not found"}


def test_whitespace_only_password_can_log_in(client):
    r = _signup(client, email="spaces@example.com", password="      ")
    assert r.status_code == 200, r.text

    r = _login(client, email="spaces@example.com", password="      ")
    assert r.status_code == 200, r.text
    assert decode_access_token(r.json()["token"], TEST_SECRET)["role"] == "hr"
