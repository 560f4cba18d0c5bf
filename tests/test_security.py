import pytest

from backend.hrdesk.config import ConfigError, Settings, load_settings
from backend.hrdesk.services.auth_service import authenticate, issue_token
from backend.hrdesk.utils.error_handlers import ForbiddenError, UnauthorizedError
from backend.hrdesk.utils.jwt import create_access_token, decode_access_token
from backend.hrdesk.utils.security import hash_password, verify_password


def test_password_hash_uses_cost_10_by_default():
    hashed = hash_password("secret1")
    assert hashed.startswith("$2b$10$")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_password_hashes_are_salted():
    assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)


def test_verify_password_rejects_garbage():
    assert not verify_password("secret1", "not-a-bcrypt-hash")
    assert not verify_password("", "$2b$04$abcdefghijklmnopqrstuu")
    assert not verify_password("x" * 100, hash_password("secret1", rounds=4))


def test_hash_password_rejects_long_passwords():
    with pytest.raises(ValueError):
        hash_password("x" * 73)


def test_decode_rejects_wrong_secret_and_expiry():
    token = create_access_token({"userId": 1, "role": "hr"}, "s1")
    assert decode_access_token(token, "s1")["userId"] == 1
    assert decode_access_token(token, "s2") is None
    assert decode_access_token("garbage", "s1") is None
    expired = create_access_token({"userId": 1, "role": "hr"}, "s1", expires_hours=-1)
    assert decode_access_token(expired, "s1") is None


def test_authenticate_gate():
    settings = Settings(jwt_secret="k")
    token = issue_token(5, "hr", settings)

    claims = authenticate(f"Bearer {token}", settings)
    assert claims["userId"] == 5
    assert claims["role"] == "hr"

    with pytest.raises(UnauthorizedError, match="No token provided"):
        authenticate(None, settings)
    with pytest.raises(UnauthorizedError, match="Invalid token"):
        authenticate("Bearer nope", settings)
    with pytest.raises(ForbiddenError):
        authenticate(f"Bearer {issue_token(5, 'admin', settings)}", settings)
    # Role check can be skipped.
    assert authenticate(f"Bearer {issue_token(5, 'admin', settings)}", settings, required_role=None)["role"] == "admin"


def test_load_settings_requires_secret():
    with pytest.raises(ConfigError):
        load_settings({})


def test_load_settings_ephemeral_secret_is_per_call():
    a = load_settings({"ALLOW_EPHEMERAL_SECRET": "1"})
    b = load_settings({"ALLOW_EPHEMERAL_SECRET": "1"})
    assert a.ephemeral_secret and b.ephemeral_secret
    assert a.jwt_secret != b.jwt_secret
    assert len(a.jwt_secret) == 128


def test_load_settings_reads_environment():
    s = load_settings({
        "JWT_SECRET": "abc",
        "PORT": "8080",
        "DATABASE_URL": "sqlite:///./x.db",
        "CORS_ORIGINS": "http://a.test, http://b.test",
        "TOKEN_TTL_HOURS": "2",
    })
    assert s.jwt_secret == "abc"
    assert not s.ephemeral_secret
    assert s.port == 8080
    assert s.database_url == "sqlite:///./x.db"
    assert s.cors_origins == ["http://a.test", "http://b.test"]
    assert s.token_ttl_hours == 2
    assert s.bcrypt_rounds == 10


@pytest.mark.parametrize("env", [{"PORT": "http"}, {"BCRYPT_ROUNDS": "2"}, {"TOKEN_TTL_HOURS": "0"}])
def test_load_settings_rejects_bad_numbers(env):
    with pytest.raises(ConfigError):
        load_settings({"JWT_SECRET": "abc", **env})
