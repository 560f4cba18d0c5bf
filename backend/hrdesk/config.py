import logging
import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# For automated tests (SQLite), we need to prevent backend/.env from overriding the
# test settings. Set DISABLE_DOTENV=1 to skip loading .env.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

# Default to a local SQLite DB for dev so the backend can start out-of-the-box.
# Use an absolute path so it works regardless of current working directory.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "dev.db").as_posix()
DEFAULT_DATABASE_URL = f"sqlite:///{_default_sqlite_path}"

_TRUTHY = {"1", "true", "True", "yes", "YES"}


class ConfigError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


@dataclass
class Settings:
    jwt_secret: str
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 5000
    token_ttl_hours: int = 8
    bcrypt_rounds: int = 10
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    # True when jwt_secret was generated for this process only.
    ephemeral_secret: bool = False


def _int_env(env: dict, name: str, default: int, *, minimum: int = 1) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


def load_settings(env: dict | None = None) -> Settings:
    """
    Build and validate settings from the environment.

    A missing JWT_SECRET is fatal unless ALLOW_EPHEMERAL_SECRET is set, in which
    case a random secret is generated for this process. Tokens signed with it do
    not survive a restart.
    """
    env = dict(os.environ if env is None else env)

    secret = (env.get("JWT_SECRET") or "").strip()
    ephemeral = False
    if not secret:
        if (env.get("ALLOW_EPHEMERAL_SECRET") or "0").strip() not in _TRUTHY:
            raise ConfigError(
                "JWT_SECRET is not set. Set it, or set ALLOW_EPHEMERAL_SECRET=1 for local development."
            )
        logger.warning("JWT_SECRET is not set. Generating temporary secret (dev only).")
        secret = secrets.token_hex(64)
        ephemeral = True

    origins = [
        origin.strip()
        for origin in (env.get("CORS_ORIGINS") or "*").split(",")
        if origin.strip()
    ]

    return Settings(
        jwt_secret=secret,
        database_url=(env.get("DATABASE_URL") or "").strip() or DEFAULT_DATABASE_URL,
        host=(env.get("HOST") or "0.0.0.0").strip(),
        port=_int_env(env, "PORT", 5000),
        token_ttl_hours=_int_env(env, "TOKEN_TTL_HOURS", 8),
        bcrypt_rounds=_int_env(env, "BCRYPT_ROUNDS", 10, minimum=4),
        cors_origins=origins or ["*"],
        log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
        ephemeral_secret=ephemeral,
    )
