"""
Signup, login and bearer-token checks.

Tokens carry `userId` and `role` claims and expire after the configured TTL
(8 hours by default). Login failures never reveal whether the email exists.
"""
import logging

from sqlalchemy.orm import Session

from ..config import Settings
from ..utils.error_handlers import (
    ConflictError,
    ForbiddenError,
    UnauthorizedError,
    get_error_message,
)
from ..utils.jwt import create_access_token, decode_access_token
from ..utils.security import hash_password, verify_password
from .credential_store import create_user, find_user_by_email

logger = logging.getLogger(__name__)

HR_ROLE = "hr"


def issue_token(user_id: int, role: str, settings: Settings) -> str:
    return create_access_token(
        {"userId": user_id, "role": role},
        settings.jwt_secret,
        expires_hours=settings.token_ttl_hours,
    )


def signup(db: Session, settings: Settings, *, name: str, email: str, password: str) -> str:
    email = email.strip().lower()
    if find_user_by_email(db, email):
        raise ConflictError(get_error_message("email_exists"))

    password_hash = hash_password(password, rounds=settings.bcrypt_rounds)
    user = create_user(db, name=name, email=email, password_hash=password_hash, role=HR_ROLE)
    logger.info("User %s signed up", user.id)
    return issue_token(user.id, user.role, settings)


def login(db: Session, settings: Settings, *, email: str, password: str) -> str:
    user = find_user_by_email(db, email)
    if user is None or not verify_password(password, user.password):
        logger.info("Rejected login attempt")
        raise UnauthorizedError(get_error_message("invalid_credentials"))
    logger.info("User %s logged in", user.id)
    return issue_token(user.id, user.role, settings)


def authenticate(authorization: str | None, settings: Settings, required_role: str | None = HR_ROLE) -> dict:
    """
    Validate an Authorization header value and return the token claims.

    Raises UnauthorizedError for a missing or unverifiable token and
    ForbiddenError when the role claim does not match `required_role`.
    """
    if not authorization:
        raise UnauthorizedError(get_error_message("no_token"))

    token = authorization.replace("Bearer ", "", 1).strip()
    claims = decode_access_token(token, settings.jwt_secret)
    if claims is None:
        logger.debug("Rejected bearer token")
        raise UnauthorizedError(get_error_message("invalid_token"))

    if required_role and claims.get("role") != required_role:
        raise ForbiddenError(get_error_message("forbidden"))

    return claims
