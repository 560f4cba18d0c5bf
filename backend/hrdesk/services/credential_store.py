"""Persistence for user identities and password hashes."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.user import User
from ..utils.error_handlers import DuplicateKeyError, is_duplicate_key_error

logger = logging.getLogger(__name__)


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, *, name: str, email: str, password_hash: str, role: str = "hr") -> User:
    """Insert a user; raises DuplicateKeyError when the email is already taken."""
    email = email.strip().lower()
    user = User(name=name, email=email, password=password_hash, role=role)
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_duplicate_key_error(e):
            logger.info("Refused duplicate user email")
            raise DuplicateKeyError({"email": email}) from e
        raise
    db.refresh(user)
    return user
