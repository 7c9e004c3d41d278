"""Journal login: bcrypt password hashes, JWT bearer tokens and TOTP second factor."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
import pyotp
from sqlmodel import Session, select

from journal.config import settings
from journal.errors import AuthenticationError, RegistrationError
from journal.models.user import User

logger = logging.getLogger(__name__)

TOTP_ISSUER = "Crypto Trade Journal"
# bcrypt ignores input past 72 bytes
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    """Issue a signed token whose `sub` claim is the username."""
    now = datetime.now(timezone.utc)
    minutes = settings.jwt_expire_minutes if expires_minutes is None else expires_minutes
    payload = {"sub": subject, "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the token's username, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return payload.get("sub")


def verify_totp(secret: str, code: str) -> bool:
    return pyotp.TOTP(secret).verify(code, valid_window=1)


def generate_totp_secret() -> str:
    return pyotp.random_base32()


def get_totp_uri(secret: str, username: str) -> str:
    return pyotp.TOTP(secret).provisioning_uri(name=username, issuer_name=TOTP_ISSUER)


def find_user(session: Session, username: str) -> User | None:
    return session.exec(select(User).where(User.username == username)).first()


def authenticate_user(session: Session, username: str, password: str, totp_code: str) -> User:
    """Check all three login factors and return the journal owner.

    Unknown, inactive and wrong-password attempts share one message so the
    response does not reveal which usernames exist.
    """
    user = find_user(session, username)
    if user is None or not user.is_active:
        logger.info(f"Login rejected for unknown or inactive user {username!r}")
        raise AuthenticationError("Invalid credentials")
    if not verify_password(password, user.hashed_password):
        logger.info(f"Login rejected for {username!r}: bad password")
        raise AuthenticationError("Invalid credentials")
    if not verify_totp(user.totp_secret, totp_code):
        logger.info(f"Login rejected for {username!r}: bad TOTP code")
        raise AuthenticationError("Invalid TOTP code")
    logger.info(f"User {username!r} logged in")
    return user


def register_user(session: Session, username: str, password: str) -> User:
    """Create an active journal user with a fresh TOTP secret."""
    username = username.strip()
    if not username:
        raise RegistrationError("Username cannot be empty")
    if not password:
        raise RegistrationError("Password cannot be empty")
    if find_user(session, username) is not None:
        raise RegistrationError(f"User {username!r} already exists")

    user = User(
        username=username,
        hashed_password=hash_password(password),
        totp_secret=generate_totp_secret(),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Created journal user {username!r} (id={user.id})")
    return user
