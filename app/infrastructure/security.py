"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

ALGORITHM = "HS256"

# Raise "rounds" when the CPU budget allows it.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {**data, "type": "access", "exp": expire},
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
    if payload.get("type") != "access":
        raise ValueError("Could not validate credentials")
    return payload


def create_refresh_token(data: dict) -> tuple[str, datetime]:
    """Return a signed refresh token and its expiry.

    A random ``jti`` keeps tokens issued in the same second distinct.
    """

    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.refresh_token_expire_days)
    token = jwt.encode(
        {**data, "type": "refresh", "jti": secrets.token_hex(16), "exp": expire},
        settings.effective_refresh_secret_key,
        algorithm=ALGORITHM,
    )
    return token, expire


def decode_refresh_token(token: str) -> dict:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.effective_refresh_secret_key, algorithms=[ALGORITHM]
        )
    except JWTError as exc:
        raise ValueError("Invalid refresh token") from exc
    if payload.get("type") != "refresh":
        raise ValueError("Invalid refresh token")
    return payload


TEMP_PASSWORD_CLASSES = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    "!#$%&*+-=?@^_",
)


def generate_secure_password(length: int = 12) -> str:
    """Temporary password for admin-created accounts, one char from each class."""

    rng = secrets.SystemRandom()
    chars = [rng.choice(group) for group in TEMP_PASSWORD_CLASSES]
    pool = "".join(TEMP_PASSWORD_CLASSES)
    chars += [rng.choice(pool) for _ in range(max(length, 8) - len(chars))]
    rng.shuffle(chars)
    return "".join(chars)
