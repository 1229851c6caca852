from datetime import datetime

from jose import JWTError, jwt
from passlib.context import CryptContext

from family_loans.config import settings
from family_loans.core.exceptions import UnauthorizedException

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (salted, one-way)"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash in constant time"""
    return pwd_context.verify(plain_password, hashed_password)


# Verified against when the family name is unknown, so a miss costs the
# same as a wrong password.
DUMMY_PASSWORD_HASH = hash_password("family-loans-dummy-password")


def encode_session_token(session_id: str, expires_at: datetime) -> str:
    """
    Wrap a server-side session id in a signed cookie token.

    The token itself grants nothing: the session id must still exist
    in the session store for the request to be authenticated.
    """
    payload = {"sid": session_id, "exp": expires_at}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> str:
    """
    Validate a session cookie token and return its session id.

    Args:
        token: Raw cookie value

    Returns:
        The session id from the 'sid' claim

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid session token: {str(e)}")

    # jose only checks exp when present
    if payload.get("exp") is None:
        raise UnauthorizedException("Session token missing expiration")

    session_id = payload.get("sid")
    if not session_id:
        raise UnauthorizedException("Session token missing session identifier")

    return session_id
