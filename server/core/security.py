# server/core/security.py

from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from core.config import JWT_SECRET_KEY, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    pass


class ExpiredToken(TokenError):
    pass


class InvalidToken(TokenError):
    pass


# -------------------------------
# Passwords
# -------------------------------

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------
# Tokens
# -------------------------------

def issue_token(user_id: str, now: datetime | None = None, expires_delta: timedelta | None = None) -> str:
    """
    Signs a bearer token carrying the user id.
    The token expires one day after `now` unless `expires_delta` says otherwise.
    """
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"userId": user_id, "iat": issued_at, "exp": expire}
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> str:
    """
    Returns the user id bound to `token`.
    Raises ExpiredToken past expiry and InvalidToken for anything else wrong.
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise ExpiredToken("Token expired") from e
    except JWTError as e:
        raise InvalidToken("Invalid token") from e

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidToken("Invalid token")
    return user_id
