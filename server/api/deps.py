# server/api/deps.py

import logging
from dataclasses import dataclass
from fastapi import Header, HTTPException, Request
from core.errors import BlogError, Unauthenticated
from core.security import ExpiredToken, TokenError, verify_token


logger = logging.getLogger(__name__)


@dataclass
class AuthState:
    is_authenticated: bool
    user_id: str | None = None


def http_error(e: BlogError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pulls the token out of an `Authorization: Bearer <token>` header.
    Raises Unauthenticated naming what is wrong with the header.
    """
    if not authorization:
        raise Unauthenticated("No authorization token provided")
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise Unauthenticated("Invalid token format. Use 'Bearer TOKEN'")
    return token.strip()


def authenticate(authorization: str | None) -> str:
    token = extract_bearer_token(authorization)
    try:
        return verify_token(token)
    except ExpiredToken:
        raise Unauthenticated("Token expired")
    except TokenError:
        raise Unauthenticated("Invalid token")


# -------------------------------
# Route dependencies
# -------------------------------

def require_user(request: Request, authorization: str | None = Header(None)) -> str:
    """
    Mandatory gate: rejects the request with 401 unless it carries a valid bearer token.
    """
    try:
        user_id = authenticate(authorization)
    except Unauthenticated as e:
        raise http_error(e)

    request.state.user_id = user_id
    request.state.is_authenticated = True
    return user_id


def optional_user(request: Request, authorization: str | None = Header(None)) -> AuthState:
    """
    Optional gate: never rejects, only records whether the caller is authenticated.
    """
    try:
        user_id = authenticate(authorization)
    except Unauthenticated as e:
        logger.debug("Proceeding unauthenticated: %s", e.message)
        request.state.user_id = None
        request.state.is_authenticated = False
        return AuthState(is_authenticated=False)

    request.state.user_id = user_id
    request.state.is_authenticated = True
    return AuthState(is_authenticated=True, user_id=user_id)
