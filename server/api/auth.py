# server/api/auth.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy.orm import Session
from api.deps import AuthState, http_error, optional_user
from core import store
from core.errors import BlogError
from core.security import hash_password, verify_password, issue_token
from database import get_db


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


def require_credentials(data: Credentials):
    if not data.username or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required"
        )


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: Credentials, db: Session = Depends(get_db)):
    require_credentials(data)
    if store.get_user_by_username(db, data.username):
        raise HTTPException(status_code=400, detail="Username already exists")
    try:
        user = store.create_user(db, data.username, hash_password(data.password))
    except BlogError as e:
        raise http_error(e)

    logger.info("Registered user %s (%s)", data.username, user.id)
    return {"message": "User registered successfully", "userId": user.id}


@router.post("/login")
def login(data: Credentials, db: Session = Depends(get_db)):
    require_credentials(data)
    user = store.get_user_by_username(db, data.username)
    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Rejected login for %s", data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )
    logger.info("User %s logged in", user.id)
    return {"message": "Login successful", "token": issue_token(user.id), "userId": user.id}


@router.get("/status")
def auth_status(auth: AuthState = Depends(optional_user)):
    """
    Reports whether the caller sent a valid bearer token.
    Anonymous callers get 200 with isAuthenticated false.
    """
    return {"isAuthenticated": auth.is_authenticated, "userId": auth.user_id}
