# tests/test_security.py

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from core.config import JWT_ALGORITHM, JWT_SECRET_KEY
from core.security import (
    ExpiredToken,
    InvalidToken,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)


def test_token_round_trip():
    token = issue_token("a" * 24)
    assert verify_token(token) == "a" * 24


def test_token_valid_one_hour_after_issue():
    issued = datetime.now(timezone.utc) - timedelta(hours=1)
    assert verify_token(issue_token("abc", now=issued)) == "abc"


def test_token_expired_after_one_day():
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    with pytest.raises(ExpiredToken):
        verify_token(issue_token("abc", now=issued))


def test_token_with_wrong_signature_is_invalid():
    forged = jwt.encode(
        {"userId": "abc", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "another-secret",
        algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        verify_token(forged)


def test_garbage_token_is_invalid():
    with pytest.raises(InvalidToken):
        verify_token("not.a.token")


def test_token_without_user_id_is_invalid():
    token = jwt.encode(
        {"sub": "abc", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        JWT_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        verify_token(token)


def test_expired_is_not_reported_as_invalid():
    issued = datetime.now(timezone.utc) - timedelta(days=2)
    with pytest.raises(ExpiredToken) as excinfo:
        verify_token(issue_token("abc", now=issued))
    assert not isinstance(excinfo.value, InvalidToken)


def test_password_hash_is_one_way():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)
