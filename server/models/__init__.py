# server/models/__init__.py

import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def generate_id() -> str:
    """24 hex characters, the identifier syntax accepted by the blog routes."""
    return uuid.uuid4().hex[:24]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


from .user import User  # noqa: E402,F401
from .blog import Blog, BlogStatus  # noqa: E402,F401
