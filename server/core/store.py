# server/core/store.py

import logging
import re
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from core.errors import InvalidInput, StoreFailure
from models import Blog, BlogStatus, User, utcnow


logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_id(value: str | None) -> bool:
    return bool(value) and OBJECT_ID_PATTERN.match(value) is not None


def commit_or_fail(db: Session, action: str):
    """
    Commits the session, rolling back and raising StoreFailure on any database error.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure while trying to %s", action)
        raise StoreFailure(f"Failed to {action}: {e}") from e


# -------------------------------
# Credential Store
# -------------------------------

def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalars(select(User).where(User.username == username)).first()


def create_user(db: Session, username: str, password_hash: str) -> User:
    user = User(username=username, password_hash=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race against another registration of the same username.
        db.rollback()
        raise InvalidInput("Username already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure while trying to create user")
        raise StoreFailure(f"Failed to create user: {e}") from e
    return user


# -------------------------------
# Post Store
# -------------------------------

def get_blog(db: Session, blog_id: str) -> Blog | None:
    # Ids are stored lowercase; normalize so uppercase hex resolves too.
    return db.get(Blog, blog_id.lower())


def find_blog_by_title(db: Session, title: str) -> Blog | None:
    stmt = (
        select(Blog)
        .where(Blog.title == title)
        .order_by(Blog.updated_at.desc())
    )
    return db.scalars(stmt).first()


def list_published_blogs(db: Session) -> list[Blog]:
    stmt = (
        select(Blog)
        .where(Blog.status == BlogStatus.PUBLISHED.value)
        .order_by(Blog.published_at.desc())
    )
    return list(db.scalars(stmt))


def list_all_blogs(db: Session) -> list[Blog]:
    stmt = select(Blog).order_by(
        Blog.updated_at.desc(),
        Blog.published_at.desc().nulls_last(),
    )
    return list(db.scalars(stmt))


def save_blog(db: Session, blog: Blog, now: datetime | None = None) -> Blog:
    """
    Inserts or updates `blog` in one commit.
    """
    now = now or utcnow()
    if blog.created_at is None:
        blog.created_at = now
    blog.updated_at = now
    db.add(blog)
    commit_or_fail(db, "save blog")
    return blog


def delete_blog(db: Session, blog: Blog):
    db.delete(blog)
    commit_or_fail(db, "delete blog")
