# server/core/reconciler.py

"""
Draft/publish reconciliation.

Both the save-draft and the publish endpoints funnel into `reconcile_post`,
which resolves the target post in two explicit steps:

1. by identifier, when the client sent one that exists;
2. by exact title, updating the match or creating a new post.

A stale or unknown identifier is not an error: it simply falls through to
the title lookup.
"""

import logging
from datetime import datetime
from typing import Iterable
from sqlalchemy.orm import Session
from core import store
from core.errors import InvalidInput
from core.state import with_title_lock
from models import Blog, BlogStatus, utcnow


logger = logging.getLogger(__name__)


def normalize_tags(tags: str | Iterable[str] | None) -> list[str]:
    """
    Accepts tags as a list or as one comma separated string.
    Strings are split, trimmed and stripped of empty entries, keeping order.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        return [tag.strip() for tag in tags.split(",") if tag.strip()]
    return list(tags)


def validate_post_input(title: str | None, content: str | None):
    if not title or not title.strip() or not content or not content.strip():
        raise InvalidInput("Title and content are required")


def apply_fields(blog: Blog, title: str, content: str, tags: list[str],
                 target_status: BlogStatus, now: datetime):
    blog.title = title
    blog.content = content
    blog.tags = tags
    blog.status = target_status.value
    if target_status is BlogStatus.PUBLISHED:
        blog.published_at = now
    else:
        blog.published_at = None


def reconcile_post(
    db: Session,
    *,
    title: str | None,
    content: str | None,
    tags: str | Iterable[str] | None = None,
    target_status: BlogStatus,
    post_id: str | None = None,
    now: datetime | None = None,
) -> tuple[Blog, bool]:
    """
    Saves a post with `target_status` and returns `(blog, created)`.

    `created` is True only when a brand new post was inserted.
    Raises InvalidInput before touching the store when title or content is blank,
    and StoreFailure when the write fails.
    """
    validate_post_input(title, content)
    tag_list = normalize_tags(tags)
    now = now or utcnow()

    if post_id and store.is_valid_id(post_id):
        blog = store.get_blog(db, post_id)
        if blog is not None:
            apply_fields(blog, title, content, tag_list, target_status, now)
            store.save_blog(db, blog, now)
            logger.info("Updated blog %s by id as %s", blog.id, target_status.value)
            return blog, False
        logger.debug("Blog id %s not found, falling back to title lookup", post_id)

    with with_title_lock(title):
        blog = store.find_blog_by_title(db, title)
        created = blog is None
        if created:
            blog = Blog()
        apply_fields(blog, title, content, tag_list, target_status, now)
        store.save_blog(db, blog, now)

    logger.info(
        "%s blog %s by title as %s",
        "Created" if created else "Updated", blog.id, target_status.value
    )
    return blog, created


def save_draft(db: Session, **fields) -> tuple[Blog, bool]:
    return reconcile_post(db, target_status=BlogStatus.DRAFT, **fields)


def publish(db: Session, **fields) -> tuple[Blog, bool]:
    return reconcile_post(db, target_status=BlogStatus.PUBLISHED, **fields)
