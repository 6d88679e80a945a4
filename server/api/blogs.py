# server/api/blogs.py

import logging
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from api.deps import http_error, require_user
from core import reconciler, store
from core.errors import BlogError
from database import get_db


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blogs", tags=["blogs"])


# -------------------------------
# Schemas
# -------------------------------

class BlogRequest(BaseModel):
    """
    Body shared by save-draft and publish.
    `tags` may be a list or a comma separated string.
    """
    id: str | None = None
    title: str | None = None
    content: str | None = None
    tags: list[str] | str | None = None


class BlogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    content: str
    tags: list[str] = []
    status: str
    published_at: datetime | None = Field(default=None, serialization_alias="publishedAt")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @field_serializer("published_at", "created_at", "updated_at")
    def serialize_timestamp(self, value: datetime | None):
        if value is None:
            return None
        # SQLite hands timestamps back without tzinfo; they are stored as UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


def serialize_blog(blog) -> dict:
    return BlogOut.model_validate(blog).model_dump(by_alias=True)


def require_valid_id(blog_id: str):
    if not store.is_valid_id(blog_id):
        raise HTTPException(status_code=400, detail="Invalid blog ID format")


# -------------------------------
# Draft / Publish
# -------------------------------

@router.post("/save-draft")
def save_draft(req: BlogRequest, db: Session = Depends(get_db), user_id: str = Depends(require_user)):
    try:
        blog, created = reconciler.save_draft(
            db, post_id=req.id, title=req.title, content=req.content, tags=req.tags
        )
    except BlogError as e:
        raise http_error(e)

    logger.debug("Draft %s saved by user %s", blog.id, user_id)
    return JSONResponse(
        status_code=201 if created else 200,
        content={"message": "Draft saved" if created else "Draft updated", "blog": serialize_blog(blog)}
    )


@router.post("/publish")
def publish(req: BlogRequest, db: Session = Depends(get_db), user_id: str = Depends(require_user)):
    try:
        blog, created = reconciler.publish(
            db, post_id=req.id, title=req.title, content=req.content, tags=req.tags
        )
    except BlogError as e:
        raise http_error(e)

    logger.debug("Blog %s published by user %s", blog.id, user_id)
    return JSONResponse(
        status_code=201 if created else 200,
        content={"message": "Blog published", "blog": serialize_blog(blog)}
    )


# -------------------------------
# Read / Delete
# -------------------------------

@router.get("")
def list_published(db: Session = Depends(get_db)):
    return [serialize_blog(blog) for blog in store.list_published_blogs(db)]


@router.get("/all")
def list_all(db: Session = Depends(get_db), user_id: str = Depends(require_user)):
    return [serialize_blog(blog) for blog in store.list_all_blogs(db)]


@router.get("/{blog_id}")
def get_blog(blog_id: str, db: Session = Depends(get_db)):
    require_valid_id(blog_id)
    blog = store.get_blog(db, blog_id)
    if blog is None:
        raise HTTPException(status_code=404, detail="Blog not found")
    return serialize_blog(blog)


@router.delete("/{blog_id}")
def delete_blog(blog_id: str, db: Session = Depends(get_db), user_id: str = Depends(require_user)):
    require_valid_id(blog_id)
    blog = store.get_blog(db, blog_id)
    if blog is None:
        raise HTTPException(status_code=404, detail="Blog not found")
    try:
        store.delete_blog(db, blog)
    except BlogError as e:
        raise http_error(e)

    logger.info("Blog %s deleted by user %s", blog_id, user_id)
    return {"message": "Blog deleted successfully"}
