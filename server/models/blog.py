# server/models/blog.py

import enum
from sqlalchemy import Column, String, Text, DateTime, JSON
from . import Base, generate_id, utcnow


class BlogStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


# -------------------------------
# Blog Model
# -------------------------------

class Blog(Base):
    """
    Database model for blog posts.
    `published_at` is set exactly when `status` is published.
    """
    __tablename__ = "blogs"

    id = Column(String(24), primary_key=True, default=generate_id)
    title = Column(String(300), index=True, nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    status = Column(String(20), default=BlogStatus.DRAFT.value, index=True, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
