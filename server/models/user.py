# server/models/user.py

from sqlalchemy import Column, String, DateTime
from . import Base, generate_id, utcnow


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for blog authors.
    Stores username and bcrypt password hash for authentication.
    """
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_id)
    username = Column(String(150), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
