"""User model for station operators."""
from sqlalchemy import Column, String, DateTime, Uuid, func
import uuid
from evcharge.database import Base


class User(Base):
    """Registered user; email is stored normalized (trimmed, lowercase)."""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
