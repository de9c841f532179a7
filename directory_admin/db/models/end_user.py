from sqlalchemy import Column, DateTime, Integer, String

from directory_admin.core.security import utcnow
from directory_admin.db.base import Base


class EndUser(Base):
    """A registered user of the public directory app (read-only here)."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    mobile = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
