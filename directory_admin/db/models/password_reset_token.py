from sqlalchemy import Boolean, Column, DateTime, Integer, String

from directory_admin.core.security import utcnow
from directory_admin.db.base import Base


class PasswordResetToken(Base):
    __tablename__ = "admin_password_reset_tokens"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, nullable=False, index=True)
    user_type = Column(String(50), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
