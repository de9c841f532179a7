from sqlalchemy import Column, DateTime, String

from directory_admin.db.base import Base
from directory_admin.db.models.account import AccountColumns


class SuperAdmin(AccountColumns, Base):
    __tablename__ = "super_admins"

    # Legacy single-token reset columns; cleared whenever a reset completes
    password_reset_token = Column(String(255), nullable=True, index=True)
    password_reset_expires = Column(DateTime(timezone=True), nullable=True)
