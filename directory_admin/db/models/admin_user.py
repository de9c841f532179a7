from sqlalchemy import Column, ForeignKey, Integer, String

from directory_admin.db.base import Base
from directory_admin.db.models.account import AccountColumns


class AdminUser(AccountColumns, Base):
    __tablename__ = "admin_users"

    role = Column(String(50), nullable=False, default="admin", index=True)
    department = Column(String(255), nullable=True)
    created_by = Column(Integer, ForeignKey("super_admins.id", ondelete="SET NULL"), nullable=True)
