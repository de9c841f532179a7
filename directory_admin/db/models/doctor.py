from sqlalchemy import Column, DateTime, Integer, String

from directory_admin.core.security import utcnow
from directory_admin.db.base import Base


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    specialization = Column(String(255), nullable=True)
    years_of_experience = Column(Integer, nullable=True)
    country_code = Column(String(10), nullable=True)
    mobile_number = Column(String(50), nullable=True)
    license_number = Column(String(100), nullable=True)
    clinic_address = Column(String, nullable=True)
    status = Column(String(50), nullable=False, default="new", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
