from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from directory_admin.core.security import utcnow
from directory_admin.db.base import Base


class Clinic(Base):
    __tablename__ = "clinics"

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=False)
    address = Column(String, nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    business_hours = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    doctor = relationship("Doctor", backref="clinics")
