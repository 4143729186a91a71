import enum
from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from asset_tracker.database import Base, value_enum


class UserRole(str, enum.Enum):
    ADMIN    = "Admin"
    ENGINEER = "Engineer"


class User(Base):
    __tablename__ = "users"

    user_id       = Column(Integer, primary_key=True, index=True)
    username      = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    user_role     = Column(value_enum(UserRole, "user_role"), nullable=False)
    dept_id       = Column(Integer, ForeignKey("departments.dept_id"), nullable=True)
    created_at    = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    department          = relationship("Department", back_populates="users")
    raised_complaints   = relationship("Complaint", foreign_keys="Complaint.raised_by", back_populates="raiser")
    assigned_complaints = relationship("Complaint", foreign_keys="Complaint.eng_assigned", back_populates="assignee")
    pm_reports          = relationship("PMReport", back_populates="uploader")

    def __repr__(self):
        return f"<User user_id={self.user_id} username={self.username} role={self.user_role}>"
