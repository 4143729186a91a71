from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from asset_tracker.database import Base


class Department(Base):
    __tablename__ = "departments"

    dept_id    = Column(Integer, primary_key=True, index=True)
    dept_name  = Column(String(100), unique=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    users  = relationship("User", back_populates="department")
    assets = relationship("Asset", back_populates="department")

    def __repr__(self):
        return f"<Department dept_id={self.dept_id} name={self.dept_name}>"
