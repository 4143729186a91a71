import enum
from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from asset_tracker.database import Base, value_enum


class ComplaintStatus(str, enum.Enum):
    OPEN        = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED    = "Resolved"


class ComplaintPriority(str, enum.Enum):
    LOW      = "Low"
    MEDIUM   = "Medium"
    HIGH     = "High"
    CRITICAL = "Critical"


class Complaint(Base):
    __tablename__ = "complaints"

    comp_id           = Column(Integer, primary_key=True, index=True)
    asset_id          = Column(Integer, ForeignKey("assets.asset_id"), nullable=False, index=True)
    raised_by         = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    issue             = Column(Text, nullable=False)
    comp_status       = Column(value_enum(ComplaintStatus, "complaint_status"),
                               default=ComplaintStatus.OPEN, nullable=False)
    priority          = Column(value_enum(ComplaintPriority, "complaint_priority"),
                               default=ComplaintPriority.MEDIUM, nullable=False)
    creation_time     = Column(TIMESTAMP(timezone=True), nullable=False)
    eng_assigned      = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    expected_res_date = Column(TIMESTAMP(timezone=True), nullable=True)
    spare_req         = Column(String(255), nullable=True)
    total_time_taken  = Column(String(20), nullable=True)   # derived, HH:MM:SS
    actual_res_date   = Column(TIMESTAMP(timezone=True), nullable=True)
    comp_type         = Column(String(100), nullable=True)
    updated_at        = Column(TIMESTAMP(timezone=True), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    asset    = relationship("Asset", back_populates="complaints")
    raiser   = relationship("User", foreign_keys=[raised_by], back_populates="raised_complaints")
    assignee = relationship("User", foreign_keys=[eng_assigned], back_populates="assigned_complaints")

    def __repr__(self):
        return f"<Complaint comp_id={self.comp_id} assetId={self.asset_id} status={self.comp_status}>"
