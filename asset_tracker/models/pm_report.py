import enum
from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from asset_tracker.database import Base, value_enum


class ReportType(str, enum.Enum):
    MAINTENANCE = "Maintenance"
    INSPECTION  = "Inspection"
    REPAIR      = "Repair"


class ReportStatus(str, enum.Enum):
    PENDING  = "Pending"
    REVIEWED = "Reviewed"
    APPROVED = "Approved"


class PMReport(Base):
    __tablename__ = "pm_reports"

    report_id   = Column(Integer, primary_key=True, index=True)
    asset_id    = Column(Integer, ForeignKey("assets.asset_id"), nullable=False, index=True)
    report_type = Column(value_enum(ReportType, "report_type"), nullable=False)
    file_name   = Column(String(255), nullable=False)
    file_path   = Column(String(500), nullable=False)
    file_size   = Column(Integer, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    status      = Column(value_enum(ReportStatus, "report_status"), default=ReportStatus.PENDING, nullable=False)
    notes       = Column(Text, nullable=True)
    uploaded_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    reviewed_at = Column(TIMESTAMP(timezone=True), nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    asset    = relationship("Asset", back_populates="pm_reports")
    uploader = relationship("User", back_populates="pm_reports")

    def __repr__(self):
        return f"<PMReport report_id={self.report_id} assetId={self.asset_id} status={self.status}>"
