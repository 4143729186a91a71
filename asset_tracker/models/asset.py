import enum
from sqlalchemy import Column, Integer, String, Date, ForeignKey, TIMESTAMP, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from asset_tracker.database import Base, value_enum


class AssetCategory(str, enum.Enum):
    PC_CPU  = "PC/CPU"
    PRINTER = "Printer"
    ROUTER  = "Router"
    OS      = "OS"
    LICENSE = "License"
    STORAGE = "Storage"


class AssetStatus(str, enum.Enum):
    ACTIVE    = "Active"
    IN_REPAIR = "In Repair"


class CoverageType(str, enum.Enum):
    AMC      = "AMC"
    WARRANTY = "Warranty"


class Asset(Base):
    __tablename__ = "assets"

    asset_id        = Column(Integer, primary_key=True, index=True)
    asset_name      = Column(String(200), nullable=False)
    category        = Column(value_enum(AssetCategory, "asset_category"), nullable=False)
    serial_number   = Column(String(100), nullable=False, index=True)
    status          = Column(value_enum(AssetStatus, "asset_status"), default=AssetStatus.ACTIVE, nullable=False)
    location        = Column(String(200), nullable=True)
    purchase_date   = Column(Date, nullable=True)
    warranty_expiry = Column(Date, nullable=True)
    amc_or_warranty = Column(value_enum(CoverageType, "coverage_type"), nullable=True)
    inventory_count = Column(Integer, default=0, nullable=False)
    vendor_name     = Column(String(200), nullable=True)
    dept_id         = Column(Integer, ForeignKey("departments.dept_id"), nullable=False, index=True)
    created_at      = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at      = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                             onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("inventory_count >= 0", name="chk_inventory_non_negative"),
    )

    # ─── Relationships ─────────────────────────────────────────────────────────
    department = relationship("Department", back_populates="assets")
    complaints = relationship("Complaint", back_populates="asset", passive_deletes="all")
    pm_reports = relationship("PMReport", back_populates="asset", passive_deletes="all")

    def __repr__(self):
        return f"<Asset asset_id={self.asset_id} name={self.asset_name} status={self.status}>"
