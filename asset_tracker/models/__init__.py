"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters: import parent tables before child tables.
"""

from asset_tracker.models.department import Department
from asset_tracker.models.user import User, UserRole
from asset_tracker.models.asset import Asset, AssetCategory, AssetStatus, CoverageType
from asset_tracker.models.complaint import Complaint, ComplaintStatus, ComplaintPriority
from asset_tracker.models.call_log import CallLog, CallType, CallStatus
from asset_tracker.models.pm_report import PMReport, ReportType, ReportStatus

__all__ = [
    "Department",
    "User",
    "UserRole",
    "Asset",
    "AssetCategory",
    "AssetStatus",
    "CoverageType",
    "Complaint",
    "ComplaintStatus",
    "ComplaintPriority",
    "CallLog",
    "CallType",
    "CallStatus",
    "PMReport",
    "ReportType",
    "ReportStatus",
]
