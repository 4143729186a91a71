from pydantic import BaseModel
from typing import Optional

from asset_tracker.models.pm_report import ReportStatus


class PMReportUpdateRequest(BaseModel):
    status: Optional[ReportStatus] = None
    notes:  Optional[str]          = None
