from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from asset_tracker.models.complaint import ComplaintStatus, ComplaintPriority

ISSUE_MIN_LENGTH = 10


class ComplaintCreateRequest(BaseModel):
    asset_id:          int
    raised_by:         int
    issue:             str
    priority:          ComplaintPriority = ComplaintPriority.MEDIUM
    comp_status:       ComplaintStatus   = ComplaintStatus.OPEN
    eng_assigned:      Optional[int]      = None
    expected_res_date: Optional[datetime] = None
    spare_req:         Optional[str]      = None
    comp_type:         Optional[str]      = None

    @field_validator("issue")
    @classmethod
    def check_issue(cls, v):
        v = v.strip()
        if not v: raise ValueError("Issue cannot be empty")
        if len(v) < ISSUE_MIN_LENGTH:
            raise ValueError(f"Issue must be at least {ISSUE_MIN_LENGTH} characters")
        return v


class ComplaintUpdateRequest(BaseModel):
    """
    Partial update. Only fields present in the request body are written;
    `total_time_taken` is derived from `actual_res_date` and cannot be sent.
    """
    asset_id:          Optional[int]               = None
    raised_by:         Optional[int]               = None
    issue:             Optional[str]               = None
    comp_status:       Optional[ComplaintStatus]   = None
    priority:          Optional[ComplaintPriority] = None
    eng_assigned:      Optional[int]               = None
    expected_res_date: Optional[datetime]          = None
    spare_req:         Optional[str]               = None
    actual_res_date:   Optional[datetime]          = None
    comp_type:         Optional[str]               = None

    @field_validator("issue")
    @classmethod
    def check_issue(cls, v):
        if v is not None and not v.strip(): raise ValueError("Issue cannot be empty")
        return v.strip() if v else v

    @field_validator("asset_id", "raised_by", "comp_status", "priority")
    @classmethod
    def check_not_null(cls, v):
        if v is None: raise ValueError("Field cannot be null")
        return v


class AssignEngineerRequest(BaseModel):
    eng_assigned: int
