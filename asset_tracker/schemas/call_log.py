from pydantic import BaseModel, field_validator
from typing import Optional

from asset_tracker.models.call_log import CallType, CallStatus


class CallLogCreateRequest(BaseModel):
    call_type:      CallType
    contact_person: str
    contact_number: Optional[str] = None
    description:    Optional[str] = None
    handled_by:     Optional[str] = None

    @field_validator("contact_person")
    @classmethod
    def check_contact(cls, v):
        if not v.strip(): raise ValueError("Contact person cannot be empty")
        return v.strip()


class CallLogUpdateRequest(BaseModel):
    status:      CallStatus
    description: Optional[str] = None
    handled_by:  Optional[str] = None
