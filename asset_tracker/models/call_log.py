import enum
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from asset_tracker.database import Base, value_enum


class CallType(str, enum.Enum):
    PHONE   = "Phone"
    EMAIL   = "Email"
    WALK_IN = "Walk-in"


class CallStatus(str, enum.Enum):
    OPEN        = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED      = "Closed"


class CallLog(Base):
    __tablename__ = "call_logs"

    call_id        = Column(Integer, primary_key=True, index=True)
    call_type      = Column(value_enum(CallType, "call_type"), nullable=False)
    contact_person = Column(String(150), nullable=False)
    contact_number = Column(String(50), nullable=True)
    description    = Column(Text, nullable=True)
    handled_by     = Column(String(100), nullable=True)   # engineer username, not an id
    status         = Column(value_enum(CallStatus, "call_status"), default=CallStatus.OPEN, nullable=False)
    created_at     = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at     = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                            onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<CallLog call_id={self.call_id} type={self.call_type} status={self.status}>"
