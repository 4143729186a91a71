from sqlalchemy.orm import Session

from asset_tracker.models.call_log import CallLog, CallStatus
from asset_tracker.schemas.call_log import CallLogCreateRequest, CallLogUpdateRequest
from asset_tracker.utils.events import notifier
from asset_tracker.utils.exceptions import NotFoundException
from asset_tracker.utils.timeutils import isoformat, utcnow


def _serialize(c: CallLog) -> dict:
    return {
        "call_id":        c.call_id,
        "call_type":      c.call_type.value,
        "contact_person": c.contact_person,
        "contact_number": c.contact_number,
        "description":    c.description,
        "handled_by":     c.handled_by,
        "status":         c.status.value,
        "created_at":     isoformat(c.created_at),
        "updated_at":     isoformat(c.updated_at),
    }


class CallLogService:

    def list_call_logs(self, db: Session) -> list[dict]:
        # Not department-scoped: every role sees the full call log
        items = db.query(CallLog).order_by(CallLog.created_at.desc(), CallLog.call_id.desc()).all()
        return [_serialize(c) for c in items]

    def get_call_log(self, db: Session, call_id: int) -> dict:
        c = db.query(CallLog).filter(CallLog.call_id == call_id).first()
        if not c: raise NotFoundException("Call log")
        return _serialize(c)

    def create_call_log(self, db: Session, data: CallLogCreateRequest) -> int:
        now = utcnow()
        c = CallLog(
            call_type=data.call_type,
            contact_person=data.contact_person,
            contact_number=data.contact_number,
            description=data.description,
            handled_by=data.handled_by,
            status=CallStatus.OPEN,
            created_at=now,
            updated_at=now,
        )
        db.add(c)
        db.commit()
        notifier.publish("CallLog", "CREATE", c.call_id)
        return c.call_id

    def update_call_log(self, db: Session, call_id: int, data: CallLogUpdateRequest) -> None:
        c = db.query(CallLog).filter(CallLog.call_id == call_id).first()
        if not c: raise NotFoundException("Call log")

        c.status = data.status
        if data.description is not None: c.description = data.description
        if data.handled_by is not None:  c.handled_by  = data.handled_by
        c.updated_at = utcnow()

        db.commit()
        notifier.publish("CallLog", "UPDATE", call_id)

    def delete_call_log(self, db: Session, call_id: int) -> None:
        c = db.query(CallLog).filter(CallLog.call_id == call_id).first()
        if not c: raise NotFoundException("Call log")
        db.delete(c)
        db.commit()
        notifier.publish("CallLog", "DELETE", call_id)


call_log_service = CallLogService()
