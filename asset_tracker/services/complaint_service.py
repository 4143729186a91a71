import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session, contains_eager, joinedload

from asset_tracker.config import settings
from asset_tracker.dependencies import ViewerScope
from asset_tracker.models.asset import Asset
from asset_tracker.models.complaint import Complaint, ComplaintStatus, ComplaintPriority
from asset_tracker.models.user import User, UserRole
from asset_tracker.schemas.complaint import ComplaintCreateRequest, ComplaintUpdateRequest
from asset_tracker.utils.events import notifier
from asset_tracker.utils.exceptions import (
    NotFoundException, ValidationException, InvalidTransitionException,
)
from asset_tracker.utils.timeutils import as_utc, isoformat, utcnow

logger = logging.getLogger(__name__)

_MS_PER_HOUR   = 60 * 60 * 1000
_MS_PER_MINUTE = 60 * 1000


# ─── Resolution Time ──────────────────────────────────────────────────────────
def format_time_taken(elapsed: timedelta) -> str:
    """
    Format a non-negative duration as zero-padded HH:MM:SS.
    Hours do not roll over into days: 25 hours is "25:00:00".
    """
    total_ms = elapsed // timedelta(milliseconds=1)
    hours    = total_ms // _MS_PER_HOUR
    minutes  = (total_ms % _MS_PER_HOUR) // _MS_PER_MINUTE
    seconds  = (total_ms % _MS_PER_MINUTE) // 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def compute_time_taken(creation_time: datetime, actual_res_date: datetime | None) -> str | None:
    """Resolution time, or None when unresolved or resolved "before" creation."""
    if actual_res_date is None or creation_time is None:
        return None
    elapsed = as_utc(actual_res_date) - as_utc(creation_time)
    if elapsed < timedelta(0):
        return None
    return format_time_taken(elapsed)


# ─── Status Transitions ───────────────────────────────────────────────────────
ALLOWED_TRANSITIONS: dict[ComplaintStatus, set[ComplaintStatus]] = {
    ComplaintStatus.OPEN:        {ComplaintStatus.OPEN, ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED},
    ComplaintStatus.IN_PROGRESS: {ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED},
    ComplaintStatus.RESOLVED:    {ComplaintStatus.RESOLVED, ComplaintStatus.OPEN},   # re-open
}


def can_transition(current: ComplaintStatus, target: ComplaintStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[ComplaintStatus(current)]


def _serialize(c: Complaint) -> dict:
    return {
        "comp_id":           c.comp_id,
        "asset_id":          c.asset_id,
        "asset_name":        c.asset.asset_name if c.asset else None,
        "dept_id":           c.asset.dept_id if c.asset else None,
        "raised_by":         c.raised_by,
        "reported_by":       c.raiser.username if c.raiser else None,
        "issue":             c.issue,
        "comp_status":       c.comp_status.value,
        "priority":          c.priority.value,
        "creation_time":     isoformat(c.creation_time),
        "eng_assigned":      c.eng_assigned,
        "assigned_to":       c.assignee.username if c.assignee else None,
        "expected_res_date": isoformat(c.expected_res_date),
        "spare_req":         c.spare_req,
        "total_time_taken":  c.total_time_taken,
        "actual_res_date":   isoformat(c.actual_res_date),
        "comp_type":         c.comp_type,
        "updated_at":        isoformat(c.updated_at),
    }


class ComplaintService:

    # ─── List ─────────────────────────────────────────────────────────────────
    def list_complaints(
        self, db: Session, scope: ViewerScope,
        comp_status: ComplaintStatus | None = None,
        priority: ComplaintPriority | None = None,
    ) -> list[dict]:
        q = db.query(Complaint).join(Complaint.asset).options(
            contains_eager(Complaint.asset),
            joinedload(Complaint.raiser),
            joinedload(Complaint.assignee),
        )
        if scope.is_department_scoped:
            q = q.filter(Asset.dept_id == scope.dept_id)
        if comp_status: q = q.filter(Complaint.comp_status == comp_status)
        if priority:    q = q.filter(Complaint.priority == priority)

        return [_serialize(c) for c in q.order_by(Complaint.comp_id).all()]

    # ─── Get by ID ────────────────────────────────────────────────────────────
    def get_complaint(self, db: Session, comp_id: int) -> dict:
        c = db.query(Complaint).filter(Complaint.comp_id == comp_id).first()
        if not c: raise NotFoundException("Complaint")
        return _serialize(c)

    # ─── Create ───────────────────────────────────────────────────────────────
    def create_complaint(self, db: Session, data: ComplaintCreateRequest) -> int:
        if data.eng_assigned is not None:
            self._check_engineer(db, data.eng_assigned)

        now = utcnow()
        c = Complaint(
            asset_id=data.asset_id,
            raised_by=data.raised_by,
            issue=data.issue,
            comp_status=data.comp_status,
            priority=data.priority,
            creation_time=now,
            eng_assigned=data.eng_assigned,
            expected_res_date=data.expected_res_date,
            spare_req=data.spare_req,
            total_time_taken=None,
            actual_res_date=None,
            comp_type=data.comp_type,
            updated_at=now,
        )
        db.add(c)
        db.commit()
        notifier.publish("Complaint", "CREATE", c.comp_id)
        return c.comp_id

    # ─── Update ───────────────────────────────────────────────────────────────
    def update_complaint(self, db: Session, comp_id: int, data: ComplaintUpdateRequest) -> str | None:
        """
        Apply a partial update and return the complaint's total_time_taken.

        The row is locked for the whole read-derive-write so a concurrent
        update cannot slip in between reading creation_time and writing the
        derived duration.
        """
        fields = data.model_dump(exclude_unset=True)

        c = db.query(Complaint).filter(Complaint.comp_id == comp_id).with_for_update().first()
        if not c: raise NotFoundException("Complaint")

        target = fields.get("comp_status")
        if target is not None and not can_transition(c.comp_status, target):
            if settings.ENFORCE_COMPLAINT_TRANSITIONS:
                raise InvalidTransitionException(ComplaintStatus(c.comp_status).value, target.value)
            logger.warning(f"Complaint #{comp_id} moved out of order: {c.comp_status.value} -> {target.value}")

        if fields.get("eng_assigned") is not None:
            self._check_engineer(db, fields["eng_assigned"])

        if "actual_res_date" in fields:
            resolved_at = fields.pop("actual_res_date")
            c.actual_res_date  = as_utc(resolved_at) if resolved_at else None
            c.total_time_taken = compute_time_taken(c.creation_time, c.actual_res_date)

        for key, value in fields.items():
            setattr(c, key, value)
        c.updated_at = utcnow()

        db.commit()
        notifier.publish("Complaint", "UPDATE", comp_id)
        return c.total_time_taken

    # ─── Assign ───────────────────────────────────────────────────────────────
    def assign_engineer(self, db: Session, comp_id: int, eng_id: int) -> dict:
        c = db.query(Complaint).filter(Complaint.comp_id == comp_id).with_for_update().first()
        if not c: raise NotFoundException("Complaint")
        engineer = self._check_engineer(db, eng_id)

        c.assignee = engineer
        if c.comp_status == ComplaintStatus.OPEN:
            c.comp_status = ComplaintStatus.IN_PROGRESS
        c.updated_at = utcnow()

        db.commit()
        notifier.publish("Complaint", "ASSIGN", comp_id)
        return _serialize(c)

    # ─── Delete ───────────────────────────────────────────────────────────────
    def delete_complaint(self, db: Session, comp_id: int) -> None:
        c = db.query(Complaint).filter(Complaint.comp_id == comp_id).first()
        if not c: raise NotFoundException("Complaint")
        db.delete(c)
        db.commit()
        notifier.publish("Complaint", "DELETE", comp_id)

    def _check_engineer(self, db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.user_id == user_id).first()
        if not user or user.user_role != UserRole.ENGINEER:
            raise ValidationException(
                "Assigned user must be an existing Engineer",
                details=[{"field": "eng_assigned", "message": f"User #{user_id} is not an Engineer"}],
            )
        return user


complaint_service = ComplaintService()
