import logging
import os

from fastapi import UploadFile
from sqlalchemy.orm import Session, contains_eager, joinedload

from asset_tracker.config import settings
from asset_tracker.dependencies import ViewerScope
from asset_tracker.models.asset import Asset
from asset_tracker.models.pm_report import PMReport, ReportStatus, ReportType
from asset_tracker.schemas.pm_report import PMReportUpdateRequest
from asset_tracker.utils.events import notifier
from asset_tracker.utils.exceptions import NotFoundException, FileMissingException
from asset_tracker.utils.files import save_upload, remove_file
from asset_tracker.utils.timeutils import isoformat, utcnow

logger = logging.getLogger(__name__)

REVIEWED_STATES = {ReportStatus.REVIEWED, ReportStatus.APPROVED}


def reports_dir() -> str:
    return os.path.join(settings.UPLOAD_DIR, "pm-reports")


def _serialize(r: PMReport) -> dict:
    return {
        "report_id":        r.report_id,
        "asset_id":         r.asset_id,
        "asset_name":       r.asset.asset_name if r.asset else None,
        "report_type":      r.report_type.value,
        "file_name":        r.file_name,
        "file_path":        r.file_path,
        "file_size":        r.file_size,
        "uploaded_by":      r.uploaded_by,
        "uploaded_by_name": r.uploader.username if r.uploader else None,
        "status":           r.status.value,
        "notes":            r.notes,
        "uploaded_at":      isoformat(r.uploaded_at),
        "reviewed_at":      isoformat(r.reviewed_at),
    }


class PMReportService:

    # ─── List ─────────────────────────────────────────────────────────────────
    def list_reports(self, db: Session, scope: ViewerScope) -> list[dict]:
        q = db.query(PMReport).outerjoin(PMReport.asset).options(
            contains_eager(PMReport.asset),
            joinedload(PMReport.uploader),
        )
        if scope.is_department_scoped:
            q = q.filter(Asset.dept_id == scope.dept_id)
        items = q.order_by(PMReport.uploaded_at.desc(), PMReport.report_id.desc()).all()
        return [_serialize(r) for r in items]

    # ─── Get by ID ────────────────────────────────────────────────────────────
    def get_report(self, db: Session, report_id: int) -> dict:
        r = db.query(PMReport).filter(PMReport.report_id == report_id).first()
        if not r: raise NotFoundException("Report")
        return _serialize(r)

    # ─── Upload ───────────────────────────────────────────────────────────────
    def create_report(
        self, db: Session,
        asset_id: int, report_type: ReportType, uploaded_by: int, notes: str | None,
        upload: UploadFile,
    ) -> int:
        stored = save_upload(upload, reports_dir(), settings.PM_REPORT_MAX_BYTES)

        r = PMReport(
            asset_id=asset_id,
            report_type=report_type,
            file_name=stored.original_name,
            file_path=stored.path,
            file_size=stored.size,
            uploaded_by=uploaded_by,
            notes=notes,
            status=ReportStatus.PENDING,
            uploaded_at=utcnow(),
        )
        db.add(r)
        try:
            db.commit()
        except Exception:
            # Orphaned file
            db.rollback()
            remove_file(stored.path)
            raise

        logger.info(f"Stored PM report '{stored.original_name}' ({stored.size} bytes) at {stored.path}")
        notifier.publish("PMReport", "CREATE", r.report_id)
        return r.report_id

    # ─── Update ───────────────────────────────────────────────────────────────
    def update_report(self, db: Session, report_id: int, data: PMReportUpdateRequest) -> dict:
        r = db.query(PMReport).filter(PMReport.report_id == report_id).first()
        if not r: raise NotFoundException("Report")

        if data.status is not None and data.status != r.status:
            if data.status in REVIEWED_STATES:
                r.reviewed_at = utcnow()
            r.status = data.status
        if "notes" in data.model_fields_set:
            r.notes = data.notes

        db.commit()
        notifier.publish("PMReport", "UPDATE", report_id)
        return _serialize(r)

    # ─── Delete ───────────────────────────────────────────────────────────────
    def delete_report(self, db: Session, report_id: int) -> None:
        r = db.query(PMReport).filter(PMReport.report_id == report_id).first()
        if not r: raise NotFoundException("Report")

        file_path = r.file_path
        db.delete(r)
        db.commit()

        if not remove_file(file_path):
            logger.warning(f"PM report #{report_id} deleted but its file was not removed: {file_path}")
        notifier.publish("PMReport", "DELETE", report_id)

    # ─── Download ─────────────────────────────────────────────────────────────
    def get_download(self, db: Session, report_id: int) -> tuple[str, str]:
        """Return (path on disk, original file name)."""
        r = db.query(PMReport).filter(PMReport.report_id == report_id).first()
        if not r: raise NotFoundException("Report")
        if not r.file_path or not os.path.exists(r.file_path):
            raise FileMissingException()
        return r.file_path, r.file_name


pm_report_service = PMReportService()
