from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import Optional

from asset_tracker.database import get_db
from asset_tracker.dependencies import ViewerScope, get_viewer_scope
from asset_tracker.models.pm_report import ReportType
from asset_tracker.schemas.pm_report import PMReportUpdateRequest
from asset_tracker.schemas.common import success_response
from asset_tracker.services.pm_report_service import pm_report_service

router = APIRouter(prefix="/pm-reports")


@router.get("", summary="List PM reports (Engineers see their department only)")
def list_reports(scope: ViewerScope = Depends(get_viewer_scope), db: Session = Depends(get_db)):
    return pm_report_service.list_reports(db, scope)


@router.get("/download/{report_id}", summary="Download the report file")
def download_report(report_id: int, db: Session = Depends(get_db)):
    path, file_name = pm_report_service.get_download(db, report_id)
    return FileResponse(path, filename=file_name)


@router.get("/{report_id}", summary="Get PM report metadata")
def get_report(report_id: int, db: Session = Depends(get_db)):
    return pm_report_service.get_report(db, report_id)


@router.post("", status_code=status.HTTP_201_CREATED,
             summary="Upload a PM report (pdf/jpg/png/doc/docx/xls/xlsx, max 10 MB)")
def upload_report(
    asset_id:    int              = Form(...),
    report_type: ReportType       = Form(...),
    uploaded_by: int              = Form(...),
    notes:       Optional[str]    = Form(None),
    file:        UploadFile       = File(...),
    db:          Session          = Depends(get_db),
):
    report_id = pm_report_service.create_report(db, asset_id, report_type, uploaded_by, notes, file)
    return success_response("PM report uploaded successfully", report_id=report_id)


@router.put("/{report_id}", summary="Update review status / notes")
def update_report(report_id: int, body: PMReportUpdateRequest, db: Session = Depends(get_db)):
    report = pm_report_service.update_report(db, report_id, body)
    return success_response("Report updated successfully", report=report)


@router.delete("/{report_id}", summary="Delete report and its file")
def delete_report(report_id: int, db: Session = Depends(get_db)):
    pm_report_service.delete_report(db, report_id)
    return success_response("Report deleted successfully")
