from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from asset_tracker.database import get_db
from asset_tracker.dependencies import ViewerScope, get_viewer_scope
from asset_tracker.models.complaint import ComplaintStatus, ComplaintPriority
from asset_tracker.schemas.complaint import (
    ComplaintCreateRequest, ComplaintUpdateRequest, AssignEngineerRequest,
)
from asset_tracker.schemas.common import success_response
from asset_tracker.services.complaint_service import complaint_service

router = APIRouter(prefix="/complaints")


@router.get("", summary="List complaints (Engineers see their department only)")
def list_complaints(
    comp_status: Optional[ComplaintStatus]   = Query(None),
    priority:    Optional[ComplaintPriority] = Query(None),
    scope:       ViewerScope                 = Depends(get_viewer_scope),
    db:          Session                     = Depends(get_db),
):
    return complaint_service.list_complaints(db, scope, comp_status, priority)


@router.get("/{comp_id}", summary="Get complaint")
def get_complaint(comp_id: int, db: Session = Depends(get_db)):
    return complaint_service.get_complaint(db, comp_id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Raise a complaint")
def create_complaint(body: ComplaintCreateRequest, db: Session = Depends(get_db)):
    comp_id = complaint_service.create_complaint(db, body)
    return success_response("Complaint added", comp_id=comp_id)


@router.put("/{comp_id}", summary="Update complaint (derives total_time_taken)")
def update_complaint(comp_id: int, body: ComplaintUpdateRequest, db: Session = Depends(get_db)):
    total_time_taken = complaint_service.update_complaint(db, comp_id, body)
    return success_response("Complaint updated successfully", total_time_taken=total_time_taken)


@router.patch("/{comp_id}/assign", summary="Assign an engineer")
def assign_engineer(comp_id: int, body: AssignEngineerRequest, db: Session = Depends(get_db)):
    complaint = complaint_service.assign_engineer(db, comp_id, body.eng_assigned)
    return success_response(f"Complaint assigned to {complaint['assigned_to']}", complaint=complaint)


@router.delete("/{comp_id}", summary="Delete complaint")
def delete_complaint(comp_id: int, db: Session = Depends(get_db)):
    complaint_service.delete_complaint(db, comp_id)
    return success_response("Complaint deleted successfully")
