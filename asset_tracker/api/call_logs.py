from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from asset_tracker.database import get_db
from asset_tracker.schemas.call_log import CallLogCreateRequest, CallLogUpdateRequest
from asset_tracker.schemas.common import success_response
from asset_tracker.services.call_log_service import call_log_service

router = APIRouter(prefix="/call-logs")


@router.get("", summary="List call logs, newest first")
def list_call_logs(db: Session = Depends(get_db)):
    return call_log_service.list_call_logs(db)


@router.get("/{call_id}", summary="Get call log")
def get_call_log(call_id: int, db: Session = Depends(get_db)):
    return call_log_service.get_call_log(db, call_id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Log a call")
def create_call_log(body: CallLogCreateRequest, db: Session = Depends(get_db)):
    call_id = call_log_service.create_call_log(db, body)
    return success_response("Call log added", call_id=call_id)


@router.put("/{call_id}", summary="Update call log status")
def update_call_log(call_id: int, body: CallLogUpdateRequest, db: Session = Depends(get_db)):
    call_log_service.update_call_log(db, call_id, body)
    return success_response("Call log updated successfully")


@router.delete("/{call_id}", summary="Delete call log")
def delete_call_log(call_id: int, db: Session = Depends(get_db)):
    call_log_service.delete_call_log(db, call_id)
    return success_response("Call log deleted successfully")
