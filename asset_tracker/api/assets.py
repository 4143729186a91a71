from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from asset_tracker.database import get_db
from asset_tracker.dependencies import ViewerScope, get_viewer_scope
from asset_tracker.schemas.asset import AssetCreateRequest, AssetUpdateRequest
from asset_tracker.schemas.common import success_response
from asset_tracker.services.asset_service import asset_service, read_spreadsheet_rows

router = APIRouter(prefix="/assets")


@router.get("", summary="List assets (Engineers see their department only)")
def list_assets(scope: ViewerScope = Depends(get_viewer_scope), db: Session = Depends(get_db)):
    return asset_service.list_assets(db, scope)


@router.post("/bulk-upload", status_code=status.HTTP_201_CREATED,
             summary="Bulk insert spreadsheet rows (all or nothing)")
def bulk_upload(rows: list[dict], db: Session = Depends(get_db)):
    inserted = asset_service.bulk_create(db, rows)
    return success_response(f"{inserted} assets imported", inserted=inserted)


@router.post("/bulk-upload/file", status_code=status.HTTP_201_CREATED,
             summary="Bulk insert from an .xlsx or .csv file (all or nothing)")
def bulk_upload_file(file: UploadFile = File(...), db: Session = Depends(get_db)):
    rows = read_spreadsheet_rows(file.filename, file.file.read())
    inserted = asset_service.bulk_create(db, rows)
    return success_response(f"{inserted} assets imported", inserted=inserted)


@router.get("/{asset_id}", summary="Get asset")
def get_asset(asset_id: int, db: Session = Depends(get_db)):
    return asset_service.get_asset(db, asset_id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create asset")
def create_asset(body: AssetCreateRequest, db: Session = Depends(get_db)):
    asset_id = asset_service.create_asset(db, body)
    return success_response("Asset added", asset_id=asset_id)


@router.put("/{asset_id}", summary="Update asset")
def update_asset(asset_id: int, body: AssetUpdateRequest, db: Session = Depends(get_db)):
    asset = asset_service.update_asset(db, asset_id, body)
    return success_response("Asset updated successfully", asset=asset)


@router.delete("/{asset_id}", summary="Delete asset")
def delete_asset(asset_id: int, db: Session = Depends(get_db)):
    asset_service.delete_asset(db, asset_id)
    return success_response("Asset deleted successfully")
