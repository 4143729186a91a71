import csv
import logging
from io import BytesIO, StringIO

from openpyxl import load_workbook
from pydantic import ValidationError
from sqlalchemy.orm import Session

from asset_tracker.dependencies import ViewerScope
from asset_tracker.models.asset import Asset
from asset_tracker.models.department import Department
from asset_tracker.schemas.asset import AssetCreateRequest, AssetUpdateRequest, normalize_asset_row
from asset_tracker.utils.events import notifier
from asset_tracker.utils.exceptions import NotFoundException, ValidationException
from asset_tracker.utils.timeutils import isoformat

logger = logging.getLogger(__name__)

# Columns that may be left out of an update but never set to null
NON_NULLABLE_FIELDS = {"asset_name", "category", "serial_number", "status", "inventory_count", "dept_id"}


def _serialize(a: Asset) -> dict:
    return {
        "asset_id":        a.asset_id,
        "asset_name":      a.asset_name,
        "category":        a.category.value,
        "serial_number":   a.serial_number,
        "status":          a.status.value,
        "location":        a.location,
        "purchase_date":   isoformat(a.purchase_date),
        "warranty_expiry": isoformat(a.warranty_expiry),
        "amc_or_warranty": a.amc_or_warranty.value if a.amc_or_warranty else None,
        "inventory_count": a.inventory_count,
        "vendor_name":     a.vendor_name,
        "dept_id":         a.dept_id,
        "dept_name":       a.department.dept_name if a.department else None,
    }


# ─── Spreadsheet Parsing ──────────────────────────────────────────────────────
def read_spreadsheet_rows(filename: str, content: bytes) -> list[dict]:
    """Turn an uploaded .xlsx or .csv file into header-keyed row dicts."""
    name = (filename or "").lower()

    if name.endswith(".csv"):
        reader = csv.DictReader(StringIO(content.decode("utf-8-sig")))
        return [dict(row) for row in reader]

    if name.endswith(".xlsx"):
        wb = load_workbook(filename=BytesIO(content), read_only=True, data_only=True)
        try:
            rows = wb.active.iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                return []
            header = [str(h).strip() if h is not None else "" for h in header]
            out = []
            for values in rows:
                if values is None or all(v is None for v in values):
                    continue
                out.append({header[i]: values[i] for i in range(min(len(header), len(values))) if header[i]})
            return out
        finally:
            wb.close()

    raise ValidationException("Only .xlsx and .csv spreadsheets are supported")


class AssetService:

    # ─── List ─────────────────────────────────────────────────────────────────
    def list_assets(self, db: Session, scope: ViewerScope) -> list[dict]:
        q = db.query(Asset)
        if scope.is_department_scoped:
            q = q.filter(Asset.dept_id == scope.dept_id)
        return [_serialize(a) for a in q.order_by(Asset.asset_id).all()]

    # ─── Get by ID ────────────────────────────────────────────────────────────
    def get_asset(self, db: Session, asset_id: int) -> dict:
        a = db.query(Asset).filter(Asset.asset_id == asset_id).first()
        if not a: raise NotFoundException("Asset")
        return _serialize(a)

    # ─── Create ───────────────────────────────────────────────────────────────
    def create_asset(self, db: Session, data: AssetCreateRequest) -> int:
        a = Asset(**data.model_dump())
        db.add(a)
        db.commit()
        notifier.publish("Asset", "CREATE", a.asset_id)
        return a.asset_id

    # ─── Update ───────────────────────────────────────────────────────────────
    def update_asset(self, db: Session, asset_id: int, data: AssetUpdateRequest) -> dict:
        a = db.query(Asset).filter(Asset.asset_id == asset_id).first()
        if not a: raise NotFoundException("Asset")

        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key in NON_NULLABLE_FIELDS:
                continue
            setattr(a, key, value)

        db.commit()
        db.refresh(a)
        notifier.publish("Asset", "UPDATE", asset_id)
        return _serialize(a)

    # ─── Delete ───────────────────────────────────────────────────────────────
    def delete_asset(self, db: Session, asset_id: int) -> None:
        a = db.query(Asset).filter(Asset.asset_id == asset_id).first()
        if not a: raise NotFoundException("Asset")
        db.delete(a)
        db.commit()
        notifier.publish("Asset", "DELETE", asset_id)

    # ─── Bulk Upload ──────────────────────────────────────────────────────────
    def bulk_create(self, db: Session, rows: list[dict]) -> int:
        """
        Insert a batch of spreadsheet rows, all or nothing.

        Every row is validated before anything is written; if any row fails,
        the whole batch is rejected with one detail entry per bad row (1-based
        row numbers, matching the spreadsheet's data rows).
        """
        if not rows:
            raise ValidationException("No rows to import")

        valid: list[AssetCreateRequest] = []
        errors = []
        dept_ids: dict[str, int] | None = None
        for index, raw in enumerate(rows, start=1):
            if not isinstance(raw, dict):
                errors.append({"row": index, "message": "Row must be an object"})
                continue
            row = normalize_asset_row(raw)

            # Template sheets carry the department name, not its id
            dept = row.get("dept_id")
            if isinstance(dept, str) and not dept.isdigit():
                if dept_ids is None:
                    dept_ids = {d.dept_name.lower(): d.dept_id for d in db.query(Department).all()}
                if dept.lower() not in dept_ids:
                    errors.append({"row": index, "field": "dept_id", "message": f"Unknown department '{dept}'"})
                    continue
                row["dept_id"] = dept_ids[dept.lower()]

            try:
                valid.append(AssetCreateRequest.model_validate(row))
            except ValidationError as exc:
                for err in exc.errors():
                    field = ".".join(str(l) for l in err.get("loc", ()))
                    errors.append({"row": index, "field": field, "message": err.get("msg", "Invalid value")})

        if errors:
            raise ValidationException(
                f"Bulk upload rejected: {len({e['row'] for e in errors})} invalid row(s), nothing imported",
                details=errors,
            )

        db.add_all([Asset(**item.model_dump()) for item in valid])
        db.commit()
        logger.info(f"Bulk upload inserted {len(valid)} assets")
        notifier.publish("Asset", "BULK_CREATE", None)
        return len(valid)


asset_service = AssetService()
