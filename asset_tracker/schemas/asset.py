from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from asset_tracker.models.asset import AssetCategory, AssetStatus, CoverageType


# Spreadsheet templates and the old client used these column names
LEGACY_FIELD_NAMES = {
    "asset":         "asset_name",
    "s_no":          "serial_number",
    "serial_no":     "serial_number",
    "amc_or_war":    "amc_or_warranty",
    "amc/warranty":  "amc_or_warranty",
    "inventory":     "inventory_count",
    "vendor":        "vendor_name",
    "department_id": "dept_id",
    "department":    "dept_id",
    "dept_name":     "dept_id",
}

STATUS_ALIASES = {
    "under repair": AssetStatus.IN_REPAIR.value,
}


def normalize_asset_row(row: dict) -> dict:
    """
    Map one spreadsheet/legacy row onto the canonical asset field names.

    Header labels are matched case-insensitively with spaces treated as
    underscores, so "Asset Name", "asset_name" and "ASSET NAME" all land on
    `asset_name`. Blank cells are dropped so field defaults apply. Unknown
    columns are kept as-is and ignored later by the request schema.
    """
    out = {}
    for key, value in row.items():
        if key is None:
            continue
        name = str(key).strip().lower().replace(" ", "_")
        name = LEGACY_FIELD_NAMES.get(name, name)
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            continue
        out[name] = value
    return out


def _coerce_date(v):
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v.date()
    return v


def _coerce_text(v):
    """Spreadsheet cells arrive as numbers (serial 12345, 12345.0); keep them as text."""
    if isinstance(v, bool):
        return v
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if isinstance(v, (int, float)):
        return str(v)
    return v


def _coerce_status(v):
    if isinstance(v, str):
        return STATUS_ALIASES.get(v.strip().lower(), v.strip())
    return v


class AssetCreateRequest(BaseModel):
    asset_name:      str
    category:        AssetCategory
    serial_number:   str
    status:          AssetStatus  = AssetStatus.ACTIVE
    location:        Optional[str]  = None
    purchase_date:   Optional[date] = None
    warranty_expiry: Optional[date] = None
    amc_or_warranty: Optional[CoverageType] = None
    inventory_count: int = 0
    vendor_name:     Optional[str] = None
    dept_id:         int

    @field_validator("asset_name", "serial_number", "location", "vendor_name", mode="before")
    @classmethod
    def check_text(cls, v): return _coerce_text(v)

    @field_validator("asset_name", "serial_number")
    @classmethod
    def check_required_text(cls, v):
        v = str(v).strip()
        if not v: raise ValueError("Field cannot be empty")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v): return _coerce_status(v)

    @field_validator("purchase_date", "warranty_expiry", mode="before")
    @classmethod
    def check_dates(cls, v): return _coerce_date(v)

    @field_validator("inventory_count")
    @classmethod
    def check_inventory(cls, v):
        if v < 0: raise ValueError("Inventory cannot be negative")
        return v


class AssetUpdateRequest(BaseModel):
    asset_name:      Optional[str]           = None
    category:        Optional[AssetCategory] = None
    serial_number:   Optional[str]           = None
    status:          Optional[AssetStatus]   = None
    location:        Optional[str]           = None
    purchase_date:   Optional[date]          = None
    warranty_expiry: Optional[date]          = None
    amc_or_warranty: Optional[CoverageType]  = None
    inventory_count: Optional[int]           = None
    vendor_name:     Optional[str]           = None
    dept_id:         Optional[int]           = None

    @field_validator("asset_name", "serial_number", "location", "vendor_name", mode="before")
    @classmethod
    def check_text(cls, v): return _coerce_text(v)

    @field_validator("asset_name", "serial_number")
    @classmethod
    def check_required_text(cls, v):
        if v is not None and not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip() if v else v

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v): return _coerce_status(v)

    @field_validator("purchase_date", "warranty_expiry", mode="before")
    @classmethod
    def check_dates(cls, v): return _coerce_date(v)

    @field_validator("inventory_count")
    @classmethod
    def check_inventory(cls, v):
        if v is not None and v < 0: raise ValueError("Inventory cannot be negative")
        return v
