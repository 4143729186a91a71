from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from asset_tracker.database import get_db
from asset_tracker.models.user import UserRole
from asset_tracker.schemas.auth import LoginRequest, UserOut, DepartmentOut
from asset_tracker.services.auth_service import auth_service
from asset_tracker.services.user_service import user_service

router = APIRouter()


# ─── POST /login ──────────────────────────────────────────────────────────────
@router.post("/login", status_code=status.HTTP_200_OK, summary="Login with username, password and role")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Returns the user record without its password hash.
    401 "Invalid credentials" for an unknown username/role pair,
    401 "Incorrect password" when the password does not match.
    """
    return {"success": True, "user": auth_service.login(db, data)}


# ─── GET /users ───────────────────────────────────────────────────────────────
@router.get("/users", response_model=list[UserOut], summary="List all users (for engineer pickers and analytics)")
def list_users(
    role: Optional[UserRole] = Query(None, description="Admin | Engineer"),
    db:   Session            = Depends(get_db),
):
    return user_service.list_users(db, role)


# ─── GET /departments ─────────────────────────────────────────────────────────
@router.get("/departments", response_model=list[DepartmentOut], summary="List all departments")
def list_departments(db: Session = Depends(get_db)):
    return user_service.list_departments(db)
