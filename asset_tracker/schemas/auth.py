from pydantic import BaseModel, field_validator

from asset_tracker.models.user import UserRole


class LoginRequest(BaseModel):
    username: str
    password: str
    role:     UserRole

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        if not v.strip(): raise ValueError("Username cannot be empty")
        return v.strip()


class UserOut(BaseModel):
    user_id:   int
    username:  str
    user_role: UserRole
    dept_id:   int | None = None

    model_config = {"from_attributes": True}


class DepartmentOut(BaseModel):
    dept_id:   int
    dept_name: str

    model_config = {"from_attributes": True}
