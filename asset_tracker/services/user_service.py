from sqlalchemy.orm import Session

from asset_tracker.models.user import User, UserRole
from asset_tracker.models.department import Department


def _serialize_user(u: User) -> dict:
    return {
        "user_id":   u.user_id,
        "username":  u.username,
        "user_role": u.user_role.value,
        "dept_id":   u.dept_id,
    }


class UserService:

    # ─── List ─────────────────────────────────────────────────────────────────
    def list_users(self, db: Session, role: UserRole | None = None) -> list[dict]:
        # The roster is not department-scoped
        q = db.query(User)
        if role is not None:
            q = q.filter(User.user_role == role)
        return [_serialize_user(u) for u in q.order_by(User.user_id).all()]

    # ─── List Departments ─────────────────────────────────────────────────────
    def list_departments(self, db: Session) -> list[dict]:
        deps = db.query(Department).order_by(Department.dept_name).all()
        return [{"dept_id": d.dept_id, "dept_name": d.dept_name} for d in deps]


user_service = UserService()
