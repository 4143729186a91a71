from dataclasses import dataclass
from typing import Optional

from fastapi import Query

from asset_tracker.models.user import UserRole


@dataclass(frozen=True)
class ViewerScope:
    """Who is looking: drives department scoping of list endpoints."""
    user_role: UserRole | None = None
    dept_id:   int | None      = None

    @property
    def is_department_scoped(self) -> bool:
        """Engineers with a department only see records whose asset belongs to it."""
        return self.user_role == UserRole.ENGINEER and self.dept_id is not None


# ─── Viewer Scope ─────────────────────────────────────────────────────────────
def get_viewer_scope(
    user_role: Optional[UserRole] = Query(None, description="Admin | Engineer"),
    dept_id:   Optional[int]      = Query(None),
) -> ViewerScope:
    """
    Build the caller's scope from `?user_role=&dept_id=`.

    Usage:
        @router.get("/complaints")
        def list_complaints(scope: ViewerScope = Depends(get_viewer_scope)):
            ...
    """
    return ViewerScope(user_role=user_role, dept_id=dept_id)

