from pydantic import BaseModel
from typing import Any


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str
    code: str
    details: list[Any] | None = None


# ─── Helper Functions ─────────────────────────────────────────────────────────
def success_response(message: str, **extra: Any) -> dict:
    """Return a standardized mutation result, e.g. {"success", "message", "comp_id"}."""
    return {"success": True, "message": message, **extra}


def error_body(message: str, code: str, details: list | None = None) -> dict:
    """Error payload shared by every exception handler."""
    return {
        "success": False,
        "message": message,
        "error":   message,
        "code":    code,
        "details": details,
    }
