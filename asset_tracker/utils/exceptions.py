from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES: machine-readable constants for frontend switch/case
# ═══════════════════════════════════════════════════════════════════════════════
class ErrorCode:
    VALIDATION_ERROR        = "VALIDATION_ERROR"
    UNAUTHORIZED            = "UNAUTHORIZED"
    NOT_FOUND               = "NOT_FOUND"
    DUPLICATE_ENTRY         = "DUPLICATE_ENTRY"
    REFERENCE_ERROR         = "REFERENCE_ERROR"
    INVALID_TRANSITION      = "INVALID_TRANSITION"
    FILE_REJECTED           = "FILE_REJECTED"
    INTERNAL_SERVER_ERROR   = "INTERNAL_SERVER_ERROR"


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    Carries a machine-readable error_code for frontend handling.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: list | None = None,
    ):
        super().__init__(status_code=status_code, detail={
            "message": message,
            "code": error_code,
            "details": details,
        })


# ═══════════════════════════════════════════════════════════════════════════════
# CONCRETE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class ValidationException(AppException):
    def __init__(self, message: str, details: list | None = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, ErrorCode.VALIDATION_ERROR, details)


class UnauthorizedException(AppException):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, ErrorCode.UNAUTHORIZED)


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", ErrorCode.NOT_FOUND)


class FileMissingException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_404_NOT_FOUND, "File not found on server", ErrorCode.NOT_FOUND)


class InvalidTransitionException(AppException):
    def __init__(self, current: str, target: str):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            f"Complaint cannot move from '{current}' to '{target}'",
            ErrorCode.INVALID_TRANSITION,
        )


class FileRejectedException(AppException):
    def __init__(self, message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, ErrorCode.FILE_REJECTED)
