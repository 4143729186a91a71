import logging

from sqlalchemy.orm import Session

from asset_tracker.models.user import User
from asset_tracker.schemas.auth import LoginRequest
from asset_tracker.utils.security import verify_password
from asset_tracker.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        """
        Check username + role, then the password.
        Both failures are 401; only the message differs.
        """
        user = db.query(User).filter(
            User.username == data.username,
            User.user_role == data.role,
        ).first()

        if not user:
            logger.info(f"Login rejected for unknown user/role {data.username!r}/{data.role.value}")
            raise UnauthorizedException("Invalid credentials")

        if not verify_password(data.password, user.password_hash):
            logger.info(f"Login rejected for {data.username!r}: wrong password")
            raise UnauthorizedException("Incorrect password")

        logger.info(f"{user.username} logged in as {user.user_role.value}")
        return {
            "user_id":   user.user_id,
            "username":  user.username,
            "user_role": user.user_role.value,
            "dept_id":   user.dept_id,
        }


auth_service = AuthService()
