"""
Create the tables (if missing), a department and the first users.

    python -m asset_tracker.seed --admin-password 'S3cret!' --engineer alice:Pa55word

There is no user-management API; this is how accounts get into the system.
"""
import argparse
import logging

from asset_tracker.database import Base, SessionLocal, engine
from asset_tracker.models import Department, User, UserRole
from asset_tracker.utils.security import hash_password

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def seed(department: str, admin_username: str, admin_password: str, engineers: list[tuple[str, str]]) -> None:
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        dept = db.query(Department).filter(Department.dept_name == department).first()
        if not dept:
            dept = Department(dept_name=department)
            db.add(dept)
            db.flush()
            logger.info(f"Created department {department!r}")

        accounts = [(admin_username, admin_password, UserRole.ADMIN)]
        accounts += [(name, password, UserRole.ENGINEER) for name, password in engineers]
        for username, password, role in accounts:
            if db.query(User).filter(User.username == username).first():
                logger.info(f"User {username!r} already exists, skipped")
                continue
            db.add(User(username=username, password_hash=hash_password(password),
                        user_role=role, dept_id=dept.dept_id))
            logger.info(f"Created {role.value} {username!r}")

        db.commit()
    finally:
        db.close()


def _engineer(value: str) -> tuple[str, str]:
    username, sep, password = value.partition(":")
    if not sep or not username or not password:
        raise argparse.ArgumentTypeError("expected USERNAME:PASSWORD")
    return username, password


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed departments and users")
    parser.add_argument("--department", default="IT")
    parser.add_argument("--admin-username", default="admin")
    parser.add_argument("--admin-password", required=True)
    parser.add_argument("--engineer", type=_engineer, action="append", default=[],
                        metavar="USERNAME:PASSWORD")
    args = parser.parse_args()
    seed(args.department, args.admin_username, args.admin_password, args.engineer)


if __name__ == "__main__":
    main()
