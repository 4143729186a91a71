import shutil
import tempfile
import unittest
from functools import lru_cache
from unittest import mock

from fastapi.testclient import TestClient

from asset_tracker.config import settings
from asset_tracker.database import Base, SessionLocal, engine
from asset_tracker.main import app
from asset_tracker.models import Department, User, UserRole
from asset_tracker.utils.security import hash_password

PASSWORD = "Secret123!"


@lru_cache(maxsize=1)
def _password_hash() -> str:
    # bcrypt is slow on purpose; hash once per run
    return hash_password(PASSWORD)


class ApiTestCase(unittest.TestCase):
    """
    Fresh schema per test, two departments (IT, HR), one admin and one
    engineer per department. Uploads go to a per-test temp directory.
    """

    def setUp(self):
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)

        self.upload_dir = tempfile.mkdtemp(prefix="uploads-")
        patcher = mock.patch.object(settings, "UPLOAD_DIR", self.upload_dir)
        patcher.start()
        self.addCleanup(patcher.stop)

        db = SessionLocal()
        try:
            it, hr = Department(dept_name="IT"), Department(dept_name="HR")
            db.add_all([it, hr])
            db.flush()
            admin  = User(username="admin", password_hash=_password_hash(), user_role=UserRole.ADMIN)
            eng_it = User(username="ravi", password_hash=_password_hash(),
                          user_role=UserRole.ENGINEER, dept_id=it.dept_id)
            eng_hr = User(username="meena", password_hash=_password_hash(),
                          user_role=UserRole.ENGINEER, dept_id=hr.dept_id)
            db.add_all([admin, eng_it, eng_hr])
            db.commit()
            self.it_dept, self.hr_dept = it.dept_id, hr.dept_id
            self.admin_id, self.eng_it_id, self.eng_hr_id = admin.user_id, eng_it.user_id, eng_hr.user_id
        finally:
            db.close()

        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        Base.metadata.drop_all(bind=engine)
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    # ─── Helpers ──────────────────────────────────────────────────────────────
    def create_asset(self, dept_id=None, **overrides) -> int:
        body = {
            "asset_name":      "Dell OptiPlex 7090",
            "category":        "PC/CPU",
            "serial_number":   "SN-0001",
            "status":          "Active",
            "inventory_count": 1,
            "dept_id":         dept_id or self.it_dept,
        }
        body.update(overrides)
        res = self.client.post("/api/assets", json=body)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["asset_id"]

    def create_complaint(self, asset_id: int, **overrides) -> int:
        body = {
            "asset_id":  asset_id,
            "raised_by": self.admin_id,
            "issue":     "Monitor flickers after boot",
        }
        body.update(overrides)
        res = self.client.post("/api/complaints", json=body)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["comp_id"]

    def engineer_scope(self, dept_id: int) -> dict:
        return {"user_role": "Engineer", "dept_id": dept_id}

    def assertError(self, res, status_code: int, code: str):
        self.assertEqual(res.status_code, status_code, res.text)
        body = res.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["code"], code)
        self.assertEqual(body["error"], body["message"])
        return body
