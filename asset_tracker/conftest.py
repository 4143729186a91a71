"""
Point settings at a throwaway SQLite database before asset_tracker.config
is imported anywhere. Set TEST_DATABASE_URL to run against Postgres instead.
"""
import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="asset-tracker-tests-")

os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", f"sqlite:///{_tmp}/test.db")
os.environ["UPLOAD_DIR"] = os.path.join(_tmp, "uploads")
os.environ["APP_ENV"] = "test"
os.environ["ENFORCE_COMPLAINT_TRANSITIONS"] = "false"
