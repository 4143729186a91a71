import logging
import os
import secrets
import time
from dataclasses import dataclass

from fastapi import UploadFile

from asset_tracker.utils.exceptions import FileRejectedException

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

ALLOWED_EXTENSIONS = {".pdf", ".jpg", ".jpeg", ".png", ".doc", ".docx", ".xls", ".xlsx"}

ALLOWED_MIME_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@dataclass(frozen=True)
class StoredFile:
    original_name: str
    path:          str
    size:          int


def check_file_type(upload: UploadFile) -> str:
    """Both the extension and the declared MIME type must be on the allow-list."""
    original = os.path.basename(upload.filename or "")
    ext = os.path.splitext(original)[1].lower()
    mime = (upload.content_type or "").split(";")[0].strip().lower()
    if not original or ext not in ALLOWED_EXTENSIONS or mime not in ALLOWED_MIME_TYPES:
        raise FileRejectedException("Only PDF, JPG, PNG, DOC, and Excel files are allowed")
    return original


def unique_name(original: str) -> str:
    """<ms-timestamp>-<random>-<original>, e.g. 1760870400000-483920117-report.pdf"""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-{original}"


def save_upload(upload: UploadFile, dest_dir: str, max_bytes: int) -> StoredFile:
    """
    Validate and stream an upload to `dest_dir`.

    The size ceiling is checked while streaming; an upload that crosses it
    is rejected and its partial file removed, so nothing is left on disk.
    """
    original = check_file_type(upload)
    if upload.size is not None and upload.size > max_bytes:
        raise FileRejectedException(f"File exceeds the {max_bytes // (1024 * 1024)} MB limit")

    os.makedirs(dest_dir, exist_ok=True)
    path = os.path.join(dest_dir, unique_name(original))

    size = 0
    try:
        with open(path, "wb") as out:
            while chunk := upload.file.read(CHUNK_SIZE):
                size += len(chunk)
                if size > max_bytes:
                    raise FileRejectedException(f"File exceeds the {max_bytes // (1024 * 1024)} MB limit")
                out.write(chunk)
    except BaseException:
        remove_file(path)
        raise

    return StoredFile(original_name=original, path=path, size=size)


def remove_file(path: str | None) -> bool:
    """Best-effort delete. Returns False (and logs) instead of raising."""
    if not path or not os.path.exists(path):
        return False
    try:
        os.remove(path)
        return True
    except OSError as e:
        logger.warning(f"Could not remove file {path}: {e}")
        return False
