import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError

from asset_tracker.config import settings
from asset_tracker.database import check_db_connection
from asset_tracker.schemas.common import ErrorResponse
from asset_tracker.utils.exceptions import AppException
from asset_tracker.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from asset_tracker.api import auth
from asset_tracker.api import assets
from asset_tracker.api import complaints
from asset_tracker.api import call_logs
from asset_tracker.api import pm_reports
from asset_tracker.api import analytics

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="IT asset, complaint, call log and PM report tracking API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api"
    ERRORS = {code: {"model": ErrorResponse} for code in (400, 401, 404, 409, 500)}
    app.include_router(auth.router,              prefix=PREFIX, tags=["Auth & Users"], responses=ERRORS)
    app.include_router(assets.router,            prefix=PREFIX, tags=["Assets"], responses=ERRORS)
    app.include_router(complaints.router,        prefix=PREFIX, tags=["Complaints"], responses=ERRORS)
    app.include_router(call_logs.router,         prefix=PREFIX, tags=["Call Logs"], responses=ERRORS)
    app.include_router(pm_reports.router,        prefix=PREFIX, tags=["PM Reports"], responses=ERRORS)
    app.include_router(analytics.router,         prefix=PREFIX, tags=["Analytics"], responses=ERRORS)
    app.include_router(analytics.changes_router, prefix=PREFIX, tags=["Analytics"], responses=ERRORS)

    # ─── Uploaded files (read-only) ───────────────────────────────────────────
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        ok = check_db_connection()
        logger.info("✅ DB connected" if ok else "❌ DB connection FAILED")

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": "1.0.0"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("asset_tracker.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
