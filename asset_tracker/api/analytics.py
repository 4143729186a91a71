from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from asset_tracker.config import settings
from asset_tracker.database import get_db
from asset_tracker.dependencies import ViewerScope, get_viewer_scope
from asset_tracker.models.user import UserRole
from asset_tracker.services import analytics_service as stats
from asset_tracker.services.asset_service import asset_service
from asset_tracker.services.call_log_service import call_log_service
from asset_tracker.services.complaint_service import complaint_service
from asset_tracker.services.pm_report_service import pm_report_service
from asset_tracker.services.user_service import user_service
from asset_tracker.utils.events import notifier
from asset_tracker.utils.timeutils import utcnow

router = APIRouter(prefix="/analytics")


# ─── Dashboard ────────────────────────────────────────────────────────────────
@router.get("/dashboard", summary="Dashboard counters plus recent complaints and calls")
def dashboard(scope: ViewerScope = Depends(get_viewer_scope), db: Session = Depends(get_db)):
    assets     = asset_service.list_assets(db, scope)
    complaints = complaint_service.list_complaints(db, scope)
    call_logs  = call_log_service.list_call_logs(db)
    pm_reports = pm_report_service.list_reports(db, scope)

    return {
        "stats":             stats.compute_dashboard_stats(assets, complaints, call_logs, pm_reports),
        "recent_complaints": stats.recent(complaints, newest_by="comp_id"),
        "recent_call_logs":  stats.recent(call_logs),
    }


# ─── Engineer Performance ─────────────────────────────────────────────────────
@router.get("/engineer-performance", summary="Resolved vs pending complaints per engineer")
def engineer_performance(scope: ViewerScope = Depends(get_viewer_scope), db: Session = Depends(get_db)):
    engineers  = user_service.list_users(db, UserRole.ENGINEER)
    complaints = complaint_service.list_complaints(db, scope)
    return stats.compute_engineer_performance(engineers, complaints)


# ─── Monthly Trends ───────────────────────────────────────────────────────────
@router.get("/monthly-trends", summary="Complaints, resolutions and calls per month")
def monthly_trends(
    months: int         = Query(settings.MONTHLY_TREND_MONTHS, ge=1, le=36),
    scope:  ViewerScope = Depends(get_viewer_scope),
    db:     Session     = Depends(get_db),
):
    complaints = complaint_service.list_complaints(db, scope)
    call_logs  = call_log_service.list_call_logs(db)
    return stats.compute_monthly_trends(complaints, call_logs, months, utcnow().date())


# ─── Assets ───────────────────────────────────────────────────────────────────
@router.get("/category-distribution", summary="Asset count per category")
def category_distribution(scope: ViewerScope = Depends(get_viewer_scope), db: Session = Depends(get_db)):
    return stats.compute_category_distribution(asset_service.list_assets(db, scope))


@router.get("/status-breakdown", summary="Asset status counts within one category")
def status_breakdown(
    category: str         = Query(..., description="e.g. PC/CPU, Printer"),
    scope:    ViewerScope = Depends(get_viewer_scope),
    db:       Session     = Depends(get_db),
):
    return stats.compute_status_breakdown(asset_service.list_assets(db, scope), category)


# ─── Change Feed ──────────────────────────────────────────────────────────────
changes_router = APIRouter()


@changes_router.get("/changes", summary="Current data version; refetch dashboards when it moves")
def changes():
    last = notifier.last_event
    return {"version": notifier.version, "last_event": last.to_dict() if last else None}
